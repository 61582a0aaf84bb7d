"""Tools that create tweets: single posts and threads."""

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

from social_clients import UpstreamClient

from .. import schemas
from ..arguments import MediaSpec, optional_str, parse_bool, parse_media
from ..errors import UpstreamError
from ..registry import registry
from ..thread import ThreadItem, create_thread, extract_post_id, parse_thread_items


@dataclass(frozen=True)
class PostTweetArgs:
    text: str
    reply_to_tweet_id: Optional[str] = None
    quote_tweet_id: Optional[str] = None
    media: Tuple[MediaSpec, ...] = ()
    hide_link_preview: bool = False

    @classmethod
    def parse(cls, arguments: Mapping[str, Any]) -> "PostTweetArgs":
        return cls(
            text=str(arguments.get("text")),
            reply_to_tweet_id=optional_str(arguments.get("reply_to_tweet_id")),
            quote_tweet_id=optional_str(arguments.get("quote_tweet_id")),
            media=tuple(parse_media(arguments.get("media"))),
            hide_link_preview=parse_bool(arguments.get("hide_link_preview", False)),
        )


@registry.tool(
    "post_tweet",
    description="Post a new tweet, optionally with media or as a quote tweet",
    schema=schemas.POST_TWEET,
    parse=PostTweetArgs.parse,
    required={"text": "Tweet text is required"},
    failure_message="Failed to post tweet",
)
async def post_tweet(client: UpstreamClient, args: PostTweetArgs):
    media = [spec.decode() for spec in args.media]
    result = await client.send_post(
        args.text,
        reply_to=args.reply_to_tweet_id,
        quote_of=args.quote_tweet_id,
        media=media or None,
        hide_link_preview=args.hide_link_preview,
    )

    kind = "quote tweet" if args.quote_tweet_id else "tweet"
    if not result.ok:
        raise UpstreamError(f"Failed to create {kind}: {result.error or 'the post was rejected'}")

    if args.quote_tweet_id:
        message = "Successfully posted quote tweet"
    elif args.reply_to_tweet_id:
        message = f"Successfully posted reply to tweet {args.reply_to_tweet_id}"
    else:
        message = "Successfully posted tweet"

    post_id = extract_post_id(result.payload)
    if post_id:
        message += f" (ID: {post_id})"
    return message


@dataclass(frozen=True)
class CreateThreadArgs:
    tweets: Tuple[ThreadItem, ...]

    @classmethod
    def parse(cls, arguments: Mapping[str, Any]) -> "CreateThreadArgs":
        return cls(tweets=tuple(parse_thread_items(arguments.get("tweets"))))


@registry.tool(
    "create_thread",
    description="Create a Twitter thread (a series of connected tweets)",
    schema=schemas.CREATE_THREAD,
    parse=CreateThreadArgs.parse,
    required={"tweets": "tweets array is required"},
    failure_message="Failed to create thread",
)
async def create_thread_tool(client: UpstreamClient, args: CreateThreadArgs):
    post_ids = await create_thread(client, args.tweets)
    return f"Successfully created thread with {len(post_ids)} tweets. First tweet ID: {post_ids[0]}"
