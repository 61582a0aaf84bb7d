"""Like and retweet tools."""

from dataclasses import dataclass
from typing import Any, Mapping

from social_clients import UpstreamClient

from .. import schemas
from ..arguments import parse_choice
from ..registry import registry


@dataclass(frozen=True)
class LikeTweetArgs:
    tweet_id: str
    action: str

    @classmethod
    def parse(cls, arguments: Mapping[str, Any]) -> "LikeTweetArgs":
        return cls(
            tweet_id=str(arguments.get("tweet_id")).strip(),
            action=parse_choice(arguments.get("action"), ["like", "unlike"], "action"),
        )


@registry.tool(
    "like_tweet",
    description="Like or unlike a tweet",
    schema=schemas.LIKE_TWEET,
    parse=LikeTweetArgs.parse,
    required={"tweet_id": "Tweet ID is required"},
    failure_message="Failed to {action} tweet",
)
async def like_tweet(client: UpstreamClient, args: LikeTweetArgs):
    if args.action == "like":
        await client.like(args.tweet_id)
        return f"Successfully liked tweet {args.tweet_id}"

    await client.unlike(args.tweet_id)
    return f"Successfully unliked tweet {args.tweet_id}"


@dataclass(frozen=True)
class RetweetArgs:
    tweet_id: str
    action: str

    @classmethod
    def parse(cls, arguments: Mapping[str, Any]) -> "RetweetArgs":
        return cls(
            tweet_id=str(arguments.get("tweet_id")).strip(),
            action=parse_choice(arguments.get("action"), ["retweet", "undo"], "action"),
        )


@registry.tool(
    "retweet",
    description="Retweet or undo retweet of a tweet",
    schema=schemas.RETWEET,
    parse=RetweetArgs.parse,
    required={"tweet_id": "Tweet ID is required"},
    failure_message="Failed to {action} tweet",
)
async def retweet(client: UpstreamClient, args: RetweetArgs):
    if args.action == "retweet":
        await client.repost(args.tweet_id)
        return f"Successfully retweeted tweet {args.tweet_id}"

    await client.undo_repost(args.tweet_id)
    return f"Successfully undid retweet of tweet {args.tweet_id}"
