"""
Twitter/X web client implementing the UpstreamClient protocol.
Logs in with username/password through twikit, which drives the same GraphQL
endpoints as the x.com web app.
"""

import logging
from datetime import datetime
from typing import Any, AsyncIterator, Awaitable, Callable, List, Optional

from twikit import Client
from twikit.errors import TwitterException

from .base import (
    MAX_PAGE_SIZE,
    MediaAttachment,
    Page,
    PasswordCredentials,
    SendResult,
    UpstreamPost,
    UpstreamProfile,
)

logger = logging.getLogger("social_clients.twitter_web")

SEARCH_PRODUCTS = {"latest": "Latest", "top": "Top"}


def _page_count(page_size: int) -> int:
    return max(1, min(page_size, MAX_PAGE_SIZE))


def _to_int(value: Any) -> Optional[int]:
    """Counts arrive as ints or numeric strings depending on the endpoint."""
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _parse_datetime(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.strptime(value, "%a %b %d %H:%M:%S %z %Y")
    except ValueError:
        return None


def _to_post(tweet: Any) -> UpstreamPost:
    user = getattr(tweet, "user", None)
    urls = [u.get("expanded_url") or u.get("url") for u in getattr(tweet, "urls", None) or []]

    return UpstreamPost(
        id=str(tweet.id),
        text=getattr(tweet, "full_text", None) or getattr(tweet, "text", None),
        user_id=str(user.id) if user else None,
        username=getattr(user, "screen_name", None),
        name=getattr(user, "name", None),
        created_at=_parse_datetime(getattr(tweet, "created_at", None)),
        likes=_to_int(getattr(tweet, "favorite_count", None)),
        reposts=_to_int(getattr(tweet, "retweet_count", None)),
        replies=_to_int(getattr(tweet, "reply_count", None)),
        views=_to_int(getattr(tweet, "view_count", None)),
        urls=[u for u in urls if u],
        hashtags=list(getattr(tweet, "hashtags", None) or []),
        is_repost=getattr(tweet, "retweeted_tweet", None) is not None,
        is_reply=getattr(tweet, "in_reply_to", None) is not None,
    )


def _to_profile(user: Any) -> UpstreamProfile:
    urls = getattr(user, "urls", None) or []
    website = urls[0].get("expanded_url") if urls else getattr(user, "url", None)

    return UpstreamProfile(
        user_id=str(user.id),
        username=getattr(user, "screen_name", None),
        name=getattr(user, "name", None),
        bio=getattr(user, "description", None),
        location=getattr(user, "location", None),
        website=website,
        joined=_parse_datetime(getattr(user, "created_at", None)),
        post_count=_to_int(getattr(user, "statuses_count", None)),
        followers=_to_int(getattr(user, "followers_count", None)),
        following=_to_int(getattr(user, "following_count", None)),
        likes=_to_int(getattr(user, "favourites_count", None)),
        listed=_to_int(getattr(user, "listed_count", None)),
        is_verified=bool(getattr(user, "verified", False)),
        is_blue_verified=bool(getattr(user, "is_blue_verified", False)),
        is_private=bool(getattr(user, "protected", False)),
        avatar=getattr(user, "profile_image_url", None),
        banner=getattr(user, "profile_banner_url", None),
    )


class TwitterWebClient:
    """
    Twitter/X client authenticated with account credentials.

    twikit is natively async, so unlike the tweepy client no thread pool is
    involved. Paginated ``Result`` objects are pulled page by page.
    """

    def __init__(self, credentials: PasswordCredentials, language: str = "en-US"):
        self.credentials = credentials
        self.client = Client(language=language)

    async def login(self) -> None:
        creds = self.credentials
        await self.client.login(
            auth_info_1=creds.username,
            auth_info_2=creds.email,
            password=creds.password,
        )
        logger.info(f"Authenticated to Twitter web as @{creds.username}")

    @classmethod
    async def connect(cls, credentials: PasswordCredentials) -> "TwitterWebClient":
        """Create a client and log in; raises when the login is refused."""
        client = cls(credentials)
        await client.login()
        return client

    async def _results(self, first_page: Callable[[], Awaitable[Any]]) -> AsyncIterator[Any]:
        """Yield items from a twikit Result, fetching the next page on demand."""
        page = await first_page()
        while page is not None and len(page) > 0:
            for item in page:
                yield item
            page = await page.next()

    # Users
    async def get_user_id(self, username: str) -> str:
        user = await self.client.get_user_by_screen_name(username)
        return str(user.id)

    async def get_profile(self, username: str) -> UpstreamProfile:
        user = await self.client.get_user_by_screen_name(username)
        return _to_profile(user)

    async def iter_followers(self, user_id: str, page_size: int = MAX_PAGE_SIZE) -> AsyncIterator[UpstreamProfile]:
        async for user in self._results(lambda: self.client.get_user_followers(user_id, count=_page_count(page_size))):
            yield _to_profile(user)

    async def iter_following(self, user_id: str, page_size: int = MAX_PAGE_SIZE) -> AsyncIterator[UpstreamProfile]:
        async for user in self._results(lambda: self.client.get_user_following(user_id, count=_page_count(page_size))):
            yield _to_profile(user)

    async def follow(self, user_id: str) -> None:
        await self.client.follow_user(user_id)
        logger.info(f"Followed user {user_id}")

    async def unfollow(self, user_id: str) -> None:
        await self.client.unfollow_user(user_id)
        logger.info(f"Unfollowed user {user_id}")

    # Reading
    async def iter_user_posts(self, user_id: str, page_size: int = MAX_PAGE_SIZE) -> AsyncIterator[UpstreamPost]:
        async for tweet in self._results(
            lambda: self.client.get_user_tweets(user_id, "Tweets", count=_page_count(page_size))
        ):
            yield _to_post(tweet)

    async def search_posts(self, query: str, mode: str, page_size: int = MAX_PAGE_SIZE) -> AsyncIterator[UpstreamPost]:
        product = SEARCH_PRODUCTS.get(mode, "Latest")
        async for tweet in self._results(lambda: self.client.search_tweet(query, product, count=_page_count(page_size))):
            yield _to_post(tweet)

    async def fetch_home_timeline(self, count: int) -> List[UpstreamPost]:
        tweets = await self.client.get_timeline(count=count)
        return [_to_post(tweet) for tweet in tweets]

    async def fetch_following_timeline(self, count: int) -> List[UpstreamPost]:
        tweets = await self.client.get_latest_timeline(count=count)
        return [_to_post(tweet) for tweet in tweets]

    async def fetch_list_posts(self, list_id: str, count: int) -> Page[UpstreamPost]:
        tweets = await self.client.get_list_tweets(list_id, count=count)
        return Page(
            items=[_to_post(tweet) for tweet in tweets],
            next_cursor=getattr(tweets, "next_cursor", None),
        )

    async def get_trends(self) -> List[str]:
        trends = await self.client.get_trends("trending")
        return [trend.name for trend in trends if getattr(trend, "name", None)]

    # Engagement
    async def like(self, post_id: str) -> None:
        await self.client.favorite_tweet(post_id)
        logger.info(f"Liked tweet {post_id}")

    async def unlike(self, post_id: str) -> None:
        await self.client.unfavorite_tweet(post_id)
        logger.info(f"Unliked tweet {post_id}")

    async def repost(self, post_id: str) -> None:
        await self.client.retweet(post_id)
        logger.info(f"Retweeted tweet {post_id}")

    async def undo_repost(self, post_id: str) -> None:
        await self.client.delete_retweet(post_id)
        logger.info(f"Undid retweet of tweet {post_id}")

    # Posting
    async def upload_media(self, attachment: MediaAttachment) -> str:
        if attachment.is_video:
            media_id = await self.client.upload_media(
                attachment.data,
                wait_for_completion=True,
                media_type=attachment.mime_type,
                media_category="tweet_video",
            )
        else:
            media_id = await self.client.upload_media(attachment.data, media_type=attachment.mime_type)
        logger.info(f"Uploaded {attachment.mime_type} ({len(attachment.data)} bytes, media_id: {media_id})")
        return str(media_id)

    async def send_post(
        self,
        text: str,
        reply_to: Optional[str] = None,
        quote_of: Optional[str] = None,
        media: Optional[List[MediaAttachment]] = None,
        hide_link_preview: bool = False,
    ) -> SendResult:
        if hide_link_preview:
            logger.debug("Link preview suppression is not supported by the web client; ignoring")

        # Quotes are regular tweets carrying the quoted status as attachment
        attachment_url = f"https://x.com/i/status/{quote_of}" if quote_of else None

        try:
            media_ids = [await self.upload_media(item) for item in media or []]
            tweet = await self.client.create_tweet(
                text=text,
                media_ids=media_ids or None,
                reply_to=reply_to,
                attachment_url=attachment_url,
            )
        except TwitterException as e:
            logger.error(f"Twitter rejected post: {e}")
            return SendResult(ok=False, error=str(e))

        logger.info(f"Posted to Twitter: {text[:50]}... (ID: {tweet.id})")
        return SendResult(ok=True, payload={"data": {"id": str(tweet.id), "text": tweet.text}})
