"""Read-side mixin for the Twitter API client: users, timelines, search, trends."""

import logging
from typing import Any, AsyncIterator, Callable, Dict, List, Optional

import tweepy

from ..base import MAX_PAGE_SIZE, Page, UpstreamPost, UpstreamProfile

logger = logging.getLogger("social_clients.twitter.reading")

TWEET_FIELDS = [
    "created_at",
    "public_metrics",
    "entities",
    "referenced_tweets",
    "author_id",
]
USER_FIELDS = [
    "created_at",
    "description",
    "entities",
    "location",
    "profile_image_url",
    "protected",
    "public_metrics",
    "url",
    "verified",
    "verified_type",
]

# Yahoo "Where On Earth" id for worldwide trends
WORLDWIDE_WOEID = 1

# Smallest max_results each paginated v2 endpoint accepts
MIN_USER_TWEETS = 5
MIN_SEARCH_RESULTS = 10
MIN_USERS = 1


def _max_results(page_size: int, minimum: int) -> int:
    return max(minimum, min(page_size, MAX_PAGE_SIZE))


def _expanded_urls(entities: Optional[Dict[str, Any]]) -> List[str]:
    urls = (entities or {}).get("urls") or []
    return [u.get("expanded_url") or u.get("url") for u in urls if u.get("expanded_url") or u.get("url")]


def _to_post(tweet: tweepy.Tweet, users: Dict[Any, tweepy.User]) -> UpstreamPost:
    metrics = tweet.public_metrics or {}
    author = users.get(tweet.author_id)
    referenced = {ref.type for ref in (tweet.referenced_tweets or [])}
    hashtags = [h.get("tag") for h in (tweet.entities or {}).get("hashtags") or [] if h.get("tag")]

    return UpstreamPost(
        id=str(tweet.id),
        text=tweet.text,
        user_id=str(tweet.author_id) if tweet.author_id else None,
        username=author.username if author else None,
        name=author.name if author else None,
        created_at=tweet.created_at,
        likes=metrics.get("like_count"),
        reposts=metrics.get("retweet_count"),
        replies=metrics.get("reply_count"),
        views=metrics.get("impression_count"),
        urls=_expanded_urls(tweet.entities),
        hashtags=hashtags,
        is_repost="retweeted" in referenced,
        is_reply="replied_to" in referenced,
    )


def _to_profile(user: tweepy.User) -> UpstreamProfile:
    metrics = user.public_metrics or {}
    # The profile url is a t.co link; the expanded form lives in entities
    website_urls = _expanded_urls((user.entities or {}).get("url"))

    return UpstreamProfile(
        user_id=str(user.id),
        username=user.username,
        name=user.name,
        bio=user.description,
        location=user.location,
        website=website_urls[0] if website_urls else user.url,
        joined=user.created_at,
        post_count=metrics.get("tweet_count"),
        followers=metrics.get("followers_count"),
        following=metrics.get("following_count"),
        likes=metrics.get("like_count"),
        listed=metrics.get("listed_count"),
        is_verified=bool(user.verified),
        is_blue_verified=user.verified_type == "blue",
        is_private=bool(user.protected),
        avatar=user.profile_image_url,
    )


def _users_by_id(response: tweepy.Response) -> Dict[Any, tweepy.User]:
    includes = response.includes or {}
    return {u.id: u for u in includes.get("users", [])}


class ReadingMixin:
    """Read operations built on tweepy's v2 client."""

    async def _pages(self, method: Callable[..., Any], *args, **kwargs) -> AsyncIterator[tweepy.Response]:
        """
        Pull pages from a tweepy.Paginator one request at a time.
        The paginator is synchronous, so each ``next`` runs in the thread pool.
        """
        pages = iter(tweepy.Paginator(method, *args, **kwargs))
        while True:
            response = await self._call(next, pages, None)
            if response is None:
                return
            yield response

    async def _iter_tweets(self, method: Callable[..., Any], *args, **kwargs) -> AsyncIterator[UpstreamPost]:
        async for response in self._pages(
            method,
            *args,
            tweet_fields=TWEET_FIELDS,
            expansions=["author_id"],
            user_fields=["name", "username"],
            user_auth=True,
            **kwargs,
        ):
            users = _users_by_id(response)
            for tweet in response.data or []:
                yield _to_post(tweet, users)

    async def _iter_users(
        self, method: Callable[..., Any], user_id: str, page_size: int
    ) -> AsyncIterator[UpstreamProfile]:
        async for response in self._pages(
            method,
            user_id,
            max_results=_max_results(page_size, MIN_USERS),
            user_fields=USER_FIELDS,
            user_auth=True,
        ):
            for user in response.data or []:
                yield _to_profile(user)

    async def get_user_id(self, username: str) -> str:
        response = await self._call(self.client_v2.get_user, username=username, user_auth=True)
        if response.data is None:
            raise tweepy.TweepyException(f"User @{username} not found")
        return str(response.data.id)

    async def get_profile(self, username: str) -> UpstreamProfile:
        response = await self._call(
            self.client_v2.get_user,
            username=username,
            user_fields=USER_FIELDS,
            user_auth=True,
        )
        if response.data is None:
            raise tweepy.TweepyException(f"User @{username} not found")

        profile = _to_profile(response.data)
        # Banner and favourites are only exposed by the v1.1 user object
        try:
            legacy = await self._call(self.api_v1.get_user, user_id=profile.user_id)
            profile.banner = getattr(legacy, "profile_banner_url", None)
            if profile.likes is None:
                profile.likes = getattr(legacy, "favourites_count", None)
        except tweepy.TweepyException as e:
            logger.debug(f"v1.1 profile lookup failed for @{username}: {e}")
        return profile

    def iter_user_posts(self, user_id: str, page_size: int = MAX_PAGE_SIZE) -> AsyncIterator[UpstreamPost]:
        return self._iter_tweets(
            self.client_v2.get_users_tweets,
            user_id,
            max_results=_max_results(page_size, MIN_USER_TWEETS),
        )

    def search_posts(self, query: str, mode: str, page_size: int = MAX_PAGE_SIZE) -> AsyncIterator[UpstreamPost]:
        sort_order = "recency" if mode == "latest" else "relevancy"
        return self._iter_tweets(
            self.client_v2.search_recent_tweets,
            query,
            max_results=_max_results(page_size, MIN_SEARCH_RESULTS),
            sort_order=sort_order,
        )

    def iter_followers(self, user_id: str, page_size: int = MAX_PAGE_SIZE) -> AsyncIterator[UpstreamProfile]:
        return self._iter_users(self.client_v2.get_users_followers, user_id, page_size)

    def iter_following(self, user_id: str, page_size: int = MAX_PAGE_SIZE) -> AsyncIterator[UpstreamProfile]:
        return self._iter_users(self.client_v2.get_users_following, user_id, page_size)

    async def _fetch_tweets(self, method: Callable[..., Any], *args, **kwargs) -> tweepy.Response:
        return await self._call(
            method,
            *args,
            tweet_fields=TWEET_FIELDS,
            expansions=["author_id"],
            user_fields=["name", "username"],
            user_auth=True,
            **kwargs,
        )

    async def fetch_home_timeline(self, count: int) -> List[UpstreamPost]:
        # The v2 API has a single reverse-chronological home timeline
        return await self.fetch_following_timeline(count)

    async def fetch_following_timeline(self, count: int) -> List[UpstreamPost]:
        response = await self._fetch_tweets(self.client_v2.get_home_timeline, max_results=max(count, 1))
        users = _users_by_id(response)
        return [_to_post(tweet, users) for tweet in response.data or []]

    async def fetch_list_posts(self, list_id: str, count: int) -> Page[UpstreamPost]:
        response = await self._fetch_tweets(self.client_v2.get_list_tweets, list_id, max_results=max(count, 1))
        users = _users_by_id(response)
        meta = response.meta or {}
        return Page(
            items=[_to_post(tweet, users) for tweet in response.data or []],
            next_cursor=meta.get("next_token"),
        )

    async def get_trends(self) -> List[str]:
        locations = await self._call(self.api_v1.get_place_trends, WORLDWIDE_WOEID)
        if not locations:
            return []
        return [trend["name"] for trend in locations[0].get("trends", []) if trend.get("name")]
