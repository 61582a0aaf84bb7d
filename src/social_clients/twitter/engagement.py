"""Engagement mixin for the Twitter API client: likes, retweets, follows."""

import logging

logger = logging.getLogger("social_clients.twitter.engagement")


class EngagementMixin:
    """Like, retweet and follow operations through tweepy's v2 client."""

    async def like(self, post_id: str) -> None:
        await self._call(self.client_v2.like, post_id)
        logger.info(f"Liked tweet {post_id}")

    async def unlike(self, post_id: str) -> None:
        await self._call(self.client_v2.unlike, post_id)
        logger.info(f"Unliked tweet {post_id}")

    async def repost(self, post_id: str) -> None:
        await self._call(self.client_v2.retweet, post_id)
        logger.info(f"Retweeted tweet {post_id}")

    async def undo_repost(self, post_id: str) -> None:
        await self._call(self.client_v2.unretweet, post_id)
        logger.info(f"Undid retweet of tweet {post_id}")

    async def follow(self, user_id: str) -> None:
        await self._call(self.client_v2.follow_user, user_id)
        logger.info(f"Followed user {user_id}")

    async def unfollow(self, user_id: str) -> None:
        await self._call(self.client_v2.unfollow_user, user_id)
        logger.info(f"Unfollowed user {user_id}")
