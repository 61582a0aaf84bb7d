"""Authentication mixin for the Twitter API client."""

import asyncio
import functools
import logging
from typing import Any, Callable, Optional

import tweepy

from ..base import ApiKeyCredentials

logger = logging.getLogger("social_clients.twitter.auth")


class AuthMixin:
    """Handles Twitter authentication using tweepy."""

    def __init__(self, credentials: ApiKeyCredentials):
        self.credentials = credentials

        # Initialize tweepy clients (will be set during login)
        self.api_v1: Optional[tweepy.API] = None
        self.client_v2: Optional[tweepy.Client] = None
        self.user_id: Optional[str] = None
        self.screen_name: Optional[str] = None

    async def _call(self, fn: Callable[..., Any], *args, **kwargs) -> Any:
        """Run a synchronous tweepy call in the default thread pool."""
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(None, functools.partial(fn, *args, **kwargs))

    def _build_clients(self) -> None:
        creds = self.credentials

        # v1.1 API for media upload and trends
        auth = tweepy.OAuth1UserHandler(creds.api_key, creds.api_secret)
        auth.set_access_token(creds.access_token, creds.access_token_secret)
        self.api_v1 = tweepy.API(auth)

        # v2 API for everything else
        self.client_v2 = tweepy.Client(
            consumer_key=creds.api_key,
            consumer_secret=creds.api_secret,
            access_token=creds.access_token,
            access_token_secret=creds.access_token_secret,
        )

    async def login(self) -> None:
        """
        Build the tweepy clients and verify the keys against the API.
        Raises the tweepy error when the keys are rejected.
        """
        self._build_clients()
        me = await self._call(self.client_v2.get_me, user_auth=True)
        if me.data is None:
            raise tweepy.TweepyException("Twitter API did not return the authenticated user")

        self.user_id = str(me.data.id)
        self.screen_name = me.data.username
        logger.info(f"Authenticated to Twitter API as @{self.screen_name}")
