"""Shared fakes for the tool and dispatcher tests."""
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from social_clients import Page, SendResult, UpstreamPost, UpstreamProfile


class AsyncItems:
    """Async iterator over a list that records how far it was pulled and whether it was closed."""

    def __init__(self, items):
        self._items = list(items)
        self.pulled = 0
        self.closed = False

    def __aiter__(self):
        return self

    async def __anext__(self):
        if self.pulled >= len(self._items):
            raise StopAsyncIteration
        item = self._items[self.pulled]
        self.pulled += 1
        return item

    async def aclose(self):
        self.closed = True


def make_post(post_id, text="hello", created_at=datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc), **kwargs):
    return UpstreamPost(
        id=str(post_id),
        text=text,
        user_id="42",
        username="alice",
        name="Alice",
        created_at=created_at,
        **kwargs,
    )


def make_profile(user_id="42", username="alice", **kwargs):
    return UpstreamProfile(user_id=user_id, username=username, name=username.title(), **kwargs)


@pytest.fixture
def client():
    """A fake UpstreamClient with empty results everywhere."""
    fake = MagicMock()
    fake.get_user_id = AsyncMock(return_value="42")
    fake.get_profile = AsyncMock(return_value=make_profile())
    fake.iter_user_posts = MagicMock(side_effect=lambda user_id, page_size: AsyncItems([]))
    fake.search_posts = MagicMock(side_effect=lambda query, mode, page_size: AsyncItems([]))
    fake.iter_followers = MagicMock(side_effect=lambda user_id, page_size: AsyncItems([]))
    fake.iter_following = MagicMock(side_effect=lambda user_id, page_size: AsyncItems([]))
    fake.fetch_home_timeline = AsyncMock(return_value=[])
    fake.fetch_following_timeline = AsyncMock(return_value=[])
    fake.fetch_list_posts = AsyncMock(return_value=Page(items=[]))
    fake.get_trends = AsyncMock(return_value=[])
    for name in ("like", "unlike", "repost", "undo_repost", "follow", "unfollow"):
        setattr(fake, name, AsyncMock(return_value=None))
    fake.send_post = AsyncMock(return_value=SendResult(ok=True, payload={"data": {"id": "1000"}}))
    return fake


@pytest.fixture
def sessions(client):
    """A session manager stand-in that is already authenticated."""
    manager = MagicMock()
    manager.current_handle.return_value = client
    return manager


@pytest.fixture
def dispatcher(sessions):
    from twitter_mcp import tools  # noqa: F401
    from twitter_mcp.dispatcher import Dispatcher
    from twitter_mcp.registry import registry

    return Dispatcher(registry, sessions)
