"""Tests for the bounded result collector."""
import pytest

from social_clients import Page
from twitter_mcp.collector import collect

from conftest import AsyncItems

pytestmark = pytest.mark.asyncio


async def test_collect_caps_a_list_preserving_order():
    assert await collect([1, 2, 3, 4], 2) == [1, 2]


async def test_collect_reads_page_items():
    assert await collect(Page(items=["a", "b", "c"], next_cursor="x"), 5) == ["a", "b", "c"]


async def test_collect_stops_pulling_lazy_source_at_cap():
    source = AsyncItems(range(1000))
    result = await collect(source, 3)

    assert result == [0, 1, 2]
    assert source.pulled == 3
    assert source.closed


async def test_collect_applies_predicate_before_cap():
    source = AsyncItems(range(20))
    result = await collect(source, 3, predicate=lambda n: n % 2 == 1)

    assert result == [1, 3, 5]


async def test_collect_respects_max_scanned():
    source = AsyncItems(range(1000))
    result = await collect(source, 10, predicate=lambda n: False, max_scanned=25)

    assert result == []
    assert source.pulled == 25


async def test_collect_sync_iterator():
    def numbers():
        n = 0
        while True:
            yield n
            n += 1

    assert await collect(numbers(), 4) == [0, 1, 2, 3]


async def test_collect_empty_source_is_empty_list():
    assert await collect(AsyncItems([]), 10) == []
