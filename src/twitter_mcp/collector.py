"""Bounded, ordered collection over the result shapes upstream clients return."""

import logging
from typing import (
    AsyncIterable,
    Callable,
    Iterable,
    List,
    Optional,
    Sequence,
    TypeVar,
    Union,
)

from social_clients import Page

logger = logging.getLogger("twitter_mcp.collector")

T = TypeVar("T")

Source = Union[Sequence[T], Page[T], AsyncIterable[T], Iterable[T]]


async def collect(
    source: Source,
    cap: int,
    predicate: Optional[Callable[[T], bool]] = None,
    max_scanned: Optional[int] = None,
) -> List[T]:
    """
    Collect at most ``cap`` items from ``source``, preserving order.

    ``source`` may be a materialized sequence, a ``Page`` or a lazy iterator
    (async or sync). Lazy sources are pulled one item at a time and never past
    the point where ``cap`` items have been kept, so unbounded sources are
    safe. ``predicate`` filters items before they count towards the cap.
    ``max_scanned`` bounds how many items are examined in total, which keeps a
    filter that never matches from pulling an endless timeline.

    An empty result is a normal outcome, not an error.
    """
    if cap <= 0:
        return []

    if isinstance(source, Page):
        source = source.items

    if isinstance(source, (list, tuple)):
        items = source[:max_scanned] if max_scanned is not None else source
        if predicate is not None:
            items = [item for item in items if predicate(item)]
        return list(items[:cap])

    if hasattr(source, "__aiter__"):
        return await _collect_async(source, cap, predicate, max_scanned)
    return _collect_sync(source, cap, predicate, max_scanned)


async def _collect_async(source, cap, predicate, max_scanned) -> list:
    collected = []
    scanned = 0
    iterator = source.__aiter__()
    try:
        while len(collected) < cap:
            if max_scanned is not None and scanned >= max_scanned:
                logger.debug(f"Stopped after scanning {scanned} items ({len(collected)} kept)")
                break
            try:
                item = await iterator.__anext__()
            except StopAsyncIteration:
                break
            scanned += 1
            if predicate is None or predicate(item):
                collected.append(item)
    finally:
        # Release the upstream pager when we stop early
        aclose = getattr(iterator, "aclose", None)
        if aclose is not None:
            await aclose()
    return collected


def _collect_sync(source, cap, predicate, max_scanned) -> list:
    collected = []
    scanned = 0
    iterator = iter(source)
    try:
        while len(collected) < cap:
            if max_scanned is not None and scanned >= max_scanned:
                break
            try:
                item = next(iterator)
            except StopIteration:
                break
            scanned += 1
            if predicate is None or predicate(item):
                collected.append(item)
    finally:
        close = getattr(iterator, "close", None)
        if close is not None:
            close()
    return collected
