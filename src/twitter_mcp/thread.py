"""Ordered creation of reply-chained posts."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from social_clients import UpstreamClient

from .arguments import MediaSpec, is_blank, parse_media
from .errors import UpstreamError, ValidationError

logger = logging.getLogger("twitter_mcp.thread")

MIN_THREAD_LENGTH = 2


@dataclass(frozen=True)
class ThreadItem:
    text: str
    media: Tuple[MediaSpec, ...] = ()


def parse_thread_items(value: Any) -> List[ThreadItem]:
    if not isinstance(value, list) or not value:
        raise ValidationError("tweets array is required")
    if len(value) < MIN_THREAD_LENGTH:
        raise ValidationError(f"A thread must contain at least {MIN_THREAD_LENGTH} tweets")

    items = []
    for index, raw in enumerate(value, start=1):
        if not isinstance(raw, dict) or is_blank(raw.get("text")):
            raise ValidationError(f"Tweet {index} in thread is missing text")
        media = parse_media(raw.get("media"), field=f"tweets[{index}].media")
        items.append(ThreadItem(text=str(raw["text"]), media=tuple(media)))
    return items


def extract_post_id(payload: Dict[str, Any]) -> Optional[str]:
    """
    Find the created post id in a submission response.

    Understands the v2 API body (``data.id``) and the web GraphQL body
    (``data.create_tweet.tweet_results.result.rest_id``).
    """
    data = (payload or {}).get("data") or {}
    if data.get("id"):
        return str(data["id"])

    result = ((data.get("create_tweet") or {}).get("tweet_results") or {}).get("result") or {}
    rest_id = result.get("rest_id")
    return str(rest_id) if rest_id else None


def _step_failure(step: int, total: int, detail: str, created: List[str]) -> str:
    message = f"Failed to create tweet in thread at step {step} of {total}: {detail}"
    if created:
        message += f" (already posted: {', '.join(created)})"
    return message


async def create_thread(client: UpstreamClient, items: Sequence[ThreadItem]) -> List[str]:
    """
    Post ``items`` in order, each replying to the previous one.

    Returns the created ids, root first. Stops at the first failed step and
    raises ``UpstreamError`` naming it; posts already created stay up.
    """
    if len(items) < MIN_THREAD_LENGTH:
        raise ValidationError(f"A thread must contain at least {MIN_THREAD_LENGTH} tweets")

    total = len(items)
    created: List[str] = []
    previous_id: Optional[str] = None

    for step, item in enumerate(items, start=1):
        media = [spec.decode() for spec in item.media]
        try:
            result = await client.send_post(item.text, reply_to=previous_id, media=media or None)
        except Exception as e:
            raise UpstreamError(_step_failure(step, total, str(e) or type(e).__name__, created)) from e

        if not result.ok:
            raise UpstreamError(_step_failure(step, total, result.error or "the post was rejected", created))

        post_id = extract_post_id(result.payload)
        if not post_id:
            raise UpstreamError(_step_failure(step, total, "failed to get tweet ID from response", created))

        logger.info(f"Thread step {step}/{total} posted as {post_id}")
        created.append(post_id)
        previous_id = post_id

    return created
