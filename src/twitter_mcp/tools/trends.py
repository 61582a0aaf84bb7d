from typing import Any, Mapping

from social_clients import UpstreamClient

from .. import schemas
from ..arguments import MAX_COUNT
from ..collector import collect
from ..formatter import format_trend
from ..registry import registry


def _no_arguments(arguments: Mapping[str, Any]) -> None:
    return None


@registry.tool(
    "get_trends",
    description="Get current trending topics on Twitter",
    schema=schemas.GET_TRENDS,
    parse=_no_arguments,
    failure_message="Failed to fetch trending topics",
)
async def get_trends(client: UpstreamClient, args: None):
    trends = await collect(await client.get_trends(), MAX_COUNT)

    if not trends:
        return "No trending topics found at the moment"
    return [format_trend(trend) for trend in trends]
