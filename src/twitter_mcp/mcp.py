from typing import Any, Dict

from fastmcp import FastMCP
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult
from mcp.types import TextContent
from pydantic import Field

from . import tools  # noqa: F401
from .dispatcher import Dispatcher, ToolCall
from .registry import ToolRegistry, registry

INSTRUCTIONS = """
    This server exposes tools for reading from and acting on a Twitter account:

    ## Reading
      - get_tweets(username, count?, date?): recent tweets from a user, optionally from one day (YYYY-MM-DD)
      - get_profile(username): full profile with counts and verification flags
      - search_tweets(query, count?, mode?, date?): search by keyword or #hashtag, mode latest|top
      - get_timeline(timeline_type, username?, count?): home, following or user timeline
      - get_list_tweets(list_id, count?): tweets from a Twitter list
      - get_user_relationships(username, relationship_type, count?): followers or following
      - get_trends(): current trending topics

    ## Acting
      - like_tweet(tweet_id, action?): like or unlike
      - retweet(tweet_id, action?): retweet or undo
      - post_tweet(text, reply_to_tweet_id?, quote_tweet_id?, media?, hide_link_preview?)
      - create_thread(tweets): at least 2 tweets posted as a reply chain
      - follow_user(username, action?): follow or unfollow

    ## Conventions
      - count defaults to 10 and is capped at 50
      - usernames may include a leading @
      - media items are {data: base64, media_type: MIME type}; up to 4 images or 1 video
      - every result is a single text item; failures start with "Error: "
"""


class DispatchedTool(Tool):
    """A tool whose arguments are handed untouched to the dispatcher."""

    dispatcher: Any = Field(exclude=True)

    async def run(self, arguments: Dict[str, Any]) -> ToolResult:
        envelope = await self.dispatcher.dispatch(ToolCall(name=self.name, arguments=arguments or {}))
        return ToolResult(content=[TextContent(type="text", text=envelope.text)])


def build_server(dispatcher: Dispatcher, tool_registry: ToolRegistry = registry) -> FastMCP:
    """Create the FastMCP server exposing every registered tool through ``dispatcher``."""
    mcp = FastMCP(name="Twitter MCP", instructions=INSTRUCTIONS)
    for spec in tool_registry:
        mcp.add_tool(
            DispatchedTool(
                name=spec.name,
                description=spec.description,
                parameters=spec.input_schema,
                dispatcher=dispatcher,
            )
        )
    return mcp
