"""Tools that read tweets: user tweets, search, timelines and lists."""

from dataclasses import dataclass
from datetime import timezone
from typing import Any, Callable, Mapping, Optional

from social_clients import UpstreamClient, UpstreamPost

from .. import schemas
from ..arguments import (
    MAX_COUNT,
    normalize_username,
    parse_choice,
    parse_count,
    parse_date,
    require_username,
)
from ..collector import collect
from ..errors import ValidationError
from ..formatter import format_post
from ..registry import registry

# Posts dropped by the predicate still count towards this, so an endless
# timeline of undated or off-date posts always ends
SCAN_LIMIT = 500


def posted_on(date: Optional[str]) -> Callable[[UpstreamPost], bool]:
    """Predicate keeping posts with a known timestamp, on ``date`` (UTC) if given."""

    def predicate(post: UpstreamPost) -> bool:
        if post.created_at is None:
            return False
        if date is None:
            return True
        created = post.created_at
        if created.tzinfo is not None:
            created = created.astimezone(timezone.utc)
        return created.date().isoformat() == date

    return predicate


def page_size_for(count: int, date: Optional[str]) -> int:
    """Date filtering discards posts, so request full pages when a date is set."""
    return MAX_COUNT if date else count


@dataclass(frozen=True)
class GetTweetsArgs:
    username: str
    count: int
    date: Optional[str] = None

    @classmethod
    def parse(cls, arguments: Mapping[str, Any]) -> "GetTweetsArgs":
        return cls(
            username=require_username(arguments.get("username")),
            count=parse_count(arguments.get("count")),
            date=parse_date(arguments.get("date")),
        )


@registry.tool(
    "get_tweets",
    description="Get recent tweets from a user",
    schema=schemas.GET_TWEETS,
    parse=GetTweetsArgs.parse,
    required={"username": "Username is required"},
    failure_message="Failed to fetch tweets",
)
async def get_tweets(client: UpstreamClient, args: GetTweetsArgs):
    user_id = await client.get_user_id(args.username)
    posts = await collect(
        client.iter_user_posts(user_id, page_size=page_size_for(args.count, args.date)),
        args.count,
        predicate=posted_on(args.date),
        max_scanned=SCAN_LIMIT,
    )

    if not posts:
        suffix = f" on {args.date}" if args.date else ""
        return f"No tweets found for user @{args.username}{suffix}"
    return [format_post(post) for post in posts]


@dataclass(frozen=True)
class SearchTweetsArgs:
    query: str
    mode: str
    count: int
    date: Optional[str] = None

    @classmethod
    def parse(cls, arguments: Mapping[str, Any]) -> "SearchTweetsArgs":
        return cls(
            query=str(arguments.get("query")).strip(),
            mode=parse_choice(arguments.get("mode"), ["latest", "top"], "mode"),
            count=parse_count(arguments.get("count")),
            date=parse_date(arguments.get("date")),
        )


@registry.tool(
    "search_tweets",
    description="Search for tweets by hashtag or keyword",
    schema=schemas.SEARCH_TWEETS,
    parse=SearchTweetsArgs.parse,
    required={"query": "Search query is required"},
    failure_message="Failed to search tweets",
)
async def search_tweets(client: UpstreamClient, args: SearchTweetsArgs):
    predicate = posted_on(args.date) if args.date else None
    posts = await collect(
        client.search_posts(args.query, args.mode, page_size=page_size_for(args.count, args.date)),
        args.count,
        predicate=predicate,
        max_scanned=SCAN_LIMIT if args.date else None,
    )

    if not posts:
        suffix = f" on {args.date}" if args.date else ""
        return f"No tweets found for query: {args.query}{suffix}"
    return [format_post(post) for post in posts]


@dataclass(frozen=True)
class GetTimelineArgs:
    timeline_type: str
    count: int
    username: Optional[str] = None

    @classmethod
    def parse(cls, arguments: Mapping[str, Any]) -> "GetTimelineArgs":
        timeline_type = parse_choice(
            arguments.get("timeline_type"), ["home", "following", "user"], "timeline type"
        )
        username = arguments.get("username")
        username = normalize_username(username) if username is not None else None
        if timeline_type == "user" and not username:
            raise ValidationError("Username is required for user timeline")

        return cls(
            timeline_type=timeline_type,
            count=parse_count(arguments.get("count")),
            username=username or None,
        )


@registry.tool(
    "get_timeline",
    description="Get tweets from a user's timeline or home timeline",
    schema=schemas.GET_TIMELINE,
    parse=GetTimelineArgs.parse,
    required={"timeline_type": "Timeline type is required"},
    failure_message="Failed to fetch timeline",
)
async def get_timeline(client: UpstreamClient, args: GetTimelineArgs):
    if args.timeline_type == "home":
        source = await client.fetch_home_timeline(args.count)
    elif args.timeline_type == "following":
        source = await client.fetch_following_timeline(args.count)
    else:
        user_id = await client.get_user_id(args.username)
        source = client.iter_user_posts(user_id, page_size=args.count)

    posts = await collect(source, args.count)

    if not posts:
        of_user = f" of user @{args.username}" if args.timeline_type == "user" else ""
        return f"No tweets found for {args.timeline_type} timeline{of_user}"
    return [format_post(post) for post in posts]


@dataclass(frozen=True)
class GetListTweetsArgs:
    list_id: str
    count: int

    @classmethod
    def parse(cls, arguments: Mapping[str, Any]) -> "GetListTweetsArgs":
        return cls(
            list_id=str(arguments.get("list_id")).strip(),
            count=parse_count(arguments.get("count")),
        )


@registry.tool(
    "get_list_tweets",
    description="Get tweets from a Twitter list",
    schema=schemas.GET_LIST_TWEETS,
    parse=GetListTweetsArgs.parse,
    required={"list_id": "List ID is required"},
    failure_message="Failed to fetch list tweets",
)
async def get_list_tweets(client: UpstreamClient, args: GetListTweetsArgs):
    page = await client.fetch_list_posts(args.list_id, args.count)
    posts = await collect(page, args.count)

    if not posts:
        return f"No tweets found for list {args.list_id}"
    return [format_post(post) for post in posts]
