"""Tools about users: profiles, relationships, follows."""

from dataclasses import dataclass
from typing import Any, Mapping

from social_clients import UpstreamClient

from .. import schemas
from ..arguments import parse_choice, parse_count, require_username
from ..collector import collect
from ..formatter import format_profile, format_profile_summary
from ..registry import registry


@dataclass(frozen=True)
class GetProfileArgs:
    username: str

    @classmethod
    def parse(cls, arguments: Mapping[str, Any]) -> "GetProfileArgs":
        return cls(username=require_username(arguments.get("username")))


@registry.tool(
    "get_profile",
    description="Get a Twitter user's profile information",
    schema=schemas.GET_PROFILE,
    parse=GetProfileArgs.parse,
    required={"username": "Username is required"},
    failure_message="Failed to fetch profile",
)
async def get_profile(client: UpstreamClient, args: GetProfileArgs):
    profile = await client.get_profile(args.username)
    return format_profile(profile)


@dataclass(frozen=True)
class GetUserRelationshipsArgs:
    username: str
    relationship_type: str
    count: int

    @classmethod
    def parse(cls, arguments: Mapping[str, Any]) -> "GetUserRelationshipsArgs":
        return cls(
            username=require_username(arguments.get("username")),
            relationship_type=parse_choice(
                arguments.get("relationship_type"), ["followers", "following"], "relationship type"
            ),
            count=parse_count(arguments.get("count")),
        )


@registry.tool(
    "get_user_relationships",
    description="Get a user's followers or following list",
    schema=schemas.GET_USER_RELATIONSHIPS,
    parse=GetUserRelationshipsArgs.parse,
    required={
        "username": "Username is required",
        "relationship_type": "Relationship type is required",
    },
    failure_message="Failed to fetch {relationship_type}",
)
async def get_user_relationships(client: UpstreamClient, args: GetUserRelationshipsArgs):
    user_id = await client.get_user_id(args.username)
    if args.relationship_type == "followers":
        source = client.iter_followers(user_id, page_size=args.count)
    else:
        source = client.iter_following(user_id, page_size=args.count)

    profiles = await collect(source, args.count)

    if not profiles:
        return f"No {args.relationship_type} found for user @{args.username}"
    return [format_profile_summary(profile) for profile in profiles]


@dataclass(frozen=True)
class FollowUserArgs:
    username: str
    action: str

    @classmethod
    def parse(cls, arguments: Mapping[str, Any]) -> "FollowUserArgs":
        return cls(
            username=require_username(arguments.get("username")),
            action=parse_choice(arguments.get("action"), ["follow", "unfollow"], "action"),
        )


@registry.tool(
    "follow_user",
    description="Follow or unfollow a Twitter user",
    schema=schemas.FOLLOW_USER,
    parse=FollowUserArgs.parse,
    required={"username": "Username is required"},
    failure_message="Failed to {action} user",
)
async def follow_user(client: UpstreamClient, args: FollowUserArgs):
    user_id = await client.get_user_id(args.username)
    if args.action == "follow":
        await client.follow(user_id)
        return f"Successfully followed user @{args.username}"

    await client.unfollow(user_id)
    return f"Successfully unfollowed user @{args.username}"
