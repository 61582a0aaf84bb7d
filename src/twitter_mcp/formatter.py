"""
Normalization of upstream objects into the stable records returned to agents.

All functions are pure and total: missing upstream fields become empty or
default values, never errors.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from social_clients import UpstreamPost, UpstreamProfile


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _count(value: Optional[int]) -> int:
    return value or 0


def format_post(post: UpstreamPost) -> Dict[str, Any]:
    return {
        "id": post.id,
        "text": post.text or "",
        "author": {
            "id": post.user_id or "",
            "username": post.username or "",
            "displayName": post.name or "",
        },
        "createdAt": _iso(post.created_at),
        "metrics": {
            "likes": _count(post.likes),
            "reposts": _count(post.reposts),
            "replies": _count(post.replies),
            "views": _count(post.views),
        },
        "urls": list(post.urls or []),
        "hashtags": list(post.hashtags or []),
        "isRepost": bool(post.is_repost),
        "isReply": bool(post.is_reply),
    }


def format_profile(profile: UpstreamProfile) -> Dict[str, Any]:
    return {
        "id": profile.user_id,
        "username": profile.username or "",
        "displayName": profile.name or "",
        "bio": profile.bio or "",
        "location": profile.location or "",
        "website": profile.website or "",
        "joinDate": _iso(profile.joined),
        "metrics": {
            "postCount": _count(profile.post_count),
            "followers": _count(profile.followers),
            "following": _count(profile.following),
            "likes": _count(profile.likes),
            "listed": _count(profile.listed),
        },
        "isVerified": bool(profile.is_verified),
        "isBlueVerified": bool(profile.is_blue_verified),
        "isPrivate": bool(profile.is_private),
        "avatarUrl": profile.avatar or "",
        "bannerUrl": profile.banner or "",
    }


def format_profile_summary(profile: UpstreamProfile) -> Dict[str, Any]:
    """Reduced profile used in follower/following listings."""
    return {
        "id": profile.user_id,
        "username": profile.username or "",
        "displayName": profile.name or "",
        "bio": profile.bio or "",
        "metrics": {
            "postCount": _count(profile.post_count),
            "followers": _count(profile.followers),
            "following": _count(profile.following),
        },
        "isVerified": bool(profile.is_verified),
        "isPrivate": bool(profile.is_private),
        "avatarUrl": profile.avatar or "",
    }


def format_trend(trend: Any) -> str:
    return str(trend)
