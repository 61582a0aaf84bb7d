"""JSON schemas advertised for each tool's arguments."""

from typing import Any, Dict, List, Optional

COUNT = {
    "type": "number",
    "description": "Number of items to retrieve (default: 10, max: 50)",
}

USERNAME = {
    "type": "string",
    "description": "Username of the user (without @)",
}

MEDIA = {
    "type": "array",
    "description": "Optional: Array of media items to attach to the tweet (up to 4 images or 1 video)",
    "items": {
        "type": "object",
        "properties": {
            "data": {"type": "string", "description": "Base64 encoded media data"},
            "media_type": {
                "type": "string",
                "description": "MIME type of the media (e.g., 'image/jpeg', 'image/png', 'video/mp4')",
            },
        },
        "required": ["data", "media_type"],
    },
}


def enum(values: List[str], description: str) -> Dict[str, Any]:
    return {"type": "string", "enum": values, "description": description, "default": values[0]}


def obj(properties: Dict[str, Any], required: Optional[List[str]] = None) -> Dict[str, Any]:
    return {"type": "object", "properties": properties, "required": required or []}


GET_TWEETS = obj(
    {
        "username": USERNAME,
        "count": COUNT,
        "date": {
            "type": "string",
            "description": "Optional: only return tweets posted on this day (YYYY-MM-DD, UTC)",
        },
    },
    ["username"],
)

GET_PROFILE = obj({"username": USERNAME}, ["username"])

SEARCH_TWEETS = obj(
    {
        "query": {
            "type": "string",
            "description": "Search query (hashtag or keyword). For hashtags, include the # symbol",
        },
        "mode": enum(
            ["latest", "top"],
            "Search mode - 'latest' for most recent tweets or 'top' for most relevant tweets",
        ),
        "count": COUNT,
        "date": {
            "type": "string",
            "description": "Optional: only return tweets posted on this day (YYYY-MM-DD, UTC)",
        },
    },
    ["query"],
)

LIKE_TWEET = obj(
    {
        "tweet_id": {"type": "string", "description": "ID of the tweet to like/unlike"},
        "action": enum(["like", "unlike"], "Whether to like or unlike the tweet"),
    },
    ["tweet_id"],
)

RETWEET = obj(
    {
        "tweet_id": {"type": "string", "description": "ID of the tweet to retweet/undo retweet"},
        "action": enum(["retweet", "undo"], "Whether to retweet or undo the retweet"),
    },
    ["tweet_id"],
)

POST_TWEET = obj(
    {
        "text": {"type": "string", "description": "The text content of the tweet"},
        "reply_to_tweet_id": {"type": "string", "description": "Optional: ID of the tweet to reply to"},
        "quote_tweet_id": {"type": "string", "description": "Optional: ID of the tweet to quote"},
        "media": MEDIA,
        "hide_link_preview": {
            "type": "boolean",
            "description": "Optional: Whether to hide link previews in the tweet",
            "default": False,
        },
    },
    ["text"],
)

GET_TRENDS = obj({})

GET_USER_RELATIONSHIPS = obj(
    {
        "username": USERNAME,
        "relationship_type": enum(["followers", "following"], "Whether to get followers or following list"),
        "count": COUNT,
    },
    ["username", "relationship_type"],
)

GET_TIMELINE = obj(
    {
        "timeline_type": enum(
            ["home", "following", "user"],
            "Type of timeline to fetch: 'home' for your personalized timeline, 'following' for "
            "tweets from people you follow, or 'user' for a specific user's timeline",
        ),
        "username": {
            "type": "string",
            "description": "Username of the user whose timeline to fetch (required only for timeline_type='user')",
        },
        "count": COUNT,
    },
    ["timeline_type"],
)

GET_LIST_TWEETS = obj(
    {
        "list_id": {"type": "string", "description": "ID of the Twitter list to fetch tweets from"},
        "count": COUNT,
    },
    ["list_id"],
)

FOLLOW_USER = obj(
    {
        "username": {"type": "string", "description": "Username of the user to follow/unfollow (without @)"},
        "action": enum(["follow", "unfollow"], "Whether to follow or unfollow the user"),
    },
    ["username"],
)

CREATE_THREAD = obj(
    {
        "tweets": {
            "type": "array",
            "description": "Array of tweet objects (at least 2) containing the content for each tweet in the thread",
            "items": obj(
                {
                    "text": {"type": "string", "description": "The text content of the tweet"},
                    "media": MEDIA,
                },
                ["text"],
            ),
        }
    },
    ["tweets"],
)
