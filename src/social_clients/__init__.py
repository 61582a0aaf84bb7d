from .base import (
    ApiKeyCredentials,
    MediaAttachment,
    Page,
    PasswordCredentials,
    SendResult,
    UpstreamClient,
    UpstreamPost,
    UpstreamProfile,
)
from .twitter import TwitterClient
from .twitter_web import TwitterWebClient

__all__ = [
    "ApiKeyCredentials",
    "MediaAttachment",
    "Page",
    "PasswordCredentials",
    "SendResult",
    "UpstreamClient",
    "UpstreamPost",
    "UpstreamProfile",
    "TwitterClient",
    "TwitterWebClient",
]
