"""Twitter API client implementing the UpstreamClient protocol."""

from ..base import ApiKeyCredentials
from .auth import AuthMixin
from .engagement import EngagementMixin
from .posting import PostingMixin
from .reading import ReadingMixin


class TwitterClient(AuthMixin, ReadingMixin, EngagementMixin, PostingMixin):
    """
    Twitter/X client authenticated with OAuth 1.0a API keys.

    Uses tweepy to handle the complexity of mixing v1.1 and v2 APIs:
    - v1.1 API for media uploads and trends (via tweepy.API)
    - v2 API for reads, engagement and tweet creation (via tweepy.Client)
    """

    def __init__(self, credentials: ApiKeyCredentials):
        AuthMixin.__init__(self, credentials)
        # The other mixins don't have __init__

    @classmethod
    async def connect(cls, credentials: ApiKeyCredentials) -> "TwitterClient":
        """Create a client and log in; raises when the keys are rejected."""
        client = cls(credentials)
        await client.login()
        return client
