from dataclasses import dataclass, field
from datetime import datetime
from typing import (
    Any,
    AsyncIterator,
    Dict,
    Generic,
    List,
    Optional,
    Protocol,
    TypeVar,
)

T = TypeVar("T")

# Upper bound on items requested from the platform per page
MAX_PAGE_SIZE = 50


@dataclass
class UpstreamPost:
    """A post as returned by an upstream client, before normalization.

    Every field except ``id`` is optional: the web and API backends expose
    different subsets, and the formatter fills the gaps with defaults.
    """

    id: str
    text: Optional[str] = None
    user_id: Optional[str] = None
    username: Optional[str] = None
    name: Optional[str] = None
    created_at: Optional[datetime] = None
    likes: Optional[int] = None
    reposts: Optional[int] = None
    replies: Optional[int] = None
    views: Optional[int] = None
    urls: List[str] = field(default_factory=list)
    hashtags: List[str] = field(default_factory=list)
    is_repost: bool = False
    is_reply: bool = False


@dataclass
class UpstreamProfile:
    """A user profile as returned by an upstream client."""

    user_id: str
    username: Optional[str] = None
    name: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    joined: Optional[datetime] = None
    post_count: Optional[int] = None
    followers: Optional[int] = None
    following: Optional[int] = None
    likes: Optional[int] = None
    listed: Optional[int] = None
    is_verified: bool = False
    is_blue_verified: bool = False
    is_private: bool = False
    avatar: Optional[str] = None
    banner: Optional[str] = None


@dataclass
class Page(Generic[T]):
    """One page of a paginated upstream response."""

    items: List[T]
    next_cursor: Optional[str] = None


@dataclass
class MediaAttachment:
    """Decoded media bytes ready for upload. Lives for one submission only."""

    data: bytes
    mime_type: str

    @property
    def is_video(self) -> bool:
        return self.mime_type.startswith("video/")


@dataclass
class SendResult:
    """
    Outcome of a post submission.

    Backends report rejected submissions with ``ok=False`` instead of raising,
    so callers can tell a refused post from a transport fault. ``payload`` is
    the raw response body; the created post id lives somewhere inside it.
    """

    ok: bool
    payload: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None


@dataclass(frozen=True)
class PasswordCredentials:
    """Account login used by the web client."""

    username: str
    password: str
    email: Optional[str] = None


@dataclass(frozen=True)
class ApiKeyCredentials:
    """OAuth 1.0a user-context keys used by the API client."""

    api_key: str
    api_secret: str
    access_token: str
    access_token_secret: str


class UpstreamClient(Protocol):
    """
    Authenticated Twitter/X client used by the tool handlers.

    Notes:
    - Lazy sequences (``iter_*``, ``search_posts``) fetch pages on demand and may
      be effectively unbounded; callers decide when to stop pulling. ``page_size``
      is a hint for how many items to request per page, never above
      ``MAX_PAGE_SIZE``.
    - Errors: implementations raise on transport, auth and platform errors, with
      the exception of ``send_post`` which returns ``SendResult(ok=False)`` when
      the platform rejects the post.
    """

    # Users
    async def get_user_id(self, username: str) -> str:
        ...

    async def get_profile(self, username: str) -> UpstreamProfile:
        ...

    def iter_followers(self, user_id: str, page_size: int = MAX_PAGE_SIZE) -> AsyncIterator[UpstreamProfile]:
        ...

    def iter_following(self, user_id: str, page_size: int = MAX_PAGE_SIZE) -> AsyncIterator[UpstreamProfile]:
        ...

    async def follow(self, user_id: str) -> None:
        ...

    async def unfollow(self, user_id: str) -> None:
        ...

    # Reading
    def iter_user_posts(self, user_id: str, page_size: int = MAX_PAGE_SIZE) -> AsyncIterator[UpstreamPost]:
        ...

    def search_posts(self, query: str, mode: str, page_size: int = MAX_PAGE_SIZE) -> AsyncIterator[UpstreamPost]:
        """Search posts; ``mode`` is ``"latest"`` or ``"top"``."""
        ...

    async def fetch_home_timeline(self, count: int) -> List[UpstreamPost]:
        ...

    async def fetch_following_timeline(self, count: int) -> List[UpstreamPost]:
        ...

    async def fetch_list_posts(self, list_id: str, count: int) -> Page[UpstreamPost]:
        ...

    async def get_trends(self) -> List[str]:
        ...

    # Engagement
    async def like(self, post_id: str) -> None:
        ...

    async def unlike(self, post_id: str) -> None:
        ...

    async def repost(self, post_id: str) -> None:
        ...

    async def undo_repost(self, post_id: str) -> None:
        ...

    # Posting
    async def send_post(
        self,
        text: str,
        reply_to: Optional[str] = None,
        quote_of: Optional[str] = None,
        media: Optional[List[MediaAttachment]] = None,
        hide_link_preview: bool = False,
    ) -> SendResult:
        ...
