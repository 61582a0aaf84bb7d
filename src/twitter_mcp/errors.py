"""Error taxonomy for tool dispatch and the session lifecycle."""


class TwitterMCPError(Exception):
    """Base class for errors raised by this server."""


class ValidationError(TwitterMCPError):
    """A tool argument is missing or malformed. Raised before any network call."""


class NotReadyError(TwitterMCPError):
    """The upstream session is not authenticated."""


class UpstreamError(TwitterMCPError):
    """The upstream platform refused or failed an operation."""


class FatalError(TwitterMCPError):
    """Both login tiers failed; the process must not serve tool calls."""
