"""Lifecycle of the single authenticated upstream session."""

import enum
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from social_clients import UpstreamClient

from .errors import FatalError, NotReadyError

logger = logging.getLogger("twitter_mcp.session")

LoginFn = Callable[[], Awaitable[UpstreamClient]]


class SessionState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    AUTHENTICATING_PRIMARY = "authenticating_primary"
    AUTHENTICATING_FALLBACK = "authenticating_fallback"
    AUTHENTICATED = "authenticated"
    FAILED = "failed"


@dataclass(frozen=True)
class Session:
    handle: UpstreamClient
    tier: str


class SessionManager:
    """
    Owns the one upstream handle of the process.

    ``initialize`` tries the primary login (account credentials), then the
    fallback login (API keys). A tier without configured credentials is passed
    as ``None`` and skipped. Once authenticated the handle never changes;
    there is no re-authentication, so an expired session surfaces as ordinary
    per-call errors.
    """

    def __init__(self, primary: Optional[LoginFn], fallback: Optional[LoginFn]):
        self._primary = primary
        self._fallback = fallback
        self._state = SessionState.UNINITIALIZED
        self._session: Optional[Session] = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_authenticated(self) -> bool:
        return self._state is SessionState.AUTHENTICATED

    async def initialize(self) -> Session:
        if self._state is SessionState.AUTHENTICATED:
            return self._session
        if self._state is not SessionState.UNINITIALIZED:
            raise FatalError(f"Session cannot be initialized from state {self._state.value}")

        self._state = SessionState.AUTHENTICATING_PRIMARY
        if self._primary is None:
            logger.info("No username/password configured, skipping to API keys")
        else:
            try:
                handle = await self._primary()
                return self._authenticated(handle, "password")
            except Exception as e:
                logger.warning(f"Username/password login failed, falling back to API keys: {e}")

        self._state = SessionState.AUTHENTICATING_FALLBACK
        if self._fallback is None:
            self._state = SessionState.FAILED
            raise FatalError("Failed to authenticate with Twitter: no usable credentials configured")
        try:
            handle = await self._fallback()
        except Exception as e:
            self._state = SessionState.FAILED
            raise FatalError(f"Failed to authenticate with Twitter: {e}") from e
        return self._authenticated(handle, "api_keys")

    def _authenticated(self, handle: UpstreamClient, tier: str) -> Session:
        self._session = Session(handle=handle, tier=tier)
        self._state = SessionState.AUTHENTICATED
        logger.info(f"Successfully authenticated with Twitter ({tier})")
        return self._session

    def current_handle(self) -> UpstreamClient:
        if self._session is None or not self.is_authenticated:
            raise NotReadyError("Twitter API is not properly initialized. Please check the server logs.")
        return self._session.handle
