"""
Abstract interface shared by every authentication strategy, and the
token cache the concrete strategies build on.
"""
import logging
import threading

from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Callable, Optional

from cerberus_client.auth.session import session_logout
from cerberus_client.config.settings import TOKEN_HEADER_NAME, default_headers
from cerberus_client.core.common import SessionHeaders, UnauthenticatedError
from cerberus_client.core.models import TokenState, utcnow
from cerberus_client.network.client import APIClient

logger = logging.getLogger(__name__)


class Auth(ABC):
    """
    Capability interface for a Cerberus authentication strategy.

    Components that issue authenticated requests receive an Auth
    instance and use it for the token, the headers and the base URL.
    """

    @abstractmethod
    def get_token(self) -> str:
        """Returns a live token, authenticating first if needed."""
        pass

    @abstractmethod
    def is_authenticated(self) -> bool:
        """Whether a live token is currently held."""
        pass

    @abstractmethod
    def refresh(self) -> None:
        """Replaces the current token with a fresh one."""
        pass

    @abstractmethod
    def logout(self) -> None:
        """Revokes the current token on the server and forgets it."""
        pass

    @abstractmethod
    def get_headers(self) -> SessionHeaders:
        """Returns the headers for requests made with this session."""
        pass

    @abstractmethod
    def get_url(self) -> str:
        """Returns the Cerberus base URL."""
        pass


class CachedTokenAuth(Auth):
    """
    Token cache shared by the concrete strategies.

    Holds the base URL, the session headers and the TokenState, and runs
    every state change under one lock so that concurrent callers never
    observe a half-updated session. Subclasses implement get_token and
    refresh; logout goes through the shared session protocol.
    """

    def __init__(self, url: str, client: APIClient, clock: Callable[[], datetime] = utcnow):
        self._url = url
        self._client = client
        self._clock = clock
        self._headers: SessionHeaders = default_headers()
        self._state = TokenState()
        self._lock = threading.Lock()

    @property
    def expiry(self) -> Optional[datetime]:
        """Expiry of the current token, or None when no token is held."""
        return self._state.expiry

    def is_authenticated(self) -> bool:
        return self._state.is_live(self._clock())

    def get_headers(self) -> SessionHeaders:
        """
        Returns a copy of the current session headers.

        No session is required: before authentication the copy simply
        lacks the token header.
        """
        return dict(self._headers)

    def get_url(self) -> str:
        return self._url

    def logout(self) -> None:
        """
        Revokes the current token and clears it locally.

        Raises:
            UnauthenticatedError: If no token is held (no request is sent)
            UnauthorizedError: If Cerberus rejects the token
            APIError: If Cerberus does not answer 204; the token is kept
            TransportError: If Cerberus cannot be reached; the token is kept
        """
        with self._lock:
            if not self._state.token:
                raise UnauthenticatedError()
            session_logout(self._client, dict(self._headers))
            self._clear_token()
        logger.info("Sesión de Cerberus cerrada")

    def close(self) -> None:
        """Closes the underlying HTTP client."""
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _store_token(self, token: str, lease_duration: Optional[int]) -> None:
        # Llamar con el lock adquirido
        expiry = None
        if lease_duration is not None:
            expiry = self._clock() + timedelta(seconds=lease_duration)
        headers = dict(self._headers)
        headers[TOKEN_HEADER_NAME] = token
        self._state = TokenState(token=token, expiry=expiry)
        self._headers = headers

    def _clear_token(self) -> None:
        # Llamar con el lock adquirido
        headers = dict(self._headers)
        headers.pop(TOKEN_HEADER_NAME, None)
        self._state = TokenState()
        self._headers = headers
