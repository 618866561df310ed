"""
Authentication to Cerberus with a token obtained elsewhere.
"""
import logging

from datetime import datetime
from typing import Callable, Optional

import httpx

from cerberus_client.auth.base import CachedTokenAuth
from cerberus_client.auth.session import session_refresh
from cerberus_client.config.settings import DEFAULT_TIMEOUT, resolve_token, resolve_url
from cerberus_client.core.common import ConfigurationError, UnauthenticatedError
from cerberus_client.core.models import utcnow
from cerberus_client.network.client import APIClient
from cerberus_client.utils.url import validate_url

logger = logging.getLogger(__name__)


class TokenAuth(CachedTokenAuth):
    """
    Uses an existing Cerberus token, e.g. one issued to a user.

    The lifetime of the initial token is unknown, so it counts as live
    until a refresh reports a lease or a logout clears it. The token
    cannot be re-obtained once cleared.
    """

    def __init__(
        self,
        url: Optional[str],
        token: Optional[str] = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        """
        Args:
            url: Cerberus base URL (CERBERUS_URL wins when set)
            token: Token to use (CERBERUS_TOKEN wins when set)
            timeout: HTTP timeout in seconds
            transport: Optional httpx transport
            clock: Returns the current UTC time

        Raises:
            ConfigurationError: If the URL or token is missing or invalid
        """
        resolved_url = resolve_url(url)
        if not resolved_url:
            raise ConfigurationError("Cerberus URL cannot be empty")
        base_url = validate_url(resolved_url)
        resolved_token = resolve_token(token)
        if not resolved_token:
            raise ConfigurationError("Token cannot be empty")

        super().__init__(base_url, APIClient(base_url, timeout, transport=transport), clock)
        with self._lock:
            self._store_token(resolved_token, None)

    def _is_live(self, state) -> bool:
        if not state.token:
            return False
        return state.expiry is None or self._clock() < state.expiry

    def is_authenticated(self) -> bool:
        return self._is_live(self._state)

    def get_token(self) -> str:
        """
        Returns the token.

        Raises:
            UnauthenticatedError: If the token was cleared or its lease ran out
        """
        state = self._state
        if not self._is_live(state):
            raise UnauthenticatedError("Token is not set or has expired")
        return state.token

    def refresh(self) -> None:
        """
        Exchanges the token for a new one through the session refresh endpoint.

        Raises:
            UnauthenticatedError: If no token is held (no request is sent)
            UnauthorizedError: If Cerberus rejects the token
            APIError: On any other non-200 status
            MalformedResponseError: If the response cannot be decoded
            TransportError: If Cerberus cannot be reached
        """
        with self._lock:
            if not self._state.token:
                raise UnauthenticatedError()
            response = session_refresh(self._client, dict(self._headers))
            client_token = response.data.client_token
            self._store_token(client_token.client_token, client_token.lease_duration)
        logger.info("Token de Cerberus renovado")
