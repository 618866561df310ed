"""
Authentication to Cerberus with the IAM role of the running instance.
"""
import logging

from datetime import datetime
from typing import Callable, Optional

import httpx

from cerberus_client.auth.base import CachedTokenAuth
from cerberus_client.auth.challenge import authenticate
from cerberus_client.auth.decryptor import Decryptor
from cerberus_client.auth.identity import IdentityResolver
from cerberus_client.config.settings import DEFAULT_TIMEOUT, TOKEN_HEADER_NAME, resolve_url
from cerberus_client.core.common import ConfigurationError, UnauthenticatedError
from cerberus_client.core.models import AttemptOutcome, RoleIdentity, utcnow
from cerberus_client.network.client import APIClient
from cerberus_client.utils.url import validate_url

logger = logging.getLogger(__name__)


class AWSAuth(CachedTokenAuth):
    """
    Authenticates to Cerberus as the instance's IAM role.

    The token is cached until its lease runs out. One instance can be
    shared between threads: at most one authentication exchange runs at
    a time and concurrent callers all observe its outcome.

    Example:
    ```python
    from cerberus_client import AWSAuth

    auth = AWSAuth("https://cerberus.example.com", "us-west-2")
    token = auth.get_token()
    headers = auth.get_headers()
    ```
    """

    def __init__(
        self,
        url: Optional[str],
        region: str,
        *,
        resolver: Optional[IdentityResolver] = None,
        decryptor: Optional[Decryptor] = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        """
        Builds the authenticator and resolves the role identity.

        If the CERBERUS_URL environment variable is set, it is used over
        the url argument.

        Args:
            url: Cerberus base URL, without a path
            region: AWS region of the KMS key
            resolver: Identity resolver (defaults to instance metadata + STS)
            decryptor: Envelope decryptor (defaults to KMS with the role's credentials)
            timeout: HTTP timeout in seconds
            transport: Optional httpx transport for the Cerberus client
            clock: Returns the current UTC time

        Raises:
            ConfigurationError: If the region or URL is missing or invalid
            IdentityResolutionError: If the role identity cannot be resolved
        """
        if not region:
            raise ConfigurationError("Region should not be empty")
        resolved_url = resolve_url(url)
        if not resolved_url:
            raise ConfigurationError("Cerberus URL cannot be empty")
        base_url = validate_url(resolved_url)

        resolver = resolver or IdentityResolver()
        self.identity: RoleIdentity = resolver.resolve(region)
        self._decryptor = decryptor or resolver.kms_decryptor(self.identity)

        super().__init__(base_url, APIClient(base_url, timeout, transport=transport), clock)
        # Intentos de autenticación terminados y el resultado del último
        self._attempts = 0
        self._last_attempt = AttemptOutcome()
        logger.debug(f"AWSAuth creado para {self.identity.role_arn} contra {base_url}")

    @property
    def region(self) -> str:
        return self.identity.region

    def get_token(self) -> str:
        """
        Returns the cached token, authenticating first if it is not live.

        Callers that queue up while an exchange is running receive that
        exchange's outcome: its token, or the exception it raised.

        Raises:
            UnauthorizedError: If Cerberus rejects the role
            AuthenticationFailed: On any other non-200 status
            MalformedResponseError: If the response cannot be decoded
            DecryptionFailed: If the envelope cannot be decrypted
            TransportError: If Cerberus or KMS cannot be reached
        """
        state = self._state
        if state.is_live(self._clock()):
            return state.token
        seen_attempts = self._attempts
        with self._lock:
            # Otro hilo completó un intento mientras esperábamos
            if self._attempts != seen_attempts:
                return self._last_attempt.result()
            state = self._state
            if state.is_live(self._clock()):
                return state.token
            return self._run_attempt()

    def refresh(self) -> None:
        """
        Re-authenticates, replacing the token whether or not it is live.

        Cerberus caps how many times a token may be refreshed, so a fresh
        iam-principal exchange is used instead of the refresh endpoint.

        Raises:
            UnauthenticatedError: If no token was ever obtained (no request is sent)
            UnauthorizedError, AuthenticationFailed, MalformedResponseError,
            DecryptionFailed, TransportError: As for get_token
        """
        with self._lock:
            if not self._state.token:
                raise UnauthenticatedError()
            self._run_attempt()

    def _run_attempt(self) -> str:
        # Llamar con el lock adquirido
        try:
            token = self._authenticate()
        except Exception as e:
            self._finish_attempt(AttemptOutcome(error=e))
            raise
        self._finish_attempt(AttemptOutcome(token=token))
        return token

    def _finish_attempt(self, outcome: AttemptOutcome) -> None:
        self._last_attempt = outcome
        self._attempts += 1

    def _authenticate(self) -> str:
        # Llamar con el lock adquirido
        request_headers = {k: v for k, v in self._headers.items() if k != TOKEN_HEADER_NAME}
        envelope = authenticate(self.identity, self._client, self._decryptor, request_headers)
        self._store_token(envelope.client_token, envelope.lease_duration)
        logger.info(f"Autenticado en Cerberus como {self.identity.role_arn}")
        return envelope.client_token
