"""
Core elements shared across the Cerberus client.

This module contains common elements used throughout the client, including:
- Logging system configuration
- Common type aliases
- The exception hierarchy raised by every component

Every failure in the client is raised as a subclass of CerberusError,
so callers can catch all client errors with a single except block.
"""
import logging
from typing import Dict, Optional, Any

# Global logging configuration
logger = logging.getLogger("cerberus_client")
logger.addHandler(logging.NullHandler())

# Type aliases
SessionHeaders = Dict[str, str]
"""
Mapping of HTTP header name to value sent on authenticated requests.

Example:
```python
headers: SessionHeaders = {
    "X-Cerberus-Client": "CerberusPythonClient/1.0.0",
    "Content-Type": "application/json",
    "X-Vault-Token": "a-cool-token",
}
```
"""


class CerberusError(Exception):
    """
    Base exception for all Cerberus client errors.

    Example:
    ```python
    try:
        token = auth.get_token()
    except CerberusError as e:
        print(f"Cerberus error: {e}")
    ```
    """
    pass


class ConfigurationError(CerberusError):
    """
    Invalid or missing construction parameters.

    Raised for an empty region, an empty URL or a URL that is not an
    absolute http(s) URL without a path. Never retried automatically.
    """
    pass


class IdentityResolutionError(CerberusError):
    """
    The caller's cloud identity could not be resolved.

    Raised when the instance metadata service cannot be reached or
    does not report an instance profile, or when the delegated
    credentials for the role cannot be set up.
    """
    pass


class UnauthenticatedError(CerberusError):
    """The operation needs a session and none has been established."""

    def __init__(self, message: str = "No session: authenticate before calling this operation"):
        super().__init__(message)


class DecryptionFailed(CerberusError):
    """The key-management service rejected or failed the decrypt call."""
    pass


class APIError(CerberusError):
    """
    Error related to communication with the Cerberus API.

    Example:
    ```python
    try:
        auth.refresh()
    except APIError as e:
        if e.status_code == 500:
            print("Cerberus is having trouble")
    ```
    """
    def __init__(self, message: str, status_code: Optional[int] = None,
                 detail: Optional[str] = None, response: Optional[Any] = None):
        """
        Initialize an APIError exception.

        Args:
            message: Descriptive error message
            status_code: Optional HTTP status code
            detail: Error detail extracted from the response body
            response: The httpx response, if one was received
        """
        self.message = message
        self.status_code = status_code
        self.detail = detail
        self.response = response
        super().__init__(message)


class UnauthorizedError(APIError):
    """Cerberus answered 401 or 403: the identity or token was rejected."""

    def __init__(self, status_code: Optional[int] = None, detail: Optional[str] = None,
                 response: Optional[Any] = None):
        super().__init__("Unauthorized: Cerberus rejected the supplied credentials",
                         status_code, detail, response)


class AuthenticationFailed(APIError):
    """The authentication endpoint answered with an unexpected status code."""

    def __init__(self, status_code: int, detail: Optional[str] = None,
                 response: Optional[Any] = None):
        super().__init__(
            f"Error while trying to authenticate. Got HTTP response code {status_code}",
            status_code, detail, response,
        )


class TransportError(APIError):
    """Network-level failure reaching Cerberus or the key-management service."""
    pass


class MalformedResponseError(APIError):
    """A successful response whose body could not be decoded."""
    pass
