"""
Cerberus client.

This package authenticates to the Cerberus secrets-management service,
either with the IAM role of the running instance or with an existing
token, and keeps the resulting session token fresh.
"""
import logging
from typing import Optional

__version__ = "1.0.0"

# Configuración básica de logging
logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

from cerberus_client.auth import Auth, AWSAuth, TokenAuth
from cerberus_client.config.settings import resolve_token
from cerberus_client.core.common import (
    CerberusError,
    ConfigurationError,
    IdentityResolutionError,
    UnauthenticatedError,
    DecryptionFailed,
    APIError,
    UnauthorizedError,
    AuthenticationFailed,
    TransportError,
    MalformedResponseError,
)

# Exportación explícita de componentes públicos
__all__ = [
    'init',
    'Auth',
    'AWSAuth',
    'TokenAuth',
    'CerberusError',
    'ConfigurationError',
    'IdentityResolutionError',
    'UnauthenticatedError',
    'DecryptionFailed',
    'APIError',
    'UnauthorizedError',
    'AuthenticationFailed',
    'TransportError',
    'MalformedResponseError',
    '__version__',
]


def init(url: Optional[str] = None, region: Optional[str] = None,
         token: Optional[str] = None) -> Auth:
    """
    Builds the authentication strategy for the given arguments.

    A token (argument or CERBERUS_TOKEN) selects TokenAuth; otherwise the
    instance's IAM role is used through AWSAuth.

    Args:
        url: Cerberus base URL (CERBERUS_URL wins when set)
        region: AWS region, required for AWSAuth
        token: Existing Cerberus token

    Returns:
        An Auth instance owned by the caller
    """
    if resolve_token(token):
        return TokenAuth(url, token)
    return AWSAuth(url, region or "")
