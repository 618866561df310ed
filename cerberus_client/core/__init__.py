"""
Cerberus client core components.

This package contains the exception hierarchy and the data models
shared by every authentication strategy.
"""
from cerberus_client.core.common import (
    logger,
    SessionHeaders,
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
from cerberus_client.core.models import (
    AUTH_USER_SUCCESS,
    RoleIdentity,
    IntermediateAuthPayload,
    IAMAuthResponse,
    UserMetadata,
    UserClientToken,
    UserAuthData,
    UserAuthResponse,
    TokenState,
    AttemptOutcome,
)

# Exportación explícita de componentes públicos
__all__ = [
    'logger',
    'SessionHeaders',
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
    'AUTH_USER_SUCCESS',
    'RoleIdentity',
    'IntermediateAuthPayload',
    'IAMAuthResponse',
    'UserMetadata',
    'UserClientToken',
    'UserAuthData',
    'UserAuthResponse',
    'TokenState',
    'AttemptOutcome',
]
