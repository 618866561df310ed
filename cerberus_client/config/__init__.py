"""
Configuration for the Cerberus client.

This package holds default values and the resolution order for
values that can come from arguments or the environment.
"""
from .settings import (
    CERBERUS_URL_ENV,
    CERBERUS_TOKEN_ENV,
    CLIENT_HEADER,
    CLIENT_HEADER_NAME,
    TOKEN_HEADER_NAME,
    DEFAULT_TIMEOUT,
    resolve_url,
    resolve_token,
    default_headers,
)

# Exportación explícita de componentes públicos
__all__ = [
    'CERBERUS_URL_ENV',
    'CERBERUS_TOKEN_ENV',
    'CLIENT_HEADER',
    'CLIENT_HEADER_NAME',
    'TOKEN_HEADER_NAME',
    'DEFAULT_TIMEOUT',
    'resolve_url',
    'resolve_token',
    'default_headers',
]
