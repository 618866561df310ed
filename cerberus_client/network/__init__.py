"""
Network components for the Cerberus client.

This package provides the HTTP client used to talk to the Cerberus API.
"""
from cerberus_client.network.client import (
    APIClient,
    error_detail,
    raise_for_unauthorized,
)

# Exportación explícita de componentes públicos
__all__ = [
    'APIClient',
    'error_detail',
    'raise_for_unauthorized',
]
