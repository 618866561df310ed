"""
General utilities for the Cerberus client.

This package provides URL validation and logging helpers shared by the
client components.
"""
from cerberus_client.utils.url import validate_url
from cerberus_client.utils.logging import (
    VERBOSE,
    setup_logger,
    get_logger,
    set_log_level,
)

# Exportación explícita de componentes públicos
__all__ = [
    'validate_url',
    'VERBOSE',
    'setup_logger',
    'get_logger',
    'set_log_level',
]
