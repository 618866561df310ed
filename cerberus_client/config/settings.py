"""
Default values and configuration resolution for the Cerberus client.
"""
import os

from typing import Optional

from cerberus_client import __version__

# Environment variable that overrides any URL passed explicitly
CERBERUS_URL_ENV = "CERBERUS_URL"
CERBERUS_TOKEN_ENV = "CERBERUS_TOKEN"
REGION_ENV = "AWS_REGION"

# Header names understood by the service
CLIENT_HEADER_NAME = "X-Cerberus-Client"
TOKEN_HEADER_NAME = "X-Vault-Token"
CLIENT_HEADER = f"CerberusPythonClient/{__version__}"

DEFAULT_TIMEOUT = 10.0  # seconds

# Instance metadata service
IMDS_URL = "http://169.254.169.254"
IMDS_TIMEOUT = 2.0
IMDS_TOKEN_TTL_SECONDS = 21600

ASSUME_ROLE_SESSION_NAME = "cerberus-python-client"


def resolve_url(explicit_url: Optional[str] = None) -> str:
    """
    Resolves the Cerberus base URL.

    The explicit value is used unless the CERBERUS_URL environment variable
    is set to a non-empty value, which always wins.

    Args:
        explicit_url: URL supplied by the caller

    Returns:
        The URL to validate and use (possibly empty)
    """
    env_url = os.environ.get(CERBERUS_URL_ENV, "")
    if env_url:
        return env_url
    return explicit_url or ""


def default_headers() -> dict:
    """Headers sent on every request before authentication."""
    return {
        CLIENT_HEADER_NAME: CLIENT_HEADER,
        "Content-Type": "application/json",
    }


def resolve_token(explicit_token: Optional[str] = None) -> str:
    """
    Resolves a pre-issued Cerberus token.

    Same order as resolve_url: CERBERUS_TOKEN, when set, wins over the
    explicit value.
    """
    env_token = os.environ.get(CERBERUS_TOKEN_ENV, "")
    if env_token:
        return env_token
    return explicit_token or ""
