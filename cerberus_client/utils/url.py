"""
URL validation for the Cerberus base URL.
"""
from urllib.parse import urlsplit

from cerberus_client.core.common import ConfigurationError


def validate_url(raw_url: str) -> str:
    """
    Validates a Cerberus base URL.

    The URL must be absolute (http or https, with a host) and must not
    carry a path other than "/", a query or a fragment.

    Args:
        raw_url: URL to validate

    Returns:
        The URL without a trailing slash

    Raises:
        ConfigurationError: If the URL is empty or invalid
    """
    if not raw_url:
        raise ConfigurationError("Cerberus URL cannot be empty")

    try:
        parts = urlsplit(raw_url)
        # Acceder al puerto valida que sea numérico
        parts.port
    except ValueError as e:
        raise ConfigurationError(f"Unable to parse Cerberus URL {raw_url!r}: {e}") from e

    if parts.scheme not in ("http", "https") or not parts.hostname:
        raise ConfigurationError(f"Cerberus URL must be an absolute http(s) URL: {raw_url!r}")
    if parts.path not in ("", "/"):
        raise ConfigurationError(f"Cerberus URL should not have a path: {raw_url!r}")
    if parts.query or parts.fragment:
        raise ConfigurationError(f"Cerberus URL should not have a query or fragment: {raw_url!r}")

    return f"{parts.scheme}://{parts.netloc}"
