"""
HTTP client for communication with the Cerberus API.
"""
import time
import logging
import httpx

from typing import Dict, Any, Optional
from urllib.parse import urljoin
from httpx import Response, ReadTimeout, WriteTimeout, PoolTimeout, ConnectTimeout

from cerberus_client.config.settings import DEFAULT_TIMEOUT
from cerberus_client.core.common import TransportError, UnauthorizedError

logger = logging.getLogger(__name__)


def error_detail(response: Response) -> Optional[str]:
    """
    Extracts a short error description from a response body.

    Args:
        response: HTTP response

    Returns:
        The "errors"/"message"/"detail" field of a JSON body, or the
        first 200 characters of the raw text
    """
    try:
        json_data = response.json()
        if isinstance(json_data, dict):
            detail = (
                json_data.get('errors') or
                json_data.get('message') or
                json_data.get('detail')
            )
            return str(detail) if detail else None
    except ValueError:
        pass
    text = response.text or ""
    return text[:200] + ('...' if len(text) > 200 else '') or None


def raise_for_unauthorized(response: Response) -> None:
    """
    Raises UnauthorizedError for 401 and 403 responses.

    Every Cerberus endpoint maps these two codes the same way, while the
    handling of other codes depends on the endpoint.
    """
    if response.status_code in (401, 403):
        detail = error_detail(response)
        logger.debug(f"Cerberus rechazó la petición ({response.status_code}): {detail or ''}")
        raise UnauthorizedError(response.status_code, detail, response)


class APIClient:
    """HTTP client bound to one Cerberus base URL."""

    def __init__(self, base_url: str, default_timeout: float = DEFAULT_TIMEOUT,
                 verify_ssl: bool = True, transport: Optional[httpx.BaseTransport] = None):
        """
        Initializes the API client.

        Args:
            base_url: Validated base URL for all requests
            default_timeout: Request timeout in seconds
            verify_ssl: Whether to verify the SSL certificate
            transport: Optional httpx transport (tests pass httpx.MockTransport)
        """
        # Normalizar URL base para asegurar que termina con '/'
        self.base_url = base_url if base_url.endswith('/') else base_url + '/'
        self.default_timeout = default_timeout

        self.session = httpx.Client(
            timeout=httpx.Timeout(timeout=default_timeout),
            verify=verify_ssl,
            transport=transport,
        )

        logger.debug(f"Cliente API inicializado con base_url={base_url}, timeout={default_timeout}s")

    def close(self) -> None:
        """Closes the HTTP session."""
        self.session.close()

    def __enter__(self) -> "APIClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def get_full_url(self, endpoint: str) -> str:
        """
        Builds the full URL for an endpoint.

        Args:
            endpoint: Path of the endpoint, e.g. "/v1/auth"

        Returns:
            Absolute URL
        """
        endpoint = endpoint.lstrip('/')
        return urljoin(self.base_url, endpoint)

    def request(self, method: str, endpoint: str, *,
                headers: Optional[Dict[str, str]] = None,
                json: Optional[Any] = None) -> Response:
        """
        Sends a single HTTP request.

        The response is returned whatever its status code: each Cerberus
        operation maps status codes differently. Nothing is retried.

        Args:
            method: HTTP method
            endpoint: Path of the endpoint
            headers: Request headers
            json: Body to send as JSON

        Returns:
            HTTP response

        Raises:
            TransportError: If the request could not be completed
        """
        url = self.get_full_url(endpoint)
        start_time = time.time()

        try:
            logger.debug(f"Enviando petición {method} a {url}")
            response = self.session.request(method=method, url=url, headers=headers, json=json)
        except (ConnectTimeout, ReadTimeout, WriteTimeout, PoolTimeout) as e:
            elapsed = time.time() - start_time
            logger.debug(f"Timeout en petición a {url} después de {elapsed:.3f}s: {e}")
            raise TransportError(
                f"Problem while performing request to Cerberus: request to {endpoint} timed out"
            ) from e
        except httpx.HTTPError as e:
            logger.debug(f"Error de conexión a {url}: {e}")
            raise TransportError(f"Problem while performing request to Cerberus: {e}") from e

        elapsed = time.time() - start_time
        logger.debug(f"Petición completada en {elapsed:.3f}s con estado {response.status_code}")
        return response

    def get(self, endpoint: str, **kwargs) -> Response:
        """Sends a GET request."""
        return self.request("GET", endpoint, **kwargs)

    def post(self, endpoint: str, **kwargs) -> Response:
        """Sends a POST request."""
        return self.request("POST", endpoint, **kwargs)

    def delete(self, endpoint: str, **kwargs) -> Response:
        """Sends a DELETE request."""
        return self.request("DELETE", endpoint, **kwargs)
