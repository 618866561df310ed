"""
Session refresh and logout calls shared by every authentication strategy.

Both functions are single HTTP round trips with no state; callers keep
track of tokens themselves.
"""
import logging

from pydantic import ValidationError

from cerberus_client.core.common import APIError, MalformedResponseError, SessionHeaders
from cerberus_client.core.models import AUTH_USER_SUCCESS, UserAuthResponse
from cerberus_client.network.client import APIClient, error_detail, raise_for_unauthorized

logger = logging.getLogger(__name__)

REFRESH_PATH = "/v2/auth/user/refresh"
LOGOUT_PATH = "/v1/auth"


def session_refresh(client: APIClient, headers: SessionHeaders) -> UserAuthResponse:
    """
    Refreshes the session token.

    Args:
        client: API client bound to the Cerberus URL
        headers: Session headers, including the token header

    Returns:
        The parsed refresh response

    Raises:
        UnauthorizedError: On 401 or 403
        APIError: On any other non-200 status
        MalformedResponseError: If a 200 body cannot be parsed or its status
            is not "success"
        TransportError: If the request cannot be completed
    """
    response = client.get(REFRESH_PATH, headers=headers)
    raise_for_unauthorized(response)
    if response.status_code != 200:
        raise APIError(
            f"Error while trying to refresh the token. Got HTTP response code {response.status_code}",
            response.status_code, error_detail(response), response,
        )

    try:
        parsed = UserAuthResponse.model_validate_json(response.content)
    except ValidationError as e:
        raise MalformedResponseError(
            f"Error while trying to parse refresh response from Cerberus: {e}",
            response.status_code, response=response,
        ) from e
    if parsed.status != AUTH_USER_SUCCESS:
        raise MalformedResponseError(
            f"Unexpected refresh status from Cerberus: {parsed.status!r}",
            response.status_code, response=response,
        )

    logger.debug("Token de sesión renovado")
    return parsed


def session_logout(client: APIClient, headers: SessionHeaders) -> None:
    """
    Revokes the session token.

    Only HTTP 204 counts as success.

    Args:
        client: API client bound to the Cerberus URL
        headers: Session headers, including the token header

    Raises:
        UnauthorizedError: On 401 or 403
        APIError: On any status other than 204
        TransportError: If the request cannot be completed
    """
    response = client.delete(LOGOUT_PATH, headers=headers)
    raise_for_unauthorized(response)
    if response.status_code != 204:
        raise APIError(
            f"Error while trying to logout. Got HTTP response code {response.status_code}",
            response.status_code, error_detail(response), response,
        )
    logger.debug("Sesión cerrada en Cerberus")
