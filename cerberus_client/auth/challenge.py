"""
The iam-principal challenge/response exchange.

Cerberus answers an iam-principal request with a credential envelope
encrypted under a KMS key that only the claimed role can use. Decrypting
it proves the identity and yields the client token.
"""
import base64
import binascii
import logging

from pydantic import ValidationError

from cerberus_client.auth.decryptor import Decryptor
from cerberus_client.core.common import (
    AuthenticationFailed,
    CerberusError,
    DecryptionFailed,
    MalformedResponseError,
    SessionHeaders,
)
from cerberus_client.core.models import IAMAuthResponse, IntermediateAuthPayload, RoleIdentity
from cerberus_client.network.client import APIClient, error_detail, raise_for_unauthorized

logger = logging.getLogger(__name__)

IAM_PRINCIPAL_PATH = "/v2/auth/iam-principal"


def authenticate(identity: RoleIdentity, client: APIClient, decryptor: Decryptor,
                 headers: SessionHeaders) -> IAMAuthResponse:
    """
    Runs one iam-principal authentication attempt.

    Args:
        identity: Role identity being asserted
        client: API client bound to the Cerberus URL
        decryptor: Decryptor for the returned envelope
        headers: Request headers, including the client header

    Returns:
        The decrypted credential envelope

    Raises:
        TransportError: If Cerberus or KMS cannot be reached
        UnauthorizedError: On 401 or 403
        AuthenticationFailed: On any other non-200 status
        MalformedResponseError: If the response or plaintext cannot be decoded
        DecryptionFailed: If the decryptor fails
    """
    response = client.post(IAM_PRINCIPAL_PATH, headers=headers, json={"region": identity.region})
    raise_for_unauthorized(response)
    if response.status_code != 200:
        raise AuthenticationFailed(response.status_code, error_detail(response), response)

    try:
        payload = IntermediateAuthPayload.model_validate_json(response.content)
    except ValidationError as e:
        raise MalformedResponseError(
            f"Error while trying to parse response from Cerberus: {e}",
            response.status_code, response=response,
        ) from e

    try:
        ciphertext = base64.b64decode(payload.auth_data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedResponseError(
            f"Invalid authentication data returned from Cerberus: {e}",
            response.status_code, response=response,
        ) from e

    try:
        plaintext = decryptor.decrypt(ciphertext)
    except CerberusError:
        raise
    except Exception as e:
        # Decryptors de terceros pueden lanzar cualquier excepción
        raise DecryptionFailed(f"Error while decrypting response: {e}") from e

    try:
        envelope = IAMAuthResponse.model_validate_json(plaintext)
    except ValidationError as e:
        raise MalformedResponseError(f"Error while parsing decrypted response: {e}") from e

    logger.debug(f"Autenticado como {identity.role_arn}, lease de {envelope.lease_duration}s")
    return envelope
