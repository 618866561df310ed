"""
Decryptors for the envelope returned by the iam-principal exchange.

Cerberus encrypts the credential envelope with a KMS key the caller's
role can use; a decryptor turns that ciphertext back into plaintext.
"""
import logging

from abc import ABC, abstractmethod
from typing import Any, Union

from botocore.exceptions import BotoCoreError, ClientError, HTTPClientError
from botocore.exceptions import ConnectionError as BotoConnectionError
from cryptography.fernet import Fernet, InvalidToken

from cerberus_client.core.common import DecryptionFailed, TransportError

logger = logging.getLogger(__name__)


class Decryptor(ABC):
    """Decrypts ciphertext with key material the caller has access to."""

    @abstractmethod
    def decrypt(self, ciphertext: bytes) -> bytes:
        """
        Decrypts ciphertext.

        Args:
            ciphertext: Encrypted bytes

        Returns:
            Plaintext bytes

        Raises:
            DecryptionFailed: If the data cannot be decrypted
        """
        pass


class KMSDecryptor(Decryptor):
    """Decryptor backed by an AWS KMS client."""

    def __init__(self, kms_client: Any):
        """
        Args:
            kms_client: boto3 KMS client created with the delegated credentials
        """
        self.kms_client = kms_client

    def decrypt(self, ciphertext: bytes) -> bytes:
        try:
            result = self.kms_client.decrypt(CiphertextBlob=ciphertext)
        except (HTTPClientError, BotoConnectionError) as e:
            raise TransportError(f"Problem while reaching KMS: {e}") from e
        except (ClientError, BotoCoreError) as e:
            raise DecryptionFailed(f"Error while decrypting response: {e}") from e
        return result["Plaintext"]


class LocalKeyDecryptor(Decryptor):
    """
    Decryptor using a local Fernet key.

    Lets the authentication flow run against a development Cerberus that
    encrypts the envelope with a shared key instead of KMS.
    """

    def __init__(self, key: Union[str, bytes]):
        """
        Args:
            key: Fernet key in urlsafe base64 format
        """
        if isinstance(key, str):
            key = key.encode()
        self.cipher = Fernet(key)

    def decrypt(self, ciphertext: bytes) -> bytes:
        try:
            # Fernet espera el token en base64 urlsafe
            return self.cipher.decrypt(ciphertext)
        except InvalidToken as e:
            logger.debug("Token inválido o datos corruptos")
            raise DecryptionFailed("Error while decrypting response: invalid token or corrupt data") from e
