"""
Resolution of the caller's IAM role from the EC2 instance metadata service.

The instance profile reported by the metadata service is turned into the
matching role ARN, and a boto3 session assuming that role provides the
credentials used for every KMS call.
"""
import json
import logging
import httpx

from typing import Callable, Optional

import boto3
from botocore.credentials import CredentialProvider, CredentialResolver, DeferredRefreshableCredentials
from botocore.exceptions import BotoCoreError
from botocore.session import get_session

from cerberus_client.auth.decryptor import KMSDecryptor
from cerberus_client.config.settings import (
    ASSUME_ROLE_SESSION_NAME,
    IMDS_TIMEOUT,
    IMDS_TOKEN_TTL_SECONDS,
    IMDS_URL,
)
from cerberus_client.core.common import ConfigurationError, IdentityResolutionError
from cerberus_client.core.models import RoleIdentity

logger = logging.getLogger(__name__)

IMDS_TOKEN_PATH = "/latest/api/token"
IMDS_IAM_INFO_PATH = "/latest/meta-data/iam/info"


def role_arn_from_instance_profile(instance_profile_arn: str) -> str:
    """
    Rewrites an instance profile ARN into the role ARN with the same name.

    "arn:aws:iam::1111:instance-profile/app" becomes "arn:aws:iam::1111:role/app".
    Only the first occurrence of the segment is replaced.
    """
    return instance_profile_arn.replace(":instance-profile/", ":role/", 1)


class InstanceMetadataClient:
    """Minimal reader for the EC2 instance metadata service."""

    def __init__(self, base_url: str = IMDS_URL, timeout: float = IMDS_TIMEOUT,
                 transport: Optional[httpx.BaseTransport] = None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.transport = transport

    def _session_token(self, client: httpx.Client) -> Optional[str]:
        # IMDSv2; si falla se intenta IMDSv1 sin token
        try:
            response = client.put(
                f"{self.base_url}{IMDS_TOKEN_PATH}",
                headers={"X-aws-ec2-metadata-token-ttl-seconds": str(IMDS_TOKEN_TTL_SECONDS)},
            )
        except httpx.HTTPError as e:
            logger.debug(f"No se pudo obtener token IMDSv2: {e}")
            return None
        if response.status_code != 200:
            logger.debug(f"Token IMDSv2 no disponible (estado {response.status_code})")
            return None
        return response.text

    def get_instance_profile_arn(self) -> str:
        """
        Reads the instance profile ARN of the running instance.

        Returns:
            The InstanceProfileArn reported by the metadata service

        Raises:
            IdentityResolutionError: If the metadata service is unreachable
                or reports no instance profile
        """
        with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
            headers = {}
            token = self._session_token(client)
            if token:
                headers["X-aws-ec2-metadata-token"] = token
            try:
                response = client.get(f"{self.base_url}{IMDS_IAM_INFO_PATH}", headers=headers)
            except httpx.HTTPError as e:
                raise IdentityResolutionError(f"Unable to reach the instance metadata service: {e}") from e

        if response.status_code != 200:
            raise IdentityResolutionError(
                f"Instance metadata service returned HTTP {response.status_code} for IAM info"
            )
        try:
            info = json.loads(response.text)
            arn = info["InstanceProfileArn"]
        except (ValueError, KeyError, TypeError) as e:
            raise IdentityResolutionError(f"Invalid IAM info from instance metadata: {e}") from e
        if not arn:
            raise IdentityResolutionError("Instance metadata reported an empty instance profile")
        return arn


class AssumedRoleProvider(CredentialProvider):
    """
    Credential provider for the role resolved from instance metadata.

    Credentials are fetched on first use and refreshed by botocore before
    they expire.
    """
    METHOD = "sts-assume-role"
    CANONICAL_NAME = "cerberus-assume-role"

    def __init__(self, refresh_using: Callable[[], dict]):
        super().__init__()
        self._refresh_using = refresh_using

    def load(self) -> DeferredRefreshableCredentials:
        return DeferredRefreshableCredentials(refresh_using=self._refresh_using, method=self.METHOD)


class IdentityResolver:
    """
    Resolves the role identity and the credentials delegated to it.

    Resolution happens once, when the authenticator is built; there is no
    retry. Process bootstrap decides whether to try again.
    """

    def __init__(self, metadata_client: Optional[InstanceMetadataClient] = None,
                 session_factory: Callable[..., boto3.Session] = boto3.Session):
        """
        Args:
            metadata_client: Metadata reader (defaults to the link-local service)
            session_factory: Builds the base boto3 session used to call STS
        """
        self.metadata_client = metadata_client or InstanceMetadataClient()
        self.session_factory = session_factory

    def resolve(self, region: str) -> RoleIdentity:
        """
        Resolves the role the client runs as.

        Args:
            region: AWS region, e.g. "us-west-2"

        Returns:
            The role identity

        Raises:
            ConfigurationError: If region is empty
            IdentityResolutionError: If the metadata lookup fails
        """
        if not region:
            raise ConfigurationError("Region should not be empty")
        instance_profile_arn = self.metadata_client.get_instance_profile_arn()
        role_arn = role_arn_from_instance_profile(instance_profile_arn)
        logger.debug(f"Identidad resuelta: {role_arn} en {region}")
        return RoleIdentity(role_arn=role_arn, region=region)

    def delegated_session(self, identity: RoleIdentity) -> boto3.Session:
        """
        Builds a boto3 session whose credentials come from assuming the role.

        STS is only called on first use, and again whenever the temporary
        credentials are about to expire.

        Raises:
            IdentityResolutionError: If the sessions cannot be created
        """
        try:
            base_session = self.session_factory(region_name=identity.region)
            sts_client = base_session.client("sts", region_name=identity.region)
        except BotoCoreError as e:
            raise IdentityResolutionError(f"Unable to create AWS session: {e}") from e

        def assume_role() -> dict:
            response = sts_client.assume_role(
                RoleArn=identity.role_arn,
                RoleSessionName=ASSUME_ROLE_SESSION_NAME,
            )
            credentials = response["Credentials"]
            return {
                "access_key": credentials["AccessKeyId"],
                "secret_key": credentials["SecretAccessKey"],
                "token": credentials["SessionToken"],
                "expiry_time": credentials["Expiration"].isoformat(),
            }

        botocore_session = get_session()
        botocore_session.register_component(
            "credential_provider",
            CredentialResolver(providers=[AssumedRoleProvider(assume_role)]),
        )
        try:
            return boto3.Session(botocore_session=botocore_session, region_name=identity.region)
        except BotoCoreError as e:
            raise IdentityResolutionError(f"Unable to create AWS session: {e}") from e

    def kms_decryptor(self, identity: RoleIdentity) -> KMSDecryptor:
        """
        Builds the KMS decryptor bound to the delegated credentials.

        Raises:
            IdentityResolutionError: If the KMS client cannot be created
        """
        session = self.delegated_session(identity)
        try:
            kms_client = session.client("kms", region_name=identity.region)
        except BotoCoreError as e:
            raise IdentityResolutionError(f"Unable to create KMS client: {e}") from e
        return KMSDecryptor(kms_client)
