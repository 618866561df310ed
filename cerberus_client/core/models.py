"""
Wire and state models for the Cerberus authentication exchange.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

# Value of UserAuthResponse.status on success
AUTH_USER_SUCCESS = "success"


class RoleIdentity(BaseModel):
    """IAM role the client authenticates as."""
    model_config = ConfigDict(frozen=True)

    role_arn: str
    region: str


class IntermediateAuthPayload(BaseModel):
    """Body of a successful iam-principal call: KMS ciphertext in base64."""
    auth_data: str


class IAMAuthResponse(BaseModel):
    """
    Decrypted credential envelope returned by the iam-principal exchange.

    Only client_token and lease_duration are kept by the token cache, the
    rest is informational.
    """
    client_token: str
    policies: List[str] = Field(default_factory=list)
    metadata: Dict[str, str] = Field(default_factory=dict)
    lease_duration: int = Field(ge=0)
    renewable: bool = False


class UserMetadata(BaseModel):
    username: str = ""
    is_admin: str = ""
    groups: str = ""


class UserClientToken(BaseModel):
    client_token: str
    policies: List[str] = Field(default_factory=list)
    metadata: UserMetadata = Field(default_factory=UserMetadata)
    lease_duration: int = Field(0, ge=0)
    renewable: bool = False


class UserAuthData(BaseModel):
    client_token: UserClientToken


class UserAuthResponse(BaseModel):
    """Nested envelope returned by the session refresh endpoint."""
    status: str
    data: UserAuthData


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class TokenState:
    """
    Current token and its expiry.

    Instances are immutable: the token cache swaps the whole object so that
    token and expiry always change together.
    """
    token: str = ""
    expiry: Optional[datetime] = None

    def is_live(self, now: datetime) -> bool:
        """A token is live while it is set and now is strictly before expiry."""
        if not self.token or self.expiry is None:
            return False
        return now < self.expiry


@dataclass(frozen=True)
class AttemptOutcome:
    """Result of one authentication exchange: a token or the error it raised."""
    token: str = ""
    error: Optional[BaseException] = None

    def result(self) -> str:
        if self.error is not None:
            raise self.error
        return self.token
