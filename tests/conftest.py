"""
pytest configuration and shared fixtures for the Cerberus client tests.

Cerberus is simulated with httpx.MockTransport; identity resolution and
decryption are replaced by in-memory stubs so no AWS access is needed.
"""
import base64
import json
import threading
from datetime import datetime, timedelta, timezone
from typing import List, Optional

import httpx
import pytest

from cerberus_client.auth.aws import AWSAuth
from cerberus_client.auth.decryptor import Decryptor
from cerberus_client.core.common import DecryptionFailed
from cerberus_client.core.models import RoleIdentity

FAKE_ROLE_ARN = "arn:aws:iam::111111111:role/fake-role"

FAKE_CIPHERTEXT = b"This is a random string"
FAKE_AUTH_BODY = json.dumps({"auth_data": base64.b64encode(FAKE_CIPHERTEXT).decode()})

AWS_RESPONSE_BODY = json.dumps({
    "client_token": "a-cool-token",
    "policies": ["foo-bar-read", "lookup-self"],
    "metadata": {
        "aws_region": "us-west-2",
        "iam_principal_arn": FAKE_ROLE_ARN,
        "username": FAKE_ROLE_ARN,
        "is_admin": "false",
        "groups": "registered-iam-principals",
    },
    "lease_duration": 3600,
    "renewable": True,
})

USER_AUTH_RESPONSE_BODY = json.dumps({
    "status": "success",
    "data": {
        "client_token": {
            "client_token": "a-cool-token",
            "policies": ["web", "stage"],
            "metadata": {
                "username": "john.doe@example.com",
                "is_admin": "false",
                "groups": "Lst-CDT.CloudPlatformEngine.FTE,Lst-digital.platform-tools.internal",
            },
            "lease_duration": 3600,
            "renewable": True,
        }
    },
})


class FrozenClock:
    """Controllable replacement for utcnow."""

    def __init__(self, start: Optional[datetime] = None):
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)


class StubDecryptor(Decryptor):
    """Returns fixed plaintext, or fails when should_error is set."""

    def __init__(self, data: str = AWS_RESPONSE_BODY, should_error: bool = False):
        self.data = data
        self.should_error = should_error
        self.calls: List[bytes] = []

    def decrypt(self, ciphertext: bytes) -> bytes:
        self.calls.append(ciphertext)
        if self.should_error:
            raise DecryptionFailed("Your decryption errored")
        return self.data.encode()


class StubResolver:
    """Identity resolver that never touches instance metadata or STS."""

    def __init__(self, role_arn: str = FAKE_ROLE_ARN):
        self.role_arn = role_arn
        self.resolved: List[str] = []

    def resolve(self, region: str) -> RoleIdentity:
        self.resolved.append(region)
        return RoleIdentity(role_arn=self.role_arn, region=region)

    def kms_decryptor(self, identity: RoleIdentity) -> Decryptor:
        return StubDecryptor()


class CerberusHandler:
    """
    MockTransport handler that records requests and returns a canned response.

    Set `responses` to a list to answer successive requests differently.
    """

    def __init__(self, status_code: int = 200, body: str = "", responses=None, delay: float = 0.0):
        self.responses = responses or [(status_code, body)]
        self.requests: List[httpx.Request] = []
        self.delay = delay
        self._lock = threading.Lock()

    def __call__(self, request: httpx.Request) -> httpx.Response:
        with self._lock:
            self.requests.append(request)
            index = min(len(self.requests), len(self.responses)) - 1
        if self.delay:
            threading.Event().wait(self.delay)
        status_code, body = self.responses[index]
        return httpx.Response(status_code, content=body.encode(),
                              headers={"Content-Type": "application/json"})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


def failing_transport() -> httpx.MockTransport:
    """Transport that fails every request at the connection level."""
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)
    return httpx.MockTransport(handler)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep CERBERUS_* variables from the developer's shell out of the tests."""
    monkeypatch.delenv("CERBERUS_URL", raising=False)
    monkeypatch.delenv("CERBERUS_TOKEN", raising=False)


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def make_aws_auth(clock):
    """Factory building an AWSAuth wired to a handler and a stub decryptor."""
    created = []

    def factory(handler: Optional[CerberusHandler] = None, decryptor: Optional[Decryptor] = None,
                url: str = "https://test.example.com", region: str = "us-west-2",
                transport: Optional[httpx.BaseTransport] = None) -> AWSAuth:
        if transport is None:
            transport = (handler or CerberusHandler()).transport
        auth = AWSAuth(
            url,
            region,
            resolver=StubResolver(),
            decryptor=decryptor or StubDecryptor(),
            transport=transport,
            clock=clock,
        )
        created.append(auth)
        return auth

    yield factory
    for auth in created:
        auth.close()
