"""Shared test fixtures for the client-secret generator."""

import pytest

from siwa.crypto.keys import generate_ec_keypair
from siwa.crypto.types import SigningKeyData

KEY_ID = "ABC1234567"
TEAM_ID = "TEAM123456"
CLIENT_ID = "com.example.app.web"


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host SIWA_* variables out of settings under test."""
    for name in ("SIWA_AUDIENCE", "SIWA_DEFAULT_LIFETIME", "SIWA_LOG_LEVEL", "SIWA_LOG_JSON"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(scope="session")
def keypair() -> SigningKeyData:
    """A P-256 PKCS#8 keypair shared across the session."""
    return generate_ec_keypair(KEY_ID)


@pytest.fixture
def bare_key_body(keypair: SigningKeyData) -> str:
    """The base64 body of the private key, without PEM delimiters."""
    lines = keypair.private_key_pem.strip().splitlines()
    return "".join(lines[1:-1])
