"""Type definitions for signing keys, token parts, and decoded tokens."""

from typing import Any

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from pydantic import BaseModel, ConfigDict

ES256 = "ES256"


class KeyMaterial:
    """Signing-only handle around a P-256 private key.

    The wrapped key is never exposed: callers can sign bytes with it and
    nothing else. The handle is not meant to outlive the call that
    imported it.
    """

    __slots__ = ("_key",)

    def __init__(self, key: ec.EllipticCurvePrivateKey) -> None:
        self._key = key

    def sign(self, data: bytes) -> bytes:
        """Return the DER-encoded ECDSA/SHA-256 signature over ``data``."""
        return self._key.sign(data, ec.ECDSA(hashes.SHA256()))

    def __repr__(self) -> str:
        return "KeyMaterial(<P-256 private key>)"

    def __reduce__(self) -> Any:
        raise TypeError("KeyMaterial cannot be pickled")


class SigningKeyData(BaseModel):
    """A P-256 keypair in PKCS#8 / SubjectPublicKeyInfo PEM form."""

    kid: str
    private_key_pem: str
    public_key_pem: str


class TokenHeader(BaseModel):
    """Protected JOSE header of a client secret."""

    model_config = ConfigDict(frozen=True)

    alg: str = ES256
    kid: str


class TokenClaims(BaseModel):
    """Registered claims of a client secret."""

    model_config = ConfigDict(frozen=True)

    iss: str
    sub: str
    iat: int
    exp: int
    aud: str | None = None


class DecodedToken(BaseModel):
    """Unverified, display-only view of a compact token."""

    header: dict[str, Any]
    claims: dict[str, Any]
    signature: str
    issued_at: str
    expires_at: str
