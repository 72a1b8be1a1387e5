"""ES256 compact JWT construction for Sign in with Apple client secrets."""

import base64
import json
import time
from collections.abc import Callable
from typing import Any

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric.utils import decode_dss_signature

from siwa.core.logging import get_logger
from siwa.core.settings import MAX_LIFETIME_SECONDS
from siwa.crypto.errors import SigningError, ValidationError
from siwa.crypto.types import KeyMaterial, TokenClaims, TokenHeader

P256_COORDINATE_BYTES = 32

logger = get_logger(__name__)


def base64url_encode(raw: bytes) -> str:
    """Encode bytes as base64url without padding."""
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def canonical_json(data: dict[str, Any]) -> bytes:
    """Serialize a mapping as compact, key-sorted UTF-8 JSON."""
    return json.dumps(
        data, separators=(",", ":"), sort_keys=True, ensure_ascii=False
    ).encode("utf-8")


def der_to_raw_signature(der: bytes) -> bytes:
    """Convert a DER ECDSA signature into fixed-width R||S (64 bytes)."""
    r, s = decode_dss_signature(der)
    return r.to_bytes(P256_COORDINATE_BYTES, byteorder="big") + s.to_bytes(
        P256_COORDINATE_BYTES, byteorder="big"
    )


def check_lifetime(lifetime_seconds: object) -> int:
    """Validate a requested lifetime against Apple's six-month ceiling."""
    if (
        isinstance(lifetime_seconds, bool)
        or not isinstance(lifetime_seconds, int)
        or lifetime_seconds <= 0
    ):
        raise ValidationError("lifetime must be a positive integer")
    if lifetime_seconds > MAX_LIFETIME_SECONDS:
        raise ValidationError("lifetime exceeds maximum")
    return lifetime_seconds


def sign_client_secret(
    *,
    key_id: str,
    issuer: str,
    subject: str,
    lifetime_seconds: int,
    key: KeyMaterial | None,
    audience: str | None = None,
    clock: Callable[[], float] = time.time,
) -> str:
    """Build and sign an ES256 compact JWT.

    All inputs are checked before any cryptographic work. ``audience=None``
    leaves the ``aud`` claim out entirely.
    """
    if not key_id:
        raise ValidationError("key id is required")
    if not issuer:
        raise ValidationError("issuer is required")
    if not subject:
        raise ValidationError("subject is required")
    if key is None:
        raise ValidationError("private key is required")
    lifetime = check_lifetime(lifetime_seconds)

    issued_at = int(clock())
    header = TokenHeader(kid=key_id)
    claims = TokenClaims(
        iss=issuer,
        sub=subject,
        aud=audience,
        iat=issued_at,
        exp=issued_at + lifetime,
    )

    encoded_header = base64url_encode(canonical_json(header.model_dump()))
    encoded_claims = base64url_encode(
        canonical_json(claims.model_dump(exclude_none=True))
    )
    signing_input = f"{encoded_header}.{encoded_claims}".encode("ascii")

    try:
        signature = der_to_raw_signature(key.sign(signing_input))
    except (ValueError, TypeError, UnsupportedAlgorithm):
        raise SigningError("ES256 signing failed") from None

    logger.info(
        "client_secret_signed",
        kid=key_id,
        iss=issuer,
        sub=subject,
        aud=audience,
        iat=claims.iat,
        exp=claims.exp,
    )
    return f"{encoded_header}.{encoded_claims}.{base64url_encode(signature)}"
