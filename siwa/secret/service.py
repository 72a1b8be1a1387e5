"""End-to-end client-secret generation from raw caller input."""

import time
from collections.abc import Callable

from siwa.core.settings import MAX_LIFETIME_SECONDS, SecretSettings
from siwa.crypto.errors import ValidationError
from siwa.crypto.inspector import format_timestamp
from siwa.crypto.keys import import_private_key, normalize_private_key
from siwa.crypto.signer import check_lifetime, sign_client_secret
from siwa.secret.types import SecretRequest


def parse_lifetime(value: int | str) -> int:
    """Accept an integer or a decimal string and enforce the ceiling."""
    if isinstance(value, str):
        text = value.strip()
        if not text.isdecimal():
            raise ValidationError("lifetime must be a positive integer")
        digits = text.lstrip("0") or "0"
        if len(digits) > len(str(MAX_LIFETIME_SECONDS)):
            raise ValidationError("lifetime exceeds maximum")
        value = int(digits)
    return check_lifetime(value)


def _validate_request(request: SecretRequest) -> int:
    """Check caller input in field order; returns the parsed lifetime."""
    if not request.key_id.strip():
        raise ValidationError("key id is required")
    if not request.team_id.strip():
        raise ValidationError("issuer is required")
    if not request.client_id.strip():
        raise ValidationError("subject is required")
    return parse_lifetime(request.lifetime)


def generate_client_secret(
    request: SecretRequest,
    settings: SecretSettings | None = None,
    clock: Callable[[], float] = time.time,
) -> str:
    """Normalize, import, and sign: returns the compact client secret."""
    settings = settings or SecretSettings()
    lifetime = _validate_request(request)

    pem = normalize_private_key(request.private_key.get_secret_value())
    key = import_private_key(pem)
    return sign_client_secret(
        key_id=request.key_id.strip(),
        issuer=request.team_id.strip(),
        subject=request.client_id.strip(),
        lifetime_seconds=lifetime,
        key=key,
        audience=settings.audience,
        clock=clock,
    )


def preview_expiration(lifetime: int | str, now: float | None = None) -> str:
    """Human-readable expiry instant for a candidate lifetime."""
    seconds = parse_lifetime(lifetime)
    start = time.time() if now is None else now
    return format_timestamp(int(start) + seconds)
