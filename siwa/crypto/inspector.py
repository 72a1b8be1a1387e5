"""Display-only decoding of compact JWTs.

Nothing here verifies a signature. ``decode_token`` splits a token and
base64url-decodes its header and claims so they can be shown to a human;
a token that decodes cleanly may still be forged, expired or signed with
the wrong key.
"""

import base64
import binascii
import json
import re
from datetime import UTC, datetime
from typing import Any

from siwa.core.logging import get_logger
from siwa.crypto.errors import DecodeError
from siwa.crypto.types import DecodedToken

UNAVAILABLE = "unavailable"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S UTC"

_BASE64URL_RE = re.compile(r"[A-Za-z0-9_-]+")

logger = get_logger(__name__)


def format_timestamp(value: Any) -> str:
    """Render POSIX seconds as a UTC string, or ``unavailable``."""
    if isinstance(value, bool) or not isinstance(value, int | float):
        return UNAVAILABLE
    try:
        return datetime.fromtimestamp(value, UTC).strftime(TIMESTAMP_FORMAT)
    except (OverflowError, OSError, ValueError):
        return UNAVAILABLE


def _decode_segment(segment: str) -> dict[str, Any]:
    if not _BASE64URL_RE.fullmatch(segment):
        raise DecodeError("malformed segment")
    padded = segment + "=" * (-len(segment) % 4)
    try:
        raw = base64.urlsafe_b64decode(padded)
        data = json.loads(raw.decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, ValueError, RecursionError) as exc:
        raise DecodeError("malformed segment") from exc
    if not isinstance(data, dict):
        raise DecodeError("malformed segment")
    return data


def decode_token(token: str) -> DecodedToken:
    """Split and decode a compact token for display. Does not verify."""
    parts = token.strip().split(".")
    if len(parts) != 3 or not all(parts):
        logger.debug("token_decode_failed", reason="malformed token")
        raise DecodeError("malformed token")

    header_segment, claims_segment, signature_segment = parts
    if not _BASE64URL_RE.fullmatch(signature_segment):
        logger.debug("token_decode_failed", reason="malformed signature")
        raise DecodeError("malformed segment")
    try:
        header = _decode_segment(header_segment)
        claims = _decode_segment(claims_segment)
    except DecodeError:
        logger.debug("token_decode_failed", reason="malformed segment")
        raise

    return DecodedToken(
        header=header,
        claims=claims,
        signature=signature_segment,
        issued_at=format_timestamp(claims.get("iat")),
        expires_at=format_timestamp(claims.get("exp")),
    )
