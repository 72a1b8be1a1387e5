"""Error taxonomy for key handling, signing, and token inspection."""


class SecretError(Exception):
    """Base class for every client-secret failure."""

    kind = "secret_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        """Structured form of the error (kind + message)."""
        return {"kind": self.kind, "message": self.message}


class ValidationError(SecretError):
    """Missing or out-of-range caller input."""

    kind = "validation_error"


class InvalidKeyFormat(SecretError):
    """Key text is empty or has no body between its delimiters."""

    kind = "invalid_key_format"


class KeyImportError(SecretError):
    """Key body is not base64, not PKCS#8, or not on P-256."""

    kind = "key_import_error"


class SigningError(SecretError):
    """The ECDSA primitive rejected the key or the input."""

    kind = "signing_error"


class DecodeError(SecretError):
    """A token passed to the inspector is malformed."""

    kind = "decode_error"
