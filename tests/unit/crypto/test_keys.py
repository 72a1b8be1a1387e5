"""Tests for key normalization, PKCS#8 import, and keypair generation."""

import base64

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa

from siwa.crypto.errors import InvalidKeyFormat, KeyImportError
from siwa.crypto.keys import (
    PEM_BEGIN,
    PEM_END,
    generate_ec_keypair,
    import_private_key,
    normalize_private_key,
)
from siwa.crypto.types import KeyMaterial, SigningKeyData


def _pkcs8_pem(private_key) -> str:
    return private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode()


class TestNormalizePrivateKey:
    """Tests for normalize_private_key."""

    def test_wraps_bare_body(self, bare_key_body: str) -> None:
        pem = normalize_private_key(bare_key_body)
        assert pem == f"{PEM_BEGIN}\n{bare_key_body}\n{PEM_END}"

    def test_trims_surrounding_whitespace(self, keypair: SigningKeyData) -> None:
        pem = normalize_private_key(f"\n\n  {keypair.private_key_pem}  \n")
        assert pem == keypair.private_key_pem.strip()

    def test_is_idempotent(self, keypair: SigningKeyData, bare_key_body: str) -> None:
        for text in (keypair.private_key_pem, bare_key_body):
            once = normalize_private_key(text)
            assert normalize_private_key(once) == once

    @pytest.mark.parametrize("text", ["", "   \n\t  "])
    def test_empty_input_rejected(self, text: str) -> None:
        with pytest.raises(InvalidKeyFormat):
            normalize_private_key(text)

    def test_delimiters_without_body_rejected(self) -> None:
        with pytest.raises(InvalidKeyFormat):
            normalize_private_key(f"{PEM_BEGIN}\n\n{PEM_END}")

    def test_does_not_validate_base64(self) -> None:
        pem = normalize_private_key("not base64 at all!")
        assert pem.startswith(PEM_BEGIN)


class TestImportPrivateKey:
    """Tests for import_private_key."""

    def test_imports_p256_pkcs8(self, keypair: SigningKeyData) -> None:
        key = import_private_key(keypair.private_key_pem)
        assert isinstance(key, KeyMaterial)

    def test_tolerates_arbitrary_line_breaks(self, bare_key_body: str) -> None:
        chunks = [bare_key_body[i : i + 17] for i in range(0, len(bare_key_body), 17)]
        pem = f"{PEM_BEGIN}\r\n" + "\n  ".join(chunks) + f"\n\n{PEM_END}"
        assert isinstance(import_private_key(pem), KeyMaterial)

    def test_invalid_alphabet_is_malformed_base64(self) -> None:
        pem = normalize_private_key("MIGHAgEAMBMG!!ByqGSM49")
        with pytest.raises(KeyImportError, match="malformed base64"):
            import_private_key(pem)

    def test_bad_padding_is_malformed_base64(self, bare_key_body: str) -> None:
        pem = normalize_private_key(bare_key_body.rstrip("=") + "A")
        with pytest.raises(KeyImportError, match="malformed base64"):
            import_private_key(pem)

    def test_garbage_der_rejected(self) -> None:
        body = base64.b64encode(b"\x30\x03\x02\x01\x00 not a key").decode()
        with pytest.raises(KeyImportError, match="unsupported or malformed key"):
            import_private_key(normalize_private_key(body))

    def test_wrong_curve_rejected(self) -> None:
        pem = _pkcs8_pem(ec.generate_private_key(ec.SECP384R1()))
        with pytest.raises(KeyImportError, match="unsupported or malformed key"):
            import_private_key(pem)

    def test_non_ec_key_rejected(self) -> None:
        pem = _pkcs8_pem(rsa.generate_private_key(public_exponent=65537, key_size=2048))
        with pytest.raises(KeyImportError, match="unsupported or malformed key"):
            import_private_key(pem)

    def test_error_message_hides_key_material(self, bare_key_body: str) -> None:
        tampered = bare_key_body[:40] + "AAAA" + bare_key_body[44:]
        try:
            import_private_key(normalize_private_key(tampered))
        except KeyImportError as exc:
            assert bare_key_body[:20] not in str(exc)

    def test_key_material_repr_is_opaque(self, keypair: SigningKeyData) -> None:
        key = import_private_key(keypair.private_key_pem)
        assert "PRIVATE KEY" not in repr(key)
        assert not hasattr(key, "__dict__")


class TestGenerateECKeypair:
    """Tests for P-256 keypair generation."""

    def test_produces_pkcs8_pem(self) -> None:
        kp = generate_ec_keypair("KEYID00001")
        assert kp.kid == "KEYID00001"
        assert kp.private_key_pem.startswith(PEM_BEGIN)
        assert kp.public_key_pem.startswith("-----BEGIN PUBLIC KEY-----")

    def test_different_calls_produce_different_keys(self) -> None:
        kp1 = generate_ec_keypair("KEYID00001")
        kp2 = generate_ec_keypair("KEYID00001")
        assert kp1.private_key_pem != kp2.private_key_pem
