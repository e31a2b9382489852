"""
Tests for the ECDH P-256 + AES-256-GCM hybrid scheme.

Tests cover:
- Public key export formats (JWK, raw, PEM) and parsing
- Shared-secret symmetry between two managers
- HKDF and AES-GCM against published test vectors
- Hybrid encrypt/decrypt against an independent AES-GCM implementation
- Rejection of foreign curves, bad input and tampered ciphertext
"""

import base64
from datetime import datetime, timedelta, timezone

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from myblog.core.errors import CryptoError
from myblog.crypto.ecc import (
    ECCManager,
    aes_gcm_decrypt,
    aes_gcm_encrypt,
    derive_hkdf_key,
    fit_key,
    parse_public_key_jwk,
    parse_public_key_pem,
)


def _b64url_decode(value: str) -> bytes:
    return base64.urlsafe_b64decode(value + "=" * (-len(value) % 4))


def _pem(public_key) -> str:
    return public_key.public_bytes(
        serialization.Encoding.PEM,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode("ascii")


@pytest.fixture
def server():
    return ECCManager("session_server")


@pytest.fixture
def client():
    return ECCManager("session_client")


class TestPublicKeyExport:
    """Tests for the public key formats."""

    def test_jwk_shape(self, server):
        """Should export an EC P-256 JWK with 32-byte coordinates."""
        jwk = server.public_key_jwk()

        assert jwk["kty"] == "EC"
        assert jwk["crv"] == "P-256"
        assert jwk["use"] == "enc"
        assert jwk["alg"] == "ECDH-ES+A256KW"
        assert len(_b64url_decode(jwk["x"])) == 32
        assert len(_b64url_decode(jwk["y"])) == 32
        assert "=" not in jwk["x"] + jwk["y"]

    def test_raw_matches_jwk(self, server):
        """Should export the uncompressed point 0x04 || X || Y."""
        raw = server.public_key_raw()
        jwk = server.public_key_jwk()
        key_data = base64.b64decode(raw["keyData"])

        assert len(key_data) == 65
        assert key_data[0] == 0x04
        assert key_data[1:33] == _b64url_decode(jwk["x"])
        assert key_data[33:] == _b64url_decode(jwk["y"])
        assert raw["format"] == "raw"
        assert raw["algorithm"] == {"name": "ECDH", "namedCurve": "P-256"}
        assert raw["usages"] == ["deriveKey", "deriveBits"]

    def test_pem(self, server):
        """Should export a PEM SubjectPublicKeyInfo block."""
        pem = server.public_key_pem()
        assert pem.startswith("-----BEGIN PUBLIC KEY-----")
        assert pem.rstrip().endswith("-----END PUBLIC KEY-----")

    def test_pem_round_trip(self, server):
        """Should parse its own PEM back to the same key."""
        parsed = parse_public_key_pem(server.public_key_pem())
        assert parsed.public_numbers() == server.public_key.public_numbers()

    def test_jwk_round_trip(self, server):
        """Should parse its own JWK back to the same key."""
        parsed = parse_public_key_jwk(server.public_key_jwk())
        assert parsed.public_numbers() == server.public_key.public_numbers()

    def test_fresh_key_per_manager(self):
        """Should generate a new key pair for every manager."""
        assert ECCManager("a").public_key_pem() != ECCManager("b").public_key_pem()


class TestParsePublicKey:
    def test_rejects_p384_pem(self):
        """Should reject a PEM key on another curve."""
        key = ec.generate_private_key(ec.SECP384R1()).public_key()
        with pytest.raises(CryptoError, match="curve mismatch"):
            parse_public_key_pem(_pem(key))

    def test_rejects_rsa_pem(self):
        """Should reject a non-EC PEM key."""
        key = rsa.generate_private_key(public_exponent=65537, key_size=2048).public_key()
        with pytest.raises(CryptoError, match="not an ECDSA public key"):
            parse_public_key_pem(_pem(key))

    def test_rejects_garbage_pem(self):
        """Should reject input that is not PEM."""
        with pytest.raises(CryptoError, match="failed to parse PEM public key"):
            parse_public_key_pem("-----BEGIN PUBLIC KEY-----\nnope\n-----END PUBLIC KEY-----")

    @pytest.mark.parametrize(
        "overrides, message",
        [
            ({"kty": "RSA"}, "unsupported key type"),
            ({"crv": "P-384"}, "unsupported curve"),
        ],
    )
    def test_rejects_foreign_jwk(self, server, overrides, message):
        """Should reject JWKs of another key type or curve."""
        jwk = {**server.public_key_jwk(), **overrides}
        with pytest.raises(CryptoError, match=message):
            parse_public_key_jwk(jwk)

    def test_rejects_off_curve_jwk(self, server):
        """Should reject coordinates that are not a point on P-256."""
        jwk = server.public_key_jwk()
        jwk["y"] = jwk["x"]
        with pytest.raises(CryptoError, match="invalid JWK public key"):
            parse_public_key_jwk(jwk)

    def test_rejects_incomplete_jwk(self):
        """Should reject a JWK without coordinates."""
        with pytest.raises(CryptoError):
            parse_public_key_jwk({"kty": "EC", "crv": "P-256"})


class TestSharedSecret:
    """Tests for derive_shared_secret."""

    def test_symmetric(self, server, client):
        """Should derive the same 32 bytes on both sides."""
        ours = server.derive_shared_secret(client.public_key_pem())
        theirs = client.derive_shared_secret(server.public_key_pem())

        assert ours == theirs
        assert len(ours) == 32

    def test_accepts_key_object(self, server, client):
        """Should accept a key object as well as PEM."""
        assert server.derive_shared_secret(client.public_key) == server.derive_shared_secret(
            client.public_key_pem()
        )

    def test_rejects_other_curve_key_object(self, server):
        """Should reject a P-384 key object."""
        key = ec.generate_private_key(ec.SECP384R1()).public_key()
        with pytest.raises(CryptoError):
            server.derive_shared_secret(key)

    def test_different_peers_differ(self, server, client):
        """Should derive different secrets for different peers."""
        other = ECCManager("other")
        assert server.derive_shared_secret(client.public_key) != server.derive_shared_secret(
            other.public_key
        )


class TestHkdf:
    """RFC 5869 test vectors (HKDF-SHA-256)."""

    def test_rfc5869_case_1(self):
        """Should match test case A.1."""
        ikm = bytes.fromhex("0b" * 22)
        salt = bytes.fromhex("000102030405060708090a0b0c")
        info = bytes.fromhex("f0f1f2f3f4f5f6f7f8f9")

        okm = derive_hkdf_key(ikm, salt, info, length=42)

        assert okm.hex() == (
            "3cb25f25faacd57a90434f64d0362f2a2d2d0a90cf1a5a4c5db02d56ecc4c5bf"
            "34007208d5b887185865"
        )

    def test_rfc5869_case_3(self):
        """Should match test case A.3 (empty salt and info)."""
        okm = derive_hkdf_key(bytes.fromhex("0b" * 22), None, b"", length=42)

        assert okm.hex() == (
            "8da4e775a563c18f715f802a063c5a31b8a11f5c5ee1879ec3454e5f3c738d2d"
            "9d201395faa4b61a96c8"
        )

    def test_default_length(self):
        """Should produce an AES-256 key by default."""
        assert len(derive_hkdf_key(b"secret", b"salt")) == 32


class TestAesGcm:
    def test_known_vector(self):
        """Should decrypt the all-zero AES-256-GCM test vector."""
        data = bytes(12) + bytes.fromhex(
            "cea7403d4d606b6e074ec5d3baf39d18" "d0d1c8a799996bf0265b98b5d48ab919"
        )
        assert aes_gcm_decrypt(bytes(32), data) == bytes(16)

    def test_encrypt_layout(self):
        """Should prefix a 12-byte nonce and append a 16-byte tag."""
        data = aes_gcm_encrypt(bytes(32), b"hello")
        assert len(data) == 12 + 5 + 16
        assert AESGCM(bytes(32)).decrypt(data[:12], data[12:], None) == b"hello"

    def test_random_nonce(self):
        """Should use a fresh nonce per call."""
        assert aes_gcm_encrypt(bytes(32), b"x")[:12] != aes_gcm_encrypt(bytes(32), b"x")[:12]

    def test_too_short(self):
        """Should reject input shorter than the nonce."""
        with pytest.raises(CryptoError, match="ciphertext too short"):
            aes_gcm_decrypt(bytes(32), b"short")

    def test_tampered(self):
        """Should reject a ciphertext whose tag does not verify."""
        data = bytearray(aes_gcm_encrypt(bytes(32), b"hello"))
        data[-1] ^= 0x01
        with pytest.raises(CryptoError, match="failed to decrypt"):
            aes_gcm_decrypt(bytes(32), bytes(data))


class TestFitKey:
    def test_exact(self):
        assert fit_key(b"a" * 32) == b"a" * 32

    def test_longer_is_trimmed(self):
        """Should keep the first 32 bytes."""
        assert fit_key(bytes(range(40))) == bytes(range(32))

    def test_shorter_is_left_padded(self):
        """Should left-pad with zero bytes."""
        assert fit_key(b"\x01\x02") == bytes(30) + b"\x01\x02"


class TestHybrid:
    """Tests for hybrid_encrypt and hybrid_decrypt."""

    def test_decrypts_client_ciphertext(self, server):
        """Should decrypt what a browser-style client produces."""
        client_key = ec.generate_private_key(ec.SECP256R1())
        server_public = parse_public_key_jwk(server.public_key_jwk())
        key = client_key.exchange(ec.ECDH(), server_public)
        nonce = bytes(range(12))
        ciphertext = AESGCM(key).encrypt(nonce, "密码 hunter2".encode("utf-8"), None)
        envelope = base64.b64encode(nonce + ciphertext).decode("ascii")

        plaintext = server.hybrid_decrypt(envelope, _pem(client_key.public_key()))

        assert plaintext.decode("utf-8") == "密码 hunter2"

    def test_encrypt_for_peer(self, server, client):
        """Should produce a ciphertext the peer can open with its own derivation."""
        envelope = server.hybrid_encrypt(b"for the client", client.public_key_pem())
        data = base64.b64decode(envelope)
        key = client.derive_shared_secret(server.public_key)

        assert len(data) == 12 + len(b"for the client") + 16
        assert AESGCM(key).decrypt(data[:12], data[12:], None) == b"for the client"

    def test_two_managers(self, server, client):
        """Should let two managers exchange messages."""
        envelope = client.hybrid_encrypt(b"ping", server.public_key_pem())
        assert server.hybrid_decrypt(envelope, client.public_key_pem()) == b"ping"

    def test_wrong_peer(self, server, client):
        """Should fail to decrypt with the wrong peer key."""
        envelope = client.hybrid_encrypt(b"ping", server.public_key_pem())
        with pytest.raises(CryptoError, match="failed to decrypt"):
            server.hybrid_decrypt(envelope, ECCManager("x").public_key_pem())

    def test_bad_base64(self, server, client):
        """Should reject data that is not base64."""
        with pytest.raises(CryptoError, match="failed to decode encrypted data"):
            server.hybrid_decrypt("***", client.public_key_pem())

    def test_short_data(self, server, client):
        """Should reject data shorter than a nonce."""
        envelope = base64.b64encode(b"abc").decode("ascii")
        with pytest.raises(CryptoError, match="ciphertext too short"):
            server.hybrid_decrypt(envelope, client.public_key_pem())

    def test_bad_peer_pem(self, server):
        """Should reject an unparseable peer key."""
        with pytest.raises(CryptoError):
            server.hybrid_decrypt(base64.b64encode(bytes(40)).decode(), "not a key")


class TestExpiry:
    def test_fresh_manager_not_expired(self, server):
        """Should not be expired right after creation."""
        assert not server.is_expired()
        assert server.expires_at - server.created_at == timedelta(hours=1)

    def test_expired_after_ttl(self, server):
        """Should report expiry once the ttl has passed."""
        later = datetime.now(timezone.utc) + timedelta(hours=2)
        assert server.is_expired(later)

    def test_negative_ttl(self):
        """Should be expired immediately with a negative ttl."""
        assert ECCManager("s", ttl=timedelta(seconds=-1)).is_expired()

    def test_expired_manager_still_works(self, client):
        """Should keep decrypting after expiry."""
        manager = ECCManager("s", ttl=timedelta(seconds=-1))
        envelope = client.hybrid_encrypt(b"late", manager.public_key_pem())
        assert manager.hybrid_decrypt(envelope, client.public_key_pem()) == b"late"
