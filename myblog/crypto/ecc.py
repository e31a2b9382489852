"""
ECDH (P-256) + AES-256-GCM hybrid encryption for client-submitted secrets.

Each :class:`ECCManager` owns a fresh key pair for one session. The browser
derives the same shared secret from our public key and its own key pair,
encrypts with AES-GCM and posts the result together with its public key.

Both directions use the raw 32-byte X coordinate of the ECDH point as the
AES-256 key, which is what Web Crypto ``deriveBits`` produces.
:func:`derive_hkdf_key` is available for peers that also transmit a salt.
"""

import base64
import binascii
import os
from datetime import datetime, timedelta, timezone
from typing import Any, Optional, Union

from cryptography.exceptions import InvalidTag, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from myblog.core.errors import CryptoError

CURVE_NAME = "P-256"
KEY_SIZE = 32
NONCE_SIZE = 12
SESSION_TTL = timedelta(hours=1)
JWK_ALGORITHM = "ECDH-ES+A256KW"

PublicKeyInput = Union[str, ec.EllipticCurvePublicKey]


def _b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def _b64url_decode(data: str) -> bytes:
    return base64.urlsafe_b64decode(data + "=" * (-len(data) % 4))


def _ensure_p256(key: Any) -> ec.EllipticCurvePublicKey:
    if not isinstance(key, ec.EllipticCurvePublicKey):
        raise CryptoError("not an ECDSA public key")
    if not isinstance(key.curve, ec.SECP256R1):
        raise CryptoError("curve mismatch", f"expected P-256, got {key.curve.name}")
    return key


def parse_public_key_pem(pem_data: str) -> ec.EllipticCurvePublicKey:
    """Load a P-256 public key from PEM ``SubjectPublicKeyInfo``."""
    try:
        key = serialization.load_pem_public_key(pem_data.encode("utf-8"))
    except (ValueError, UnsupportedAlgorithm) as e:
        raise CryptoError("failed to parse PEM public key", str(e)) from e
    return _ensure_p256(key)


def parse_public_key_jwk(jwk: dict[str, Any]) -> ec.EllipticCurvePublicKey:
    """Load a P-256 public key from a JWK mapping (``kty``, ``crv``, ``x``, ``y``)."""
    if jwk.get("kty") != "EC":
        raise CryptoError("unsupported key type", str(jwk.get("kty")))
    if jwk.get("crv") != CURVE_NAME:
        raise CryptoError("unsupported curve", str(jwk.get("crv")))
    try:
        x = int.from_bytes(_b64url_decode(jwk["x"]), "big")
        y = int.from_bytes(_b64url_decode(jwk["y"]), "big")
        return ec.EllipticCurvePublicNumbers(x, y, ec.SECP256R1()).public_key()
    except (KeyError, TypeError, ValueError, binascii.Error) as e:
        raise CryptoError("invalid JWK public key", str(e)) from e


def derive_hkdf_key(
    shared_secret: bytes, salt: Optional[bytes], info: bytes = b"", length: int = KEY_SIZE
) -> bytes:
    """HKDF-SHA-256 over the shared secret."""
    hkdf = HKDF(algorithm=hashes.SHA256(), length=length, salt=salt, info=info)
    return hkdf.derive(shared_secret)


def fit_key(shared_secret: bytes) -> bytes:
    """Trim or left-pad the shared X coordinate to exactly 32 bytes."""
    if len(shared_secret) >= KEY_SIZE:
        return shared_secret[:KEY_SIZE]
    return shared_secret.rjust(KEY_SIZE, b"\x00")


def aes_gcm_encrypt(key: bytes, plaintext: bytes) -> bytes:
    """Return ``nonce || ciphertext || tag`` with a random 12-byte nonce."""
    nonce = os.urandom(NONCE_SIZE)
    return nonce + AESGCM(key).encrypt(nonce, plaintext, None)


def aes_gcm_decrypt(key: bytes, data: bytes) -> bytes:
    if len(data) < NONCE_SIZE:
        raise CryptoError("ciphertext too short")
    nonce, ciphertext = data[:NONCE_SIZE], data[NONCE_SIZE:]
    try:
        return AESGCM(key).decrypt(nonce, ciphertext, None)
    except InvalidTag as e:
        raise CryptoError("failed to decrypt", "authentication tag mismatch") from e


class ECCManager:
    """
    Session-scoped P-256 key pair.

    Not thread-safe; one manager serves one key-exchange session. Expiry is
    advisory: the manager keeps working after ``expires_at``.
    """

    def __init__(
        self,
        session_id: str,
        ttl: timedelta = SESSION_TTL,
        private_key: Optional[ec.EllipticCurvePrivateKey] = None,
    ):
        self.session_id = session_id
        self._private_key = private_key or ec.generate_private_key(ec.SECP256R1())
        self.public_key = self._private_key.public_key()
        self.created_at = datetime.now(timezone.utc)
        self.expires_at = self.created_at + ttl

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return (now or datetime.now(timezone.utc)) > self.expires_at

    # Public key export

    def public_key_jwk(self) -> dict[str, Any]:
        numbers = self.public_key.public_numbers()
        return {
            "kty": "EC",
            "crv": CURVE_NAME,
            "x": _b64url(numbers.x.to_bytes(KEY_SIZE, "big")),
            "y": _b64url(numbers.y.to_bytes(KEY_SIZE, "big")),
            "use": "enc",
            "alg": JWK_ALGORITHM,
        }

    def public_key_bytes(self) -> bytes:
        """Uncompressed point ``0x04 || X || Y`` (65 bytes)."""
        return self.public_key.public_bytes(
            serialization.Encoding.X962,
            serialization.PublicFormat.UncompressedPoint,
        )

    def public_key_raw(self) -> dict[str, Any]:
        """Descriptor ready for Web Crypto ``importKey("raw", ...)``."""
        return {
            "format": "raw",
            "keyData": base64.b64encode(self.public_key_bytes()).decode("ascii"),
            "algorithm": {"name": "ECDH", "namedCurve": CURVE_NAME},
            "extractable": True,
            "usages": ["deriveKey", "deriveBits"],
        }

    def public_key_pem(self) -> str:
        return self.public_key.public_bytes(
            serialization.Encoding.PEM,
            serialization.PublicFormat.SubjectPublicKeyInfo,
        ).decode("ascii")

    # Key agreement

    def derive_shared_secret(self, peer_public_key: PublicKeyInput) -> bytes:
        """
        ECDH with the peer key; returns the X coordinate of the shared point.

        Raises:
            CryptoError: on a non-P-256 key or an invalid point
        """
        peer = self._load_peer(peer_public_key)
        try:
            return self._private_key.exchange(ec.ECDH(), peer)
        except ValueError as e:
            raise CryptoError("failed to compute shared secret", str(e)) from e

    def hybrid_encrypt(self, plaintext: bytes, peer_public_key: PublicKeyInput) -> str:
        """Encrypt for the peer; returns standard base64 of ``nonce || ciphertext``."""
        key = fit_key(self.derive_shared_secret(peer_public_key))
        return base64.b64encode(aes_gcm_encrypt(key, plaintext)).decode("ascii")

    def hybrid_decrypt(self, encrypted_data: str, peer_public_key: PublicKeyInput) -> bytes:
        """
        Decrypt a base64 ``nonce || ciphertext`` produced by the peer.

        Raises:
            CryptoError: on a bad peer key, bad base64, short input or a
                failed authentication tag
        """
        key = fit_key(self.derive_shared_secret(peer_public_key))
        try:
            data = base64.b64decode(encrypted_data, validate=True)
        except (binascii.Error, ValueError) as e:
            raise CryptoError("failed to decode encrypted data", str(e)) from e
        return aes_gcm_decrypt(key, data)

    @staticmethod
    def _load_peer(peer_public_key: PublicKeyInput) -> ec.EllipticCurvePublicKey:
        if isinstance(peer_public_key, str):
            return parse_public_key_pem(peer_public_key)
        return _ensure_p256(peer_public_key)
