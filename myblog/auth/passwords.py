"""
Password hashing with Argon2id.

Stored format::

    $argon2id$v=19$m=65536,t=1,p=4$<salt>$<hash>

Salt and hash are standard base64 without padding. Verification reads the
parameters back from the stored string, so hashes made with other
parameters keep verifying.
"""

import base64
import binascii
import hmac
import re
import secrets
from dataclasses import dataclass

from argon2.exceptions import HashingError
from argon2.low_level import ARGON2_VERSION, Type, hash_secret_raw

from myblog.core.errors import PasswordHashError

_VERSION_RE = re.compile(r"^v=(\d+)$")
_PARAMS_RE = re.compile(r"^m=(\d+),t=(\d+),p=(\d+)$")
_UINT32_MAX = 2**32 - 1


@dataclass(frozen=True)
class Argon2Params:
    memory: int  # KiB
    iterations: int
    parallelism: int
    salt_length: int
    key_length: int


DEFAULT_PARAMS = Argon2Params(
    memory=64 * 1024,
    iterations=1,
    parallelism=4,
    salt_length=16,
    key_length=32,
)


def _b64encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii").rstrip("=")


def _b64decode(data: str) -> bytes:
    if "=" in data:
        raise ValueError("unexpected padding")
    return base64.b64decode(data + "=" * (-len(data) % 4), validate=True)


def _derive(password: str, salt: bytes, memory: int, iterations: int,
            parallelism: int, key_length: int) -> bytes:
    return hash_secret_raw(
        secret=password.encode("utf-8"),
        salt=salt,
        time_cost=iterations,
        memory_cost=memory,
        parallelism=parallelism,
        hash_len=key_length,
        type=Type.ID,
        version=ARGON2_VERSION,
    )


def hash_password(password: str, params: Argon2Params = DEFAULT_PARAMS) -> str:
    """Hash ``password`` with a fresh random salt and return the encoded string."""
    salt = secrets.token_bytes(params.salt_length)
    digest = _derive(
        password,
        salt,
        params.memory,
        params.iterations,
        params.parallelism,
        params.key_length,
    )
    return (
        f"$argon2id$v={ARGON2_VERSION}"
        f"$m={params.memory},t={params.iterations},p={params.parallelism}"
        f"${_b64encode(salt)}${_b64encode(digest)}"
    )


def verify_password(password: str, encoded_hash: str) -> bool:
    """
    Check ``password`` against a stored Argon2id hash.

    Returns:
        True on match, False on mismatch

    Raises:
        PasswordHashError: if the stored hash is malformed, has an unsupported
            version, or cannot be recomputed with its parameters
    """
    parts = encoded_hash.split("$")
    if len(parts) != 6:
        raise PasswordHashError("invalid hash format")

    version_match = _VERSION_RE.match(parts[2])
    if version_match is None:
        raise PasswordHashError("invalid hash version", parts[2])
    version = int(version_match.group(1))
    if version != ARGON2_VERSION:
        raise PasswordHashError(
            "incompatible argon2 version", f"{version} != {ARGON2_VERSION}"
        )

    params_match = _PARAMS_RE.match(parts[3])
    if params_match is None:
        raise PasswordHashError("invalid hash parameters", parts[3])
    memory, iterations, parallelism = (int(g) for g in params_match.groups())
    if max(memory, iterations, parallelism) > _UINT32_MAX:
        raise PasswordHashError("invalid hash parameters", parts[3])

    try:
        salt = _b64decode(parts[4])
    except (binascii.Error, ValueError) as e:
        raise PasswordHashError("invalid salt encoding", str(e)) from e
    try:
        stored = _b64decode(parts[5])
    except (binascii.Error, ValueError) as e:
        raise PasswordHashError("invalid hash encoding", str(e)) from e

    try:
        candidate = _derive(
            password, salt, memory, iterations, parallelism, len(stored)
        )
    except (HashingError, OverflowError) as e:
        raise PasswordHashError("cannot recompute hash", str(e)) from e

    return hmac.compare_digest(candidate, stored)
