"""
Session token engine.

Tokens are HS256-signed JWTs carrying ``user_id``, ``username`` and ``role``
plus the registered ``exp``, ``iat``, ``nbf`` and ``iss`` claims.
"""

import logging
import os
import secrets
import threading
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional, Union

import jwt
from pydantic import ValidationError
from starlette.requests import Request

from myblog.core.errors import (
    AppError,
    MissingTokenError,
    TokenExpiredError,
    TokenInvalidError,
)

from .schemas import SessionClaims

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"
# Any HMAC family algorithm is accepted on validation; everything else
# (including "none") is rejected.
ACCEPTED_ALGORITHMS = ["HS256", "HS384", "HS512"]
ISSUER = "myblog-gogogo"
DEFAULT_EXPIRATION = timedelta(hours=24)
AUTH_COOKIE = "auth_token"
BEARER_PREFIX = "Bearer "


def generate_secret() -> str:
    """16 random bytes rendered as 32 hex characters."""
    return secrets.token_hex(16)


class TokenService:
    """
    Mints, validates and refreshes session tokens.

    One instance is created at start-up and shared by all requests. The
    signing key and lifetime overrides (``set_secret``, ``set_expiration``)
    are for start-up and tests and must not race with token operations.
    """

    def __init__(
        self,
        secret: Union[str, bytes, None] = None,
        expiration: timedelta = DEFAULT_EXPIRATION,
    ):
        self._lock = threading.Lock()
        self._secret = b""
        self._expiration = expiration
        self.set_secret(secret if secret else generate_secret())

    @property
    def expiration(self) -> timedelta:
        return self._expiration

    def set_secret(self, secret: Union[str, bytes]) -> None:
        if isinstance(secret, str):
            secret = secret.encode("utf-8")
        with self._lock:
            self._secret = secret

    def set_expiration(self, expiration: timedelta) -> None:
        with self._lock:
            self._expiration = expiration

    def generate_token(self, user_id: int, username: str, role: str) -> str:
        now = datetime.now(timezone.utc)
        with self._lock:
            secret, expiration = self._secret, self._expiration

        payload = {
            "user_id": user_id,
            "username": username,
            "role": role,
            "exp": now + expiration,
            "iat": now,
            "nbf": now,
            "iss": ISSUER,
        }
        return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)

    def validate_token(self, token: str) -> SessionClaims:
        """
        Verify signature and expiry and return the claims.

        Raises:
            TokenExpiredError: if the expiry is in the past
            TokenInvalidError: on a malformed token, a non-HMAC algorithm, a
                bad signature or missing claims
        """
        with self._lock:
            secret = self._secret

        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=ACCEPTED_ALGORITHMS,
                options={"require": ["exp", "iat", "nbf"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError("token has expired") from e
        except jwt.InvalidAlgorithmError as e:
            raise TokenInvalidError("unexpected signing method", str(e)) from e
        except jwt.InvalidTokenError as e:
            raise TokenInvalidError("invalid token", str(e)) from e

        try:
            return SessionClaims.model_validate(payload)
        except ValidationError as e:
            raise TokenInvalidError("invalid token claims", str(e)) from e

    def refresh_token(self, token: str) -> str:
        """Validate ``token`` and mint a new one for the same identity."""
        claims = self.validate_token(token)
        return self.generate_token(claims.user_id, claims.username, claims.role)

    def extract_token(self, request: Request) -> str:
        """
        Read the raw token from a request.

        The ``Authorization`` header wins: a ``Bearer `` prefix is stripped,
        any other value is used as is. Without a header, or with an empty
        ``Bearer`` value, the ``auth_token`` cookie is used.

        Raises:
            MissingTokenError: if neither source carries a token
        """
        header = request.headers.get("Authorization", "")
        token = header
        if header.startswith(BEARER_PREFIX) or header == BEARER_PREFIX.strip():
            token = header[len(BEARER_PREFIX):]
        if token:
            return token

        cookie = request.cookies.get(AUTH_COOKIE)
        if cookie:
            return cookie

        raise MissingTokenError("missing authorization token")

    def token_from_request(self, request: Request) -> SessionClaims:
        return self.validate_token(self.extract_token(request))

    def is_admin(self, request: Request) -> bool:
        """True only for a valid ``Bearer`` header token with the admin role."""
        header = request.headers.get("Authorization", "")
        if not header.startswith(BEARER_PREFIX):
            return False
        try:
            claims = self.validate_token(header[len(BEARER_PREFIX):])
        except AppError as e:
            logger.debug(f"Admin check rejected token: {e}")
            return False
        return claims.role == "admin"


def load_or_create_secret(secret_file: Union[str, Path]) -> str:
    """
    Read the signing key persisted at ``secret_file``.

    When the file is missing or empty a new key is generated and written
    with mode 0600 so tokens survive restarts.

    Raises:
        OSError: if the file cannot be created
    """
    path = Path(secret_file)
    try:
        secret = path.read_text(encoding="utf-8").strip()
    except FileNotFoundError:
        secret = ""
    if secret:
        logger.debug(f"Loaded JWT secret from {path}")
        return secret

    secret = generate_secret()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(secret)
        os.chmod(path, 0o600)
    except OSError as e:
        logger.error(f"Failed to save JWT secret to {path}: {e}")
        raise
    logger.info(f"Generated new JWT secret and saved it to {path}")
    return secret


def token_service_from_settings(
    secret: Optional[str],
    expire_hours: int,
    secret_file: Union[str, Path, None] = None,
) -> TokenService:
    """
    Build the process token service.

    An explicit ``secret`` wins; otherwise the key is loaded from (or created
    at) ``secret_file``. Without either a per-process key is generated.
    """
    if not secret:
        if secret_file:
            secret = load_or_create_secret(secret_file)
        else:
            logger.info("JWT_SECRET not set, generated a per-process signing key")
    return TokenService(secret=secret, expiration=timedelta(hours=expire_hours))
