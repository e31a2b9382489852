"""Application error taxonomy.

Every error raised by the core carries a short machine-readable code and the
HTTP status the response layer should use for it. Causes are chained with
``raise ... from exc`` so the original failure stays reachable through
``__cause__``.
"""

from typing import Optional


class AppError(Exception):
    """Base class for all application errors."""

    code = "INTERNAL_ERROR"
    status_code = 500

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class NotFoundError(AppError):
    code = "NOT_FOUND"
    status_code = 404


class BadRequestError(AppError):
    code = "BAD_REQUEST"
    status_code = 400


class UnauthorizedError(AppError):
    code = "UNAUTHORIZED"
    status_code = 401


class ForbiddenError(AppError):
    code = "FORBIDDEN"
    status_code = 403


class ConflictError(AppError):
    code = "CONFLICT"
    status_code = 409


class InternalError(AppError):
    code = "INTERNAL_ERROR"
    status_code = 500


class GoneError(AppError):
    code = "GONE"
    status_code = 410


class ServiceUnavailableError(AppError):
    code = "SERVICE_UNAVAILABLE"
    status_code = 503


# Token engine


class TokenInvalidError(UnauthorizedError):
    """Raised when a token cannot be parsed, has a bad signature or algorithm."""

    code = "TOKEN_INVALID"


class TokenExpiredError(UnauthorizedError):
    """Raised when a token's expiry is in the past."""

    code = "TOKEN_EXPIRED"


class MissingTokenError(UnauthorizedError):
    code = "TOKEN_MISSING"


# Password hashing


class PasswordHashError(BadRequestError):
    """Raised when a stored password hash cannot be decoded."""

    code = "INVALID_HASH"


# Hybrid crypto


class CryptoError(BadRequestError):
    """Raised on key parsing, shared-secret derivation or decryption failure."""

    code = "CRYPTO_ERROR"


# Database drivers


class DriverError(InternalError):
    """Raised when a backend fails to connect or configure its pool."""

    code = "DRIVER_ERROR"

    def __init__(self, backend: str, message: str, details: Optional[str] = None):
        super().__init__(f"{backend}: {message}", details)
        self.backend = backend


class DriverNotFoundError(NotFoundError):
    code = "DRIVER_NOT_FOUND"


class DriverRegistrationError(RuntimeError):
    """Programming error: duplicate or empty driver registration.

    Never rendered as a response; propagates and aborts start-up.
    """


# Schema bootstrap


class BootstrapError(InternalError):
    """Raised when table creation or the default admin insert fails."""

    code = "BOOTSTRAP_ERROR"
