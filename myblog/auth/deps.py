"""FastAPI dependencies for authentication."""

from typing import Annotated

from fastapi import Depends, Request

from myblog.core.errors import ForbiddenError

from .schemas import SessionClaims
from .tokens import TokenService


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


async def get_current_claims(
    request: Request,
    tokens: TokenService = Depends(get_token_service),
) -> SessionClaims:
    """
    FastAPI dependency returning the claims of the presented token.

    The token is read from the Authorization header (with or without the
    ``Bearer`` prefix) or from the ``auth_token`` cookie.

    Raises:
        MissingTokenError: no token was presented (401)
        TokenExpiredError, TokenInvalidError: the token was rejected (401)
    """
    return tokens.token_from_request(request)


async def require_admin(
    claims: SessionClaims = Depends(get_current_claims),
) -> SessionClaims:
    """
    FastAPI dependency admitting only admin sessions.

    The token is accepted from the header or the cookie, like
    ``get_current_claims``.

    Raises:
        MissingTokenError, TokenExpiredError, TokenInvalidError: 401
        ForbiddenError: the token is valid but not an admin's (403)
    """
    if not claims.is_admin:
        raise ForbiddenError("admin privileges required")
    return claims


# Type aliases for cleaner dependency injection
Tokens = Annotated[TokenService, Depends(get_token_service)]
CurrentClaims = Annotated[SessionClaims, Depends(get_current_claims)]
AdminClaims = Annotated[SessionClaims, Depends(require_admin)]
