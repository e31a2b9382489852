"""Session token API router."""

import logging

from fastapi import APIRouter, Request, Response

from myblog.auth.deps import CurrentClaims, Tokens
from myblog.auth.schemas import CurrentUserResponse, TokenResponse
from myblog.auth.tokens import AUTH_COOKIE

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.get("/me", response_model=CurrentUserResponse)
async def me(claims: CurrentClaims):
    """Identity carried by the presented token."""
    return CurrentUserResponse(
        user_id=claims.user_id,
        username=claims.username,
        role=claims.role,
        expires_at=claims.expires_at,
    )


@router.post("/refresh", response_model=TokenResponse)
async def refresh(request: Request, response: Response, tokens: Tokens):
    """
    Exchange a valid token for a new one with a fresh expiry.

    The new token is returned in the body and set as the ``auth_token``
    cookie.
    """
    new_token = tokens.refresh_token(tokens.extract_token(request))
    max_age = int(tokens.expiration.total_seconds())

    response.set_cookie(
        key=AUTH_COOKIE,
        value=new_token,
        httponly=True,
        samesite="lax",
        max_age=max_age,
        path="/",
    )
    logger.info("Refreshed session token")

    return TokenResponse(token=new_token, expires_in=max_age)
