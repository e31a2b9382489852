"""Pydantic schemas for session tokens."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class SessionClaims(BaseModel):
    """Claims carried by a session token."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: int
    username: str
    role: str
    expires_at: datetime = Field(..., alias="exp")
    issued_at: datetime = Field(..., alias="iat")
    not_before: datetime = Field(..., alias="nbf")
    issuer: str = Field(..., alias="iss")

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


class TokenResponse(BaseModel):
    """Response schema for a freshly minted token."""

    token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Token lifetime in seconds")


class CurrentUserResponse(BaseModel):
    success: bool = True
    user_id: int
    username: str
    role: str
    expires_at: datetime
