"""Administration endpoints; every route requires an admin session."""

import logging

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel
from sqlalchemy.orm import Session

from myblog.auth.deps import AdminClaims
from myblog.db.deps import get_db
from myblog.db.repositories import (
    CommentRepository,
    PassageRepository,
    UserRepository,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"])


class AdminStatsResponse(BaseModel):
    success: bool = True
    passages: int
    published: int
    comments: int
    users: int
    ecc_sessions: int


@router.get("/stats", response_model=AdminStatsResponse)
def get_stats(
    request: Request,
    claims: AdminClaims,
    db: Session = Depends(get_db),
):
    """Content counts and active key-exchange sessions."""
    logger.debug(f"Admin stats requested by {claims.username}")
    passages = PassageRepository(db)
    return AdminStatsResponse(
        passages=passages.count(),
        published=passages.count_by_status("published"),
        comments=CommentRepository(db).count(),
        users=UserRepository(db).count(),
        ecc_sessions=request.app.state.ecc_sessions.count(),
    )
