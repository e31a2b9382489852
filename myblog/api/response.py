"""
Uniform JSON response envelope.

Every body has the shape ``{success, message?, data?, error?, code?}``; paged
bodies add ``pagination``. Unset optional fields are omitted.
"""

import logging
import math
from typing import Any, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

from myblog.core.errors import AppError

logger = logging.getLogger(__name__)

CREATED_MESSAGE = "创建成功"


class Envelope(BaseModel):
    success: bool
    message: Optional[str] = None
    data: Optional[Any] = None
    error: Optional[str] = None
    code: Optional[str] = None


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        pages = math.ceil(total / limit) if limit > 0 else 0
        return cls(page=page, limit=limit, total=total, pages=pages)


class PagedEnvelope(Envelope):
    pagination: Optional[Pagination] = None


def _json(status_code: int, body: Envelope) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", exclude_none=True),
    )


def success(data: Any = None, message: Optional[str] = None) -> JSONResponse:
    return _json(status.HTTP_200_OK, Envelope(success=True, message=message, data=data))


def created(data: Any = None) -> JSONResponse:
    return _json(
        status.HTTP_201_CREATED,
        Envelope(success=True, message=CREATED_MESSAGE, data=data),
    )


def no_content() -> Response:
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def paged(data: Any, page: int, limit: int, total: int) -> JSONResponse:
    return _json(
        status.HTTP_200_OK,
        PagedEnvelope(
            success=True,
            data=data,
            pagination=Pagination.build(page, limit, total),
        ),
    )


def error(
    status_code: int,
    code: str,
    message: str,
    err: Optional[BaseException] = None,
) -> JSONResponse:
    return _json(
        status_code,
        Envelope(
            success=False,
            message=message,
            code=code,
            error=str(err) if err is not None else None,
        ),
    )


def bad_request(code: str, message: str, err: Optional[BaseException] = None) -> JSONResponse:
    return error(status.HTTP_400_BAD_REQUEST, code, message, err)


def unauthorized(code: str, message: str) -> JSONResponse:
    return error(status.HTTP_401_UNAUTHORIZED, code, message)


def forbidden(code: str, message: str) -> JSONResponse:
    return error(status.HTTP_403_FORBIDDEN, code, message)


def not_found(code: str, message: str) -> JSONResponse:
    return error(status.HTTP_404_NOT_FOUND, code, message)


def conflict(code: str, message: str) -> JSONResponse:
    return error(status.HTTP_409_CONFLICT, code, message)


def internal_error(
    code: str, message: str, err: Optional[BaseException] = None
) -> JSONResponse:
    return error(status.HTTP_500_INTERNAL_SERVER_ERROR, code, message, err)


def service_unavailable(code: str, message: str) -> JSONResponse:
    return error(status.HTTP_503_SERVICE_UNAVAILABLE, code, message)


def status_for_error(exc: BaseException) -> int:
    """
    HTTP status for an exception.

    Taxonomy errors carry their own status (NotFound 404, BadRequest 400,
    Unauthorized 401, Forbidden 403, Conflict 409, ...); anything else is 500.
    """
    if isinstance(exc, AppError):
        return exc.status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def handle_error(exc: BaseException) -> JSONResponse:
    if isinstance(exc, AppError):
        return error(status_for_error(exc), exc.code, exc.message, exc)
    return internal_error("INTERNAL_ERROR", str(exc), exc)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """FastAPI exception handler rendering :class:`AppError` as an envelope."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc}")
    return handle_error(exc)
