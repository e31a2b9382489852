"""
Static file gate.

Serves files under a root directory with a fixed extension -> MIME table.
Directories are never listed: a path resolving to a directory is a 404.
Range requests and conditional GETs (ETag / Last-Modified from the file's
mtime) are handled by Starlette.
"""

import logging
import os
from typing import Union

from starlette.datastructures import Headers
from starlette.responses import FileResponse, Response
from starlette.staticfiles import NotModifiedResponse, StaticFiles
from starlette.types import Scope

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "text/plain; charset=utf-8"

MIME_TYPES = {
    ".css": "text/css; charset=utf-8",
    ".js": "application/javascript; charset=utf-8",
    ".json": "application/json; charset=utf-8",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".svg": "image/svg+xml",
    ".ico": "image/x-icon",
    ".woff": "font/woff",
    ".woff2": "font/woff2",
    ".ttf": "font/ttf",
    ".eot": "application/vnd.ms-fontobject",
    ".mp3": "audio/mpeg",
    ".mp4": "video/mp4",
    ".webm": "video/webm",
    ".pdf": "application/pdf",
    ".html": "text/html; charset=utf-8",
    ".htm": "text/html; charset=utf-8",
}

MP4_AUDIO_TYPE = "audio/mp4"


def mime_type_for(path: Union[str, os.PathLike]) -> str:
    """MIME type for ``path`` by extension, case-insensitive."""
    ext = os.path.splitext(os.fspath(path))[1].lower()
    return MIME_TYPES.get(ext, DEFAULT_MIME_TYPE)


def is_mp4_container(path: Union[str, os.PathLike]) -> bool:
    """True when the file starts with an ISO-BMFF ``ftyp`` box."""
    try:
        with open(path, "rb") as f:
            header = f.read(12)
    except OSError as e:
        logger.debug(f"Could not sniff {path}: {e}")
        return False
    return len(header) >= 12 and header[4:8] == b"ftyp"


def content_type_for(path: Union[str, os.PathLike]) -> str:
    """
    Content type for a file on disk.

    ``.mp3`` files that are really MP4/M4A audio are served as ``audio/mp4``.
    """
    mime_type = mime_type_for(path)
    if os.fspath(path).lower().endswith(".mp3") and is_mp4_container(path):
        return MP4_AUDIO_TYPE
    return mime_type


class StaticFileGate(StaticFiles):
    """``StaticFiles`` with a fixed MIME table and no directory listing."""

    def __init__(self, directory: Union[str, os.PathLike], check_dir: bool = True):
        super().__init__(directory=directory, html=False, check_dir=check_dir)

    def file_response(
        self,
        full_path: Union[str, os.PathLike],
        stat_result: os.stat_result,
        scope: Scope,
        status_code: int = 200,
    ) -> Response:
        request_headers = Headers(scope=scope)
        response = FileResponse(
            full_path,
            status_code=status_code,
            stat_result=stat_result,
            media_type=content_type_for(full_path),
        )
        if self.is_not_modified(response.headers, request_headers):
            return NotModifiedResponse(response.headers)
        return response
