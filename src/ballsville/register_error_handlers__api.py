"""Map domain errors onto HTTP responses."""

from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from ballsville.errors import (
    BackupNotFoundError,
    ContentValidationError,
    ObjectStoreError,
    UnknownSectionError,
    UploadTooLargeError,
)
from ballsville.no_store_json__api import _no_store_json
from ballsville.utils.logger import get_logger

logger = get_logger(__name__)

_STATUS_BY_ERROR: tuple[tuple[type[Exception], int], ...] = (
    (UploadTooLargeError, status.HTTP_413_REQUEST_ENTITY_TOO_LARGE),
    (ContentValidationError, status.HTTP_400_BAD_REQUEST),
    (UnknownSectionError, status.HTTP_404_NOT_FOUND),
    (BackupNotFoundError, status.HTTP_404_NOT_FOUND),
    (ObjectStoreError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def _status_for(exc: Exception) -> int:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def _handle_domain_error(request: Request, exc: Exception) -> JSONResponse:
    status_code = _status_for(exc)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    else:
        logger.info("%s %s rejected (%s): %s", request.method, request.url.path, status_code, exc)
    return _no_store_json({"ok": False, "error": str(exc)}, status_code=status_code)


def register_error_handlers(app: FastAPI) -> None:
    for error_type, _ in _STATUS_BY_ERROR:
        app.add_exception_handler(error_type, _handle_domain_error)
