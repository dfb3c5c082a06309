"""JSON responses that must never be cached."""

from __future__ import annotations

from fastapi.responses import JSONResponse

from ballsville.domain.cache_policy import NO_STORE


def _no_store_json(payload: object, status_code: int = 200) -> JSONResponse:
    return JSONResponse(payload, status_code=status_code, headers={"cache-control": NO_STORE})
