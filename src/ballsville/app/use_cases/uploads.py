"""Use case for admin media uploads."""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field

from ballsville.app.use_cases.dependencies import Clock
from ballsville.app.wiring import DefaultClock, DefaultObjectStoreProvider, DefaultSettingsProvider
from ballsville.define_config_defaults__config import (
    DEFAULT_PROXY_PREFIX,
    DEFAULT_UPLOAD_MAX_BYTES,
    DEFAULT_UPLOAD_PREFIX,
)
from ballsville.domain.coercion import slugify
from ballsville.errors import ContentValidationError, UploadTooLargeError
from ballsville.ports.object_store import ObjectStore
from ballsville.utils.generate_id import generate_id
from ballsville.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_UPLOAD_SECTION = "uploads"
DEFAULT_UPLOAD_CONTENT_TYPE = "application/octet-stream"
_UNSAFE_FILENAME_RE = re.compile(r"[^a-z0-9._-]+")
_DASH_RUN_RE = re.compile(r"-+")
_FILENAME_LIMIT = 80


def _missing_store() -> ObjectStore:
    raise ValueError("store is required for UploadUseCase")


def sanitize_filename(name: str | None) -> str:
    cleaned = _UNSAFE_FILENAME_RE.sub("-", (name or "upload").strip().lower())
    return _DASH_RUN_RE.sub("-", cleaned)[:_FILENAME_LIMIT] or "upload"


def file_extension(name: str) -> str:
    ext = name.rsplit(".", 1)[-1] if "." in name else ""
    return ext or "bin"


@dataclass
class UploadUseCase:
    store: ObjectStore = field(default_factory=_missing_store)
    max_bytes: int = DEFAULT_UPLOAD_MAX_BYTES
    prefix: str = DEFAULT_UPLOAD_PREFIX
    proxy_prefix: str = DEFAULT_PROXY_PREFIX
    clock: Clock = field(default_factory=DefaultClock)
    random_suffix: Callable[[], str] = lambda: generate_id(6)

    def upload_key(self, filename: str | None, section: str | None = None) -> str:
        folder = slugify(section or "") or DEFAULT_UPLOAD_SECTION
        ext = file_extension(sanitize_filename(filename))
        return f"{self.prefix}/{folder}/{self.clock.now_ms()}-{self.random_suffix()}.{ext}"

    def check_size(self, size: int | None) -> None:
        """Reject a declared size over the cap before the body is read."""
        if size is not None and size > self.max_bytes:
            raise UploadTooLargeError(
                f"File too large (max {self.max_bytes // (1024 * 1024)}MB)"
            )

    def upload(
        self,
        filename: str | None,
        content: bytes,
        content_type: str | None = None,
        section: str | None = None,
    ) -> dict[str, object]:
        if not content:
            raise ContentValidationError("Missing file field")
        self.check_size(len(content))
        key = self.upload_key(filename, section)
        self.store.put(key, content, content_type=content_type or DEFAULT_UPLOAD_CONTENT_TYPE)
        logger.info("Uploaded %s (%s bytes)", key, len(content))
        return {
            "ok": True,
            "key": key,
            "url": f"/{self.proxy_prefix}/{key}",
            "size": len(content),
            "contentType": content_type or DEFAULT_UPLOAD_CONTENT_TYPE,
        }


def get_upload_use_case() -> UploadUseCase:
    settings = DefaultSettingsProvider().get_settings()
    return UploadUseCase(
        store=DefaultObjectStoreProvider().get_store(settings),
        max_bytes=settings.upload_max_bytes,
        prefix=settings.upload_prefix,
        proxy_prefix=settings.proxy_prefix,
    )


__all__ = [
    "UploadUseCase",
    "file_extension",
    "get_upload_use_case",
    "sanitize_filename",
]
