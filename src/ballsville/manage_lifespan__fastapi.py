"""FastAPI lifespan hook."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from ballsville.config import get_settings
from ballsville.utils.logger import get_logger, set_level

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    """Apply the configured log level and report the storage backend."""
    settings = get_settings()
    set_level(settings.log_level)
    if not settings.admin_emails:
        logger.warning("ADMIN_EMAILS is empty; admin endpoints will refuse every request")
    logger.info(
        "Starting ballsville (storage=%s bucket=%s public_base=%s)",
        settings.storage.backend,
        settings.storage.bucket or "-",
        settings.storage.public_base_url or "-",
    )
    yield
