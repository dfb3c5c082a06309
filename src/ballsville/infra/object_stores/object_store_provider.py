"""Build the configured object store."""

from __future__ import annotations

from ballsville.define_settings__config import Settings
from ballsville.infra.object_stores.memory_object_store import MemoryObjectStore
from ballsville.infra.object_stores.prefix_routed_object_store import PrefixRoutedObjectStore
from ballsville.infra.object_stores.s3_object_store import S3ObjectStore
from ballsville.ports.object_store import ObjectStore
from ballsville.utils.logger import get_logger

logger = get_logger(__name__)


def object_store(settings: Settings) -> ObjectStore:
    """Return the object store described by ``settings.storage``."""
    storage = settings.storage
    if storage.backend == "memory":
        logger.info("Using in-memory object store")
        return MemoryObjectStore()
    default = S3ObjectStore.from_settings(storage)
    if not storage.leaderboards_bucket:
        return default
    leaderboards = S3ObjectStore.from_settings(storage, bucket=storage.leaderboards_bucket)
    return PrefixRoutedObjectStore(default, [(settings.leaderboards_prefix, leaderboards)])
