"""Default dependency wiring for use-cases."""

from __future__ import annotations

from dataclasses import dataclass
from threading import Lock

from ballsville.config import Settings, get_settings
from ballsville.infra.clients.supabase_identity_client import SupabaseIdentityVerifier
from ballsville.infra.object_stores.object_store_provider import object_store
from ballsville.ports.identity_verifier import IdentityVerifier
from ballsville.ports.object_store import ObjectStore
from ballsville.utils.now import Now

_STORE_CACHE: dict[tuple[object, ...], ObjectStore] = {}
_STORE_CACHE_LOCK = Lock()


def _store_cache_key(settings: Settings) -> tuple[object, ...]:
    storage = settings.storage
    return (
        storage.backend,
        storage.bucket,
        storage.leaderboards_bucket,
        storage.endpoint_url,
        storage.region,
        storage.access_key_id,
        settings.leaderboards_prefix,
    )


def clear_store_cache() -> None:
    with _STORE_CACHE_LOCK:
        _STORE_CACHE.clear()


@dataclass(frozen=True)
class DefaultSettingsProvider:
    """Default settings provider."""

    def get_settings(self) -> Settings:
        return get_settings()


@dataclass(frozen=True)
class DefaultObjectStoreProvider:
    """Build one object store per storage configuration and reuse it.

    Reuse keeps the in-memory backend's contents alive across requests and
    lets boto3 pool connections for the S3 backend.
    """

    def get_store(self, settings: Settings) -> ObjectStore:
        cache_key = _store_cache_key(settings)
        with _STORE_CACHE_LOCK:
            store = _STORE_CACHE.get(cache_key)
            if store is None:
                store = object_store(settings)
                _STORE_CACHE[cache_key] = store
            return store


@dataclass(frozen=True)
class DefaultIdentityVerifierProvider:
    """Default Supabase-backed identity verifier provider."""

    def get_verifier(self, settings: Settings) -> IdentityVerifier:
        return SupabaseIdentityVerifier(settings.auth)


@dataclass(frozen=True)
class DefaultClock:
    """Default system clock."""

    def now_ms(self) -> int:
        return Now.as_milliseconds()


__all__ = [
    "DefaultClock",
    "DefaultIdentityVerifierProvider",
    "DefaultObjectStoreProvider",
    "DefaultSettingsProvider",
    "clear_store_cache",
]
