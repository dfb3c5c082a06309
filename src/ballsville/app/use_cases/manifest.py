"""Per-section manifests: the version signal readers use for cache busting."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from threading import Lock
from urllib.parse import quote
from weakref import WeakKeyDictionary

from ballsville.app.use_cases.dependencies import Clock
from ballsville.app.wiring import DefaultClock, DefaultObjectStoreProvider, DefaultSettingsProvider
from ballsville.domain.best_effort import BestEffortResult, run_best_effort
from ballsville.domain.keys import manifest_key
from ballsville.errors import ObjectStoreError
from ballsville.ports.object_store import JSON_CONTENT_TYPE, ObjectStore
from ballsville.utils.logger import get_logger
from ballsville.utils.now import Now

logger = get_logger(__name__)

MANIFEST_CACHE_CONTROL = "no-store"

_SERVICES: WeakKeyDictionary = WeakKeyDictionary()
_SERVICES_LOCK = Lock()


def _missing_store() -> ObjectStore:
    raise ValueError("store is required for ManifestService")


def fallback_manifest(section: str, season: int | None) -> dict[str, object]:
    """Manifest returned when none is stored (or it cannot be read)."""
    return {"section": section, "season": season, "updatedAt": 0}


def versioned_url(key: str, token: str, proxy_prefix: str = "r2") -> str:
    """Public URL for ``key`` with an already URL-safe ``version_token`` as ``v``."""
    path = f"/{proxy_prefix.strip('/')}/{key.lstrip('/')}"
    return f"{path}?v={token}"


@dataclass
class ManifestService:
    """Write and read ``data/manifests/<section>[_<season>].json``.

    ``touch`` always overwrites the whole manifest. Versions issued by one
    service instance strictly increase per manifest key, even when two
    touches land in the same millisecond.
    """

    store: ObjectStore = field(default_factory=_missing_store)
    clock: Clock = field(default_factory=DefaultClock)
    _last_versions: dict[str, int] = field(default_factory=dict, init=False, repr=False)
    _lock: Lock = field(default_factory=Lock, init=False, repr=False)

    def _next_version(self, key: str, at_ms: int | None) -> int:
        candidate = at_ms if at_ms is not None else self.clock.now_ms()
        with self._lock:
            previous = self._last_versions.get(key)
            if previous is not None and candidate <= previous:
                candidate = previous + 1
            self._last_versions[key] = candidate
        return candidate

    def reserve_version(self, section: str, season: int | None, at_ms: int | None = None) -> int:
        """Issue the next version for a manifest without writing it.

        Writers stamp their document with this value and pass it back to
        ``touch`` so document and manifest carry the same instant.
        """
        return self._next_version(manifest_key(section, season), at_ms)

    def touch(
        self,
        section: str,
        season: int | None,
        *,
        version: int | None = None,
    ) -> dict[str, object]:
        key = manifest_key(section, season)
        if version is None:
            version = self._next_version(key, None)
        manifest = {
            "section": section,
            "season": season,
            "updatedAt": Now.iso_from_milliseconds(version),
            "version": version,
        }
        self.store.put(
            key,
            json.dumps(manifest, indent=2),
            content_type=JSON_CONTENT_TYPE,
            cache_control=MANIFEST_CACHE_CONTROL,
        )
        logger.info("Touched manifest %s (version=%s)", key, version)
        return manifest

    def touch_best_effort(
        self,
        section: str,
        season: int | None,
        *,
        version: int | None = None,
    ) -> BestEffortResult[dict[str, object]]:
        return run_best_effort(
            lambda: self.touch(section, season, version=version),
            logger=logger,
            description=f"Manifest touch for {manifest_key(section, season)}",
        )

    def read(self, section: str, season: int | None) -> dict[str, object]:
        """Return the stored manifest, or the ``updatedAt: 0`` fallback."""
        key = manifest_key(section, season)
        try:
            stored = self.store.get(key)
        except ObjectStoreError as exc:
            logger.warning("Manifest fetch failed for %s: %s", key, exc)
            return fallback_manifest(section, season)
        if stored is None:
            return fallback_manifest(section, season)
        try:
            manifest = stored.json()
        except ValueError as exc:
            logger.warning("Manifest %s is not valid JSON: %s", key, exc)
            return fallback_manifest(section, season)
        if not isinstance(manifest, dict) or not manifest.get("updatedAt"):
            return fallback_manifest(section, season)
        return manifest

    def read_with_fallback(self, section: str, season: int | None) -> dict[str, object]:
        """Prefer the seasoned manifest; fall back to the section-wide one."""
        if season is None:
            return self.read(section, None)
        manifest = self.read(section, season)
        if manifest.get("updatedAt"):
            return manifest
        section_wide = self.read(section, None)
        return section_wide if section_wide.get("updatedAt") else manifest

    @staticmethod
    def token_from(manifest: dict[str, object]) -> str:
        token = manifest.get("version") or manifest.get("updatedAt") or 0
        return quote(str(token), safe="")

    def version_token(self, section: str, season: int | None) -> str:
        """URL-safe token that changes whenever the manifest is touched."""
        return self.token_from(self.read_with_fallback(section, season))


def manifest_service_for(store: ObjectStore) -> ManifestService:
    """Return the shared service for ``store`` so version guards span requests."""
    with _SERVICES_LOCK:
        service = _SERVICES.get(store)
        if service is None:
            service = ManifestService(store=store)
            _SERVICES[store] = service
        return service


def get_manifest_service() -> ManifestService:
    settings = DefaultSettingsProvider().get_settings()
    return manifest_service_for(DefaultObjectStoreProvider().get_store(settings))


__all__ = [
    "MANIFEST_CACHE_CONTROL",
    "ManifestService",
    "fallback_manifest",
    "get_manifest_service",
    "manifest_service_for",
    "versioned_url",
]
