"""Use case for reading and restoring tracker backups."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from ballsville.app.use_cases.content_writer import DOCUMENT_CACHE_CONTROL, load_document
from ballsville.app.use_cases.manifest import ManifestService, manifest_service_for
from ballsville.app.wiring import DefaultObjectStoreProvider, DefaultSettingsProvider
from ballsville.domain.season import coerce_season
from ballsville.domain.sections import SectionSpec, resolve_section
from ballsville.errors import BackupNotFoundError, UnknownSectionError
from ballsville.ports.object_store import JSON_CONTENT_TYPE, ObjectStore
from ballsville.utils.logger import get_logger

logger = get_logger(__name__)


def _missing_store() -> ObjectStore:
    raise ValueError("store is required for BackupUseCase")


@dataclass
class BackupUseCase:
    store: ObjectStore = field(default_factory=_missing_store)
    manifests: ManifestService | None = None
    resolve_section: Callable[[str | None], SectionSpec] = resolve_section

    def __post_init__(self) -> None:
        if self.manifests is None:
            self.manifests = ManifestService(store=self.store)

    def _locate(self, section_slug: str, season: object) -> tuple[SectionSpec, int | None, str, str]:
        section = self.resolve_section(section_slug)
        if section.snapshot is None:
            raise UnknownSectionError(f"Section '{section.slug}' keeps no backups")
        season_value = coerce_season(season, required=section.seasoned)
        backup_key, meta_key = section.backup_keys(season_value)
        return section, season_value, backup_key, meta_key

    def read_backup(self, section_slug: str, season: object = None) -> dict[str, object]:
        section, season_value, backup_key, meta_key = self._locate(section_slug, season)
        backup = self.store.get(backup_key)
        meta = self.store.get(meta_key)
        return {
            "ok": True,
            "section": section.slug,
            "season": season_value,
            "key": backup_key,
            "data": load_document(backup.body) if backup else None,
            "meta": load_document(meta.body) if meta else None,
        }

    def restore(self, section_slug: str, season: object = None) -> dict[str, object]:
        """Copy the backup over the canonical document and touch the manifest.

        The restored document keeps the ``updatedAt`` it had when it was
        backed up; only the manifest moves forward.
        """
        section, season_value, backup_key, _ = self._locate(section_slug, season)
        backup = self.store.get(backup_key)
        if backup is None:
            raise BackupNotFoundError(f"No backup found at {backup_key}")
        key = section.canonical_key(season_value)
        self.store.put(
            key,
            backup.body,
            content_type=JSON_CONTENT_TYPE,
            cache_control=DOCUMENT_CACHE_CONTROL,
        )
        manifest = self.manifests.touch_best_effort(section.slug, season_value)
        logger.info("Restored %s from %s", key, backup_key)
        return {
            "ok": True,
            "section": section.slug,
            "season": season_value,
            "key": key,
            "restoredFrom": backup_key,
            "data": load_document(backup.body),
            "manifest": {**manifest.as_dict(), "value": manifest.value},
        }


def get_backup_use_case() -> BackupUseCase:
    settings = DefaultSettingsProvider().get_settings()
    store = DefaultObjectStoreProvider().get_store(settings)
    return BackupUseCase(store=store, manifests=manifest_service_for(store))


__all__ = ["BackupUseCase", "get_backup_use_case"]
