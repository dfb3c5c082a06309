"""Use case for admin reads and writes of canonical section documents."""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field

from ballsville.app.use_cases.dependencies import Clock
from ballsville.app.use_cases.manifest import ManifestService, manifest_service_for
from ballsville.app.wiring import DefaultClock, DefaultObjectStoreProvider, DefaultSettingsProvider
from ballsville.domain.best_effort import BestEffortResult, run_best_effort
from ballsville.domain.normalizers import normalize_document
from ballsville.domain.season import coerce_season
from ballsville.domain.sections import SectionSpec, resolve_section
from ballsville.domain.snapshot import build_backup_meta, decide_snapshot
from ballsville.errors import ContentValidationError, ObjectStoreError
from ballsville.ports.object_store import JSON_CONTENT_TYPE, ObjectStore
from ballsville.utils.logger import get_logger
from ballsville.utils.now import Now

logger = get_logger(__name__)

DOCUMENT_CACHE_CONTROL = "no-store"


def _missing_store() -> ObjectStore:
    raise ValueError("store is required for ContentWriterUseCase")


def dump_document(document: Mapping[str, object]) -> str:
    return json.dumps(document, indent=2, ensure_ascii=False)


def load_document(body: bytes | str | None) -> dict[str, object] | None:
    """Parse a stored JSON object; anything unreadable counts as absent."""
    if body is None:
        return None
    try:
        parsed = json.loads(body)
    except ValueError:
        return None
    return parsed if isinstance(parsed, dict) else None


@dataclass(frozen=True)
class WriteResult:
    section: str
    season: int | None
    kind: str
    key: str
    document: dict[str, object]
    version: int
    manifest: BestEffortResult[dict[str, object]]
    backup: BestEffortResult[dict[str, object]]

    @property
    def updated_at(self) -> str:
        return str(self.document["updatedAt"])

    @property
    def warnings(self) -> list[str]:
        return [
            f"{name}: {result.error}"
            for name, result in (("manifest", self.manifest), ("backup", self.backup))
            if not result.ok
        ]

    def as_payload(self) -> dict[str, object]:
        return {
            "ok": True,
            "section": self.section,
            "season": self.season,
            "type": self.kind,
            "key": self.key,
            "updatedAt": self.updated_at,
            "version": self.version,
            "data": self.document,
            "manifest": {**self.manifest.as_dict(), "value": self.manifest.value},
            "backup": {**self.backup.as_dict(), "value": self.backup.value},
            "warnings": self.warnings,
        }


@dataclass
class ContentWriterUseCase:
    """Validate, normalize, stamp and persist one canonical document.

    Order of side effects for a write:

    1. reject bad input (nothing is touched),
    2. snapshot the previous document when its transition marker changes
       (tracker sections only, best-effort),
    3. one full-overwrite ``put`` of the canonical key,
    4. touch the section manifest (best-effort).
    """

    store: ObjectStore = field(default_factory=_missing_store)
    manifests: ManifestService | None = None
    clock: Clock = field(default_factory=DefaultClock)
    resolve_section: Callable[[str | None], SectionSpec] = resolve_section

    def __post_init__(self) -> None:
        if self.manifests is None:
            self.manifests = ManifestService(store=self.store, clock=self.clock)

    def _season_for(
        self,
        section: SectionSpec,
        season: object,
        payload: Mapping[str, object] | None = None,
    ) -> int | None:
        if season is None and payload is not None:
            season = payload.get("season")
        return coerce_season(season, required=section.seasoned)

    def read(
        self,
        section_slug: str,
        season: object = None,
        kind: str | None = None,
    ) -> dict[str, object]:
        section = self.resolve_section(section_slug)
        document_spec = section.document(kind)
        season_value = self._season_for(section, season)
        key = section.canonical_key(season_value, document_spec.kind)
        stored = self.store.get(key)
        document = load_document(stored.body) if stored is not None else None
        if stored is not None and document is None:
            logger.warning("Stored document %s is not a JSON object; treating as absent", key)
        return {
            "ok": True,
            "section": section.slug,
            "season": season_value,
            "type": document_spec.kind,
            "key": key,
            "data": document,
        }

    def write(
        self,
        section_slug: str,
        season: object,
        payload: object,
        kind: str | None = None,
    ) -> WriteResult:
        section = self.resolve_section(section_slug)
        document_spec = section.document(kind)
        if not isinstance(payload, Mapping):
            raise ContentValidationError("Body must be a JSON object")
        season_value = self._season_for(section, season, payload)

        version = self.manifests.reserve_version(
            section.slug, season_value, at_ms=self.clock.now_ms()
        )
        document = normalize_document(document_spec.variant, payload, season_value)
        document["updatedAt"] = Now.iso_from_milliseconds(version)
        key = section.canonical_key(season_value, document_spec.kind)

        backup = self._snapshot_previous(section, season_value, key, document, version)
        self.store.put(
            key,
            dump_document(document),
            content_type=JSON_CONTENT_TYPE,
            cache_control=DOCUMENT_CACHE_CONTROL,
        )
        manifest = self.manifests.touch_best_effort(section.slug, season_value, version=version)
        logger.info(
            "Wrote %s (section=%s season=%s type=%s manifest_ok=%s backup=%s)",
            key,
            section.slug,
            season_value,
            document_spec.kind,
            manifest.ok,
            "skipped" if backup.skipped else backup.ok,
        )
        return WriteResult(
            section=section.slug,
            season=season_value,
            kind=document_spec.kind,
            key=key,
            document=document,
            version=version,
            manifest=manifest,
            backup=backup,
        )

    def _snapshot_previous(
        self,
        section: SectionSpec,
        season: int | None,
        key: str,
        document: Mapping[str, object],
        version: int,
    ) -> BestEffortResult[dict[str, object]]:
        policy = section.snapshot
        if policy is None:
            return BestEffortResult.skip("section has no snapshot policy")
        try:
            previous = self.store.get(key)
        except ObjectStoreError as exc:
            logger.warning("Could not read previous %s for snapshot: %s", key, exc)
            return BestEffortResult.failure(str(exc))
        old_doc = load_document(previous.body) if previous is not None else None
        decision = decide_snapshot(old_doc, document, policy.marker_path)
        if not decision.should_snapshot:
            return BestEffortResult.skip(decision.reason)
        backup_key, meta_key = section.backup_keys(season)
        meta = build_backup_meta(policy, old_doc, decision, Now.iso_from_milliseconds(version))

        def write_backup() -> dict[str, object]:
            self.store.put(
                backup_key,
                previous.body,
                content_type=JSON_CONTENT_TYPE,
                cache_control=DOCUMENT_CACHE_CONTROL,
            )
            self.store.put(
                meta_key,
                dump_document(meta),
                content_type=JSON_CONTENT_TYPE,
                cache_control=DOCUMENT_CACHE_CONTROL,
            )
            logger.info(
                "Snapshot %s -> %s (%s: %s -> %s)",
                key,
                backup_key,
                policy.marker_path,
                decision.old_marker,
                decision.new_marker,
            )
            return {"key": backup_key, "metaKey": meta_key, "meta": meta}

        return run_best_effort(write_backup, logger=logger, description=f"Snapshot of {key}")

    def delete(
        self,
        section_slug: str,
        season: object = None,
        kind: str | None = None,
    ) -> dict[str, object]:
        """Delete a canonical document (and its backups).

        Manifests are never deleted. The manifest is touched only when the
        canonical document existed, so repeated deletes leave the version alone.
        """
        section = self.resolve_section(section_slug)
        document_spec = section.document(kind)
        season_value = self._season_for(section, season)
        key = section.canonical_key(season_value, document_spec.kind)
        existed = self.store.head(key) is not None
        deleted = []
        if existed:
            self.store.delete(key)
            deleted.append(key)
        for backup_key in section.backup_keys(season_value) or ():
            if self.store.head(backup_key) is not None:
                self.store.delete(backup_key)
                deleted.append(backup_key)
        if existed:
            manifest = self.manifests.touch_best_effort(section.slug, season_value)
        else:
            manifest = BestEffortResult.skip("nothing to delete")
        logger.info(
            "Deleted %s (section=%s season=%s)",
            ", ".join(deleted) or "nothing",
            section.slug,
            season_value,
        )
        return {
            "ok": True,
            "section": section.slug,
            "season": season_value,
            "type": document_spec.kind,
            "deleted": deleted,
            "manifest": {**manifest.as_dict(), "value": manifest.value},
        }


def get_content_writer_use_case() -> ContentWriterUseCase:
    settings = DefaultSettingsProvider().get_settings()
    store = DefaultObjectStoreProvider().get_store(settings)
    return ContentWriterUseCase(store=store, manifests=manifest_service_for(store))


__all__ = [
    "ContentWriterUseCase",
    "WriteResult",
    "dump_document",
    "get_content_writer_use_case",
    "load_document",
]
