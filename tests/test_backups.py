import json

import pytest

from ballsville.app.use_cases.backups import BackupUseCase
from ballsville.app.use_cases.content_writer import ContentWriterUseCase
from ballsville.app.use_cases.manifest import ManifestService
from ballsville.errors import BackupNotFoundError, UnknownSectionError
from ballsville.infra.object_stores.memory_object_store import MemoryObjectStore
from http_fakes import StepClock

TRACKER_KEY = "data/biggame/wagers_2025.json"
MANIFEST_KEY = "data/manifests/biggame-wagers_2025.json"


@pytest.fixture()
def store() -> MemoryObjectStore:
    return MemoryObjectStore()


@pytest.fixture()
def manifests(store: MemoryObjectStore) -> ManifestService:
    return ManifestService(store=store, clock=StepClock(start=1_000))


def _seed_transition(store, manifests) -> str:
    original = json.dumps({"eligibility": {"computedAt": "T1"}, "updatedAt": "2025-12-01T00:00:00.000Z"})
    store.put(TRACKER_KEY, original, content_type="application/json")
    writer = ContentWriterUseCase(store=store, manifests=manifests, clock=StepClock(start=2_000))
    writer.write("biggame-wagers", 2025, {"eligibility": {"computedAt": "T2"}})
    return original


def test_read_backup_returns_data_and_meta(store, manifests) -> None:
    _seed_transition(store, manifests)
    backups = BackupUseCase(store=store, manifests=manifests)

    payload = backups.read_backup("biggame-wagers", 2025)

    assert payload["key"] == "data/biggame/wagers_2025_wk15_backup.json"
    assert payload["data"]["eligibility"]["computedAt"] == "T1"
    assert payload["meta"]["toEligibilityComputedAt"] == "T2"


def test_read_backup_when_none_exists(store, manifests) -> None:
    payload = BackupUseCase(store=store, manifests=manifests).read_backup("dynasty-wagers", 2025)
    assert payload["data"] is None
    assert payload["meta"] is None


def test_restore_copies_backup_verbatim_and_touches_manifest(store, manifests) -> None:
    original = _seed_transition(store, manifests)
    before = store.get(MANIFEST_KEY).json()["version"]

    result = BackupUseCase(store=store, manifests=manifests).restore("biggame-wagers", "2025")

    assert store.get(TRACKER_KEY).text() == original
    assert result["data"]["updatedAt"] == "2025-12-01T00:00:00.000Z"
    assert store.get(MANIFEST_KEY).json()["version"] > before
    assert result["manifest"]["ok"] is True


def test_restore_without_backup_raises(store, manifests) -> None:
    with pytest.raises(BackupNotFoundError):
        BackupUseCase(store=store, manifests=manifests).restore("mini-leagues-wagers", 2025)
    assert store.keys() == []


def test_sections_without_snapshot_policy_have_no_backups(store, manifests) -> None:
    with pytest.raises(UnknownSectionError):
        BackupUseCase(store=store, manifests=manifests).read_backup("redraft", 2025)
