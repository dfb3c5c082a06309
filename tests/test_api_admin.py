import asyncio
import json
import os
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from ballsville.api import app, upload_media
from ballsville.app.use_cases.backups import BackupUseCase, get_backup_use_case
from ballsville.app.use_cases.content_writer import ContentWriterUseCase, get_content_writer_use_case
from ballsville.app.use_cases.delivery_proxy import DeliveryProxyUseCase, get_delivery_proxy_use_case
from ballsville.app.use_cases.manifest import ManifestService, get_manifest_service
from ballsville.app.use_cases.uploads import UploadUseCase, get_upload_use_case
from ballsville.errors import UploadTooLargeError
from ballsville.infra.object_stores.memory_object_store import MemoryObjectStore
from ballsville.require_admin__request_auth import get_identity_verifier
from http_fakes import ADMIN_EMAIL, ADMIN_TOKEN, FakeIdentityVerifier, StepClock

AUTH = {"Authorization": f"Bearer {ADMIN_TOKEN}"}
FAN_TOKEN = "fan-token"


@pytest.fixture()
def store() -> MemoryObjectStore:
    return MemoryObjectStore()


@pytest.fixture()
def client(store: MemoryObjectStore):
    clock = StepClock(start=1_760_000_000_000)
    manifests = ManifestService(store=store, clock=clock)
    verifier = FakeIdentityVerifier({ADMIN_TOKEN: ADMIN_EMAIL, FAN_TOKEN: "fan@example.com"})
    app.dependency_overrides = {
        get_identity_verifier: lambda: verifier,
        get_manifest_service: lambda: manifests,
        get_content_writer_use_case: lambda: ContentWriterUseCase(
            store=store, manifests=manifests, clock=clock
        ),
        get_backup_use_case: lambda: BackupUseCase(store=store, manifests=manifests),
        get_delivery_proxy_use_case: lambda: DeliveryProxyUseCase(store=store),
        get_upload_use_case: lambda: UploadUseCase(
            store=store, max_bytes=16, clock=clock, random_suffix=lambda: "r4nd0m"
        ),
    }
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides = {}


def test_health_returns_schema(client: TestClient) -> None:
    response = client.get("/api/health")
    assert response.status_code == 200
    payload = response.json()
    assert set(payload.keys()) == {"status", "service", "version", "timestamp"}
    assert payload["status"] == "ok"
    assert payload["service"] == "ballsville"
    datetime.fromisoformat(payload["timestamp"])


def test_admin_requires_token(client: TestClient, store: MemoryObjectStore) -> None:
    response = client.put("/api/admin/redraft?season=2025", json={"title": "x"})
    assert response.status_code == 401
    assert store.keys() == []


def test_admin_rejects_invalid_token(client: TestClient) -> None:
    response = client.get("/api/admin/redraft", headers={"Authorization": "Bearer bogus"})
    assert response.status_code == 401


def test_admin_rejects_non_admin_email(client: TestClient, store: MemoryObjectStore) -> None:
    response = client.put(
        "/api/admin/redraft?season=2025",
        json={"title": "x"},
        headers={"Authorization": f"Bearer {FAN_TOKEN}"},
    )
    assert response.status_code == 403
    assert store.keys() == []


def test_admin_accepts_api_key_header(client: TestClient) -> None:
    response = client.get("/api/admin/posts", headers={"X-API-Key": ADMIN_TOKEN})
    assert response.status_code == 200
    assert response.json()["data"] is None


def test_empty_allowlist_is_server_error(client: TestClient) -> None:
    with patch("dotenv.load_dotenv"), patch.dict(
        os.environ, {"ADMIN_EMAILS": "", "NEXT_PUBLIC_ADMIN_EMAILS": ""}
    ):
        response = client.get("/api/admin/posts", headers=AUTH)
    assert response.status_code == 500


def test_non_object_body_is_rejected_without_writes(client: TestClient, store: MemoryObjectStore) -> None:
    response = client.put("/api/admin/redraft?season=2025&type=leagues", json="hello", headers=AUTH)

    assert response.status_code == 400
    assert response.json()["ok"] is False
    assert response.headers["cache-control"] == "no-store"
    assert store.keys() == []


def test_invalid_season_is_rejected(client: TestClient, store: MemoryObjectStore) -> None:
    response = client.put("/api/admin/redraft?season=abc", json={"title": "x"}, headers=AUTH)
    assert response.status_code == 400
    assert store.keys() == []


def test_unknown_section_is_not_found(client: TestClient) -> None:
    response = client.put("/api/admin/curling?season=2025", json={}, headers=AUTH)
    assert response.status_code == 404
    assert response.json() == {"ok": False, "error": "Unknown section 'curling'"}


def test_put_envelope_then_read_and_delete(client: TestClient, store: MemoryObjectStore) -> None:
    response = client.put(
        "/api/admin/redraft?season=2025",
        json={"type": "leagues", "data": {"leagues": [{"name": "Alpha", "url": "https://sleeper.app/a"}]}},
        headers=AUTH,
    )
    assert response.status_code == 200
    payload = response.json()
    assert payload["key"] == "data/redraft/leagues_2025.json"
    assert payload["type"] == "leagues"
    assert payload["warnings"] == []
    assert response.headers["cache-control"] == "no-store"
    assert store.get("data/manifests/redraft_2025.json").json()["version"] == payload["version"]

    read = client.get("/api/admin/redraft?season=2025&type=leagues", headers=AUTH).json()
    assert read["data"]["leagues"][0]["name"] == "Alpha"
    assert read["data"]["updatedAt"] == payload["updatedAt"]

    deleted = client.delete("/api/admin/redraft?season=2025&type=leagues", headers=AUTH).json()
    assert deleted["deleted"] == ["data/redraft/leagues_2025.json"]
    assert store.get("data/redraft/leagues_2025.json") is None
    assert store.get("data/manifests/redraft_2025.json").json()["version"] > payload["version"]


def test_payload_season_used_when_query_omits_it(client: TestClient) -> None:
    response = client.put("/api/admin/gauntlet?type=leagues", json={"season": 2024, "leagues": []}, headers=AUTH)
    assert response.status_code == 200
    assert response.json()["key"] == "data/gauntlet/leagues_2024.json"


def test_backup_read_and_restore(client: TestClient, store: MemoryObjectStore) -> None:
    original = json.dumps({"eligibility": {"computedAt": "T1"}, "updatedAt": "2025-12-01T00:00:00.000Z"})
    store.put("data/dynasty/wagers_2025.json", original, content_type="application/json")
    written = client.put(
        "/api/admin/dynasty-wagers?season=2025",
        json={"eligibility": {"computedAt": "T2"}},
        headers=AUTH,
    ).json()
    assert written["backup"]["value"]["key"] == "data/dynasty/wagers_2025_wk16_backup.json"

    backup = client.get("/api/admin/dynasty-wagers/backup?season=2025", headers=AUTH).json()
    assert backup["data"]["eligibility"]["computedAt"] == "T1"
    assert backup["meta"]["fromEligibilityComputedAt"] == "T1"

    restored = client.post("/api/admin/dynasty-wagers/backup?season=2025", headers=AUTH)
    assert restored.status_code == 200
    assert store.get("data/dynasty/wagers_2025.json").text() == original


def test_restore_without_backup_is_not_found(client: TestClient) -> None:
    response = client.post("/api/admin/biggame-wagers/backup?season=2025", headers=AUTH)
    assert response.status_code == 404
    assert response.json()["ok"] is False


def test_upload_stores_media(client: TestClient, store: MemoryObjectStore) -> None:
    response = client.post(
        "/api/admin/upload",
        files={"file": ("Hero.PNG", b"PNGDATA", "image/png")},
        data={"section": "redraft"},
        headers=AUTH,
    )
    assert response.status_code == 200
    payload = response.json()
    assert payload["key"] == "media/redraft/1760000000000-r4nd0m.png"
    assert payload["url"] == "/r2/media/redraft/1760000000000-r4nd0m.png"
    assert store.get(payload["key"]).content_type == "image/png"


def test_upload_too_large(client: TestClient, store: MemoryObjectStore) -> None:
    response = client.post(
        "/api/admin/upload",
        files={"file": ("big.png", b"x" * 17, "image/png")},
        headers=AUTH,
    )
    assert response.status_code == 413
    assert store.keys() == []


def _upload_file(size: int | None, body: bytes) -> MagicMock:
    file = MagicMock(filename="big.png", content_type="image/png", size=size)
    file.read = AsyncMock(return_value=body)
    return file


def test_upload_declared_too_large_is_rejected_before_reading(store: MemoryObjectStore) -> None:
    uploads = UploadUseCase(store=store, max_bytes=16)
    file = _upload_file(10_000, b"")
    with pytest.raises(UploadTooLargeError):
        asyncio.run(upload_media(None, file, None, uploads))
    file.read.assert_not_awaited()
    assert store.keys() == []


def test_upload_read_is_bounded_when_size_is_unknown(store: MemoryObjectStore) -> None:
    uploads = UploadUseCase(store=store, max_bytes=16)
    file = _upload_file(None, b"x" * 17)
    with pytest.raises(UploadTooLargeError):
        asyncio.run(upload_media(None, file, None, uploads))
    file.read.assert_awaited_once_with(17)
    assert store.keys() == []


def test_upload_requires_admin(client: TestClient) -> None:
    response = client.post("/api/admin/upload", files={"file": ("a.png", b"x", "image/png")})
    assert response.status_code == 401
