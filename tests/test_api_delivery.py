import json

import pytest
from fastapi.testclient import TestClient

from ballsville.api import app
from ballsville.app.use_cases.content_writer import ContentWriterUseCase, get_content_writer_use_case
from ballsville.app.use_cases.delivery_proxy import DeliveryProxyUseCase, get_delivery_proxy_use_case
from ballsville.app.use_cases.manifest import ManifestService, get_manifest_service
from ballsville.domain.cache_policy import DATA_CACHE_CONTROL, IMMUTABLE_CACHE_CONTROL
from ballsville.infra.object_stores.memory_object_store import MemoryObjectStore
from ballsville.require_admin__request_auth import get_identity_verifier
from http_fakes import ADMIN_TOKEN, FakeIdentityVerifier, StepClock

AUTH = {"Authorization": f"Bearer {ADMIN_TOKEN}"}


@pytest.fixture()
def store() -> MemoryObjectStore:
    return MemoryObjectStore()


@pytest.fixture()
def client(store: MemoryObjectStore):
    clock = StepClock(start=1_760_000_000_000, step=5)
    manifests = ManifestService(store=store, clock=clock)
    app.dependency_overrides = {
        get_identity_verifier: lambda: FakeIdentityVerifier(),
        get_manifest_service: lambda: manifests,
        get_content_writer_use_case: lambda: ContentWriterUseCase(
            store=store, manifests=manifests, clock=clock
        ),
        get_delivery_proxy_use_case: lambda: DeliveryProxyUseCase(store=store),
    }
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides = {}


def test_manifest_endpoint_falls_back_when_missing(client: TestClient) -> None:
    response = client.get("/api/manifests/highlander?season=2025")
    assert response.status_code == 200
    assert response.json() == {
        "section": "highlander",
        "season": 2025,
        "updatedAt": 0,
        "versionToken": "0",
    }


def test_write_moves_version_token_and_busts_reader_cache(client: TestClient) -> None:
    first = client.put(
        "/api/admin/redraft?season=2025&type=leagues", json={"leagues": []}, headers=AUTH
    ).json()
    manifest = client.get("/api/manifests/redraft?season=2025")
    token = manifest.json()["versionToken"]
    assert token == str(first["version"])
    assert manifest.headers["cache-control"] == DATA_CACHE_CONTROL

    client.put("/api/admin/redraft?season=2025&type=leagues", json={"leagues": []}, headers=AUTH)
    assert client.get("/api/manifests/redraft?season=2025").json()["versionToken"] != token


def test_proxy_serves_document_with_conditional_get(client: TestClient) -> None:
    client.put("/api/admin/redraft?season=2025&type=leagues", json={"leagues": []}, headers=AUTH)

    response = client.get("/r2/data/redraft/leagues_2025.json?v=1")
    assert response.status_code == 200
    assert json.loads(response.content)["leagues"] == []
    assert response.headers["cache-control"] == DATA_CACHE_CONTROL
    etag = response.headers["etag"]

    revalidated = client.get(
        "/r2/data/redraft/leagues_2025.json?v=1", headers={"If-None-Match": etag}
    )
    assert revalidated.status_code == 304
    assert revalidated.content == b""


def test_proxy_head_and_missing(client: TestClient, store: MemoryObjectStore) -> None:
    store.put("media/redraft/hero.webp", b"RIFF", content_type="image/webp")

    head = client.head("/r2/media/redraft/hero.webp?v=9")
    assert head.status_code == 200
    assert head.content == b""
    assert head.headers["cache-control"] == IMMUTABLE_CACHE_CONTROL

    missing = client.get("/r2/media/redraft/nope.webp")
    assert missing.status_code == 404
    assert missing.headers["cache-control"] == "no-store"


def test_proxy_synthesizes_manifest(client: TestClient, store: MemoryObjectStore) -> None:
    store.put(
        "content/dynasty/page_2025.json",
        json.dumps({"hero": {}, "updatedAt": "2025-08-01T00:00:00.000Z"}),
        content_type="application/json",
    )
    response = client.get("/r2/data/manifests/dynasty_2025.json")
    assert response.status_code == 200
    assert response.json()["updatedAt"] == "2025-08-01T00:00:00.000Z"
