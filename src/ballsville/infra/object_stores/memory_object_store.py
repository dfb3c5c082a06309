"""In-process object store used for local development and tests."""

from __future__ import annotations

from threading import Lock

from ballsville.ports.object_store import ObjectMetadata, StoredObject
from ballsville.utils.hasher import Hasher
from ballsville.utils.now import Now


class MemoryObjectStore:
    def __init__(self, objects: dict[str, StoredObject] | None = None) -> None:
        self._objects: dict[str, StoredObject] = dict(objects or {})
        self._lock = Lock()

    def get(self, key: str) -> StoredObject | None:
        with self._lock:
            return self._objects.get(key)

    def put(
        self,
        key: str,
        body: bytes | str,
        *,
        content_type: str,
        cache_control: str | None = None,
    ) -> None:
        payload = body.encode("utf-8") if isinstance(body, str) else bytes(body)
        stored = StoredObject(
            key=key,
            body=payload,
            etag=f'"{Hasher.md5_bytes(payload)}"',
            content_type=content_type,
            last_modified=Now.as_datetime(),
        )
        with self._lock:
            self._objects[key] = stored

    def head(self, key: str) -> ObjectMetadata | None:
        stored = self.get(key)
        return stored.metadata if stored else None

    def delete(self, key: str) -> None:
        with self._lock:
            self._objects.pop(key, None)

    def keys(self, prefix: str = "") -> list[str]:
        with self._lock:
            return sorted(key for key in self._objects if key.startswith(prefix))
