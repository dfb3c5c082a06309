"""Route keys to different stores by key prefix."""

from __future__ import annotations

from collections.abc import Sequence

from ballsville.ports.object_store import ObjectMetadata, ObjectStore, StoredObject


class PrefixRoutedObjectStore:
    """Send keys under a configured prefix to a dedicated store.

    Leaderboard JSON lives in its own bucket while keeping the same public URL
    shape as everything else.
    """

    def __init__(self, default: ObjectStore, routes: Sequence[tuple[str, ObjectStore]] = ()) -> None:
        self._default = default
        self._routes = sorted(routes, key=lambda route: len(route[0]), reverse=True)

    def store_for(self, key: str) -> ObjectStore:
        for prefix, store in self._routes:
            if key.startswith(prefix):
                return store
        return self._default

    def get(self, key: str) -> StoredObject | None:
        return self.store_for(key).get(key)

    def put(
        self,
        key: str,
        body: bytes | str,
        *,
        content_type: str,
        cache_control: str | None = None,
    ) -> None:
        self.store_for(key).put(key, body, content_type=content_type, cache_control=cache_control)

    def head(self, key: str) -> ObjectMetadata | None:
        return self.store_for(key).head(key)

    def delete(self, key: str) -> None:
        self.store_for(key).delete(key)
