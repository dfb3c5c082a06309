"""Port interface for the key-value object store."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

JSON_CONTENT_TYPE = "application/json; charset=utf-8"


@dataclass(frozen=True)
class ObjectMetadata:
    """Metadata returned by ``head`` and carried by stored objects."""

    key: str
    etag: str | None = None
    content_type: str | None = None
    last_modified: datetime | None = None
    size: int | None = None


@dataclass(frozen=True)
class StoredObject:
    key: str
    body: bytes
    etag: str | None = None
    content_type: str | None = None
    last_modified: datetime | None = None

    def text(self) -> str:
        return self.body.decode("utf-8")

    def json(self) -> object:
        return json.loads(self.text())

    @property
    def metadata(self) -> ObjectMetadata:
        return ObjectMetadata(
            key=self.key,
            etag=self.etag,
            content_type=self.content_type,
            last_modified=self.last_modified,
            size=len(self.body),
        )


class ObjectStore(Protocol):
    """Stable interface for object-store adapters.

    Implementations raise ``ObjectStoreError`` when the store itself is
    unreachable or misconfigured; a missing key is not an error.
    """

    def get(self, key: str) -> StoredObject | None:
        """Return the object at ``key`` or None when absent."""

    def put(
        self,
        key: str,
        body: bytes | str,
        *,
        content_type: str,
        cache_control: str | None = None,
    ) -> None:
        """Store ``body`` at ``key``, replacing any previous object."""

    def head(self, key: str) -> ObjectMetadata | None:
        """Return metadata for ``key`` or None when absent."""

    def delete(self, key: str) -> None:
        """Delete ``key``; deleting a missing key is not an error."""
