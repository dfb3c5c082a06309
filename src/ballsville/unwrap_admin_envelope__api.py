"""Accept both bare documents and ``{type, data}`` envelopes on admin PUT."""

from __future__ import annotations

from collections.abc import Mapping

_ENVELOPE_KEYS = frozenset({"type", "data"})


def _unwrap_admin_envelope(body: object, kind: str | None) -> tuple[object, str | None]:
    """Return ``(payload, kind)``; an envelope's ``type`` wins over the query."""
    if isinstance(body, Mapping) and "data" in body and set(body) <= _ENVELOPE_KEYS:
        envelope_kind = body.get("type")
        return body["data"], envelope_kind if isinstance(envelope_kind, str) else kind
    return body, kind
