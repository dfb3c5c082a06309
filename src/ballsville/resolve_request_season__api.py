"""Pick the season for an admin or public request."""

from __future__ import annotations

from collections.abc import Mapping

from ballsville.config import get_settings
from ballsville.domain.season import current_season
from ballsville.utils.now import Now


def _resolve_request_season(raw: str | None, payload: object = None) -> object:
    """Return the explicit season, defer to the payload, or default to the current season.

    The returned value is validated by the use case, so a malformed query
    value is passed through unchanged and rejected there.
    """
    if raw is not None and raw.strip():
        return raw.strip()
    if isinstance(payload, Mapping) and payload.get("season") is not None:
        return None
    return current_season(Now.as_datetime(), get_settings().season_rollover)
