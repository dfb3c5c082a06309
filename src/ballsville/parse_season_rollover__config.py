from __future__ import annotations

from ballsville.define_config_defaults__config import DEFAULT_SEASON_ROLLOVER


def _parse_season_rollover(value: str | None) -> tuple[int, int]:
    """Parse a ``MM-DD`` rollover string into ``(month, day)``.

    Invalid values fall back to the default January 22 rollover.
    """
    raw = (value or "").strip() or DEFAULT_SEASON_ROLLOVER
    try:
        month_text, day_text = raw.split("-", 1)
        month, day = int(month_text), int(day_text)
    except ValueError:
        return _parse_season_rollover(DEFAULT_SEASON_ROLLOVER)
    if not 1 <= month <= 12 or not 1 <= day <= 31:
        return _parse_season_rollover(DEFAULT_SEASON_ROLLOVER)
    return month, day
