"""Season resolution.

A season is named by the year it starts. Dates before the rollover
``(month, day)`` still belong to the previous year's season.
"""

from __future__ import annotations

from datetime import date, datetime

from ballsville.errors import ContentValidationError
from ballsville.utils.to_int import to_int

DEFAULT_ROLLOVER = (1, 22)


def current_season(now: date | datetime, rollover: tuple[int, int] = DEFAULT_ROLLOVER) -> int:
    """Return the season for ``now``.

    >>> current_season(date(2026, 1, 21))
    2025
    >>> current_season(date(2026, 1, 22))
    2026
    """
    month, day = rollover
    if (now.month, now.day) < (month, day):
        return now.year - 1
    return now.year


def coerce_season(raw: object, *, required: bool) -> int | None:
    """Validate a season taken from a query string or payload.

    Returns None for unseasoned sections. For seasoned sections the value must
    be a finite integral number (``2025``, ``"2025"`` or ``2025.0``).
    """
    if not required:
        return None
    season = to_int(raw)
    if season is None:
        raise ContentValidationError(f"Missing/invalid season: {raw!r}")
    return season
