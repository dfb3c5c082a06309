"""Conditional GET helpers (entity tags and Last-Modified)."""

from __future__ import annotations

from datetime import datetime
from email.utils import format_datetime, parsedate_to_datetime

from ballsville.utils.now import Now


def quote_etag(raw: str | None) -> str | None:
    if not raw:
        return None
    value = raw.strip()
    if value.startswith("W/"):
        return value
    unquoted = value.strip('"')
    return f'"{unquoted}"'


def etag_matches(if_none_match: str | None, etag: str | None) -> bool:
    """Return True when any tag in an If-None-Match header matches ``etag``.

    Weak comparison: a ``W/`` prefix on either side is ignored.
    """
    if not if_none_match or not etag:
        return False
    wanted = etag.removeprefix("W/")
    for candidate in if_none_match.split(","):
        tag = candidate.strip()
        if tag == "*" or tag.removeprefix("W/") == wanted:
            return True
    return False


def format_http_date(value: datetime | None) -> str | None:
    if value is None:
        return None
    return format_datetime(Now.to_utc(value), usegmt=True)


def parse_http_date(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None


def not_modified_since(
    if_modified_since: str | None,
    last_modified: datetime | str | None,
) -> bool:
    if isinstance(last_modified, str):
        last_modified = parse_http_date(last_modified)
    since = parse_http_date(if_modified_since)
    if since is None or last_modified is None:
        return False
    modified = Now.to_utc(last_modified).replace(microsecond=0)
    return modified <= Now.to_utc(since)
