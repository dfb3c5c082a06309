"""Deterministic object-store key scheme.

Canonical documents live at ``<category>/<directory>/<name>[_<season>].json``,
manifests at ``data/manifests/<section>[_<season>].json`` and tracker backups
next to their canonical document with a ``_<label>_backup`` suffix.
"""

from __future__ import annotations

import re

MANIFEST_PREFIX = "data/manifests/"
JSON_SUFFIX = ".json"
_MANIFEST_KEY_RE = re.compile(r"^data/manifests/([a-z0-9-]+?)(?:_(\d{4}))?\.json$", re.IGNORECASE)


def _season_suffix(season: int | None) -> str:
    return f"_{season}" if season is not None else ""


def canonical_key(category: str, directory: str, name: str, season: int | None) -> str:
    return f"{category}/{directory}/{name}{_season_suffix(season)}{JSON_SUFFIX}"


def manifest_key(section: str, season: int | None) -> str:
    return f"{MANIFEST_PREFIX}{section}{_season_suffix(season)}{JSON_SUFFIX}"


def _stem(key: str) -> str:
    return key[: -len(JSON_SUFFIX)] if key.endswith(JSON_SUFFIX) else key


def backup_key(canonical: str, label: str) -> str:
    return f"{_stem(canonical)}_{label}_backup{JSON_SUFFIX}"


def backup_meta_key(canonical: str, label: str) -> str:
    return f"{_stem(canonical)}_{label}_backup_meta{JSON_SUFFIX}"


def parse_manifest_key(key: str) -> tuple[str, int | None] | None:
    """Return ``(section, season)`` for a manifest key, or None for other keys."""
    match = _MANIFEST_KEY_RE.match(key or "")
    if not match:
        return None
    section = match.group(1).lower()
    season = int(match.group(2)) if match.group(2) else None
    return section, season


def is_manifest_key(key: str) -> bool:
    return (key or "").lower().startswith(MANIFEST_PREFIX)


def key_extension(key: str) -> str:
    """Return the lower-cased extension of the last path segment, without the dot."""
    last = (key or "").rsplit("/", 1)[-1]
    if "." not in last:
        return ""
    return last.rsplit(".", 1)[-1].lower()


def strip_leading_slashes(key: str) -> str:
    return (key or "").lstrip("/")
