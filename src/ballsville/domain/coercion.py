"""Lenient coercion helpers used by the section normalizers.

Every helper returns a documented default instead of raising, so partially
filled admin drafts are accepted.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping

_SLUG_RE = re.compile(r"[^a-z0-9]+")


def as_str(value: object, default: str = "") -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)) and not (isinstance(value, float) and not math.isfinite(value)):
        return str(value)
    return default


def as_clean_str(value: object, max_length: int | None = None) -> str:
    text = as_str(value).strip()
    if max_length is not None:
        text = text[:max_length]
    return text


def as_bool(value: object, default: bool = False) -> bool:
    if value is True or value is False:
        return value
    return default


def as_number(value: object, default: float | int | None = None) -> float | int | None:
    """Return a finite number (ints stay ints) or ``default``."""
    if isinstance(value, bool) or value is None:
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            return default
        return int(value) if value.is_integer() else value
    if isinstance(value, str) and value.strip():
        try:
            parsed = float(value.strip())
        except ValueError:
            return default
        return as_number(parsed, default)
    return default


def as_list(value: object) -> list:
    return list(value) if isinstance(value, list) else []


def as_dict(value: object) -> dict:
    return dict(value) if isinstance(value, Mapping) else {}


def as_str_list(value: object, *, split_on: str | None = None) -> list[str]:
    if isinstance(value, list):
        items = [as_str(item).strip() for item in value]
    elif isinstance(value, str) and split_on:
        items = [part.strip() for part in value.split(split_on)]
    else:
        items = []
    return [item for item in items if item]


def slugify(value: object, max_length: int = 80) -> str:
    return _SLUG_RE.sub("-", as_str(value).strip().lower()).strip("-")[:max_length]
