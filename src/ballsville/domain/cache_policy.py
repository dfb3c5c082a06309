"""Cache-control policy for the public delivery proxy.

The policy depends only on the key's extension and on which cache-related
query parameters are present, never on the stored object itself.
"""

from __future__ import annotations

from collections.abc import Mapping

from ballsville.domain.keys import is_manifest_key, key_extension

NO_STORE = "no-store"
DATA_CACHE_CONTROL = "public, max-age=0, s-maxage=60, must-revalidate, stale-while-revalidate=300"
IMMUTABLE_CACHE_CONTROL = "public, max-age=31536000, immutable"
IMAGE_CACHE_CONTROL = "public, max-age=0, s-maxage=300, must-revalidate, stale-while-revalidate=86400"
DEFAULT_CACHE_CONTROL = "public, max-age=0, s-maxage=300, must-revalidate"

BUST_PARAMS = ("t", "nocache")
VERSION_PARAM = "v"

DATA_EXTENSIONS = frozenset({"json"})
IMAGE_EXTENSIONS = frozenset(
    {"webp", "png", "jpg", "jpeg", "gif", "svg", "avif", "ico", "bmp"}
)


def _has_param(query: Mapping[str, object], name: str) -> bool:
    return name in query and query[name] is not None


def is_data_key(key: str) -> bool:
    return key_extension(key) in DATA_EXTENSIONS or is_manifest_key(key)


def is_image_key(key: str) -> bool:
    return key_extension(key) in IMAGE_EXTENSIONS


def cache_control_for(key: str, query: Mapping[str, object] | None = None) -> str:
    """Return the Cache-Control header value for ``key`` under ``query``.

    Examples
    --------
    >>> cache_control_for("data/redraft/leagues_2025.json")
    'public, max-age=0, s-maxage=60, must-revalidate, stale-while-revalidate=300'
    >>> cache_control_for("media/hero.webp", {"v": "123"})
    'public, max-age=31536000, immutable'
    >>> cache_control_for("media/hero.webp", {"t": "1"})
    'no-store'
    """
    query = query or {}
    if any(_has_param(query, name) for name in BUST_PARAMS):
        return NO_STORE
    if is_data_key(key):
        return DATA_CACHE_CONTROL
    if is_image_key(key):
        if _has_param(query, VERSION_PARAM):
            return IMMUTABLE_CACHE_CONTROL
        return IMAGE_CACHE_CONTROL
    return DEFAULT_CACHE_CONTROL
