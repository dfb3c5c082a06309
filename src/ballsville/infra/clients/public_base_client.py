"""Fetch objects from the bucket's public base URL.

Used by the delivery proxy when the object store itself cannot be reached.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

import requests

from ballsville.errors import ObjectStoreError

_PASSTHROUGH_HEADERS = ("content-type", "etag", "last-modified")


@dataclass(frozen=True)
class PublicObjectResponse:
    status_code: int
    body: bytes
    headers: dict[str, str] = field(default_factory=dict)


def public_object_url(base_url: str, key: str) -> str:
    return f"{base_url.rstrip('/')}/{key.lstrip('/')}"


def fetch_public_object(
    base_url: str,
    key: str,
    *,
    method: str = "GET",
    accept: str = "*/*",
    timeout: float = 10,
    http_request: Callable[..., requests.Response] = requests.request,
) -> PublicObjectResponse:
    """Fetch ``key`` from ``base_url``; raise ObjectStoreError on transport failure."""
    if not base_url:
        raise ObjectStoreError("No public base URL configured (set R2_PUBLIC_BASE)")
    url = public_object_url(base_url, key)
    try:
        response = http_request(method, url, headers={"Accept": accept}, timeout=timeout)
    except requests.RequestException as exc:
        raise ObjectStoreError(f"Public base fetch failed for '{url}': {exc}") from exc
    headers = {
        name: response.headers[name]
        for name in _PASSTHROUGH_HEADERS
        if response.headers.get(name)
    }
    return PublicObjectResponse(
        status_code=response.status_code,
        body=b"" if method == "HEAD" else response.content,
        headers=headers,
    )
