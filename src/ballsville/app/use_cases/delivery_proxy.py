"""Use case for the public read path (``GET|HEAD /r2/<key>``)."""

from __future__ import annotations

import json
import mimetypes
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field

from ballsville.app.wiring import DefaultObjectStoreProvider, DefaultSettingsProvider
from ballsville.domain.cache_policy import NO_STORE, cache_control_for
from ballsville.domain.conditional import (
    etag_matches,
    format_http_date,
    not_modified_since,
    quote_etag,
)
from ballsville.domain.keys import parse_manifest_key, strip_leading_slashes
from ballsville.domain.sections import SectionSpec, resolve_section
from ballsville.errors import ObjectStoreError, UnknownSectionError
from ballsville.infra.clients.public_base_client import PublicObjectResponse, fetch_public_object
from ballsville.ports.object_store import JSON_CONTENT_TYPE, ObjectStore, StoredObject
from ballsville.utils.logger import get_logger
from ballsville.utils.now import Now

logger = get_logger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"
_SOURCE_TIMESTAMP_FIELDS = ("updatedAt", "updated_at", "lastUpdated")


def _missing_store() -> ObjectStore:
    raise ValueError("store is required for DeliveryProxyUseCase")


@dataclass(frozen=True)
class ProxyRequest:
    key: str
    method: str = "GET"
    query: Mapping[str, str] = field(default_factory=dict)
    if_none_match: str | None = None
    if_modified_since: str | None = None
    accept: str = "*/*"

    @property
    def is_head(self) -> bool:
        return self.method.upper() == "HEAD"


@dataclass(frozen=True)
class ProxyResponse:
    status_code: int
    body: bytes = b""
    headers: dict[str, str] = field(default_factory=dict)
    source: str = "store"


def _error_response(status_code: int, message: str, source: str) -> ProxyResponse:
    return ProxyResponse(
        status_code=status_code,
        body=json.dumps({"ok": False, "error": message}).encode("utf-8"),
        headers={"content-type": JSON_CONTENT_TYPE, "cache-control": NO_STORE},
        source=source,
    )


def _content_type_for(key: str, stored: str | None) -> str:
    if stored:
        return stored
    guessed, _ = mimetypes.guess_type(key)
    return guessed or DEFAULT_CONTENT_TYPE


def _is_not_modified(request: ProxyRequest, etag: str | None, last_modified: str | None) -> bool:
    """If-None-Match decides alone when sent; If-Modified-Since is the fallback."""
    if request.if_none_match:
        return etag_matches(request.if_none_match, etag)
    return not_modified_since(request.if_modified_since, last_modified)


def _finish(
    request: ProxyRequest,
    status_code: int,
    body: bytes,
    headers: dict[str, str],
    source: str,
) -> ProxyResponse:
    """Apply conditional-GET and HEAD semantics to a ready response."""
    if status_code == 200 and _is_not_modified(
        request, headers.get("etag"), headers.get("last-modified")
    ):
        return ProxyResponse(status_code=304, headers=headers, source=source)
    if request.is_head:
        if body:
            headers = {**headers, "content-length": str(len(body))}
        return ProxyResponse(status_code=status_code, headers=headers, source=source)
    return ProxyResponse(status_code=status_code, body=body, headers=headers, source=source)


@dataclass
class DeliveryProxyUseCase:
    """Serve object-store keys with a computed cache policy.

    Order of resolution: the object store, then (for missing manifests of
    known sections) a manifest synthesized from the section's canonical
    document. When the store itself fails, the same key is fetched from the
    bucket's public base URL.
    """

    store: ObjectStore = field(default_factory=_missing_store)
    public_base_url: str = ""
    timeout_s: float = 10
    fetch_public_object: Callable[..., PublicObjectResponse] = fetch_public_object
    resolve_section: Callable[[str | None], SectionSpec] = resolve_section

    def serve(self, request: ProxyRequest) -> ProxyResponse:
        key = strip_leading_slashes(request.key)
        if not key:
            return _error_response(400, "Missing object key", "error")
        cache_control = cache_control_for(key, request.query)
        try:
            stored = self.store.get(key)
            source = "store"
            if stored is None:
                stored = self._synthesize_manifest(key)
                source = "synthesized"
        except ObjectStoreError as exc:
            logger.warning("Object store unavailable for %s (%s); trying public base", key, exc)
            return self._serve_from_public_base(key, request, cache_control)
        if stored is None:
            return _error_response(404, "Not found", "store")
        headers = {
            "content-type": _content_type_for(key, stored.content_type),
            "cache-control": cache_control,
        }
        etag = quote_etag(stored.etag)
        if etag:
            headers["etag"] = etag
        last_modified = format_http_date(stored.last_modified)
        if last_modified:
            headers["last-modified"] = last_modified
        return _finish(request, 200, stored.body, headers, source)

    def _synthesize_manifest(self, key: str) -> StoredObject | None:
        """Build a manifest for a known section from its canonical document."""
        parsed = parse_manifest_key(key)
        if parsed is None:
            return None
        slug, season = parsed
        try:
            section = self.resolve_section(slug)
        except UnknownSectionError:
            return None
        if section.seasoned and season is None:
            return None
        for kind in section.kinds:
            source_key = section.canonical_key(season, kind)
            source = self.store.get(source_key)
            if source is None:
                continue
            body = {
                "section": section.slug,
                "season": season,
                "updatedAt": self._source_updated_at(source),
                "sourceKey": source_key,
            }
            logger.info("Synthesized manifest %s from %s", key, source_key)
            return StoredObject(
                key=key,
                body=json.dumps(body, indent=2).encode("utf-8"),
                etag=source.etag,
                content_type=JSON_CONTENT_TYPE,
                last_modified=source.last_modified,
            )
        return None

    @staticmethod
    def _source_updated_at(source: StoredObject) -> str | None:
        try:
            parsed = source.json()
        except ValueError:
            parsed = None
        if isinstance(parsed, dict):
            for name in _SOURCE_TIMESTAMP_FIELDS:
                if parsed.get(name):
                    return str(parsed[name])
        if source.last_modified is not None:
            return Now.to_iso(source.last_modified)
        return None

    def _serve_from_public_base(
        self,
        key: str,
        request: ProxyRequest,
        cache_control: str,
    ) -> ProxyResponse:
        try:
            upstream = self.fetch_public_object(
                self.public_base_url,
                key,
                method="HEAD" if request.is_head else "GET",
                accept=request.accept or "*/*",
                timeout=self.timeout_s,
            )
        except ObjectStoreError as exc:
            logger.error("Public base fallback failed for %s: %s", key, exc)
            return _error_response(500, "Object store unavailable", "error")
        headers = dict(upstream.headers)
        headers.setdefault("content-type", DEFAULT_CONTENT_TYPE)
        headers["cache-control"] = cache_control if upstream.status_code < 400 else NO_STORE
        return _finish(request, upstream.status_code, upstream.body, headers, "public-base")


def get_delivery_proxy_use_case() -> DeliveryProxyUseCase:
    settings = DefaultSettingsProvider().get_settings()
    return DeliveryProxyUseCase(
        store=DefaultObjectStoreProvider().get_store(settings),
        public_base_url=settings.storage.public_base_url,
        timeout_s=settings.storage.request_timeout_s,
    )


__all__ = [
    "DeliveryProxyUseCase",
    "ProxyRequest",
    "ProxyResponse",
    "get_delivery_proxy_use_case",
]
