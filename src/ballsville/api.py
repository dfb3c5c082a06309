from __future__ import annotations

from typing import Annotated, Any, cast

from fastapi import Body, Depends, FastAPI, File, Form, Query, Request, Response, UploadFile
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware

from ballsville import __version__
from ballsville.app.use_cases.backups import BackupUseCase, get_backup_use_case
from ballsville.app.use_cases.content_writer import (
    ContentWriterUseCase,
    get_content_writer_use_case,
)
from ballsville.app.use_cases.delivery_proxy import (
    DeliveryProxyUseCase,
    ProxyRequest,
    get_delivery_proxy_use_case,
)
from ballsville.app.use_cases.manifest import ManifestService, get_manifest_service
from ballsville.app.use_cases.uploads import UploadUseCase, get_upload_use_case
from ballsville.config import get_settings
from ballsville.domain.cache_policy import cache_control_for
from ballsville.domain.season import coerce_season
from ballsville.domain.sections import resolve_section
from ballsville.get_health__api import health
from ballsville.manage_lifespan__fastapi import lifespan
from ballsville.no_store_json__api import _no_store_json
from ballsville.ports.identity_verifier import VerifiedIdentity
from ballsville.register_error_handlers__api import register_error_handlers
from ballsville.require_admin__request_auth import require_admin
from ballsville.resolve_request_season__api import _resolve_request_season
from ballsville.unwrap_admin_envelope__api import _unwrap_admin_envelope
from ballsville.utils.logger import get_logger

logger = get_logger(__name__)

_PROXY_PREFIX = get_settings().proxy_prefix

AdminIdentity = Annotated[VerifiedIdentity, Depends(require_admin)]
SeasonQuery = Annotated[str | None, Query()]
TypeQuery = Annotated[str | None, Query(alias="type")]

app = FastAPI(
    title="BALLSVILLE",
    version=__version__,
    lifespan=lifespan,
    middleware=[
        Middleware(
            cast("type[object]", CORSMiddleware),
            allow_origins=["*"],
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["etag", "last-modified", "cache-control"],
        )
    ],
)
register_error_handlers(app)

app.add_api_route("/api/health", health, methods=["GET"])


@app.api_route(f"/{_PROXY_PREFIX}/{{key:path}}", methods=["GET", "HEAD"])
def serve_object(
    key: str,
    request: Request,
    proxy: DeliveryProxyUseCase = Depends(get_delivery_proxy_use_case),
) -> Response:
    result = proxy.serve(
        ProxyRequest(
            key=key,
            method=request.method,
            query=dict(request.query_params),
            if_none_match=request.headers.get("if-none-match"),
            if_modified_since=request.headers.get("if-modified-since"),
            accept=request.headers.get("accept", "*/*"),
        )
    )
    return Response(content=result.body, status_code=result.status_code, headers=result.headers)


@app.get("/api/manifests/{section}")
def read_manifest(
    section: str,
    season: SeasonQuery = None,
    manifests: ManifestService = Depends(get_manifest_service),
) -> JSONResponse:
    section_spec = resolve_section(section)
    season_value = coerce_season(_resolve_request_season(season), required=section_spec.seasoned)
    manifest = manifests.read_with_fallback(section_spec.slug, season_value)
    return JSONResponse(
        {**manifest, "versionToken": manifests.token_from(manifest)},
        headers={"cache-control": cache_control_for(section_spec.manifest_key(season_value))},
    )


@app.post("/api/admin/upload")
async def upload_media(
    _admin: AdminIdentity,
    file: Annotated[UploadFile, File()],
    section: Annotated[str | None, Form()] = None,
    uploads: UploadUseCase = Depends(get_upload_use_case),
) -> JSONResponse:
    uploads.check_size(file.size)
    content = await file.read(uploads.max_bytes + 1)
    result = await run_in_threadpool(
        uploads.upload, file.filename, content, file.content_type, section
    )
    return _no_store_json(result)


@app.get("/api/admin/{section}/backup")
def read_backup(
    section: str,
    _admin: AdminIdentity,
    season: SeasonQuery = None,
    backups: BackupUseCase = Depends(get_backup_use_case),
) -> JSONResponse:
    return _no_store_json(backups.read_backup(section, _resolve_request_season(season)))


@app.post("/api/admin/{section}/backup")
def restore_backup(
    section: str,
    admin: AdminIdentity,
    season: SeasonQuery = None,
    backups: BackupUseCase = Depends(get_backup_use_case),
) -> JSONResponse:
    result = backups.restore(section, _resolve_request_season(season))
    logger.info("Backup restored by %s for %s %s", admin.email, section, result["season"])
    return _no_store_json(result)


@app.get("/api/admin/{section}")
def read_document(
    section: str,
    _admin: AdminIdentity,
    season: SeasonQuery = None,
    kind: TypeQuery = None,
    writer: ContentWriterUseCase = Depends(get_content_writer_use_case),
) -> JSONResponse:
    return _no_store_json(writer.read(section, _resolve_request_season(season), kind))


@app.put("/api/admin/{section}")
def write_document(
    section: str,
    admin: AdminIdentity,
    body: Annotated[Any, Body()],
    season: SeasonQuery = None,
    kind: TypeQuery = None,
    writer: ContentWriterUseCase = Depends(get_content_writer_use_case),
) -> JSONResponse:
    payload, kind = _unwrap_admin_envelope(body, kind)
    result = writer.write(section, _resolve_request_season(season, payload), payload, kind)
    logger.info("Document %s written by %s", result.key, admin.email)
    return _no_store_json(result.as_payload())


@app.delete("/api/admin/{section}")
def delete_document(
    section: str,
    admin: AdminIdentity,
    season: SeasonQuery = None,
    kind: TypeQuery = None,
    writer: ContentWriterUseCase = Depends(get_content_writer_use_case),
) -> JSONResponse:
    result = writer.delete(section, _resolve_request_season(season), kind)
    logger.info("Documents %s deleted by %s", result["deleted"], admin.email)
    return _no_store_json(result)
