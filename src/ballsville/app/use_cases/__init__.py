"""Application use-case entrypoints."""

from ballsville.app.use_cases.backups import BackupUseCase, get_backup_use_case
from ballsville.app.use_cases.content_writer import (
    ContentWriterUseCase,
    WriteResult,
    get_content_writer_use_case,
)
from ballsville.app.use_cases.delivery_proxy import (
    DeliveryProxyUseCase,
    ProxyRequest,
    ProxyResponse,
    get_delivery_proxy_use_case,
)
from ballsville.app.use_cases.manifest import (
    ManifestService,
    get_manifest_service,
    manifest_service_for,
    versioned_url,
)
from ballsville.app.use_cases.uploads import UploadUseCase, get_upload_use_case

__all__ = [
    "BackupUseCase",
    "ContentWriterUseCase",
    "DeliveryProxyUseCase",
    "ManifestService",
    "ProxyRequest",
    "ProxyResponse",
    "UploadUseCase",
    "WriteResult",
    "get_backup_use_case",
    "get_content_writer_use_case",
    "get_delivery_proxy_use_case",
    "get_manifest_service",
    "get_upload_use_case",
    "manifest_service_for",
    "versioned_url",
]
