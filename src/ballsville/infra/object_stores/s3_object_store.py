"""S3-compatible object store adapter (Cloudflare R2, AWS S3, MinIO)."""

from __future__ import annotations

from typing import Any

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from ballsville.errors import ObjectStoreError
from ballsville.ports.object_store import ObjectMetadata, StoredObject
from ballsville.StorageSettings import StorageSettings
from ballsville.utils.logger import get_logger

logger = get_logger(__name__)

_MISSING_CODES = {"NoSuchKey", "404", "NotFound"}


def _is_missing(exc: ClientError) -> bool:
    code = str(exc.response.get("Error", {}).get("Code", ""))
    return code in _MISSING_CODES


def build_s3_client(settings: StorageSettings) -> Any:
    session = boto3.Session(
        aws_access_key_id=settings.access_key_id,
        aws_secret_access_key=settings.secret_access_key,
        region_name=settings.region,
    )
    return session.client(
        "s3",
        region_name=settings.region,
        endpoint_url=settings.endpoint_url,
        config=BotoConfig(
            connect_timeout=settings.request_timeout_s,
            read_timeout=settings.request_timeout_s,
            retries={"max_attempts": 5, "mode": "standard"},
        ),
    )


class S3ObjectStore:
    """Object store backed by a single S3 bucket."""

    def __init__(
        self,
        bucket: str,
        *,
        client: Any | None = None,
        settings: StorageSettings | None = None,
    ) -> None:
        self.bucket = bucket
        self._client = client
        self._settings = settings

    @classmethod
    def from_settings(cls, settings: StorageSettings, bucket: str | None = None) -> S3ObjectStore:
        return cls(bucket if bucket is not None else settings.bucket, settings=settings)

    def _s3(self) -> Any:
        if not self.bucket:
            raise ObjectStoreError("Object store bucket is not configured (set R2_BUCKET)")
        if self._client is None:
            try:
                self._client = build_s3_client(self._settings or StorageSettings())
            except BotoCoreError as exc:
                raise ObjectStoreError(f"Failed to create S3 client: {exc}") from exc
        return self._client

    def get(self, key: str) -> StoredObject | None:
        client = self._s3()
        try:
            resp = client.get_object(Bucket=self.bucket, Key=key)
            body = resp["Body"].read()
        except ClientError as exc:
            if _is_missing(exc):
                return None
            raise ObjectStoreError(f"get_object failed for '{key}': {exc}") from exc
        except BotoCoreError as exc:
            raise ObjectStoreError(f"get_object failed for '{key}': {exc}") from exc
        return StoredObject(
            key=key,
            body=body,
            etag=resp.get("ETag"),
            content_type=resp.get("ContentType"),
            last_modified=resp.get("LastModified"),
        )

    def put(
        self,
        key: str,
        body: bytes | str,
        *,
        content_type: str,
        cache_control: str | None = None,
    ) -> None:
        client = self._s3()
        payload = body.encode("utf-8") if isinstance(body, str) else body
        params: dict[str, Any] = {
            "Bucket": self.bucket,
            "Key": key,
            "Body": payload,
            "ContentType": content_type,
        }
        if cache_control:
            params["CacheControl"] = cache_control
        try:
            client.put_object(**params)
        except (ClientError, BotoCoreError) as exc:
            raise ObjectStoreError(f"put_object failed for '{key}': {exc}") from exc
        logger.debug("Stored s3://%s/%s (%d bytes)", self.bucket, key, len(payload))

    def head(self, key: str) -> ObjectMetadata | None:
        client = self._s3()
        try:
            resp = client.head_object(Bucket=self.bucket, Key=key)
        except ClientError as exc:
            if _is_missing(exc):
                return None
            raise ObjectStoreError(f"head_object failed for '{key}': {exc}") from exc
        except BotoCoreError as exc:
            raise ObjectStoreError(f"head_object failed for '{key}': {exc}") from exc
        return ObjectMetadata(
            key=key,
            etag=resp.get("ETag"),
            content_type=resp.get("ContentType"),
            last_modified=resp.get("LastModified"),
            size=resp.get("ContentLength"),
        )

    def delete(self, key: str) -> None:
        client = self._s3()
        try:
            client.delete_object(Bucket=self.bucket, Key=key)
        except (ClientError, BotoCoreError) as exc:
            raise ObjectStoreError(f"delete_object failed for '{key}': {exc}") from exc
