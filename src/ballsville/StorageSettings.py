import os
from dataclasses import dataclass


@dataclass(slots=True)
class StorageSettings:
    """Object-store (Cloudflare R2 / S3-compatible) settings."""

    backend: str = os.getenv("BALLSVILLE_STORAGE_BACKEND", "s3").strip().lower()
    bucket: str = os.getenv("R2_BUCKET", os.getenv("ADMIN_BUCKET", "")).strip()
    leaderboards_bucket: str = os.getenv("R2_LEADERBOARDS_BUCKET", "").strip()
    endpoint_url: str | None = os.getenv("R2_ENDPOINT_URL") or None
    region: str = os.getenv("R2_REGION", "auto")
    access_key_id: str | None = os.getenv("R2_ACCESS_KEY_ID") or None
    secret_access_key: str | None = os.getenv("R2_SECRET_ACCESS_KEY") or None
    public_base_url: str = os.getenv("R2_PUBLIC_BASE", "").strip()
    request_timeout_s: int = int(os.getenv("R2_REQUEST_TIMEOUT_S", "10"))

    @property
    def is_configured(self) -> bool:
        """Return True when an S3 bucket name is available."""

        return bool(self.bucket)
