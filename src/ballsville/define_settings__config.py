"""Define top-level application settings."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from ballsville.AuthSettings import AuthSettings
from ballsville.define_config_defaults__config import (
    DEFAULT_LEADERBOARDS_PREFIX,
    DEFAULT_PROXY_PREFIX,
    DEFAULT_SEASON_ROLLOVER,
    DEFAULT_UPLOAD_MAX_BYTES,
    DEFAULT_UPLOAD_PREFIX,
)
from ballsville.parse_season_rollover__config import _parse_season_rollover
from ballsville.StorageSettings import StorageSettings


@dataclass(slots=True)
class Settings:
    """Central configuration for storage, admin auth, and public delivery."""

    storage: StorageSettings = field(default_factory=StorageSettings)
    auth: AuthSettings = field(default_factory=AuthSettings)

    proxy_prefix: str = os.getenv("BALLSVILLE_PROXY_PREFIX", DEFAULT_PROXY_PREFIX).strip("/")
    season_rollover_raw: str = os.getenv("BALLSVILLE_SEASON_ROLLOVER", DEFAULT_SEASON_ROLLOVER)
    log_level: str = os.getenv("BALLSVILLE_LOG_LEVEL", "INFO")
    upload_max_bytes: int = int(os.getenv("BALLSVILLE_UPLOAD_MAX_BYTES", str(DEFAULT_UPLOAD_MAX_BYTES)))
    upload_prefix: str = os.getenv("BALLSVILLE_UPLOAD_PREFIX", DEFAULT_UPLOAD_PREFIX).strip("/")
    leaderboards_prefix: str = DEFAULT_LEADERBOARDS_PREFIX

    @property
    def season_rollover(self) -> tuple[int, int]:
        return _parse_season_rollover(self.season_rollover_raw)

    @property
    def admin_emails(self) -> list[str]:
        return self.auth.admin_emails
