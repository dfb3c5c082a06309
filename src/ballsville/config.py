from __future__ import annotations

from dotenv import load_dotenv

from ballsville.AuthSettings import AuthSettings
from ballsville.define_config_defaults__config import (
    DEFAULT_PROXY_PREFIX,
    DEFAULT_SEASON_ROLLOVER,
    DEFAULT_UPLOAD_MAX_BYTES,
)
from ballsville.define_settings__config import Settings
from ballsville.get_settings__config import get_settings
from ballsville.StorageSettings import StorageSettings

__all__ = [
    "DEFAULT_PROXY_PREFIX",
    "DEFAULT_SEASON_ROLLOVER",
    "DEFAULT_UPLOAD_MAX_BYTES",
    "AuthSettings",
    "Settings",
    "StorageSettings",
    "get_settings",
    "load_dotenv",
]
