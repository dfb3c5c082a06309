"""Default values shared by the settings dataclasses."""

from __future__ import annotations

from dotenv import load_dotenv

load_dotenv()

DEFAULT_PROXY_PREFIX = "r2"
DEFAULT_SEASON_ROLLOVER = "01-22"
DEFAULT_UPLOAD_MAX_BYTES = 15 * 1024 * 1024
DEFAULT_UPLOAD_PREFIX = "media"
DEFAULT_LEADERBOARDS_PREFIX = "data/leaderboards/"
