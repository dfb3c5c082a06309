"""Load settings with environment overrides."""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ballsville.define_settings__config import Settings


def get_settings() -> Settings:
    """Return a Settings instance built from the current environment (and ``.env``)."""
    for name in (
        "ballsville.define_config_defaults__config",
        "ballsville.StorageSettings",
        "ballsville.AuthSettings",
    ):
        importlib.reload(importlib.import_module(name))
    settings_module = importlib.reload(importlib.import_module("ballsville.define_settings__config"))
    return settings_module.Settings()
