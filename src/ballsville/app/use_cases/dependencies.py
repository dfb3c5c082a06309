"""Use-case dependency interfaces."""

from __future__ import annotations

from typing import Protocol

from ballsville.config import Settings
from ballsville.ports.identity_verifier import IdentityVerifier
from ballsville.ports.object_store import ObjectStore


class SettingsProvider(Protocol):
    """Provide settings for use-cases."""

    def get_settings(self) -> Settings:
        """Return resolved settings."""


class ObjectStoreProvider(Protocol):
    """Provide the object store for the configured backend."""

    def get_store(self, settings: Settings) -> ObjectStore:
        """Return an object store bound to ``settings``."""


class IdentityVerifierProvider(Protocol):
    """Provide the identity verifier used by the admin boundary."""

    def get_verifier(self, settings: Settings) -> IdentityVerifier:
        """Return an identity verifier bound to ``settings``."""


class Clock(Protocol):
    """Provide the current time."""

    def now_ms(self) -> int:
        """Return current time in epoch milliseconds."""
