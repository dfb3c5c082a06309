# pylint: disable=duplicate-code,R0801
"""Custom error types used in ballsville."""

from __future__ import annotations


class ContentValidationError(ValueError):
    """Raised when an admin payload cannot be accepted at all."""


class UploadTooLargeError(ContentValidationError):
    """Raised when an uploaded file exceeds the configured size cap."""


class UnknownSectionError(LookupError):
    """Raised when a section slug or document kind is not registered."""


class ObjectStoreError(RuntimeError):
    """Raised when the object store is unreachable or misconfigured."""


class AuthenticationError(Exception):
    """Raised when a bearer token is missing or cannot be verified."""


class BackupNotFoundError(LookupError):
    """Raised when a restore is requested but no backup exists."""


class IdentityProviderError(RuntimeError):
    """Raised when the identity provider is unreachable or not configured."""


__all__ = [
    "AuthenticationError",
    "BackupNotFoundError",
    "ContentValidationError",
    "IdentityProviderError",
    "ObjectStoreError",
    "UnknownSectionError",
    "UploadTooLargeError",
]
