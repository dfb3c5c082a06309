"""Port interface for admin identity verification."""

# pylint: disable=too-few-public-methods

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class VerifiedIdentity:
    email: str


class IdentityVerifier(Protocol):
    """Resolve a bearer token to a verified identity."""

    def verify(self, token: str) -> VerifiedIdentity:
        """Return the identity for ``token`` or raise AuthenticationError."""
