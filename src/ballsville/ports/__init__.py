"""Port interfaces for the ballsville application."""

from ballsville.ports.identity_verifier import IdentityVerifier, VerifiedIdentity  # noqa: F401
from ballsville.ports.object_store import (  # noqa: F401
    JSON_CONTENT_TYPE,
    ObjectMetadata,
    ObjectStore,
    StoredObject,
)
