"""Infrastructure client adapters."""

from ballsville.infra.clients.public_base_client import (
    PublicObjectResponse,
    fetch_public_object,
)
from ballsville.infra.clients.supabase_identity_client import SupabaseIdentityVerifier

__all__ = [
    "PublicObjectResponse",
    "SupabaseIdentityVerifier",
    "fetch_public_object",
]
