"""Request authentication helpers for the admin allowlist."""

from __future__ import annotations

from fastapi import Depends, HTTPException, Request, status

from ballsville.app.wiring import DefaultIdentityVerifierProvider
from ballsville.config import get_settings
from ballsville.errors import AuthenticationError, IdentityProviderError
from ballsville.extract_api_token__request_auth import _extract_api_token
from ballsville.ports.identity_verifier import IdentityVerifier, VerifiedIdentity
from ballsville.utils.logger import get_logger

logger = get_logger(__name__)


def get_identity_verifier() -> IdentityVerifier:
    return DefaultIdentityVerifierProvider().get_verifier(get_settings())


def require_admin(
    request: Request,
    verifier: IdentityVerifier = Depends(get_identity_verifier),
) -> VerifiedIdentity:
    """Return the verified admin identity or raise 401/403/500."""
    token = _extract_api_token(request)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing Authorization Bearer token",
        )
    try:
        identity = verifier.verify(token)
    except AuthenticationError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc
    except IdentityProviderError as exc:
        logger.error("Identity provider failure: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
        ) from exc
    allowlist = get_settings().admin_emails
    if not allowlist:
        logger.error("ADMIN_EMAILS is empty; refusing admin request")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="ADMIN_EMAILS is not configured",
        )
    if identity.email not in allowlist:
        logger.warning("Rejected non-admin %s", identity.email)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not an admin")
    return identity
