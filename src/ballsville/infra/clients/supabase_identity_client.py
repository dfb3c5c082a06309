"""Supabase-backed admin identity verifier (adapter layer)."""

from __future__ import annotations

import logging
from collections.abc import Callable

import requests
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ballsville.AuthSettings import AuthSettings
from ballsville.errors import AuthenticationError, IdentityProviderError
from ballsville.ports.identity_verifier import VerifiedIdentity
from ballsville.utils.logger import get_logger
from ballsville.utils.normalize_string import normalize_string

logger = get_logger(__name__)

_USER_PATH = "/auth/v1/user"
_RETRYABLE = (requests.ConnectionError, requests.Timeout)


class SupabaseIdentityVerifier:
    """Verify bearer tokens against ``<SUPABASE_URL>/auth/v1/user``."""

    def __init__(
        self,
        settings: AuthSettings,
        http_get: Callable[..., requests.Response] = requests.get,
    ) -> None:
        self.settings = settings
        self._http_get = http_get

    @property
    def user_url(self) -> str:
        return f"{self.settings.supabase_url.rstrip('/')}{_USER_PATH}"

    def verify(self, token: str) -> VerifiedIdentity:
        if not token:
            raise AuthenticationError("Missing Authorization Bearer token")
        if not self.settings.is_configured:
            raise IdentityProviderError("Missing SUPABASE_URL / SUPABASE_ANON_KEY")
        try:
            response = self._fetch_user(token)
        except _RETRYABLE as exc:
            raise IdentityProviderError(f"Identity provider unreachable: {exc}") from exc
        if not response.ok:
            raise AuthenticationError("Invalid session token")
        try:
            payload = response.json()
        except ValueError as exc:
            raise AuthenticationError("Invalid session token") from exc
        email = normalize_string(payload.get("email") if isinstance(payload, dict) else None)
        if not email:
            raise AuthenticationError("Session token has no email")
        return VerifiedIdentity(email=email)

    def _fetch_user(self, token: str) -> requests.Response:
        attempts = max(1, self.settings.max_retries)

        @retry(
            retry=retry_if_exception_type(_RETRYABLE),
            stop=stop_after_attempt(attempts),
            wait=wait_exponential(multiplier=1, min=1, max=10),
            reraise=True,
            before_sleep=before_sleep_log(logger, logging.WARNING),
        )
        def _get() -> requests.Response:
            return self._http_get(
                self.user_url,
                headers={
                    "apikey": self.settings.supabase_anon_key,
                    "Authorization": f"Bearer {token}",
                },
                timeout=self.settings.timeout_s,
            )

        return _get()
