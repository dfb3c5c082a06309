import os
from dataclasses import dataclass


@dataclass(slots=True)
class AuthSettings:
    """Admin identity verification settings."""

    supabase_url: str = os.getenv("SUPABASE_URL", os.getenv("NEXT_PUBLIC_SUPABASE_URL", "")).strip()
    supabase_anon_key: str = os.getenv(
        "SUPABASE_ANON_KEY", os.getenv("NEXT_PUBLIC_SUPABASE_ANON_KEY", "")
    ).strip()
    admin_emails_raw: str = os.getenv("ADMIN_EMAILS", os.getenv("NEXT_PUBLIC_ADMIN_EMAILS", ""))
    timeout_s: int = int(os.getenv("SUPABASE_TIMEOUT_S", "10"))
    max_retries: int = int(os.getenv("SUPABASE_MAX_RETRIES", "3"))

    @property
    def admin_emails(self) -> list[str]:
        """Return the lower-cased admin allowlist."""

        return [
            email.strip().lower() for email in self.admin_emails_raw.split(",") if email.strip()
        ]

    @property
    def is_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_anon_key)
