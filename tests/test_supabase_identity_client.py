import unittest

import requests

from ballsville.AuthSettings import AuthSettings
from ballsville.errors import AuthenticationError, IdentityProviderError
from ballsville.infra.clients.supabase_identity_client import SupabaseIdentityVerifier
from http_fakes import FakeResponse, make_fake_get


def _settings(**overrides) -> AuthSettings:
    values = {
        "supabase_url": "https://ballsville.supabase.co/",
        "supabase_anon_key": "anon-key",
        "admin_emails_raw": "commish@ballsville.test",
        "timeout_s": 5,
        "max_retries": 1,
    }
    values.update(overrides)
    return AuthSettings(**values)


class SupabaseIdentityVerifierTests(unittest.TestCase):
    def test_verify_returns_normalized_email(self) -> None:
        captured: list[dict] = []
        verifier = SupabaseIdentityVerifier(
            _settings(),
            http_get=make_fake_get(
                [FakeResponse(json_data={"email": " Commish@Ballsville.test "})],
                captured=captured,
            ),
        )

        identity = verifier.verify("session-token")

        self.assertEqual(identity.email, "commish@ballsville.test")
        self.assertEqual(captured[0]["url"], "https://ballsville.supabase.co/auth/v1/user")
        self.assertEqual(
            captured[0]["headers"],
            {"apikey": "anon-key", "Authorization": "Bearer session-token"},
        )
        self.assertEqual(captured[0]["timeout"], 5)

    def test_rejected_token_is_authentication_error(self) -> None:
        verifier = SupabaseIdentityVerifier(
            _settings(), http_get=make_fake_get([FakeResponse(status_code=401)])
        )
        with self.assertRaises(AuthenticationError):
            verifier.verify("expired")

    def test_user_without_email_is_authentication_error(self) -> None:
        verifier = SupabaseIdentityVerifier(
            _settings(), http_get=make_fake_get([FakeResponse(json_data={"id": "u1"})])
        )
        with self.assertRaises(AuthenticationError):
            verifier.verify("token")

    def test_non_json_body_is_authentication_error(self) -> None:
        verifier = SupabaseIdentityVerifier(_settings(), http_get=make_fake_get([FakeResponse()]))
        with self.assertRaises(AuthenticationError):
            verifier.verify("token")

    def test_missing_token_never_calls_provider(self) -> None:
        captured: list[dict] = []
        verifier = SupabaseIdentityVerifier(_settings(), http_get=make_fake_get([], captured=captured))
        with self.assertRaises(AuthenticationError):
            verifier.verify("")
        self.assertEqual(captured, [])

    def test_unconfigured_provider_is_provider_error(self) -> None:
        verifier = SupabaseIdentityVerifier(
            _settings(supabase_url="", supabase_anon_key=""), http_get=make_fake_get([])
        )
        with self.assertRaises(IdentityProviderError):
            verifier.verify("token")

    def test_unreachable_provider_is_provider_error(self) -> None:
        verifier = SupabaseIdentityVerifier(
            _settings(),
            http_get=make_fake_get([requests.ConnectionError("connection refused")]),
        )
        with self.assertRaises(IdentityProviderError):
            verifier.verify("token")


if __name__ == "__main__":
    unittest.main()
