"""Tests for the Firebase identity provider adapter."""

import json
import threading
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import httpx
import pytest

from app.core.exceptions import IdentityProviderError, UnauthorizedException
from app.core.firebase import FirebaseIdentityProvider, IdentityAccount


def _provider(handler) -> FirebaseIdentityProvider:
    return FirebaseIdentityProvider(api_key="web-key", transport=httpx.MockTransport(handler))


def _error(message: str) -> httpx.Response:
    return httpx.Response(400, json={"error": {"code": 400, "message": message}})


@pytest.mark.asyncio
class TestRestCalls:
    """Identity Toolkit REST calls."""

    async def test_create_account(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(
                200,
                json={"localId": "uid-1", "email": "a@example.com", "idToken": "tok"},
            )

        account = await _provider(handler).create_account("a@example.com", "pw123456")

        assert account == IdentityAccount(uid="uid-1", email="a@example.com", id_token="tok")
        assert "accounts:signUp" in seen["url"]
        assert "key=web-key" in seen["url"]
        assert seen["body"] == {
            "email": "a@example.com",
            "password": "pw123456",
            "returnSecureToken": True,
        }

    @pytest.mark.parametrize(
        ("message", "code"),
        [
            ("EMAIL_EXISTS", "email-already-in-use"),
            ("WEAK_PASSWORD : Password should be at least 6 characters", "weak-password"),
            ("INVALID_EMAIL", "invalid-email"),
            ("OPERATION_NOT_ALLOWED", "internal-error"),
        ],
    )
    async def test_create_account_error_codes(self, message, code):
        provider = _provider(lambda request: _error(message))

        with pytest.raises(IdentityProviderError) as exc_info:
            await provider.create_account("a@example.com", "pw")

        assert exc_info.value.code == code

    async def test_unparseable_error_body(self):
        provider = _provider(lambda request: httpx.Response(503, text="upstream unavailable"))

        with pytest.raises(IdentityProviderError) as exc_info:
            await provider.create_account("a@example.com", "pw")

        assert exc_info.value.code == "internal-error"

    async def test_network_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("no route", request=request)

        with pytest.raises(IdentityProviderError) as exc_info:
            await _provider(handler).create_account("a@example.com", "pw")

        assert exc_info.value.code == "network-request-failed"

    async def test_send_email_verification(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"email": "a@example.com"})

        await _provider(handler).send_email_verification(
            IdentityAccount(uid="uid-1", email="a@example.com", id_token="tok"),
            continue_url="https://vax.example.com/login",
        )

        assert "accounts:sendOobCode" in seen["url"]
        assert seen["body"] == {
            "requestType": "VERIFY_EMAIL",
            "idToken": "tok",
            "continueUrl": "https://vax.example.com/login",
            "canHandleCodeInApp": True,
        }

    async def test_send_email_verification_needs_session(self):
        provider = _provider(lambda request: httpx.Response(200, json={}))

        with pytest.raises(IdentityProviderError):
            await provider.send_email_verification(
                IdentityAccount(uid="uid-1", email="a@example.com"),
                continue_url="https://vax.example.com/login",
            )


class TestInitialization:
    """Admin SDK app creation."""

    def test_initialize_runs_once_under_concurrency(self):
        provider = FirebaseIdentityProvider()
        fake_app = MagicMock()

        with patch("app.core.firebase.firebase_admin.initialize_app", return_value=fake_app) as init:
            threads = [threading.Thread(target=provider.initialize) for _ in range(8)]
            for thread in threads:
                thread.start()
            for thread in threads:
                thread.join()

            assert provider.initialize() is fake_app

        init.assert_called_once_with()
        assert provider.initialized

    def test_service_account_blob_is_used(self):
        blob = json.dumps({"type": "service_account", "project_id": "vax"})
        provider = FirebaseIdentityProvider(firebase_config_json=blob)

        with (
            patch("app.core.firebase.credentials.Certificate") as certificate,
            patch("app.core.firebase.firebase_admin.initialize_app") as init,
        ):
            provider.initialize()

        certificate.assert_called_once_with({"type": "service_account", "project_id": "vax"})
        init.assert_called_once_with(certificate.return_value)

    def test_invalid_blob_falls_back_to_default_credentials(self):
        provider = FirebaseIdentityProvider(firebase_config_json="{not json")

        with patch("app.core.firebase.firebase_admin.initialize_app") as init:
            provider.initialize()

        init.assert_called_once_with()


@pytest.mark.asyncio
class TestAdminCalls:
    """Admin SDK calls."""

    async def test_delete_account(self):
        provider = FirebaseIdentityProvider()
        provider._app = MagicMock()

        with patch("app.core.firebase.auth.delete_user") as delete_user:
            await provider.delete_account("uid-9")

        delete_user.assert_called_once_with("uid-9", app=provider._app)

    async def test_verify_session_rejects_bad_token(self):
        provider = FirebaseIdentityProvider()
        provider._app = MagicMock()

        with patch(
            "app.core.firebase.auth.verify_id_token", side_effect=ValueError("malformed")
        ):
            with pytest.raises(UnauthorizedException):
                await provider.verify_session("garbage")

    async def test_verify_session_returns_claims(self):
        provider = FirebaseIdentityProvider()
        provider._app = MagicMock()

        with patch(
            "app.core.firebase.auth.verify_id_token",
            return_value={"uid": "uid-1", "email_verified": True},
        ) as verify:
            claims = await provider.verify_session("tok")

        assert claims["uid"] == "uid-1"
        verify.assert_called_once_with("tok", app=provider._app, clock_skew_seconds=10)


def test_iter_accounts_carries_creation_time():
    provider = FirebaseIdentityProvider()
    provider._app = MagicMock()
    dated = MagicMock(uid="u1", email="a@example.com")
    dated.user_metadata.creation_timestamp = 1_767_225_600_000
    undated = MagicMock(uid="u2", email=None, user_metadata=None)

    with patch("app.core.firebase.auth.list_users") as list_users:
        list_users.return_value.iterate_all.return_value = iter([dated, undated])
        accounts = list(provider.iter_accounts())

    assert accounts[0].created_at == datetime(2026, 1, 1, tzinfo=timezone.utc)
    assert accounts[1] == IdentityAccount(uid="u2", email="")
