"""Unit tests for the Firebase identity provider."""

import json

import httpx
import pytest

from prp.adapter.error import ProviderError
from prp.adapter.firebase import FirebaseIdentityProvider
from prp.domain.value import Email

BASE_URL = "https://identitytoolkit.test/v1"


def _provider(handler) -> FirebaseIdentityProvider:
    return FirebaseIdentityProvider(
        api_key="test-key",
        base_url=BASE_URL,
        transport=httpx.MockTransport(handler),
    )


class TestFirebaseIdentityProvider:
    """Tests for FirebaseIdentityProvider against a mocked transport."""

    @pytest.mark.asyncio
    async def test_sign_up_success(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            body = json.loads(request.content)
            return httpx.Response(
                200, json={"localId": "uid-123", "email": body["email"]}
            )

        outcome = await _provider(handler).sign_up(
            Email("jane@example.org"), "hunter22"
        )

        assert outcome.success
        assert outcome.principal.id == "uid-123"
        assert outcome.principal.email.root == "jane@example.org"
        assert seen[0].url.path == "/v1/accounts:signUp"
        assert seen[0].url.params["key"] == "test-key"

    @pytest.mark.asyncio
    async def test_rejected_credentials_are_opaque(self):
        """Firebase error codes should become user-facing messages."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                400, json={"error": {"message": "INVALID_LOGIN_CREDENTIALS"}}
            )

        outcome = await _provider(handler).sign_in(
            Email("jane@example.org"), "wrong"
        )

        assert not outcome.success
        assert outcome.principal is None
        assert outcome.error_message == "Invalid email or password"

    @pytest.mark.asyncio
    async def test_error_detail_is_stripped(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                400,
                json={
                    "error": {
                        "message": "WEAK_PASSWORD : Password should be at least 6 characters"
                    }
                },
            )

        outcome = await _provider(handler).sign_up(Email("jane@example.org"), "123")

        assert outcome.error_message == "Password should be at least 6 characters"

    @pytest.mark.asyncio
    async def test_server_error_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, text="unavailable")

        with pytest.raises(ProviderError):
            await _provider(handler).sign_in(Email("jane@example.org"), "hunter22")

    @pytest.mark.asyncio
    async def test_network_error_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ProviderError):
            await _provider(handler).sign_in(Email("jane@example.org"), "hunter22")

    @pytest.mark.asyncio
    async def test_sign_out_always_succeeds(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("sign out must not call Firebase")

        outcome = await _provider(handler).sign_out("uid-123")

        assert outcome.success
