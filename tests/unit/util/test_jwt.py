"""Unit tests for session tokens."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from prp.config import AuthSettings
from prp.util.jwt import JWTError, create_token, verify_token

SETTINGS = AuthSettings(jwt_secret="test-secret")


class TestSessionTokens:
    """Tests for session token encoding and verification."""

    def test_round_trip(self):
        token = create_token("uid-1", "jane@example.org", SETTINGS)

        payload = verify_token(token, SETTINGS)

        assert payload.user_id == "uid-1"
        assert payload.email == "jane@example.org"
        assert payload.exp > datetime.now(timezone.utc)

    def test_wrong_secret(self):
        token = create_token("uid-1", "jane@example.org", SETTINGS)

        with pytest.raises(JWTError, match="Invalid token"):
            verify_token(token, AuthSettings(jwt_secret="other-secret"))

    def test_expired(self):
        token = jwt.encode(
            {
                "user_id": "uid-1",
                "email": "jane@example.org",
                "exp": datetime.now(timezone.utc) - timedelta(minutes=1),
            },
            SETTINGS.jwt_secret,
            algorithm=SETTINGS.jwt_algorithm,
        )

        with pytest.raises(JWTError, match="expired"):
            verify_token(token, SETTINGS)

    def test_garbage(self):
        with pytest.raises(JWTError):
            verify_token("not-a-token", SETTINGS)
