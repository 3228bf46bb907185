"""Tests for bearer token issuance and validation."""

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from content_api.config import JwtSettings
from content_api.exceptions import AuthenticationError
from content_api.models import User, UserRole
from content_api.utils.jwt import JwtHelper
from tests.support.constants import TEST_JWT_KEY


@pytest.fixture
def user() -> User:
    return User(
        id=uuid.uuid4(),
        email="editor@example.com",
        full_name="Editor",
        password_hash="unused",
        role=UserRole.MANAGER,
    )


class TestGenerateToken:
    def test_claims(self, jwt_helper: JwtHelper, user: User) -> None:
        """[P0] Token carries identity, role, issuer and audience."""
        issued = jwt_helper.generate_token(user)

        claims = jwt_helper.validate_token(issued.access_token)

        assert claims["sub"] == str(user.id)
        assert claims["email"] == "editor@example.com"
        assert claims["name"] == "Editor"
        assert claims["role"] == "manager"
        assert claims["iss"] == "TestIssuer"
        assert claims["aud"] == "TestAudience"

    def test_expiry_matches_settings(self, jwt_helper: JwtHelper, user: User) -> None:
        now = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

        issued = jwt_helper.generate_token(user, now=now)

        assert issued.expires_in == 3600
        assert issued.expires_at == now + timedelta(minutes=60)
        assert issued.token_type == "Bearer"


class TestValidateToken:
    def test_expired_by_one_second(self, jwt_helper: JwtHelper, user: User) -> None:
        """[P0] No clock skew is tolerated."""
        issued_at = datetime.now(timezone.utc) - timedelta(minutes=60, seconds=1)
        token = jwt_helper.generate_token(user, now=issued_at).access_token

        with pytest.raises(AuthenticationError, match="expired"):
            jwt_helper.validate_token(token)

    def test_wrong_key(self, jwt_settings: JwtSettings, user: User) -> None:
        other_key = "another-signing-key-0123456789abcdef"
        other = JwtHelper(jwt_settings.model_copy(update={"key": other_key}))
        token = other.generate_token(user).access_token

        with pytest.raises(AuthenticationError, match="Invalid token"):
            JwtHelper(jwt_settings).validate_token(token)

    @pytest.mark.parametrize("field", ["issuer", "audience"])
    def test_wrong_issuer_or_audience(
        self, jwt_settings: JwtSettings, user: User, field: str
    ) -> None:
        other = JwtHelper(jwt_settings.model_copy(update={field: "Somebody Else"}))
        token = other.generate_token(user).access_token

        with pytest.raises(AuthenticationError):
            JwtHelper(jwt_settings).validate_token(token)

    def test_missing_subject(self, jwt_helper: JwtHelper) -> None:
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {
                "iss": "TestIssuer",
                "aud": "TestAudience",
                "iat": now,
                "exp": now + timedelta(minutes=5),
            },
            TEST_JWT_KEY,
            algorithm="HS256",
        )

        with pytest.raises(AuthenticationError):
            jwt_helper.validate_token(token)

    def test_garbage(self, jwt_helper: JwtHelper) -> None:
        with pytest.raises(AuthenticationError):
            jwt_helper.validate_token("not-a-jwt")


class TestStateTokens:
    def test_round_trip(self, jwt_helper: JwtHelper) -> None:
        state = jwt_helper.create_state_token({"sub": "user-1", "channel_id": "channel-1"})

        claims = jwt_helper.validate_state_token(state)

        assert claims["channel_id"] == "channel-1"
        assert claims["aud"] == "TestAudience:oauth-state"

    def test_bearer_token_is_not_a_state_token(self, jwt_helper: JwtHelper, user: User) -> None:
        """[P0] Audiences keep the two token kinds apart."""
        token = jwt_helper.generate_token(user).access_token

        with pytest.raises(AuthenticationError):
            jwt_helper.validate_state_token(token)

    def test_state_expires_after_ten_minutes(self, jwt_helper: JwtHelper) -> None:
        issued_at = datetime.now(timezone.utc) - timedelta(minutes=10, seconds=1)
        state = jwt_helper.create_state_token({"sub": "user-1"}, now=issued_at)

        with pytest.raises(AuthenticationError, match="expired"):
            jwt_helper.validate_state_token(state)
