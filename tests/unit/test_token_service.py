"""Unit tests for identity tokens."""

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from sidebar.kernel.identity.jwt import TokenService, UserProfile


@pytest.fixture
def profile() -> UserProfile:
    return UserProfile(
        id="0b9a3c1e-1111-4c2e-9f00-000000000001",
        email="crew@roofing.example",
        name="Carlos M.",
        company="DFW Roofing",
    )


class TestTokenService:
    def test_round_trip(self, token_service: TokenService, profile: UserProfile):
        token = token_service.issue(profile)

        assert token_service.verify(token) == profile

    def test_expires_after_seven_days(self, token_service: TokenService, profile: UserProfile):
        token = token_service.issue(profile)
        claims = jwt.get_unverified_claims(token)

        lifetime = claims["exp"] - claims["iat"]
        assert lifetime == int(timedelta(days=7).total_seconds())

    def test_expired_token_rejected(self, token_service: TokenService, profile: UserProfile):
        token = token_service.issue(profile, expires_delta=timedelta(seconds=-1))

        assert token_service.verify(token) is None

    def test_other_secret_rejected(self, token_service: TokenService, profile: UserProfile):
        """A restart with a different secret invalidates every token."""
        other = TokenService(secret_key="a-completely-different-secret", expire_days=7)

        assert other.verify(token_service.issue(profile)) is None

    def test_tampered_signature_rejected(self, token_service: TokenService, profile: UserProfile):
        token = token_service.issue(profile)
        head, body, signature = token.split(".")
        tampered = ".".join([head, body, signature[::-1]])

        assert token_service.verify(tampered) is None

    @pytest.mark.parametrize("token", [None, "", "garbage", "a.b.c", 12345])
    def test_malformed_input_rejected(self, token_service: TokenService, token):
        assert token_service.verify(token) is None

    def test_missing_profile_claims_rejected(self, token_service: TokenService):
        """Correctly signed, but not one of ours."""
        token = jwt.encode(
            {"sub": "x", "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
            token_service.secret_key,
            algorithm="HS256",
        )

        assert token_service.verify(token) is None
