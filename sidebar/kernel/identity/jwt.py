"""
JWT identity tokens.

A token is the durable proof of identity: it carries the user's public
profile, so the in-memory credential store can be rebuilt from it after a
restart. Nothing is stored server-side and tokens are never revoked early.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from jose import JWTError, jwt
from pydantic import BaseModel, ConfigDict, ValidationError

from sidebar.config import get_settings


class UserProfile(BaseModel):
    """Public identity attributes signed into every token."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    name: str
    company: str


class TokenService:
    """
    Token creation and verification.

    Pure sign/verify pair parameterized by a shared secret and an expiry
    policy; holds no per-user state.
    """

    def __init__(
        self,
        secret_key: Optional[str] = None,
        algorithm: Optional[str] = None,
        expire_days: Optional[int] = None,
    ):
        settings = get_settings()
        self.secret_key = secret_key or settings.jwt_secret
        self.algorithm = algorithm or settings.jwt_algorithm
        self.expire_days = expire_days if expire_days is not None else settings.token_expire_days

    def issue(
        self,
        profile: UserProfile,
        expires_delta: Optional[timedelta] = None,
    ) -> str:
        """
        Sign a token for the given profile.

        Args:
            profile: Identity to embed
            expires_delta: Optional custom lifetime (default: expire_days)

        Returns:
            Encoded JWT
        """
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta if expires_delta is not None else timedelta(days=self.expire_days))

        payload: dict[str, Any] = profile.model_dump()
        payload["iat"] = now
        payload["exp"] = expire

        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: Any) -> Optional[UserProfile]:
        """
        Verify and decode a token.

        Returns None when the token is missing, malformed, signed with a
        different secret, expired, or lacks profile claims.
        """
        if not token or not isinstance(token, str):
            return None
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
            return UserProfile.model_validate(payload)
        except (JWTError, ValidationError):
            return None


_token_service: Optional[TokenService] = None


def get_token_service() -> TokenService:
    """Get or create the process-wide token service."""
    global _token_service
    if _token_service is None:
        _token_service = TokenService()
    return _token_service
