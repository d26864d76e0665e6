"""
Identity service for user management operations.
"""

from dataclasses import dataclass
from typing import Optional

from sidebar.errors import AuthenticationError, NotFoundError, ValidationError
from sidebar.kernel.identity.credential_store import CredentialStore, UserRecord, normalize_email
from sidebar.kernel.identity.jwt import TokenService, UserProfile
from sidebar.kernel.identity.reconciler import SessionReconciler
from sidebar.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class AuthResult:
    """A freshly issued token and the record it was issued for."""

    token: str
    user: UserRecord


class IdentityService:
    """
    Service for user identity operations.

    Handles registration, password login, token verification, and saving
    third-party API keys. The only place where the credential store, the
    token service and the session reconciler are composed.
    """

    def __init__(self, store: CredentialStore, tokens: TokenService):
        self.store = store
        self.tokens = tokens
        self.reconciler = SessionReconciler(store)

    def _issue(self, user: UserRecord) -> str:
        return self.tokens.issue(user.to_profile())

    async def register(
        self,
        email: Optional[str],
        password: Optional[str],
        name: Optional[str],
        company: Optional[str],
    ) -> AuthResult:
        """
        Register a new user, or upgrade a token-restored record.

        Raises:
            ValidationError: If any field is missing
            ConflictError: If the email is already registered with a password
        """
        email = normalize_email(email or "")
        if not (email and password and name and company):
            raise ValidationError("All fields are required")

        user = await self.store.create(email, password, name, company)
        return AuthResult(token=self._issue(user), user=user)

    async def login(self, email: Optional[str], password: Optional[str]) -> AuthResult:
        """
        Authenticate with email and password.

        Never creates a record: a missing account stays missing.

        Raises:
            ValidationError: If email or password is missing
            AuthenticationError: Unknown account, password-less record, or wrong password
        """
        email = normalize_email(email or "")
        if not (email and password):
            raise ValidationError("Email and password are required")

        user = self.store.find_by_email(email)
        if user is None:
            raise AuthenticationError("Account not found. Please create an account first.")

        if not user.has_password:
            raise AuthenticationError("Session expired. Please create a new account.")

        if not await self.store.check_password(user, password):
            logger.info("Failed login", extra={"email": user.email})
            raise AuthenticationError("Invalid password")

        logger.info("User logged in", extra={"email": user.email})
        return AuthResult(token=self._issue(user), user=user)

    async def verify(self, token: Optional[str]) -> UserProfile:
        """
        Verify a token and make sure its user record exists.

        Raises:
            AuthenticationError: If the token is invalid or expired
        """
        profile = self.tokens.verify(token)
        if profile is None:
            raise AuthenticationError("Invalid or expired token")

        await self.reconciler.reconcile(profile)
        return profile

    async def update_keys(
        self,
        token: Optional[str],
        jobtread_api_key: Optional[str] = None,
        anthropic_api_key: Optional[str] = None,
    ) -> UserRecord:
        """
        Save third-party API keys for the token's user.

        ``None`` leaves a key as it is.

        Raises:
            AuthenticationError: If the token is invalid
            NotFoundError: If the record vanished between reconcile and update
        """
        profile = self.tokens.verify(token)
        if profile is None:
            raise AuthenticationError("Unauthorized")

        await self.reconciler.reconcile(profile)
        user = await self.store.update_api_keys(
            profile.email,
            jobtread_api_key=jobtread_api_key,
            anthropic_api_key=anthropic_api_key,
        )
        if user is None:
            raise NotFoundError("User not found")
        return user
