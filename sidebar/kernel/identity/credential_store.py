"""
In-memory credential store.

The store is the only owner of user records (password hashes and saved
third-party API keys). Its contents live exactly as long as the process;
records lost on restart are rebuilt from token payloads via ``ensure``.
Swap this module for a persistent store without touching callers.
"""

import asyncio
import uuid
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from sidebar.errors import ConflictError
from sidebar.kernel.identity.jwt import UserProfile
from sidebar.kernel.identity.password import PasswordHasher
from sidebar.logging_config import get_logger

logger = get_logger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


@dataclass
class UserRecord:
    """A stored user. ``password_hash == ""`` means restored from a token."""

    id: str
    email: str
    name: str
    company: str
    password_hash: str = ""
    jobtread_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def has_password(self) -> bool:
        return bool(self.password_hash)

    @property
    def has_jobtread_key(self) -> bool:
        return bool(self.jobtread_api_key)

    @property
    def has_anthropic_key(self) -> bool:
        return bool(self.anthropic_api_key)

    def to_profile(self) -> UserProfile:
        return UserProfile(id=self.id, email=self.email, name=self.name, company=self.company)


class CredentialStore:
    """
    User records keyed by normalized email.

    Mutations of one email are serialized with a per-key lock; there are no
    cross-record transactions.
    """

    def __init__(self, hasher: Optional[PasswordHasher] = None):
        self.hasher = hasher or PasswordHasher()
        self._users: dict[str, UserRecord] = {}
        self._locks: defaultdict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    def __len__(self) -> int:
        return len(self._users)

    def find_by_email(self, email: str) -> Optional[UserRecord]:
        """Case-insensitive lookup; never raises."""
        return self._users.get(normalize_email(email))

    async def create(
        self,
        email: str,
        password: str,
        name: str,
        company: str,
    ) -> UserRecord:
        """
        Register a user.

        A record previously restored from a token (empty password hash) is
        upgraded in place, keeping its id, so the token-restored session and
        the new registration stay the same account.

        Raises:
            ConflictError: If the email already has a password-backed record
        """
        key = normalize_email(email)
        async with self._locks[key]:
            existing = self._users.get(key)
            if existing and existing.has_password:
                raise ConflictError("Email already registered")

            password_hash = await asyncio.to_thread(self.hasher.hash, password)

            if existing:
                existing.name = name
                existing.company = company
                existing.password_hash = password_hash
                logger.info("Upgraded token-restored user", extra={"email": key})
                return existing

            user = UserRecord(
                id=str(uuid.uuid4()),
                email=key,
                name=name,
                company=company,
                password_hash=password_hash,
            )
            self._users[key] = user
            logger.info("User registered", extra={"email": key})
            return user

    async def update_api_keys(
        self,
        email: str,
        jobtread_api_key: Optional[str] = None,
        anthropic_api_key: Optional[str] = None,
    ) -> Optional[UserRecord]:
        """
        Overwrite saved API keys.

        ``None`` leaves a key untouched; any string, including "", replaces it.

        Returns:
            The updated record, or None if no record exists for the email
        """
        key = normalize_email(email)
        async with self._locks[key]:
            user = self._users.get(key)
            if user is None:
                return None
            if jobtread_api_key is not None:
                user.jobtread_api_key = jobtread_api_key
            if anthropic_api_key is not None:
                user.anthropic_api_key = anthropic_api_key
            return user

    async def ensure(self, profile: UserProfile) -> UserRecord:
        """Return the record for the profile's email, creating a password-less one if missing."""
        key = normalize_email(profile.email)
        async with self._locks[key]:
            user = self._users.get(key)
            if user is not None:
                return user
            user = UserRecord(
                id=profile.id,
                email=key,
                name=profile.name,
                company=profile.company,
            )
            self._users[key] = user
            logger.info("Restored user record from token", extra={"email": key})
            return user

    async def check_password(self, user: UserRecord, password: str) -> bool:
        """bcrypt comparison off the event loop. Password-less records never match."""
        return await asyncio.to_thread(self.hasher.verify, password, user.password_hash)

    def clear(self) -> None:
        """
        Drop every record, as a process restart would.

        Locks are kept so a writer still inside a critical section keeps
        excluding later writers for the same email.
        """
        self._users.clear()


_store: Optional[CredentialStore] = None


def get_credential_store() -> CredentialStore:
    """Get or create the process-wide credential store."""
    global _store
    if _store is None:
        _store = CredentialStore()
    return _store
