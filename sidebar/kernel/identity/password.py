"""
Password hashing utilities using bcrypt.
"""

from typing import Optional

import bcrypt

from sidebar.config import get_settings


class PasswordHasher:
    """Password hashing service."""

    def __init__(self, rounds: Optional[int] = None):
        self.rounds = rounds or get_settings().bcrypt_rounds

    @staticmethod
    def _truncate_password(password: str) -> bytes:
        """
        Truncate password to 72 bytes (bcrypt limit) and encode.

        bcrypt only uses the first 72 bytes of a password; newer releases
        raise instead of silently truncating.
        """
        return password.encode("utf-8")[:72]

    def hash(self, password: str) -> str:
        """
        Hash a password using bcrypt.

        Args:
            password: Plain text password

        Returns:
            Hashed password string
        """
        salt = bcrypt.gensalt(rounds=self.rounds)
        hashed = bcrypt.hashpw(self._truncate_password(password), salt)
        return hashed.decode("utf-8")

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        """
        Verify a password against its hash.

        An empty hash belongs to a record restored from a token and never
        matches anything, including the empty password.

        Args:
            plain_password: Plain text password to verify
            hashed_password: Stored hashed password

        Returns:
            True if password matches, False otherwise
        """
        if not hashed_password or not plain_password:
            return False
        try:
            return bcrypt.checkpw(
                self._truncate_password(plain_password),
                hashed_password.encode("utf-8"),
            )
        except ValueError:
            # Malformed hash / salt
            return False
