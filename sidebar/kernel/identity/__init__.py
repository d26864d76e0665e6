"""
Identity Core - Authentication and user management.
"""

from sidebar.kernel.identity.password import PasswordHasher
from sidebar.kernel.identity.jwt import TokenService, UserProfile, get_token_service
from sidebar.kernel.identity.credential_store import (
    CredentialStore,
    UserRecord,
    get_credential_store,
    normalize_email,
)
from sidebar.kernel.identity.reconciler import SessionReconciler
from sidebar.kernel.identity.identity_service import AuthResult, IdentityService

__all__ = [
    "PasswordHasher",
    "TokenService",
    "UserProfile",
    "get_token_service",
    "CredentialStore",
    "UserRecord",
    "get_credential_store",
    "normalize_email",
    "SessionReconciler",
    "AuthResult",
    "IdentityService",
]
