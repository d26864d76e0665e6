"""
Session reconciliation: rebuild a missing user record from a valid token.
"""

from sidebar.kernel.identity.credential_store import CredentialStore, UserRecord
from sidebar.kernel.identity.jwt import UserProfile


class SessionReconciler:
    """
    Bridges a still-valid token and a store that lost its record.

    Call before any operation that needs an existing record when the caller
    is authenticated by token only.
    """

    def __init__(self, store: CredentialStore):
        self.store = store

    async def reconcile(self, profile: UserProfile) -> UserRecord:
        return await self.store.ensure(profile)
