"""
Pytest fixtures for sidebar tests.
"""

import os

# Settings are read at import time; configure before importing the app.
os.environ["JWT_SECRET"] = "test-secret-key-for-testing-only"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["DEBUG"] = "false"

from typing import Any, AsyncGenerator, Dict, List, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from sidebar.config import get_settings

get_settings.cache_clear()

from sidebar.ai.llm import Completion
from sidebar.api.deps import get_completion_factory, get_identity_service
from sidebar.errors import SidebarError
from sidebar.kernel.identity.credential_store import CredentialStore
from sidebar.kernel.identity.identity_service import IdentityService
from sidebar.kernel.identity.jwt import TokenService
from sidebar.kernel.identity.password import PasswordHasher
from sidebar.main import app

TEST_SECRET = "test-secret-key-for-testing-only"


@pytest.fixture
def password_hasher() -> PasswordHasher:
    """Fast bcrypt for tests."""
    return PasswordHasher(rounds=4)


@pytest.fixture
def token_service() -> TokenService:
    return TokenService(secret_key=TEST_SECRET, algorithm="HS256", expire_days=7)


@pytest.fixture
def store(password_hasher: PasswordHasher) -> CredentialStore:
    return CredentialStore(hasher=password_hasher)


@pytest.fixture
def identity(store: CredentialStore, token_service: TokenService) -> IdentityService:
    return IdentityService(store, token_service)


class FakeCompletions:
    """
    Stands in for CompletionClient.

    Replies are popped in order; a SidebarError in the queue is raised
    instead. Every call is recorded with the API key it was bound to.
    """

    def __init__(self):
        self.replies: List[Any] = []
        self.calls: List[Dict[str, Any]] = []
        self._api_key: Optional[str] = None

    def __call__(self, api_key: str) -> "FakeCompletions":
        self._api_key = api_key
        return self

    async def complete(self, system, messages, *, max_tokens=None, failure_message=""):
        self.calls.append({"api_key": self._api_key, "system": system, "messages": messages})
        reply = self.replies.pop(0) if self.replies else ""
        if isinstance(reply, SidebarError):
            raise reply
        return Completion(text=reply, usage={"input_tokens": 10, "output_tokens": 20})


@pytest.fixture
def fake_completions() -> FakeCompletions:
    return FakeCompletions()


@pytest_asyncio.fixture
async def client(
    identity: IdentityService,
    fake_completions: FakeCompletions,
) -> AsyncGenerator[AsyncClient, None]:
    """In-process client with an isolated credential store and a fake LLM."""
    app.dependency_overrides[get_identity_service] = lambda: identity
    app.dependency_overrides[get_completion_factory] = lambda: fake_completions
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def registration() -> dict:
    return {
        "action": "register",
        "email": "Nick@BetterBoss.ai",
        "password": "Shingles2026!",
        "name": "Nick Peret",
        "company": "Better Boss",
    }
