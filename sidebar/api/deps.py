"""
FastAPI dependencies for identity and upstream clients.

Tests replace these through ``app.dependency_overrides``.
"""

from typing import Annotated, Callable, Optional

from fastapi import Depends

from sidebar.ai.llm import CompletionClient
from sidebar.integrations.jobtread import JobTreadClient
from sidebar.kernel.identity.credential_store import get_credential_store
from sidebar.kernel.identity.identity_service import IdentityService
from sidebar.kernel.identity.jwt import get_token_service


def get_identity_service() -> IdentityService:
    """Identity service over the process-wide store and token service."""
    return IdentityService(get_credential_store(), get_token_service())


Identity = Annotated[IdentityService, Depends(get_identity_service)]


CompletionFactory = Callable[[str], CompletionClient]
JobTreadFactory = Callable[[Optional[str]], JobTreadClient]


def get_completion_factory() -> CompletionFactory:
    """Builds an LLM client for the API key supplied with each request."""
    return CompletionClient


def get_jobtread_factory() -> JobTreadFactory:
    """Builds a JobTread client; a missing key yields demo data."""
    return JobTreadClient


Completions = Annotated[CompletionFactory, Depends(get_completion_factory)]
JobTread = Annotated[JobTreadFactory, Depends(get_jobtread_factory)]
