"""Unit tests for the in-memory credential store."""

import asyncio

import pytest

from sidebar.errors import ConflictError
from sidebar.kernel.identity.credential_store import CredentialStore
from sidebar.kernel.identity.jwt import UserProfile


def _profile(email: str = "owner@roofing.example") -> UserProfile:
    return UserProfile(
        id="7f3e2d1c-0000-4000-8000-00000000beef",
        email=email,
        name="Pat Owner",
        company="Owner Roofing",
    )


class TestCreate:
    @pytest.mark.asyncio
    async def test_create_normalizes_email_and_hashes(self, store: CredentialStore):
        user = await store.create("  Owner@Roofing.Example ", "Secret123", "Pat", "Owner Roofing")

        assert user.email == "owner@roofing.example"
        assert user.password_hash.startswith("$2b$")
        assert user.password_hash != "Secret123"
        assert user.jobtread_api_key is None
        assert user.created_at is not None

    @pytest.mark.asyncio
    async def test_duplicate_registration_conflicts(self, store: CredentialStore):
        await store.create("owner@roofing.example", "Secret123", "Pat", "Owner Roofing")

        with pytest.raises(ConflictError):
            await store.create("OWNER@roofing.example", "Other456", "Pat", "Owner Roofing")
        assert len(store) == 1

    @pytest.mark.asyncio
    async def test_create_upgrades_token_restored_record(self, store: CredentialStore):
        restored = await store.ensure(_profile())
        created_at = restored.created_at

        user = await store.create("owner@roofing.example", "Secret123", "Pat Renamed", "New Co")

        assert user is restored
        assert user.id == _profile().id
        assert user.created_at == created_at
        assert user.name == "Pat Renamed"
        assert user.company == "New Co"
        assert user.has_password
        assert len(store) == 1


class TestFind:
    @pytest.mark.asyncio
    async def test_lookup_is_case_insensitive(self, store: CredentialStore):
        await store.create("a@b.com", "Secret123", "A", "B")

        assert store.find_by_email("A@B.com") is store.find_by_email("a@b.com")
        assert store.find_by_email("a@b.com") is not None

    def test_missing_email_returns_none(self, store: CredentialStore):
        assert store.find_by_email("nobody@example.com") is None


class TestUpdateApiKeys:
    @pytest.mark.asyncio
    async def test_unknown_email_returns_none(self, store: CredentialStore):
        assert await store.update_api_keys("nobody@example.com", jobtread_api_key="jt") is None

    @pytest.mark.asyncio
    async def test_omitted_keys_are_untouched(self, store: CredentialStore):
        await store.create("a@b.com", "Secret123", "A", "B")

        await store.update_api_keys("a@b.com", jobtread_api_key="jt-key")
        user = await store.update_api_keys("A@B.com", anthropic_api_key="sk-ant-key")

        assert user.jobtread_api_key == "jt-key"
        assert user.anthropic_api_key == "sk-ant-key"

    @pytest.mark.asyncio
    async def test_empty_string_clears_key(self, store: CredentialStore):
        await store.create("a@b.com", "Secret123", "A", "B")
        await store.update_api_keys("a@b.com", jobtread_api_key="jt-key")

        user = await store.update_api_keys("a@b.com", jobtread_api_key="")

        assert user.jobtread_api_key == ""
        assert user.has_jobtread_key is False

    @pytest.mark.asyncio
    async def test_concurrent_updates_do_not_lose_keys(self, store: CredentialStore):
        await store.create("a@b.com", "Secret123", "A", "B")

        await asyncio.gather(
            store.update_api_keys("a@b.com", jobtread_api_key="jt-key"),
            store.update_api_keys("a@b.com", anthropic_api_key="sk-ant-key"),
        )

        user = store.find_by_email("a@b.com")
        assert user.has_jobtread_key and user.has_anthropic_key


class TestEnsure:
    @pytest.mark.asyncio
    async def test_ensure_synthesizes_passwordless_record(self, store: CredentialStore):
        user = await store.ensure(_profile("Owner@Roofing.Example"))

        assert user.id == _profile().id
        assert user.email == "owner@roofing.example"
        assert user.password_hash == ""
        assert not user.has_password

    @pytest.mark.asyncio
    async def test_ensure_is_idempotent(self, store: CredentialStore):
        existing = await store.create("owner@roofing.example", "Secret123", "Pat", "Owner Roofing")

        again = await store.ensure(_profile())

        assert again is existing
        assert again.has_password
        assert len(store) == 1

    @pytest.mark.asyncio
    async def test_concurrent_ensure_creates_one_record(self, store: CredentialStore):
        results = await asyncio.gather(*(store.ensure(_profile()) for _ in range(5)))

        assert len(store) == 1
        assert all(r is results[0] for r in results)

    @pytest.mark.asyncio
    async def test_clear_drops_everything(self, store: CredentialStore):
        await store.ensure(_profile())
        store.clear()

        assert len(store) == 0
        assert store.find_by_email(_profile().email) is None

    @pytest.mark.asyncio
    async def test_clear_keeps_writers_serialized(self, store: CredentialStore):
        lock = store._locks[_profile().email]
        await lock.acquire()
        store.clear()

        pending = asyncio.create_task(store.ensure(_profile()))
        for _ in range(5):
            await asyncio.sleep(0)
        assert not pending.done()

        lock.release()
        user = await pending
        assert user.id == _profile().id
