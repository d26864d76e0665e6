"""Integration tests for POST /api/jobtread."""

import httpx
import pytest
from httpx import AsyncClient

from sidebar.api.deps import get_jobtread_factory
from sidebar.integrations.jobtread import JobTreadClient
from sidebar.main import app

JOBTREAD = "/api/jobtread"


class TestDemoData:
    @pytest.mark.asyncio
    async def test_dashboard_without_key(self, client: AsyncClient):
        r = await client.post(JOBTREAD, json={"action": "getDashboard"})

        assert r.status_code == 200, r.text
        data = r.json()
        assert set(data) == {"jobs", "leads", "schedule", "financials"}
        assert len(data["jobs"]) == 5
        assert data["jobs"][0]["estimatedRevenue"] == 18500
        assert data["leads"][0]["lastContact"] == "2026-02-05"
        assert data["schedule"][0]["crewMembers"]
        assert data["financials"]["grossProfit"] > 0

    @pytest.mark.asyncio
    async def test_demo_key_serves_demo_jobs(self, client: AsyncClient):
        r = await client.post(JOBTREAD, json={
            "action": "getJobs",
            "jobtreadApiKey": "demo",
            "params": {"status": "Estimating"},
        })

        assert [job["id"] for job in r.json()["jobs"]] == ["job-004"]

    @pytest.mark.asyncio
    async def test_schedule(self, client: AsyncClient):
        r = await client.post(JOBTREAD, json={"action": "getSchedule"})

        assert r.status_code == 200
        assert len(r.json()["schedule"]) == 6

    @pytest.mark.asyncio
    async def test_connection_without_key(self, client: AsyncClient):
        r = await client.post(JOBTREAD, json={"action": "testConnection"})

        assert r.json() == {"connection": {"ok": False, "user": "", "error": "No API key provided"}}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [{}, {"action": "deleteJobs"}])
    async def test_invalid_action(self, client: AsyncClient, body):
        r = await client.post(JOBTREAD, json=body)

        assert r.status_code == 400
        assert r.json() == {"error": "Invalid action"}


class TestLiveErrors:
    @staticmethod
    def _use_transport(handler):
        def factory(api_key):
            http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
            return JobTreadClient(api_key, http_client=http_client)

        app.dependency_overrides[get_jobtread_factory] = lambda: factory

    @pytest.mark.asyncio
    async def test_rejected_key_is_401(self, client: AsyncClient):
        self._use_transport(lambda request: httpx.Response(401))

        r = await client.post(JOBTREAD, json={"action": "getLeads", "jobtreadApiKey": "jt-revoked"})

        assert r.status_code == 401
        assert r.json() == {"error": "Invalid JobTread API key. Check your key in Settings."}

    @pytest.mark.asyncio
    async def test_outage_is_502(self, client: AsyncClient):
        self._use_transport(lambda request: httpx.Response(503))

        r = await client.post(JOBTREAD, json={"action": "getJobs", "jobtreadApiKey": "jt-live"})

        assert r.status_code == 502
        assert r.json()["error"].startswith("JobTread API error 503")
