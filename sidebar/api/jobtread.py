"""
JobTread proxy endpoint for the dashboard panels.
"""

import asyncio
from datetime import date, timedelta
from typing import Any, Dict

from fastapi import APIRouter
from fastapi.encoders import jsonable_encoder

from sidebar.api.deps import JobTread
from sidebar.errors import ValidationError
from sidebar.integrations.jobtread import JobTreadClient
from sidebar.schemas.jobtread import JobTreadRequest

router = APIRouter()

SCHEDULE_WINDOW_DAYS = 7


def _default_window() -> tuple[str, str]:
    today = date.today()
    return today.isoformat(), (today + timedelta(days=SCHEDULE_WINDOW_DAYS)).isoformat()


async def _get_jobs(client: JobTreadClient, params: Dict[str, Any]) -> Dict[str, Any]:
    return {"jobs": await client.get_jobs(params.get("status"))}


async def _get_leads(client: JobTreadClient, params: Dict[str, Any]) -> Dict[str, Any]:
    return {"leads": await client.get_leads()}


async def _get_schedule(client: JobTreadClient, params: Dict[str, Any]) -> Dict[str, Any]:
    start, end = _default_window()
    schedule = await client.get_schedule(
        params.get("startDate") or start,
        params.get("endDate") or end,
    )
    return {"schedule": schedule}


async def _get_financials(client: JobTreadClient, params: Dict[str, Any]) -> Dict[str, Any]:
    return {"financials": await client.get_financial_summary()}


async def _get_dashboard(client: JobTreadClient, params: Dict[str, Any]) -> Dict[str, Any]:
    start, end = _default_window()
    jobs, leads, schedule, financials = await asyncio.gather(
        client.get_jobs(),
        client.get_leads(),
        client.get_schedule(start, end),
        client.get_financial_summary(),
    )
    return {"jobs": jobs, "leads": leads, "schedule": schedule, "financials": financials}


async def _test_connection(client: JobTreadClient, params: Dict[str, Any]) -> Dict[str, Any]:
    return {"connection": await client.test_connection()}


ACTIONS = {
    "getJobs": _get_jobs,
    "getLeads": _get_leads,
    "getSchedule": _get_schedule,
    "getFinancials": _get_financials,
    "getDashboard": _get_dashboard,
    "testConnection": _test_connection,
}


@router.post("/jobtread", response_model=None)
async def jobtread(data: JobTreadRequest, factory: JobTread):
    """Dispatch a dashboard read; demo data is returned when no key is given."""
    handler = ACTIONS.get(data.action or "")
    if handler is None:
        raise ValidationError("Invalid action")

    result = await handler(factory(data.jobtread_api_key), data.params or {})
    return jsonable_encoder(result, by_alias=True)
