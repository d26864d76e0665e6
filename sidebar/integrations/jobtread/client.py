"""
JobTread GraphQL client.

Without a real API key every read returns the static demo data, so the
sidebar is usable before the contractor connects their account.
"""

from datetime import date
from typing import Any, Dict, List, Optional

import httpx

from sidebar.config import get_settings
from sidebar.errors import UpstreamError
from sidebar.integrations.jobtread import demo_data
from sidebar.integrations.jobtread.models import (
    ConnectionStatus,
    FinancialSummary,
    Job,
    Lead,
    ScheduleEvent,
)
from sidebar.logging_config import get_logger

logger = get_logger(__name__)

INVALID_KEY_MESSAGE = "Invalid JobTread API key. Check your key in Settings."
INVALID_RESPONSE_MESSAGE = "JobTread API returned an invalid response"
DEMO_KEY = "demo"

JOBS_QUERY = """
query($status: String) {
  jobs(filter: { status: $status }, first: 50) {
    edges {
      node {
        id
        name
        status
        customer { name }
        location { formattedAddress }
        estimatedRevenue
        actualRevenue
        estimatedCost
        actualCost
        startDate
        endDate
      }
    }
  }
}
"""

LEADS_QUERY = """
query {
  customers(first: 20) {
    edges {
      node {
        id
        name
        contacts(first: 1) { edges { node { email phone } } }
        jobs(first: 1) { edges { node { status estimatedRevenue } } }
        createdAt
      }
    }
  }
}
"""

TASKS_QUERY = """
query($startDate: String!, $endDate: String!) {
  tasks(filter: { startDate: { gte: $startDate }, endDate: { lte: $endDate } }, first: 50) {
    edges {
      node {
        id
        name
        job { name }
        assignees { name }
        startDate
        endDate
        status
        type
      }
    }
  }
}
"""

_JOB_TOTALS = """
  jobs(first: 100) {
    edges { node { estimatedRevenue actualRevenue estimatedCost actualCost } }
  }
"""

FINANCIALS_QUERY = (
    "query {"
    + _JOB_TOTALS
    + """
  documents(filter: { type: "invoice" }, first: 100) {
    edges { node { status total dueDate } }
  }
}
"""
)

JOB_TOTALS_QUERY = "query {" + _JOB_TOTALS + "}"

VIEWER_QUERY = "query { viewer { id name email } }"


def _edges(data: Optional[Dict[str, Any]], key: str) -> List[Dict[str, Any]]:
    """Nodes of a connection, tolerating missing levels."""
    connection = (data or {}).get(key) or {}
    return [edge.get("node") or {} for edge in connection.get("edges") or []]


def _job_totals(jobs: List[Dict[str, Any]]) -> tuple[float, float]:
    revenue = sum(j.get("actualRevenue") or j.get("estimatedRevenue") or 0 for j in jobs)
    costs = sum(j.get("actualCost") or j.get("estimatedCost") or 0 for j in jobs)
    return revenue, costs


def _margin(revenue: float, costs: float) -> float:
    return (revenue - costs) / revenue * 100 if revenue > 0 else 0


class JobTreadClient:
    """
    Thin wrapper over the JobTread GraphQL endpoint.

    Args:
        api_key: Bearer key; empty, None or "demo" selects demo data
        http_client: Optional shared httpx client (tests pass a MockTransport)
    """

    def __init__(self, api_key: Optional[str] = None, *, http_client: Optional[httpx.AsyncClient] = None):
        settings = get_settings()
        self.api_key = (api_key or "").strip()
        self.url = settings.jobtread_graphql_url
        self.timeout = settings.jobtread_timeout_seconds
        self._http_client = http_client

    @property
    def is_live(self) -> bool:
        return bool(self.api_key) and self.api_key != DEMO_KEY

    async def _post(self, client: httpx.AsyncClient, body: Dict[str, Any]) -> httpx.Response:
        return await client.post(
            self.url,
            json=body,
            headers={"Authorization": f"Bearer {self.api_key}"},
            timeout=self.timeout,
        )

    async def query(self, document: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Run a GraphQL document and return its ``data``.

        Raises:
            UpstreamError: credential variant on 401/403, generic otherwise
        """
        body: Dict[str, Any] = {"query": document}
        if variables:
            body["variables"] = variables

        try:
            if self._http_client is not None:
                response = await self._post(self._http_client, body)
            else:
                async with httpx.AsyncClient() as client:
                    response = await self._post(client, body)
        except httpx.HTTPError as exc:
            logger.warning("JobTread request failed: %s", exc)
            raise UpstreamError(
                f"Could not connect to JobTread: {exc.__class__.__name__}. "
                "Check your API key and network connection."
            )

        if response.status_code in (401, 403):
            raise UpstreamError(INVALID_KEY_MESSAGE, credential_invalid=True)
        if response.is_error:
            raise UpstreamError(f"JobTread API error {response.status_code}: {response.reason_phrase}")

        try:
            payload = response.json()
        except ValueError:
            raise UpstreamError(INVALID_RESPONSE_MESSAGE)
        if not isinstance(payload, dict):
            raise UpstreamError(INVALID_RESPONSE_MESSAGE)

        errors = payload.get("errors")
        if errors:
            messages = ", ".join(
                str(e.get("message", e)) if isinstance(e, dict) else str(e) for e in errors
            )
            raise UpstreamError(f"JobTread API error: {messages}")

        data = payload.get("data") or {}
        if not isinstance(data, dict):
            raise UpstreamError(INVALID_RESPONSE_MESSAGE)
        return data

    async def test_connection(self) -> ConnectionStatus:
        if not self.is_live:
            return ConnectionStatus(ok=False, error="No API key provided")
        try:
            data = await self.query(VIEWER_QUERY)
        except UpstreamError as exc:
            return ConnectionStatus(ok=False, error=exc.message)
        viewer = data.get("viewer") or {}
        return ConnectionStatus(ok=True, user=viewer.get("name") or viewer.get("email") or "")

    async def get_jobs(self, status: Optional[str] = None) -> List[Job]:
        if not self.is_live:
            jobs = demo_data.demo_jobs()
            return [j for j in jobs if j.status == status] if status else jobs

        data = await self.query(JOBS_QUERY, {"status": status} if status else None)
        return [
            Job(
                id=node.get("id", ""),
                name=node.get("name") or "Untitled Job",
                status=node.get("status") or "Unknown",
                customer=(node.get("customer") or {}).get("name") or "Unknown",
                address=(node.get("location") or {}).get("formattedAddress") or "",
                estimated_revenue=node.get("estimatedRevenue") or 0,
                actual_revenue=node.get("actualRevenue") or 0,
                estimated_cost=node.get("estimatedCost") or 0,
                actual_cost=node.get("actualCost") or 0,
                start_date=node.get("startDate") or "",
                end_date=node.get("endDate") or "",
            )
            for node in _edges(data, "jobs")
        ]

    async def get_leads(self) -> List[Lead]:
        if not self.is_live:
            return demo_data.demo_leads()

        # Leads are customers early in the pipeline, not a separate entity
        data = await self.query(LEADS_QUERY)
        leads = []
        for node in _edges(data, "customers"):
            contact = next(iter(_edges(node, "contacts")), {})
            job = next(iter(_edges(node, "jobs")), {})
            leads.append(Lead(
                id=node.get("id", ""),
                name=node.get("name") or "Unknown",
                email=contact.get("email") or "",
                phone=contact.get("phone") or "",
                status=job.get("status") or "New",
                estimated_value=job.get("estimatedRevenue") or 0,
                created_at=node.get("createdAt") or "",
                last_contact=node.get("createdAt") or "",
            ))
        return leads

    async def get_schedule(self, start_date: str, end_date: str) -> List[ScheduleEvent]:
        if not self.is_live:
            return demo_data.demo_schedule()

        data = await self.query(TASKS_QUERY, {"startDate": start_date, "endDate": end_date})
        return [
            ScheduleEvent(
                id=node.get("id", ""),
                title=node.get("name") or "Untitled Task",
                job_name=(node.get("job") or {}).get("name") or "",
                crew_members=[a.get("name", "") for a in node.get("assignees") or []],
                start_date=node.get("startDate") or "",
                end_date=node.get("endDate") or "",
                status=node.get("status") or "scheduled",
                type=node.get("type") or "task",
            )
            for node in _edges(data, "tasks")
        ]

    async def get_financial_summary(self) -> FinancialSummary:
        """
        Totals computed from job-level numbers and invoices.

        Accounts without invoice documents get a jobs-only summary.
        """
        if not self.is_live:
            return demo_data.demo_financials()

        try:
            data = await self.query(FINANCIALS_QUERY)
        except UpstreamError as exc:
            if exc.credential_invalid:
                raise
            logger.info("Invoice query failed, using jobs-only summary: %s", exc.message)
            return await self._jobs_only_summary()

        revenue, costs = _job_totals(_edges(data, "jobs"))
        today = date.today().isoformat()
        open_invoices = overdue_invoices = 0
        cash_in = 0.0
        for doc in _edges(data, "documents"):
            if doc.get("status") == "paid":
                cash_in += doc.get("total") or 0
            elif doc.get("status") in ("sent", "open"):
                open_invoices += 1
                if doc.get("dueDate") and doc["dueDate"] < today:
                    overdue_invoices += 1

        return FinancialSummary(
            total_revenue=revenue,
            total_costs=costs,
            gross_profit=revenue - costs,
            gross_margin=_margin(revenue, costs),
            open_invoices=open_invoices,
            overdue_invoices=overdue_invoices,
            cash_in_flow=cash_in,
            cash_out_flow=costs,
        )

    async def _jobs_only_summary(self) -> FinancialSummary:
        data = await self.query(JOB_TOTALS_QUERY)
        revenue, costs = _job_totals(_edges(data, "jobs"))
        return FinancialSummary(
            total_revenue=revenue,
            total_costs=costs,
            gross_profit=revenue - costs,
            gross_margin=_margin(revenue, costs),
            cash_in_flow=revenue,
            cash_out_flow=costs,
        )
