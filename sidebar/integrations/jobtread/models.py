"""
Normalized JobTread records returned to the sidebar.
"""

from typing import List

from pydantic import Field

from sidebar.schemas.common import CamelModel


class Job(CamelModel):
    id: str
    name: str
    status: str
    customer: str
    address: str = ""
    estimated_revenue: float = 0
    actual_revenue: float = 0
    estimated_cost: float = 0
    actual_cost: float = 0
    start_date: str = ""
    end_date: str = ""
    progress: int = 0


class Lead(CamelModel):
    id: str
    name: str
    email: str = ""
    phone: str = ""
    source: str = "Direct"
    status: str = "New"
    estimated_value: float = 0
    created_at: str = ""
    last_contact: str = ""


class ScheduleEvent(CamelModel):
    id: str
    title: str
    job_name: str = ""
    crew_members: List[str] = Field(default_factory=list)
    start_date: str = ""
    end_date: str = ""
    status: str = "scheduled"
    type: str = "task"


class FinancialSummary(CamelModel):
    total_revenue: float = 0
    total_costs: float = 0
    gross_profit: float = 0
    gross_margin: float = 0
    open_invoices: int = 0
    overdue_invoices: int = 0
    cash_in_flow: float = 0
    cash_out_flow: float = 0


class ConnectionStatus(CamelModel):
    ok: bool
    user: str = ""
    error: str = ""
