"""
Static demonstration data, served whenever no JobTread key is configured.
"""

from datetime import date, timedelta
from typing import List, Optional

from sidebar.integrations.jobtread.models import FinancialSummary, Job, Lead, ScheduleEvent


def demo_jobs() -> List[Job]:
    return [
        Job(
            id="job-001", name="Smith Residence - Full Reroof", status="In Progress",
            customer="John Smith", address="1234 Oak Lane, Dallas TX",
            estimated_revenue=18500, actual_revenue=9250, estimated_cost=11200, actual_cost=5800,
            start_date="2026-02-03", end_date="2026-02-07", progress=65,
        ),
        Job(
            id="job-002", name="Johnson Commercial - TPO Flat Roof", status="In Progress",
            customer="Johnson Properties LLC", address="5678 Business Pkwy, Fort Worth TX",
            estimated_revenue=42000, actual_revenue=21000, estimated_cost=28500, actual_cost=14200,
            start_date="2026-02-01", end_date="2026-02-14", progress=45,
        ),
        Job(
            id="job-003", name="Garcia Home - Storm Damage Repair", status="Scheduled",
            customer="Maria Garcia", address="910 Elm St, Arlington TX",
            estimated_revenue=8900, estimated_cost=5200,
            start_date="2026-02-10", end_date="2026-02-11",
        ),
        Job(
            id="job-004", name="Williams Estate - Premium Metal Roof", status="Estimating",
            customer="Robert Williams", address="2468 Maple Dr, Plano TX",
            estimated_revenue=35000, estimated_cost=22000,
        ),
        Job(
            id="job-005", name="Davis Office Park - Maintenance", status="Completed",
            customer="Davis Corp", address="1357 Corporate Blvd, Irving TX",
            estimated_revenue=6500, actual_revenue=6500, estimated_cost=3800, actual_cost=3650,
            start_date="2026-01-28", end_date="2026-01-30", progress=100,
        ),
    ]


def demo_leads() -> List[Lead]:
    return [
        Lead(id="lead-001", name="Sarah Thompson", email="sarah@email.com", phone="(214) 555-0123",
             source="Google Ads", status="New", estimated_value=12000,
             created_at="2026-02-05", last_contact="2026-02-05"),
        Lead(id="lead-002", name="Mike Chen", email="mike@email.com", phone="(817) 555-0456",
             source="Referral", status="Contacted", estimated_value=28000,
             created_at="2026-02-04", last_contact="2026-02-05"),
        Lead(id="lead-003", name="Amanda Brooks", email="amanda@email.com", phone="(972) 555-0789",
             source="Website", status="Proposal Sent", estimated_value=15000,
             created_at="2026-02-02", last_contact="2026-02-04"),
        Lead(id="lead-004", name="David Park", email="david@email.com", phone="(469) 555-0321",
             source="Angi", status="New", estimated_value=9500,
             created_at="2026-02-06", last_contact="2026-02-06"),
    ]


def demo_schedule(today: Optional[date] = None) -> List[ScheduleEvent]:
    """Events laid out relative to ``today`` so the demo always looks current."""
    today = today or date.today()

    def day(offset: int) -> str:
        return (today + timedelta(days=offset)).isoformat()

    return [
        ScheduleEvent(id="evt-001", title="Tear-off & Deck Inspection", job_name="Smith Residence",
                      crew_members=["Carlos M.", "James R.", "Luis P."],
                      start_date=day(0), end_date=day(0), status="in_progress"),
        ScheduleEvent(id="evt-002", title="Underlayment & Flashing", job_name="Smith Residence",
                      crew_members=["Carlos M.", "James R."],
                      start_date=day(1), end_date=day(1)),
        ScheduleEvent(id="evt-003", title="TPO Membrane Installation", job_name="Johnson Commercial",
                      crew_members=["Team B - Marco", "Team B - Kevin", "Team B - Andre"],
                      start_date=day(0), end_date=day(2), status="in_progress"),
        ScheduleEvent(id="evt-004", title="Inspection - City of Arlington", job_name="Garcia Home",
                      start_date=day(4), end_date=day(4), type="inspection"),
        ScheduleEvent(id="evt-005", title="Material Delivery - ABC Supply", job_name="Garcia Home",
                      start_date=day(3), end_date=day(3), type="delivery"),
        ScheduleEvent(id="evt-006", title="Measurement & Scope", job_name="Williams Estate",
                      crew_members=["Nick P."], start_date=day(2), end_date=day(2), type="estimate"),
    ]


def demo_financials() -> FinancialSummary:
    return FinancialSummary(
        total_revenue=187500,
        total_costs=118200,
        gross_profit=69300,
        gross_margin=36.9,
        open_invoices=12,
        overdue_invoices=2,
        cash_in_flow=45200,
        cash_out_flow=32100,
    )
