"""
JobTread project-management API integration.
"""

from sidebar.integrations.jobtread.client import JobTreadClient
from sidebar.integrations.jobtread.models import (
    ConnectionStatus,
    FinancialSummary,
    Job,
    Lead,
    ScheduleEvent,
)

__all__ = [
    "JobTreadClient",
    "ConnectionStatus",
    "FinancialSummary",
    "Job",
    "Lead",
    "ScheduleEvent",
]
