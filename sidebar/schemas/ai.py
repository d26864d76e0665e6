"""
Request and response schemas for the AI features.
"""

from typing import Any, Dict, List, Literal, Optional

from sidebar.schemas.common import CamelModel


class ChatMessage(CamelModel):
    role: Literal["user", "assistant"]
    content: str


class ChatRequest(CamelModel):
    anthropic_api_key: Optional[str] = None
    messages: Optional[List[ChatMessage]] = None
    job_context: Optional[Any] = None


class ChatResponse(CamelModel):
    reply: str
    usage: Dict[str, Any] = {}


class EstimateRequest(CamelModel):
    """Blank fields fall back to a typical DFW residential reroof."""

    anthropic_api_key: Optional[str] = None
    trade_type: Optional[str] = None
    project_name: Optional[str] = None
    customer_name: Optional[str] = None
    measurements: Optional[str] = None
    material_grade: Optional[str] = None
    labor_market: Optional[str] = None
    profit_margin: Optional[str] = None
    location: Optional[str] = None


class EstimateResponse(CamelModel):
    estimate: Any


class ScheduleRequest(CamelModel):
    anthropic_api_key: Optional[str] = None
    jobs: Optional[List[Any]] = None
    crew_members: Optional[List[str]] = None
    date_range: Optional[str] = None
    constraints: Optional[str] = None


class ScheduleResponse(CamelModel):
    schedule: Any
