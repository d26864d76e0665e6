"""
AI feature endpoints: chat, estimates, scheduler.

Each request carries the user's own Anthropic key.
"""

from typing import Optional

from fastapi import APIRouter

from sidebar.ai import assistant, estimator, scheduler
from sidebar.api.deps import Completions
from sidebar.errors import ValidationError
from sidebar.schemas.ai import (
    ChatRequest,
    ChatResponse,
    EstimateRequest,
    EstimateResponse,
    ScheduleRequest,
    ScheduleResponse,
)

router = APIRouter()


def _require_key(api_key: Optional[str], message: str = "Anthropic API key required") -> str:
    if not api_key:
        raise ValidationError(message)
    return api_key


@router.post("/chat", response_model=ChatResponse)
async def chat(data: ChatRequest, completions: Completions):
    """Answer a chat turn, optionally grounded in the current job."""
    api_key = _require_key(
        data.anthropic_api_key,
        "Anthropic API key is required. Add it in Settings.",
    )
    if not data.messages:
        raise ValidationError("Messages are required")

    completion = await assistant.chat(
        completions(api_key),
        [m.model_dump() for m in data.messages],
        data.job_context,
    )
    return ChatResponse(reply=completion.text, usage=completion.usage)


@router.post("/estimates", response_model=EstimateResponse)
async def create_estimate(data: EstimateRequest, completions: Completions):
    """Generate a line-item estimate as JSON."""
    api_key = _require_key(data.anthropic_api_key)
    estimate = await estimator.generate_estimate(completions(api_key), data)
    return EstimateResponse(estimate=estimate)


@router.post("/scheduler", response_model=ScheduleResponse)
async def create_schedule(data: ScheduleRequest, completions: Completions):
    """Generate a crew schedule as JSON."""
    api_key = _require_key(data.anthropic_api_key)
    schedule = await scheduler.generate_schedule(completions(api_key), data)
    return ScheduleResponse(schedule=schedule)
