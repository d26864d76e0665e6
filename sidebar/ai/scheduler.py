"""
Crew schedule generation. The optimization happens inside the model.
"""

import json
from typing import Any

from sidebar.ai.json_output import parse_model_json
from sidebar.ai.llm import CompletionClient
from sidebar.ai.prompts import SCHEDULER_PROMPT
from sidebar.schemas.ai import ScheduleRequest

DEFAULT_CREW = ["Carlos M.", "James R.", "Luis P.", "Marco T.", "Kevin W.", "Andre J."]
DEFAULT_DATE_RANGE = "Next 5 business days starting from today"
DEFAULT_CONSTRAINTS = (
    "Standard 7AM-4PM work hours. Prioritize jobs by deadline. Account for DFW Texas weather."
)


def build_schedule_prompt(params: ScheduleRequest) -> str:
    jobs = json.dumps(params.jobs or [], indent=2)
    crew = json.dumps(params.crew_members or DEFAULT_CREW, indent=2)
    return (
        "Generate an optimized schedule with these parameters:\n\n"
        f"Active Jobs:\n{jobs}\n\n"
        f"Available Crew Members:\n{crew}\n\n"
        f"Date Range: {params.date_range or DEFAULT_DATE_RANGE}\n\n"
        f"Constraints:\n{params.constraints or DEFAULT_CONSTRAINTS}\n\n"
        "Generate a detailed, optimized schedule that maximizes crew utilization and minimizes travel."
    )


async def generate_schedule(client: CompletionClient, params: ScheduleRequest) -> Any:
    completion = await client.complete(
        SCHEDULER_PROMPT,
        [{"role": "user", "content": build_schedule_prompt(params)}],
        failure_message="Failed to generate schedule",
    )
    return parse_model_json(completion.text)
