"""
Conversational assistant ("AI Chat" panel).
"""

import json
from typing import Any, Dict, List, Optional

from sidebar.ai.llm import Completion, CompletionClient
from sidebar.ai.prompts import SYSTEM_PROMPT

FALLBACK_REPLY = "I apologize, I could not generate a response."


def build_system_prompt(job_context: Optional[Any] = None) -> str:
    """Base prompt, with the current job appended as pretty JSON when given."""
    if not job_context:
        return SYSTEM_PROMPT
    return f"{SYSTEM_PROMPT}\n\n## Current Job Context:\n{json.dumps(job_context, indent=2)}"


async def chat(
    client: CompletionClient,
    messages: List[Dict[str, str]],
    job_context: Optional[Any] = None,
) -> Completion:
    completion = await client.complete(
        build_system_prompt(job_context),
        messages,
        failure_message="Failed to get AI response",
    )
    if not completion.text:
        completion.text = FALLBACK_REPLY
    return completion
