"""
AI features backed by the Anthropic Messages API.
"""

from sidebar.ai.llm import Completion, CompletionClient
from sidebar.ai.json_output import parse_model_json, strip_code_fences

__all__ = [
    "Completion",
    "CompletionClient",
    "parse_model_json",
    "strip_code_fences",
]
