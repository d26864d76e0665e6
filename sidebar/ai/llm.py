"""
Anthropic Messages API wrapper.

The rest of the code treats the model as an opaque text-completion function:
a system prompt and a message list in, text and token usage out.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import anthropic

from sidebar.config import get_settings
from sidebar.errors import UpstreamError
from sidebar.logging_config import get_logger

logger = get_logger(__name__)

INVALID_KEY_MESSAGE = "Invalid Anthropic API key. Please check your key in Settings."


@dataclass
class Completion:
    """Text returned by the model plus token usage."""

    text: str
    usage: Dict[str, Any] = field(default_factory=dict)


class CompletionClient:
    """One client per request, bound to the user's own API key."""

    def __init__(self, api_key: str, *, client: Optional[anthropic.AsyncAnthropic] = None):
        settings = get_settings()
        self.model = settings.anthropic_model
        self.max_tokens = settings.anthropic_max_tokens
        self._client = client or anthropic.AsyncAnthropic(api_key=api_key)

    async def complete(
        self,
        system: str,
        messages: List[Dict[str, str]],
        *,
        max_tokens: Optional[int] = None,
        failure_message: str = "Failed to get AI response",
    ) -> Completion:
        """
        Run one completion.

        Raises:
            UpstreamError: credential variant on a rejected key, generic otherwise
        """
        try:
            response = await self._client.messages.create(
                model=self.model,
                max_tokens=max_tokens or self.max_tokens,
                system=system,
                messages=messages,
            )
        except anthropic.AuthenticationError:
            raise UpstreamError(INVALID_KEY_MESSAGE, credential_invalid=True)
        except anthropic.APIError as exc:
            logger.error("Anthropic request failed: %s", exc)
            raise UpstreamError(failure_message)

        text = ""
        for block in response.content:
            if getattr(block, "type", None) == "text":
                text = block.text
                break

        usage = response.usage.model_dump() if response.usage is not None else {}
        return Completion(text=text, usage=usage)
