"""Completion client for an OpenAI-compatible chat completions API.

Sends the whole conversation in one request and turns the raw reply into a
CompletionResult. There is no retry and no streaming: every transport,
status or parsing problem is reported as a single CompletionError, and the
caller decides what to show the user.
"""

import logging
import time
from collections.abc import Sequence

import httpx
from pydantic import BaseModel, ValidationError

from src.agent.config import CompletionConfig, get_completion_config
from src.models.schemas import CompletionResult
from src.parsing.think_parser import split_reasoning

logger = logging.getLogger(__name__)


class CompletionError(Exception):
    """Raised when the completion service call fails for any reason."""

    pass


class _ResponseMessage(BaseModel):
    content: str | None = None


class _ResponseChoice(BaseModel):
    message: _ResponseMessage | None = None


class _CompletionResponse(BaseModel):
    choices: list[_ResponseChoice] = []

    def first_content(self) -> str:
        if not self.choices or self.choices[0].message is None:
            return ""
        return self.choices[0].message.content or ""


class CompletionClient:
    """Client for the hosted completion endpoint.

    Wraps httpx with:
    - Bearer authentication from CompletionConfig
    - Fixed model, temperature and max-token options
    - Elapsed-time measurement around the whole call
    - Thinking-segment extraction on the returned text
    """

    def __init__(
        self,
        config: CompletionConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the completion client.

        Args:
            config: Optional completion configuration.
                    Loads from environment if not provided.
            transport: Optional httpx transport, used by tests.
        """
        self._config = config or get_completion_config()
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return f"{self._config.base_url}/chat/completions"

    def _build_payload(self, turns: Sequence[dict[str, str]]) -> dict:
        return {
            "messages": [
                {"role": turn["role"], "content": turn["content"]} for turn in turns
            ],
            "model": self._config.model_name,
            "temperature": self._config.temperature,
            "max_tokens": self._config.max_tokens,
        }

    async def complete(self, turns: Sequence[dict[str, str]]) -> CompletionResult:
        """Request a completion for the given conversation.

        Args:
            turns: Ordered ``{"role", "content"}`` pairs, oldest first.

        Returns:
            CompletionResult with answer, reasoning and elapsed milliseconds.

        Raises:
            CompletionError: On transport failure, error status or a
                malformed response body.
        """
        payload = self._build_payload(turns)
        headers = {"Authorization": f"Bearer {self._config.api_key}"}

        started = time.monotonic()
        try:
            async with httpx.AsyncClient(
                timeout=self._config.timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(self.endpoint, json=payload, headers=headers)
                response.raise_for_status()
                body = _CompletionResponse.model_validate(response.json())
        except httpx.HTTPStatusError as e:
            logger.error(f"Completion service returned HTTP {e.response.status_code}")
            raise CompletionError("Failed to get AI response") from e
        except httpx.RequestError as e:
            logger.error(f"Completion request failed: {e}")
            raise CompletionError("Failed to get AI response") from e
        except (ValueError, ValidationError) as e:
            logger.error(f"Malformed completion response: {e}")
            raise CompletionError("Failed to get AI response") from e
        elapsed_ms = int((time.monotonic() - started) * 1000)

        answer, reasoning = split_reasoning(body.first_content())
        logger.debug(f"Completion received in {elapsed_ms} ms")

        return CompletionResult(
            answer=answer,
            reasoning=reasoning,
            reasoning_elapsed_ms=elapsed_ms,
        )


# Module-level singleton instance
_completion_client: CompletionClient | None = None


def get_completion_client() -> CompletionClient:
    """Get or create the global completion client.

    Returns:
        The CompletionClient instance.
    """
    global _completion_client
    if _completion_client is None:
        _completion_client = CompletionClient()
    return _completion_client
