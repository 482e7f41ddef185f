"""Diagram generation clients."""

import asyncio
import logging
import os
import random
from typing import TYPE_CHECKING, Any, Protocol

from ..schema.models import DiagramKind
from .errors import ApiKeyNotConfiguredError, GenerationFailedError
from .parser import parse_diagram_response
from .prompts import build_generation_prompt, build_system_prompt
from .templates import template_for

if TYPE_CHECKING:
    from anthropic import AsyncAnthropic

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-sonnet-4-20250514"


class GenerationClient(Protocol):
    """Turns a natural language prompt into raw diagram data."""

    async def generate(self, prompt: str, kind: DiagramKind) -> dict[str, Any]:
        """Generate a diagram of the given kind.

        The result is best-effort and may not satisfy the diagram contract.

        Raises:
            ApiKeyNotConfiguredError: If the client needs credentials it lacks.
            GenerationFailedError: If generation fails for any other reason.
        """
        ...


class TemplateClient:
    """Offline client answering prompts with keyword-matched sample diagrams."""

    def __init__(self, delay: tuple[float, float] | None = None):
        """Initialize the client.

        Args:
            delay: Optional (min, max) seconds of simulated latency.
        """
        self.delay = delay

    async def generate(self, prompt: str, kind: DiagramKind | str = DiagramKind.CLASS) -> dict[str, Any]:
        if self.delay is not None:
            await asyncio.sleep(random.uniform(*self.delay))
        diagram = template_for(prompt, kind)
        logger.debug("Answering %s prompt with a sample diagram", DiagramKind(kind).value)
        return diagram


class LLMClient:
    """Client generating diagrams with the Anthropic Messages API."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_MODEL,
        max_tokens: int = 4096,
    ):
        """Initialize the client.

        Args:
            api_key: Anthropic API key. If not provided, uses ANTHROPIC_API_KEY env var.
            model: Claude model to generate with.
            max_tokens: Response token limit.

        Raises:
            ApiKeyNotConfiguredError: If no API key is configured.
        """
        self.api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
        if not self.api_key:
            raise ApiKeyNotConfiguredError(
                "No Anthropic API key configured. "
                "Set ANTHROPIC_API_KEY environment variable or pass api_key parameter."
            )
        self.model = model
        self.max_tokens = max_tokens
        self._client: "AsyncAnthropic | None" = None

    @property
    def client(self) -> "AsyncAnthropic":
        """Lazy-load the Anthropic client."""
        if self._client is None:
            try:
                from anthropic import AsyncAnthropic
            except ImportError:
                raise GenerationFailedError(
                    "The anthropic package is not installed. "
                    "Install it with: pip install umlgen[llm]"
                )
            self._client = AsyncAnthropic(api_key=self.api_key)
        return self._client

    async def generate(self, prompt: str, kind: DiagramKind | str = DiagramKind.CLASS) -> dict[str, Any]:
        """Generate a diagram from a prompt.

        Args:
            prompt: Natural language description of the system.
            kind: The diagram kind to generate.

        Returns:
            The raw diagram data parsed from the response.

        Raises:
            ApiKeyNotConfiguredError: If the API rejects the key.
            GenerationFailedError: If the call fails or the response holds no diagram.
        """
        kind = DiagramKind(kind)
        logger.info("Requesting %s diagram from %s", kind.value, self.model)

        try:
            response = await self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                system=build_system_prompt(kind),
                messages=[{"role": "user", "content": build_generation_prompt(prompt, kind)}],
            )
        except GenerationFailedError:
            raise
        except Exception as e:
            # Check for specific anthropic errors
            error_type = type(e).__name__
            if "AuthenticationError" in error_type:
                raise ApiKeyNotConfiguredError(
                    "Invalid Anthropic API key. Please check your API key."
                ) from e
            status_code = getattr(e, "status_code", None)
            if "APIError" in error_type or "APIStatusError" in error_type or status_code:
                raise GenerationFailedError(str(e), status_code=status_code) from e
            raise GenerationFailedError(f"Unexpected error during generation: {e}") from e

        response_text = ""
        for block in response.content:
            if hasattr(block, "text"):
                response_text += block.text

        return parse_diagram_response(response_text, kind)
