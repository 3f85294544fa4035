"""
OpenRouter Provider

Unified API for multiple LLM providers via OpenRouter.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, AsyncIterator, Dict, Optional, Sequence, Union

from openai import AsyncOpenAI

from basket_openrouter.errors import error_from_payload, get_field, wrap_exception
from basket_openrouter.model_params import resolve_model
from basket_openrouter.providers.base import BaseProvider
from basket_openrouter.providers.utils import DEFAULT_HEADERS, get_env_api_key
from basket_openrouter.request import build_completion_request, build_request
from basket_openrouter.settings import OpenRouterSettings
from basket_openrouter.stream import StreamNormalizer, has_error
from basket_openrouter.types import ConversationMessage, ResolvedModel, StreamEvent

logger = logging.getLogger(__name__)


async def _close_stream(api_stream: Any) -> None:
    """Release the upstream HTTP stream."""
    close = getattr(api_stream, "close", None)
    if not callable(close):
        return
    result = close()
    if inspect.isawaitable(result):
        await result


class OpenRouterProvider(BaseProvider):
    """Provider for the OpenRouter API."""

    DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
    PROVIDER_NAME = "openrouter"

    def __init__(
        self,
        settings: Optional[OpenRouterSettings] = None,
        client: Optional[AsyncOpenAI] = None,
    ):
        """
        Initialize the provider.

        Args:
            settings: Adapter settings (defaults if omitted)
            client: Preconfigured SDK client; built from settings if omitted
        """
        self.settings = settings or OpenRouterSettings()
        self.client = client or self._create_client()

    def _create_client(self) -> AsyncOpenAI:
        """Create the OpenAI-compatible client pointed at OpenRouter."""
        api_key = (
            self.settings.api_key
            or get_env_api_key(self.PROVIDER_NAME)
            or "not-provided"
        )

        return AsyncOpenAI(
            base_url=self.settings.base_url or self.DEFAULT_BASE_URL,
            api_key=api_key,
            default_headers=DEFAULT_HEADERS,
            # Retrying is left to the caller
            max_retries=0,
        )

    def get_model(self) -> ResolvedModel:
        """
        Resolve the configured model.

        Returns:
            Model id, metadata and effective generation parameters
        """
        return resolve_model(self.settings)

    async def create_message(
        self,
        system_prompt: str,
        messages: Sequence[Union[ConversationMessage, Dict[str, Any]]],
    ) -> AsyncIterator[StreamEvent]:
        """
        Stream a response from OpenRouter.

        The upstream stream is closed when iteration ends, fails, or the
        consumer stops early and closes this generator.

        Args:
            system_prompt: System prompt text
            messages: Conversation history

        Yields:
            TextEvent, ReasoningEvent and a final UsageEvent

        Raises:
            OpenRouterError: If the request or the stream fails
        """
        try:
            request = build_request(system_prompt, messages, self.get_model(), self.settings)
            logger.debug(
                "OpenRouter request: model=%s messages=%d max_tokens=%s",
                request.model,
                len(request.messages),
                request.max_tokens,
            )
            api_stream = await self.client.chat.completions.create(**request.to_create_kwargs())
        except Exception as e:
            raise wrap_exception(e) from e

        events = StreamNormalizer().normalize(api_stream)
        try:
            async for event in events:
                yield event
        finally:
            await events.aclose()
            await _close_stream(api_stream)

    async def complete_prompt(self, prompt: str) -> str:
        """
        Send a single prompt without streaming.

        Args:
            prompt: User prompt

        Returns:
            The completion text ("" if the model returned none)

        Raises:
            OpenRouterError: If the request fails or the response carries an error
        """
        request = build_completion_request(prompt, self.get_model())

        try:
            response = await self.client.chat.completions.create(**request.to_create_kwargs())
        except Exception as e:
            raise wrap_exception(e) from e

        if has_error(response):
            raise error_from_payload(get_field(response, "error"))

        choices = get_field(response, "choices") or []
        message = get_field(choices[0], "message") if choices else None
        return get_field(message, "content") or ""


__all__ = ["OpenRouterProvider"]
