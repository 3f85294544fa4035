"""
Unified API for streaming OpenRouter responses.

This module provides the main entry points for using basket-openrouter.
"""

from typing import Any, AsyncIterator, Dict, Optional, Sequence, Union

from basket_openrouter.model_params import resolve_model
from basket_openrouter.providers.openrouter import OpenRouterProvider
from basket_openrouter.settings import OpenRouterSettings
from basket_openrouter.types import ConversationMessage, ResolvedModel, StreamEvent


def get_provider(settings: Optional[OpenRouterSettings] = None) -> OpenRouterProvider:
    """
    Create a provider for the given settings.

    Args:
        settings: Adapter settings (defaults if omitted)

    Returns:
        OpenRouterProvider instance
    """
    return OpenRouterProvider(settings)


async def create_message(
    system_prompt: str,
    messages: Sequence[Union[ConversationMessage, Dict[str, Any]]],
    settings: Optional[OpenRouterSettings] = None,
) -> AsyncIterator[StreamEvent]:
    """
    Stream a response from OpenRouter.

    Args:
        system_prompt: System prompt text
        messages: Conversation history
        settings: Adapter settings

    Yields:
        Text, reasoning and usage events

    Example:
        >>> settings = OpenRouterSettings(model_id="anthropic/claude-3.5-sonnet")
        >>> async for event in create_message("You are helpful", [{"role": "user", "content": "Hi"}], settings):
        ...     if event.type == "text":
        ...         print(event.text, end="")
    """
    provider = get_provider(settings)
    events = provider.create_message(system_prompt, messages)
    try:
        async for event in events:
            yield event
    finally:
        await events.aclose()


async def complete_prompt(prompt: str, settings: Optional[OpenRouterSettings] = None) -> str:
    """
    Complete a single prompt without streaming.

    Example:
        >>> text = await complete_prompt("Summarize this commit message")
    """
    return await get_provider(settings).complete_prompt(prompt)


def get_model(settings: Optional[OpenRouterSettings] = None) -> ResolvedModel:
    """Resolve the model and its parameters without creating a client."""
    return resolve_model(settings or OpenRouterSettings())


__all__ = [
    "get_provider",
    "create_message",
    "complete_prompt",
    "get_model",
]
