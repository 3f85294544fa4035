"""
Request assembly for the OpenRouter chat completions API.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Sequence, Union

from basket_openrouter.models import is_reasoning_model
from basket_openrouter.settings import OpenRouterSettings
from basket_openrouter.transform import (
    apply_cache_control,
    convert_to_openai_messages,
    convert_to_r1_format,
)
from basket_openrouter.types import (
    ConversationMessage,
    OpenRouterChatRequest,
    ProviderPreference,
    ReasoningConfig,
    ResolvedModel,
)

logger = logging.getLogger(__name__)

# https://openrouter.ai/docs/transforms
MIDDLE_OUT_TRANSFORM = "middle-out"


def is_cache_available(resolved: ResolvedModel, settings: OpenRouterSettings) -> bool:
    """Whether cache markers should be sent for this model."""
    cache = resolved.params.prompt_cache
    return cache.supported and (not cache.optional or settings.prompt_caching_enabled)


def build_messages(
    system_prompt: str,
    messages: Sequence[Union[ConversationMessage, Dict[str, Any]]],
    resolved: ResolvedModel,
    settings: OpenRouterSettings,
) -> List[Dict[str, Any]]:
    """
    Build the wire message list for a streaming request.

    Args:
        system_prompt: System prompt text
        messages: Conversation history
        resolved: Resolved model and parameters
        settings: Adapter settings

    Returns:
        OpenAI-style message dicts
    """
    if is_reasoning_model(resolved.id):
        # Reasoning models expect the system prompt as the first user turn
        return convert_to_r1_format([{"role": "user", "content": system_prompt}, *messages])

    wire_messages: List[Dict[str, Any]] = [
        {"role": "system", "content": system_prompt},
        *convert_to_openai_messages(messages),
    ]

    if is_cache_available(resolved, settings):
        logger.debug("Applying prompt cache markers for %s", resolved.id)
        wire_messages = apply_cache_control(wire_messages, system_prompt)

    return wire_messages


def build_request(
    system_prompt: str,
    messages: Sequence[Union[ConversationMessage, Dict[str, Any]]],
    resolved: ResolvedModel,
    settings: OpenRouterSettings,
) -> OpenRouterChatRequest:
    """
    Build a streaming chat completion request.

    Args:
        system_prompt: System prompt text
        messages: Conversation history
        resolved: Resolved model and parameters
        settings: Adapter settings

    Returns:
        Request ready to be sent upstream
    """
    params = resolved.params
    provider_order = settings.provider_order

    return OpenRouterChatRequest(
        model=resolved.id,
        messages=build_messages(system_prompt, messages, resolved, settings),
        max_tokens=params.max_tokens,
        temperature=params.temperature,
        thinking=params.thinking,
        top_p=params.top_p,
        stream=True,
        stream_options={"include_usage": True},
        usage={"include": True},
        provider=ProviderPreference(order=[provider_order]) if provider_order else None,
        transforms=[MIDDLE_OUT_TRANSFORM] if settings.use_middle_out_transform else None,
        reasoning=ReasoningConfig(effort=params.reasoning_effort) if params.reasoning_effort else None,
    )


def build_completion_request(prompt: str, resolved: ResolvedModel) -> OpenRouterChatRequest:
    """Build a single-turn, non-streaming request."""
    params = resolved.params

    return OpenRouterChatRequest(
        model=resolved.id,
        messages=[{"role": "user", "content": prompt}],
        max_tokens=params.max_tokens,
        temperature=params.temperature,
        thinking=params.thinking,
        stream=False,
    )


__all__ = [
    "MIDDLE_OUT_TRANSFORM",
    "is_cache_available",
    "build_messages",
    "build_request",
    "build_completion_request",
]
