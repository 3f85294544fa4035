"""
Model resolution and generation parameter defaults.

Combines the requested model, the registry and user overrides into the
effective parameters for a request.
"""

from __future__ import annotations

import math
from typing import Any, Dict

from basket_openrouter.models import (
    ANTHROPIC_DEFAULT_MAX_TOKENS,
    DEEP_SEEK_DEFAULT_TEMPERATURE,
    DEEP_SEEK_DEFAULT_TOP_P,
    MAX_THINKING_BUDGET_RATIO,
    MIN_THINKING_BUDGET_TOKENS,
    OPENROUTER_DEFAULT_MODEL_ID,
    OPENROUTER_DEFAULT_MODEL_INFO,
    OPTIONAL_PROMPT_CACHING_MODELS,
    PROMPT_CACHING_MODELS,
    THINKING_TEMPERATURE,
    is_reasoning_model,
    lookup,
)
from basket_openrouter.settings import OpenRouterSettings
from basket_openrouter.types import (
    ModelInfo,
    ModelParams,
    PromptCache,
    ResolvedModel,
    ThinkingConfig,
)


def get_model_params(
    settings: OpenRouterSettings,
    info: ModelInfo,
    default_temperature: float = 0.0,
) -> Dict[str, Any]:
    """
    Compute max tokens, thinking budget, temperature and reasoning effort.

    Custom max token overrides only take effect when the model runs in
    thinking mode; for every other model the registry value is used.

    Args:
        settings: Adapter settings carrying user overrides
        info: Model metadata
        default_temperature: Temperature used when the user set none

    Returns:
        Dict with ``max_tokens``, ``thinking``, ``temperature`` and
        ``reasoning_effort``
    """
    max_tokens = info.max_tokens
    thinking = None
    temperature = (
        settings.model_temperature
        if settings.model_temperature is not None
        else default_temperature
    )
    reasoning_effort = settings.reasoning_effort or info.reasoning_effort

    base_max_tokens = max_tokens or ANTHROPIC_DEFAULT_MAX_TOKENS
    if info.thinking and base_max_tokens > MIN_THINKING_BUDGET_TOKENS:
        max_tokens = settings.model_max_tokens or max_tokens

        max_budget_tokens = math.floor((max_tokens or ANTHROPIC_DEFAULT_MAX_TOKENS) * MAX_THINKING_BUDGET_RATIO)
        requested = settings.model_max_thinking_tokens or max_budget_tokens
        budget_tokens = max(min(requested, max_budget_tokens), MIN_THINKING_BUDGET_TOKENS)

        thinking = ThinkingConfig(budget_tokens=budget_tokens)
        # Upstream rejects any other temperature in thinking mode
        temperature = THINKING_TEMPERATURE

    return {
        "max_tokens": max_tokens,
        "thinking": thinking,
        "temperature": temperature,
        "reasoning_effort": reasoning_effort,
    }


def resolve_model(settings: OpenRouterSettings) -> ResolvedModel:
    """
    Resolve the model id, its metadata and the effective parameters.

    An explicit model info override wins. Otherwise the requested id is
    looked up in the registry, and unknown or missing ids fall back to the
    default model.

    Args:
        settings: Adapter settings

    Returns:
        ResolvedModel with id, info and params
    """
    if settings.model_info is not None:
        model_id = settings.model_id or OPENROUTER_DEFAULT_MODEL_ID
        info = settings.model_info
    else:
        info = lookup(settings.model_id) if settings.model_id else None
        if info is not None:
            model_id = settings.model_id
        else:
            model_id = OPENROUTER_DEFAULT_MODEL_ID
            info = OPENROUTER_DEFAULT_MODEL_INFO

    reasoning = is_reasoning_model(model_id)
    default_temperature = DEEP_SEEK_DEFAULT_TEMPERATURE if reasoning else 0.0
    top_p = DEEP_SEEK_DEFAULT_TOP_P if reasoning else None

    params = ModelParams(
        **get_model_params(settings, info, default_temperature),
        top_p=top_p,
        prompt_cache=PromptCache(
            supported=model_id in PROMPT_CACHING_MODELS,
            optional=model_id in OPTIONAL_PROMPT_CACHING_MODELS,
        ),
    )

    return ResolvedModel(id=model_id, info=info, params=params)


__all__ = ["get_model_params", "resolve_model"]
