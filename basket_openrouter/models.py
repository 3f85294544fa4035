"""
Static registry of OpenRouter models.

Holds capability metadata for the models the adapter knows about, the
default model, and the prompt caching membership sets.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, Optional

from basket_openrouter.types import ModelInfo

OPENROUTER_DEFAULT_MODEL_ID = "anthropic/claude-3.7-sonnet"

OPENROUTER_DEFAULT_MODEL_INFO = ModelInfo(
    max_tokens=8192,
    context_window=200_000,
    supports_images=True,
    supports_prompt_cache=True,
    input_price=3.0,
    output_price=15.0,
    cache_writes_price=3.75,
    cache_reads_price=0.3,
    description="Claude 3.7 Sonnet is an advanced large language model with improved reasoning, coding, and problem-solving capabilities.",
)

# Reasoning models
DEEP_SEEK_DEFAULT_TEMPERATURE = 0.6
DEEP_SEEK_DEFAULT_TOP_P = 0.95
REASONING_MODEL_PREFIXES = ("deepseek/deepseek-r1",)
REASONING_MODEL_IDS = frozenset({"perplexity/sonar-reasoning"})

# Thinking budget
ANTHROPIC_DEFAULT_MAX_TOKENS = 8192
MIN_THINKING_BUDGET_TOKENS = 1024
MAX_THINKING_BUDGET_RATIO = 0.8
THINKING_TEMPERATURE = 1.0


OPENROUTER_MODELS: Dict[str, ModelInfo] = {
    OPENROUTER_DEFAULT_MODEL_ID: OPENROUTER_DEFAULT_MODEL_INFO,
    "anthropic/claude-3.7-sonnet:beta": OPENROUTER_DEFAULT_MODEL_INFO,
    "anthropic/claude-3.7-sonnet:thinking": ModelInfo(
        max_tokens=128_000,
        context_window=200_000,
        supports_images=True,
        supports_prompt_cache=True,
        input_price=3.0,
        output_price=15.0,
        cache_writes_price=3.75,
        cache_reads_price=0.3,
        thinking=True,
    ),
    "anthropic/claude-3.5-sonnet": ModelInfo(
        max_tokens=8192,
        context_window=200_000,
        supports_images=True,
        supports_prompt_cache=True,
        input_price=3.0,
        output_price=15.0,
        cache_writes_price=3.75,
        cache_reads_price=0.3,
    ),
    "anthropic/claude-3.5-haiku": ModelInfo(
        max_tokens=8192,
        context_window=200_000,
        supports_images=False,
        supports_prompt_cache=True,
        input_price=0.8,
        output_price=4.0,
        cache_writes_price=1.0,
        cache_reads_price=0.08,
    ),
    "anthropic/claude-3-opus": ModelInfo(
        max_tokens=4096,
        context_window=200_000,
        supports_images=True,
        supports_prompt_cache=True,
        input_price=15.0,
        output_price=75.0,
        cache_writes_price=18.75,
        cache_reads_price=1.5,
    ),
    "deepseek/deepseek-r1": ModelInfo(
        max_tokens=8192,
        context_window=163_840,
        input_price=0.55,
        output_price=2.19,
    ),
    "perplexity/sonar-reasoning": ModelInfo(
        max_tokens=8192,
        context_window=127_000,
        input_price=1.0,
        output_price=5.0,
    ),
    "google/gemini-2.0-flash-001": ModelInfo(
        max_tokens=8192,
        context_window=1_048_576,
        supports_images=True,
        supports_prompt_cache=True,
        input_price=0.1,
        output_price=0.4,
        cache_writes_price=0.1833,
        cache_reads_price=0.025,
    ),
    "google/gemini-2.5-pro-preview-03-25": ModelInfo(
        max_tokens=65_535,
        context_window=1_048_576,
        supports_images=True,
        supports_prompt_cache=True,
        input_price=1.25,
        output_price=10.0,
        cache_writes_price=1.625,
        cache_reads_price=0.31,
    ),
    "openai/gpt-4o": ModelInfo(
        max_tokens=16_384,
        context_window=128_000,
        supports_images=True,
        input_price=2.5,
        output_price=10.0,
    ),
    "openai/o3-mini": ModelInfo(
        max_tokens=100_000,
        context_window=200_000,
        input_price=1.1,
        output_price=4.4,
        reasoning_effort="medium",
    ),
}

# Models for which OpenRouter honours cache_control markers
PROMPT_CACHING_MODELS: FrozenSet[str] = frozenset({
    "anthropic/claude-3-haiku",
    "anthropic/claude-3-haiku:beta",
    "anthropic/claude-3-opus",
    "anthropic/claude-3-opus:beta",
    "anthropic/claude-3-sonnet",
    "anthropic/claude-3-sonnet:beta",
    "anthropic/claude-3.5-haiku",
    "anthropic/claude-3.5-haiku:beta",
    "anthropic/claude-3.5-sonnet",
    "anthropic/claude-3.5-sonnet:beta",
    "anthropic/claude-3.7-sonnet",
    "anthropic/claude-3.7-sonnet:beta",
    "anthropic/claude-3.7-sonnet:thinking",
    "google/gemini-2.0-flash-001",
    "google/gemini-2.5-pro-preview-03-25",
    "google/gemini-flash-1.5",
    "google/gemini-flash-1.5-8b",
})

# Cache-capable models where caching must be switched on in settings
OPTIONAL_PROMPT_CACHING_MODELS: FrozenSet[str] = frozenset({
    "google/gemini-2.0-flash-001",
    "google/gemini-2.5-pro-preview-03-25",
    "google/gemini-flash-1.5",
    "google/gemini-flash-1.5-8b",
})


def lookup(model_id: str) -> Optional[ModelInfo]:
    """
    Look up registry metadata for a model.

    Args:
        model_id: OpenRouter model id (e.g., "anthropic/claude-3.5-sonnet")

    Returns:
        The model's metadata, or None if the model is unknown
    """
    return OPENROUTER_MODELS.get(model_id)


def is_reasoning_model(model_id: str) -> bool:
    """
    Check whether a model belongs to the reasoning family.

    Reasoning models reject system-role messages and stream their reasoning
    trace separately from content.

    Examples:
        >>> is_reasoning_model("deepseek/deepseek-r1:free")
        True
        >>> is_reasoning_model("anthropic/claude-3.5-sonnet")
        False
    """
    return model_id.startswith(REASONING_MODEL_PREFIXES) or model_id in REASONING_MODEL_IDS


__all__ = [
    "OPENROUTER_DEFAULT_MODEL_ID",
    "OPENROUTER_DEFAULT_MODEL_INFO",
    "OPENROUTER_MODELS",
    "PROMPT_CACHING_MODELS",
    "OPTIONAL_PROMPT_CACHING_MODELS",
    "DEEP_SEEK_DEFAULT_TEMPERATURE",
    "DEEP_SEEK_DEFAULT_TOP_P",
    "ANTHROPIC_DEFAULT_MAX_TOKENS",
    "MIN_THINKING_BUDGET_TOKENS",
    "MAX_THINKING_BUDGET_RATIO",
    "THINKING_TEMPERATURE",
    "lookup",
    "is_reasoning_model",
]
