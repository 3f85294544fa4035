"""
basket-openrouter: OpenRouter provider adapter.

This package translates provider-agnostic conversations into OpenRouter
chat completion requests and normalizes the streamed responses into text,
reasoning and usage events.
"""

from basket_openrouter.errors import OpenRouterError, RateLimitError, make_error_readable
from basket_openrouter.model_params import resolve_model
from basket_openrouter.providers import BaseProvider, OpenRouterProvider
from basket_openrouter.settings import OpenRouterSettings, SettingsManager
from basket_openrouter.stream import StreamNormalizer
from basket_openrouter.types import (
    ConversationMessage,
    ModelInfo,
    ModelParams,
    PromptCache,
    ReasoningEffort,
    ReasoningEvent,
    ResolvedModel,
    StreamEvent,
    TextEvent,
    ThinkingConfig,
    UsageEvent,
)

__version__ = "0.1.0"

__all__ = [
    # Providers
    "BaseProvider",
    "OpenRouterProvider",
    # Settings
    "OpenRouterSettings",
    "SettingsManager",
    # Core types
    "ConversationMessage",
    "ModelInfo",
    "ModelParams",
    "PromptCache",
    "ReasoningEffort",
    "ResolvedModel",
    "ThinkingConfig",
    # Events
    "StreamEvent",
    "TextEvent",
    "ReasoningEvent",
    "UsageEvent",
    # Streaming and errors
    "StreamNormalizer",
    "OpenRouterError",
    "RateLimitError",
    "make_error_readable",
    "resolve_model",
]
