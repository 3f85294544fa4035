"""
Core types for basket-openrouter: Pydantic models for the OpenRouter adapter.

This module defines the model metadata, resolved generation parameters,
conversation messages, wire request and normalized stream events used
throughout basket-openrouter.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Model Metadata
# ============================================================================

class ReasoningEffort(str, Enum):
    """Reasoning effort tiers understood by OpenRouter."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ModelInfo(BaseModel):
    """Capability and pricing record for a model."""
    max_tokens: Optional[int] = Field(None, alias="maxTokens")
    context_window: int = Field(..., alias="contextWindow")
    supports_images: bool = Field(False, alias="supportsImages")
    supports_prompt_cache: bool = Field(False, alias="supportsPromptCache")
    input_price: Optional[float] = Field(None, alias="inputPrice")  # $/million tokens
    output_price: Optional[float] = Field(None, alias="outputPrice")  # $/million tokens
    cache_writes_price: Optional[float] = Field(None, alias="cacheWritesPrice")
    cache_reads_price: Optional[float] = Field(None, alias="cacheReadsPrice")
    thinking: Optional[bool] = None
    reasoning_effort: Optional[ReasoningEffort] = Field(None, alias="reasoningEffort")
    description: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True, frozen=True)


# ============================================================================
# Resolved Parameters
# ============================================================================

class ThinkingConfig(BaseModel):
    """Extended thinking budget sent upstream."""
    type: Literal["enabled"] = "enabled"
    budget_tokens: int


class PromptCache(BaseModel):
    """Prompt caching support for the resolved model."""
    supported: bool = False
    optional: bool = False


class ModelParams(BaseModel):
    """Effective generation parameters computed for a single request."""
    max_tokens: Optional[int] = None
    thinking: Optional[ThinkingConfig] = None
    temperature: float = 0.0
    reasoning_effort: Optional[ReasoningEffort] = None
    top_p: Optional[float] = None
    prompt_cache: PromptCache = Field(default_factory=PromptCache)


class ResolvedModel(BaseModel):
    """Model id, its metadata and the parameters derived from them."""
    id: str
    info: ModelInfo
    params: ModelParams


# ============================================================================
# Conversation Messages
# ============================================================================

class TextBlock(BaseModel):
    """Text content in a message."""
    type: Literal["text"] = "text"
    text: str


class ImageSource(BaseModel):
    """Base64 encoded image payload."""
    type: Literal["base64"] = "base64"
    media_type: str
    data: str


class ImageBlock(BaseModel):
    """Image content in a message."""
    type: Literal["image"] = "image"
    source: ImageSource


class ToolUseBlock(BaseModel):
    """Tool invocation requested by the assistant."""
    type: Literal["tool_use"] = "tool_use"
    id: str
    name: str
    input: Dict[str, Any] = Field(default_factory=dict)


class ToolResultBlock(BaseModel):
    """Result of a tool invocation, sent back by the user."""
    type: Literal["tool_result"] = "tool_result"
    tool_use_id: str
    content: Union[str, List[Union[TextBlock, ImageBlock]]] = ""
    is_error: bool = False


ContentBlock = Union[TextBlock, ImageBlock, ToolUseBlock, ToolResultBlock]


class ConversationMessage(BaseModel):
    """A single turn of the conversation history."""
    role: Literal["system", "user", "assistant"]
    content: Union[str, List[ContentBlock]]


# ============================================================================
# Wire Request
# ============================================================================

# Parameters the OpenAI SDK accepts as keyword arguments. Everything else is
# an OpenRouter extension and travels in ``extra_body``.
_STANDARD_PARAMS = (
    "model",
    "messages",
    "max_tokens",
    "temperature",
    "top_p",
    "stream",
    "stream_options",
)


class ProviderPreference(BaseModel):
    """OpenRouter provider routing preference."""
    order: List[str]


class ReasoningConfig(BaseModel):
    """OpenRouter reasoning directive."""
    effort: ReasoningEffort


class OpenRouterChatRequest(BaseModel):
    """Chat completion request sent to OpenRouter."""
    model: str
    messages: List[Dict[str, Any]]
    max_tokens: Optional[int] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    stream: bool = False
    stream_options: Optional[Dict[str, Any]] = None
    thinking: Optional[ThinkingConfig] = None
    usage: Optional[Dict[str, Any]] = None
    provider: Optional[ProviderPreference] = None
    transforms: Optional[List[str]] = None
    reasoning: Optional[ReasoningConfig] = None

    def to_create_kwargs(self) -> Dict[str, Any]:
        """
        Serialize to keyword arguments for ``chat.completions.create``.

        Fields that are ``None`` are omitted. OpenRouter-only fields are
        grouped under ``extra_body``.

        Returns:
            Keyword arguments for the SDK call
        """
        payload = self.model_dump(mode="json", exclude_none=True)

        kwargs: Dict[str, Any] = {}
        extra_body: Dict[str, Any] = {}
        for key, value in payload.items():
            if key in _STANDARD_PARAMS:
                kwargs[key] = value
            else:
                extra_body[key] = value

        if extra_body:
            kwargs["extra_body"] = extra_body

        return kwargs


# ============================================================================
# Stream Events
# ============================================================================

class TextEvent(BaseModel):
    """Incremental response text."""
    type: Literal["text"] = "text"
    text: str


class ReasoningEvent(BaseModel):
    """Incremental reasoning text."""
    type: Literal["reasoning"] = "reasoning"
    text: str


class UsageEvent(BaseModel):
    """Token usage and cost for the whole request."""
    type: Literal["usage"] = "usage"
    input_tokens: int = Field(0, alias="inputTokens")
    output_tokens: int = Field(0, alias="outputTokens")
    reasoning_tokens: Optional[int] = Field(None, alias="reasoningTokens")
    total_cost: float = Field(0.0, alias="totalCost")

    model_config = ConfigDict(populate_by_name=True)


# Union of all stream event types
StreamEvent = Union[TextEvent, ReasoningEvent, UsageEvent]


# ============================================================================
# Exports
# ============================================================================

__all__ = [
    # Model metadata
    "ReasoningEffort",
    "ModelInfo",
    # Parameters
    "ThinkingConfig",
    "PromptCache",
    "ModelParams",
    "ResolvedModel",
    # Messages
    "TextBlock",
    "ImageSource",
    "ImageBlock",
    "ToolUseBlock",
    "ToolResultBlock",
    "ContentBlock",
    "ConversationMessage",
    # Request
    "ProviderPreference",
    "ReasoningConfig",
    "OpenRouterChatRequest",
    # Events
    "TextEvent",
    "ReasoningEvent",
    "UsageEvent",
    "StreamEvent",
]
