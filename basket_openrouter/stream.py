"""
Stream normalization for OpenRouter chat completion chunks.

Consumes the raw chunk stream and re-emits it as text, reasoning and usage
events.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, AsyncIterable, AsyncIterator, Optional

from basket_openrouter.errors import (
    OpenRouterError,
    error_from_payload,
    get_field,
    wrap_exception,
)
from basket_openrouter.types import ReasoningEvent, StreamEvent, TextEvent, UsageEvent

logger = logging.getLogger(__name__)


class StreamState(str, Enum):
    """Lifecycle of a normalized stream."""
    STREAMING = "streaming"
    DONE = "done"
    FAILED = "failed"


def has_error(payload: Any) -> bool:
    """
    Check whether a chunk or response carries an in-band error object.

    OpenRouter returns an ``error`` object in the body instead of failing
    the HTTP request.
    """
    if isinstance(payload, dict):
        return "error" in payload
    return get_field(payload, "error") is not None


def usage_event_from(usage: Any) -> UsageEvent:
    """
    Build the usage event from an OpenRouter usage object.

    Args:
        usage: Usage object or dict from the final chunk

    Returns:
        UsageEvent with token counts and total cost
    """
    details = get_field(usage, "completion_tokens_details")

    return UsageEvent(
        input_tokens=get_field(usage, "prompt_tokens") or 0,
        output_tokens=get_field(usage, "completion_tokens") or 0,
        reasoning_tokens=get_field(details, "reasoning_tokens"),
        total_cost=get_field(usage, "cost") or 0,
    )


class StreamNormalizer:
    """
    Single-pass normalizer over an upstream chunk stream.

    Each request needs its own instance; the normalizer keeps the full
    response text and the last usage object seen.
    """

    def __init__(self):
        self.state = StreamState.STREAMING
        self.full_response_text = ""
        self.last_usage: Optional[Any] = None

    async def normalize(self, chunks: AsyncIterable[Any]) -> AsyncIterator[StreamEvent]:
        """
        Yield normalized events for the given chunks.

        Args:
            chunks: Async iterable of chunk objects or dicts

        Yields:
            TextEvent and ReasoningEvent per chunk, then at most one UsageEvent

        Raises:
            OpenRouterError: On an in-band error or a transport failure
        """
        try:
            async for chunk in chunks:
                # Error chunks may lack choices entirely
                if has_error(chunk):
                    raise error_from_payload(get_field(chunk, "error"))

                for event in self._process_chunk(chunk):
                    yield event
        except OpenRouterError:
            self.state = StreamState.FAILED
            raise
        except Exception as e:
            self.state = StreamState.FAILED
            raise wrap_exception(e) from e

        self.state = StreamState.DONE
        logger.debug("Stream finished, %d characters of content", len(self.full_response_text))

        if self.last_usage is not None:
            yield usage_event_from(self.last_usage)

    def _process_chunk(self, chunk: Any) -> list:
        events = []

        choices = get_field(chunk, "choices") or []
        delta = get_field(choices[0], "delta") if choices else None

        reasoning = get_field(delta, "reasoning")
        if reasoning and isinstance(reasoning, str):
            events.append(ReasoningEvent(text=reasoning))

        content = get_field(delta, "content")
        if content:
            self.full_response_text += content
            events.append(TextEvent(text=content))

        usage = get_field(chunk, "usage")
        if usage:
            self.last_usage = usage

        return events


__all__ = [
    "StreamState",
    "StreamNormalizer",
    "has_error",
    "usage_event_from",
]
