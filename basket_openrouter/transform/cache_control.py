"""
Prompt caching annotations for OpenRouter requests.

See https://openrouter.ai/docs/features/prompt-caching
"""

from __future__ import annotations

import copy
from typing import Any, Dict, List, Sequence

EPHEMERAL_CACHE_CONTROL: Dict[str, str] = {"type": "ephemeral"}

# Number of trailing user messages that receive a cache marker
CACHED_USER_MESSAGES = 2


def _mark_last_text_part(message: Dict[str, Any]) -> None:
    content = message.get("content")
    if isinstance(content, str):
        content = [{"type": "text", "text": content}]
        message["content"] = content

    if not isinstance(content, list):
        return

    text_parts = [part for part in content if isinstance(part, dict) and part.get("type") == "text"]
    if text_parts:
        last_text_part = text_parts[-1]
    else:
        last_text_part = {"type": "text", "text": "..."}
        content.append(last_text_part)

    last_text_part["cache_control"] = dict(EPHEMERAL_CACHE_CONTROL)


def apply_cache_control(
    messages: Sequence[Dict[str, Any]],
    system_prompt: str,
) -> List[Dict[str, Any]]:
    """
    Add cache markers to the system prompt and the last two user messages.

    Callers append one user message per request; the last two user
    messages therefore span the cache boundary of the previous turn.

    The input is left untouched; annotated messages are copies.

    Args:
        messages: OpenAI-style messages, system message first
        system_prompt: System prompt text

    Returns:
        New message list with cache markers applied
    """
    result = list(messages)

    system_message = {
        "role": "system",
        "content": [{"type": "text", "text": system_prompt, "cache_control": dict(EPHEMERAL_CACHE_CONTROL)}],
    }
    if result and result[0].get("role") == "system":
        result[0] = system_message
    else:
        result.insert(0, system_message)

    user_indexes = [i for i, msg in enumerate(result) if msg.get("role") == "user"]
    for index in user_indexes[-CACHED_USER_MESSAGES:]:
        message = copy.deepcopy(result[index])
        _mark_last_text_part(message)
        result[index] = message

    return result


__all__ = ["EPHEMERAL_CACHE_CONTROL", "apply_cache_control"]
