"""
Conversion of conversation messages for reasoning models (DeepSeek R1 style).

These models reject system messages and consecutive messages with the same
role, so the history is flattened and merged.
"""

from __future__ import annotations

from typing import Any, Dict, List, Sequence, Union

from basket_openrouter.transform.openai_format import (
    image_url_part,
    parse_block,
    passthrough,
    split_message,
)
from basket_openrouter.types import (
    ConversationMessage,
    ImageBlock,
    TextBlock,
    ToolResultBlock,
    ToolUseBlock,
)

Content = Union[str, List[Any]]


def _as_parts(content: Content) -> List[Any]:
    if isinstance(content, str):
        return [{"type": "text", "text": content}]
    return content


def _convert_content(content: List[Any]) -> Content:
    """Flatten to a string unless non-text parts have to be kept."""
    parts: List[Any] = []
    for block in map(parse_block, content):
        if isinstance(block, TextBlock):
            parts.append({"type": "text", "text": block.text})
        elif isinstance(block, ImageBlock):
            parts.append(image_url_part(block))
        elif not isinstance(block, (ToolUseBlock, ToolResultBlock)):
            parts.append(block)

    if all(isinstance(part, dict) and part.get("type") == "text" and "text" in part for part in parts):
        return "\n".join(part["text"] for part in parts)
    return parts


def convert_to_r1_format(
    messages: Sequence[Union[ConversationMessage, Dict[str, Any]]],
) -> List[Dict[str, Any]]:
    """
    Convert messages to the reasoning model format.

    Consecutive messages with the same role are merged into one. Messages
    whose content is neither a string nor a list are kept as they are and
    never merged.

    Args:
        messages: Conversation history, system prompt already merged in as
            a leading user message

    Returns:
        List of OpenAI-style message dicts with alternating roles
    """
    result: List[Dict[str, Any]] = []
    # Index of the last message that can take merged content
    mergeable = -1

    for message in messages:
        fields = split_message(message)
        role, content = fields if fields is not None else (None, None)
        if fields is None or not isinstance(content, (str, list)):
            result.append(passthrough(message))
            mergeable = -1
            continue

        if isinstance(content, list):
            content = _convert_content(content)

        last = result[mergeable] if mergeable >= 0 else None
        if last is not None and last["role"] == role:
            if isinstance(last["content"], str) and isinstance(content, str):
                last["content"] = f"{last['content']}\n{content}"
            else:
                last["content"] = _as_parts(last["content"]) + _as_parts(content)
        else:
            result.append({"role": role, "content": content})
            mergeable = len(result) - 1

    return result


__all__ = ["convert_to_r1_format"]
