"""
Conversion of conversation messages to the OpenAI chat format.

Known content blocks are converted; parts and messages of any other shape
are sent on unchanged.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ValidationError

from basket_openrouter.types import (
    ConversationMessage,
    ImageBlock,
    TextBlock,
    ToolResultBlock,
    ToolUseBlock,
)

logger = logging.getLogger(__name__)

_BLOCK_TYPES = {
    "text": TextBlock,
    "image": ImageBlock,
    "tool_use": ToolUseBlock,
    "tool_result": ToolResultBlock,
}


def parse_block(part: Any) -> Any:
    """
    Parse a content part into its block model.

    Parts of an unknown type, or that do not validate, are returned as they are.
    """
    if not isinstance(part, dict):
        return part

    block_cls = _BLOCK_TYPES.get(part.get("type"))
    if block_cls is None:
        return part

    try:
        return block_cls.model_validate(part)
    except ValidationError as e:
        logger.debug("Passing through malformed %s part: %s", part.get("type"), e)
        return part


def split_message(message: Any) -> Optional[Tuple[Any, Any]]:
    """Role and content of a message, or None if it is neither a model nor a dict."""
    if isinstance(message, ConversationMessage):
        return message.role, message.content
    if isinstance(message, dict):
        return message.get("role"), message.get("content")
    return None


def passthrough(message: Any) -> Any:
    """Shallow copy of a message the converters leave alone."""
    if isinstance(message, BaseModel):
        return message.model_dump()
    if isinstance(message, dict):
        return dict(message)
    return message


def image_url_part(block: ImageBlock) -> Dict[str, Any]:
    """Convert an image block to an OpenAI ``image_url`` part."""
    return {
        "type": "image_url",
        "image_url": {"url": f"data:{block.source.media_type};base64,{block.source.data}"},
    }


def _tool_result_content(block: ToolResultBlock) -> str:
    if isinstance(block.content, str):
        return block.content

    parts = []
    for part in block.content:
        if isinstance(part, TextBlock):
            parts.append(part.text)
        elif isinstance(part, ImageBlock):
            # Tool messages only carry text
            parts.append("(see following user message for image)")
    return "\n".join(parts)


def _convert_user_message(blocks: List[Any]) -> List[Dict[str, Any]]:
    """Convert a user message; tool results become separate tool messages."""
    result: List[Dict[str, Any]] = []
    content_parts: List[Any] = []
    tool_images: List[Dict[str, Any]] = []

    for block in blocks:
        if isinstance(block, ToolResultBlock):
            result.append({
                "role": "tool",
                "tool_call_id": block.tool_use_id,
                "content": _tool_result_content(block),
            })
            if not isinstance(block.content, str):
                tool_images.extend(
                    image_url_part(part) for part in block.content if isinstance(part, ImageBlock)
                )
        elif isinstance(block, TextBlock):
            content_parts.append({"type": "text", "text": block.text})
        elif isinstance(block, ImageBlock):
            content_parts.append(image_url_part(block))
        elif not isinstance(block, ToolUseBlock):
            content_parts.append(block)

    # Images returned by tools are sent in the following user message
    content_parts.extend(tool_images)

    if content_parts:
        result.append({"role": "user", "content": content_parts})

    return result


def _convert_assistant_message(blocks: List[Any]) -> Dict[str, Any]:
    """Convert an assistant message, collecting text and tool calls."""
    text_parts: List[str] = []
    other_parts: List[Any] = []
    tool_calls: List[Dict[str, Any]] = []

    for block in blocks:
        if isinstance(block, TextBlock):
            text_parts.append(block.text)
        elif isinstance(block, ToolUseBlock):
            tool_calls.append({
                "id": block.id,
                "type": "function",
                "function": {
                    "name": block.name,
                    "arguments": json.dumps(block.input),
                },
            })
        elif not isinstance(block, (ImageBlock, ToolResultBlock)):
            other_parts.append(block)

    content: Union[str, List[Any]] = "\n".join(text_parts)
    if other_parts:
        content = [{"type": "text", "text": text} for text in text_parts] + other_parts

    result: Dict[str, Any] = {"role": "assistant", "content": content}
    if tool_calls:
        result["tool_calls"] = tool_calls

    return result


def convert_to_openai_messages(
    messages: Sequence[Union[ConversationMessage, Dict[str, Any]]],
) -> List[Dict[str, Any]]:
    """
    Convert conversation messages to OpenAI chat messages.

    System messages, messages whose content is neither a string nor a list,
    and anything that is not a message are passed through as they are.

    Args:
        messages: Conversation history (models or plain dicts)

    Returns:
        List of OpenAI-style message dicts

    Examples:
        >>> convert_to_openai_messages([{"role": "user", "content": "Hi"}])
        [{'role': 'user', 'content': 'Hi'}]
    """
    result: List[Dict[str, Any]] = []

    for message in messages:
        fields = split_message(message)
        if fields is None:
            result.append(message)
            continue

        role, content = fields
        if isinstance(content, str):
            result.append({"role": role, "content": content})
        elif not isinstance(content, list) or role not in ("user", "assistant"):
            result.append(passthrough(message))
        elif role == "user":
            result.extend(_convert_user_message([parse_block(part) for part in content]))
        else:
            result.append(_convert_assistant_message([parse_block(part) for part in content]))

    return result


__all__ = [
    "convert_to_openai_messages",
    "image_url_part",
    "parse_block",
    "passthrough",
    "split_message",
]
