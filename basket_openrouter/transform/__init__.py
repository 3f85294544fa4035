"""
Message transforms for OpenRouter requests.
"""

from basket_openrouter.transform.cache_control import EPHEMERAL_CACHE_CONTROL, apply_cache_control
from basket_openrouter.transform.openai_format import convert_to_openai_messages
from basket_openrouter.transform.r1_format import convert_to_r1_format

__all__ = [
    "EPHEMERAL_CACHE_CONTROL",
    "apply_cache_control",
    "convert_to_openai_messages",
    "convert_to_r1_format",
]
