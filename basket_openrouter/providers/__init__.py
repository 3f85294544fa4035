"""
Provider implementations for the OpenRouter adapter.
"""

from basket_openrouter.providers.base import BaseProvider
from basket_openrouter.providers.openrouter import OpenRouterProvider

__all__ = [
    "BaseProvider",
    "OpenRouterProvider",
]
