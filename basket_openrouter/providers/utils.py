"""
Utility functions for provider implementations.
"""

import os
from typing import Dict, Optional

# Attribution headers, see https://openrouter.ai/docs/api-reference/overview#headers
DEFAULT_HEADERS: Dict[str, str] = {
    "HTTP-Referer": "https://github.com/buptwanglong/pi-python",
    "X-Title": "Basket",
}


def get_env_api_key(provider: str) -> Optional[str]:
    """
    Get API key from environment variable based on provider name.

    Args:
        provider: Provider name (e.g., "openrouter")

    Returns:
        API key from environment, or None if not found

    Examples:
        >>> get_env_api_key("openrouter")
        # Returns value of OPENROUTER_API_KEY env var
    """
    env_var_map = {
        "openrouter": "OPENROUTER_API_KEY",
    }

    env_var = env_var_map.get(provider)
    if env_var:
        return os.getenv(env_var)

    # Try uppercase version of provider name
    return os.getenv(f"{provider.upper().replace('-', '_')}_API_KEY")


__all__ = [
    "DEFAULT_HEADERS",
    "get_env_api_key",
]
