"""
Error types and translation for OpenRouter failures.

OpenRouter reports many failures inside a successful response body rather
than through the HTTP status, so errors may arrive as SDK exceptions, as
error objects inside stream chunks, or as plain dicts. All field access here
is presence-checked.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)

RATE_LIMIT_CODE = 429


class OpenRouterError(Exception):
    """Failure reported by OpenRouter or raised while talking to it."""

    def __init__(self, message: str, code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.code = code


class RateLimitError(OpenRouterError):
    """Rate limit failure, with the upstream retry delay when one was given."""

    def __init__(self, message: str, retry_after: Optional[str] = None):
        super().__init__(message, code=RATE_LIMIT_CODE)
        self.retry_after = retry_after


def get_field(obj: Any, name: str, default: Any = None) -> Any:
    """
    Read a field from a dict or an object.

    Args:
        obj: Mapping, SDK model or any other object (may be None)
        name: Field name
        default: Value returned when the field is missing

    Returns:
        Field value or default
    """
    if obj is None:
        return default
    if isinstance(obj, dict):
        return obj.get(name, default)
    return getattr(obj, name, default)


def _as_code(value: Any) -> Optional[int]:
    # The SDK stores in-band codes as strings ("429")
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value)
    return None


def get_error_code(error: Any) -> Optional[int]:
    """Numeric error code, falling back to the HTTP status of SDK errors."""
    code = _as_code(get_field(error, "code"))
    if code is not None:
        return code

    return _as_code(get_field(error, "status_code"))


def _metadata_raw(error: Any) -> Any:
    # The metadata may sit on the error itself, on its nested error object
    # or, for SDK exceptions, on the decoded response body.
    for holder in (error, get_field(error, "error"), get_field(error, "body")):
        raw = get_field(get_field(holder, "metadata"), "raw")
        if raw is not None:
            return raw
    return None


def get_retry_delay(error: Any) -> Optional[str]:
    """
    Extract the retry delay from rate limit metadata.

    The upstream provider's raw error is a JSON string whose
    ``error.details`` entries may carry a ``retryDelay``.

    Args:
        error: Error object, dict or exception

    Returns:
        The first non-empty retry delay (e.g., "2s"), or None
    """
    try:
        parsed = json.loads(_metadata_raw(error))
        details = get_field(get_field(parsed, "error"), "details") or []
        for detail in details:
            retry_delay = get_field(detail, "retryDelay")
            if retry_delay:
                return str(retry_delay)
    except Exception as e:
        logger.debug("Could not parse rate limit metadata: %s", e)

    return None


def make_error_readable(error: Any) -> str:
    """
    Turn an OpenRouter error into a human-readable message.

    Never raises.

    Args:
        error: Error object, dict or exception

    Returns:
        Readable error message

    Examples:
        >>> make_error_readable({"code": 500, "message": "Internal"})
        'OpenRouter API Error: Internal'
    """
    message = get_field(error, "message") or error

    if get_error_code(error) == RATE_LIMIT_CODE:
        retry_after = get_retry_delay(error)
        if retry_after:
            return f"Rate limit exceeded, try again in {retry_after}."
        return f"Rate limit exceeded, try again later.\n{message}"

    return f"OpenRouter API Error: {message}"


def error_from_payload(error: Any) -> OpenRouterError:
    """
    Build the exception for an in-band error object.

    Args:
        error: The ``error`` object of a response body or stream chunk

    Returns:
        RateLimitError for rate limits, OpenRouterError otherwise
    """
    code = get_error_code(error)
    if code == RATE_LIMIT_CODE:
        return RateLimitError(make_error_readable(error), retry_after=get_retry_delay(error))

    message = get_field(error, "message")
    return OpenRouterError(f"OpenRouter API Error {code}: {message}", code=code)


def wrap_exception(exc: BaseException) -> OpenRouterError:
    """
    Translate a transport or decoding failure.

    Args:
        exc: Exception raised by the SDK or while iterating the stream

    Returns:
        OpenRouterError with a readable message
    """
    if isinstance(exc, OpenRouterError):
        return exc

    # The SDK raises error chunks of a stream as APIError with the error
    # object as its body
    body = get_field(exc, "body")
    if isinstance(body, dict) and get_error_code(body) is not None:
        return error_from_payload(body)

    code = get_error_code(exc)
    if code == RATE_LIMIT_CODE:
        return RateLimitError(make_error_readable(exc), retry_after=get_retry_delay(exc))

    return OpenRouterError(make_error_readable(exc), code=code)


__all__ = [
    "RATE_LIMIT_CODE",
    "OpenRouterError",
    "RateLimitError",
    "get_field",
    "get_error_code",
    "get_retry_delay",
    "make_error_readable",
    "error_from_payload",
    "wrap_exception",
]
