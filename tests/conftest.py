"""
Shared pytest fixtures for basket-openrouter tests.
"""

from typing import Any, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

from basket_openrouter.providers.openrouter import OpenRouterProvider
from basket_openrouter.settings import OpenRouterSettings
from basket_openrouter.types import ModelInfo


class FakeStream:
    """
    Stand-in for the SDK's async chunk stream.

    Records how many chunks were pulled and whether it was closed.
    """

    def __init__(self, chunks: List[Any], raise_after: Optional[Exception] = None):
        self.chunks = chunks
        self.raise_after = raise_after
        self.pulled = 0
        self.closed = False

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for chunk in self.chunks:
            self.pulled += 1
            yield chunk
        if self.raise_after is not None:
            raise self.raise_after

    async def close(self):
        self.closed = True


@pytest.fixture
def mock_model_info():
    """Model metadata for a small, non-caching model."""
    return ModelInfo(
        maxTokens=1000,
        contextWindow=2000,
        supportsPromptCache=False,
        inputPrice=0.01,
        outputPrice=0.02,
    )


@pytest.fixture
def settings(mock_model_info):
    """Settings pointing at a custom test model."""
    return OpenRouterSettings(
        openRouterApiKey="test-key",
        openRouterModelId="test-model",
        openRouterModelInfo=mock_model_info,
    )


@pytest.fixture
def mock_client():
    """SDK client whose chat.completions.create is an AsyncMock."""
    client = MagicMock()
    client.chat.completions.create = AsyncMock()
    return client


@pytest.fixture
def make_provider(mock_client):
    """Factory for providers wired to the mock client."""

    def _make(settings: OpenRouterSettings) -> OpenRouterProvider:
        return OpenRouterProvider(settings, client=mock_client)

    return _make


@pytest.fixture
def text_chunk():
    """Factory for a content delta chunk."""

    def _make(text: str):
        return {"id": "test-id", "choices": [{"delta": {"content": text}}]}

    return _make


@pytest.fixture
def usage_chunk():
    """Final chunk carrying usage totals."""
    return {
        "id": "test-id",
        "choices": [{"delta": {}}],
        "usage": {"prompt_tokens": 10, "completion_tokens": 20, "cost": 0.001},
    }


@pytest.fixture
def make_stream():
    """Factory for FakeStream instances."""

    def _make(chunks: List[Any], raise_after: Optional[Exception] = None) -> FakeStream:
        return FakeStream(chunks, raise_after=raise_after)

    return _make
