"""
Base provider interface for the adapter.

Provider implementations should inherit from BaseProvider.
"""

from abc import ABC, abstractmethod
from typing import Any, AsyncIterator, Dict, Sequence, Union

from basket_openrouter.types import ConversationMessage, ResolvedModel, StreamEvent


class BaseProvider(ABC):
    """
    Abstract base class for LLM providers.

    Implementations stream normalized events for a conversation, complete
    single prompts and report the model they resolved to.
    """

    @abstractmethod
    def create_message(
        self,
        system_prompt: str,
        messages: Sequence[Union[ConversationMessage, Dict[str, Any]]],
    ) -> AsyncIterator[StreamEvent]:
        """
        Stream a response for the conversation.

        Args:
            system_prompt: System prompt text
            messages: Conversation history

        Returns:
            Async iterator of text, reasoning and usage events

        Raises:
            OpenRouterError: If the request or the stream fails
        """
        pass

    @abstractmethod
    async def complete_prompt(self, prompt: str) -> str:
        """
        Complete a single prompt without streaming.

        Args:
            prompt: User prompt

        Returns:
            The completion text

        Raises:
            OpenRouterError: If the request fails
        """
        pass

    @abstractmethod
    def get_model(self) -> ResolvedModel:
        """Resolve the model id, metadata and generation parameters."""
        pass


__all__ = ["BaseProvider"]
