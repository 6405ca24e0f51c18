"""Base LLM provider interface."""

from abc import ABC, abstractmethod
from typing import Dict, List

ChatMessage = Dict[str, str]


class LLMProvider(ABC):
    """Abstract base class for chat-completion transports."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name."""
        pass

    @property
    @abstractmethod
    def default_model(self) -> str:
        """Model sent with every request."""
        pass

    @abstractmethod
    def complete(
        self,
        messages: List[ChatMessage],
        temperature: float = 0.7,
        max_tokens: int = 1200,
    ) -> str:
        """Issue one chat completion and return the reply text.

        Args:
            messages: Ordered role-tagged messages ({"role", "content"})
            temperature: Sampling temperature
            max_tokens: Maximum tokens in response

        Returns:
            The first choice's content, stripped of surrounding whitespace
        """
        pass

    def is_available(self) -> bool:
        """Check if this provider is available (API key set, etc.)."""
        return True
