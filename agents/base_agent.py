"""Base agent class that all idea mappers inherit from.

Every agent:
- Builds a system prompt plus one user message for its operation
- Calls the chat-completion transport once (no retries)
- Recovers JSON from the reply and shapes it with explicit defaults
"""

import json
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Union

from config import PROMPT_LANG_MAP
from contracts import Language, ProviderSettings
from providers import LLMProvider, ChatMessage, get_provider
from providers.errors import InvalidResponseShape
from .response_recovery import recover


def language_name(language: Union[Language, str, None]) -> str:
    """Prompt name for a language tag; unknown tags fall back to English."""
    if language is None:
        return PROMPT_LANG_MAP["en"]
    tag = language.value if isinstance(language, Language) else str(language)
    return PROMPT_LANG_MAP.get(tag, PROMPT_LANG_MAP["en"])


def language_tag(language: Union[Language, str, None]) -> str:
    if isinstance(language, Language):
        return language.value
    return language if language in PROMPT_LANG_MAP else "en"


def to_display_string(value: Any) -> str:
    """Coerce a model-emitted value to text; structures are pretty-printed."""
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    try:
        return json.dumps(value, indent=2, ensure_ascii=False)
    except (TypeError, ValueError):
        return str(value)


class BaseAgent(ABC):
    """Base class for all Idea Forge agents.

    Responsibilities:
    - Resolves the provider for each call (override > stored > environment)
    - Sends [system, user] messages with the agent's sampling parameters
    - Recovers JSON from the reply
    """

    role: str = "agent"
    temperature: float = 0.7
    max_tokens: int = 1200

    def __init__(
        self,
        provider: Optional[LLMProvider] = None,
        provider_override: Optional[ProviderSettings] = None,
        stored_settings: Optional[ProviderSettings] = None,
    ):
        """Initialize the agent.

        Args:
            provider: Ready transport to use for every call; resolved per call when None
            provider_override: Explicit overrides for key, base URL and model
            stored_settings: Settings saved by the user, below the override in precedence
        """
        self.provider = provider
        self.provider_override = provider_override
        self.stored_settings = stored_settings

    def _get_provider(self) -> LLMProvider:
        if self.provider is not None:
            return self.provider
        return get_provider(self.provider_override, self.stored_settings)

    def _build_messages(self, system_prompt: str, user_message: str) -> List[ChatMessage]:
        return [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_message},
        ]

    def _complete(
        self,
        system_prompt: str,
        user_message: str,
        provider: Optional[LLMProvider] = None,
    ) -> str:
        """Call the transport once and return the raw reply."""
        provider = provider or self._get_provider()
        return provider.complete(
            self._build_messages(system_prompt, user_message),
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )

    def _complete_json(
        self,
        system_prompt: str,
        user_message: str,
        provider: Optional[LLMProvider] = None,
    ) -> Any:
        """Call the transport and recover the JSON value from the reply."""
        return recover(self._complete(system_prompt, user_message, provider), context=self.role)

    def _expect_object(self, data: Any) -> Dict[str, Any]:
        if not isinstance(data, dict):
            raise InvalidResponseShape(
                f"AI returned an unexpected format ({self.role}: expected an object)."
            )
        return data

    @abstractmethod
    def get_task_description(self) -> str:
        """Return a description of what this agent does."""
        pass
