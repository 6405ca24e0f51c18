"""OpenAI-compatible chat-completion transport."""

from typing import List

import openai

from contracts import ProviderConfig
from .base import ChatMessage, LLMProvider
from .errors import HttpFailure, NoContent, TransportError


class OpenAIChatProvider(LLMProvider):
    """Provider for any endpoint speaking the OpenAI chat-completions API.

    Sends POST {base_url}/chat/completions once per call. The client is built
    with retries disabled; failures surface to the caller as ForgeErrors.
    """

    def __init__(self, config: ProviderConfig):
        """Initialize the transport.

        Args:
            config: Resolved API key, base URL and model
        """
        self.config = config
        self._client = None

    @property
    def name(self) -> str:
        return "openai"

    @property
    def default_model(self) -> str:
        return self.config.model

    def _get_client(self):
        if self._client is None:
            self._client = openai.OpenAI(
                api_key=self.config.api_key,
                base_url=self.config.base_url,
                max_retries=0,
            )
        return self._client

    def complete(
        self,
        messages: List[ChatMessage],
        temperature: float = 0.7,
        max_tokens: int = 1200,
    ) -> str:
        client = self._get_client()

        try:
            response = client.chat.completions.create(
                model=self.config.model,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except openai.APIStatusError as e:
            body = e.response.text if e.response is not None else str(e)
            raise HttpFailure(e.status_code, body) from e
        except openai.APIError as e:
            raise TransportError(f"AI request could not be completed: {e}") from e

        choices = getattr(response, "choices", None) or []
        message = getattr(choices[0], "message", None) if choices else None
        content = getattr(message, "content", None)
        if not content or not content.strip():
            raise NoContent()
        return content.strip()

    def is_available(self) -> bool:
        return bool(self.config.api_key)
