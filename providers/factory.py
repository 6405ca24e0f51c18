"""Factory for creating LLM providers."""

from typing import Optional

from config import Settings
from contracts import ProviderSettings
from .base import LLMProvider
from .config_resolver import resolve_provider_config
from .openai_provider import OpenAIChatProvider


def get_provider(
    override: Optional[ProviderSettings] = None,
    stored: Optional[ProviderSettings] = None,
    defaults: Optional[Settings] = None,
) -> LLMProvider:
    """Get a transport for the effective configuration.

    Args:
        override: Explicit per-call overrides
        stored: Settings saved by the user
        defaults: Environment defaults (read from the environment when None)

    Returns:
        LLMProvider instance

    Raises:
        MissingCredential: Before any network call, when no API key resolves
    """
    return OpenAIChatProvider(resolve_provider_config(override, stored, defaults))


def describe_provider(
    stored: Optional[ProviderSettings] = None,
    defaults: Optional[Settings] = None,
) -> dict:
    """Summarize the effective configuration without exposing the key."""
    defaults = defaults or Settings()
    provider = get_provider(stored=stored, defaults=defaults)
    key = provider.config.api_key
    return {
        "base_url": provider.config.base_url,
        "model": provider.default_model,
        "api_key": f"{key[:3]}...{key[-4:]}" if len(key) > 8 else "***",
    }
