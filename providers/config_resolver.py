"""Resolve the effective provider configuration for one call."""

from typing import Optional

from config import Settings, DEFAULT_BASE_URL, DEFAULT_MODEL
from contracts import ProviderConfig, ProviderSettings
from .errors import MissingCredential


def _first(*values: Optional[str]) -> Optional[str]:
    for value in values:
        if value and value.strip():
            return value.strip()
    return None


def resolve_provider_config(
    override: Optional[ProviderSettings] = None,
    stored: Optional[ProviderSettings] = None,
    defaults: Optional[Settings] = None,
) -> ProviderConfig:
    """Merge override, stored settings and environment defaults.

    Precedence per field is override, then stored, then environment, then the
    hardcoded fallback. There is no fallback for the API key.

    Raises:
        MissingCredential: If no API key is found anywhere
    """
    override = override or ProviderSettings()
    stored = stored or ProviderSettings()
    defaults = defaults or Settings()

    api_key = _first(override.api_key, stored.api_key, defaults.openai_api_key)
    if not api_key:
        raise MissingCredential()

    base_url = _first(override.base_url, stored.base_url, defaults.openai_base_url) or DEFAULT_BASE_URL
    model = _first(override.model, stored.model, defaults.openai_model) or DEFAULT_MODEL

    return ProviderConfig(api_key=api_key, base_url=base_url.rstrip("/"), model=model)
