"""Configuration settings for Idea Forge."""

# Load .env into os.environ so OPENAI_* defaults are picked up
from dotenv import load_dotenv

load_dotenv()

from pydantic_settings import BaseSettings
from pydantic import AliasChoices, Field
from typing import Dict
from pathlib import Path


class Settings(BaseSettings):
    """Environment defaults for Idea Forge.

    Provider values are read from the standard OPENAI_* variables or their
    IDEA_FORGE_ prefixed variants.
    Example: IDEA_FORGE_OPENAI_MODEL=gpt-4o
    """

    # Provider defaults (env: OPENAI_<KEY> or IDEA_FORGE_OPENAI_<KEY>)
    openai_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("IDEA_FORGE_OPENAI_API_KEY", "OPENAI_API_KEY"),
        description="API key for the OpenAI-compatible endpoint",
    )
    openai_base_url: str = Field(
        default="",
        validation_alias=AliasChoices("IDEA_FORGE_OPENAI_BASE_URL", "OPENAI_BASE_URL"),
        description="Base URL of the chat-completions API",
    )
    openai_model: str = Field(
        default="",
        validation_alias=AliasChoices("IDEA_FORGE_OPENAI_MODEL", "OPENAI_MODEL"),
        description="Model identifier sent with every request",
    )

    # Paths
    storage_dir: str = Field(
        default="./.idea_forge",
        description="Directory holding the persisted key-value blobs",
    )

    model_config = {
        "env_prefix": "IDEA_FORGE_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }

    def get_storage_path(self) -> Path:
        """Get storage path as Path object."""
        return Path(self.storage_dir)


# Hardcoded provider fallbacks
DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_MODEL = "gpt-4o-mini"

# Generation bounds
MIN_QUANTITY = 1
MAX_QUANTITY = 5
DEFAULT_DEGEN_SCORE = 50

# Batch retention
MAX_BATCHES_STORED = 12

# Storage keys
BATCH_STORAGE_KEY = "idea_forge_batches"
SETTINGS_STORAGE_KEY = "idea_forge_ai_settings"
LANGUAGE_STORAGE_KEY = "idea_forge_lang"

# Language tag -> name used inside prompts
PROMPT_LANG_MAP: Dict[str, str] = {
    "en": "English",
    "zh-CN": "Simplified Chinese",
    "zh-TW": "Traditional Chinese",
    "ru": "Russian",
}


# Create singleton instance
settings = Settings()
