"""Translator Agent - rewrites an idea's text fields in another language."""

from typing import Any, Optional, Union

from contracts import Idea, Language, ProviderSettings
from providers import LLMProvider
from .base_agent import BaseAgent, language_name, language_tag
from .generator_agent import coerce_features


TRANSLATOR_SYSTEM_PROMPT = "Return valid JSON with the translated fields."

TRANSLATED_FIELDS = ("title", "tagline", "description", "features", "language")


def _or_original(value: Any, original: str) -> str:
    if isinstance(value, str) and value.strip():
        return value
    return original


class TranslatorAgent(BaseAgent):
    """Best-effort translation: every field the model omits keeps its original value."""

    role = "translateIdea"
    temperature = 0.6
    max_tokens = 800

    def get_task_description(self) -> str:
        return "Translate an idea's title, tagline, description and features"

    def build_prompt(self, idea: Idea, target_language: Union[Language, str]) -> str:
        return (
            f"Translate this Web3 idea into {language_name(target_language)}, keeping tone and "
            f"technical detail. Input: Title: {idea.title}, Tagline: {idea.tagline}, "
            f"Description: {idea.description}, Features: {', '.join(idea.features)}. "
            "Return JSON with title, tagline, description, features (array)."
        )

    def run(self, idea: Idea, target_language: Union[Language, str] = Language.EN) -> Idea:
        data = self._expect_object(
            self._complete_json(TRANSLATOR_SYSTEM_PROMPT, self.build_prompt(idea, target_language))
        )

        features = data.get("features")
        return idea.model_copy(
            update={
                "title": _or_original(data.get("title"), idea.title),
                "tagline": _or_original(data.get("tagline"), idea.tagline),
                "description": _or_original(data.get("description"), idea.description),
                "features": coerce_features(features) if isinstance(features, list) else list(idea.features),
                "language": language_tag(target_language),
            },
            deep=True,
        )


def translate_idea(
    idea: Idea,
    target_language: Union[Language, str],
    provider_override: Optional[ProviderSettings] = None,
    provider: Optional[LLMProvider] = None,
) -> Idea:
    """Return a copy of `idea` with its text translated to `target_language`."""
    return TranslatorAgent(provider=provider, provider_override=provider_override).run(idea, target_language)
