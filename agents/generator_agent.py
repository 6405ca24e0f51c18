"""Generator Agent - produces a list of startup ideas from a ForgeConfig."""

import math
import uuid
from typing import Any, Dict, List, Optional, Union

from config import DEFAULT_DEGEN_SCORE
from contracts import ForgeConfig, ForgeMode, Idea, IdeaStatus, Language, ProviderSettings
from providers import LLMProvider
from providers.errors import InvalidResponseShape
from .base_agent import BaseAgent, language_name, language_tag


GENERATOR_SYSTEM_PROMPT = (
    "You are a cyberpunk crypto venture architect. "
    "Return a JSON array where each object includes title, tagline, description, ecosystem, "
    "sector, degenScore (0-100), and features (array of strings). "
    "No extra text outside the JSON."
)


def parse_degen_score(value: Any) -> int:
    """Integer in [0, 100]; missing or unparseable values give the default."""
    if isinstance(value, bool):
        return DEFAULT_DEGEN_SCORE
    if isinstance(value, int):
        return max(0, min(100, value))
    if isinstance(value, float):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return DEFAULT_DEGEN_SCORE
    else:
        return DEFAULT_DEGEN_SCORE
    if math.isnan(number) or math.isinf(number):
        return DEFAULT_DEGEN_SCORE
    return max(0, min(100, int(round(number))))


def coerce_features(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [item if isinstance(item, str) else str(item) for item in value if item is not None]


def _text(value: Any, default: str) -> str:
    if isinstance(value, str) and value:
        return value
    if value is None or value == "":
        return default
    return str(value)


class GeneratorAgent(BaseAgent):
    """Turns a ForgeConfig into GENERATED ideas."""

    role = "generateIdeas"
    temperature = 0.8
    max_tokens = 1400

    def get_task_description(self) -> str:
        return "Generate Web3 startup ideas for the requested ecosystems, sectors and risk level"

    def build_prompt(self, config: ForgeConfig, language: Union[Language, str]) -> str:
        lang_name = language_name(language)
        if config.mode == ForgeMode.RANDOM:
            return (
                f"Generate {config.quantity} chaotic Web3 ideas with wildly varying ecosystems "
                f"and sectors. Keep the tone punchy and the response in {lang_name}."
            )
        ecosystems = ", ".join(e.value for e in config.ecosystems)
        sectors = ", ".join(s.value for s in config.sectors)
        return (
            f"Generate {config.quantity} Web3 ideas targeting ecosystems: {ecosystems} "
            f"and sectors: {sectors} with risk level {config.degen_level}. "
            f"Additional context: {config.user_context or 'None'}. Respond in {lang_name}."
        )

    def _to_idea(self, raw: Dict[str, Any], lang: str) -> Idea:
        return Idea(
            id=str(uuid.uuid4()),
            title=_text(raw.get("title"), "Untitled Idea"),
            tagline=_text(raw.get("tagline"), ""),
            description=_text(raw.get("description"), ""),
            ecosystem=_text(raw.get("ecosystem"), "Unknown"),
            sector=_text(raw.get("sector"), "Unspecified"),
            degen_score=parse_degen_score(raw.get("degenScore")),
            features=coerce_features(raw.get("features")),
            status=IdeaStatus.GENERATED,
            language=lang,
        )

    def run(self, config: ForgeConfig, language: Union[Language, str] = Language.EN) -> List[Idea]:
        """Generate ideas.

        Returns:
            At most `config.quantity` ideas, each with a fresh id

        Raises:
            InvalidResponseShape: If the recovered JSON is not an array
        """
        data = self._complete_json(GENERATOR_SYSTEM_PROMPT, self.build_prompt(config, language))
        if not isinstance(data, list):
            raise InvalidResponseShape("AI returned an unexpected format (ideas array).")

        lang = language_tag(language)
        ideas = [self._to_idea(item, lang) for item in data if isinstance(item, dict)]
        return ideas[:config.quantity]


def generate_ideas(
    config: ForgeConfig,
    language: Union[Language, str] = Language.EN,
    provider_override: Optional[ProviderSettings] = None,
    provider: Optional[LLMProvider] = None,
) -> List[Idea]:
    """Generate ideas for `config` in `language`."""
    return GeneratorAgent(provider=provider, provider_override=provider_override).run(config, language)
