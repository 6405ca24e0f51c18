"""Blueprint Agent - expands an idea into a technical and business writeup."""

from typing import Optional, Union

from contracts import Blueprint, Idea, Language, ProviderSettings
from providers import LLMProvider
from .base_agent import BaseAgent, language_name, to_display_string


BLUEPRINT_SYSTEM_PROMPT = "Respond only with JSON describing blueprint sections."

OPTIONAL_FIELDS = {
    "contractCode": "contract_code",
    "frontendSnippet": "frontend_snippet",
    "deploymentUrl": "deployment_url",
}


class BlueprintAgent(BaseAgent):
    """Builds the blueprint of one idea.

    Section values are always display strings: nested objects or arrays
    emitted by the model are pretty-printed rather than rejected.
    """

    role = "generateBlueprint"
    temperature = 0.3
    max_tokens = 1200

    def get_task_description(self) -> str:
        return "Write the overview, tokenomics, roadmap and architecture of an idea"

    def build_prompt(self, idea: Idea, language: Union[Language, str]) -> str:
        return (
            f"Craft a technical blueprint for {idea.title} "
            f"(Sector: {idea.sector}, Chain: {idea.ecosystem}). "
            "Include Executive Summary, Tokenomics, Roadmap (4 phases), Technical Architecture. "
            "Return JSON with { overview, tokenomics, roadmap, technicalArchitecture } "
            f"in {language_name(language)}."
        )

    def run(self, idea: Idea, language: Union[Language, str] = Language.EN) -> Blueprint:
        data = self._expect_object(
            self._complete_json(BLUEPRINT_SYSTEM_PROMPT, self.build_prompt(idea, language))
        )

        optional = {
            field: to_display_string(data[key])
            for key, field in OPTIONAL_FIELDS.items()
            if data.get(key)
        }
        return Blueprint(
            overview=to_display_string(data.get("overview")),
            tokenomics=to_display_string(data.get("tokenomics")),
            roadmap=to_display_string(data.get("roadmap")),
            technical_architecture=to_display_string(data.get("technicalArchitecture")),
            **optional,
        )


def generate_blueprint(
    idea: Idea,
    language: Union[Language, str] = Language.EN,
    provider_override: Optional[ProviderSettings] = None,
    provider: Optional[LLMProvider] = None,
) -> Blueprint:
    """Generate the blueprint of `idea` in `language`."""
    return BlueprintAgent(provider=provider, provider_override=provider_override).run(idea, language)
