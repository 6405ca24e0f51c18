"""Verifier Agent - checks an idea for collisions with existing projects."""

from typing import Any, List, Optional, Union

from contracts import Idea, Language, ProviderSettings, SimilarProject, VerificationResult
from providers import LLMProvider
from providers.errors import ForgeError
from .base_agent import BaseAgent, language_name, to_display_string


VERIFIER_SYSTEM_PROMPT = "You are an analyst. Always respond with valid JSON."

UNAVAILABLE_NOTES = "Verification unavailable due to network or rate limit."


def _as_bool(value: Any, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("false", "no", "0"):
            return False
        if lowered in ("true", "yes", "1"):
            return True
        return default
    return bool(value)


def _optional_text(value: Any) -> Optional[str]:
    text = to_display_string(value)
    return text or None


def parse_similar_projects(value: Any) -> List[SimilarProject]:
    """Entries need a name; bare strings are taken as names."""
    if not isinstance(value, list):
        return []
    projects = []
    for entry in value:
        if isinstance(entry, str) and entry.strip():
            projects.append(SimilarProject(name=entry.strip()))
        elif isinstance(entry, dict) and entry.get("name"):
            projects.append(SimilarProject(
                name=to_display_string(entry["name"]),
                url=_optional_text(entry.get("url")),
                description=_optional_text(entry.get("description")),
            ))
    return projects


def unavailable_result() -> VerificationResult:
    return VerificationResult(is_unique=True, similar_projects=[], notes=UNAVAILABLE_NOTES)


class VerifierAgent(BaseAgent):
    """Evaluates the uniqueness of one idea."""

    role = "verifyIdea"
    temperature = 0.2
    max_tokens = 800

    def __init__(self, *args, best_effort: bool = False, **kwargs):
        """Initialize the verifier.

        Args:
            best_effort: Return a fallback "unique" result instead of raising on
                transport or parse failures. Missing credentials always raise.
        """
        super().__init__(*args, **kwargs)
        self.best_effort = best_effort

    def get_task_description(self) -> str:
        return "Evaluate whether an idea collides with existing projects and suggest a pivot"

    def build_prompt(self, idea: Idea, language: Union[Language, str]) -> str:
        return (
            f"Evaluate the uniqueness of this Web3 idea: Title: {idea.title}, "
            f"Description: {idea.description}, Ecosystem: {idea.ecosystem}. "
            "Return JSON with { isUnique: boolean, similarProjects: [ { name, url?, description? } ], "
            "notes: string, pivotSuggestion?: string }. "
            f"Provide notes and pivotSuggestion in {language_name(language)}."
        )

    def run(self, idea: Idea, language: Union[Language, str] = Language.EN) -> VerificationResult:
        # Resolved outside the try so a missing key is never downgraded
        provider = self._get_provider()
        try:
            data = self._expect_object(
                self._complete_json(VERIFIER_SYSTEM_PROMPT, self.build_prompt(idea, language), provider)
            )
        except ForgeError:
            if self.best_effort:
                return unavailable_result()
            raise

        return VerificationResult(
            is_unique=_as_bool(data.get("isUnique"), True),
            similar_projects=parse_similar_projects(data.get("similarProjects")),
            notes=to_display_string(data.get("notes")),
            pivot_suggestion=_optional_text(data.get("pivotSuggestion")),
        )


def verify_idea(
    idea: Idea,
    language: Union[Language, str] = Language.EN,
    provider_override: Optional[ProviderSettings] = None,
    provider: Optional[LLMProvider] = None,
    best_effort: bool = False,
) -> VerificationResult:
    """Verify `idea`, with notes written in `language`."""
    agent = VerifierAgent(provider=provider, provider_override=provider_override, best_effort=best_effort)
    return agent.run(idea, language)
