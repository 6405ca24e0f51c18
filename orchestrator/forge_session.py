"""Forge Session - owner of the active idea list and its lifecycle.

The Forge Session is the main entry point that:
1. Runs a generation and snapshots the result as a batch
2. Drives each idea through verification (GENERATED -> VERIFYING -> ...)
3. Caches blueprints and overlays translations by idea id
4. Keeps an event log and the user's language and provider preferences
"""

import time
import uuid
from datetime import datetime
from typing import Callable, List, Optional, Union

from pydantic import ValidationError

from agents import (
    BlueprintAgent,
    ContractAgent,
    GeneratorAgent,
    TranslatorAgent,
    VerifierAgent,
    TRANSLATED_FIELDS,
)
from config import LANGUAGE_STORAGE_KEY, PROMPT_LANG_MAP, SETTINGS_STORAGE_KEY
from contracts import (
    Blueprint,
    ForgeConfig,
    ForgeMode,
    Idea,
    IdeaBatch,
    IdeaStatus,
    Language,
    LogMessage,
    LogType,
    ProviderSettings,
    VerificationResult,
)
from providers import LLMProvider
from providers.errors import IdeaNotFound
from storage import KeyValueStore
from .batch_store import BatchStore
from .lifecycle import check_transition, replace_by_id


def _print_log(message: LogMessage) -> None:
    print(f"[Idea Forge] {message.text}")


class ForgeSession:
    """Central state machine for one user's ideas.

    Every update to an idea goes through `_update`, which replaces only the
    element with the matching id. Updates for ids no longer in the active set
    (after a restore or a new generation) are dropped.
    """

    def __init__(
        self,
        store: KeyValueStore,
        provider: Optional[LLMProvider] = None,
        provider_override: Optional[ProviderSettings] = None,
        on_log: Optional[Callable[[LogMessage], None]] = None,
        best_effort_verification: bool = False,
    ):
        """Initialize the session.

        Args:
            store: Key-value store for batches and preferences
            provider: Transport used by every agent; resolved per call when None
            provider_override: Overrides above the stored provider settings
            on_log: Receives every log event (default: print)
            best_effort_verification: Downgrade verification failures to a
                fallback "unique" result instead of FAILED
        """
        self.store = store
        self.batches = BatchStore(store)
        self.provider = provider
        self.provider_override = provider_override
        self.on_log = on_log or _print_log
        self.best_effort_verification = best_effort_verification

        self.ideas: List[Idea] = []
        self.logs: List[LogMessage] = []
        self.language = self._load_language()
        self.provider_settings = self._load_provider_settings()

    # Preferences

    def _load_language(self) -> Language:
        raw = self.store.get(LANGUAGE_STORAGE_KEY)
        if raw and raw.strip() in PROMPT_LANG_MAP:
            return Language(raw.strip())
        return Language.EN

    def _load_provider_settings(self) -> ProviderSettings:
        data = self.store.get_json(SETTINGS_STORAGE_KEY, default={})
        if not isinstance(data, dict):
            return ProviderSettings()
        try:
            return ProviderSettings.model_validate(data)
        except ValidationError:
            return ProviderSettings()

    def set_language(self, language: Union[Language, str]) -> Language:
        self.language = Language(language)
        self.store.set(LANGUAGE_STORAGE_KEY, self.language.value)
        return self.language

    def save_provider_settings(self, provider_settings: ProviderSettings) -> None:
        self.provider_settings = provider_settings
        self.store.set_json(
            SETTINGS_STORAGE_KEY,
            provider_settings.model_dump(by_alias=True, exclude_none=True),
        )
        self.log("System configuration updated.", LogType.SUCCESS)

    # Log

    def log(self, text: str, type: LogType = LogType.INFO) -> LogMessage:
        message = LogMessage(
            id=str(uuid.uuid4()),
            text=text,
            type=type,
            timestamp=int(time.time() * 1000),
        )
        self.logs.append(message)
        self.on_log(message)
        return message

    # Ideas

    def _agent_kwargs(self) -> dict:
        return {
            "provider": self.provider,
            "provider_override": self.provider_override,
            "stored_settings": self.provider_settings,
        }

    def get_idea(self, idea_id: str) -> Idea:
        for idea in self.ideas:
            if idea.id == idea_id:
                return idea
        raise IdeaNotFound(idea_id)

    def _update(self, idea_id: str, updater: Callable[[Idea], Idea]) -> Optional[Idea]:
        self.ideas, updated = replace_by_id(self.ideas, idea_id, updater)
        return updated

    def _set_fields(self, idea_id: str, **fields) -> Optional[Idea]:
        return self._update(idea_id, lambda current: current.model_copy(update=fields))

    def generate(self, config: ForgeConfig) -> List[Idea]:
        """Run a generation, make it the active set and store it as a batch."""
        self.ideas = []
        self.logs = []

        self.log("Initializing Idea Forge protocol...")
        if config.mode == ForgeMode.TARGETED:
            self.log(f"Scanning {len(config.ecosystems)} ecosystems for arbitrage opportunities...")
            self.log(f"Analyzing {', '.join(s.value for s in config.sectors)} saturation levels...")

        try:
            ideas = GeneratorAgent(**self._agent_kwargs()).run(config, self.language)
        except Exception:
            self.log("Generation failed. Connection severed.", LogType.ERROR)
            raise

        for i, _ in enumerate(ideas):
            self.log(f"Idea #{i + 1} synthesized successfully.", LogType.SUCCESS)

        self.ideas = ideas
        self.batches.add(ideas, config.mode)
        self.log("Batch generation complete.", LogType.SUCCESS)
        return list(self.ideas)

    def list_batches(self) -> List[IdeaBatch]:
        return self.batches.list()

    def restore_batch(self, batch_id: str) -> List[Idea]:
        """Make deep copies of a stored batch's ideas the active set."""
        batch = self.batches.get(batch_id)
        self.ideas = self.batches.restore(batch_id)
        created = datetime.fromtimestamp(batch.created_at / 1000).strftime("%b %d %H:%M")
        self.log(f"Restored batch from {created}")
        return list(self.ideas)

    def verify(self, idea_id: str) -> VerificationResult:
        """Verify one idea.

        Raises:
            IdeaNotFound: If the id is not in the active set
            InvalidTransition: If the idea is already VERIFIED
            ForgeError: Verification failure, after the idea is marked FAILED
        """
        idea = self.get_idea(idea_id)
        check_transition(idea, IdeaStatus.VERIFYING)
        self._set_fields(idea_id, status=IdeaStatus.VERIFYING)
        self.log(f"Initiating deep chain scan for: {idea.title}...", LogType.WARNING)

        agent = VerifierAgent(best_effort=self.best_effort_verification, **self._agent_kwargs())
        try:
            result = agent.run(idea, self.language)
        except Exception:
            self.log(f"Verification failed for {idea.title}", LogType.ERROR)
            self._set_fields(idea_id, status=IdeaStatus.FAILED)
            raise

        # Last resolved verification wins
        self._set_fields(idea_id, status=IdeaStatus.VERIFIED, verification_result=result)
        if result.is_unique:
            self.log(f"[{idea.title}] verified UNIQUE. Alpha detected.", LogType.SUCCESS)
        else:
            self.log(
                f"[{idea.title}] COLLISION detected. "
                f"{len(result.similar_projects)} similar protocols found.",
                LogType.WARNING,
            )
        return result

    def view_blueprint(self, idea_id: str) -> Blueprint:
        """Cached blueprint of an idea, generated on first view."""
        idea = self.get_idea(idea_id)
        if idea.blueprint is not None:
            return idea.blueprint

        try:
            blueprint = BlueprintAgent(**self._agent_kwargs()).run(idea, self.language)
        except Exception:
            self.log(f"Blueprint generation failed for {idea.title}", LogType.ERROR)
            raise

        # A blueprint that arrived meanwhile is kept
        updated = self._update(
            idea_id,
            lambda current: current if current.blueprint is not None
            else current.model_copy(update={"blueprint": blueprint}),
        )
        return updated.blueprint if updated is not None else blueprint

    def translate(self, idea_id: str, target_language: Optional[Union[Language, str]] = None) -> Idea:
        """Overlay translated text on the idea as it stands when the reply arrives."""
        idea = self.get_idea(idea_id)
        language = Language(target_language) if target_language else self.language

        try:
            translated = TranslatorAgent(**self._agent_kwargs()).run(idea, language)
        except Exception:
            self.log(f"Translation failed for {idea.title}", LogType.ERROR)
            raise

        overlay = {field: getattr(translated, field) for field in TRANSLATED_FIELDS}
        updated = self._set_fields(idea_id, **overlay)
        self.log(f"Translated {idea.title} to {language.value}", LogType.SUCCESS)
        return updated if updated is not None else translated

    def generate_contract(self, idea_id: str) -> str:
        idea = self.get_idea(idea_id)
        self.log(f"Agent: Generating Solidity Smart Contract for {idea.title}...")
        code = ContractAgent(**self._agent_kwargs()).run(idea)
        self.log("Contract draft ready.", LogType.SUCCESS)
        return code
