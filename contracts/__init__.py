"""Pydantic contracts for Idea Forge.

Every record handed between the agents, the session and the store is typed
through these contracts.
"""

from .forge_contracts import (
    ForgeMode,
    Ecosystem,
    Sector,
    Language,
    ForgeConfig,
    ProviderSettings,
    ProviderConfig,
)

from .idea_contracts import (
    IdeaStatus,
    LogType,
    SimilarProject,
    VerificationResult,
    Blueprint,
    Idea,
    IdeaBatch,
    LogMessage,
)

__all__ = [
    # Forge
    "ForgeMode",
    "Ecosystem",
    "Sector",
    "Language",
    "ForgeConfig",
    "ProviderSettings",
    "ProviderConfig",
    # Ideas
    "IdeaStatus",
    "LogType",
    "SimilarProject",
    "VerificationResult",
    "Blueprint",
    "Idea",
    "IdeaBatch",
    "LogMessage",
]
