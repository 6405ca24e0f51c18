"""Orchestrator module: idea lifecycle, batch retention and the session."""

from .batch_store import BatchStore, clone_ideas
from .lifecycle import ALLOWED_TRANSITIONS, can_transition, check_transition, replace_by_id
from .forge_session import ForgeSession

__all__ = [
    "BatchStore",
    "clone_ideas",
    "ALLOWED_TRANSITIONS",
    "can_transition",
    "check_transition",
    "replace_by_id",
    "ForgeSession",
]
