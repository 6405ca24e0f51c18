"""Idea status state machine and the keyed-update contract.

GENERATED -> VERIFYING -> VERIFIED | FAILED, and FAILED -> VERIFYING for a
retry. VERIFYING -> VERIFYING covers a second verification issued while the
first is in flight. Blueprint and translation never change status.
"""

from typing import Callable, Dict, List, Optional, Set, Tuple

from contracts import Idea, IdeaStatus
from providers.errors import InvalidTransition

ALLOWED_TRANSITIONS: Dict[IdeaStatus, Set[IdeaStatus]] = {
    IdeaStatus.GENERATED: {IdeaStatus.VERIFYING},
    IdeaStatus.VERIFYING: {IdeaStatus.VERIFYING, IdeaStatus.VERIFIED, IdeaStatus.FAILED},
    IdeaStatus.FAILED: {IdeaStatus.VERIFYING},
    IdeaStatus.VERIFIED: set(),
}


def can_transition(current: IdeaStatus, target: IdeaStatus) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, set())


def check_transition(idea: Idea, target: IdeaStatus) -> None:
    """Raise InvalidTransition unless `idea` may move to `target`."""
    if not can_transition(idea.status, target):
        raise InvalidTransition(
            f"Idea {idea.id} cannot move from {idea.status.value} to {target.value}."
        )


def replace_by_id(
    ideas: List[Idea],
    idea_id: str,
    updater: Callable[[Idea], Idea],
) -> Tuple[List[Idea], Optional[Idea]]:
    """Replace the element whose id matches with `updater(element)`.

    Order and every other element are preserved. When no element matches
    the list is returned unchanged together with None.
    """
    for index, idea in enumerate(ideas):
        if idea.id == idea_id:
            updated = updater(idea)
            return ideas[:index] + [updated] + ideas[index + 1:], updated
    return ideas, None
