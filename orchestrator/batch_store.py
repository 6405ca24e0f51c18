"""Batch store for generation snapshots.

Keeps the most recent batches in the key-value store, newest first. Batches
are deep-cloned on the way in and on the way out, so the working set and the
stored snapshots never share objects.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import ValidationError

from config import BATCH_STORAGE_KEY, MAX_BATCHES_STORED
from contracts import ForgeMode, Idea, IdeaBatch
from providers.errors import BatchNotFound
from storage import KeyValueStore

MODE_LABELS = {
    ForgeMode.TARGETED: "TARGETED",
    ForgeMode.RANDOM: "CHAOS",
}


def clone_ideas(ideas: List[Idea]) -> List[Idea]:
    return [idea.model_copy(deep=True) for idea in ideas]


class BatchStore:
    """Bounded, newest-first list of IdeaBatch snapshots."""

    def __init__(self, store: KeyValueStore, max_batches: int = MAX_BATCHES_STORED):
        """Initialize the batch store.

        Args:
            store: Key-value store holding the serialized list
            max_batches: Number of batches retained; oldest evicted first
        """
        self.store = store
        self.max_batches = max_batches

    def _load(self) -> List[IdeaBatch]:
        data = self.store.get_json(BATCH_STORAGE_KEY, default=[])
        if not isinstance(data, list):
            return []
        batches = []
        for entry in data:
            try:
                batches.append(IdeaBatch.model_validate(entry))
            except ValidationError:
                continue
        return batches

    def _persist(self, batches: List[IdeaBatch]) -> None:
        self.store.set_json(BATCH_STORAGE_KEY, [b.model_dump(mode="json") for b in batches])

    def list(self) -> List[IdeaBatch]:
        """All retained batches, newest first."""
        return self._load()

    def add(
        self,
        ideas: List[Idea],
        mode: ForgeMode,
        now: Optional[datetime] = None,
    ) -> IdeaBatch:
        """Snapshot `ideas` as a new batch at the front of the list.

        Returns:
            The stored batch
        """
        now = now or datetime.now()
        batch = IdeaBatch(
            id=str(uuid.uuid4()),
            label=f"{now.strftime('%Y-%m-%d %H:%M:%S')} • {MODE_LABELS[ForgeMode(mode)]}",
            created_at=int(now.timestamp() * 1000),
            ideas=clone_ideas(ideas),
        )
        batches = [batch] + self._load()
        self._persist(batches[:self.max_batches])
        return batch.model_copy(deep=True)

    def get(self, batch_id: str) -> IdeaBatch:
        for batch in self._load():
            if batch.id == batch_id:
                return batch
        raise BatchNotFound(batch_id)

    def restore(self, batch_id: str) -> List[Idea]:
        """Fresh copies of a batch's ideas, safe to mutate."""
        return clone_ideas(self.get(batch_id).ideas)

    def clear(self) -> None:
        self.store.remove(BATCH_STORAGE_KEY)
