"""In-memory summarization history. Lives for the process lifetime only."""

import copy
import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping

from summarizer.schemas import HistoryItem

# Keys owned by the store; caller-supplied values are dropped.
RESERVED_KEYS = ("id", "createdAt", "created_at")


class HistoryStore:
    """Ordered, keyed log of completed summarizations.

    All reads and writes go through one lock, so saves never lose entries,
    a delete never sees a half-inserted item, and ``list`` returns a snapshot
    that later mutations don't touch. Callers only ever get deep copies,
    so editing a returned item never changes the stored record.
    """

    def __init__(self):
        self._items: Dict[str, HistoryItem] = {}
        self._lock = threading.Lock()

    def save(self, item: Mapping[str, Any]) -> HistoryItem:
        fields = {
            key: copy.deepcopy(value)
            for key, value in dict(item).items()
            if key not in RESERVED_KEYS
        }
        with self._lock:
            item_id = uuid.uuid4().hex
            while item_id in self._items:
                item_id = uuid.uuid4().hex
            stored = HistoryItem(
                id=item_id,
                created_at=datetime.now(timezone.utc),
                **fields,
            )
            self._items[item_id] = stored
        return stored.model_copy(deep=True)

    def list(self) -> List[HistoryItem]:
        with self._lock:
            return [item.model_copy(deep=True) for item in self._items.values()]

    def delete_by_id(self, item_id: str) -> bool:
        """Remove the item if present. Returns False (not an error) when absent."""
        with self._lock:
            return self._items.pop(item_id, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


# Singleton instance
history_store = HistoryStore()
