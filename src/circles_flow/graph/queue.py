"""FIFO queue used by the breadth-first augmenting path search."""

from collections import deque
from typing import Any, List, Optional


class Queue:
    """First-in first-out queue.

    Dequeue order decides which augmenting path is found first, which makes
    the solver output deterministic for identical input.
    """

    def __init__(self):
        self._items = deque()

    def enqueue(self, item: Any) -> None:
        self._items.append(item)

    def dequeue(self) -> Optional[Any]:
        """Remove and return the oldest item, or None when empty."""
        if not self._items:
            return None
        return self._items.popleft()

    def size(self) -> int:
        return len(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def to_list(self) -> List[Any]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)
