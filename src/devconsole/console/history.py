from __future__ import annotations

from collections import deque

DEFAULT_CAPACITY = 6


class CommandHistory:
    """Bounded FIFO of successfully executed command lines (oldest evicted first)."""

    def __init__(self, *, capacity: int = DEFAULT_CAPACITY) -> None:
        self._items: deque[str] = deque(maxlen=max(1, int(capacity)))

    @property
    def capacity(self) -> int:
        return int(self._items.maxlen or 0)

    def __len__(self) -> int:
        return len(self._items)

    def add(self, line: str) -> None:
        self._items.append(str(line))

    def entries(self) -> tuple[str, ...]:
        return tuple(self._items)

    def at(self, index: int) -> str:
        """Return the entry `index` steps back from the newest (0 = newest)."""
        i = int(index)
        if i < 0 or i >= len(self._items):
            raise IndexError(f"history index out of range: {index}")
        return self._items[len(self._items) - i - 1]
