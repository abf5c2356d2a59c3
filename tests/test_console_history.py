from __future__ import annotations

import pytest

from devconsole.console.history import CommandHistory


def test_history_evicts_oldest_first() -> None:
    h = CommandHistory(capacity=3)
    for line in ("a", "b", "c", "d"):
        h.add(line)

    assert h.entries() == ("b", "c", "d")
    assert len(h) == h.capacity == 3


def test_history_at_counts_back_from_newest() -> None:
    h = CommandHistory()
    h.add("first")
    h.add("second")

    assert h.at(0) == "second"
    assert h.at(1) == "first"
    with pytest.raises(IndexError):
        h.at(2)
    with pytest.raises(IndexError):
        h.at(-1)
