"""Moving one entry of an ordered list, as done when reordering plugins."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


def move_item(items: Sequence[T], index: int, delta: int) -> tuple[list[T], int]:
    """Move the entry at ``index`` by ``delta`` places.

    The target position is clamped to the ends of the list. Returns the
    reordered list and the entry's new index; ``items`` is left untouched.
    Raises ``IndexError`` if ``index`` is not a position in the list.
    """
    if not 0 <= index < len(items):
        raise IndexError(f"index {index} out of range for {len(items)} items")
    new_index = min(max(index + delta, 0), len(items) - 1)
    reordered = list(items)
    reordered.insert(new_index, reordered.pop(index))
    return reordered, new_index