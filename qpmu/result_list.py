"""The list of results shown to the user."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(order=True)
class BoundedUsize:
    """A non-negative integer with an inclusive upper bound."""

    value: int = 0
    bound: int = 0

    def __post_init__(self) -> None:
        if self.bound < 0 or self.value < 0:
            raise ValueError("value and bound must be non-negative")
        if self.value > self.bound:
            raise ValueError("value must not exceed the bound")

    def saturating_set(self, value: int) -> None:
        """Set the value, clamping it to ``[0, bound]``."""
        self.value = min(max(value, 0), self.bound)

    def saturating_add_signed(self, delta: int) -> None:
        self.saturating_set(self.value + delta)

    def wrapping_add_signed(self, delta: int) -> None:
        self.value = (self.value + delta) % (self.bound + 1)

    def is_min(self) -> bool:
        return self.value == 0

    def is_max(self) -> bool:
        return self.value == self.bound

    def is_at_bounds(self) -> bool:
        return self.is_min() or self.is_max()


class ListStyleKind(Enum):
    ROWS = "rows"
    GRID = "grid"
    GRID_WITH_COLUMNS = "grid_with_columns"


@dataclass(frozen=True)
class ListStyle:
    """How a list should be laid out; ``columns`` only for GRID_WITH_COLUMNS."""

    kind: ListStyleKind
    columns: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ListStyle:
        """Parse the message form: one of ``rows``, ``grid`` or ``grid_with_columns``."""
        if "rows" in data:
            return cls(ListStyleKind.ROWS)
        if "grid" in data:
            return cls(ListStyleKind.GRID)
        if "grid_with_columns" in data:
            columns = data["grid_with_columns"]
            if not isinstance(columns, int) or columns < 0:
                raise ValueError(f"invalid column count {columns!r}")
            return cls(ListStyleKind.GRID_WITH_COLUMNS, columns)
        raise ValueError(f"unknown list style {data!r}")


class ResultList(Generic[T]):
    """Items with a current selection and an optional layout style."""

    def __init__(self, items: Iterable[T] = (), style: ListStyle | None = None) -> None:
        self._items: list[T] = list(items)
        self._selection = BoundedUsize(bound=max(len(self._items) - 1, 0))
        self.style = style

    @property
    def items(self) -> Sequence[T]:
        return tuple(self._items)

    @property
    def selection(self) -> int:
        return self._selection.value

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"ResultList({len(self)} items, selection={self.selection}, style={self.style!r})"

    def set_selection(self, value: int) -> None:
        self._selection.saturating_set(value)

    def move_selection_signed(self, delta: int) -> None:
        """Move the selection, wrapping from the ends and clamping elsewhere.

        Large jumps therefore stop at the first or last item before wrapping.
        """
        if self._selection.is_at_bounds():
            self._selection.wrapping_add_signed(delta)
        else:
            self._selection.saturating_add_signed(delta)

    def selected_item(self) -> T | None:
        """The selected item, or None if the list is empty."""
        if not self._items:
            return None
        return self._items[self.selection]