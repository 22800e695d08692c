"""Lists of results that a plugin returns, with callbacks for each item."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field, replace
from typing import Any

from qpmu.hotkey import Hotkey
from qpmu.list_item import IconKind
from qpmu.result_list import ListStyleKind
from qpmu.sdk import sql
from qpmu.sdk.messages import Action, PluginInput

ActionCallback = Callable[[], Awaitable[list[Action]]]
HotkeyCallback = Callable[[Hotkey], Awaitable[list[Action]]]
CompleteCallback = Callable[[], Awaitable[PluginInput | None]]


@dataclass(frozen=True)
class ListStyle:
    """How the launcher should lay out a list; ``columns`` only for grids with columns."""

    kind: ListStyleKind
    columns: int | None = None

    @classmethod
    def rows(cls) -> ListStyle:
        return cls(ListStyleKind.ROWS)

    @classmethod
    def grid(cls) -> ListStyle:
        return cls(ListStyleKind.GRID)

    @classmethod
    def grid_with_columns(cls, columns: int) -> ListStyle:
        if columns < 0:
            raise ValueError("column count must be non-negative")
        return cls(ListStyleKind.GRID_WITH_COLUMNS, columns)

    def to_dict(self) -> dict[str, Any]:
        if self.kind is ListStyleKind.GRID_WITH_COLUMNS:
            return {"grid_with_columns": self.columns}
        return {self.kind.value: None}


@dataclass(frozen=True)
class Icon:
    """An icon given by a theme icon name or by a short text."""

    kind: IconKind
    value: str

    @classmethod
    def from_name(cls, name: str) -> Icon:
        return cls(IconKind.NAME, name)

    @classmethod
    def from_text(cls, text: str) -> Icon:
        return cls(IconKind.TEXT, text)

    def to_dict(self) -> dict[str, str]:
        return {self.kind.value: self.value}


@dataclass(frozen=True)
class ListItemCallbacks:
    """The callbacks of one list item.

    Activations of an item with ``item_title`` set are counted in the
    database before the callback runs.
    """

    on_activate: ActionCallback | None = None
    on_alt_activate: ActionCallback | None = None
    on_hotkey_activate: HotkeyCallback | None = None
    on_complete: CompleteCallback | None = None
    item_title: str | None = None

    async def _call(self, callback: Callable[..., Awaitable[list[Action]]] | None, *args: Any) -> list[Action]:
        if callback is None:
            return []
        if self.item_title is not None:
            await sql.increment_frequency_table(self.item_title)
        return list(await callback(*args))

    async def activate(self) -> list[Action]:
        return await self._call(self.on_activate)

    async def alt_activate(self) -> list[Action]:
        return await self._call(self.on_alt_activate)

    async def hotkey_activate(self, hotkey: Hotkey) -> list[Action]:
        return await self._call(self.on_hotkey_activate, hotkey)

    async def complete(self) -> PluginInput | None:
        """Run the completion callback; None when there is none."""
        if self.on_complete is None:
            return None
        return await self.on_complete()


@dataclass
class ListItem:
    """One result. The builder methods return a changed copy."""

    title: str
    description: str = ""
    icon: Icon | None = None
    callbacks: ListItemCallbacks = field(default_factory=ListItemCallbacks)

    def with_description(self, desc: str) -> ListItem:
        return replace(self, description=desc)

    def with_icon(self, icon: Icon | None) -> ListItem:
        return replace(self, icon=icon)

    def with_icon_name(self, name: str) -> ListItem:
        return replace(self, icon=Icon.from_name(name))

    def with_icon_text(self, text: str) -> ListItem:
        return replace(self, icon=Icon.from_text(text))

    def _tracked_title(self) -> str:
        existing = self.callbacks.item_title
        return existing if existing is not None else self.title

    def on_activate(self, callback: ActionCallback) -> ListItem:
        """Add a callback to run on activation. Call after everything else is set."""
        callbacks = replace(
            self.callbacks, on_activate=callback, item_title=self._tracked_title()
        )
        return replace(self, callbacks=callbacks)

    def on_alt_activate(self, callback: ActionCallback) -> ListItem:
        """Add a callback to run on alt-activation. Call after everything else is set."""
        callbacks = replace(
            self.callbacks, on_alt_activate=callback, item_title=self._tracked_title()
        )
        return replace(self, callbacks=callbacks)

    def on_hotkey_activate(self, callback: HotkeyCallback) -> ListItem:
        """Add a callback to run when a hotkey fires. Call after everything else is set."""
        callbacks = replace(
            self.callbacks, on_hotkey_activate=callback, item_title=self._tracked_title()
        )
        return replace(self, callbacks=callbacks)

    def on_complete(self, callback: CompleteCallback) -> ListItem:
        """Add a callback to run on tab completion."""
        return replace(self, callbacks=replace(self.callbacks, on_complete=callback))


@dataclass
class List:
    """The items answering one query, with an optional preferred layout.

    With no style the launcher uses the user's default.
    """

    items: list[ListItem] = field(default_factory=list)
    style: ListStyle | None = None

    def as_grid_with_columns(self, columns: int) -> List:
        return replace(self, style=ListStyle.grid_with_columns(columns))

    def as_grid(self) -> List:
        return replace(self, style=ListStyle.grid())

    def as_rows(self) -> List:
        return replace(self, style=ListStyle.rows())