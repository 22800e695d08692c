"""Rows of the results list, each tied to the plugin that produced it."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from qpmu.result_list import ListStyle, ResultList

if TYPE_CHECKING:
    from qpmu.actions import Action
    from qpmu.hotkey import Hotkey
    from qpmu.input import Input
    from qpmu.plugin import Plugin


class IconKind(Enum):
    NAME = "name"
    TEXT = "text"


@dataclass(frozen=True)
class Icon:
    """An icon given by a theme icon name or by a short text."""

    kind: IconKind
    value: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Icon:
        for kind in IconKind:
            if kind.value in data:
                return cls(kind, str(data[kind.value]))
        raise ValueError(f"unknown icon {data!r}")


@dataclass(eq=False)
class ListItem:
    """A row in the results list."""

    plugin: Plugin
    id: int
    title: str
    description: str = ""
    icon: Icon | None = field(default=None)

    def __repr__(self) -> str:
        return (
            f"ListItem(plugin={self.plugin!r}, title={self.title!r}, "
            f"description={self.description!r}, icon={self.icon!r})"
        )

    async def activate(self) -> list[Action]:
        return await self.plugin.activate(self.id)

    async def alt_activate(self) -> list[Action]:
        return await self.plugin.alt_activate(self.id)

    async def hotkey_activate(self, hotkey: Hotkey) -> list[Action]:
        return await self.plugin.hotkey_activate(self.id, hotkey)

    async def complete(self) -> Input | None:
        return await self.plugin.complete(self.id)


def result_list_from_response(plugin: Plugin, response: dict[str, Any]) -> ResultList[ListItem]:
    """Build a results list from a plugin's query reply."""
    items = [
        ListItem(
            plugin,
            int(item["id"]),
            item.get("title", ""),
            item.get("description", ""),
            Icon.from_dict(item["icon"]) if item.get("icon") else None,
        )
        for item in response.get("items", [])
    ]
    style = response.get("list_style")
    return ResultList(items, ListStyle.from_dict(style) if style else None)