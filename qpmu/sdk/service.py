"""The requests a plugin answers for the launcher, handled for a plugin class."""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Mapping
from typing import Any, Generic, TypeVar

from qpmu.hotkey import Hotkey
from qpmu.sdk import sql
from qpmu.sdk.items import List, ListItemCallbacks
from qpmu.sdk.messages import Action, action_to_dict
from qpmu.sdk.store import ListItemStore


class PluginError(Exception):
    """An error reported back to the launcher.

    ``code`` is ``"unknown"`` for failures of the plugin itself and
    ``"data_loss"`` when an item's callbacks can no longer be found.
    """

    def __init__(self, message: str, code: str = "unknown") -> None:
        super().__init__(message)
        self.code = code


def _error_chain(error: BaseException) -> str:
    messages: list[str] = []
    seen: set[int] = set()
    current: BaseException | None = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        messages.append(str(current))
        current = current.__cause__ or (
            None if current.__suppress_context__ else current.__context__
        )
    return "\n".join(messages)


class Plugin(ABC):
    """What a plugin implements: creation from its settings, and queries."""

    @classmethod
    @abstractmethod
    async def create(cls, toml: str) -> Plugin:
        """Build the plugin from its TOML settings."""

    @abstractmethod
    async def query(self, query: str) -> List:
        """Answer a query (without the plugin's prefix)."""


P = TypeVar("P", bound=Plugin)


class PluginService(Generic[P]):
    """Handles the launcher's requests for one plugin class."""

    def __init__(self, plugin_type: type[P], store: ListItemStore | None = None) -> None:
        self._plugin_type = plugin_type
        self._plugin: P | None = None
        self._lock = asyncio.Lock()
        self._store = store if store is not None else ListItemStore()

    async def initialise(self, toml: str, sqlite_url: str) -> None:
        """Open the database and create the plugin from its settings."""
        async with self._lock:
            try:
                await sql.init(sqlite_url)
                plugin = await self._plugin_type.create(toml)
            except Exception as e:
                raise PluginError(_error_chain(e)) from e
            self._plugin = plugin  # type: ignore[assignment]

    async def _initialised(self) -> P:
        async with self._lock:
            plugin = self._plugin
        if plugin is None:
            raise RuntimeError("plugin should have been initialised")
        return plugin

    async def query(self, query: str) -> dict[str, Any]:
        plugin = await self._initialised()
        try:
            result = await plugin.query(query)
        except Exception as e:
            raise PluginError(_error_chain(e)) from e
        return self._store.store_query_result(result)

    def _callbacks(self, selection_id: int) -> ListItemCallbacks:
        callbacks = self._store.fetch_callbacks_of(selection_id)
        if callbacks is None:
            raise PluginError(
                f"failed to fetch callback of list item with id {selection_id}",
                code="data_loss",
            )
        return callbacks

    @staticmethod
    async def _actions(pending: Awaitable[list[Action]]) -> dict[str, Any]:
        try:
            actions = await pending
        except Exception as e:
            raise PluginError(_error_chain(e)) from e
        return {"actions": [action_to_dict(action) for action in actions]}

    async def activate(self, selection_id: int) -> dict[str, Any]:
        return await self._actions(self._callbacks(selection_id).activate())

    async def alt_activate(self, selection_id: int) -> dict[str, Any]:
        return await self._actions(self._callbacks(selection_id).alt_activate())

    async def hotkey_activate(
        self, selection_id: int, hotkey: Hotkey | Mapping[str, Any]
    ) -> dict[str, Any]:
        if not isinstance(hotkey, Hotkey):
            hotkey = Hotkey.from_dict(dict(hotkey))
        return await self._actions(self._callbacks(selection_id).hotkey_activate(hotkey))

    async def complete(self, selection_id: int) -> dict[str, Any]:
        callbacks = self._callbacks(selection_id)
        try:
            new_input = await callbacks.complete()
        except Exception as e:
            raise PluginError(_error_chain(e)) from e
        return {"input": new_input.to_dict() if new_input is not None else None}