"""The launcher's state and the logic that ties the input, results and plugins together."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Iterable, Sequence
from dataclasses import replace
from typing import TYPE_CHECKING, Any

from qpmu.actions import (
    Action,
    Close,
    Copy,
    PluginEvent,
    Run,
    RunCommand,
    RunShell,
    SetInput,
    SetList,
)
from qpmu.hotkey import Hotkey
from qpmu.input import Input
from qpmu.result_list import ResultList
from qpmu.spawn import free_null

if TYPE_CHECKING:
    from qpmu.config import Config
    from qpmu.plugin import Plugin

log = logging.getLogger(__name__)


class Frontend(ABC):
    """The user interface that the model drives.

    These methods are called after the model has been updated, so they may
    read from the model but must not call its state-changing methods.
    """

    @abstractmethod
    def close(self) -> None:
        """Close the window."""

    @abstractmethod
    def copy(self, text: str) -> None:
        """Copy a string to the clipboard."""

    @abstractmethod
    def set_input(self, input: Input) -> None:
        """Show the given input. The model already holds it."""

    @abstractmethod
    def set_list(self, results: ResultList[Any]) -> None:
        """Show the given results list. The model already holds it."""

    @abstractmethod
    def set_list_selection(self, index: int) -> None:
        """Highlight the item at ``index``."""

    @abstractmethod
    def display_error(self, title: str, error: BaseException) -> None:
        """Tell the user about an error."""


class Model:
    """Main interface to the launcher.

    Methods that start plugin work schedule tasks on the running event loop,
    so they must be called from within it. The input and the results list
    may be out of sync while plugin work is pending.
    """

    def __init__(self, plugins: Iterable[Plugin], fe: Frontend) -> None:
        self.plugins: list[Plugin] = list(plugins)
        self._input = Input()
        self._results: ResultList[Any] = ResultList()
        self._dispatched_actions = 0
        self._activated_actions = 0
        self._fe = fe
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def input(self) -> Input:
        return self._input

    @property
    def results(self) -> ResultList[Any]:
        return self._results

    def set_list_selection(self, selection: int) -> None:
        log.debug("set list selection to %d", selection)
        self._results.set_selection(selection)
        self._fe.set_list_selection(self._results.selection)

    def move_list_selection(self, delta: int) -> None:
        log.debug("moving list selection by %d", delta)
        self._results.move_selection_signed(delta)
        self._fe.set_list_selection(self._results.selection)

    def activate(self) -> None:
        """Activate the selected item, running the actions it returns."""
        item = self._results.selected_item()
        if item is None:
            return
        log.debug("activating %r", item)
        self._send_event(self._run_actions(item.activate()))

    def alt_activate(self) -> None:
        item = self._results.selected_item()
        if item is None:
            return
        log.debug("alt-activating %r", item)
        self._send_event(self._run_actions(item.alt_activate()))

    def hotkey_activate(self, hotkey: Hotkey) -> None:
        item = self._results.selected_item()
        if item is None:
            return
        log.debug("hotkey-activating %r with %r", item, hotkey)
        self._send_event(self._run_actions(item.hotkey_activate(hotkey)))

    def complete(self) -> None:
        """Ask the selected item for a completion and put it in the input."""
        item = self._results.selected_item()
        if item is None:
            return
        log.debug("completing %r", item)
        self._send_event(self._completion(item.complete()))

    def set_input(self, input: Input) -> None:
        """Set the input and query the first plugin whose prefix it starts with."""
        log.debug("setting input to %r", input)
        self._input = replace(input)
        self._dispatched_actions += 1
        self._fe.set_input(input)
        self._send_event(
            self._query(input.contents, list(self.plugins), self._dispatched_actions)
        )

    def reload(self, config: Config) -> None:
        """Replace the plugins with those of ``config``."""
        log.debug("reloading")
        self.plugins = config.load()

    async def wait_idle(self) -> None:
        """Wait until all scheduled plugin work, including follow-ups, is done."""
        while self._tasks:
            await asyncio.gather(*self._tasks)

    # internals #

    @staticmethod
    async def _run_actions(pending: Awaitable[list[Action]]) -> PluginEvent:
        return Run(list(await pending))

    @staticmethod
    async def _completion(pending: Awaitable[Input | None]) -> PluginEvent:
        new = await pending
        return Run([SetInput(new)] if new is not None else [])

    @staticmethod
    async def _query(contents: str, plugins: Sequence[Plugin], index: int) -> PluginEvent:
        for plugin in plugins:
            if not contents.startswith(plugin.prefix):
                continue
            log.debug("querying plugin %r", plugin)
            results = await plugin.query(contents[len(plugin.prefix):])
            return SetList(results, index)
        raise LookupError("no plugin activated")

    def _send_event(self, pending: Awaitable[PluginEvent]) -> None:
        task = asyncio.get_running_loop().create_task(self._deliver(pending))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _deliver(self, pending: Awaitable[PluginEvent]) -> None:
        try:
            event = await pending
        except Exception as e:  # noqa: BLE001 - plugin errors are shown to the user
            self._fe.display_error("Error in plugin", e)
            return
        self._handle_event(event)

    def _handle_event(self, event: PluginEvent) -> None:
        log.debug("handling event %r", event)
        match event:
            case SetList(list=results, index=index):
                if index <= self._activated_actions:
                    return
                self._activated_actions = index
                self._results = results
                self._fe.set_list(self._results)
            case Run(actions=actions):
                for action in actions:
                    self._handle_action(action)

    def _handle_action(self, action: Action) -> None:
        log.info("handling action %r", action)
        match action:
            case Close():
                self._fe.close()
            case RunCommand(cmd=cmd, args=args):
                self._spawn(cmd, args, f"failed to run command `{cmd} {' '.join(args)}`")
            case RunShell(command=command):
                self._spawn("sh", ["-c", command], f"failed to run command `{command}`")
            case Copy(text=text):
                self._fe.copy(text)
            case SetInput(input=new):
                self.set_input(new)

    def _spawn(self, cmd: str, args: Iterable[str], context: str) -> None:
        try:
            free_null(cmd, args)
        except OSError as e:
            error = RuntimeError(context)
            error.__cause__ = e
            self._fe.display_error("Error running command", error)