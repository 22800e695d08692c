"""Actions and events that come back from plugins to the launcher."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from qpmu.input import Input
from qpmu.result_list import ResultList

__all__ = [
    "Action",
    "Close",
    "Copy",
    "PluginEvent",
    "Run",
    "RunCommand",
    "RunShell",
    "SetInput",
    "SetList",
    "map_actions",
]

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Close:
    """Close the launcher window."""


@dataclass(frozen=True)
class RunCommand:
    """Run a program with arguments."""

    cmd: str
    args: tuple[str, ...] = ()


@dataclass(frozen=True)
class RunShell:
    """Run a command line through the shell."""

    command: str


@dataclass(frozen=True)
class Copy:
    """Copy text to the clipboard."""

    text: str


@dataclass
class SetInput:
    """Replace the launcher's input."""

    input: Input


Action = Close | RunCommand | RunShell | Copy | SetInput


@dataclass
class SetList:
    """Show a new results list, produced by the ``index``-th input change."""

    list: ResultList
    index: int

    def __repr__(self) -> str:
        return f"SetList({len(self.list)} items)"


@dataclass
class Run:
    """Run a sequence of actions."""

    actions: list[Action] = field(default_factory=list)


PluginEvent = SetList | Run


def _map_action(prefix: str, raw: dict[str, Any] | None) -> Action | None:
    if not raw:
        log.error("plugin with prefix %r did not provide an action: ignoring", prefix)
        return None
    if "close" in raw:
        return Close()
    if "run_command" in raw:
        command = raw["run_command"] or {}
        return RunCommand(command.get("cmd", ""), tuple(command.get("args", ())))
    if "run_shell" in raw:
        return RunShell(raw["run_shell"])
    if "copy" in raw:
        return Copy(raw["copy"])
    if "set_input" in raw:
        data = raw["set_input"] or {}
        return SetInput(
            Input.from_plugin_input(
                prefix,
                data.get("query", ""),
                data.get("range_lb", 0),
                data.get("range_ub", 0),
            )
        )
    log.error("plugin with prefix %r sent an unknown action %r: ignoring", prefix, raw)
    return None


def map_actions(prefix: str, actions: Iterable[dict[str, Any] | None]) -> list[Action]:
    """Convert a plugin's action messages, skipping any that are empty.

    Inputs set by the plugin get the plugin's ``prefix`` put back in front.
    """
    mapped = (_map_action(prefix, raw) for raw in actions)
    return [action for action in mapped if action is not None]