"""Inputs and actions that a plugin sends back to the launcher."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

U16_MAX = 0xFFFF


@dataclass(frozen=True)
class SelectionRange:
    """A selection within the input, counted in characters."""

    lower_bound: int
    upper_bound: int

    @classmethod
    def at(cls, index: int) -> SelectionRange:
        """Both bounds at ``index``."""
        return cls(index, index)

    @classmethod
    def all(cls) -> SelectionRange:
        """The whole query."""
        return cls(0, U16_MAX)

    @classmethod
    def start(cls) -> SelectionRange:
        return cls.at(0)

    @classmethod
    def end(cls) -> SelectionRange:
        return cls.at(U16_MAX)


@dataclass(frozen=True)
class PluginInput:
    """A query to put in the input; the cursor defaults to the end."""

    query: str
    range_lb: int = U16_MAX
    range_ub: int = U16_MAX

    def select(self, sel: SelectionRange) -> PluginInput:
        """Return a copy with the cursor placed at the range's lower bound."""
        return replace(self, range_lb=sel.lower_bound, range_ub=sel.lower_bound)

    def to_dict(self) -> dict[str, Any]:
        return {"query": self.query, "range_lb": self.range_lb, "range_ub": self.range_ub}


@dataclass(frozen=True)
class Close:
    """Close the launcher window."""


@dataclass(frozen=True)
class RunCommand:
    cmd: str
    args: tuple[str, ...] = ()


@dataclass(frozen=True)
class RunShell:
    command: str


@dataclass(frozen=True)
class Copy:
    text: str


@dataclass(frozen=True)
class SetInput:
    input: PluginInput


Action = Close | RunCommand | RunShell | Copy | SetInput


def action_to_dict(action: Action) -> dict[str, Any]:
    """Serialise an action into its message form."""
    match action:
        case Close():
            return {"close": None}
        case RunCommand(cmd=cmd, args=args):
            return {"run_command": {"cmd": cmd, "args": list(args)}}
        case RunShell(command=command):
            return {"run_shell": command}
        case Copy(text=text):
            return {"copy": text}
        case SetInput(input=inp):
            return {"set_input": inp.to_dict()}
    raise TypeError(f"not an action: {action!r}")