"""Keyboard hotkeys passed from the front end to plugins."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class Key(IntEnum):
    """A key that can be part of a hotkey. Values match the wire format."""

    DIGIT_0 = 0
    DIGIT_1 = 1
    DIGIT_2 = 2
    DIGIT_3 = 3
    DIGIT_4 = 4
    DIGIT_5 = 5
    DIGIT_6 = 6
    DIGIT_7 = 7
    DIGIT_8 = 8
    DIGIT_9 = 9
    A = 10
    B = 11
    C = 12
    D = 13
    E = 14
    F = 15
    G = 16
    H = 17
    I = 18  # noqa: E741
    J = 19
    K = 20
    L = 21
    M = 22
    N = 23
    O = 24  # noqa: E741
    P = 25
    Q = 26
    R = 27
    S = 28
    T = 29
    U = 30
    V = 31
    W = 32
    X = 33
    Y = 34
    Z = 35
    F1 = 36
    F2 = 37
    F3 = 38
    F4 = 39
    F5 = 40
    F6 = 41
    F7 = 42
    F8 = 43
    F9 = 44
    F10 = 45
    F11 = 46
    F12 = 47
    F13 = 48
    F14 = 49
    F15 = 50
    F16 = 51
    F17 = 52
    F18 = 53
    F19 = 54
    F20 = 55
    F21 = 56
    F22 = 57
    F23 = 58
    F24 = 59
    BACKTICK = 60
    HYPHEN = 61
    EQUAL = 62
    TAB = 63
    LEFT_BRACKET = 64
    RIGHT_BRACKET = 65
    BACKSLASH = 66
    SEMICOLON = 67
    APOSTROPHE = 68
    ENTER = 69
    COMMA = 70
    PERIOD = 71
    SLASH = 72


@dataclass(frozen=True)
class Modifiers:
    """Modifier keys held while the hotkey was pressed."""

    ctrl: bool = False
    alt: bool = False
    shift: bool = False
    super_: bool = False


@dataclass(frozen=True)
class Hotkey:
    """A key together with its modifiers."""

    key: Key
    modifiers: Modifiers = field(default_factory=Modifiers)

    def to_dict(self) -> dict[str, Any]:
        """Serialise into the message form sent to plugins."""
        return {
            "key": int(self.key),
            "modifiers": {
                "ctrl": self.modifiers.ctrl,
                "alt": self.modifiers.alt,
                "shift": self.modifiers.shift,
                "super": self.modifiers.super_,
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Hotkey:
        """Build a hotkey from its message form; missing modifiers are off."""
        mods = data.get("modifiers") or {}
        return cls(
            key=Key(data["key"]),
            modifiers=Modifiers(
                ctrl=bool(mods.get("ctrl", False)),
                alt=bool(mods.get("alt", False)),
                shift=bool(mods.get("shift", False)),
                super_=bool(mods.get("super", False)),
            ),
        )


_KEY_NAMES: dict[str, Key] = {
    **{str(d): Key[f"DIGIT_{d}"] for d in range(10)},
    **{chr(c): Key[chr(c)] for c in range(ord("A"), ord("Z") + 1)},
    **{f"F{n}": Key[f"F{n}"] for n in range(1, 25)},
    "grave": Key.BACKTICK,
    "hyphen": Key.HYPHEN,
    "equal": Key.EQUAL,
    "Tab": Key.TAB,
    "bracketleft": Key.LEFT_BRACKET,
    "bracketright": Key.RIGHT_BRACKET,
    "backslash": Key.BACKSLASH,
    "semicolon": Key.SEMICOLON,
    "apostrophe": Key.APOSTROPHE,
    "Return": Key.ENTER,
    "comma": Key.COMMA,
    "period": Key.PERIOD,
    "slash": Key.SLASH,
}


def key_from_name(name: str) -> Key | None:
    """Map a toolkit key name (such as ``"Return"``) to a Key, or None."""
    return _KEY_NAMES.get(name)


def hotkey_from_key_event(
    key_name: str, ctrl: bool, alt: bool, shift: bool, super_: bool
) -> Hotkey | None:
    """Turn a key press into a hotkey.

    Returns None when the key is not recognised or when none of ctrl,
    alt or super is held.
    """
    if not (ctrl or alt or super_):
        return None
    key = key_from_name(key_name)
    if key is None:
        return None
    return Hotkey(key, Modifiers(ctrl=ctrl, alt=alt, shift=shift, super_=super_))