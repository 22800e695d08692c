"""The launcher's text input and selection."""

from __future__ import annotations

from dataclasses import dataclass

U16_MAX = 0xFFFF


def _saturate_u16(value: int) -> int:
    return max(0, min(value, U16_MAX))


@dataclass
class Input:
    """Input contents and a selection range counted in characters."""

    contents: str = ""
    selection: tuple[int, int] = (0, 0)

    def prefix_with(self, prefix: str) -> None:
        """Insert ``prefix`` at the start, shifting the selection along."""
        prefix_len = len(prefix)
        if prefix_len > U16_MAX:
            raise ValueError("prefix is too long")
        self.contents = prefix + self.contents
        a, b = self.selection
        self.selection = (_saturate_u16(a + prefix_len), _saturate_u16(b + prefix_len))

    @classmethod
    def from_plugin_input(
        cls, prefix: str, query: str, range_lb: int, range_ub: int
    ) -> Input:
        """Build an input from a plugin's reply, adding the plugin's prefix."""
        result = cls(query, (_saturate_u16(range_lb), _saturate_u16(range_ub)))
        result.prefix_with(prefix)
        return result