"""Single editable line plus its derived render form and highlight tags."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .render import DEFAULT_TAB_STOP, char_to_display, display_to_char, expand_tabs
from .syntax import Highlight, classify


@dataclass(slots=True)
class Line:
    """``render`` and ``highlight`` are rebuilt whenever ``chars`` changes."""

    chars: str = ""
    tab_stop: int = DEFAULT_TAB_STOP
    render: str = field(default="", init=False)
    highlight: List[Highlight] = field(default_factory=list, init=False)

    def __post_init__(self) -> None:
        self.update()

    def update(self) -> None:
        self.render = expand_tabs(self.chars, self.tab_stop)
        self.highlight = classify(self.render)

    def set_text(self, text: str) -> None:
        self.chars = text
        self.update()

    def insert(self, at: int, text: str) -> None:
        at = max(0, min(at, len(self.chars)))
        self.set_text(self.chars[:at] + text + self.chars[at:])

    def delete(self, at: int) -> str | None:
        if at < 0 or at >= len(self.chars):
            return None
        removed = self.chars[at]
        self.set_text(self.chars[:at] + self.chars[at + 1 :])
        return removed

    def append(self, text: str) -> None:
        self.set_text(self.chars + text)

    def truncate(self, at: int) -> str:
        at = max(0, min(at, len(self.chars)))
        tail = self.chars[at:]
        self.set_text(self.chars[:at])
        return tail

    def cx_to_rx(self, cx: int) -> int:
        return char_to_display(self.chars, cx, self.tab_stop)

    def rx_to_cx(self, rx: int) -> int:
        return display_to_char(self.chars, rx, self.tab_stop)

    def char_at(self, cx: int) -> str:
        """Return the character at ``cx`` or ``""`` past either end."""

        if 0 <= cx < len(self.chars):
            return self.chars[cx]
        return ""

    def __len__(self) -> int:
        return len(self.chars)


__all__ = ["Line"]
