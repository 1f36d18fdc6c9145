"""Debug device that scrolls log lines on a character display."""

from __future__ import annotations

import abc
import enum
from collections import deque

from dbgkit.printd import DebugDevice

# Key codes of the terminal keypad.
VK_INVALID = 0xFF
VK_POWER = 0x01
VK_CANCEL = 0x02
VK_DEL = 0x03
VK_OK = 0x04
VK_LEFT = 0x25
VK_UP = 0x26
VK_RIGHT = 0x27
VK_DOWN = 0x28
VK_F3 = 0x72
VK_PAY = 0x87
VK_MENU = 0x12
VK_STAR = ord("*")
VK_SHARP = ord("#")
VK_AT = ord("@")
VK_DIGITS = tuple(ord(c) for c in "0123456789")


class Align(enum.IntEnum):
    """Horizontal alignment of a line of text."""

    LEFT = 0x0000
    MID = 0x1000
    RIGHT = 0x2000


class Screen(abc.ABC):
    """A line-oriented display with fixed geometry in pixels."""

    def __init__(
        self,
        view_width: int,
        view_height: int,
        font_width: int,
        font_height: int,
        line_space: int = 0,
    ) -> None:
        if min(view_width, view_height, font_width, font_height) <= 0:
            raise ValueError("screen and font sizes must be positive")
        if line_space < 0:
            raise ValueError("line_space must not be negative")
        self.view_width = view_width
        self.view_height = view_height
        self.font_width = font_width
        self.font_height = font_height
        self.line_space = line_space

    @property
    def max_chars(self) -> int:
        """Characters that fit on one line."""
        return self.view_width // self.font_width

    @property
    def max_lines(self) -> int:
        """Lines that fit on the screen; the last needs no line spacing."""
        return (self.view_height + self.line_space) // (
            self.font_height + self.line_space
        )

    @abc.abstractmethod
    def clear(self) -> None:
        """Blank the whole screen."""

    @abc.abstractmethod
    def text_out(self, line: int, text: str, align: Align = Align.LEFT) -> None:
        """Show ``text`` on line number ``line``."""


class MemoryScreen(Screen):
    """A screen that keeps what is shown in memory."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.rows: dict[int, str] = {}
        self.aligns: dict[int, Align] = {}
        self.clear_count = 0

    def clear(self) -> None:
        self.rows.clear()
        self.aligns.clear()
        self.clear_count += 1

    def text_out(self, line: int, text: str, align: Align = Align.LEFT) -> None:
        if not 0 <= line < self.max_lines:
            raise ValueError(f"line {line} is off the screen")
        self.rows[line] = text[: self.max_chars]
        self.aligns[line] = Align(align)


class DisplayDevice(DebugDevice):
    """Shows written text as scrolling lines on a :class:`Screen`.

    Text collects in a pending line until ``\\r``, ``\\n`` or ``\\r\\n``;
    the line is then pushed to the bottom of the screen and the rest scroll
    up.  Characters past the line width are dropped.
    """

    def __init__(self, screen: Screen, **flags) -> None:
        super().__init__(**flags)
        if screen.max_chars < 1 or screen.max_lines < 1:
            raise ValueError("screen cannot hold a single character")
        self.screen = screen
        self.max_chars = screen.max_chars
        self.max_lines = screen.max_lines
        self._lines: deque[str] = deque([""] * self.max_lines, maxlen=self.max_lines)
        self._pending: list[str] = []

    @property
    def lines(self) -> tuple[str, ...]:
        """The lines on screen, top first."""
        return tuple(self._lines)

    @property
    def pending(self) -> str:
        """Text written since the last line end."""
        return "".join(self._pending)

    def _push_line(self) -> None:
        self._lines.append("".join(self._pending))
        self._pending.clear()
        self.screen.clear()
        for number, text in enumerate(self._lines):
            self.screen.text_out(number, text)

    def write(self, data: str) -> int:
        skip_newline = False
        for char in data:
            if skip_newline:
                skip_newline = False
                if char == "\n":
                    continue
            if char == "\r":
                skip_newline = True
                self._push_line()
            elif char == "\n":
                self._push_line()
            elif len(self._pending) < self.max_chars:
                self._pending.append(char)
        return len(data)

    def read(self, size: int, offset: int = 0) -> str:
        """A display has no input; nothing is ever read."""
        return ""

    def close(self) -> None:
        self._lines = deque([""] * self.max_lines, maxlen=self.max_lines)
        self._pending.clear()