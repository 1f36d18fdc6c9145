"""Debug output devices with formatted, annotated and hexadecimal printing."""

from __future__ import annotations

import inspect
import os
import struct
import time

DEFAULT_FMT_SIZE = 1024
TIMEOUT_MAX = 0x7FFFFFFF
LINE_FEED = "\r\n"
LINE_FEED_TAB = LINE_FEED + "\t"

# align -> (units per line, struct code, output format)
_HEX_LAYOUT = {
    1: (16, "=B", "%02x "),
    2: (12, "=H", "%04x "),
    4: (8, "=I", "%08x "),
}


class DeviceError(Exception):
    """Raised when a debug device cannot perform an operation."""


class DebugDevice:
    """Base class of all debug output devices.

    Subclasses provide ``write`` and, where the medium allows it, ``read``,
    ``clear`` and ``close``.  The printing helpers are built on ``write``.
    """

    def __init__(
        self,
        *,
        fmt_max: int = DEFAULT_FMT_SIZE,
        time_flag: bool = False,
        file_flag: bool = False,
        func_flag: bool = False,
        line_flag: bool = False,
    ) -> None:
        if fmt_max < 2:
            raise ValueError("fmt_max must be at least 2")
        self.fmt_max = fmt_max
        self.time_flag = time_flag
        self.file_flag = file_flag
        self.func_flag = func_flag
        self.line_flag = line_flag

    # -- raw operations -------------------------------------------------

    def write(self, data: str) -> int:
        """Write text to the device and return the number of characters."""
        raise DeviceError(f"{type(self).__name__} does not support writing")

    def read(self, size: int, offset: int = 0):
        """Read ``size`` units from the device."""
        raise DeviceError(f"{type(self).__name__} does not support reading")

    def clear(self) -> None:
        """Discard everything stored on the device."""
        raise DeviceError(f"{type(self).__name__} does not support clearing")

    def close(self) -> None:
        """Release the device; the default device holds nothing."""

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # -- printing -------------------------------------------------------

    def print(self, fmt: str, *args) -> int:
        """Format with ``%`` and write, truncated to the format buffer."""
        text = fmt % args if args else fmt
        return self.write(text[: self.fmt_max - 2])

    def print_info(self, file: str, func: str, line: int) -> int:
        """Write the header configured by the device flags."""
        total = 0
        if self.time_flag:
            now = time.localtime()
            total += self.print("[%d:%d:%d]", now.tm_hour, now.tm_min, now.tm_sec)
        if self.file_flag or self.func_flag or self.line_flag:
            file_part = file if self.file_flag else ""
            func_part = func if self.func_flag else ""
            if self.line_flag:
                total += self.print("[%s,%s,%d]", file_part, func_part, line)
            else:
                total += self.print("[%s,%s,]", file_part, func_part)
        if total > 0:
            total += self.write(">> ")
        return total

    def feed(self, count: int = 1) -> int:
        """Write ``count`` line feeds."""
        return sum(self.write(LINE_FEED) for _ in range(count))

    def print_hex(
        self, data: bytes, feed: int = 1, tip: str | None = None, align: int = 1
    ) -> int:
        """Dump ``data`` as hexadecimal units of 1, 2 or 4 bytes."""
        if not data or align not in _HEX_LAYOUT:
            return 0
        if len(data) % align:
            raise ValueError("data length must be a multiple of align")
        per_line, code, fmt = _HEX_LAYOUT[align]
        if tip is not None:
            self.print("[%s]", tip)
        total = 0
        for count, (value,) in enumerate(struct.iter_unpack(code, bytes(data))):
            if count and count % per_line == 0:
                total += self.write(LINE_FEED_TAB)
            total += self.print(fmt, value)
        total += self.feed(feed)
        return total

    # -- convenience helpers that annotate with the caller's location ---

    def printf(self, feed: int, fmt: str, *args) -> int:
        """Header, formatted message, then ``feed`` line feeds."""
        total = self.print_info(*_caller())
        total += self.print(fmt, *args)
        total += self.feed(feed)
        return total

    def printa(self, feed: int, data: str) -> int:
        """Header, raw text, then ``feed`` line feeds."""
        total = self.print_info(*_caller())
        total += self.write(data)
        total += self.feed(feed)
        return total

    def printh(self, feed: int, tip: str | None, data: bytes, align: int = 1) -> int:
        """Header followed by a hexadecimal dump."""
        total = self.print_info(*_caller())
        total += self.print_hex(data, feed, tip, align)
        return total


def _caller() -> tuple[str, str, int]:
    """File, function and line of the code calling a printing helper."""
    frame = inspect.currentframe()
    target = frame.f_back.f_back if frame and frame.f_back else None
    try:
        if target is None:
            return ("", "", 0)
        code = target.f_code
        return (os.path.basename(code.co_filename), code.co_name, target.f_lineno)
    finally:
        del frame, target