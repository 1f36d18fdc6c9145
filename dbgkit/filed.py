"""Debug device that logs into a size-limited file."""

from __future__ import annotations

import os

from dbgkit.printd import DebugDevice, DeviceError


class FileDevice(DebugDevice):
    """Appends log text to a file, starting over when it would grow too big.

    A write that would take the file past ``max_size`` bytes first empties
    the file and then writes, so the newest record is always kept.
    """

    def __init__(self, path: str | os.PathLike, max_size: int, **flags) -> None:
        super().__init__(**flags)
        if max_size <= 0:
            raise ValueError("max_size must be positive")
        self.path = os.fspath(path)
        self.max_size = max_size
        try:
            self._file = open(self.path, "a+b")
        except OSError as exc:
            raise DeviceError(f"cannot open {self.path!r}: {exc}") from exc

    @property
    def closed(self) -> bool:
        return self._file.closed

    def _handle(self):
        if self._file.closed:
            raise DeviceError(f"{self.path!r} is closed")
        return self._file

    def write(self, data: str | bytes) -> int:
        """Append ``data`` and return the number of bytes written."""
        handle = self._handle()
        if isinstance(data, str):
            data = data.encode()
        end = handle.seek(0, os.SEEK_END)
        if end + len(data) > self.max_size:
            handle.truncate(0)
            handle.seek(0)
        written = handle.write(data)
        handle.flush()
        if written != len(data):
            raise DeviceError(f"short write to {self.path!r}")
        return written

    def read(self, size: int, offset: int = 0) -> bytes:
        """Read up to ``size`` bytes starting at byte ``offset``."""
        if offset < 0:
            raise ValueError("offset must not be negative")
        if size < 0:
            raise ValueError("size must not be negative")
        handle = self._handle()
        if handle.seek(offset) != offset:
            raise DeviceError(f"cannot seek to {offset} in {self.path!r}")
        return handle.read(size)

    def clear(self) -> None:
        """Empty the log file."""
        handle = self._handle()
        handle.truncate(0)
        handle.flush()

    def close(self) -> None:
        self._file.close()