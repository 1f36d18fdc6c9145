"""Double-buffered in-memory log."""

from __future__ import annotations


class RamLog:
    """Two alternating buffers of ``size`` bytes each.

    When a write would fill the active buffer, the buffers swap and the new
    active one starts empty, so the previous buffer always holds the most
    recent complete page.
    """

    def __init__(self, size: int) -> None:
        if size <= 0:
            raise ValueError("size must be positive")
        self.size = size
        self._buffers = [bytearray(), bytearray()]
        self._active = 0

    def write(self, data: bytes | str) -> None:
        """Append ``data`` to the active buffer, swapping when it is full."""
        if isinstance(data, str):
            data = data.encode()
        if len(data) >= self.size:
            raise ValueError("record does not fit in a buffer")
        if len(self._buffers[self._active]) + len(data) >= self.size:
            self._active ^= 1
            self._buffers[self._active].clear()
        self._buffers[self._active].extend(data)

    def read(self, index: int) -> bytes:
        """Index 0 gives the previous buffer, any other the active one."""
        if index == 0:
            return bytes(self._buffers[self._active ^ 1])
        return bytes(self._buffers[self._active])