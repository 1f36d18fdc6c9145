"""Debug device backed by text streams, the terminal by default."""

from __future__ import annotations

import sys
from typing import TextIO

from dbgkit.printd import DebugDevice


class StreamDevice(DebugDevice):
    """Writes to an output stream and reads characters from an input stream."""

    def __init__(
        self,
        output: TextIO | None = None,
        input: TextIO | None = None,
        **flags,
    ) -> None:
        flags.setdefault("func_flag", True)
        super().__init__(**flags)
        self.output = output if output is not None else sys.stdout
        self.input = input if input is not None else sys.stdin

    def write(self, data: str) -> int:
        self.output.write(data)
        self.output.flush()
        return len(data)

    def read(self, size: int, offset: int = 0) -> str:
        """Read up to ``size`` characters; ``offset`` is ignored."""
        return self.input.read(size)

    def close(self) -> None:
        """The streams belong to the caller and stay open."""