"""Sending the contents of a readable debug device to a byte stream."""

from __future__ import annotations

from typing import BinaryIO

from dbgkit.printd import DebugDevice

DEFAULT_CHUNK_SIZE = 128


def upload(
    device: DebugDevice, stream: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE
) -> int:
    """Copy everything ``device`` holds to ``stream`` in chunks.

    Reading stops at the first short chunk.  Returns the number of bytes
    sent.  The stream is left open.
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    offset = 0
    while True:
        chunk = device.read(chunk_size, offset)
        if isinstance(chunk, str):
            chunk = chunk.encode()
        offset += len(chunk)
        if chunk:
            stream.write(chunk)
        if len(chunk) != chunk_size:
            return offset