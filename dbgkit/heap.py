"""Heap allocation tracking: outstanding blocks, bad frees and peak usage."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from dbgkit.printd import DebugDevice

_BLOCK_HEADER = "func\t\tline\taddr\t\tsize"
_ERROR_HEADER = "func\tline\taddr\t\tsize"
_ROW = "%s\t%d\t0x%x\t%d"


class HeapError(Exception):
    """Raised when the tracker meets an error and no handler is installed."""


@dataclass
class Block:
    """One recorded allocation, or one bad free."""

    addr: int
    size: int
    func: str
    line: int


@dataclass
class HeapStats:
    """Current and peak heap usage, in bytes and in block count."""

    heap_cur: int = 0
    heap_max: int = 0
    count_cur: int = 0
    count_max: int = 0


class _AddressSpace:
    """Hands out distinct, 8-byte aligned fake addresses."""

    def __init__(self, base: int = 0x1000) -> None:
        self._next = base

    def __call__(self, size: int) -> int:
        addr = self._next
        self._next += max(8, (size + 7) & ~7)
        return addr


class HeapTracker:
    """Records every allocation with the function and line that made it.

    ``allocator`` maps a size to an address, or to ``None`` when memory runs
    out; ``releaser`` is told about every freed address.  Errors go to
    ``on_error`` when one is given and raise :class:`HeapError` otherwise.
    Diagnostic lines are written to ``device`` when one is given.
    """

    def __init__(
        self,
        device: Optional[DebugDevice] = None,
        *,
        on_error: Optional[Callable[[str], None]] = None,
        allocator: Optional[Callable[[int], Optional[int]]] = None,
        releaser: Optional[Callable[[int], None]] = None,
    ) -> None:
        self.device = device
        self.on_error = on_error
        self._allocate = allocator if allocator is not None else _AddressSpace()
        self._release = releaser if releaser is not None else (lambda addr: None)
        self.stats = HeapStats()
        self._blocks: list[Block] = []  # newest first
        self._errors: list[Block] = []  # newest first
        self._section_enabled = False
        self._section_mark: Optional[Block] = None
        self.section_cur = 0
        self.section_max = 0

    # -- views ----------------------------------------------------------

    @property
    def blocks(self) -> tuple[Block, ...]:
        """Outstanding allocations, newest first."""
        return tuple(self._blocks)

    @property
    def errors(self) -> tuple[Block, ...]:
        """Frees of addresses that were never allocated, newest first."""
        return tuple(self._errors)

    # -- internals ------------------------------------------------------

    def _log(self, text: str) -> str:
        if self.device is not None:
            self.device.write(text)
            self.device.feed(1)
        return text

    def _error(self, message: str) -> None:
        if self.on_error is not None:
            self.on_error(message)
        else:
            raise HeapError(message)

    def _find(self, blocks: list[Block], addr: int) -> Optional[Block]:
        return next((block for block in blocks if block.addr == addr), None)

    def _add_error(self, addr: int, size: int, func: str, line: int) -> None:
        if self._find(self._errors, addr) is None:
            self._errors.insert(0, Block(addr, size, func, line))

    def _add_block(self, addr: int, size: int, func: str, line: int) -> None:
        if self._find(self._blocks, addr) is not None:
            self._error(self._log("%s %d -- 0x%x %d" % (func, line, addr, size)))
            return
        self._blocks.insert(0, Block(addr, size, func, line))
        stats = self.stats
        stats.heap_cur += size
        stats.heap_max = max(stats.heap_max, stats.heap_cur)
        stats.count_cur += 1
        stats.count_max = max(stats.count_max, stats.count_cur)
        if self._section_enabled:
            self.section_cur += size
            self.section_max = max(self.section_max, self.section_cur)

    def _sub_block(self, addr: int, func: str, line: int) -> None:
        block = self._find(self._blocks, addr)
        if block is None:
            self._add_error(addr, 0, func, line)
            return
        position = next(i for i, b in enumerate(self._blocks) if b is block)
        if self._section_enabled:
            if self._section_mark is block:
                older = self._blocks[position + 1 :]
                self._section_mark = older[0] if older else None
            self.section_cur -= block.size
        del self._blocks[position]
        self.stats.heap_cur -= block.size
        self.stats.count_cur -= 1

    def _rows(self, blocks) -> list[str]:
        return [
            self._log(_ROW % (b.func, b.line, b.addr, b.size)) for b in blocks
        ]

    # -- allocation interface -------------------------------------------

    def malloc(self, size: int, func: str = "", line: int = 0) -> Optional[int]:
        """Allocate ``size`` bytes and record who asked for them."""
        if size < 0:
            raise ValueError("size must not be negative")
        addr = self._allocate(size)
        if addr is None:
            self._error(self._log("[malloc error]--%s %d %d" % (func, line, size)))
            return None
        self._add_block(addr, size, func, line)
        return addr

    def free(self, addr: Optional[int], func: str = "", line: int = 0) -> None:
        """Release ``addr``; unknown addresses are recorded as errors."""
        if addr is None:
            self._log("[free error]--%s %d" % (func, line))
            return
        self._sub_block(addr, func, line)
        self._release(addr)

    def realloc(
        self, addr: Optional[int], size: int, func: str = "", line: int = 0
    ) -> Optional[int]:
        """Replace the block at ``addr`` by one of ``size`` bytes."""
        if size < 0:
            raise ValueError("size must not be negative")
        if addr is not None:
            self._sub_block(addr, func, line)
            self._release(addr)
        new_addr = self._allocate(size)
        if new_addr is None:
            self._error(self._log("[realloc error]--%s %d %d" % (func, line, size)))
            return None
        self._add_block(new_addr, size, func, line)
        return new_addr

    # -- reporting ------------------------------------------------------

    def report(self) -> list[str]:
        """Write usage, bad frees and outstanding blocks; return the lines."""
        lines = [
            self._log(
                "cur: %d, max: %d" % (self.stats.heap_cur, self.stats.heap_max)
            )
        ]
        if self._errors:
            lines.append(self._log("error:"))
            lines.append(self._log(_ERROR_HEADER))
            lines.extend(self._rows(self._errors))
        lines.append(self._log("block:"))
        lines.append(self._log(_BLOCK_HEADER))
        lines.extend(self._rows(self._blocks))
        return lines

    def start_count(self) -> None:
        """Begin measuring the usage of a section of code."""
        self.section_cur = 0
        self.section_max = 0
        self._section_mark = self._blocks[0] if self._blocks else None
        self._section_enabled = True

    def end_count(self) -> tuple[Block, ...]:
        """Stop measuring, report, and return the blocks the section left."""
        self._section_enabled = False
        self._log("sec--cur: %d, max: %d" % (self.section_cur, self.section_max))
        self._log("block:")
        self._log(_BLOCK_HEADER)
        section = []
        for block in self._blocks:
            if block is self._section_mark:
                break
            section.append(block)
        self._rows(section)
        return tuple(section)