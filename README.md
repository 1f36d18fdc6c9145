# dbgkit

A small toolkit for debug output in applications that have no debugger to
hand: a text console, a log file, a small line display or any stream.

## What it holds

- `dbgkit.printd` — `DebugDevice`, the base for every output device, with
  formatted printing (`print`, `printf`), raw output (`printa`), hex dumps
  in units of 1, 2 or 4 bytes (`print_hex`, `printh`), line feeds (`feed`)
  and an optional header holding the time, file, function and line
  (`print_info`), switched on by the `time_flag`, `file_flag`, `func_flag`
  and `line_flag` options. `printf`, `printa` and `printh` take the file,
  function and line from their caller. Operations a device does not support
  raise `DeviceError`.
- `dbgkit.wind` — `StreamDevice`, which writes to and reads from text
  streams, standard output and input by default.
- `dbgkit.filed` — `FileDevice`, a log file with a size limit. A write that
  would go past the limit empties the file first. `read(size, offset)` reads
  back from a given offset and `clear()` empties the file.
- `dbgkit.dispd` — `DisplayDevice`, which scrolls text across a `Screen` of
  a fixed number of lines and columns, worked out from the view and font
  sizes. `Screen` is abstract; `MemoryScreen` keeps the shown lines in
  memory. Text alignment is given with `Align`. Keypad key codes such as
  `VK_STAR` and `VK_CANCEL` are defined here.
- `dbgkit.upload` — `upload(device, stream, chunk_size)` copies everything a
  readable device holds to a byte stream, chunk by chunk, and returns the
  number of bytes sent.
- `dbgkit.ramd` — `RamLog`, two alternating in-memory buffers; `read(0)`
  gives the previous buffer and any other index the current one.
- `dbgkit.tickd` — `TickTimer` for measuring milliseconds between points in
  code and printing them to a device (`start`, `elapsed`, `step`, `end`),
  and `tick_count()` for a 32-bit millisecond clock.
- `dbgkit.heap` — `HeapTracker`, which records every `malloc`, `free` and
  `realloc` with its function and line, keeps current and peak usage in
  `HeapStats`, notes frees of unknown addresses, and counts usage over a
  section between `start_count()` and `end_count()`. `report()` writes and
  returns a summary. Errors go to an `on_error` handler or raise
  `HeapError`.
- `dbgkit.console` — `CommandConsole`, a line-editing command console with
  the built-in commands `help`, `echo` and `exit`, commands split with `;`,
  and a repeat of the last command on an empty line. `parse_line` and
  `split_commands` are available on their own.
- `dbgkit.menu` — numbered menus built from `Menu` and `MenuItem`, shown
  either on a text device (`show_menu`, `popup_menu`) or on a display
  screen (`show_display_menu`, `popup_display_menu`). Bad entries or keys
  raise `MenuError`.
- `dbgkit.demo` — a sample smart-card test menu (`build_menu`) and the
  `main` function behind the `dbgkit-demo` command.

## Example

```python
import sys

from dbgkit.wind import StreamDevice

dev = StreamDevice(sys.stdout, sys.stdin)
dev.printf(1, "value: %d", 42)
dev.printh(1, "data", b"\x01\x02\x03", 1)
```

## Demo

The package installs a command that shows a sample menu on the terminal:

```
dbgkit-demo
```

Type an item number and press Enter to run it, `u` to go up a level, and
`e` to leave. The command also ends when its input ends.

## What it does not do

- There is no serial-port device; output goes to streams, files, screens
  or memory.
- There is no driver for a physical display. `DisplayDevice` draws through
  a `Screen`, and the package only provides `MemoryScreen`; a real screen
  needs a `Screen` subclass of your own.
- `HeapTracker` does not watch Python's memory. It records the addresses
  its allocator hands out, by default made-up ones, and the calls made to
  it.

## Tests

```
pip install -e .[test]
pytest
```