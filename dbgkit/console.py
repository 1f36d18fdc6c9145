"""Line-editing command console driven through a debug device."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Optional

from dbgkit.printd import DebugDevice

CMD_BUF_SIZE = 256
MAX_ARGS = 16
FLAG_REPEAT = 0x01

ERASE_SEQ = "\b \b"
TAB_SEQ = " " * 8

_CTRL_C = "\x03"
_CTRL_U = "\x15"
_CTRL_W = "\x17"
_BACKSPACES = ("\x08", "\x7f")

_WORD_SPLIT = re.compile(r"[ \t]+")

Handler = Callable[["CommandConsole", int, list], Optional[bool]]


def parse_line(line: str) -> list[str]:
    """Split ``line`` on spaces and tabs into at most ``MAX_ARGS`` words."""
    return [word for word in _WORD_SPLIT.split(line) if word][:MAX_ARGS]


def split_commands(line: str) -> list[str]:
    """Split ``line`` into commands separated by ``;``.

    A ``;`` inside single quotes, escaped as ``\\;``, or first in a command
    does not separate.  Quotes and backslashes are kept in the commands.
    """
    commands = []
    start, end = 0, len(line)
    while start < end:
        in_quotes = False
        sep = start
        while sep < end:
            char = line[sep]
            prev = line[sep - 1] if sep > start else ""
            if char == "'" and prev != "\\":
                in_quotes = not in_quotes
            if not in_quotes and char == ";" and sep != start and prev != "\\":
                break
            sep += 1
        commands.append(line[start:sep])
        start = sep + 1 if sep < end else end
    return commands


@dataclass
class Command:
    """A registered console command."""

    name: str
    handler: Optional[Handler]
    max_args: int = MAX_ARGS
    repeatable: bool = True
    help: Optional[str] = None
    enabled: bool = False


class CommandConsole:
    """Reads command lines from a device and runs registered commands.

    A handler is called as ``handler(console, flag, argv)``; returning
    ``False`` marks the command as failed.  An empty input line repeats the
    last command when it was repeatable, with ``FLAG_REPEAT`` in ``flag``.
    """

    def __init__(self, device: DebugDevice) -> None:
        self.device = device
        self.echo = False
        self.is_open = False
        self.last = ""
        self._buffer: list[str] = []
        self._commands: list[Command] = []  # newest first
        self.register("help", _help_entry, MAX_ARGS, True, "print help\r\n")
        self.register(
            "echo", _echo_entry, MAX_ARGS, True, "echo on/off, echo off\r\n"
        )
        self.register("exit", _exit_entry, MAX_ARGS, True, "exit cmd func\r\n")

    # -- registry -------------------------------------------------------

    @property
    def commands(self) -> tuple[Command, ...]:
        """Registered commands, newest first."""
        return tuple(self._commands)

    def find(self, name: str) -> Optional[Command]:
        """The newest command called ``name``, if any."""
        return next((cmd for cmd in self._commands if cmd.name == name), None)

    def register(
        self,
        name: str,
        handler: Optional[Handler],
        max_args: int = MAX_ARGS,
        repeatable: bool = True,
        help: Optional[str] = None,
    ) -> Command:
        """Add a command; a newer one of the same name hides the older."""
        command = Command(name, handler, max_args, bool(repeatable), help)
        self._commands.insert(0, command)
        return command

    def unregister(self, name: str) -> None:
        """Remove the newest command called ``name``."""
        command = self.find(name)
        if command is None:
            raise KeyError(name)
        self._commands.remove(command)

    def set_echo(self, on: bool) -> None:
        """Switch echoing of typed input on or off."""
        self.echo = bool(on)

    # -- output helpers -------------------------------------------------

    def _print(self, text: str) -> None:
        self.device.write(text)

    def _echo(self, text: str) -> None:
        if self.echo:
            self.device.write(text)

    def _read_char(self) -> Optional[str]:
        data = self.device.read(1)
        if isinstance(data, (bytes, bytearray)):
            data = bytes(data).decode("latin-1")
        if not data or len(data) != 1:
            return None
        return data

    def _delete_char(self, col: int) -> int:
        if not self._buffer:
            return col
        char = self._buffer.pop()
        if char == "\t":
            # retype the whole line to get the tab stops right
            while col > 0:
                self._print(ERASE_SEQ)
                col -= 1
            for typed in self._buffer:
                if typed == "\t":
                    self._print(TAB_SEQ[col & 7:])
                    col += 8 - (col & 7)
                else:
                    col += 1
                    self._print(typed)
        else:
            self._print(ERASE_SEQ)
            col -= 1
        return col

    # -- input ----------------------------------------------------------

    def read_line(self) -> Optional[str]:
        """Read one edited line.

        Returns the line without its end, or ``None`` when ``^C`` discards
        it.  Raises :class:`EOFError` when the device has no more input;
        text typed so far is kept for the next call.
        """
        col = 0
        for typed in self._buffer:
            col += 8 - (col & 7) if typed == "\t" else 1

        while True:
            char = self._read_char()
            if char is None:
                raise EOFError("console input ended")
            if char in ("\r", "\n"):
                line = "".join(self._buffer)
                self._buffer.clear()
                self._echo("\r\n")
                return line
            if char == "\0":
                continue
            if char == _CTRL_C:
                self._buffer.clear()
                return None
            if char == _CTRL_U:
                while col > 0:
                    self._echo(ERASE_SEQ)
                    col -= 1
                self._buffer.clear()
                continue
            if char == _CTRL_W:
                # erases back to the start of the line
                col = self._delete_char(col)
                while self._buffer:
                    col = self._delete_char(col)
                continue
            if char in _BACKSPACES:
                col = self._delete_char(col)
                continue
            if len(self._buffer) < CMD_BUF_SIZE - 2:
                if char == "\t":
                    self._echo(TAB_SEQ[col & 7:])
                    col += 8 - (col & 7)
                else:
                    col += 1
                    self._echo(char)
                self._buffer.append(char)
            else:
                self._echo("\a")

    # -- execution ------------------------------------------------------

    def run(self, line: str, flag: int = 0) -> bool:
        """Run every command in ``line``.

        Returns ``True`` when all of them succeeded and all are repeatable.
        """
        if not line:
            return False
        if len(line) >= CMD_BUF_SIZE:
            self._print("## Command too long!\r\n")
            return False

        failed = False
        repeatable = True
        for token in split_commands(line):
            argv = parse_line(token)
            if not argv:
                failed = True
                continue
            command = self.find(argv[0])
            if command is None:
                self._print(
                    "## Unknown command '%s' - try 'help': -1\r\n" % argv[0]
                )
                failed = True
                continue
            if len(argv) > command.max_args:
                self._print("## The Maxargs is %d!\r\n" % command.max_args)
                failed = True
                continue
            if command.handler is not None:
                if command.handler(self, flag, argv) is False:
                    failed = True
                self._echo("\r\n")
            repeatable = repeatable and command.repeatable
        return not failed and repeatable

    def process(self) -> None:
        """Read one line and run it, or repeat the last command."""
        flag = 0
        line = self.read_line()
        if line:
            self.last = line
        elif line == "":
            flag |= FLAG_REPEAT
        if line is not None:
            if not self.run(self.last, flag):
                self.last = ""

    def loop(self) -> None:
        """Process lines until ``exit`` is run or the input ends."""
        self.is_open = True
        try:
            while self.is_open:
                self.process()
        except EOFError:
            self.is_open = False


def _help_entry(console: CommandConsole, flag: int, argv: list) -> bool:
    if len(argv) == 1:
        for command in console.commands:
            console._print("%s -- " % command.name)
            console._print("%s\r\n" % (command.help or ""))
        return False
    ok = True
    for name in argv[1:]:
        command = console.find(name)
        if command is not None:
            if command.help is not None:
                console._print("%s \r\n" % command.help)
        else:
            console._print(
                "Unknown command '%s' - try 'help' without arguments for list"
                " of all known commands\r\n" % name
            )
            ok = False
    return ok


def _echo_entry(console: CommandConsole, flag: int, argv: list) -> bool:
    if len(argv) != 2:
        console._print("this cmd must have 2 argc\r\n")
        return False
    if argv[1] == "on":
        console.set_echo(True)
        console._print("echo on: ok!\r\n")
    elif argv[1] == "off":
        console.set_echo(False)
        console._print("echo off: ok!\r\n")
    else:
        console._print("not support param: %s\r\n" % argv[1])
    return True


def _exit_entry(console: CommandConsole, flag: int, argv: list) -> bool:
    if len(argv) != 1:
        console._print("this cmd have not argc\r\n")
        return False
    console.is_open = False
    return True