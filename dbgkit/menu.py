"""Numbered menus driven from a console device or a keypad display."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional, Union

from dbgkit.dispd import VK_CANCEL, VK_STAR, Align, Screen
from dbgkit.printd import DebugDevice

NUM_MAX = 11
KEY_UP = "u"
KEY_EXIT = "e"

Action = Callable[[int], object]


class MenuError(Exception):
    """Raised when a menu cannot handle the chosen entry or key."""


@dataclass
class MenuItem:
    """One menu entry: either runs ``action`` or opens ``submenu``."""

    text: str
    action: Optional[Action] = None
    submenu: Optional["Menu"] = None

    def __post_init__(self) -> None:
        if self.action is not None and self.submenu is not None:
            raise ValueError("a menu item takes an action or a submenu, not both")


@dataclass
class Menu:
    """A titled list of items; ``parent`` is the menu one level up.

    Submenus of the items get this menu as parent unless they already have one.
    """

    title: Optional[str]
    items: list = field(default_factory=list)
    parent: Optional["Menu"] = None

    def __post_init__(self) -> None:
        self.items = list(self.items)
        for item in self.items:
            if item.submenu is not None and item.submenu.parent is None:
                item.submenu.parent = self


def _select(current: Menu, index: int, key: int) -> Menu:
    """Open or run the item at ``index``; return the menu now shown."""
    if not 0 <= index < len(current.items):
        return current
    item = current.items[index]
    if item.submenu is not None:
        return item.submenu
    if item.action is not None:
        item.action(key)
        return current
    raise MenuError(f"menu item {item.text!r} has nothing to do")


def _go_up(current: Menu, root: Menu) -> Menu:
    # The root menu itself is never re-entered by going up.
    if current.parent is not None and current.parent is not root:
        return current.parent
    return current


def show_menu(device: DebugDevice, menu: Menu) -> list[str]:
    """Write the title and numbered items to ``device``; return the lines."""
    lines = []
    device.feed(1)
    if menu.title is not None:
        lines.append("\t%s" % menu.title)
    lines.extend("%d.%s" % (number, item.text) for number, item in enumerate(menu.items, 1))
    for line in lines:
        device.write(line)
        device.feed(1)
    device.feed(1)
    return lines


def _read_char(device: DebugDevice) -> str:
    data = device.read(1)
    if isinstance(data, (bytes, bytearray)):
        data = bytes(data).decode("latin-1")
    if not data or len(data) != 1:
        raise EOFError("menu input ended")
    return data


def read_menu_key(device: DebugDevice) -> Union[int, str]:
    """Prompt and read a choice.

    Returns the typed number (0 when none was typed) after Enter, or the
    function key ``"u"`` or ``"e"``.  Raises :class:`EOFError` when the
    input ends.
    """
    digits: list[str] = []
    device.write("please input: ")
    while True:
        char = _read_char(device)
        if "0" <= char <= "9":
            if len(digits) < NUM_MAX:
                digits.append(char)
            device.write(char)
        elif char == "\b":
            if digits:
                digits.pop()
            device.write("\b \b")
        elif char in ("\r", "\n"):
            result: Union[int, str] = int("".join(digits)) if digits else 0
            break
        elif char in (KEY_UP, KEY_EXIT):
            result = char
            break
    device.feed(1)
    return result


def popup_menu(device: DebugDevice, menu: Menu) -> None:
    """Run ``menu`` on a console device until ``e`` is pressed.

    A number opens or runs the matching item, ``u`` goes up one level.
    Raises :class:`EOFError` when the input ends.
    """
    current = menu
    while True:
        show_menu(device, current)
        key = read_menu_key(device)
        if isinstance(key, int):
            index = key - 1 if key > 0 else len(current.items)
            current = _select(current, index, key)
        elif key == KEY_UP:
            current = _go_up(current, menu)
        else:
            return


def show_display_menu(screen: Screen, menu: Menu) -> None:
    """Show the title centred on line 0 and the items below it."""
    line = 0
    if menu.title is not None:
        screen.text_out(0, menu.title, Align.MID)
        line = 1
    for number, item in enumerate(menu.items, 1):
        screen.text_out(line, "%d.%s" % (number, item.text))
        line += 1


def popup_display_menu(
    screen: Screen, menu: Menu, read_key: Callable[[], int]
) -> None:
    """Run ``menu`` on a display with keys from ``read_key``.

    Digits 1-9 choose items 1-9 and 0 chooses item 10; ``*`` goes up and
    Cancel leaves.  Any other key raises :class:`MenuError`.
    """
    current = menu
    while True:
        show_display_menu(screen, current)
        key = read_key()
        if ord("0") <= key <= ord("9"):
            index = 9 if key == ord("0") else key - ord("1")
            current = _select(current, index, key)
        elif key == VK_STAR:
            current = _go_up(current, menu)
        elif key == VK_CANCEL:
            return
        else:
            raise MenuError(f"unexpected key 0x{key:x}")