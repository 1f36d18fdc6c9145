"""Demonstration smart-card test menu on the terminal."""

from __future__ import annotations

import argparse

from dbgkit.menu import Menu, MenuItem, popup_menu
from dbgkit.printd import DebugDevice
from dbgkit.wind import StreamDevice

MENU_TITLE = "SmartCard接口"


def build_menu(device: DebugDevice) -> Menu:
    """The smart-card menu; each entry reports its name on ``device``."""

    def sc_open(key: int) -> None:
        device.printf(1, "open")

    def sc_check_in(key: int) -> None:
        device.printf(1, "check in")

    def sc_reset(key: int) -> None:
        device.printf(1, "reset")

    def sc_comm(key: int) -> None:
        device.printf(1, "comm")

    def sc_close(key: int) -> None:
        device.printf(1, "close")

    return Menu(
        MENU_TITLE,
        [
            MenuItem("open接口", sc_open),
            MenuItem("CheckIn接口", sc_check_in),
            MenuItem("Reset接口", sc_reset),
            MenuItem("Comm接口", sc_comm),
            MenuItem("Close接口", sc_close),
        ],
    )


def main(argv=None) -> int:
    """Run the demo menu on standard input and output."""
    parser = argparse.ArgumentParser(
        prog="dbgkit-demo", description="Smart-card test menu."
    )
    parser.parse_args(argv)
    device = StreamDevice()
    try:
        popup_menu(device, build_menu(device))
    except EOFError:
        pass
    return 0


if __name__ == "__main__":
    raise SystemExit(main())