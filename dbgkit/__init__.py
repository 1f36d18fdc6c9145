"""Debug output devices, timers, heap tracking, a command console and menus."""

__version__ = "0.1.0"