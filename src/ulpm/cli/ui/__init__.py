"""UI components for interactive CLI."""

from ulpm.cli.ui.base import KeyReader, MenuRenderer
from ulpm.cli.ui.keys import Key, KeyEvent, TerminalKeyReader
from ulpm.cli.ui.menu import (
    EntryMenu,
    Focus,
    InputMenu,
    confirm,
    filter_entries,
    run_entry_menu,
    run_input_menu,
)
from ulpm.cli.ui.panels import console, wrap_text
from ulpm.cli.ui.render import RichMenuRenderer

__all__ = [
    "EntryMenu",
    "Focus",
    "InputMenu",
    "Key",
    "KeyEvent",
    "KeyReader",
    "MenuRenderer",
    "TerminalKeyReader",
    "RichMenuRenderer",
    "confirm",
    "console",
    "filter_entries",
    "run_entry_menu",
    "run_input_menu",
    "wrap_text",
]
