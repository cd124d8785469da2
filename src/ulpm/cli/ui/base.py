"""Ports between the menu state machines and the terminal."""

from typing import Protocol, Sequence

from ulpm.cli.ui.keys import KeyEvent


class MenuRenderer(Protocol):
    """Protocol for menu drawing backends.

    The state machines only hand over values; how they end up on screen is
    up to the backend. Tests use a recording implementation.
    """

    @property
    def size(self) -> tuple[int, int]:
        """Terminal (width, height) in cells."""
        ...

    def draw_search_box(
        self,
        query: str,
        prompt: str,
        results: Sequence[str],
        selected: int,
        scroll_offset: int,
        cursor_x: int,
        search_focused: bool,
    ) -> int:
        """Draw the entry menu, return the scroll offset actually used."""
        ...

    def draw_input_box(self, prompt: str, text: str, cursor: int) -> None:
        """Draw the input menu with the caret ``cursor`` characters into text."""
        ...

    def draw_exit_confirm(self, yes_selected: bool) -> None:
        """Draw the exit confirmation with "Yes" or "No" highlighted."""
        ...

    def close(self) -> None:
        """Restore the terminal. Safe to call more than once."""
        ...


class KeyReader(Protocol):
    """Protocol for blocking key input."""

    def read(self) -> KeyEvent:
        """Wait for and return the next key event."""
        ...
