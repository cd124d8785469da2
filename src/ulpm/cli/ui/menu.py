"""Interactive menus: prefix-filtered entry selection and single-line input.

Both menus run a blocking read-key / update / redraw loop and hand every
drawing decision to a ``MenuRenderer``, so they can be driven without a
terminal by feeding key events directly.
"""

import sys
from enum import Enum
from typing import Optional, Sequence

from simple_term_menu import TerminalMenu

from ulpm.cli.ui.base import KeyReader, MenuRenderer
from ulpm.cli.ui.keys import Key, KeyEvent, TerminalKeyReader
from ulpm.cli.ui.panels import SEARCH_TITLE_LEN, max_visible_items
from ulpm.cli.ui.render import RichMenuRenderer
from ulpm.utils.debug import Output

BAIL_OUT_MESSAGE = "Bailing out. All changes are lost"


class Focus(Enum):
    """Region of the entry menu receiving navigation keys."""

    SEARCH = "search"
    RESULTS = "results"


def filter_entries(candidates: Sequence[str], query: str) -> list[str]:
    """Return the candidates starting with ``query``, in their original order.

    Matching is a literal, case-sensitive prefix test; an empty query keeps
    every candidate.
    """
    return [candidate for candidate in candidates if candidate.startswith(query)]


class _Menu:
    """Shared plumbing: collaborators and the exit confirmation overlay."""

    def __init__(
        self,
        renderer: Optional[MenuRenderer] = None,
        keys: Optional[KeyReader] = None,
        output: Optional[Output] = None,
    ) -> None:
        self.renderer = renderer or RichMenuRenderer()
        self.keys = keys or TerminalKeyReader()
        self.output = output or Output()
        self.exit_pending = False
        self.exit_selected = False

    def _open_exit_confirm(self) -> None:
        self.exit_pending = True
        self.exit_selected = False

    def _handle_exit_key(self, event: KeyEvent) -> None:
        """Keys while the exit confirmation is shown ("No" is the default)."""
        if event.key in (Key.UP, Key.LEFT) or event.is_char("k"):
            self.exit_selected = False
        elif event.key in (Key.DOWN, Key.RIGHT) or event.is_char("j"):
            self.exit_selected = True
        elif event.key is Key.ENTER and self.exit_selected:
            self._bail_out()
        elif event.key is Key.ESCAPE or event.is_char("q") or not self.exit_selected:
            self.exit_pending = False

    def _bail_out(self) -> None:
        """Abandon everything entered so far and end the process."""
        self.renderer.close()
        self.output.warn(BAIL_OUT_MESSAGE)
        sys.exit(1)


class EntryMenu(_Menu):
    """Select one entry from a list narrowed by a prefix search.

    The search field and the result list take turns receiving keys
    (``Tab`` switches). Escape asks whether to abandon the whole run.
    """

    def __init__(
        self,
        renderer: Optional[MenuRenderer] = None,
        keys: Optional[KeyReader] = None,
        output: Optional[Output] = None,
    ) -> None:
        super().__init__(renderer, keys, output)
        self.prompt = ""
        self.entries: list[str] = []
        self.query = ""
        self.results: list[str] = []
        self.selected = 0
        self.scroll_offset = 0
        self.cursor_x = SEARCH_TITLE_LEN
        self.focus = Focus.SEARCH
        self.max_visible = 1

    def run(self, prompt: str, options: Sequence[str], default_value: str = "") -> str:
        """Show the menu until an entry is chosen.

        Args:
            prompt: Question shown above the results
            options: Candidate entries
            default_value: Initial search text, typically the current value

        Returns:
            The chosen entry, or "" when there is nothing to choose from
        """
        if not options:
            return ""

        self.start(prompt, options, default_value)
        self.output.debug("Entry menu opened", prompt=prompt, entries=len(options))
        try:
            self._draw()
            while True:
                choice = self.handle_key(self.keys.read())
                if choice is not None:
                    return choice
                self._draw()
        finally:
            self.renderer.close()

    def start(self, prompt: str, options: Sequence[str], default_value: str = "") -> None:
        """Reset all state for a new run.

        A default that still matches something starts on the result list,
        so an existing choice can be confirmed with a single Enter.
        """
        self.prompt = prompt
        self.entries = list(options)
        self.query = default_value
        self.results = filter_entries(self.entries, self.query)
        self.selected = 0
        self.scroll_offset = 0
        self.cursor_x = SEARCH_TITLE_LEN + len(self.query)
        self.focus = Focus.RESULTS if default_value and self.results else Focus.SEARCH
        self.max_visible = max_visible_items(self.renderer.size[1])
        self.exit_pending = False
        self.exit_selected = False

    @property
    def displayed(self) -> list[str]:
        """Entries currently listed under the search field."""
        return self.results if self.query else self.entries

    def handle_key(self, event: KeyEvent) -> Optional[str]:
        """Apply one key press. Returns the chosen entry once Enter selects one."""
        if self.exit_pending:
            self._handle_exit_key(event)
        elif event.key is Key.ESCAPE:
            self._open_exit_confirm()
        elif event.key is Key.TAB:
            self._toggle_focus()
        elif self.focus is Focus.SEARCH:
            self._handle_search_key(event)
        else:
            return self._handle_results_key(event)
        return None

    def _toggle_focus(self) -> None:
        self.focus = Focus.RESULTS if self.focus is Focus.SEARCH else Focus.SEARCH

    def _handle_search_key(self, event: KeyEvent) -> None:
        pos = self.cursor_x - SEARCH_TITLE_LEN

        if event.key is Key.CHAR:
            self._set_query(self.query[:pos] + event.char + self.query[pos:])
            self.cursor_x += 1
        elif event.key is Key.BACKSPACE:
            if pos > 0:
                self.cursor_x -= 1
                self._set_query(self.query[: pos - 1] + self.query[pos:])
        elif event.key is Key.DELETE:
            if pos < len(self.query):
                self._set_query(self.query[:pos] + self.query[pos + 1 :])
        elif event.key is Key.LEFT:
            if pos > 0:
                self.cursor_x -= 1
        elif event.key is Key.RIGHT:
            if pos < len(self.query):
                self.cursor_x += 1
        elif event.key is Key.HOME:
            self.cursor_x = SEARCH_TITLE_LEN
        elif event.key is Key.END:
            self.cursor_x = SEARCH_TITLE_LEN + len(self.query)
        elif event.key in (Key.DOWN, Key.ENTER):
            self.focus = Focus.RESULTS

    def _set_query(self, query: str) -> None:
        """Every query edit re-filters and restarts browsing from the top."""
        self.query = query
        self.results = filter_entries(self.entries, query)
        self.selected = 0
        self.scroll_offset = 0

    def _handle_results_key(self, event: KeyEvent) -> Optional[str]:
        if event.key in (Key.DOWN, Key.RIGHT) or event.is_char("j"):
            if self.selected < len(self.results) - 1:
                self.selected += 1
                if self.selected >= self.scroll_offset + self.max_visible:
                    self.scroll_offset += 1
        elif event.key in (Key.UP, Key.LEFT) or event.is_char("k"):
            if self.selected == 0:
                self.focus = Focus.SEARCH
            else:
                self.selected -= 1
                if self.selected < self.scroll_offset:
                    self.scroll_offset -= 1
        elif event.key is Key.ENTER and self.results:
            choice = self.results[self.selected]
            self.output.debug("Entry selected", prompt=self.prompt, choice=choice)
            return choice
        return None

    def _draw(self) -> None:
        if self.exit_pending:
            self.renderer.draw_exit_confirm(self.exit_selected)
            return
        self.scroll_offset = self.renderer.draw_search_box(
            self.query,
            self.prompt,
            self.displayed,
            self.selected,
            self.scroll_offset,
            self.cursor_x,
            self.focus is Focus.SEARCH,
        )


class InputMenu(_Menu):
    """Edit a single line of text, starting from a default value."""

    def __init__(
        self,
        renderer: Optional[MenuRenderer] = None,
        keys: Optional[KeyReader] = None,
        output: Optional[Output] = None,
    ) -> None:
        super().__init__(renderer, keys, output)
        self.prompt = ""
        self.text = ""
        self.field_start = 1
        self.cursor_x = 1

    def run(self, prompt: str, default_value: str = "") -> str:
        """Show the input box until Enter is pressed, return the text."""
        self.start(prompt, default_value)
        try:
            self._draw()
            while True:
                text = self.handle_key(self.keys.read())
                if text is not None:
                    self.output.debug("Input entered", prompt=prompt, text=text)
                    return text
                self._draw()
        finally:
            self.renderer.close()

    def start(self, prompt: str, default_value: str = "") -> None:
        self.prompt = prompt
        self.text = default_value
        self.field_start = len(prompt) + 1
        self.cursor_x = self.field_start + len(self.text)
        self.exit_pending = False
        self.exit_selected = False

    @property
    def cursor(self) -> int:
        """Caret position within the text."""
        return self.cursor_x - self.field_start

    def handle_key(self, event: KeyEvent) -> Optional[str]:
        """Apply one key press. Returns the text once Enter submits it."""
        if self.exit_pending:
            self._handle_exit_key(event)
            return None

        pos = self.cursor
        if event.key is Key.ESCAPE:
            self._open_exit_confirm()
        elif event.key is Key.ENTER:
            return self.text
        elif event.key is Key.CHAR:
            self.text = self.text[:pos] + event.char + self.text[pos:]
            self.cursor_x += 1
        elif event.key is Key.BACKSPACE:
            if pos > 0:
                self.text = self.text[: pos - 1] + self.text[pos:]
                self.cursor_x -= 1
        elif event.key is Key.DELETE:
            if pos < len(self.text):
                self.text = self.text[:pos] + self.text[pos + 1 :]
        elif event.key is Key.LEFT:
            if pos > 0:
                self.cursor_x -= 1
        elif event.key is Key.RIGHT:
            if pos < len(self.text):
                self.cursor_x += 1
        elif event.key is Key.HOME:
            self.cursor_x = self.field_start
        elif event.key is Key.END:
            self.cursor_x = self.field_start + len(self.text)
        return None

    def _draw(self) -> None:
        if self.exit_pending:
            self.renderer.draw_exit_confirm(self.exit_selected)
        else:
            self.renderer.draw_input_box(self.prompt, self.text, self.cursor)


def run_entry_menu(
    prompt: str,
    options: Sequence[str],
    default: str = "",
    *,
    renderer: Optional[MenuRenderer] = None,
    keys: Optional[KeyReader] = None,
    output: Optional[Output] = None,
) -> str:
    """Let the user pick one of ``options``; "" if there are none."""
    return EntryMenu(renderer, keys, output).run(prompt, options, default)


def run_input_menu(
    prompt: str,
    default: str = "",
    *,
    renderer: Optional[MenuRenderer] = None,
    keys: Optional[KeyReader] = None,
    output: Optional[Output] = None,
) -> str:
    """Let the user edit a line of text starting from ``default``."""
    return InputMenu(renderer, keys, output).run(prompt, default)


def confirm(message: str, default: bool = False) -> bool:
    """Show yes/no confirmation.

    Args:
        message: Question to ask
        default: Default selection (False = No)

    Returns:
        True for yes, False for no/cancel
    """
    menu = TerminalMenu(
        ["Yes", "No"],
        title=message,
        cursor_index=0 if default else 1,
        menu_cursor="> ",
        menu_cursor_style=("fg_cyan", "bold"),
        menu_highlight_style=("fg_cyan", "bold"),
        clear_screen=False,
    )
    return menu.show() == 0
