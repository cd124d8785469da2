"""Rich backend for drawing the menus."""

from typing import Optional, Sequence

from rich import box
from rich.align import Align
from rich.console import Console
from rich.control import Control
from rich.panel import Panel
from rich.text import Text

from ulpm.cli.ui import panels


class RichMenuRenderer:
    """Draws the menus full-screen on the alternate screen buffer."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or panels.console
        self._active = False
        self._frame: Optional[str] = None

    @property
    def size(self) -> tuple[int, int]:
        return self.console.size.width, self.console.size.height

    def _begin_frame(self, frame: str) -> None:
        """Enter the alternate screen once, then redraw in place."""
        if not self._active:
            self.console.set_alt_screen(True)
            self._active = True
        if frame != self._frame:
            self.console.clear()
            self._frame = frame
        else:
            self.console.control(Control.home())

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
        width, height = self.size
        wrap_width = panels.result_width(width)

        shown: list[tuple[int, list[str]]] = []
        if results:
            scroll_offset = panels.ensure_visible(
                results, selected, scroll_offset, wrap_width, height
            )
            shown = panels.visible_items(results, scroll_offset, wrap_width, height)

        body = Text()
        body.append(panels.SEARCH_LABEL + query, style="bold")
        body.append("\n\n")
        body.append(f"  {prompt}", style="bold")
        for n, (index, rows) in enumerate(shown):
            if n:
                body.append("\n")
            style = "reverse" if index == selected and not search_focused else ""
            for row in rows:
                body.append("\n    ")
                body.append(row, style=style)

        hidden_below = len(results) - (shown[-1][0] + 1) if shown else 0
        top, bottom = panels.format_scroll_indicator(scroll_offset, hidden_below)
        subtitle = " ".join(part for part in (top, bottom) if part) or None

        self._begin_frame("search")
        self.console.print(
            Panel(
                body,
                box=box.SQUARE,
                width=width,
                height=max(3, height - 1),
                subtitle=subtitle,
                subtitle_align="right",
            )
        )
        if search_focused:
            self.console.control(Control.move_to(cursor_x, 1))
        self.console.show_cursor(search_focused)
        return scroll_offset

    def draw_input_box(self, prompt: str, text: str, cursor: int) -> None:
        width, _ = self.size
        body = Text()
        body.append(prompt, style="bold")
        body.append(" " + text)

        self._begin_frame("input")
        self.console.print(Panel(body, box=box.SQUARE, width=width))
        # Border and padding, then the prompt and one space
        self.console.control(Control.move_to(2 + len(prompt) + 1 + cursor, 1))
        self.console.show_cursor(True)

    def draw_exit_confirm(self, yes_selected: bool) -> None:
        _, height = self.size
        body = Text(justify="center")
        body.append("Do you really want to exit?\n", style="bold")
        body.append("All changes will be lost.\n\n", style="dim")
        body.append("  Yes  ", style="reverse bold red" if yes_selected else "")
        body.append("    ")
        body.append("  No  ", style="" if yes_selected else "reverse bold")

        self._begin_frame("confirm")
        self.console.print(
            Align.center(
                Panel(body, box=box.SQUARE, width=40, border_style="yellow"),
                vertical="middle",
                height=max(5, height - 1),
            )
        )
        self.console.show_cursor(False)

    def close(self) -> None:
        if not self._active:
            return
        self.console.show_cursor(True)
        self.console.set_alt_screen(False)
        self._active = False
        self._frame = None
