"""Scripted key input and a recording renderer for driving menus in tests.

The renderer applies the same visibility rule as the rich backend, so the
scroll offsets it hands back match what a real terminal would show.
"""

from dataclasses import dataclass, field
from typing import Any, Sequence, Union

from ulpm.cli.ui.keys import Key, KeyEvent
from ulpm.cli.ui.panels import ensure_visible, result_width


@dataclass
class RenderCall:
    """Record of one draw request."""

    kind: str  # "search", "input" or "confirm"
    args: dict[str, Any] = field(default_factory=dict)


class RecordingRenderer:
    """MenuRenderer that records draw calls instead of touching a terminal."""

    def __init__(self, width: int = 80, height: int = 24) -> None:
        self.width = width
        self.height = height
        self.calls: list[RenderCall] = []
        self.close_count = 0

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

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
        if results:
            scroll_offset = ensure_visible(
                results, selected, scroll_offset, result_width(self.width), self.height
            )
        self.calls.append(
            RenderCall(
                "search",
                {
                    "query": query,
                    "prompt": prompt,
                    "results": list(results),
                    "selected": selected,
                    "scroll_offset": scroll_offset,
                    "cursor_x": cursor_x,
                    "search_focused": search_focused,
                },
            )
        )
        return scroll_offset

    def draw_input_box(self, prompt: str, text: str, cursor: int) -> None:
        self.calls.append(
            RenderCall("input", {"prompt": prompt, "text": text, "cursor": cursor})
        )

    def draw_exit_confirm(self, yes_selected: bool) -> None:
        self.calls.append(RenderCall("confirm", {"yes_selected": yes_selected}))

    def close(self) -> None:
        self.close_count += 1

    @property
    def last(self) -> RenderCall:
        return self.calls[-1]


KeyInput = Union[str, Key, KeyEvent]


def key_events(*items: KeyInput) -> list[KeyEvent]:
    """Build key events; strings are typed one printable character at a time."""
    events: list[KeyEvent] = []
    for item in items:
        if isinstance(item, KeyEvent):
            events.append(item)
        elif isinstance(item, Key):
            events.append(KeyEvent(item))
        else:
            events.extend(KeyEvent.printable(ch) for ch in item)
    return events


class ScriptedKeys:
    """KeyReader replaying a fixed sequence of key presses."""

    def __init__(self, *items: KeyInput) -> None:
        self.events = key_events(*items)
        self.reads = 0

    def read(self) -> KeyEvent:
        if self.reads >= len(self.events):
            raise AssertionError("menu asked for more keys than were scripted")
        event = self.events[self.reads]
        self.reads += 1
        return event
