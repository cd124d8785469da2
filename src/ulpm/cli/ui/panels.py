"""Layout math for the menu panels: wrapping, scrolling and row budgets."""

from typing import Sequence

from rich.console import Console

console = Console()

# Rows used above the first result: border, search line, blank, prompt, blank
HEADER_ROWS = 5

# Row where the first result may start (border, search line, prompt)
FIRST_RESULT_ROW = 2

# Columns taken by the border, indentation and scrollbar space around results
RESULT_MARGIN = 11

# Label in front of the entry menu query
SEARCH_LABEL = "Search: "

# Column where the query starts: border plus padding, then the label
SEARCH_TITLE_LEN = 2 + len(SEARCH_LABEL)

# Share of the result area used for item-count scrolling
VISIBLE_RATIO = 0.80


def wrap_text(text: str, max_width: int) -> list[str]:
    """Hard-wrap text into rows of at most ``max_width`` characters.

    Explicit newlines always start a new row; words are split wherever the
    width runs out. An empty string still takes one (empty) row.

    Raises:
        ValueError: If ``max_width`` is less than 1
    """
    if max_width < 1:
        raise ValueError(f"max_width must be at least 1, got {max_width}")

    if not text:
        return [""]

    segments = text.split("\n")
    if text.endswith("\n"):
        # A trailing newline ends the last line, it does not open a new one
        segments.pop()

    rows: list[str] = []
    for line in segments:
        while len(line) > max_width:
            rows.append(line[:max_width])
            line = line[max_width:]
        rows.append(line)
    return rows


def result_width(terminal_width: int) -> int:
    """Wrap width for result rows on a terminal of the given width."""
    return max(1, terminal_width - RESULT_MARGIN)


def max_visible_items(terminal_height: int) -> int:
    """Item-count budget used when stepping through results.

    Items may wrap over several rows, so only part of the result area is
    counted; the budget never drops below one item.
    """
    return max(1, int((terminal_height - 3) // 2 * VISIBLE_RATIO))


def ensure_visible(
    items: Sequence[str],
    selected: int,
    scroll_offset: int,
    width: int,
    height: int,
) -> int:
    """Return a scroll offset that keeps the selected item fully on screen.

    Scrolling up is immediate. Otherwise the wrapped rows of the items from
    the offset down to the selection are added up (one spacing row each,
    after the header rows); when the total would pass the bottom border
    before the selection is reached, the overflowing item becomes the new
    top and the rows are counted again from there.

    Args:
        items: Items being displayed
        selected: Index of the selected item
        scroll_offset: Current index of the top item
        width: Wrap width for each item
        height: Terminal height in rows

    Returns:
        The new scroll offset
    """
    if selected < scroll_offset:
        return selected

    last = min(selected, len(items) - 1)
    offset = scroll_offset
    while True:
        needed = HEADER_ROWS
        for i in range(offset, last + 1):
            needed += len(wrap_text(items[i], width)) + 1
            if needed > height - 1 and i > offset:
                offset = i
                break
        else:
            return offset


def visible_items(
    items: Sequence[str],
    scroll_offset: int,
    width: int,
    height: int,
) -> list[tuple[int, list[str]]]:
    """Items from the scroll offset that fit completely above the bottom border.

    The top item is always included so a selection taller than the screen
    is still shown.

    Returns:
        List of (item_index, wrapped_rows)
    """
    row = FIRST_RESULT_ROW
    shown: list[tuple[int, list[str]]] = []
    for i in range(scroll_offset, len(items)):
        wrapped = wrap_text(items[i], width)
        if shown and row + 1 + len(wrapped) >= height - 1:
            break
        row += 1 + len(wrapped)
        shown.append((i, wrapped))
    return shown


def format_scroll_indicator(hidden_above: int, hidden_below: int) -> tuple[str, str]:
    """Format scroll indicators.

    Returns:
        Tuple of (top_indicator, bottom_indicator)
    """
    top = f"↑ {hidden_above} more" if hidden_above > 0 else ""
    bottom = f"↓ {hidden_below} more" if hidden_below > 0 else ""
    return top, bottom
