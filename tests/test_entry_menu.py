"""Tests for the prefix-filtered entry menu."""

import pytest

from ulpm.cli.ui.keys import Key, KeyEvent
from ulpm.cli.ui.menu import BAIL_OUT_MESSAGE, EntryMenu, Focus, run_entry_menu
from ulpm.cli.ui.panels import SEARCH_TITLE_LEN

from tests.helpers.fake_terminal import RecordingRenderer, ScriptedKeys


def make_menu(*keys, height=24):
    renderer = RecordingRenderer(height=height)
    return EntryMenu(renderer, ScriptedKeys(*keys)), renderer


def press(menu, *keys):
    """Feed keys straight into the state machine, return the last result."""
    result = None
    for item in keys:
        event = KeyEvent(item) if isinstance(item, Key) else KeyEvent.printable(item)
        result = menu.handle_key(event)
    return result


class TestScenarios:
    """End-to-end runs with scripted keys."""

    def test_typing_filters_then_down_and_enter_selects(self):
        menu, renderer = make_menu("n", "p", Key.DOWN, Key.ENTER)

        choice = menu.run("pick", ["npm", "yarn", "node"], "")

        assert choice == "npm"
        after_n, after_np = renderer.calls[1], renderer.calls[2]
        assert after_n.args["results"] == ["npm", "node"]
        assert after_np.args["results"] == ["npm"]

    def test_matching_default_starts_on_results(self):
        menu, renderer = make_menu(Key.ENTER)

        choice = menu.run("pick", ["npm", "yarn"], "yarn")

        assert choice == "yarn"
        first = renderer.calls[0].args
        assert first["results"] == ["yarn"]
        assert first["selected"] == 0
        assert first["search_focused"] is False
        assert first["cursor_x"] == SEARCH_TITLE_LEN + len("yarn")

    def test_empty_options_return_without_reading_keys(self):
        keys = ScriptedKeys()
        renderer = RecordingRenderer()

        assert EntryMenu(renderer, keys).run("pick", [], "") == ""
        assert keys.reads == 0
        assert renderer.calls == []

    def test_up_on_first_result_returns_to_search(self):
        menu, _ = make_menu()
        menu.start("pick", ["npm", "yarn"], "npm")
        assert menu.focus is Focus.RESULTS

        press(menu, Key.UP)

        assert menu.focus is Focus.SEARCH
        assert menu.selected == 0

    def test_escape_then_enter_keeps_state(self):
        menu, renderer = make_menu()
        menu.start("pick", ["npm", "node", "yarn"], "")
        press(menu, "n", Key.DOWN, Key.DOWN)
        before = (menu.query, menu.results, menu.selected, menu.focus, menu.cursor_x)

        press(menu, Key.ESCAPE)
        assert menu.exit_pending is True
        assert menu.exit_selected is False

        press(menu, Key.ENTER)

        assert menu.exit_pending is False
        assert (
            menu.query,
            menu.results,
            menu.selected,
            menu.focus,
            menu.cursor_x,
        ) == before

    def test_renderer_closed_after_selection(self):
        menu, renderer = make_menu(Key.ENTER)
        menu.run("pick", ["npm"], "npm")
        assert renderer.close_count == 1

    def test_run_entry_menu_helper(self):
        renderer = RecordingRenderer()
        choice = run_entry_menu(
            "pick",
            ["bun", "deno", "node"],
            "",
            renderer=renderer,
            keys=ScriptedKeys(Key.TAB, Key.DOWN, Key.DOWN, Key.ENTER),
        )
        assert choice == "node"


class TestDefaultValue:
    def test_default_without_match_starts_in_search(self):
        menu, _ = make_menu()
        menu.start("pick", ["npm", "yarn"], "cargo")

        assert menu.focus is Focus.SEARCH
        assert menu.results == []
        assert menu.selected == 0
        assert menu.query == "cargo"

    def test_default_selects_first_surviving_match(self):
        menu, _ = make_menu()
        menu.start("pick", ["GPL-2.0-only", "MIT", "GPL-3.0-only"], "GPL-3")

        assert menu.results == ["GPL-3.0-only"]
        assert menu.selected == 0
        assert menu.focus is Focus.RESULTS

    def test_empty_default_lists_everything(self):
        menu, _ = make_menu()
        menu.start("pick", ["npm", "yarn"], "")

        assert menu.focus is Focus.SEARCH
        assert menu.displayed == ["npm", "yarn"]


class TestSearchField:
    def test_typing_resets_selection_to_top(self):
        menu, _ = make_menu()
        menu.start("pick", ["aa", "ab", "ac", "b"], "")
        press(menu, Key.TAB, Key.DOWN, Key.DOWN)
        assert menu.selected == 2

        press(menu, Key.TAB, "a")

        assert menu.selected == 0
        assert menu.scroll_offset == 0
        assert menu.results == ["aa", "ab", "ac"]

    def test_backspace_refilters(self):
        menu, _ = make_menu()
        menu.start("pick", ["npm", "node", "yarn"], "")
        press(menu, "n", "p")
        assert menu.results == ["npm"]

        press(menu, Key.BACKSPACE)

        assert menu.query == "n"
        assert menu.results == ["npm", "node"]
        assert menu.cursor_x == SEARCH_TITLE_LEN + 1

    def test_backspace_at_field_start_does_nothing(self):
        menu, _ = make_menu()
        menu.start("pick", ["npm"], "")
        press(menu, Key.BACKSPACE)
        assert menu.query == ""
        assert menu.cursor_x == SEARCH_TITLE_LEN

    def test_insert_in_middle_of_query(self):
        menu, _ = make_menu()
        menu.start("pick", ["npm", "nvm"], "")
        press(menu, "n", "m", Key.LEFT, "p")

        assert menu.query == "npm"
        assert menu.cursor_x == SEARCH_TITLE_LEN + 2
        assert menu.results == ["npm"]

    def test_delete_forward_removes_char_at_cursor(self):
        menu, _ = make_menu()
        menu.start("pick", ["npm", "nx"], "")
        press(menu, "n", "x", Key.LEFT, Key.DELETE)

        assert menu.query == "n"
        assert menu.cursor_x == SEARCH_TITLE_LEN + 1
        assert menu.results == ["npm", "nx"]

    def test_delete_at_end_does_nothing(self):
        menu, _ = make_menu()
        menu.start("pick", ["npm"], "")
        press(menu, "n", Key.DELETE)
        assert menu.query == "n"

    def test_cursor_movement_is_clamped(self):
        menu, _ = make_menu()
        menu.start("pick", ["abc"], "")
        press(menu, "a", "b")

        press(menu, Key.RIGHT)
        assert menu.cursor_x == SEARCH_TITLE_LEN + 2
        press(menu, Key.HOME, Key.LEFT)
        assert menu.cursor_x == SEARCH_TITLE_LEN
        press(menu, Key.END)
        assert menu.cursor_x == SEARCH_TITLE_LEN + 2

    def test_cursor_keys_keep_results_and_selection(self):
        menu, _ = make_menu()
        menu.start("pick", ["npm", "node"], "")
        press(menu, "n")
        results = list(menu.results)

        press(menu, Key.LEFT, Key.RIGHT, Key.HOME, Key.END)

        assert menu.results == results
        assert menu.selected == 0

    def test_enter_in_search_moves_to_results_without_selecting(self):
        menu, _ = make_menu()
        menu.start("pick", ["npm"], "")

        assert press(menu, Key.ENTER) is None
        assert menu.focus is Focus.RESULTS

    def test_vim_letters_are_typed_in_search(self):
        menu, _ = make_menu()
        menu.start("pick", ["java", "js"], "")
        press(menu, "j")
        assert menu.query == "j"
        assert menu.focus is Focus.SEARCH

    def test_tab_toggles_focus(self):
        menu, _ = make_menu()
        menu.start("pick", ["npm"], "")
        press(menu, Key.TAB)
        assert menu.focus is Focus.RESULTS
        press(menu, Key.TAB)
        assert menu.focus is Focus.SEARCH


class TestResultList:
    def test_down_stops_at_last_item(self):
        menu, _ = make_menu()
        menu.start("pick", ["a", "b"], "")
        press(menu, Key.TAB, Key.DOWN, Key.DOWN, Key.DOWN)
        assert menu.selected == 1

    def test_vim_and_arrow_aliases(self):
        menu, _ = make_menu()
        menu.start("pick", ["a", "b", "c"], "")
        press(menu, Key.TAB, "j", Key.RIGHT)
        assert menu.selected == 2
        press(menu, "k", Key.LEFT)
        assert menu.selected == 0
        assert menu.focus is Focus.RESULTS

    def test_enter_with_no_results_is_noop(self):
        menu, _ = make_menu()
        menu.start("pick", ["npm"], "x")
        press(menu, Key.TAB)
        assert menu.focus is Focus.RESULTS

        assert press(menu, Key.DOWN) is None
        assert press(menu, Key.ENTER) is None
        assert menu.selected == 0

    def test_scroll_follows_selection_down_and_up(self):
        menu, renderer = make_menu(height=24)
        items = [f"item{i:02d}" for i in range(20)]
        menu.start("pick", items, "")
        assert menu.max_visible == 8

        press(menu, Key.TAB, *[Key.DOWN] * 9)
        assert menu.selected == 9
        assert menu.scroll_offset == 2

        press(menu, *[Key.UP] * 8)
        assert menu.selected == 1
        assert menu.scroll_offset == 1

    def test_enter_returns_selected_filtered_entry(self):
        menu, _ = make_menu()
        menu.start("pick", ["npm", "node", "yarn"], "")
        press(menu, "n", Key.DOWN, Key.DOWN)
        assert press(menu, Key.ENTER) == "node"

    def test_duplicates_are_distinct_positions(self):
        menu, _ = make_menu()
        menu.start("pick", ["x", "x", "y"], "")
        press(menu, Key.TAB, Key.DOWN)
        assert menu.selected == 1
        assert press(menu, Key.ENTER) == "x"


class TestRendering:
    def test_render_receives_scroll_offset_from_renderer(self):
        # Tall items force the renderer to move the window
        items = ["x" * 200 for _ in range(6)]
        menu, renderer = make_menu(Key.TAB, Key.DOWN, Key.DOWN, Key.DOWN, Key.ENTER, height=20)

        menu.run("pick", items, "")

        offsets = [call.args["scroll_offset"] for call in renderer.calls]
        assert offsets[-1] > 0
        assert menu.scroll_offset == offsets[-1]
        assert menu.scroll_offset <= menu.selected

    def test_confirm_overlay_drawn_while_pending(self):
        menu, renderer = make_menu(Key.ESCAPE, Key.DOWN, Key.UP, "q", Key.ENTER)

        menu.run("pick", ["npm"], "npm")

        kinds = [call.kind for call in renderer.calls]
        assert kinds == ["search", "confirm", "confirm", "confirm", "search"]
        assert renderer.calls[2].args["yes_selected"] is True
        assert renderer.calls[3].args["yes_selected"] is False


class TestExitConfirm:
    def test_yes_exits_process(self, capsys):
        menu, renderer = make_menu(Key.ESCAPE, Key.DOWN, Key.ENTER)

        with pytest.raises(SystemExit) as exc_info:
            menu.run("pick", ["npm", "yarn"], "")

        assert exc_info.value.code == 1
        assert renderer.close_count >= 1
        assert BAIL_OUT_MESSAGE in capsys.readouterr().err

    def test_escape_again_dismisses(self):
        menu, _ = make_menu()
        menu.start("pick", ["npm"], "")
        press(menu, Key.ESCAPE, Key.DOWN, Key.ESCAPE)
        assert menu.exit_pending is False

    def test_q_dismisses_even_with_yes_highlighted(self):
        menu, _ = make_menu()
        menu.start("pick", ["npm"], "")
        press(menu, Key.ESCAPE, "j", "q")
        assert menu.exit_pending is False

    def test_other_key_with_no_highlighted_dismisses(self):
        menu, _ = make_menu()
        menu.start("pick", ["npm"], "")
        press(menu, Key.ESCAPE, "x")
        assert menu.exit_pending is False
        assert menu.query == ""

    def test_other_key_with_yes_highlighted_keeps_dialog(self):
        menu, _ = make_menu()
        menu.start("pick", ["npm"], "")
        press(menu, Key.ESCAPE, Key.RIGHT, "x")
        assert menu.exit_pending is True
        assert menu.exit_selected is True

    def test_navigation_keys_do_not_move_selection_while_confirming(self):
        menu, _ = make_menu()
        menu.start("pick", ["a", "b", "c"], "")
        press(menu, Key.TAB, Key.ESCAPE, Key.DOWN, "k")

        assert menu.selected == 0
        assert menu.focus is Focus.RESULTS
        assert menu.exit_selected is False
