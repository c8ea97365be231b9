"""Tests for termpick.picker and termpick.prompts."""

from __future__ import annotations

import pytest

from termpick import signals
from termpick.config import PickerConfig
from termpick.errors import InputRequiredError, PickerError, SelectionCancelledError
from termpick.items import TreeNode, TreeRoot, display_name
from termpick.picker import Picker, renderer_for_layout
from termpick.prompts import ConsoleTextInput
from termpick.state import SingleColumnLayout, TwoColumnDynamicLayout, TwoColumnStaticLayout

from .virtual_terminal import VirtualTerminal

DOWN, RIGHT, ENTER, SPACE = "\x1b[B", "\x1b[C", "\r", " "


@pytest.fixture(autouse=True)
def _reset_signal_hook():
    yield
    signals.uninstall()


class ScriptedTextInput:
    def __init__(self, answers=(), permissions=()):
        self.answers = list(answers)
        self.permissions = list(permissions)
        self.prompts = []

    def get_input(self, prompt):
        self.prompts.append(prompt)
        return self.answers.pop(0)

    def get_permission(self, prompt):
        self.prompts.append(prompt)
        return self.permissions.pop(0)


def make_picker(keys=(), config=None, text_input=None):
    term = VirtualTerminal(keys=list(keys))
    printed = []
    picker = Picker(
        terminal=term,
        text_input=text_input or ScriptedTextInput(),
        config=config or PickerConfig(),
        output=printed.append,
    )
    return picker, term, printed


def tree_items():
    notes = TreeNode("Notes", "notes")
    docs = TreeNode("Docs", "docs", has_children=True, load_children=lambda: [notes])
    return [docs, TreeNode("README", "readme")]


# ---------------------------------------------------------------------------
# Flat selection
# ---------------------------------------------------------------------------


class TestSingleSelection:
    def test_returns_item_and_echoes(self):
        picker, term, printed = make_picker([DOWN, ENTER])
        assert picker.single_selection("Pick", ["alpha", "beta"]) == "beta"
        assert term.restore_count == 1
        assert "✔" in "".join(printed)
        assert "beta" in "".join(printed)

    def test_quit_returns_none_without_echo(self):
        picker, _, printed = make_picker(["q"])
        assert picker.single_selection("Pick", ["alpha"]) is None
        assert printed == []

    def test_echo_disabled_per_call(self):
        picker, _, printed = make_picker([ENTER])
        picker.single_selection("Pick", ["alpha"], echo=False)
        assert printed == []

    def test_echo_disabled_by_config(self):
        picker, _, printed = make_picker([ENTER], config=PickerConfig(echo_results=False))
        picker.single_selection("Pick", ["alpha"])
        assert printed == []

    def test_required_raises_on_quit(self):
        picker, _, _ = make_picker(["q"])
        with pytest.raises(SelectionCancelledError):
            picker.required_single_selection("Pick", ["alpha"])

    def test_required_returns_item(self):
        picker, _, _ = make_picker([ENTER])
        assert picker.required_single_selection("Pick", ["alpha"]) == "alpha"

    def test_two_column_layout(self):
        picker, term, _ = make_picker([DOWN, ENTER])
        layout = TwoColumnDynamicLayout(lambda item: f"{item} details")
        assert picker.single_selection("Pick", ["alpha", "beta"], layout=layout) == "beta"
        assert "beta details" in term.output

    def test_new_screen_override(self):
        picker, term, _ = make_picker([ENTER])
        picker.single_selection("Pick", ["alpha"], new_screen=False)
        assert term.enter_alternate_screen_count == 0
        assert picker.config.new_screen is True

    def test_hidden_prompt(self):
        picker, term, _ = make_picker([ENTER], config=PickerConfig(show_prompt_text=False))
        picker.single_selection("Choose wisely", ["alpha"])
        assert "Choose wisely" not in term.output


class TestMultiSelection:
    def test_returns_selected_in_order(self):
        picker, _, printed = make_picker([DOWN, SPACE, DOWN, SPACE, ENTER])
        assert picker.multi_selection("Pick", ["a", "b", "c"]) == ["b", "c"]
        assert "".join(printed).count("✔") == 2

    def test_quit_returns_empty(self):
        picker, _, printed = make_picker([SPACE, "q"])
        assert picker.multi_selection("Pick", ["a", "b"]) == []
        assert printed == []

    def test_static_layout(self):
        picker, term, _ = make_picker([SPACE, ENTER])
        layout = TwoColumnStaticLayout("Pick anything")
        assert picker.multi_selection("Pick", ["a"], layout=layout) == ["a"]
        assert "Pick anything" in term.output


# ---------------------------------------------------------------------------
# Tree navigation
# ---------------------------------------------------------------------------


class TestTreeNavigation:
    def test_select_nested_item(self):
        picker, _, printed = make_picker([RIGHT, ENTER])
        item = picker.tree_navigation("Browse", tree_items())
        assert display_name(item) == "Notes"
        assert "Notes" in "".join(printed)

    def test_tree_root_name_in_breadcrumb(self):
        picker, term, _ = make_picker([ENTER])
        picker.tree_navigation("Browse", TreeRoot("Home", tree_items()))
        assert "Home ▸ Docs" in term.output

    def test_start_inside_first_root(self):
        picker, _, _ = make_picker([ENTER])
        item = picker.tree_navigation("Browse", tree_items(), start_inside_first_root=True)
        assert display_name(item) == "Notes"

    def test_folders_disallowed(self):
        picker, _, _ = make_picker([ENTER, DOWN, ENTER])
        item = picker.tree_navigation("Browse", tree_items(), allow_selecting_folders=False)
        assert display_name(item) == "README"

    def test_quit_returns_none(self):
        picker, _, _ = make_picker(["q"])
        assert picker.tree_navigation("Browse", tree_items()) is None

    def test_required_raises(self):
        picker, _, _ = make_picker(["q"])
        with pytest.raises(SelectionCancelledError):
            picker.required_tree_navigation("Browse", tree_items())

    def test_prompt_hidden_per_call(self):
        picker, term, _ = make_picker([ENTER])
        picker.tree_navigation("Secret prompt", tree_items(), show_prompt_text=False)
        assert "Secret prompt" not in term.output


# ---------------------------------------------------------------------------
# Line prompts through the facade
# ---------------------------------------------------------------------------


class TestPickerPrompts:
    def test_get_input(self):
        picker, _, _ = make_picker(text_input=ScriptedTextInput(answers=["Ada"]))
        assert picker.get_input("Name?") == "Ada"

    def test_required_input_raises_on_empty(self):
        picker, _, _ = make_picker(text_input=ScriptedTextInput(answers=[""]))
        with pytest.raises(InputRequiredError):
            picker.required_input("Name?")

    def test_get_permission(self):
        picker, _, _ = make_picker(text_input=ScriptedTextInput(permissions=[True]))
        assert picker.get_permission("Continue?") is True

    def test_required_permission_raises_on_no(self):
        picker, _, _ = make_picker(text_input=ScriptedTextInput(permissions=[False]))
        with pytest.raises(SelectionCancelledError):
            picker.required_permission("Continue?")

    def test_required_permission_passes_on_yes(self):
        picker, _, _ = make_picker(text_input=ScriptedTextInput(permissions=[True]))
        assert picker.required_permission("Continue?") is None

    def test_errors_share_base(self):
        assert issubclass(SelectionCancelledError, PickerError)
        assert issubclass(InputRequiredError, PickerError)
        assert "Name?" in str(InputRequiredError("Name?"))


class TestRendererForLayout:
    def test_mapping(self):
        assert renderer_for_layout(SingleColumnLayout()) == "single_column"
        assert renderer_for_layout(TwoColumnStaticLayout("x")) == "two_column_static"
        assert renderer_for_layout(TwoColumnDynamicLayout(str)) == "two_column_dynamic"

    def test_unknown(self):
        with pytest.raises(ValueError):
            renderer_for_layout("grid")


# ---------------------------------------------------------------------------
# ConsoleTextInput
# ---------------------------------------------------------------------------


def console(answers):
    remaining = list(answers)
    written = []

    def read_line():
        return remaining.pop(0) if remaining else None

    text_input = ConsoleTextInput(read_line=read_line, write=written.append)
    return text_input, written, remaining


class TestConsoleInput:
    def test_returns_answer(self):
        text_input, written, _ = console(["Ada"])
        assert text_input.get_input("Name?") == "Ada"
        assert "Name?" in "".join(written)

    def test_retry_after_empty_answer(self):
        text_input, _, remaining = console(["", "y", "Ada"])
        assert text_input.get_input("Name?") == "Ada"
        assert remaining == []

    def test_declining_retry_returns_empty(self):
        text_input, _, _ = console(["", "n"])
        assert text_input.get_input("Name?") == ""

    def test_gives_up_after_two_retries(self):
        text_input, _, remaining = console(["", "y", "", "y", "", "never read"])
        assert text_input.get_input("Name?") == ""
        assert remaining == ["never read"]

    def test_end_of_input(self):
        text_input, _, _ = console([])
        assert text_input.get_input("Name?") == ""


class TestConsolePermission:
    @pytest.mark.parametrize("answer,expected", [("y", True), ("Y", True), ("n", False), ("yes", False)])
    def test_answers(self, answer, expected):
        text_input, _, _ = console([answer])
        assert text_input.get_permission("Continue?") is expected

    def test_empty_answer_asks_again(self):
        text_input, written, _ = console(["", "y"])
        assert text_input.get_permission("Continue?") is True
        assert "type 'y' or 'n'" in "".join(written)

    def test_third_empty_answer_is_no(self):
        text_input, written, remaining = console(["", "", "", "y"])
        assert text_input.get_permission("Continue?") is False
        assert "Fine, I'll take that as a no!" in "".join(written)
        assert remaining == ["y"]
