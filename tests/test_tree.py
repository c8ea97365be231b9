"""Tests for termpick.tree, the tree behavior and the tree item types."""

from __future__ import annotations

import os

import pytest

from termpick.behavior import Behavior
from termpick.items import FileSystemNode, TreeNode, TreeNodeMetadata, TreeRoot, display_name
from termpick.outcome import CONTINUE, FinishSingle
from termpick.tree import TreeNavigationState


def leaf(name, **kwargs):
    return TreeNode(name, name, **kwargs)


def folder(name, children, **kwargs):
    return TreeNode(name, name, has_children=True, load_children=lambda: list(children), **kwargs)


def sample_tree():
    notes = leaf("Notes")
    drafts = leaf("Drafts")
    docs = folder("Docs", [notes, drafts])
    empty = folder("Empty", [])
    readme = leaf("README")
    return [docs, empty, readme]


def make_state(roots=None, **kwargs):
    return TreeNavigationState(roots if roots is not None else sample_tree(), "Browse", **kwargs)


# ---------------------------------------------------------------------------
# TreeNavigationState
# ---------------------------------------------------------------------------


class TestMove:
    def test_moves_within_level(self):
        state = make_state()
        assert state.move(1) is True
        assert state.active_index == 1

    def test_clamps_without_wrapping(self):
        state = make_state()
        assert state.move(-1) is False
        assert state.active_index == 0
        state.move(10)
        assert state.active_index == 2

    def test_empty_root(self):
        state = make_state(roots=[])
        assert state.move(1) is False
        assert state.current_item is None
        assert state.depth == 1


class TestDescendAscend:
    def test_descend_pushes_children(self):
        state = make_state()
        assert state.descend() is True
        assert state.depth == 2
        assert [display_name(i) for i in state.current_items] == ["Notes", "Drafts"]
        assert state.active_index == 0

    def test_descend_on_leaf_is_noop(self):
        state = make_state()
        state.active_index = 2
        assert state.descend() is False
        assert state.depth == 1
        assert state.empty_hint is None

    def test_round_trip_restores_prior_level(self):
        state = make_state()
        state.active_index = 0
        before_items = list(state.current_items)
        state.descend()
        state.move(1)
        assert state.ascend() is True
        assert state.depth == 1
        assert state.current_items == before_items
        assert state.active_index == 0

    def test_root_is_never_popped(self):
        state = make_state()
        assert state.ascend() is False
        assert state.depth == 1

    def test_levels_is_a_copy(self):
        state = make_state()
        state.levels.clear()
        assert state.depth == 1

    def test_loader_called_on_every_descend(self):
        calls = []

        def load():
            calls.append(1)
            return [leaf("child")]

        state = make_state(roots=[TreeNode("root", None, has_children=True, load_children=load)])
        state.descend()
        state.ascend()
        state.descend()
        assert len(calls) == 2

    def test_loader_error_leaves_stack_alone(self):
        def boom():
            raise OSError("unreadable")

        state = make_state(roots=[TreeNode("bad", None, has_children=True, load_children=boom)])
        with pytest.raises(OSError):
            state.descend()
        assert state.depth == 1


class TestEmptyHint:
    def test_empty_folder_sets_hint_without_pushing(self):
        state = make_state()
        state.active_index = 1
        assert state.descend() is False
        assert state.depth == 1
        assert state.empty_hint == (0, 1)
        assert state.is_empty_hint(0, 1)
        assert not state.is_empty_hint(0, 0)
        assert state.empty_message == "'Empty' is empty"

    def test_moving_clears_hint(self):
        state = make_state()
        state.active_index = 1
        state.descend()
        state.move(1)
        assert state.empty_hint is None
        assert state.empty_message is None

    def test_non_moving_keeps_hint(self):
        state = make_state()
        state.active_index = 2
        state.move(-1)
        state.descend()
        state.active_index = 1
        assert state.empty_hint == (0, 1)

    def test_ascend_clears_hint(self):
        state = make_state()
        state.active_index = 1
        state.descend()
        state.ascend()
        assert state.empty_hint is None

    def test_successful_descend_clears_hint(self):
        state = make_state()
        state.active_index = 1
        state.descend()
        state.active_index = 0
        state.descend()
        assert state.empty_hint is None

    def test_message_in_detail_lines(self):
        state = make_state()
        state.active_index = 1
        state.descend()
        assert any("'Empty' is empty" in line for line in state.selected_detail_lines)


class TestBreadcrumb:
    def test_two_levels(self):
        state = make_state()
        state.descend()
        assert state.breadcrumb() == "Docs ▸ Notes"

    def test_follows_active_index(self):
        state = make_state()
        state.descend()
        state.move(1)
        assert state.breadcrumb() == "Docs ▸ Drafts"

    def test_root_name_prefix(self):
        state = make_state(root_display_name="Home")
        state.descend()
        assert state.breadcrumb_names() == ["Home", "Docs", "Notes"]

    def test_empty_root_has_no_names(self):
        assert make_state(roots=[]).breadcrumb() == ""

    def test_custom_separator(self):
        state = make_state()
        state.descend()
        assert state.breadcrumb(" / ") == "Docs / Notes"


class TestStartInsideFirstRoot:
    def test_descends_into_first_root(self):
        state = make_state()
        state.move(2)
        assert state.start_inside_first_root() is True
        assert state.breadcrumb() == "Docs ▸ Notes"

    def test_first_root_without_children(self):
        state = make_state(roots=[leaf("only")])
        assert state.start_inside_first_root() is False
        assert state.depth == 1


class TestMetadataDetailLines:
    def test_subtitle_and_details(self):
        meta = TreeNodeMetadata(subtitle="Folder", detail_lines=["Updated: today"], icon="📁")
        state = make_state(roots=[leaf("x", metadata=meta)])
        lines = state.selected_detail_lines
        assert "Folder" in lines[0]
        assert "Updated: today" in lines[1]

    def test_no_metadata(self):
        assert make_state(roots=[leaf("x")]).selected_detail_lines == []


# ---------------------------------------------------------------------------
# Tree behavior
# ---------------------------------------------------------------------------


class TestTreeBehavior:
    behavior = Behavior("tree")

    def test_right_descends_and_left_ascends(self):
        state = make_state()
        self.behavior.handle_arrow("right", state)
        assert state.depth == 2
        self.behavior.handle_arrow("left", state)
        assert state.depth == 1

    def test_space_descends_and_backspace_ascends(self):
        state = make_state()
        assert self.behavior.handle_action("space", state) == CONTINUE
        assert state.depth == 2
        assert self.behavior.handle_action("backspace", state) == CONTINUE
        assert state.depth == 1

    def test_up_down_move(self):
        state = make_state()
        self.behavior.handle_arrow("down", state)
        self.behavior.handle_arrow("down", state)
        self.behavior.handle_arrow("up", state)
        assert state.active_index == 1

    def test_enter_selects_leaf(self):
        state = make_state()
        state.active_index = 2
        outcome = self.behavior.handle_action("enter", state)
        assert isinstance(outcome, FinishSingle)
        assert display_name(outcome.item) == "README"

    def test_enter_selects_folder_by_default(self):
        outcome = self.behavior.handle_action("enter", make_state())
        assert display_name(outcome.item) == "Docs"

    def test_enter_on_folder_continues_when_disallowed(self):
        behavior = Behavior("tree", allow_selecting_folders=False)
        state = make_state()
        assert behavior.handle_action("enter", state) == CONTINUE
        state.active_index = 2
        assert isinstance(behavior.handle_action("enter", state), FinishSingle)

    def test_enter_on_unselectable_item(self):
        state = make_state(roots=[leaf("locked", is_selectable=False)])
        assert self.behavior.handle_action("enter", state) == CONTINUE

    def test_enter_on_empty_level(self):
        assert self.behavior.handle_action("enter", make_state(roots=[])) == CONTINUE

    def test_quit_at_any_depth(self):
        state = make_state()
        state.descend()
        assert self.behavior.handle_action("quit", state) == FinishSingle(None)


# ---------------------------------------------------------------------------
# Item types
# ---------------------------------------------------------------------------


class TestTreeNode:
    def test_no_loader_means_no_children(self):
        node = TreeNode("x", 1, has_children=True)
        assert node.load_children() == []

    def test_cache_children(self):
        calls = []

        def load():
            calls.append(1)
            return [leaf("a")]

        node = TreeNode("x", 1, has_children=True, load_children=load, cache_children=True)
        node.load_children()
        node.load_children()
        assert len(calls) == 1

    def test_tree_root(self):
        root = TreeRoot("Home", sample_tree())
        assert root.display_name == "Home"
        assert len(root.children) == 3


class TestFileSystemNode:
    @pytest.fixture
    def tree(self, tmp_path):
        (tmp_path / "beta").mkdir()
        (tmp_path / "Alpha.txt").write_text("hello")
        (tmp_path / ".hidden").write_text("secret")
        (tmp_path / "beta" / "inner.txt").write_text("x" * 2048)
        return tmp_path

    def test_children_sorted_and_hidden_skipped(self, tree):
        names = [n.display_name for n in FileSystemNode(tree).load_children()]
        assert names == ["Alpha.txt", "beta"]

    def test_show_hidden(self, tree):
        names = [n.display_name for n in FileSystemNode(tree, show_hidden=True).load_children()]
        assert ".hidden" in names

    def test_directory_metadata(self, tree):
        node = FileSystemNode(tree / "beta")
        assert node.has_children
        assert node.metadata.subtitle == "Folder"
        assert node.metadata.icon == "📁"
        assert node.metadata.detail_lines[0].startswith("Updated: ")

    def test_file_metadata(self, tree):
        node = FileSystemNode(tree / "Alpha.txt")
        assert not node.has_children
        assert node.load_children() == []
        assert node.metadata.subtitle == "5 bytes"
        assert node.metadata.icon == "📄"

    def test_kilobytes(self, tree):
        assert FileSystemNode(tree / "beta" / "inner.txt").metadata.subtitle == "2.0 KB"

    def test_empty_directory_sets_hint(self, tmp_path):
        (tmp_path / "void").mkdir()
        state = TreeNavigationState(FileSystemNode(tmp_path).load_children(), "Browse")
        assert state.descend() is False
        assert state.empty_hint == (0, 0)

    @pytest.mark.skipif(os.name != "posix" or os.geteuid() == 0, reason="needs permission checks")
    def test_unreadable_directory_has_no_children(self, tmp_path):
        locked = tmp_path / "locked"
        locked.mkdir()
        locked.chmod(0)
        try:
            assert FileSystemNode(locked).load_children() == []
        finally:
            locked.chmod(0o755)
