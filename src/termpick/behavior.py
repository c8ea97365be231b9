"""Input behaviors: how a key changes state or finishes the run.

There are three kinds. ``single`` and ``multi`` work on a
:class:`~termpick.state.SelectionState` whatever its layout; ``tree`` works on
a :class:`~termpick.tree.TreeNavigationState`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from termpick.items import is_selectable
from termpick.keys import Action, Direction
from termpick.outcome import CONTINUE, FinishMulti, FinishSingle, Outcome
from termpick.state import SelectionState
from termpick.tree import TreeNavigationState

BehaviorKind = Literal["single", "multi", "tree"]

BEHAVIOR_KINDS: tuple[str, ...] = ("single", "multi", "tree")


@dataclass(frozen=True)
class Behavior:
    """A behavior kind plus the options that tune it.

    ``allow_selecting_folders`` only matters for ``tree``: when False, an
    item that has children cannot be chosen with enter.
    """

    kind: BehaviorKind
    allow_selecting_folders: bool = True

    def handle_arrow(self, direction: Direction, state: Any) -> bool:
        """Apply a directional key. Returns True if the state changed."""
        match self.kind:
            case "single" | "multi":
                return _flat_arrow(direction, state)
            case "tree":
                return _tree_arrow(direction, state)
            case _:
                raise ValueError(f"Unknown behavior kind: {self.kind!r}")

    def handle_action(self, action: Action, state: Any) -> Outcome:
        """Apply an action key and report whether the run is over."""
        match self.kind:
            case "single":
                return _single_action(action, state)
            case "multi":
                return _multi_action(action, state)
            case "tree":
                return _tree_action(action, state, self.allow_selecting_folders)
            case _:
                raise ValueError(f"Unknown behavior kind: {self.kind!r}")

    def can_select(self, item: object) -> bool:
        return can_select(item, self.allow_selecting_folders)


def can_select(item: object, allow_selecting_folders: bool = True) -> bool:
    """Whether *item* may be returned as the result of a tree run."""
    if not is_selectable(item):
        return False
    if not allow_selecting_folders and getattr(item, "has_children", False):
        return False
    return True


# ---------------------------------------------------------------------------
# Flat selection
# ---------------------------------------------------------------------------


def _flat_arrow(direction: Direction, state: SelectionState) -> bool:
    match direction:
        case "up":
            return state.move_by(-1)
        case "down":
            return state.move_by(1)
        case _:
            return False


def _single_action(action: Action, state: SelectionState) -> Outcome:
    match action:
        case "enter":
            return FinishSingle(state.focused_item)
        case "quit":
            return FinishSingle(None)
        case _:
            return CONTINUE


def _multi_action(action: Action, state: SelectionState) -> Outcome:
    match action:
        case "space":
            state.toggle(state.active_index)
            return CONTINUE
        case "enter":
            return FinishMulti(state.selected_items)
        case "quit":
            return FinishMulti([])
        case _:
            return CONTINUE


# ---------------------------------------------------------------------------
# Tree navigation
# ---------------------------------------------------------------------------


def _tree_arrow(direction: Direction, state: TreeNavigationState) -> bool:
    match direction:
        case "up":
            return state.move(-1)
        case "down":
            return state.move(1)
        case "right":
            return state.descend()
        case "left":
            return state.ascend()
        case _:
            return False


def _tree_action(
    action: Action,
    state: TreeNavigationState,
    allow_selecting_folders: bool,
) -> Outcome:
    match action:
        case "enter":
            item = state.current_item
            if item is None:
                return CONTINUE
            if not can_select(item, allow_selecting_folders):
                return CONTINUE
            return FinishSingle(item)
        case "space":
            state.descend()
            return CONTINUE
        case "backspace":
            state.ascend()
            return CONTINUE
        case "quit":
            return FinishSingle(None)
        case _:
            return CONTINUE
