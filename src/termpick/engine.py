"""The selection engine: render, wait for a key, dispatch, repeat.

One engine owns one state, one behavior and one renderer for a single run.
The terminal is restored exactly once when the run ends, whether it ends
with an outcome, an exception or an interrupt signal.
"""

from __future__ import annotations

import logging
from typing import Any

from termpick import signals
from termpick.behavior import Behavior
from termpick.config import PickerConfig
from termpick.keybindings import PickerKeybindingsManager, get_picker_keybindings
from termpick.keys import ActionKey, DirectionKey, split_input
from termpick.layout import FrameLayout, compute_frame
from termpick.outcome import CONTINUE, Outcome, is_finished
from termpick.render import RendererKind, preamble_rows_for, render_frame
from termpick.scroll import ScrollWindow, compute_window
from termpick.state import (
    SelectionState,
    SingleColumnLayout,
    TwoColumnDynamicLayout,
    TwoColumnStaticLayout,
)
from termpick.terminal import Terminal
from termpick.tree import TreeNavigationState

logger = logging.getLogger(__name__)

LEGAL_PAIRS: frozenset[tuple[str, str]] = frozenset(
    {
        ("single", "single_column"),
        ("single", "two_column_static"),
        ("single", "two_column_dynamic"),
        ("multi", "single_column"),
        ("multi", "two_column_static"),
        ("multi", "two_column_dynamic"),
        ("tree", "tree"),
    }
)

_LAYOUT_FOR_RENDERER: dict[str, type] = {
    "single_column": SingleColumnLayout,
    "two_column_static": TwoColumnStaticLayout,
    "two_column_dynamic": TwoColumnDynamicLayout,
}


def check_combination(state: Any, behavior: Behavior, renderer: RendererKind) -> None:
    """Raise :class:`ValueError` unless the three pieces can run together."""
    if (behavior.kind, renderer) not in LEGAL_PAIRS:
        raise ValueError(
            f"Behavior {behavior.kind!r} cannot be used with renderer {renderer!r}"
        )

    if behavior.kind == "tree":
        if not isinstance(state, TreeNavigationState):
            raise ValueError("Tree navigation needs a TreeNavigationState")
        return

    if not isinstance(state, SelectionState):
        raise ValueError(f"Behavior {behavior.kind!r} needs a SelectionState")
    if state.mode != behavior.kind:
        raise ValueError(
            f"SelectionState is in {state.mode!r} mode but the behavior is {behavior.kind!r}"
        )
    expected = _LAYOUT_FOR_RENDERER[renderer]
    if not isinstance(state.layout, expected):
        raise ValueError(f"Renderer {renderer!r} needs a {expected.__name__}")


class SelectionEngine:
    """Runs the input loop for one picker session.

    Only one engine may run at a time per process: the interrupt hook it
    installs is process-wide.
    """

    def __init__(
        self,
        state: SelectionState | TreeNavigationState,
        behavior: Behavior,
        renderer: RendererKind,
        terminal: Terminal,
        config: PickerConfig | None = None,
        keybindings: PickerKeybindingsManager | None = None,
    ) -> None:
        check_combination(state, behavior, renderer)
        self.state = state
        self.behavior = behavior
        self.renderer = renderer
        self.terminal = terminal
        self.config = config or PickerConfig()
        if keybindings is None:
            if self.config.keybindings:
                keybindings = PickerKeybindingsManager(self.config.keybindings)
            else:
                keybindings = get_picker_keybindings()
        self.keybindings = keybindings
        self._restored = True

    # -- frame --------------------------------------------------------------

    def frame(self) -> FrameLayout:
        """Layout for the current terminal size and state."""
        return compute_frame(
            self.state,
            self.terminal.rows,
            self.terminal.columns,
            self.config.divider_style,
            preamble_rows_for(self.renderer),
        )

    def window(self, frame: FrameLayout) -> ScrollWindow:
        return compute_window(
            len(self.state.visible_items), frame.visible_rows, self.state.active_index
        )

    def render(self) -> None:
        frame = self.frame()
        render_frame(self.renderer, self.terminal, self.state, frame, self.window(frame))

    # -- run ----------------------------------------------------------------

    def run(self) -> Outcome:
        """Drive the loop until the behavior produces a finishing outcome."""
        signals.install(self.restore_terminal)
        self._restored = False
        logger.debug("Run started: behavior=%s renderer=%s", self.behavior.kind, self.renderer)
        try:
            self._prepare_terminal()
            self.render()
            outcome = self._loop()
        finally:
            self.restore_terminal()
            signals.uninstall()

        logger.debug("Run finished with %s", type(outcome).__name__)
        return outcome

    def _loop(self) -> Outcome:
        while True:
            data = self.terminal.read_key()
            if not data:
                # End of input behaves like the quit key
                logger.debug("Input closed, treating as quit")
                return self.behavior.handle_action("quit", self.state)

            outcome = self.dispatch(data)
            if is_finished(outcome):
                return outcome
            self.render()

    def dispatch(self, data: str) -> Outcome:
        """Feed raw input to the behavior. Unbound keys are ignored."""
        for sequence in split_input(data):
            match self.keybindings.decode(sequence):
                case DirectionKey(direction=direction):
                    self.behavior.handle_arrow(direction, self.state)
                case ActionKey(action=action):
                    outcome = self.behavior.handle_action(action, self.state)
                    if is_finished(outcome):
                        return outcome
                case None:
                    logger.debug("Ignoring unbound input %r", sequence)
        return CONTINUE

    # -- terminal setup / teardown -----------------------------------------

    def _prepare_terminal(self) -> None:
        if self.config.new_screen:
            self.terminal.enter_alternate_screen()
        self.terminal.enable_raw_input()
        self.terminal.hide_cursor()

    def restore_terminal(self) -> None:
        """Put the terminal back in normal mode. Runs at most once per run."""
        if self._restored:
            return
        self._restored = True
        self.terminal.show_cursor()
        self.terminal.restore_normal_input()
        if self.config.new_screen:
            self.terminal.exit_alternate_screen()
        else:
            self.terminal.clear_screen()
            self.terminal.move_to_home()
