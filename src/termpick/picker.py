"""High-level picker API.

:class:`Picker` wires a state, a behavior and a renderer into a
:class:`~termpick.engine.SelectionEngine` for each call, and adds the
conveniences around it: required variants that raise instead of returning
nothing, printing the result once the terminal is back to normal, and plain
line prompts for text and yes/no questions.
"""

from __future__ import annotations

import dataclasses
import sys
from typing import Any, Callable, Sequence, TypeVar

from termpick.behavior import Behavior
from termpick.config import PickerConfig, load_config
from termpick.engine import SelectionEngine
from termpick.errors import InputRequiredError, SelectionCancelledError
from termpick.items import TreeRoot, display_name
from termpick.outcome import FinishMulti, FinishSingle, Outcome
from termpick.prompts import ConsoleTextInput, TextInput
from termpick.render import RendererKind
from termpick.state import (
    PickerLayout,
    SelectionMode,
    SelectionState,
    SingleColumnLayout,
    TwoColumnDynamicLayout,
    TwoColumnStaticLayout,
)
from termpick.style import green
from termpick.terminal import ProcessTerminal, Terminal
from termpick.tree import TreeNavigationState

T = TypeVar("T")


def renderer_for_layout(layout: PickerLayout) -> RendererKind:
    match layout:
        case SingleColumnLayout():
            return "single_column"
        case TwoColumnStaticLayout():
            return "two_column_static"
        case TwoColumnDynamicLayout():
            return "two_column_dynamic"
        case _:
            raise ValueError(f"Unknown layout: {layout!r}")


def _write_stdout(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


class Picker:
    """Interactive pickers plus line prompts.

    Every collaborator can be swapped out: tests pass an in-memory terminal
    and a scripted text input.
    """

    def __init__(
        self,
        terminal: Terminal | None = None,
        text_input: TextInput | None = None,
        config: PickerConfig | None = None,
        output: Callable[[str], None] | None = None,
    ) -> None:
        self._terminal = terminal
        self.text_input: TextInput = text_input or ConsoleTextInput()
        self.config = config or load_config()
        self._output = output or _write_stdout

    @property
    def terminal(self) -> Terminal:
        if self._terminal is None:
            self._terminal = ProcessTerminal()
        return self._terminal

    # -- flat selection -----------------------------------------------------

    def single_selection(
        self,
        prompt: str,
        items: Sequence[T],
        layout: PickerLayout | None = None,
        new_screen: bool | None = None,
        echo: bool | None = None,
    ) -> T | None:
        """Let the user pick one item. Returns ``None`` when they quit."""
        outcome = self._run_flat(prompt, items, "single", layout, new_screen)
        item = outcome.item if isinstance(outcome, FinishSingle) else None

        if item is not None and self._should_echo(echo):
            self._output(f"\ntermpick single selection result:\n  {green('✔')} {display_name(item)}\n\n")
        return item

    def required_single_selection(
        self,
        prompt: str,
        items: Sequence[T],
        layout: PickerLayout | None = None,
        new_screen: bool | None = None,
        echo: bool | None = None,
    ) -> T:
        item = self.single_selection(prompt, items, layout, new_screen, echo)
        if item is None:
            raise SelectionCancelledError(prompt)
        return item

    def multi_selection(
        self,
        prompt: str,
        items: Sequence[T],
        layout: PickerLayout | None = None,
        new_screen: bool | None = None,
        echo: bool | None = None,
    ) -> list[T]:
        """Let the user pick any number of items. Quitting returns ``[]``."""
        outcome = self._run_flat(prompt, items, "multi", layout, new_screen)
        selections = list(outcome.items) if isinstance(outcome, FinishMulti) else []

        if selections and self._should_echo(echo):
            lines = "".join(f" {green('✔')} {display_name(item)}\n" for item in selections)
            self._output(f"\ntermpick multi selection results:\n\n{lines}\n")
        return selections

    def _run_flat(
        self,
        prompt: str,
        items: Sequence[Any],
        mode: SelectionMode,
        layout: PickerLayout | None,
        new_screen: bool | None,
    ) -> Outcome:
        layout = layout if layout is not None else SingleColumnLayout()
        state = SelectionState.from_items(
            items,
            prompt,
            mode=mode,
            layout=layout,
            show_prompt_text=self.config.show_prompt_text,
            show_selected_item_text=self.config.show_selected_item_text,
        )
        engine = SelectionEngine(
            state,
            Behavior(mode),
            renderer_for_layout(layout),
            self.terminal,
            self._run_config(new_screen),
        )
        return engine.run()

    # -- tree navigation ----------------------------------------------------

    def tree_navigation(
        self,
        prompt: str,
        root: TreeRoot[T] | Sequence[T],
        allow_selecting_folders: bool = True,
        start_inside_first_root: bool = False,
        new_screen: bool | None = None,
        show_prompt_text: bool | None = None,
        echo: bool | None = None,
    ) -> T | None:
        """Browse a tree and return the chosen item, or ``None`` on quit."""
        if isinstance(root, TreeRoot):
            root_items, root_name = list(root.children), root.display_name
        else:
            root_items, root_name = list(root), None

        state: TreeNavigationState[T] = TreeNavigationState(
            root_items,
            prompt,
            root_display_name=root_name,
            show_prompt_text=(
                self.config.show_prompt_text if show_prompt_text is None else show_prompt_text
            ),
            show_selected_item_text=self.config.show_selected_item_text,
        )
        if start_inside_first_root:
            state.start_inside_first_root()

        engine = SelectionEngine(
            state,
            Behavior("tree", allow_selecting_folders=allow_selecting_folders),
            "tree",
            self.terminal,
            self._run_config(new_screen),
        )
        outcome = engine.run()
        item = outcome.item if isinstance(outcome, FinishSingle) else None

        if item is not None and self._should_echo(echo):
            self._output(f"\ntermpick tree navigation result:\n  {green('✔')} {display_name(item)}\n\n")
        return item

    def required_tree_navigation(
        self,
        prompt: str,
        root: TreeRoot[T] | Sequence[T],
        allow_selecting_folders: bool = True,
        start_inside_first_root: bool = False,
        new_screen: bool | None = None,
        show_prompt_text: bool | None = None,
        echo: bool | None = None,
    ) -> T:
        item = self.tree_navigation(
            prompt,
            root,
            allow_selecting_folders=allow_selecting_folders,
            start_inside_first_root=start_inside_first_root,
            new_screen=new_screen,
            show_prompt_text=show_prompt_text,
            echo=echo,
        )
        if item is None:
            raise SelectionCancelledError(prompt)
        return item

    # -- line prompts -------------------------------------------------------

    def get_input(self, prompt: str) -> str:
        return self.text_input.get_input(prompt)

    def required_input(self, prompt: str) -> str:
        """Like :meth:`get_input` but an empty answer raises."""
        answer = self.get_input(prompt)
        if not answer:
            raise InputRequiredError(prompt)
        return answer

    def get_permission(self, prompt: str) -> bool:
        return self.text_input.get_permission(prompt)

    def required_permission(self, prompt: str) -> None:
        """Raise :class:`SelectionCancelledError` unless the user says yes."""
        if not self.get_permission(prompt):
            raise SelectionCancelledError(prompt)

    # -- helpers ------------------------------------------------------------

    def _run_config(self, new_screen: bool | None) -> PickerConfig:
        if new_screen is None:
            return self.config
        return dataclasses.replace(self.config, new_screen=new_screen)

    def _should_echo(self, echo: bool | None) -> bool:
        return self.config.echo_results if echo is None else echo
