"""Selection state for flat (single or multi) pickers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Literal, Protocol, Sequence, TypeVar

from termpick.items import display_name

Item = TypeVar("Item")

SelectionMode = Literal["single", "multi"]


# ---------------------------------------------------------------------------
# Layouts
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SingleColumnLayout:
    """Plain vertical list."""


@dataclass(frozen=True)
class TwoColumnStaticLayout:
    """List on the left, one fixed block of text on the right."""

    detail_text: str


@dataclass(frozen=True)
class TwoColumnDynamicLayout:
    """List on the left, detail for the active item on the right."""

    detail_for_item: Callable[[Any], str]


PickerLayout = SingleColumnLayout | TwoColumnStaticLayout | TwoColumnDynamicLayout


# ---------------------------------------------------------------------------
# Shared state surface
# ---------------------------------------------------------------------------


class PickerState(Protocol):
    """What the engine and the frame layout read from any state."""

    prompt: str
    show_prompt_text: bool
    show_selected_item_text: bool

    @property
    def active_index(self) -> int: ...

    @property
    def top_line_text(self) -> str: ...

    @property
    def bottom_line_text(self) -> str: ...

    @property
    def selected_detail_lines(self) -> list[str]: ...

    @property
    def visible_items(self) -> list[Any]: ...

    @property
    def focused_item(self) -> Any | None: ...


# ---------------------------------------------------------------------------
# Flat selection
# ---------------------------------------------------------------------------


@dataclass
class Option(Generic[Item]):
    item: Item
    selected: bool = False

    @property
    def title(self) -> str:
        return display_name(self.item)


@dataclass
class SelectionState(Generic[Item]):
    """Ordered options, the focused position and per-option selected flags.

    ``active_index`` stays within ``[0, len(options) - 1]`` for a non-empty
    list and is 0 for an empty one. In single mode the selected flags are
    never toggled.
    """

    options: list[Option[Item]]
    prompt: str
    mode: SelectionMode = "single"
    layout: PickerLayout = field(default_factory=SingleColumnLayout)
    active_index: int = 0
    show_prompt_text: bool = True
    show_selected_item_text: bool = True

    def __post_init__(self) -> None:
        self.clamp()

    @classmethod
    def from_items(
        cls,
        items: Sequence[Item],
        prompt: str,
        mode: SelectionMode = "single",
        layout: PickerLayout | None = None,
        **kwargs: Any,
    ) -> SelectionState[Item]:
        return cls(
            options=[Option(item) for item in items],
            prompt=prompt,
            mode=mode,
            layout=layout if layout is not None else SingleColumnLayout(),
            **kwargs,
        )

    @property
    def is_single(self) -> bool:
        return self.mode == "single"

    @property
    def top_line_text(self) -> str:
        return f"termpick ({self.mode}-selection)"

    @property
    def bottom_line_text(self) -> str:
        if self.is_single:
            return "Tap 'enter' to select. Type 'q' to quit."
        return "Select multiple items with 'spacebar'. Tap 'enter' to finish."

    @property
    def selected_detail_lines(self) -> list[str]:
        return []

    @property
    def visible_items(self) -> list[Item]:
        return [option.item for option in self.options]

    @property
    def focused_item(self) -> Item | None:
        if 0 <= self.active_index < len(self.options):
            return self.options[self.active_index].item
        return None

    @property
    def selected_items(self) -> list[Item]:
        return [option.item for option in self.options if option.selected]

    def clamp(self) -> None:
        if not self.options:
            self.active_index = 0
        else:
            self.active_index = max(0, min(self.active_index, len(self.options) - 1))

    def move_by(self, delta: int) -> bool:
        """Move the focus by *delta*, clamped. Returns True if it moved."""
        before = self.active_index
        self.active_index += delta
        self.clamp()
        return self.active_index != before

    def toggle(self, index: int) -> None:
        if self.is_single:
            return
        if 0 <= index < len(self.options):
            self.options[index].selected = not self.options[index].selected

    def shows_as_selected(self, option: Option[Item]) -> bool:
        if self.is_single:
            return False
        return option.selected
