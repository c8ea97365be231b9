"""Hierarchical navigation state: a stack of levels with lazy child loading.

The bottom of the stack is the root level and is never popped. Descending
loads the active item's children and pushes them as a new level; ascending
pops. Children are not cached back into the parent, so revisiting a folder
calls its loader again unless the item type memoizes on its own.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Generic, Sequence, TypeVar

from termpick.items import display_name, metadata_of
from termpick.style import DIM, MUTED, WARNING, fore_color

logger = logging.getLogger(__name__)

Item = TypeVar("Item")

BREADCRUMB_SEPARATOR = " ▸ "


@dataclass
class Level(Generic[Item]):
    """Siblings at one depth plus the focused index among them."""

    items: list[Item] = field(default_factory=list)
    active_index: int = 0

    def clamp(self) -> None:
        if not self.items:
            self.active_index = 0
        else:
            self.active_index = max(0, min(self.active_index, len(self.items) - 1))

    @property
    def active_item(self) -> Item | None:
        if 0 <= self.active_index < len(self.items):
            return self.items[self.active_index]
        return None


class TreeNavigationState(Generic[Item]):
    """State machine behind tree browsing.

    ``empty_hint`` names the ``(level, index)`` of the item whose last
    descend attempt found no children. It is cleared whenever the active
    index changes or the depth changes.
    """

    def __init__(
        self,
        root_items: Sequence[Item],
        prompt: str,
        root_display_name: str | None = None,
        show_prompt_text: bool = True,
        show_selected_item_text: bool = True,
    ) -> None:
        self.prompt = prompt
        self.root_display_name = root_display_name
        self.show_prompt_text = show_prompt_text
        self.show_selected_item_text = show_selected_item_text
        self._levels: list[Level[Item]] = [Level(items=list(root_items))]
        self._empty_hint: tuple[int, int] | None = None
        self._empty_message: str | None = None

    # -- stack inspection ---------------------------------------------------

    @property
    def levels(self) -> list[Level[Item]]:
        return list(self._levels)

    @property
    def depth(self) -> int:
        return len(self._levels)

    @property
    def current_level(self) -> Level[Item]:
        return self._levels[-1]

    @property
    def current_level_index(self) -> int:
        return len(self._levels) - 1

    @property
    def current_items(self) -> list[Item]:
        return self.current_level.items

    @property
    def current_item(self) -> Item | None:
        return self.current_level.active_item

    @property
    def parent_level(self) -> tuple[int, Level[Item]] | None:
        if len(self._levels) < 2:
            return None
        index = len(self._levels) - 2
        return index, self._levels[index]

    @property
    def empty_hint(self) -> tuple[int, int] | None:
        return self._empty_hint

    @property
    def empty_message(self) -> str | None:
        return self._empty_message

    def is_empty_hint(self, level: int, index: int) -> bool:
        return self._empty_hint == (level, index)

    # -- active index -------------------------------------------------------

    @property
    def active_index(self) -> int:
        return self.current_level.active_index

    @active_index.setter
    def active_index(self, value: int) -> None:
        level = self.current_level
        before = level.active_index
        level.active_index = value
        level.clamp()
        if level.active_index != before:
            self._clear_empty_hint()

    def move(self, delta: int) -> bool:
        """Move within the current level only. Returns True if it moved."""
        before = self.active_index
        self.active_index = before + delta
        return self.active_index != before

    # -- transitions --------------------------------------------------------

    def descend(self) -> bool:
        """Push the active item's children as a new level.

        Items without the children capability are ignored. An empty result
        sets the empty hint and leaves the depth unchanged.
        """
        selected = self.current_item
        if selected is None or not getattr(selected, "has_children", False):
            return False

        depth = self.current_level_index
        index = self.active_index
        children = list(selected.load_children())

        if not children:
            name = display_name(selected)
            self._empty_hint = (depth, index)
            self._empty_message = f"'{name}' is empty"
            logger.debug("Descend into %r found no children", name)
            return False

        self._levels.append(Level(items=children))
        self._clear_empty_hint()
        logger.debug("Descended to depth %d (%d items)", self.depth, len(children))
        return True

    def ascend(self) -> bool:
        """Pop the current level. The root level always stays."""
        self._clear_empty_hint()
        if len(self._levels) <= 1:
            return False
        self._levels.pop()
        logger.debug("Ascended to depth %d", self.depth)
        return True

    def start_inside_first_root(self) -> bool:
        self.active_index = 0
        return self.descend()

    # -- derived views ------------------------------------------------------

    def breadcrumb_names(self) -> list[str]:
        names = [
            display_name(level.items[level.active_index])
            for level in self._levels
            if 0 <= level.active_index < len(level.items)
        ]
        if self.root_display_name:
            names.insert(0, self.root_display_name)
        return names

    def breadcrumb(self, separator: str = BREADCRUMB_SEPARATOR) -> str:
        return separator.join(self.breadcrumb_names())

    # -- PickerState surface ------------------------------------------------

    @property
    def top_line_text(self) -> str:
        return "termpick - Tree Navigation"

    @property
    def bottom_line_text(self) -> str:
        return "Arrows: Up/Down move, Right enters, Left goes back, Enter selects"

    @property
    def visible_items(self) -> list[Item]:
        return self.current_items

    @property
    def focused_item(self) -> Item | None:
        return self.current_item

    @property
    def selected_detail_lines(self) -> list[str]:
        lines: list[str] = []
        item = self.current_item
        metadata = metadata_of(item) if item is not None else None
        if metadata is not None:
            if metadata.subtitle:
                lines.append(fore_color(metadata.subtitle, DIM))
            lines.extend(fore_color(line, MUTED) for line in metadata.detail_lines)
        if self._empty_message:
            lines.append(fore_color(self._empty_message, WARNING))
        return lines

    def _clear_empty_hint(self) -> None:
        self._empty_hint = None
        self._empty_message = None

    def __repr__(self) -> str:
        return f"TreeNavigationState(depth={self.depth}, breadcrumb={self.breadcrumb()!r})"
