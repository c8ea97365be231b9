"""Frame renderers.

A renderer draws one full frame through a :class:`~termpick.terminal.Terminal`:
the header and footer from :mod:`termpick.layout`, the rows of the visible
list that fall inside the scroll window, and the scroll indicators. Renderers
only read state; they never move the focus or change selections.
"""

from __future__ import annotations

from typing import Literal

from termpick.items import display_name, metadata_of
from termpick.layout import TREE_PREAMBLE_ROWS, FrameLayout
from termpick.scroll import ScrollWindow, compute_window
from termpick.state import (
    PickerState,
    SelectionState,
    TwoColumnDynamicLayout,
    TwoColumnStaticLayout,
)
from termpick.style import (
    COLUMN_TITLE,
    DIM,
    MUTED,
    SELECTED_NAME,
    TEXT,
    WARNING,
    fore_color,
    light_blue,
    light_green,
    underline,
)
from termpick.terminal import Terminal
from termpick.text import truncate, wrap_to_width
from termpick.tree import TreeNavigationState

RendererKind = Literal["single_column", "two_column_static", "two_column_dynamic", "tree"]

RENDERER_KINDS: tuple[str, ...] = (
    "single_column",
    "two_column_static",
    "two_column_dynamic",
    "tree",
)

SCROLL_UP = "↑"
SCROLL_DOWN = "↓"
MARKER_ON = "●"
MARKER_OFF = "○"
POINTER = "➤"
FOLDER_MARK = "▸"
EMPTY_SUFFIX = " (empty)"
EMPTY_FOLDER = "(empty folder)"

MIN_LEFT_COLUMN = 18
COLUMN_GAP = 3
# Tree column titles line up with the item icons, clear of the scroll-up arrow
TITLE_INDENT = 2


def preamble_rows_for(kind: RendererKind) -> int:
    """Rows a renderer draws between the header and its first list row."""
    return TREE_PREAMBLE_ROWS if kind == "tree" else 0


def column_widths(width: int) -> tuple[int, int]:
    """Split *width* into (left, right) columns with a gap between them."""
    left = max(MIN_LEFT_COLUMN, width // 3)
    right = max(0, width - left - COLUMN_GAP)
    return left, right


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def render_frame(
    kind: RendererKind,
    terminal: Terminal,
    state: PickerState,
    frame: FrameLayout,
    window: ScrollWindow,
) -> None:
    """Clear the screen and draw a complete frame."""
    terminal.clear_screen()
    terminal.move_to_home()
    _draw_lines(terminal, 1, frame.header)

    match kind:
        case "single_column":
            _render_single_column(terminal, _flat(state), frame, window)
        case "two_column_static":
            _render_two_column_static(terminal, _flat(state), frame, window)
        case "two_column_dynamic":
            _render_two_column_dynamic(terminal, _flat(state), frame, window)
        case "tree":
            _render_tree(terminal, _tree(state), frame, window)
        case _:
            raise ValueError(f"Unknown renderer kind: {kind!r}")

    _draw_lines(terminal, frame.footer_start_row, frame.footer)
    _draw_scroll_indicators(terminal, frame, window)


def _flat(state: PickerState) -> SelectionState:
    if not isinstance(state, SelectionState):
        raise TypeError(f"Flat renderers need a SelectionState, got {type(state).__name__}")
    return state


def _tree(state: PickerState) -> TreeNavigationState:
    if not isinstance(state, TreeNavigationState):
        raise TypeError(f"The tree renderer needs a TreeNavigationState, got {type(state).__name__}")
    return state


def _draw_lines(terminal: Terminal, first_row: int, lines: list[str]) -> None:
    for offset, line in enumerate(lines):
        if line:
            terminal.move_to(first_row + offset, 1)
            terminal.write(line)


def _draw_scroll_indicators(terminal: Terminal, frame: FrameLayout, window: ScrollWindow) -> None:
    if window.show_scroll_up:
        terminal.move_to(frame.scroll_up_row, 1)
        terminal.write(fore_color(SCROLL_UP, MUTED))
    if window.show_scroll_down:
        terminal.move_to(frame.scroll_down_row, 1)
        terminal.write(fore_color(SCROLL_DOWN, MUTED))


# ---------------------------------------------------------------------------
# Flat lists
# ---------------------------------------------------------------------------


def _option_line(state: SelectionState, index: int, width: int) -> str:
    option = state.options[index]
    is_active = index == state.active_index
    marked = is_active if state.is_single else option.selected

    marker = light_green(MARKER_ON) if marked else MARKER_OFF
    name = truncate(option.title, width - 4)
    if is_active:
        name = underline(name)
    return f"{marker} {name}"


def _draw_option_column(
    terminal: Terminal,
    state: SelectionState,
    frame: FrameLayout,
    window: ScrollWindow,
    width: int,
) -> None:
    for row_offset, index in enumerate(window.indices()):
        terminal.move_to(frame.list_start_row + row_offset, 1)
        terminal.write(_option_line(state, index, width))


def _render_single_column(
    terminal: Terminal,
    state: SelectionState,
    frame: FrameLayout,
    window: ScrollWindow,
) -> None:
    _draw_option_column(terminal, state, frame, window, frame.columns)


def _draw_right_column(terminal: Terminal, frame: FrameLayout, lines: list[str]) -> None:
    left, right = column_widths(frame.columns)
    separator_col = left + 2
    for row_offset in range(frame.visible_rows):
        terminal.move_to(frame.list_start_row + row_offset, separator_col)
        terminal.write(fore_color("│", DIM))

    if right <= 0:
        return
    for row_offset, line in enumerate(lines[: frame.visible_rows]):
        if not line:
            continue
        terminal.move_to(frame.list_start_row + row_offset, left + COLUMN_GAP + 1)
        terminal.write(fore_color(truncate(line, right), TEXT))


def _render_two_column_static(
    terminal: Terminal,
    state: SelectionState,
    frame: FrameLayout,
    window: ScrollWindow,
) -> None:
    layout = state.layout
    if not isinstance(layout, TwoColumnStaticLayout):
        raise TypeError("two_column_static needs a TwoColumnStaticLayout")

    left, right = column_widths(frame.columns)
    _draw_option_column(terminal, state, frame, window, left)
    _draw_right_column(terminal, frame, wrap_to_width(layout.detail_text, right))


def _render_two_column_dynamic(
    terminal: Terminal,
    state: SelectionState,
    frame: FrameLayout,
    window: ScrollWindow,
) -> None:
    layout = state.layout
    if not isinstance(layout, TwoColumnDynamicLayout):
        raise TypeError("two_column_dynamic needs a TwoColumnDynamicLayout")

    left, right = column_widths(frame.columns)
    _draw_option_column(terminal, state, frame, window, left)

    focused = state.focused_item
    detail = layout.detail_for_item(focused) if focused is not None else ""
    _draw_right_column(terminal, frame, wrap_to_width(detail, right))


# ---------------------------------------------------------------------------
# Tree
# ---------------------------------------------------------------------------


def _tree_item_line(
    state: TreeNavigationState,
    item: object,
    level_index: int,
    item_index: int,
    is_active: bool,
    is_current: bool,
    width: int,
) -> str:
    pointer = POINTER if is_active else " "
    metadata = metadata_of(item)
    if metadata is not None and metadata.icon:
        icon = metadata.icon
    elif getattr(item, "has_children", False):
        icon = FOLDER_MARK
    else:
        icon = " "

    name = display_name(item)
    if state.is_empty_hint(level_index, item_index):
        return fore_color(truncate(f"{pointer} {icon} {name}{EMPTY_SUFFIX}", width), WARNING)

    text = truncate(f"{pointer} {icon} {name}", width)
    if is_active and is_current:
        return fore_color(text, SELECTED_NAME)
    if is_active:
        return fore_color(text, TEXT)
    return fore_color(text, MUTED if is_current else DIM)


def _draw_tree_column(
    terminal: Terminal,
    state: TreeNavigationState,
    frame: FrameLayout,
    level_index: int,
    window: ScrollWindow,
    col: int,
    width: int,
    is_current: bool,
) -> None:
    level = state.levels[level_index]
    if not level.items:
        terminal.move_to(frame.list_start_row, col)
        terminal.write(fore_color(truncate(EMPTY_FOLDER, width), DIM))
        return

    for row_offset, index in enumerate(window.indices()):
        line = _tree_item_line(
            state,
            level.items[index],
            level_index,
            index,
            index == level.active_index,
            is_current,
            width,
        )
        terminal.move_to(frame.list_start_row + row_offset, col)
        terminal.write(line)


def _render_tree(
    terminal: Terminal,
    state: TreeNavigationState,
    frame: FrameLayout,
    window: ScrollWindow,
) -> None:
    width = frame.columns
    top = frame.content_start_row

    terminal.move_to(top, 1)
    terminal.write(light_blue(truncate(state.breadcrumb(), width)))

    titles_row = top + 2
    parent = state.parent_level
    if parent is None:
        terminal.move_to(titles_row, 1 + TITLE_INDENT)
        terminal.write(fore_color("CURRENT", COLUMN_TITLE))
        _draw_tree_column(
            terminal, state, frame, state.current_level_index, window, 1, width, True
        )
        return

    parent_index, parent_level = parent
    left, right = column_widths(width)
    current_col = left + COLUMN_GAP + 1

    terminal.move_to(titles_row, 1 + TITLE_INDENT)
    terminal.write(fore_color("PARENT", COLUMN_TITLE))
    terminal.move_to(titles_row, current_col + TITLE_INDENT)
    terminal.write(fore_color("CURRENT", COLUMN_TITLE))

    parent_window = compute_window(
        len(parent_level.items), frame.visible_rows, parent_level.active_index
    )
    _draw_tree_column(terminal, state, frame, parent_index, parent_window, 1, left, False)
    _draw_tree_column(
        terminal, state, frame, state.current_level_index, window, current_col, right, True
    )
