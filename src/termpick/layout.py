"""Frame layout: header and footer lines and the rows left for the list.

The header and footer are built here as plain lists of lines. Their heights
are simply the lengths of those lists, and the renderer draws the very same
lists, so the visible-row budget can never disagree with what is drawn.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from termpick.items import display_name
from termpick.state import PickerState
from termpick.style import SELECTED_NAME, fore_color, light_green, make_divider
from termpick.text import center_text, truncate

FOOTER_HEIGHT = 3

# Breadcrumb, a blank row and the column titles sit above the tree columns.
TREE_PREAMBLE_ROWS = 3


def header_lines(
    state: PickerState,
    width: int,
    divider_style: str = "single",
) -> list[str]:
    """Build the header drawn above the list.

    Title, divider, the prompt (or a single blank when the prompt is hidden),
    the selected-item block when there is a focused item, then one spacer
    row. For flat lists the spacer also carries the scroll-up indicator.
    """
    divider = make_divider(divider_style, width)
    lines = [center_text(truncate(state.top_line_text, width), width), divider]

    if state.show_prompt_text:
        for prompt_line in state.prompt.split("\n"):
            lines.append(center_text(truncate(prompt_line, width - 2), width))
        lines.append("")
    else:
        lines.append("")

    focused = state.focused_item
    if state.show_selected_item_text and focused is not None:
        label = "Selected: "
        name = truncate(display_name(focused), width - len(label))
        lines.append(divider)
        lines.append(light_green(label) + fore_color(name, SELECTED_NAME))
        lines.extend(truncate(line, width) for line in state.selected_detail_lines)
        lines.append(divider)
        lines.append("")

    lines.append("")
    return lines


def footer_lines(
    state: PickerState,
    width: int,
    divider_style: str = "single",
) -> list[str]:
    """Blank row (scroll-down indicator), divider and instruction text."""
    return [
        "",
        make_divider(divider_style, width),
        center_text(truncate(state.bottom_line_text, width), width),
    ]


@dataclass
class FrameLayout:
    """Row bookkeeping for one frame. Rows are 1-based terminal rows."""

    rows: int
    columns: int
    header: list[str] = field(default_factory=list)
    footer: list[str] = field(default_factory=list)
    preamble_rows: int = 0

    @property
    def header_height(self) -> int:
        return len(self.header)

    @property
    def footer_height(self) -> int:
        return len(self.footer)

    @property
    def visible_rows(self) -> int:
        """Rows available to list items, never less than one."""
        budget = self.rows - self.header_height - self.footer_height - self.preamble_rows
        return max(1, budget)

    @property
    def content_start_row(self) -> int:
        return self.header_height + 1

    @property
    def list_start_row(self) -> int:
        return self.content_start_row + self.preamble_rows

    @property
    def footer_start_row(self) -> int:
        # Pushed down when the list needs more rows than the terminal has
        return max(self.rows - self.footer_height + 1, self.list_start_row + self.visible_rows)

    @property
    def scroll_up_row(self) -> int:
        return self.list_start_row - 1

    @property
    def scroll_down_row(self) -> int:
        return self.footer_start_row


def compute_frame(
    state: PickerState,
    rows: int,
    columns: int,
    divider_style: str = "single",
    preamble_rows: int = 0,
) -> FrameLayout:
    return FrameLayout(
        rows=rows,
        columns=columns,
        header=header_lines(state, columns, divider_style),
        footer=footer_lines(state, columns, divider_style),
        preamble_rows=preamble_rows,
    )
