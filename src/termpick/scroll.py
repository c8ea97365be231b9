"""Scroll window calculation for long lists.

Given the number of items, the number of rows available in the viewport and
the active index, work out which contiguous slice of the list is visible.
The active item is kept centred where possible; near either end of the list
the window is pinned so no rows are wasted.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScrollWindow:
    """Half-open ``[start, end)`` range of visible item indices."""

    start: int
    end: int
    total: int

    @property
    def show_scroll_up(self) -> bool:
        return show_scroll_up(self.start)

    @property
    def show_scroll_down(self) -> bool:
        return show_scroll_down(self.end, self.total)

    def indices(self) -> range:
        return range(self.start, self.end)

    def __len__(self) -> int:
        return self.end - self.start


def bounds(total_items: int, visible_rows: int, active_index: int) -> tuple[int, int]:
    """Return ``(start, end)`` of the visible slice.

    >>> bounds(100, 10, 50)
    (45, 55)
    >>> bounds(20, 10, 19)
    (10, 20)
    """
    total_items = max(0, total_items)
    visible_rows = max(1, visible_rows)

    if total_items == 0:
        return 0, 0

    clamped = max(0, min(active_index, total_items - 1))

    start = clamped - visible_rows // 2
    max_start = max(0, total_items - visible_rows)
    start = max(0, min(start, max_start))

    end = min(total_items, start + visible_rows)
    return start, end


def show_scroll_up(start: int) -> bool:
    return start > 0


def show_scroll_down(end: int, total_items: int) -> bool:
    return end < total_items


def compute_window(total_items: int, visible_rows: int, active_index: int) -> ScrollWindow:
    """Compute a :class:`ScrollWindow` for one frame."""
    start, end = bounds(total_items, visible_rows, active_index)
    return ScrollWindow(start=start, end=end, total=max(0, total_items))
