"""ANSI styling helpers and divider line styles."""

from __future__ import annotations

from typing import Literal

_RESET = "\x1b[0m"
_UNDERLINE = "\x1b[4m"
_UNDERLINE_OFF = "\x1b[24m"

DividerStyle = Literal["single", "double", "dashed", "none"]

DIVIDER_STYLES: tuple[str, ...] = ("single", "double", "dashed", "none")

# 256-colour palette indices used by the renderers
DIM = 240
MUTED = 244
TEXT = 250
SELECTED_NAME = 51
WARNING = 208
COLUMN_TITLE = 102


def fore_color(text: str, code: int) -> str:
    return f"\x1b[38;5;{code}m{text}{_RESET}"


def underline(text: str) -> str:
    return f"{_UNDERLINE}{text}{_UNDERLINE_OFF}"


def light_green(text: str) -> str:
    return f"\x1b[92m{text}{_RESET}"


def light_blue(text: str) -> str:
    return f"\x1b[94m{text}{_RESET}"


def green(text: str) -> str:
    return f"\x1b[32m{text}{_RESET}"


def red(text: str) -> str:
    return f"\x1b[31m{text}{_RESET}"


def yellow(text: str) -> str:
    return f"\x1b[33m{text}{_RESET}"


def make_divider(style: str, width: int) -> str:
    """Build a divider line for *style*.

    Any value outside :data:`DIVIDER_STYLES` is treated as a custom token
    repeated across the width. An empty result means "draw nothing".
    """
    width = max(0, width)
    match style:
        case "single":
            return "─" * width
        case "double":
            return "=" * width
        case "dashed":
            return "- " * max(1, width // 2)
        case "none" | "":
            return ""
        case _:
            return style * max(1, width // len(style))
