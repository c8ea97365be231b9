"""Terminal text utilities: width measurement, truncation, centring, wrapping.

Widths are measured in terminal columns rather than code points, so wide
CJK characters and emoji count as two columns and ANSI escape sequences count
as none.
"""

from __future__ import annotations

import re
import unicodedata

import grapheme
import wcwidth as _wcwidth

ELLIPSIS = "…"
ANSI_RESET = "\x1b[0m"

# ---------------------------------------------------------------------------
# Regex patterns for ANSI sequences
# ---------------------------------------------------------------------------

_STRIP_RE = re.compile(
    r"\x1b\[[0-9;]*[mGKHJ]"        # CSI
    r"|\x1b\]8;;[^\x07]*\x07"       # OSC 8
    r"|\x1b_[^\x07\x1b]*(?:\x07|\x1b\\)"  # APC
)

# ---------------------------------------------------------------------------
# Width cache (capped at 512 entries)
# ---------------------------------------------------------------------------

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _cache_width(key: str, value: int) -> int:
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[key] = value
    return value


def strip_ansi(text: str) -> str:
    return _STRIP_RE.sub("", text)


def _grapheme_width(g: str) -> int:
    """Return the terminal display width of a single grapheme cluster."""
    if not g:
        return 0

    if len(g) == 1:
        cp = ord(g)
        if cp < 0x20 or (0x7F <= cp <= 0x9F):
            return 0
        return max(_wcwidth.wcwidth(g), 0)

    codepoints = list(g)

    # VS16, ZWJ sequences, skin tones and flags all render as a wide glyph
    for ch in codepoints:
        cp = ord(ch)
        if cp in (0xFE0F, 0x200D):
            return 2
        if 0x1F3FB <= cp <= 0x1F3FF or 0x1F1E6 <= cp <= 0x1F1FF:
            return 2

    first_cp = ord(codepoints[0])
    if first_cp >= 0x1F000 or 0x2600 <= first_cp <= 0x27BF:
        return 2

    cat = unicodedata.category(codepoints[0])
    if cat.startswith("M") or cat == "Cf":
        return 0

    return max(_wcwidth.wcwidth(codepoints[0]), 0)


def visible_width(text: str) -> int:
    """Calculate the visible terminal width of *text*.

    ANSI escape sequences are ignored and tabs count as 3 columns. Plain
    ASCII takes a fast path; other strings are measured per grapheme cluster
    and cached.
    """
    if not text:
        return 0

    stripped = _STRIP_RE.sub("", text)
    if not stripped:
        return 0

    stripped = stripped.replace("\t", "   ")

    if all(0x20 <= ord(ch) <= 0x7E for ch in stripped):
        return len(stripped)

    cached = _width_cache.get(stripped)
    if cached is not None:
        return cached

    total = sum(_grapheme_width(g) for g in grapheme.graphemes(stripped))
    return _cache_width(stripped, total)


# ---------------------------------------------------------------------------
# extract_ansi_code
# ---------------------------------------------------------------------------

def _find_terminator(text: str, start: int) -> int | None:
    """Index just past the BEL or ST ending an OSC/APC body at *start*."""
    i = start
    while i < len(text):
        ch = text[i]
        if ch == "\x07":
            return i + 1
        if ch == "\x1b" and i + 1 < len(text) and text[i + 1] == "\\":
            return i + 2
        i += 1
    return None


def extract_ansi_code(text: str, pos: int) -> tuple[str, int] | None:
    """Extract an ANSI escape sequence starting at *pos* in *text*.

    Returns ``(code, length)``, or ``None`` when no complete CSI, OSC or APC
    sequence starts at *pos*.
    """
    if pos + 1 >= len(text) or text[pos] != "\x1b":
        return None

    next_ch = text[pos + 1]

    if next_ch == "[":
        i = pos + 2
        while i < len(text):
            ch = text[i]
            if ch in "mGKHJ":
                code = text[pos : i + 1]
                return (code, len(code))
            if ch.isdigit() or ch == ";":
                i += 1
                continue
            break
        return None

    if next_ch in "]_":
        end = _find_terminator(text, pos + 2)
        if end is None:
            return None
        code = text[pos:end]
        return (code, len(code))

    return None


def take_columns(text: str, max_cols: int) -> str:
    """Return the longest prefix of *text* that fits in *max_cols* columns.

    ANSI codes are copied through and take no columns. The visible text is
    cut at grapheme boundaries, so combining marks and emoji sequences are
    never split.
    """
    result: list[str] = []
    cols = 0
    i = 0

    while i < len(text):
        extracted = extract_ansi_code(text, i)
        if extracted is not None:
            code, length = extracted
            result.append(code)
            i += length
            continue

        end = text.find("\x1b", i + 1)
        if end == -1:
            end = len(text)

        for g in grapheme.graphemes(text[i:end]):
            w = _grapheme_width(g)
            if cols + w > max_cols:
                return "".join(result)
            result.append(g)
            cols += w
        i = end

    return "".join(result)


def truncate(text: str, max_width: int) -> str:
    """Clip *text* to *max_width* columns, ending with a single ellipsis.

    Text that already fits is returned unchanged. Otherwise ``max_width - 1``
    columns are kept and ``…`` is appended; with ``max_width <= 1`` there is
    no room for anything meaningful and the result is empty. Styling in the
    kept prefix also covers the ellipsis and is reset after it.

    >>> truncate("Long text here", 10)
    'Long text…'
    >>> truncate("Hi", 1)
    ''
    """
    if visible_width(text) <= max_width:
        return text

    if max_width <= 1:
        return ""

    kept = take_columns(text, max_width - 1)
    if _STRIP_RE.search(kept):
        return kept + ELLIPSIS + ANSI_RESET
    return kept + ELLIPSIS


def center_text(text: str, width: int) -> str:
    """Left-pad *text* so it sits centred in *width* columns."""
    spaces = (width - visible_width(text)) // 2
    return " " * max(0, spaces) + text


def wrap_to_width(text: str, max_width: int) -> list[str]:
    """Word-wrap a multi-line string to *max_width* columns.

    Blank lines are kept as paragraph breaks and lines are broken greedily at
    spaces. Single words wider than the limit are left intact; callers clip
    them with :func:`truncate` when drawing.
    """
    lines: list[str] = []
    for raw in text.split("\n"):
        if not raw.strip():
            lines.append("")
            continue
        lines.extend(_wrap_one_line(raw, max_width))
    return lines


def _wrap_one_line(line: str, max_width: int) -> list[str]:
    if max_width <= 2:
        return [line]

    result: list[str] = []
    current = ""
    current_width = 0

    for word in line.split():
        word_width = visible_width(word)
        if not current:
            current = word
            current_width = word_width
            continue

        if current_width + 1 + word_width <= max_width:
            current += " " + word
            current_width += 1 + word_width
            continue

        result.append(current)
        current = word
        current_width = word_width

    if current:
        result.append(current)

    return result
