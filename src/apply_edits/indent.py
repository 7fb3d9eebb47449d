"""Indentation detection and conversion."""

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from functools import reduce
from math import gcd
from typing import List, Optional

from apply_edits.constants import (
    DEFAULT_INDENT,
    INDENT_SAMPLE_LINES,
    LANGUAGE_INDENT_DEFAULTS,
    MAX_INDENT_WIDTH,
    MIN_INDENT_WIDTH,
    MIXED_INDENT_RATIO,
)


class IndentKind(str, Enum):
    SPACES = "spaces"
    TABS = "tabs"
    MIXED = "mixed"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class IndentStyle:
    """An indentation convention. ``width`` is set only for spaces."""

    kind: IndentKind
    width: Optional[int] = None

    def __post_init__(self):
        if self.kind == IndentKind.SPACES:
            if self.width is None or not MIN_INDENT_WIDTH <= self.width <= MAX_INDENT_WIDTH:
                raise ValueError(
                    f"Space indentation width must be between {MIN_INDENT_WIDTH} "
                    f"and {MAX_INDENT_WIDTH}, got {self.width}"
                )
        elif self.width is not None:
            raise ValueError(f"{self.kind.value} indentation has no width")

    @classmethod
    def spaces(cls, width: int) -> "IndentStyle":
        return cls(IndentKind.SPACES, width)

    @classmethod
    def tabs(cls) -> "IndentStyle":
        return cls(IndentKind.TABS)

    @classmethod
    def mixed(cls) -> "IndentStyle":
        return cls(IndentKind.MIXED)

    @classmethod
    def unknown(cls) -> "IndentStyle":
        return cls(IndentKind.UNKNOWN)

    def __str__(self) -> str:
        if self.kind == IndentKind.SPACES:
            return f"Spaces({self.width})"
        return self.kind.value.capitalize()


def _style_from_default(kind: str, width: Optional[int]) -> IndentStyle:
    if kind == "tabs":
        return IndentStyle.tabs()
    return IndentStyle.spaces(width)


def language_default_indent(extension: str) -> IndentStyle:
    """Conventional indentation for a file extension (without the dot)."""
    kind, width = LANGUAGE_INDENT_DEFAULTS.get(extension.lower().lstrip("."), DEFAULT_INDENT)
    return _style_from_default(kind, width)


def _leading(line: str) -> str:
    return line[: len(line) - len(line.lstrip(" \t"))]


def _base_width(widths: Counter) -> Optional[int]:
    """Pick the base space unit from observed leading-space widths.

    Uses the GCD of the five most frequent widths. A GCD of 1 or one above the
    maximum is treated as noise, in which case the most frequent width wins.
    """
    # Most frequent first, ties broken by the narrower width
    ranked = sorted(widths.items(), key=lambda item: (-item[1], item[0]))
    top = [width for width, _ in ranked[:5]]
    if not top:
        return None

    base = reduce(gcd, top)
    if base == 1 or base > MAX_INDENT_WIDTH:
        base = top[0]
    if MIN_INDENT_WIDTH <= base <= MAX_INDENT_WIDTH:
        return base
    return None


def detect_indent_style(content: str, extension: str = "") -> IndentStyle:
    """Infer the indentation convention of ``content``.

    Args:
        content: File content to sample (first 100 lines)
        extension: File extension used for the fallback default

    Returns:
        Tabs, Mixed or Spaces(width); the language default when the sample
        carries no signal
    """
    tab_lines = 0
    space_lines = 0
    widths: Counter = Counter()

    for line in content.splitlines()[:INDENT_SAMPLE_LINES]:
        if not line.strip():
            continue
        leading = _leading(line)
        if not leading:
            continue
        if leading[0] == "\t":
            tab_lines += 1
        elif leading[0] == " ":
            space_lines += 1
            widths[len(leading)] += 1

    indented = tab_lines + space_lines
    if indented == 0:
        return language_default_indent(extension)

    if tab_lines > space_lines:
        if space_lines / indented > MIXED_INDENT_RATIO:
            return IndentStyle.mixed()
        return IndentStyle.tabs()

    base = _base_width(widths)
    if base is None:
        return language_default_indent(extension)
    return IndentStyle.spaces(base)


def _convert_line(line: str, from_style: IndentStyle, to_style: IndentStyle) -> str:
    leading = _leading(line)
    if not leading:
        return line
    body = line[len(leading):]
    tabs = leading.count("\t")
    spaces = len(leading) - tabs

    if from_style.kind == IndentKind.SPACES and to_style.kind == IndentKind.SPACES:
        total = spaces + tabs * from_style.width
        level, remainder = divmod(total, from_style.width)
        return " " * (level * to_style.width + remainder) + body

    if from_style.kind == IndentKind.SPACES and to_style.kind == IndentKind.TABS:
        total = spaces + tabs * from_style.width
        level, remainder = divmod(total, from_style.width)
        return "\t" * level + " " * remainder + body

    # Tabs to spaces
    return " " * (tabs * to_style.width + spaces) + body


def convert_indentation(text: str, from_style: IndentStyle, to_style: IndentStyle) -> str:
    """Rewrite the leading whitespace of every line from one style to another.

    Only Spaces->Spaces, Spaces->Tabs and Tabs->Spaces are converted; any
    other combination returns ``text`` unchanged. A trailing newline is kept.
    """
    convertible = (
        (from_style.kind == IndentKind.SPACES and to_style.kind in (IndentKind.SPACES, IndentKind.TABS))
        or (from_style.kind == IndentKind.TABS and to_style.kind == IndentKind.SPACES)
    )
    if from_style == to_style or not convertible:
        return text

    lines: List[str] = text.split("\n")
    return "\n".join(_convert_line(line, from_style, to_style) for line in lines)
