"""Shared pieces for edit routines."""

import os
from dataclasses import dataclass
from typing import List, Optional, Type

from apply_edits.config import EditSettings
from apply_edits.errors import MatchNotFoundError
from apply_edits.matcher import find_closest_matches, truncate_preview


@dataclass
class EditReport:
    """What an apply routine reports back on success.

    A report with a ``warning`` becomes a warning outcome; otherwise an ok one.
    """

    message: str
    lines_affected: Optional[List[int]] = None
    warning: Optional[str] = None


def file_extension(path: str) -> str:
    """Extension without the dot; the basename for extensionless files like Makefile."""
    base = os.path.basename(path)
    root, ext = os.path.splitext(base)
    return ext[1:].lower() if ext else root.lower()


def line_range(start: int, end: int) -> List[int]:
    return list(range(start, end + 1))


def plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def not_found(
    error_cls: Type[MatchNotFoundError],
    path: str,
    content: str,
    needle: str,
    settings: EditSettings,
) -> MatchNotFoundError:
    """Build a search/anchor miss with ranked closest matches attached."""
    closest = find_closest_matches(
        content, needle, settings.similarity_threshold, settings.max_closest_matches
    )
    return error_cls(path, truncate_preview(needle, settings.preview_length), closest)
