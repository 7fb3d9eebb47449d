"""Error types for edit operations.

Every apply routine raises an ``EditError`` subclass on failure. The ``code``
attribute is the stable, machine-readable kind reported in JSON outcomes.
"""

from typing import List, Optional

from apply_edits.constants import HINT_SIMILAR, HINT_VERY_CLOSE
from apply_edits.models.outcomes import ClosestMatch


class EditError(Exception):
    """Base class for all per-edit failures."""

    code = "edit_error"

    # Only search/anchor failures carry diagnostics
    search_preview: Optional[str] = None
    closest_matches: Optional[List[ClosestMatch]] = None

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def hint(self) -> Optional[str]:
        return None


class FileNotFoundEditError(EditError):
    code = "file_not_found"

    def __init__(self, path: str):
        super().__init__(f"File not found: {path}")
        self.path = path


class MatchNotFoundError(EditError):
    """Shared shape for search/anchor misses with ranked closest matches."""

    label = "Search string"

    def __init__(
        self, path: str, preview: str, closest_matches: List[ClosestMatch]
    ):
        super().__init__(f"{self.label} not found in file: {path}")
        self.path = path
        self.search_preview = preview
        self.closest_matches = list(closest_matches)

    @property
    def hint(self) -> Optional[str]:
        return hint_for_closest_matches(self.closest_matches or [])


class SearchNotFoundError(MatchNotFoundError):
    code = "search_not_found"
    label = "Search string"


class AnchorNotFoundError(MatchNotFoundError):
    code = "anchor_not_found"
    label = "Anchor string"


class LineOutOfRangeError(EditError):
    code = "line_out_of_range"

    def __init__(self, path: str, line: int, total_lines: int):
        super().__init__(
            f"Line {line} out of range (file has {total_lines} lines): {path}"
        )
        self.path = path
        self.line = line
        self.total_lines = total_lines


class InvalidLineRangeError(EditError):
    code = "invalid_line_range"

    def __init__(self, path: str, start_line: int, end_line: int, total_lines: int):
        super().__init__(
            f"Invalid line range {start_line}-{end_line} "
            f"(file has {total_lines} lines): {path}"
        )
        self.path = path
        self.start_line = start_line
        self.end_line = end_line
        self.total_lines = total_lines


class _IOEditError(EditError):
    action = "access"

    def __init__(self, path: str, reason: str):
        super().__init__(f"Failed to {self.action}: {path} - {reason}")
        self.path = path
        self.reason = reason


class ReadError(_IOEditError):
    code = "read_error"
    action = "read file"


class WriteError(_IOEditError):
    code = "write_error"
    action = "write file"


class DirectoryError(_IOEditError):
    code = "directory_error"
    action = "create directory"


class DeleteError(_IOEditError):
    code = "delete_error"
    action = "delete file"


class MultipleMatchesError(EditError):
    code = "multiple_matches"

    def __init__(self, path: str, count: int, preview: str):
        super().__init__(
            f"Multiple matches found ({count}) - search string is not unique: {path}"
        )
        self.path = path
        self.count = count
        self.search_preview = preview


class InvalidEditError(EditError):
    code = "invalid_edit"

    def __init__(self, reason: str):
        super().__init__(f"Invalid edit: {reason}")
        self.reason = reason


def hint_for_closest_matches(closest_matches: List[ClosestMatch]) -> str:
    """Generate a human hint tiered by the best candidate's similarity."""
    if not closest_matches:
        return "No similar content found. The file may have changed significantly."

    best = closest_matches[0]
    if best.similarity > HINT_VERY_CLOSE:
        return (
            f"Very close match at line {best.line}. "
            "Check for minor differences (whitespace, punctuation)."
        )
    if best.similarity > HINT_SIMILAR:
        return (
            f"Similar content found at line {best.line}. "
            "The code may have been modified."
        )
    return (
        f"Partial match at line {best.line} ({int(best.similarity * 100)}% similar). "
        "The code structure may have changed."
    )
