"""Delete routines for files, line ranges and matching lines."""

from apply_edits.config import EditSettings
from apply_edits.edits.base import EditReport, line_range
from apply_edits.errors import InvalidEditError, InvalidLineRangeError
from apply_edits.files import WorkspaceFiles
from apply_edits.matcher import delete_line_range, delete_matching_lines, split_lines
from apply_edits.models.edits import DeleteFileEdit, DeleteLinesEdit, DeleteMatchEdit


def apply_delete_file(edit: DeleteFileEdit, files: WorkspaceFiles, settings: EditSettings) -> EditReport:
    """Delete a file. A file that is already gone counts as success."""
    if not files.delete(edit.path):
        return EditReport(message="File did not exist (already deleted)")
    return EditReport(message="Deleted file")


def apply_delete_lines(edit: DeleteLinesEdit, files: WorkspaceFiles, settings: EditSettings) -> EditReport:
    if edit.start_line < 1 or edit.end_line < 1:
        raise InvalidEditError("Line numbers must be >= 1")
    if edit.start_line > edit.end_line:
        raise InvalidEditError(
            f"start_line ({edit.start_line}) must be <= end_line ({edit.end_line})"
        )

    content = files.read_text(edit.path)
    total_lines = len(split_lines(content))
    new_content = delete_line_range(content, edit.start_line, edit.end_line)
    if new_content is None:
        raise InvalidLineRangeError(edit.path, edit.start_line, edit.end_line, total_lines)

    files.write_text(edit.path, new_content)
    affected = line_range(edit.start_line, edit.end_line)
    if len(affected) == 1:
        return EditReport(message=f"Deleted line {edit.start_line}", lines_affected=affected)
    return EditReport(
        message=f"Deleted {len(affected)} lines ({edit.start_line}-{edit.end_line})",
        lines_affected=affected,
    )


def apply_delete_match(edit: DeleteMatchEdit, files: WorkspaceFiles, settings: EditSettings) -> EditReport:
    """Delete every line containing the search string.

    Nothing matching is a warning rather than an error.
    """
    if not edit.search:
        raise InvalidEditError("Search string cannot be empty")

    content = files.read_text(edit.path)
    new_content, deleted = delete_matching_lines(content, edit.search)
    if deleted == 0:
        return EditReport(
            message="No matching lines found (nothing deleted)",
            warning="No matching lines found (nothing deleted)",
        )

    files.write_text(edit.path, new_content)
    if deleted == 1:
        return EditReport(message="Deleted 1 matching line")
    return EditReport(message=f"Deleted {deleted} matching lines")
