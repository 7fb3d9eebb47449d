"""Insert routines. Insertion is always whole-line."""

from apply_edits.config import EditSettings
from apply_edits.edits.base import EditReport, line_range, not_found
from apply_edits.errors import AnchorNotFoundError, InvalidEditError, LineOutOfRangeError
from apply_edits.files import WorkspaceFiles
from apply_edits.matcher import insert_after_line, insert_at_line, insert_before_line, split_lines
from apply_edits.models.edits import InsertAfterEdit, InsertAtLineEdit, InsertBeforeEdit


def _inserted_lines(first_line: int, content: str):
    return line_range(first_line, first_line + max(len(split_lines(content)), 1) - 1)


def apply_insert_after(edit: InsertAfterEdit, files: WorkspaceFiles, settings: EditSettings) -> EditReport:
    if not edit.anchor:
        raise InvalidEditError("Anchor string cannot be empty")

    content = files.read_text(edit.path)
    inserted = insert_after_line(content, edit.anchor, edit.content)
    if inserted is None:
        raise not_found(AnchorNotFoundError, edit.path, content, edit.anchor, settings)

    new_content, first_line = inserted
    files.write_text(edit.path, new_content)
    return EditReport(
        message=f"Inserted after anchor at line {first_line - 1}",
        lines_affected=_inserted_lines(first_line, edit.content),
    )


def apply_insert_before(edit: InsertBeforeEdit, files: WorkspaceFiles, settings: EditSettings) -> EditReport:
    if not edit.anchor:
        raise InvalidEditError("Anchor string cannot be empty")

    content = files.read_text(edit.path)
    inserted = insert_before_line(content, edit.anchor, edit.content)
    if inserted is None:
        raise not_found(AnchorNotFoundError, edit.path, content, edit.anchor, settings)

    new_content, first_line = inserted
    files.write_text(edit.path, new_content)
    return EditReport(
        message=f"Inserted before anchor at line {first_line}",
        lines_affected=_inserted_lines(first_line, edit.content),
    )


def apply_insert_at_line(edit: InsertAtLineEdit, files: WorkspaceFiles, settings: EditSettings) -> EditReport:
    """Insert at a 1-indexed line; ``total_lines + 1`` appends."""
    if edit.line < 1:
        raise InvalidEditError("Line number must be >= 1")

    content = files.read_text(edit.path)
    total_lines = len(split_lines(content))
    new_content = insert_at_line(content, edit.line, edit.content)
    if new_content is None:
        raise LineOutOfRangeError(edit.path, edit.line, total_lines)

    files.write_text(edit.path, new_content)
    return EditReport(
        message=f"Inserted at line {edit.line}",
        lines_affected=_inserted_lines(edit.line, edit.content),
    )
