"""Whole-file operations: create, append and prepend."""

from apply_edits.config import EditSettings
from apply_edits.edits.base import EditReport, plural
from apply_edits.files import WorkspaceFiles
from apply_edits.matcher import detect_newline, split_lines
from apply_edits.models.edits import AppendEdit, CreateEdit, PrependEdit


def _strip_one_trailing_break(text: str) -> str:
    if text.endswith("\r\n"):
        return text[:-2]
    if text.endswith("\n"):
        return text[:-1]
    return text


def _strip_one_leading_break(text: str) -> str:
    if text.startswith("\r\n"):
        return text[2:]
    if text.startswith("\n"):
        return text[1:]
    return text


def apply_create(edit: CreateEdit, files: WorkspaceFiles, settings: EditSettings) -> EditReport:
    """Create or overwrite a file, making parent directories as needed."""
    files.write_text(edit.path, edit.content)
    line_count = len(split_lines(edit.content))
    byte_count = len(edit.content.encode("utf-8"))
    return EditReport(message=f"Created file ({line_count} lines, {byte_count} bytes)")


def apply_append(edit: AppendEdit, files: WorkspaceFiles, settings: EditSettings) -> EditReport:
    """Append content separated from the existing text by exactly one line break."""
    existing = files.read_text(edit.path)
    if existing:
        new_content = (
            _strip_one_trailing_break(existing)
            + detect_newline(existing)
            + _strip_one_leading_break(edit.content)
        )
    else:
        new_content = edit.content

    files.write_text(edit.path, new_content)
    return EditReport(message=f"Appended {plural(len(split_lines(edit.content)), 'line')}")


def apply_prepend(edit: PrependEdit, files: WorkspaceFiles, settings: EditSettings) -> EditReport:
    """Prepend content separated from the existing text by exactly one line break."""
    existing = files.read_text(edit.path)
    if existing:
        new_content = (
            _strip_one_trailing_break(edit.content)
            + detect_newline(existing)
            + _strip_one_leading_break(existing)
        )
    else:
        new_content = edit.content

    files.write_text(edit.path, new_content)
    return EditReport(message=f"Prepended {plural(len(split_lines(edit.content)), 'line')}")
