"""Edit routines and dispatch.

Each edit type maps to one apply routine with the signature
``(edit, files, settings) -> EditReport``. Routines raise ``EditError`` on
failure; ``apply_edit`` turns either result into an outcome.
"""

import logging
from typing import Callable, Dict

from apply_edits.config import EditSettings
from apply_edits.edits.base import EditReport
from apply_edits.edits.delete import apply_delete_file, apply_delete_lines, apply_delete_match
from apply_edits.edits.file_ops import apply_append, apply_create, apply_prepend
from apply_edits.edits.insert import apply_insert_after, apply_insert_at_line, apply_insert_before
from apply_edits.edits.replace import apply_replace, apply_replace_all
from apply_edits.errors import EditError
from apply_edits.files import WorkspaceFiles
from apply_edits.models.edits import Edit
from apply_edits.models.enums import EditType
from apply_edits.models.outcomes import EditOutcome, ErrorOutcome, OkOutcome, WarningOutcome

logger = logging.getLogger(__name__)

ApplyRoutine = Callable[[Edit, WorkspaceFiles, EditSettings], EditReport]

APPLY_ROUTINES: Dict[str, ApplyRoutine] = {
    EditType.REPLACE.value: apply_replace,
    EditType.REPLACE_ALL.value: apply_replace_all,
    EditType.INSERT_AFTER.value: apply_insert_after,
    EditType.INSERT_BEFORE.value: apply_insert_before,
    EditType.INSERT_AT_LINE.value: apply_insert_at_line,
    EditType.CREATE.value: apply_create,
    EditType.DELETE_FILE.value: apply_delete_file,
    EditType.DELETE_LINES.value: apply_delete_lines,
    EditType.DELETE_MATCH.value: apply_delete_match,
    EditType.APPEND.value: apply_append,
    EditType.PREPEND.value: apply_prepend,
}


def apply_edit(
    index: int,
    edit: Edit,
    files: WorkspaceFiles,
    settings: EditSettings,
    message_suffix: str = "",
) -> EditOutcome:
    """Apply one edit and describe what happened.

    Args:
        index: Position of the edit in the request
        edit: The edit to apply
        files: File store the routine reads and writes through
        settings: Matching and diagnostics settings
        message_suffix: Appended to ok/warning messages (used for dry runs)

    Returns:
        An ok, warning or error outcome
    """
    try:
        files.resolve(edit.path)
        report = APPLY_ROUTINES[edit.type](edit, files, settings)
    except EditError as e:
        logger.debug(f"Edit {index} ({edit.type} {edit.path}) failed: {e.code}: {e.message}")
        return ErrorOutcome.from_error(index, edit.path, edit.type, e)

    message = report.message + message_suffix
    if report.warning is not None:
        return WarningOutcome(
            index=index,
            path=edit.path,
            edit_type=edit.type,
            warning=report.warning,
            message=message,
        )
    return OkOutcome(
        index=index,
        path=edit.path,
        edit_type=edit.type,
        lines_affected=report.lines_affected,
        message=message,
    )


__all__ = ["APPLY_ROUTINES", "EditReport", "apply_edit"]
