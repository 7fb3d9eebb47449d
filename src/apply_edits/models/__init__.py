"""Request, outcome and read models for apply-edits."""

from apply_edits.models.edits import (
    AppendEdit,
    CreateEdit,
    DeleteFileEdit,
    DeleteLinesEdit,
    DeleteMatchEdit,
    Edit,
    EditRequest,
    InsertAfterEdit,
    InsertAtLineEdit,
    InsertBeforeEdit,
    PrependEdit,
    ReplaceAllEdit,
    ReplaceEdit,
    parse_edit,
)
from apply_edits.models.enums import CorrectionType, EditType, OutcomeStatus, ReadFormat
from apply_edits.models.outcomes import (
    ApplyResult,
    ClosestMatch,
    EditOutcome,
    ErrorOutcome,
    OkOutcome,
    WarningOutcome,
)
from apply_edits.models.read import FileReadResult, MultiFileReadResult

__all__ = [
    "AppendEdit",
    "ApplyResult",
    "ClosestMatch",
    "CorrectionType",
    "CreateEdit",
    "DeleteFileEdit",
    "DeleteLinesEdit",
    "DeleteMatchEdit",
    "Edit",
    "EditOutcome",
    "EditRequest",
    "EditType",
    "ErrorOutcome",
    "FileReadResult",
    "InsertAfterEdit",
    "InsertAtLineEdit",
    "InsertBeforeEdit",
    "MultiFileReadResult",
    "OkOutcome",
    "OutcomeStatus",
    "PrependEdit",
    "ReadFormat",
    "ReplaceAllEdit",
    "ReplaceEdit",
    "WarningOutcome",
    "parse_edit",
]
