"""Enums for apply-edits models."""

from enum import Enum


class EditType(str, Enum):
    """Tag values of the Edit union."""

    REPLACE = "replace"
    REPLACE_ALL = "replace_all"
    INSERT_AFTER = "insert_after"
    INSERT_BEFORE = "insert_before"
    INSERT_AT_LINE = "insert_at_line"
    CREATE = "create"
    DELETE_FILE = "delete_file"
    DELETE_LINES = "delete_lines"
    DELETE_MATCH = "delete_match"
    APPEND = "append"
    PREPEND = "prepend"


class OutcomeStatus(str, Enum):
    """Status values for per-edit outcomes."""

    OK = "ok"
    WARNING = "warning"
    ERROR = "error"


class CorrectionType(str, Enum):
    """Kinds of auto-correction the suggester can propose."""

    INDENTATION = "indentation"
    TRAILING_WHITESPACE = "trailing_whitespace"
    LINE_ENDING = "line_ending"
    FUZZY = "fuzzy"
    TYPO = "typo"


class ReadFormat(str, Enum):
    """Output formats for the read command."""

    JSON = "json"
    PROMPT = "prompt"
