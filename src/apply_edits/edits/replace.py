"""Replace routines: exact match first, then indentation-tolerant fallback."""

import logging

from apply_edits.autocorrect import apply_auto_correction
from apply_edits.config import EditSettings
from apply_edits.edits.base import EditReport, file_extension, line_range, not_found, plural
from apply_edits.errors import InvalidEditError, MultipleMatchesError, SearchNotFoundError
from apply_edits.files import WorkspaceFiles
from apply_edits.matcher import (
    count_occurrences,
    find_literal,
    get_affected_lines,
    replace_all,
    replace_all_with_normalization,
    replace_with_normalization,
    truncate_preview,
)
from apply_edits.models.edits import ReplaceAllEdit, ReplaceEdit

logger = logging.getLogger(__name__)


def _replace_at(content: str, pos: int, search: str, replacement: str) -> str:
    return content[:pos] + replacement + content[pos + len(search):]


def _replaced_message(start_line: int, end_line: int) -> str:
    if start_line == end_line:
        return f"Replaced 1 occurrence (line {start_line})"
    return f"Replaced 1 occurrence (lines {start_line}-{end_line})"


def apply_replace(edit: ReplaceEdit, files: WorkspaceFiles, settings: EditSettings) -> EditReport:
    """Replace the first occurrence of ``edit.search``.

    Falls back to indentation-normalized matching, then (when enabled) to an
    auto-corrected search string. Raises SearchNotFoundError with ranked
    closest matches when everything fails.
    """
    if not edit.search:
        raise InvalidEditError("Search string cannot be empty")

    content = files.read_text(edit.path)

    pos = find_literal(content, edit.search)
    if pos is not None:
        if settings.require_unique_match:
            occurrences = count_occurrences(content, edit.search)
            if occurrences > 1:
                raise MultipleMatchesError(
                    edit.path,
                    occurrences,
                    truncate_preview(edit.search, settings.preview_length),
                )
        start_line, end_line = get_affected_lines(content, pos, len(edit.search))
        files.write_text(edit.path, _replace_at(content, pos, edit.search, edit.replace))
        return EditReport(
            message=_replaced_message(start_line, end_line),
            lines_affected=line_range(start_line, end_line),
        )

    normalized = replace_with_normalization(content, edit.search, edit.replace)
    if normalized is not None:
        new_content, note = normalized
        logger.info(f"Indentation-normalized match used in {edit.path}")
        files.write_text(edit.path, new_content)
        return EditReport(message=f"Replaced with indentation adjustment ({note})")

    if settings.autocorrect_threshold is not None:
        correction = apply_auto_correction(
            content, edit.search, file_extension(edit.path), settings.autocorrect_threshold
        )
        pos = find_literal(content, correction.suggested_search) if correction else None
        if pos is not None:
            logger.info(
                f"Auto-corrected search in {edit.path}: {correction.reason} "
                f"(confidence {correction.confidence:.2f})"
            )
            start_line, end_line = get_affected_lines(content, pos, len(correction.suggested_search))
            files.write_text(
                edit.path, _replace_at(content, pos, correction.suggested_search, edit.replace)
            )
            return EditReport(
                message=_replaced_message(start_line, end_line),
                lines_affected=line_range(start_line, end_line),
                warning=f"Auto-corrected search ({correction.correction_type.value}): {correction.reason}",
            )

    raise not_found(SearchNotFoundError, edit.path, content, edit.search, settings)


def apply_replace_all(edit: ReplaceAllEdit, files: WorkspaceFiles, settings: EditSettings) -> EditReport:
    """Replace every occurrence of ``edit.search``.

    Zero occurrences is an error, never a warning.
    """
    if not edit.search:
        raise InvalidEditError("Search string cannot be empty")

    content = files.read_text(edit.path)

    occurrences = count_occurrences(content, edit.search)
    if occurrences > 0:
        files.write_text(edit.path, replace_all(content, edit.search, edit.replace))
        return EditReport(message=f"Replaced {occurrences} occurrence(s)")

    normalized = replace_all_with_normalization(content, edit.search, edit.replace)
    if normalized is not None:
        new_content, replaced = normalized
        files.write_text(edit.path, new_content)
        return EditReport(
            message=f"Replaced {plural(replaced, 'occurrence')} with indentation adjustment"
        )

    raise not_found(SearchNotFoundError, edit.path, content, edit.search, settings)
