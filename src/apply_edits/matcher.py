"""String matching for edit operations.

Provides literal matching (never regex, so metacharacters in source code match
themselves), line-indexed insert/delete helpers, indentation-normalized
fallback matching, and similarity ranking for diagnostics.

Line views split on ``\\n`` and drop a trailing ``\\r``, like most editors.
Results are re-joined with the file's own line break and keep its
trailing-newline convention.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from rapidfuzz.distance import Levenshtein

from apply_edits.constants import CONTEXT_LINES
from apply_edits.models.outcomes import ClosestMatch

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Line helpers
# ---------------------------------------------------------------------------


def split_lines(text: str) -> List[str]:
    """Split text into lines without terminators.

    A trailing line break does not produce an empty final line, and an empty
    string has no lines.
    """
    if not text:
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def detect_newline(text: str) -> str:
    """Return the line break used by ``text`` (CRLF if present, else LF)."""
    return "\r\n" if "\r\n" in text else "\n"


def join_lines(lines: List[str], newline: str = "\n", trailing: bool = False) -> str:
    result = newline.join(lines)
    if trailing and lines:
        result += newline
    return result


def _line_spans(content: str) -> List[Tuple[int, int]]:
    """Offsets ``(start, end)`` of each line, ``end`` excluding the line break."""
    spans = []
    start = 0
    length = len(content)
    while start < length:
        nl = content.find("\n", start)
        if nl == -1:
            spans.append((start, length))
            break
        end = nl - 1 if nl > start and content[nl - 1] == "\r" else nl
        spans.append((start, end))
        start = nl + 1
    return spans


def leading_width(line: str) -> int:
    return len(line) - len(line.lstrip())


def _as_new_lines(text: str) -> List[str]:
    """Lines to insert for ``text``; one trailing line break is absorbed."""
    return split_lines(text) or [""]


# ---------------------------------------------------------------------------
# Literal matcher
# ---------------------------------------------------------------------------


def find_literal(content: str, search: str) -> Optional[int]:
    """Offset of the first literal occurrence of ``search``, or None."""
    pos = content.find(search)
    return pos if pos != -1 else None


def count_occurrences(content: str, search: str) -> int:
    """Count non-overlapping literal occurrences."""
    if not search:
        return 0
    return content.count(search)


def replace_first(content: str, search: str, replacement: str) -> Optional[str]:
    """Replace the first occurrence; None when ``search`` is absent."""
    pos = find_literal(content, search)
    if pos is None:
        return None
    return content[:pos] + replacement + content[pos + len(search):]


def replace_all(content: str, search: str, replacement: str) -> str:
    return content.replace(search, replacement)


def find_line_with_anchor(content: str, anchor: str) -> Optional[int]:
    """1-indexed number of the first line containing ``anchor``."""
    for i, line in enumerate(split_lines(content)):
        if anchor in line:
            return i + 1
    return None


def offset_to_line(content: str, pos: int) -> int:
    """1-indexed line number for a string offset."""
    return content.count("\n", 0, pos) + 1


def get_affected_lines(content: str, pos: int, length: int) -> Tuple[int, int]:
    """``(start_line, end_line)`` covered by ``content[pos:pos + length]``."""
    start_line = offset_to_line(content, pos)
    matched = content[pos:pos + length].rstrip("\r\n")
    return start_line, start_line + matched.count("\n")


def truncate_preview(text: str, max_len: int) -> str:
    """Truncate to ``max_len`` characters, marking the cut with '...'."""
    if len(text) <= max_len:
        return text
    return text[: max(max_len - 3, 0)] + "..."


def insert_after_line(content: str, anchor: str, new_content: str) -> Optional[Tuple[str, int]]:
    """Insert whole lines after the first line containing ``anchor``.

    Returns:
        ``(new_content, first_inserted_line)`` or None if the anchor is missing
    """
    lines = split_lines(content)
    for i, line in enumerate(lines):
        if anchor in line:
            result = lines[: i + 1] + _as_new_lines(new_content) + lines[i + 1:]
            return (
                join_lines(result, detect_newline(content), content.endswith("\n")),
                i + 2,
            )
    return None


def insert_before_line(content: str, anchor: str, new_content: str) -> Optional[Tuple[str, int]]:
    """Insert whole lines before the first line containing ``anchor``.

    Returns:
        ``(new_content, first_inserted_line)`` or None if the anchor is missing
    """
    lines = split_lines(content)
    for i, line in enumerate(lines):
        if anchor in line:
            result = lines[:i] + _as_new_lines(new_content) + lines[i:]
            return (
                join_lines(result, detect_newline(content), content.endswith("\n")),
                i + 1,
            )
    return None


def insert_at_line(content: str, line_num: int, new_content: str) -> Optional[str]:
    """Insert whole lines so the new content starts at ``line_num``.

    ``line_num == total_lines + 1`` appends after the last line.
    """
    lines = split_lines(content)
    if line_num < 1 or line_num > len(lines) + 1:
        return None

    idx = line_num - 1
    result = lines[:idx] + _as_new_lines(new_content) + lines[idx:]
    return join_lines(result, detect_newline(content), content.endswith("\n"))


def delete_line_range(content: str, start: int, end: int) -> Optional[str]:
    """Delete lines ``start..end`` (1-indexed, inclusive).

    Blank lines meeting at the deletion seam are collapsed to a single blank
    line so repeated deletions do not accrete empty runs.
    """
    lines = split_lines(content)
    if start < 1 or end < 1 or start > end or end > len(lines):
        return None

    kept = lines[: start - 1] + lines[end:]

    seam = start - 1
    left = seam
    while left > 0 and kept[left - 1] == "":
        left -= 1
    right = seam
    while right < len(kept) and kept[right] == "":
        right += 1
    if right - left >= 2:
        kept = kept[: left + 1] + kept[right:]

    return join_lines(kept, detect_newline(content), content.endswith("\n"))


def delete_matching_lines(content: str, search: str) -> Tuple[str, int]:
    """Delete every line containing ``search``.

    Returns:
        ``(new_content, deleted_count)``
    """
    lines = split_lines(content)
    kept = [line for line in lines if search not in line]
    deleted = len(lines) - len(kept)
    if deleted == 0:
        return content, 0
    return join_lines(kept, detect_newline(content), content.endswith("\n")), deleted


# ---------------------------------------------------------------------------
# Normalized matcher
# ---------------------------------------------------------------------------


def normalize_whitespace(text: str) -> str:
    """Trim trailing whitespace from each line and drop carriage returns."""
    return "\n".join(line.rstrip() for line in split_lines(text))


def normalize_indentation(text: str) -> str:
    """Trim leading and trailing whitespace from each line."""
    return "\n".join(line.strip() for line in split_lines(text))


class MatchKind(str, Enum):
    EXACT = "exact"
    NORMALIZED = "normalized"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class FindResult:
    """Outcome of ``find_with_normalization``."""

    kind: MatchKind
    offset: Optional[int] = None
    line_number: Optional[int] = None
    warning: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.kind != MatchKind.NOT_FOUND


def normalized_windows(content_lines: List[str], search: str, first_only: bool) -> List[int]:
    """0-indexed start lines of non-overlapping windows equal after line trimming."""
    wanted = [line.strip() for line in split_lines(search)]
    if not wanted or not any(wanted):
        return []

    trimmed = [line.strip() for line in content_lines]
    size = len(wanted)
    starts = []
    idx = 0
    while idx + size <= len(trimmed):
        if trimmed[idx:idx + size] == wanted:
            starts.append(idx)
            if first_only:
                break
            idx += size
        else:
            idx += 1
    return starts


def find_with_normalization(content: str, search: str) -> FindResult:
    """Find ``search`` exactly, falling back to indentation-insensitive lines."""
    pos = find_literal(content, search)
    if pos is not None:
        return FindResult(MatchKind.EXACT, offset=pos)

    starts = normalized_windows(split_lines(content), search, first_only=True)
    if not starts:
        return FindResult(MatchKind.NOT_FOUND)

    line_number = starts[0] + 1
    return FindResult(
        MatchKind.NORMALIZED,
        line_number=line_number,
        warning=(
            "Exact match failed due to indentation differences. Found matching "
            f"content at line {line_number} with different whitespace."
        ),
    )


def adjust_indentation(text: str, from_indent: int, base_prefix: str, newline: str = "\n") -> str:
    """Re-base the indentation of ``text`` onto ``base_prefix``.

    Lines indented at least ``from_indent`` keep their whitespace beyond
    ``from_indent`` and get ``base_prefix`` in front of it. Lines indented less
    sit outside the matched block and are left untouched, as are blank lines.
    """
    adjusted = []
    for line in split_lines(text):
        if line.strip() and leading_width(line) >= from_indent:
            line = base_prefix + line[from_indent:]
        adjusted.append(line)
    return join_lines(adjusted, newline, text.endswith("\n"))


def _reindented_window(
    content: str,
    spans: List[Tuple[int, int]],
    start_idx: int,
    search: str,
    replacement: str,
) -> Tuple[int, int, str]:
    """Span of a normalized window and the replacement re-based onto it."""
    search_lines = split_lines(search)
    first_span = spans[start_idx]
    last_span = spans[start_idx + len(search_lines) - 1]
    span_start, span_end = first_span[0], last_span[1]

    # A search ending in a line break also consumed the window's final break
    if search.endswith("\n"):
        nl = content.find("\n", span_end)
        if nl != -1:
            span_end = nl + 1

    actual_first = content[first_span[0]:first_span[1]]
    search_indent = leading_width(search_lines[0])
    actual_prefix = actual_first[: leading_width(actual_first)]

    newline = detect_newline(content)
    if len(actual_prefix) != search_indent or not actual_prefix.startswith(" " * search_indent):
        replacement = adjust_indentation(replacement, search_indent, actual_prefix, newline)
    else:
        replacement = join_lines(split_lines(replacement), newline, replacement.endswith("\n"))
    return span_start, span_end, replacement


def replace_with_normalization(content: str, search: str, replacement: str) -> Optional[Tuple[str, str]]:
    """Replace ``search`` tolerating indentation drift.

    An exact match is replaced as-is. Otherwise the first window whose lines
    match after trimming is replaced, with ``replacement`` re-indented to the
    file's real indentation.

    Returns:
        ``(new_content, note)`` or None when nothing matched
    """
    result = find_with_normalization(content, search)
    if result.kind == MatchKind.EXACT:
        return replace_first(content, search, replacement), "Exact match"
    if result.kind == MatchKind.NOT_FOUND:
        return None

    spans = _line_spans(content)
    start, end, adjusted = _reindented_window(
        content, spans, result.line_number - 1, search, replacement
    )
    logger.debug(result.warning)
    return content[:start] + adjusted + content[end:], result.warning


def replace_all_with_normalization(content: str, search: str, replacement: str) -> Optional[Tuple[str, int]]:
    """Replace every non-overlapping indentation-insensitive window.

    Returns:
        ``(new_content, replaced_count)`` or None when nothing matched
    """
    starts = normalized_windows(split_lines(content), search, first_only=False)
    if not starts:
        return None

    spans = _line_spans(content)
    new_content = content
    # Back to front so earlier offsets stay valid
    for start_idx in reversed(starts):
        start, end, adjusted = _reindented_window(
            content, spans, start_idx, search, replacement
        )
        new_content = new_content[:start] + adjusted + new_content[end:]
    return new_content, len(starts)


# ---------------------------------------------------------------------------
# Similarity ranker
# ---------------------------------------------------------------------------


def similarity(a: str, b: str) -> float:
    """Edit distance normalized by the longer string, as a score in [0, 1]."""
    return Levenshtein.normalized_similarity(a, b)


def find_closest_matches(
    content: str,
    search: str,
    threshold: float,
    max_results: int,
) -> List[ClosestMatch]:
    """Rank line windows of ``content`` by similarity to ``search``.

    Every start line gets a window with the same number of lines as
    ``search`` (shorter at the end of the file). Windows scoring at least
    ``threshold`` are returned best first, with up to two lines of context on
    each side.
    """
    search_lines = split_lines(search)
    content_lines = split_lines(content)
    if not search_lines or not content_lines or max_results <= 0:
        return []

    window_size = len(search_lines)
    candidates = []
    for start in range(len(content_lines)):
        end = min(start + window_size, len(content_lines))
        window = "\n".join(content_lines[start:end])
        score = Levenshtein.normalized_similarity(search, window, score_cutoff=threshold)
        if score >= threshold and (score > 0 or threshold == 0):
            candidates.append(
                ClosestMatch(
                    line=start + 1,
                    similarity=score,
                    content=window,
                    context_before=content_lines[max(start - CONTEXT_LINES, 0):start],
                    context_after=content_lines[end:end + CONTEXT_LINES],
                )
            )

    candidates.sort(key=lambda m: m.similarity, reverse=True)
    return candidates[:max_results]
