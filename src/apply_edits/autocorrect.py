"""Auto-correction suggestions for search strings that do not match.

Each heuristic proposes a replacement search string with a confidence score.
Heuristics run in a fixed order and the first one that applies wins.
"""

import logging
from typing import List, Optional

from pydantic import BaseModel, Field

from apply_edits.constants import (
    FUZZY_MIN_SIMILARITY,
    INDENTATION_CONFIDENCE,
    LINE_ENDING_CONFIDENCE,
    MAX_CLOSEST_MATCHES,
    SIMILARITY_THRESHOLD,
    TRAILING_WHITESPACE_CONFIDENCE,
    TYPO_CONFIDENCE,
    TYPO_MAX_LENGTH,
    TYPO_MIN_LENGTH,
)
from apply_edits.indent import detect_indent_style
from apply_edits.matcher import (
    detect_newline,
    find_closest_matches,
    leading_width,
    normalized_windows,
    split_lines,
)
from apply_edits.models.enums import CorrectionType
from apply_edits.models.outcomes import ClosestMatch

logger = logging.getLogger(__name__)


class AutoCorrection(BaseModel):
    """A proposed fix for a search string."""

    original_search: str
    suggested_search: str
    confidence: float = Field(..., ge=0.0, le=1.0)
    reason: str
    correction_type: CorrectionType


def try_indentation_correction(content: str, search: str, extension: str = "") -> Optional[AutoCorrection]:
    content_lines = split_lines(content)
    starts = normalized_windows(content_lines, search, first_only=True)
    if not starts:
        return None

    start = starts[0]
    search_lines = split_lines(search)
    window = content_lines[start:start + len(search_lines)]
    search_indent = leading_width(search_lines[0])
    actual_indent = leading_width(window[0])

    return AutoCorrection(
        original_search=search,
        suggested_search=detect_newline(content).join(window),
        confidence=INDENTATION_CONFIDENCE,
        reason=(
            f"Search had {search_indent} leading spaces, file has {actual_indent} "
            f"({detect_indent_style(content, extension)})"
        ),
        correction_type=CorrectionType.INDENTATION,
    )


def try_trailing_whitespace_correction(content: str, search: str) -> Optional[AutoCorrection]:
    trimmed = "\n".join(line.rstrip(" \t") for line in search.split("\n"))
    if trimmed == search or trimmed not in content:
        return None

    return AutoCorrection(
        original_search=search,
        suggested_search=trimmed,
        confidence=TRAILING_WHITESPACE_CONFIDENCE,
        reason="Removed trailing whitespace from search string",
        correction_type=CorrectionType.TRAILING_WHITESPACE,
    )


def try_line_ending_correction(content: str, search: str) -> Optional[AutoCorrection]:
    if "\r\n" in search and "\r\n" not in content:
        candidate = search.replace("\r\n", "\n")
        reason = "Converted CRLF to LF line endings"
    elif "\r\n" in content and "\r\n" not in search and "\n" in search:
        candidate = search.replace("\n", "\r\n")
        reason = "Converted LF to CRLF line endings"
    else:
        return None

    if candidate not in content:
        return None

    return AutoCorrection(
        original_search=search,
        suggested_search=candidate,
        confidence=LINE_ENDING_CONFIDENCE,
        reason=reason,
        correction_type=CorrectionType.LINE_ENDING,
    )


def try_fuzzy_match_correction(search: str, closest_matches: List[ClosestMatch]) -> Optional[AutoCorrection]:
    if not closest_matches:
        return None

    best = closest_matches[0]
    if best.similarity < FUZZY_MIN_SIMILARITY:
        return None

    return AutoCorrection(
        original_search=search,
        suggested_search=best.content,
        confidence=best.similarity,
        reason=f"Found {int(best.similarity * 100)}% similar content at line {best.line}",
        correction_type=CorrectionType.FUZZY,
    )


def try_typo_correction(content: str, search: str) -> Optional[AutoCorrection]:
    """Look for the search string with one extra character removed."""
    if not TYPO_MIN_LENGTH <= len(search) <= TYPO_MAX_LENGTH:
        return None

    for i in range(len(search)):
        candidate = search[:i] + search[i + 1:]
        if candidate in content:
            return AutoCorrection(
                original_search=search,
                suggested_search=candidate,
                confidence=TYPO_CONFIDENCE,
                reason=f"Removed extra character at position {i}",
                correction_type=CorrectionType.TYPO,
            )
    return None


def suggest_correction(
    content: str,
    search: str,
    closest_matches: List[ClosestMatch],
    extension: str = "",
) -> Optional[AutoCorrection]:
    """Return the first applicable correction, or None.

    Order: indentation, trailing whitespace, line ending, fuzzy match, typo.
    """
    return (
        try_indentation_correction(content, search, extension)
        or try_trailing_whitespace_correction(content, search)
        or try_line_ending_correction(content, search)
        or try_fuzzy_match_correction(search, closest_matches)
        or try_typo_correction(content, search)
    )


def apply_auto_correction(
    content: str,
    search: str,
    extension: str,
    threshold: float,
) -> Optional[AutoCorrection]:
    """Suggest a correction and keep it only if it is confident enough.

    Args:
        content: File content being searched
        search: The search string that failed to match
        extension: File extension, used for indentation defaults
        threshold: Minimum confidence required

    Returns:
        The correction, or None when there is none or it falls below threshold
    """
    closest = find_closest_matches(content, search, SIMILARITY_THRESHOLD, MAX_CLOSEST_MATCHES)
    correction = suggest_correction(content, search, closest, extension)
    if correction is None:
        return None
    if correction.confidence < threshold:
        logger.debug(
            f"Discarding {correction.correction_type.value} correction "
            f"(confidence {correction.confidence:.2f} < {threshold:.2f})"
        )
        return None
    return correction
