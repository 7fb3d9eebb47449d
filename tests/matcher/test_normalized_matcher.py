"""Tests for indentation-tolerant matching."""

from apply_edits.matcher import (
    MatchKind,
    adjust_indentation,
    find_with_normalization,
    normalize_indentation,
    normalize_whitespace,
    replace_all_with_normalization,
    replace_with_normalization,
)

NESTED = (
    "def outer():\n"
    "    if True:\n"
    "        if True:\n"
    "            if True:\n"
    "                value = compute()\n"
    "                return value\n"
)


def test_normalize_helpers() -> None:
    """Test the whitespace and indentation normalizers."""
    assert normalize_whitespace("a  \r\n  b\t\n") == "a\n  b"
    assert normalize_indentation("    a  \n\tb\n") == "a\nb"


def test_find_exact_match_reports_offset() -> None:
    """Test that an exact match reports its offset."""
    result = find_with_normalization("abc\ndef\n", "def")
    assert result.kind == MatchKind.EXACT
    assert result.offset == 4
    assert result.found


def test_find_normalized_match_reports_line() -> None:
    """Test that a normalized match reports its line and a warning."""
    search = "              value = compute()\n              return value\n"
    result = find_with_normalization(NESTED, search)
    assert result.kind == MatchKind.NORMALIZED
    assert result.line_number == 5
    assert "indentation" in result.warning


def test_find_not_found() -> None:
    """Test a search that matches nowhere."""
    result = find_with_normalization(NESTED, "nothing like this")
    assert result.kind == MatchKind.NOT_FOUND
    assert not result.found


def test_whitespace_only_search_never_matches_normalized() -> None:
    """Test that a blank search never matches loosely."""
    result = find_with_normalization("a\n\nb\n", "   \n")
    assert result.kind == MatchKind.NOT_FOUND


def test_replace_keeps_file_indentation() -> None:
    """A 14-space search against 16-space code keeps the 16-space indent."""
    search = "              value = compute()\n              return value\n"
    replacement = "              value = compute_fast()\n              return value\n"

    new_content, note = replace_with_normalization(NESTED, search, replacement)

    assert "                value = compute_fast()\n" in new_content
    assert "                return value\n" in new_content
    assert "compute()" not in new_content
    assert new_content.startswith("def outer():\n    if True:\n")
    assert "indentation" in note


def test_replace_with_exact_match() -> None:
    """Test that exact matches are replaced as-is."""
    new_content, note = replace_with_normalization("a = 1\nb = 2\n", "b = 2", "b = 3")
    assert new_content == "a = 1\nb = 3\n"
    assert note == "Exact match"


def test_replace_returns_none_when_nothing_matches() -> None:
    """Test that a failed replace returns None."""
    assert replace_with_normalization("a\n", "b", "c") is None


def test_replace_in_tab_indented_file() -> None:
    """Test re-indenting a replacement for a tab-indented file."""
    content = "func f() {\n\tif x {\n\t\treturn\n\t}\n}\n"
    search = "    if x {\n        return\n    }"
    replacement = "    if y {\n        return\n    }"

    new_content, _ = replace_with_normalization(content, search, replacement)

    assert new_content.startswith("func f() {\n\tif y {\n")
    assert new_content.endswith("\t}\n}\n")


def test_replace_all_normalized_windows() -> None:
    """Test replacing every loosely matching window."""
    content = "  call()\nx\n      call()\n"
    new_content, count = replace_all_with_normalization(content, "call()", "run()")
    assert count == 2
    assert new_content == "  run()\nx\n      run()\n"


def test_adjust_indentation_leaves_dedented_lines() -> None:
    """Test that lines indented less than the block are untouched."""
    text = "    a\n      b\n  c\n\n"
    assert adjust_indentation(text, 4, "        ") == "        a\n          b\n  c\n\n"


def test_replace_keeps_crlf_when_indentation_matches() -> None:
    """Test that an LF replacement keeps a CRLF file's line breaks."""
    content = "a = 1\r\nb = 2\r\nc = 3\r\n"

    new_content, _ = replace_with_normalization(content, "a = 1\nb = 2\n", "A = 1\nB = 2\n")

    assert new_content == "A = 1\r\nB = 2\r\nc = 3\r\n"


def test_replace_all_keeps_crlf() -> None:
    """Test that every replaced window uses the file's line break."""
    content = "x\r\ny\r\nz\r\nx\r\ny\r\n"

    new_content, count = replace_all_with_normalization(content, "x\ny", "p\nq")

    assert count == 2
    assert new_content == "p\r\nq\r\nz\r\np\r\nq\r\n"
