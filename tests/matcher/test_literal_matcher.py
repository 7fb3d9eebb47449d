"""Tests for literal matching and line-indexed helpers."""

from apply_edits.matcher import (
    count_occurrences,
    delete_line_range,
    delete_matching_lines,
    find_line_with_anchor,
    find_literal,
    get_affected_lines,
    insert_after_line,
    insert_at_line,
    insert_before_line,
    replace_all,
    replace_first,
    split_lines,
    truncate_preview,
)


def test_split_lines_conventions() -> None:
    """Test splitting with and without a trailing line break."""
    assert split_lines("") == []
    assert split_lines("a\nb\n") == ["a", "b"]
    assert split_lines("a\nb") == ["a", "b"]
    assert split_lines("a\r\nb\r\n") == ["a", "b"]
    assert split_lines("a\n\n") == ["a", ""]


def test_find_literal_ignores_regex_metacharacters() -> None:
    """Test that searches are plain text, not patterns."""
    content = "x = re.compile(r'a.*b')\nmatch(a.*b)\n"
    assert find_literal(content, "a.*b)") == content.index("a.*b)")
    assert find_literal(content, "a+b") is None


def test_count_occurrences_is_non_overlapping() -> None:
    """Test counting non-overlapping occurrences."""
    assert count_occurrences("aaaa", "aa") == 2
    assert count_occurrences("abc", "") == 0
    assert count_occurrences("foo bar foo", "foo") == 2


def test_replace_first_preserves_surrounding_bytes() -> None:
    """Test that text around the match is untouched."""
    content = "head\r\nfoo foo\r\ntail"
    assert replace_first(content, "foo", "bar") == "head\r\nbar foo\r\ntail"
    assert replace_first(content, "missing", "bar") is None


def test_replace_all() -> None:
    """Test replacing every occurrence."""
    assert replace_all("foo bar foo baz foo", "foo", "qux") == "qux bar qux baz qux"


def test_find_line_with_anchor() -> None:
    """Test locating the first line containing an anchor."""
    content = "alpha\nbeta\ngamma\n"
    assert find_line_with_anchor(content, "gam") == 3
    assert find_line_with_anchor(content, "delta") is None


def test_get_affected_lines() -> None:
    """Test the line range covered by a match."""
    content = "one\ntwo\nthree\nfour\n"
    pos = content.index("two")
    assert get_affected_lines(content, pos, len("two\nthree")) == (2, 3)
    assert get_affected_lines(content, pos, len("two\n")) == (2, 2)
    assert get_affected_lines(content, 0, 3) == (1, 1)


def test_truncate_preview() -> None:
    """Test shortening long previews."""
    assert truncate_preview("short", 10) == "short"
    truncated = truncate_preview("abcdefghij", 8)
    assert truncated == "abcde..."
    assert len(truncated) == 8


def test_insert_after_line_is_whole_line() -> None:
    """Test that inserted text becomes whole lines."""
    result = insert_after_line("a\nb\nc\n", "b", "x\n")
    assert result == ("a\nb\nx\nc\n", 3)


def test_insert_after_last_line_without_trailing_newline() -> None:
    """Test inserting after a final line with no line break."""
    new_content, line = insert_after_line("a\nb", "b", "x")
    assert new_content == "a\nb\nx"
    assert line == 3


def test_insert_before_line() -> None:
    """Test inserting before an anchor line."""
    result = insert_before_line("a\nb\nc\n", "b", "x\ny")
    assert result == ("a\nx\ny\nb\nc\n", 2)


def test_insert_missing_anchor_returns_none() -> None:
    """Test that a missing anchor returns None."""
    assert insert_after_line("a\n", "zzz", "x") is None
    assert insert_before_line("a\n", "zzz", "x") is None


def test_insert_keeps_crlf_line_endings() -> None:
    """Test that inserts use the file's CRLF line breaks."""
    new_content, _ = insert_after_line("a\r\nb\r\n", "a", "x")
    assert new_content == "a\r\nx\r\nb\r\n"


def test_insert_at_line_bounds() -> None:
    """Test inserting at the first, last and past-the-end lines."""
    content = "a\nb\n"
    assert insert_at_line(content, 1, "x") == "x\na\nb\n"
    assert insert_at_line(content, 3, "c") == "a\nb\nc\n"
    assert insert_at_line(content, 0, "x") is None
    assert insert_at_line(content, 4, "x") is None


def test_insert_at_line_into_empty_file() -> None:
    """Test inserting into an empty file."""
    assert insert_at_line("", 1, "first\n") == "first"


def test_delete_line_range() -> None:
    """Test deleting an inclusive line range."""
    assert delete_line_range("line1\nline2\nline3\n", 2, 3) == "line1\n"
    assert delete_line_range("line1\nline2\nline3\n", 1, 3) == ""
    assert delete_line_range("line1\nline2\n", 2, 3) is None
    assert delete_line_range("line1\nline2\n", 2, 1) is None
    assert delete_line_range("line1\nline2\n", 0, 1) is None


def test_delete_line_range_collapses_blank_seam() -> None:
    """Test that blank lines meeting at the cut collapse to one."""
    content = "a\n\nb\n\nc\n"
    assert delete_line_range(content, 3, 3) == "a\n\nc\n"


def test_delete_line_range_leaves_other_blank_runs() -> None:
    """Test that blank runs away from the cut are kept."""
    content = "a\n\n\nb\nc\n"
    assert delete_line_range(content, 5, 5) == "a\n\n\nb\n"


def test_delete_matching_lines() -> None:
    """Test deleting every line containing a pattern."""
    content = "keep\ndrop me\nkeep too\ndrop\n"
    assert delete_matching_lines(content, "drop") == ("keep\nkeep too\n", 2)
    assert delete_matching_lines(content, "absent") == (content, 0)
