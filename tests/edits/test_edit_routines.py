"""Tests for individual edit routines through the dispatcher."""

import pytest

from apply_edits.config import EditSettings
from apply_edits.edits import APPLY_ROUTINES, apply_edit
from apply_edits.files import WorkspaceFiles
from apply_edits.models import (
    AppendEdit,
    CreateEdit,
    DeleteFileEdit,
    DeleteLinesEdit,
    DeleteMatchEdit,
    EditType,
    InsertAfterEdit,
    InsertAtLineEdit,
    InsertBeforeEdit,
    OutcomeStatus,
    PrependEdit,
    ReplaceAllEdit,
    ReplaceEdit,
    parse_edit,
)


@pytest.fixture
def files(workspace) -> WorkspaceFiles:
    return WorkspaceFiles(workspace.root)


def run(edit, files, settings=None):
    return apply_edit(0, edit, files, settings or EditSettings())


def test_every_edit_type_has_a_routine() -> None:
    """Test that every edit type is dispatched."""
    assert set(APPLY_ROUTINES) == {t.value for t in EditType}


# ---------------------------------------------------------------------------
# replace / replace_all
# ---------------------------------------------------------------------------


def test_replace_exact(workspace, files) -> None:
    """Test a single-line exact replace."""
    workspace.write("a.py", "x = 1\ny = 2\nz = 3\n")

    outcome = run(ReplaceEdit(path="a.py", search="y = 2", replace="y = 20"), files)

    assert outcome.status == OutcomeStatus.OK
    assert outcome.message == "Replaced 1 occurrence (line 2)"
    assert outcome.lines_affected == [2]
    assert workspace.read("a.py") == "x = 1\ny = 20\nz = 3\n"


def test_replace_multi_line_reports_range(workspace, files) -> None:
    """Test that a multi-line replace reports its line range."""
    workspace.write("a.py", "x = 1\ny = 2\nz = 3\n")

    outcome = run(ReplaceEdit(path="a.py", search="y = 2\nz = 3", replace="w = 0"), files)

    assert outcome.message == "Replaced 1 occurrence (lines 2-3)"
    assert outcome.lines_affected == [2, 3]
    assert workspace.read("a.py") == "x = 1\nw = 0\n"


def test_replace_with_indentation_adjustment(workspace, files) -> None:
    """Test the indentation-tolerant replace fallback."""
    content = (
        "class A:\n"
        "    def f(self):\n"
        "        for x in y:\n"
        "            if x:\n"
        "                log(x)\n"
        "                send(x)\n"
    )
    workspace.write("a.py", content)
    search = "              log(x)\n              send(x)\n"
    replace = "              log(x)\n              queue(x)\n"

    outcome = run(ReplaceEdit(path="a.py", search=search, replace=replace), files)

    assert outcome.status == OutcomeStatus.OK
    assert "indentation adjustment" in outcome.message
    assert workspace.read("a.py").endswith(
        "                log(x)\n                queue(x)\n"
    )


def test_replace_not_found_has_diagnostics(workspace, files) -> None:
    """Test that a missed search carries closest matches and a hint."""
    workspace.write("a.py", "def hello():\n    return 1\n")

    outcome = run(ReplaceEdit(path="a.py", search="def helo():", replace="x"), files)

    assert outcome.status == OutcomeStatus.ERROR
    assert outcome.error == "search_not_found"
    assert outcome.search_preview == "def helo():"
    assert outcome.closest_matches[0].line == 1
    assert outcome.hint.startswith("Very close match at line 1")
    assert workspace.read("a.py") == "def hello():\n    return 1\n"


def test_replace_preview_is_truncated(workspace, files) -> None:
    """Test that long search previews are shortened."""
    workspace.write("a.py", "short\n")
    settings = EditSettings(preview_length=10)

    outcome = run(ReplaceEdit(path="a.py", search="z" * 50, replace=""), files, settings)

    assert outcome.search_preview == "zzzzzzz..."


def test_replace_empty_search_is_invalid(workspace, files) -> None:
    """Test that an empty search is rejected."""
    workspace.write("a.py", "x\n")
    outcome = run(ReplaceEdit(path="a.py", search="", replace="y"), files)
    assert outcome.error == "invalid_edit"


def test_replace_missing_file(files) -> None:
    """Test replacing in a file that does not exist."""
    outcome = run(ReplaceEdit(path="nope.py", search="a", replace="b"), files)
    assert outcome.error == "file_not_found"


def test_replace_require_unique(workspace, files) -> None:
    """Test that duplicate matches fail when uniqueness is required."""
    workspace.write("a.py", "x = 1\nx = 1\n")
    settings = EditSettings(require_unique_match=True)

    outcome = run(ReplaceEdit(path="a.py", search="x = 1", replace="x = 2"), files, settings)

    assert outcome.error == "multiple_matches"
    assert "(2)" in outcome.message
    assert workspace.read("a.py") == "x = 1\nx = 1\n"


def test_replace_first_occurrence_by_default(workspace, files) -> None:
    """Test that only the first occurrence is replaced."""
    workspace.write("a.py", "x = 1\nx = 1\n")
    run(ReplaceEdit(path="a.py", search="x = 1", replace="x = 2"), files)
    assert workspace.read("a.py") == "x = 2\nx = 1\n"


def test_replace_auto_correction(workspace, files) -> None:
    """Test that an enabled auto-correction applies with a warning."""
    workspace.write("a.py", "print('hello world')\n")
    edit = ReplaceEdit(path="a.py", search="print('helllo world')", replace="print('bye')")

    disabled = run(edit, files)
    assert disabled.error == "search_not_found"

    outcome = run(edit, files, EditSettings(autocorrect_threshold=0.9))
    assert outcome.status == OutcomeStatus.WARNING
    assert "Auto-corrected" in outcome.warning
    assert workspace.read("a.py") == "print('bye')\n"


def test_replace_all_counts_occurrences(workspace, files) -> None:
    """Test that replace_all reports how many occurrences changed."""
    workspace.write("a.txt", "foo bar foo baz foo")

    outcome = run(ReplaceAllEdit(path="a.txt", search="foo", replace="qux"), files)

    assert outcome.message == "Replaced 3 occurrence(s)"
    assert workspace.read("a.txt") == "qux bar qux baz qux"


def test_replace_all_zero_matches_is_an_error(workspace, files) -> None:
    """Test that replace_all with no matches fails."""
    workspace.write("a.txt", "foo\n")
    outcome = run(ReplaceAllEdit(path="a.txt", search="bar", replace="baz"), files)
    assert outcome.status == OutcomeStatus.ERROR
    assert outcome.error == "search_not_found"


# ---------------------------------------------------------------------------
# inserts
# ---------------------------------------------------------------------------


def test_insert_after(workspace, files) -> None:
    """Test inserting after an anchor line."""
    workspace.write("a.py", "import os\n\ndef main():\n    pass\n")

    outcome = run(InsertAfterEdit(path="a.py", anchor="import os", content="import sys\n"), files)

    assert outcome.message == "Inserted after anchor at line 1"
    assert outcome.lines_affected == [2]
    assert workspace.read("a.py") == "import os\nimport sys\n\ndef main():\n    pass\n"


def test_insert_before(workspace, files) -> None:
    """Test inserting before an anchor line."""
    workspace.write("a.py", "a\nb\n")

    outcome = run(InsertBeforeEdit(path="a.py", anchor="b", content="x\ny"), files)

    assert outcome.message == "Inserted before anchor at line 2"
    assert outcome.lines_affected == [2, 3]
    assert workspace.read("a.py") == "a\nx\ny\nb\n"


def test_insert_anchor_aliases(workspace, files) -> None:
    """Test the alternative anchor field names."""
    workspace.write("a.py", "a\nb\n")
    edit = parse_edit({"type": "insert_after", "path": "a.py", "after": "a", "content": "z"})

    run(edit, files)

    assert workspace.read("a.py") == "a\nz\nb\n"


def test_insert_missing_anchor(workspace, files) -> None:
    """Test that a missing anchor fails with diagnostics."""
    workspace.write("a.py", "alpha\nbeta\n")

    outcome = run(InsertAfterEdit(path="a.py", anchor="gamma", content="x"), files)

    assert outcome.error == "anchor_not_found"
    assert outcome.search_preview == "gamma"
    assert outcome.hint is not None


def test_insert_empty_anchor_is_invalid(workspace, files) -> None:
    """Test that an empty anchor is rejected."""
    workspace.write("a.py", "alpha\n")
    outcome = run(InsertBeforeEdit(path="a.py", anchor="", content="x"), files)
    assert outcome.error == "invalid_edit"


def test_insert_at_line_bounds(workspace, files) -> None:
    """Test the valid and invalid line numbers for insert_at_line."""
    workspace.write("a.txt", "one\ntwo\n")

    assert run(InsertAtLineEdit(path="a.txt", line=0, content="x"), files).error == "invalid_edit"
    assert run(InsertAtLineEdit(path="a.txt", line=4, content="x"), files).error == "line_out_of_range"

    outcome = run(InsertAtLineEdit(path="a.txt", line=3, content="three"), files)
    assert outcome.message == "Inserted at line 3"
    assert workspace.read("a.txt") == "one\ntwo\nthree\n"


# ---------------------------------------------------------------------------
# deletes
# ---------------------------------------------------------------------------


def test_delete_lines(workspace, files) -> None:
    """Test deleting a line range."""
    workspace.write("a.txt", "line1\nline2\nline3\n")

    outcome = run(DeleteLinesEdit(path="a.txt", start_line=2, end_line=3), files)

    assert outcome.message == "Deleted 2 lines (2-3)"
    assert outcome.lines_affected == [2, 3]
    assert workspace.read("a.txt") == "line1\n"


def test_delete_all_lines_empties_file(workspace, files) -> None:
    """Test deleting every line of a file."""
    workspace.write("a.txt", "line1\nline2\n")
    outcome = run(DeleteLinesEdit(path="a.txt", start_line=1, end_line=2), files)
    assert outcome.status == OutcomeStatus.OK
    assert workspace.read("a.txt") == ""


def test_delete_lines_validation(workspace, files) -> None:
    """Test that bad line ranges are rejected."""
    workspace.write("a.txt", "line1\nline2\n")

    assert run(DeleteLinesEdit(path="a.txt", start_line=0, end_line=1), files).error == "invalid_edit"
    assert run(DeleteLinesEdit(path="a.txt", start_line=2, end_line=1), files).error == "invalid_edit"
    assert (
        run(DeleteLinesEdit(path="a.txt", start_line=1, end_line=3), files).error
        == "invalid_line_range"
    )
    assert workspace.read("a.txt") == "line1\nline2\n"


def test_delete_match(workspace, files) -> None:
    """Test deleting lines containing a pattern."""
    workspace.write("a.py", "import pdb\nx = 1\npdb.set_trace()\n")

    outcome = run(DeleteMatchEdit(path="a.py", search="pdb"), files)

    assert outcome.message == "Deleted 2 matching lines"
    assert workspace.read("a.py") == "x = 1\n"


def test_delete_match_zero_matches_is_a_warning(workspace, files) -> None:
    """Test that delete_match with no matches only warns."""
    workspace.write("a.py", "x = 1\n")

    outcome = run(DeleteMatchEdit(path="a.py", search="pdb"), files)

    assert outcome.status == OutcomeStatus.WARNING
    assert outcome.is_success
    assert workspace.read("a.py") == "x = 1\n"


def test_delete_file(workspace, files) -> None:
    """Test deleting a whole file."""
    workspace.write("a.txt", "x")

    assert run(DeleteFileEdit(path="a.txt"), files).message == "Deleted file"
    assert not workspace.exists("a.txt")

    outcome = run(DeleteFileEdit(path="a.txt"), files)
    assert outcome.status == OutcomeStatus.OK
    assert "already deleted" in outcome.message


# ---------------------------------------------------------------------------
# create / append / prepend
# ---------------------------------------------------------------------------


def test_create_makes_parent_directories(workspace, files) -> None:
    """Test that create makes missing directories."""
    outcome = run(CreateEdit(path="pkg/sub/mod.py", content="a\nb\n"), files)

    assert outcome.message == "Created file (2 lines, 4 bytes)"
    assert workspace.read("pkg/sub/mod.py") == "a\nb\n"


def test_create_overwrites(workspace, files) -> None:
    """Test that create replaces an existing file."""
    workspace.write("a.txt", "old")
    run(CreateEdit(path="a.txt", content="new"), files)
    assert workspace.read("a.txt") == "new"


@pytest.mark.parametrize(
    "existing, content, expected",
    [
        ("a", "b", "a\nb"),
        ("a\n", "b\n", "a\nb\n"),
        ("a\n", "\nb\n", "a\nb\n"),
        ("", "b\n", "b\n"),
    ],
)
def test_append_single_separator(workspace, files, existing, content, expected) -> None:
    """Test that append joins with exactly one line break."""
    workspace.write("a.txt", existing)
    run(AppendEdit(path="a.txt", content=content), files)
    assert workspace.read("a.txt") == expected


@pytest.mark.parametrize(
    "existing, content, expected",
    [
        ("a\n", "x", "x\na\n"),
        ("a\n", "x\n", "x\na\n"),
        ("\na\n", "x\n", "x\na\n"),
    ],
)
def test_prepend_single_separator(workspace, files, existing, content, expected) -> None:
    """Test that prepend joins with exactly one line break."""
    workspace.write("a.txt", existing)
    run(PrependEdit(path="a.txt", content=content), files)
    assert workspace.read("a.txt") == expected


def test_append_missing_file(files) -> None:
    """Test appending to a file that does not exist."""
    assert run(AppendEdit(path="nope.txt", content="x"), files).error == "file_not_found"


# ---------------------------------------------------------------------------
# paths
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("path", ["../outside.txt", "a/../../outside.txt", "/etc/passwd", ""])
def test_unsafe_paths_are_rejected(files, path) -> None:
    """Test that paths outside the working directory are rejected."""
    outcome = run(CreateEdit(path=path, content="x"), files)
    assert outcome.error == "invalid_edit"
