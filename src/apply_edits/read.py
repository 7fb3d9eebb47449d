"""Line-numbered file reads for display and prompt building."""

import logging
import os
from typing import List, Optional

from apply_edits.constants import DEFAULT_MAX_READ_LINES, LARGE_FILE_THRESHOLD
from apply_edits.errors import EditError
from apply_edits.files import WorkspaceFiles
from apply_edits.matcher import split_lines
from apply_edits.models.read import FileReadResult, MultiFileReadResult

logger = logging.getLogger(__name__)


def add_line_numbers(content: str, max_lines: int = DEFAULT_MAX_READ_LINES) -> str:
    """Prefix each line with its right-aligned number, e.g. `` 9 | text``.

    Lines beyond ``max_lines`` are replaced by a single ``... (K more lines)``
    marker. A trailing newline is kept only if ``content`` has one.
    """
    lines = split_lines(content)
    shown = lines[:max_lines]
    width = len(str(len(shown))) if shown else 1

    numbered = [f"{i:>{width}} | {line}" for i, line in enumerate(shown, start=1)]
    if len(lines) > max_lines:
        numbered.append(f"{'...':>{width}} | ... ({len(lines) - max_lines} more lines)")

    result = "\n".join(numbered)
    if numbered and content.endswith("\n"):
        result += "\n"
    return result


def read_file_with_line_numbers(
    workdir: str,
    path: str,
    max_lines: int = DEFAULT_MAX_READ_LINES,
    large_file_threshold: int = LARGE_FILE_THRESHOLD,
) -> FileReadResult:
    """Read one file relative to ``workdir``.

    Missing files are reported with ``exists=False`` rather than as errors,
    since callers usually intend to create them.
    """
    files = WorkspaceFiles(workdir, large_file_threshold)
    try:
        files.resolve(path)
    except EditError as e:
        return FileReadResult(path=path, exists=False, error=e.message)

    if not files.exists(path):
        return FileReadResult(path=path, exists=False)

    try:
        content = files.read_text(path)
    except EditError as e:
        logger.warning(f"Could not read {path}: {e.message}")
        return FileReadResult(path=path, exists=True, error=e.message)

    lines = split_lines(content)
    return FileReadResult(
        path=path,
        exists=True,
        lines=len(lines),
        bytes=len(content.encode("utf-8")),
        truncated=len(lines) > max_lines,
        content="\n".join(lines[:max_lines]),
        content_with_line_numbers=add_line_numbers(content, max_lines),
    )


def read_files_with_line_numbers(
    workdir: str,
    paths: List[str],
    max_lines: int = DEFAULT_MAX_READ_LINES,
    large_file_threshold: int = LARGE_FILE_THRESHOLD,
) -> MultiFileReadResult:
    return MultiFileReadResult(
        files=[
            read_file_with_line_numbers(workdir, path, max_lines, large_file_threshold)
            for path in paths
        ]
    )


def _fence_language(path: str) -> str:
    return os.path.splitext(path)[1].lstrip(".")


def format_for_prompt(results: MultiFileReadResult) -> str:
    """Render read results as markdown sections with fenced code blocks."""
    sections = []
    for file in results.files:
        if not file.exists:
            if file.error:
                sections.append(f"### {file.path}\n\n*Error reading file: {file.error}*\n\n")
            else:
                sections.append(f"### {file.path}\n\n*File does not exist - will be created*\n\n")
            continue

        lines_info = f"{file.lines} lines" if file.lines is not None else ""
        truncated_info = " (truncated)" if file.truncated else ""
        header = f"### {file.path} ({lines_info}{truncated_info})\n\n"

        body: Optional[str] = None
        if file.content_with_line_numbers is not None:
            body = f"```{_fence_language(file.path)}\n{file.content_with_line_numbers}\n```\n\n"
        elif file.error:
            body = f"*Error reading file: {file.error}*\n\n"
        sections.append(header + (body or ""))

    return "".join(sections)
