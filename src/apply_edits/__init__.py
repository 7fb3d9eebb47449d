"""apply-edits - apply approximate, agent-generated edits to files safely."""

from typing import Any, Dict, List, Optional, Sequence, Union

from pydantic import TypeAdapter

from apply_edits.config import EditSettings
from apply_edits.models import ApplyResult, Edit, MultiFileReadResult
from apply_edits.read import format_for_prompt, read_files_with_line_numbers
from apply_edits.transaction import EditTransaction, apply_with_transaction

__version__ = "0.1.0"

_EDIT_LIST = TypeAdapter(List[Edit])


def apply_edits(
    workdir: str,
    edits: Sequence[Union[Edit, Dict[str, Any]]],
    dry_run: bool = False,
    partial: bool = False,
    settings: Optional[EditSettings] = None,
) -> ApplyResult:
    """Apply a batch of edits to files under ``workdir``.

    Args:
        workdir: Directory all edit paths are relative to
        edits: Edit models or plain dicts tagged with ``type``
        dry_run: Simulate without writing anything
        partial: Keep successful edits even when others fail
        settings: Matching settings; read from the environment if omitted

    Returns:
        ApplyResult with one outcome per attempted edit

    Raises:
        pydantic.ValidationError: If an edit dict is malformed
    """
    parsed = _EDIT_LIST.validate_python(list(edits))
    return apply_with_transaction(
        workdir,
        parsed,
        dry_run=dry_run,
        partial=partial,
        settings=settings or EditSettings.from_env(),
    )


def read_files(workdir: str, paths: Sequence[str], max_lines: int = 500) -> MultiFileReadResult:
    return read_files_with_line_numbers(workdir, list(paths), max_lines)


def format_files_for_prompt(workdir: str, paths: Sequence[str], max_lines: int = 500) -> str:
    """Read files and render them as markdown for an LLM prompt."""
    return format_for_prompt(read_files(workdir, paths, max_lines))


__all__ = [
    "ApplyResult",
    "EditSettings",
    "EditTransaction",
    "__version__",
    "apply_edits",
    "apply_with_transaction",
    "format_files_for_prompt",
    "read_files",
]
