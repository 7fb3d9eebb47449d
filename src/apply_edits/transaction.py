"""Transactional application of edit batches.

Atomic mode (the default) snapshots every file before its first change and
restores all of them as soon as one edit fails. Partial mode applies what it
can and never rolls back. Dry-run mode simulates the batch in memory.
"""

import logging
from collections import OrderedDict
from typing import Dict, List, Optional, Sequence, Tuple

from apply_edits.config import EditSettings
from apply_edits.constants import DRY_RUN_SUFFIX
from apply_edits.edits import apply_edit
from apply_edits.errors import EditError
from apply_edits.files import DryRunFiles, WorkspaceFiles
from apply_edits.models.edits import Edit
from apply_edits.models.outcomes import ApplyResult, EditOutcome, ErrorOutcome

logger = logging.getLogger(__name__)


class EditTransaction:
    """Tracks file snapshots so a batch of edits can be undone.

    Usage:
        transaction = EditTransaction(files, settings)
        transaction.begin()
        outcome = transaction.apply_edit(0, edit)
        transaction.commit()  # or transaction.rollback()
    """

    def __init__(self, files: WorkspaceFiles, settings: Optional[EditSettings] = None):
        self.files = files
        self.settings = settings or EditSettings()
        # Absolute path -> original bytes, None when the file did not exist
        self.backups: Dict[str, Optional[bytes]] = {}
        self.active = False

    def begin(self) -> None:
        self.backups.clear()
        self.files.created_dirs.clear()
        self.active = True

    def backup_file(self, path: str) -> None:
        """Snapshot a file the first time the transaction touches it.

        Raises:
            InvalidEditError: If the path is not inside the working directory
            ReadError: If an existing file cannot be read
        """
        full_path = self.files.resolve(path)
        if full_path in self.backups:
            return
        self.backups[full_path] = self.files.snapshot(full_path)

    def apply_edit(self, index: int, edit: Edit) -> EditOutcome:
        """Back up the edit's target file, then apply the edit."""
        try:
            self.backup_file(edit.path)
        except EditError as e:
            return ErrorOutcome.from_error(index, edit.path, edit.type, e)
        return apply_edit(index, edit, self.files, self.settings)

    def rollback(self) -> None:
        """Restore every backed-up file. Failures are logged, not raised."""
        logger.info(f"Rolling back {len(self.backups)} file(s)")
        for full_path, snapshot in self.backups.items():
            try:
                self.files.restore(full_path, snapshot)
            except OSError as e:
                logger.error(f"Failed to restore {full_path}: {e}")
        self.files.remove_created_dirs()
        self.backups.clear()
        self.active = False

    def commit(self) -> None:
        logger.debug(f"Committing transaction ({len(self.backups)} file(s) touched)")
        self.backups.clear()
        self.files.created_dirs.clear()
        self.active = False


def group_edits_by_file(edits: Sequence[Edit]) -> "OrderedDict[str, List[Tuple[int, Edit]]]":
    """Group ``(index, edit)`` pairs by target path, in first-seen order.

    Used for planning and logging only; edits are always applied in request
    order.
    """
    groups: "OrderedDict[str, List[Tuple[int, Edit]]]" = OrderedDict()
    for index, edit in enumerate(edits):
        groups.setdefault(edit.path, []).append((index, edit))
    return groups


def _dry_run(files: DryRunFiles, edits: Sequence[Edit], settings: EditSettings) -> ApplyResult:
    result = ApplyResult()
    for index, edit in enumerate(edits):
        result.add_outcome(apply_edit(index, edit, files, settings, message_suffix=DRY_RUN_SUFFIX))
    return result


def apply_with_transaction(
    workdir: str,
    edits: Sequence[Edit],
    dry_run: bool = False,
    partial: bool = False,
    settings: Optional[EditSettings] = None,
) -> ApplyResult:
    """Apply a batch of edits.

    Args:
        workdir: Directory all edit paths are relative to
        edits: Edits to apply, in order
        dry_run: Simulate the batch without touching the filesystem
        partial: Keep successful edits even when others fail
        settings: Matching and diagnostics settings (defaults if omitted)

    Returns:
        ApplyResult with one outcome per attempted edit. In atomic mode the
        batch stops at the first failure and every file is restored.
    """
    settings = settings or EditSettings()

    groups = group_edits_by_file(edits)
    mode = "dry-run" if dry_run else ("partial" if partial else "atomic")
    logger.info(f"Applying {len(edits)} edit(s) to {len(groups)} file(s) in {mode} mode")
    for path, indexed in groups.items():
        logger.debug(f"  {path}: {', '.join(edit.type for _, edit in indexed)}")

    if dry_run:
        return _dry_run(DryRunFiles(workdir, settings.large_file_threshold), edits, settings)

    files = WorkspaceFiles(workdir, settings.large_file_threshold)
    transaction = EditTransaction(files, settings)
    transaction.begin()
    result = ApplyResult()

    try:
        for index, edit in enumerate(edits):
            outcome = transaction.apply_edit(index, edit)
            result.add_outcome(outcome)
            if not outcome.is_success:
                logger.warning(f"Edit {index} failed on {edit.path}: {outcome.message}")
                if not partial:
                    transaction.rollback()
                    return result
    except Exception:
        logger.exception("Unexpected error while applying edits; rolling back")
        transaction.rollback()
        raise

    transaction.commit()
    logger.info(f"Applied {result.applied} edit(s), {result.failed} failed")
    return result
