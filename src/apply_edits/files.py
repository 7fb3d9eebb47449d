"""File access for edit routines.

Edit routines never touch the filesystem directly. They go through a
``WorkspaceFiles`` instance rooted at the working directory, which keeps path
validation, UTF-8 handling and error translation in one place.
``DryRunFiles`` layers an in-memory overlay on top so a batch can be
simulated without writing anything.
"""

import logging
import mmap
import os
from typing import Dict, List, Optional

from apply_edits.constants import LARGE_FILE_THRESHOLD
from apply_edits.errors import (
    DeleteError,
    DirectoryError,
    FileNotFoundEditError,
    InvalidEditError,
    ReadError,
    WriteError,
)

logger = logging.getLogger(__name__)


def _encode(path: str, content: str) -> bytes:
    try:
        return content.encode("utf-8")
    except UnicodeEncodeError as e:
        raise WriteError(path, f"Content is not encodable as UTF-8: {e.reason}")


class WorkspaceFiles:
    """Reads and writes files relative to a working directory."""

    def __init__(self, workdir: str, large_file_threshold: int = LARGE_FILE_THRESHOLD):
        """Initialize the file store.

        Args:
            workdir: Root directory every edit path is relative to
            large_file_threshold: Files larger than this many bytes are read
                through a read-only mmap view
        """
        self.workdir = os.path.abspath(workdir)
        self.large_file_threshold = large_file_threshold
        # Directories created by ensure_parent_dir, outermost first
        self.created_dirs: List[str] = []

    def resolve(self, path: str) -> str:
        """Validate an edit path and return its absolute location.

        Raises:
            InvalidEditError: If the path is empty, absolute, contains a NUL
                character, or escapes the working directory
        """
        if not path or not path.strip():
            raise InvalidEditError("Path cannot be empty")
        if "\x00" in path:
            raise InvalidEditError(f"Path contains a NUL character: {path!r}")
        if os.path.isabs(path):
            raise InvalidEditError(f"Path must be relative to the working directory: {path}")

        full_path = os.path.normpath(os.path.join(self.workdir, path))
        if os.path.commonpath([self.workdir, full_path]) != self.workdir or full_path == self.workdir:
            raise InvalidEditError(f"Path escapes the working directory: {path}")
        return full_path

    def _full(self, path: str) -> str:
        return os.path.normpath(os.path.join(self.workdir, path))

    def exists(self, path: str) -> bool:
        return os.path.isfile(self._full(path))

    def read_bytes(self, path: str) -> bytes:
        full_path = self._full(path)
        try:
            size = os.path.getsize(full_path)
            with open(full_path, "rb") as f:
                if size > self.large_file_threshold:
                    logger.debug(f"Reading {path} ({size} bytes) through mmap")
                    with mmap.mmap(f.fileno(), 0, access=mmap.ACCESS_READ) as view:
                        return view[:]
                return f.read()
        except FileNotFoundError:
            raise FileNotFoundEditError(path)
        except IsADirectoryError:
            raise ReadError(path, "Is a directory")
        except OSError as e:
            raise ReadError(path, e.strerror or str(e))
        except ValueError as e:
            raise ReadError(path, str(e))

    def read_text(self, path: str) -> str:
        """Read a file as UTF-8 text, line endings untouched.

        Raises:
            FileNotFoundEditError: If the file does not exist
            ReadError: If the file cannot be read or is not valid UTF-8
        """
        data = self.read_bytes(path)
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError:
            raise ReadError(path, "File is not valid UTF-8")

    def ensure_parent_dir(self, path: str) -> None:
        """Create missing parent directories, remembering which ones were new."""
        parent = os.path.dirname(self._full(path))
        missing = []
        current = parent
        while current and not os.path.exists(current):
            missing.append(current)
            current = os.path.dirname(current)
        if not missing:
            return

        try:
            os.makedirs(parent, exist_ok=True)
        except OSError as e:
            raise DirectoryError(os.path.relpath(parent, self.workdir), e.strerror or str(e))
        self.created_dirs.extend(reversed(missing))

    def write_text(self, path: str, content: str) -> None:
        data = _encode(path, content)
        self.ensure_parent_dir(path)
        try:
            with open(self._full(path), "wb") as f:
                f.write(data)
        except OSError as e:
            raise WriteError(path, e.strerror or str(e))
        except ValueError as e:
            raise WriteError(path, str(e))

    def delete(self, path: str) -> bool:
        """Delete a file.

        Returns:
            True if the file was removed, False if it did not exist
        """
        try:
            os.remove(self._full(path))
        except FileNotFoundError:
            return False
        except OSError as e:
            raise DeleteError(path, e.strerror or str(e))
        except ValueError as e:
            raise DeleteError(path, str(e))
        return True

    def snapshot(self, path: str) -> Optional[bytes]:
        """Raw bytes of a file, or None if it does not exist."""
        if not self.exists(path):
            return None
        return self.read_bytes(path)

    def restore(self, path: str, snapshot: Optional[bytes]) -> None:
        """Put a file back to a snapshot taken earlier.

        A None snapshot means the file did not exist, so it is removed.
        OS errors propagate to the caller.
        """
        full_path = self._full(path)
        if snapshot is None:
            if os.path.isfile(full_path):
                os.remove(full_path)
            return
        os.makedirs(os.path.dirname(full_path), exist_ok=True)
        with open(full_path, "wb") as f:
            f.write(snapshot)

    def remove_created_dirs(self) -> None:
        """Remove directories created during this session if they are empty."""
        for directory in reversed(self.created_dirs):
            try:
                os.rmdir(directory)
            except FileNotFoundError:
                pass
            except OSError as e:
                logger.debug(f"Leaving directory {directory} in place: {e}")
        self.created_dirs.clear()


class DryRunFiles(WorkspaceFiles):
    """A ``WorkspaceFiles`` whose writes and deletes stay in memory.

    Reads see earlier simulated writes, so a batch behaves as it would for
    real. Unmodified files are read from disk on demand.
    """

    def __init__(self, workdir: str, large_file_threshold: int = LARGE_FILE_THRESHOLD):
        super().__init__(workdir, large_file_threshold)
        # None marks a simulated deletion
        self._overlay: Dict[str, Optional[str]] = {}

    def exists(self, path: str) -> bool:
        full_path = self._full(path)
        if full_path in self._overlay:
            return self._overlay[full_path] is not None
        return super().exists(path)

    def read_text(self, path: str) -> str:
        full_path = self._full(path)
        if full_path in self._overlay:
            content = self._overlay[full_path]
            if content is None:
                raise FileNotFoundEditError(path)
            return content
        return super().read_text(path)

    def ensure_parent_dir(self, path: str) -> None:
        pass

    def write_text(self, path: str, content: str) -> None:
        _encode(path, content)
        self._overlay[self._full(path)] = content

    def delete(self, path: str) -> bool:
        existed = self.exists(path)
        self._overlay[self._full(path)] = None
        return existed
