import os
import tempfile
from typing import Generator

import pytest


class Workspace:
    """A temporary working directory with byte-exact file helpers."""

    def __init__(self, root: str):
        self.root = root

    def path(self, rel: str) -> str:
        return os.path.join(self.root, rel)

    def write(self, rel: str, content: str) -> str:
        full_path = self.path(rel)
        os.makedirs(os.path.dirname(full_path), exist_ok=True)
        with open(full_path, "wb") as f:
            f.write(content.encode("utf-8"))
        return full_path

    def read(self, rel: str) -> str:
        return self.read_bytes(rel).decode("utf-8")

    def read_bytes(self, rel: str) -> bytes:
        with open(self.path(rel), "rb") as f:
            return f.read()

    def exists(self, rel: str) -> bool:
        return os.path.exists(self.path(rel))


@pytest.fixture
def temp_dir() -> Generator[str, None, None]:
    """Provides a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as td:
        yield td


@pytest.fixture
def workspace(temp_dir: str) -> Workspace:
    return Workspace(temp_dir)
