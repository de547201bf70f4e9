"""Shared fixtures for RSC Lens tests."""
from pathlib import Path
from typing import Dict

import pytest

from rsc_lens.config import reset_config

FIXTURES_DIR = Path(__file__).parent / 'fixtures'
RSC_APP_DIR = FIXTURES_DIR / 'rsc_app'


class MemoryFileSystem:
    """In-memory FileSystem that records every probed path."""

    def __init__(self, files: Dict[str, str] = None, unreadable=()):
        self.files = {str(Path(p)): text for p, text in (files or {}).items()}
        self.unreadable = {str(Path(p)) for p in unreadable}
        self.probed = []

    def exists(self, path):
        self.probed.append(str(path))
        return str(path) in self.files or str(path) in self.unreadable

    def read_text(self, path):
        if str(path) in self.unreadable:
            raise PermissionError(f"Permission denied: {path}")
        return self.files[str(path)]


@pytest.fixture
def write_files(tmp_path):
    """Write {relative_path: text} under tmp_path and return tmp_path."""
    def _write(files: Dict[str, str]) -> Path:
        for relative, text in files.items():
            target = tmp_path / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(text, encoding='utf-8')
        return tmp_path
    return _write


@pytest.fixture(autouse=True)
def fresh_config():
    """Each test sees the environment as it set it up."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def memory_fs():
    """Factory for in-memory file systems."""
    return MemoryFileSystem
