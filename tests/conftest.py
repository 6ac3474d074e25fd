"""Shared fixtures for the test suite."""

import os
from pathlib import Path

import pytest


def write_file(path: Path, content: str = "", mtime_millis: int = None) -> Path:
    """Create ``path`` with ``content``, optionally setting its modification time."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    if mtime_millis is not None:
        ns = mtime_millis * 1_000_000
        os.utime(path, ns=(ns, ns))
    return path


@pytest.fixture
def source_tree(tmp_path):
    """A definitions directory and an empty output directory."""
    source = tmp_path / "src" / "main" / "fpl"
    output = tmp_path / "generated"
    source.mkdir(parents=True)
    output.mkdir()
    return source, output
