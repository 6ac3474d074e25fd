"""File discovery utilities for scanning definition directories."""

import os
from pathlib import Path
from typing import Iterable, Iterator, Optional, Set

import pathspec

from .errors import ScanError
from .patterns import DEFAULT_EXCLUDES, DEFAULT_INCLUDES


def build_spec(patterns: Iterable[str]) -> pathspec.PathSpec:
    """Compile glob patterns into a matcher over ``/``-separated relative paths."""
    return pathspec.PathSpec.from_lines("gitwildmatch", patterns)


def _to_posix(path: str) -> str:
    return path.replace("\\", "/")


def iter_files(
    root: Path,
    includes: Optional[Iterable[str]] = None,
    excludes: Optional[Iterable[str]] = None,
    use_default_excludes: bool = True,
    follow_symlinks: bool = True,
) -> Iterator[str]:
    """
    Iterate over files in a directory tree that match the given patterns.
    
    Directory entries are visited in sorted order. A file is yielded when it
    matches at least one include pattern and no exclude pattern. Directories
    matched by an exclude pattern are not descended into.
    
    Args:
        root: Directory to scan.
        includes: Glob patterns relative to ``root``.
                  If None or empty, uses DEFAULT_INCLUDES.
        excludes: Glob patterns relative to ``root`` to leave out.
        use_default_excludes: If True, DEFAULT_EXCLUDES are added to ``excludes``.
        follow_symlinks: If False, symbolic links are skipped entirely.
    
    Yields:
        Paths relative to ``root``, using the platform separator.
    
    Raises:
        ScanError: If ``root`` is not a directory or cannot be listed.
    """
    include_spec = build_spec(includes or DEFAULT_INCLUDES)
    exclude_patterns = list(excludes or ())
    if use_default_excludes:
        exclude_patterns.extend(DEFAULT_EXCLUDES)
    exclude_spec = build_spec(exclude_patterns)
    
    if not root.is_dir():
        raise ScanError(f"source directory does not exist: {root}")
    
    # Real paths of directories on the current descent, guards against link cycles
    active: Set[str] = set()
    
    def _walk(current: Path, relative: str) -> Iterator[str]:
        real = os.path.realpath(current)
        if real in active:
            return
        active.add(real)
        
        try:
            entries = sorted(current.iterdir())
        except OSError as e:
            raise ScanError(f"failed to list directory {current}", e) from e
        
        for entry in entries:
            entry_relative = os.path.join(relative, entry.name) if relative else entry.name
            posix_relative = _to_posix(entry_relative)
            if entry.is_symlink() and not follow_symlinks:
                continue
            if entry.is_dir():
                if exclude_spec.match_file(posix_relative + "/"):
                    continue
                yield from _walk(entry, entry_relative)
            elif entry.is_file():
                if include_spec.match_file(posix_relative) and not exclude_spec.match_file(posix_relative):
                    yield entry_relative
        
        active.discard(real)
    
    yield from _walk(root, "")
