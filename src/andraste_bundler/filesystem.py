"""Filesystem abstraction for testability.

RealFileSystem wraps standard library operations and satisfies the
FileSystem protocol structurally.
"""

from __future__ import annotations

import shutil
from collections.abc import Sequence
from pathlib import Path, PurePosixPath


class RealFileSystem:
    """Production filesystem implementation."""

    def read_text(self, path: Path) -> str:
        """Read text content from a file."""
        return path.read_text(encoding="utf-8")

    def write_text(self, path: Path, content: str) -> None:
        """Write text content to a file."""
        path.write_text(content, encoding="utf-8")

    def mkdir(self, path: Path, parents: bool = False, exist_ok: bool = False) -> None:
        """Create a directory."""
        path.mkdir(parents=parents, exist_ok=exist_ok)

    def rmtree(self, path: Path) -> None:
        """Remove a directory tree."""
        shutil.rmtree(path)

    def mirror(self, src: Path, dst: Path, entries: Sequence[PurePosixPath]) -> None:
        """Copy entries from src into dst, skipping files dst already has."""
        for entry in entries:
            source = src.joinpath(*entry.parts)
            target = dst.joinpath(*entry.parts)
            if source.is_dir():
                target.mkdir(parents=True, exist_ok=True)
                continue
            if target.exists():
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(source, target)
