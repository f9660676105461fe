"""Project file discovery."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Iterator, List

from .models import FileEntry

DEFAULT_EXCLUDED_DIRS = frozenset(
    {
        "node_modules",
        ".git",
        ".hg",
        ".svn",
    }
)


class RepoScanner:
    """Walks a project root and yields candidate files in a stable order."""

    def __init__(self, excluded_dirs: Iterable[str] | None = None) -> None:
        self.excluded_dirs = frozenset(
            DEFAULT_EXCLUDED_DIRS if excluded_dirs is None else excluded_dirs
        )

    def scan(self, root: str | Path) -> List[FileEntry]:
        """Return every candidate file under ``root``."""
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise FileNotFoundError(f"Project path not found: {root}")
        if not root_path.is_dir():
            raise NotADirectoryError(f"Project path is not a directory: {root}")
        return list(self._iter_files(root_path))

    def _iter_files(self, root: Path) -> Iterator[FileEntry]:
        for dirpath, dirnames, filenames in os.walk(root):
            # Sorted walk keeps discovery order (and the document's file order) stable.
            dirnames[:] = sorted(name for name in dirnames if name not in self.excluded_dirs)
            current_dir = Path(dirpath)
            for filename in sorted(filenames):
                path = current_dir / filename
                if not path.is_file():
                    continue
                yield FileEntry(
                    absolute_path=path,
                    relative_path=path.relative_to(root).as_posix(),
                )


__all__ = ["DEFAULT_EXCLUDED_DIRS", "RepoScanner"]
