"""Core data models shared across docweaver components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple

from .tree import DirectoryNode


@dataclass(frozen=True)
class FileEntry:
    """A discovered project file."""

    absolute_path: Path
    relative_path: str


class RunStatus(str, Enum):
    """Terminal state of a documentation run."""

    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"
    NO_WORKSPACE = "no_workspace"


@dataclass
class RunOutcome:
    """Result of one documentation run, whatever its status."""

    status: RunStatus
    root: Path
    document: Optional[str] = None
    project_summary: Optional[str] = None
    file_summaries: List[Tuple[str, str]] = field(default_factory=list)
    tree: Optional[DirectoryNode] = None
    error: Optional[str] = None
    output_dir: Optional[Path] = None

    @property
    def ok(self) -> bool:
        return self.status is RunStatus.COMPLETED


__all__ = ["FileEntry", "RunOutcome", "RunStatus"]
