"""Ignore rules and per-file inclusion checks."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

import pathspec

from .logging import get_logger
from .models import FileEntry

GITIGNORE_FILENAME = ".gitignore"


@dataclass(frozen=True)
class IgnoreRuleSet:
    """Ordered gitignore-style patterns compiled into one matcher.

    Later patterns override earlier ones, so a user ``!pattern`` can re-include a
    path that ``.gitignore`` excluded.
    """

    patterns: Tuple[str, ...]
    spec: pathspec.PathSpec

    @classmethod
    def from_patterns(cls, patterns: Iterable[str]) -> "IgnoreRuleSet":
        cleaned = tuple(_clean_patterns(patterns))
        return cls(
            patterns=cleaned,
            spec=pathspec.GitIgnoreSpec.from_lines(cleaned),
        )

    def matches(self, rel_path: str) -> bool:
        return self.spec.match_file(rel_path)


def _clean_patterns(patterns: Iterable[str]) -> List[str]:
    cleaned: List[str] = []
    for raw in patterns:
        line = raw.rstrip("\n").rstrip()
        if not line.strip() or line.lstrip().startswith("#"):
            continue
        cleaned.append(line)
    return cleaned


def load_ignore_rules(
    root: Path,
    extra_patterns: Sequence[str] = (),
    *,
    logger: logging.Logger | None = None,
) -> IgnoreRuleSet:
    """Merge ``.gitignore`` (if any) with user patterns, user patterns last."""
    log = logger or get_logger("ignore")
    patterns: List[str] = []
    gitignore = root / GITIGNORE_FILENAME
    try:
        patterns.extend(gitignore.read_text(encoding="utf-8").splitlines())
    except FileNotFoundError:
        log.info("No %s found in %s", GITIGNORE_FILENAME, root)
    except (OSError, UnicodeDecodeError) as exc:
        log.info("Could not read %s: %s", gitignore, exc)
    patterns.extend(extra_patterns)
    return IgnoreRuleSet.from_patterns(patterns)


class PathFilter:
    """Decides whether a discovered file takes part in the run."""

    def __init__(
        self,
        rules: IgnoreRuleSet,
        *,
        max_file_size_bytes: int = 0,
        logger: logging.Logger | None = None,
    ) -> None:
        self.rules = rules
        self.max_file_size_bytes = max_file_size_bytes
        self.logger = logger or get_logger("filter")

    def is_included(self, entry: FileEntry) -> bool:
        if self.rules.matches(entry.relative_path):
            self.logger.debug("Ignoring %s (matched ignore rules)", entry.relative_path)
            return False
        if self.max_file_size_bytes <= 0:
            return True
        try:
            size = entry.absolute_path.stat().st_size
        except OSError as exc:
            self.logger.error("Error reading stats for %s: %s", entry.relative_path, exc)
            return False
        if size > self.max_file_size_bytes:
            self.logger.info(
                "Skipping %s (exceeds max file size: %d bytes)", entry.relative_path, size
            )
            return False
        return True

    def filter(self, entries: Iterable[FileEntry]) -> List[FileEntry]:
        """Return included entries, preserving discovery order."""
        return [entry for entry in entries if self.is_included(entry)]


__all__ = ["GITIGNORE_FILENAME", "IgnoreRuleSet", "PathFilter", "load_ignore_rules"]
