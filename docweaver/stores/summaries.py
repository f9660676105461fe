"""Path-keyed store of file summaries."""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple


class SummaryStore:
    """Write-once mapping from relative path to file summary.

    Each path is recorded at most once per run; the aggregator and on-demand
    lookups only read. ``reset`` starts the next run from an empty mapping.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, str] = {}

    def record(self, path: str, summary: str) -> None:
        if path in self._entries:
            raise KeyError(f"Summary for '{path}' was already recorded")
        self._entries[path] = summary

    def get(self, path: str) -> Optional[str]:
        return self._entries.get(path)

    def items(self) -> List[Tuple[str, str]]:
        """Return ``(path, summary)`` pairs in recording order."""
        return list(self._entries.items())

    def reset(self) -> None:
        self._entries = {}

    def __contains__(self, path: object) -> bool:
        return path in self._entries

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["SummaryStore"]
