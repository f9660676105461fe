"""Persists the assembled document and per-file summaries."""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath
from typing import Dict, Optional, Sequence, Tuple

from ..config import OutputConfig
from ..logging import get_logger

SUMMARY_SUFFIX = ".md"


class DocumentationWriter:
    """Writes documentation under ``<root>/<output.directory>``.

    Per-file summaries mirror the project layout with the file's extension
    replaced by ``.md`` (``src/app.ts`` -> ``src/app.md``).
    """

    def __init__(
        self,
        root: Path,
        output: OutputConfig | None = None,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self.root = Path(root)
        self.output = output or OutputConfig()
        self.logger = logger or get_logger("writer")

    @property
    def output_dir(self) -> Path:
        return self.root / self.output.directory

    @property
    def document_path(self) -> Path:
        return self.output_dir / self.output.file_name

    def summary_path_for(self, relative_path: str) -> Path:
        posix = PurePosixPath(relative_path)
        return self.output_dir.joinpath(*posix.parent.parts, f"{posix.stem}{SUMMARY_SUFFIX}")

    def write(self, document: str, file_summaries: Sequence[Tuple[str, str]]) -> Path:
        """Write everything and return the document path.

        ``OSError`` propagates to the caller after being logged.
        """
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            self.document_path.write_text(document, encoding="utf-8")

            written: Dict[Path, str] = {}
            for relative_path, summary in file_summaries:
                target = self.summary_path_for(relative_path)
                if target == self.document_path:
                    self.logger.warning(
                        "Not writing summary for %s; it would replace %s",
                        relative_path,
                        self.document_path,
                    )
                    continue
                previous = written.get(target)
                if previous is not None:
                    self.logger.warning(
                        "Summary for %s overwrites %s at %s", relative_path, previous, target
                    )
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(summary, encoding="utf-8")
                written[target] = relative_path
        except OSError as exc:
            self.logger.error("Error writing documentation to %s: %s", self.output_dir, exc)
            raise

        self.logger.info("Documentation saved to folder: %s", self.output_dir)
        return self.document_path

    def read_summary(self, relative_path: str) -> Optional[str]:
        """Return a previously written summary, or ``None`` if there is none."""
        try:
            return self.summary_path_for(relative_path).read_text(encoding="utf-8")
        except FileNotFoundError:
            return None


__all__ = ["DocumentationWriter", "SUMMARY_SUFFIX"]
