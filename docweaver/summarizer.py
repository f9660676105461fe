"""Per-file summarization."""

from __future__ import annotations

import logging
from typing import Optional

from .failsafe import (
    FILE_READ_ERROR,
    SUMMARY_UNAVAILABLE,
    content_preview,
    missing_key_summary,
    provider_error_summary,
)
from .llm import BackendConfigurationError, BackendError, SummarizationBackend
from .logging import get_logger
from .models import FileEntry
from .prompting import PromptBuilder


class FileSummarizer:
    """Produces one summary per file and never raises for backend failures.

    A failed backend call degrades to a placeholder naming the provider so the
    rest of the run can continue; the underlying error is logged with the path.
    """

    def __init__(
        self,
        backend: Optional[SummarizationBackend],
        prompt_builder: PromptBuilder | None = None,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self.backend = backend
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.logger = logger or get_logger("summarizer")

    def summarize(self, content: str, file_path: str) -> str:
        if self.backend is None:
            return content_preview(content)

        prompt = self.prompt_builder.build_file_prompt(content)
        label = self.backend.provider_label
        try:
            summary = self.backend.complete(prompt)
        except BackendConfigurationError as exc:
            self.logger.error("%s", exc)
            return missing_key_summary(label)
        except BackendError as exc:
            self.logger.error("Error calling %s API for file %s: %s", label, file_path, exc)
            return provider_error_summary(label)
        return summary or SUMMARY_UNAVAILABLE

    def summarize_entry(self, entry: FileEntry) -> str:
        """Read ``entry`` from disk and summarize it."""
        try:
            content = entry.absolute_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            self.logger.error("Error processing file %s: %s", entry.absolute_path, exc)
            return FILE_READ_ERROR
        return self.summarize(content, entry.relative_path)


__all__ = ["FileSummarizer"]
