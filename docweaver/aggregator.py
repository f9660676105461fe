"""Bottom-up aggregation of file summaries into module and project summaries."""

from __future__ import annotations

import logging
from typing import List, Optional, Protocol

from .failsafe import MODULE_SUMMARY_UNAVAILABLE, NOTHING_TO_AGGREGATE
from .llm import BackendError, SummarizationBackend
from .logging import get_logger
from .prompting import FRAGMENT_SEPARATOR, PromptBuilder
from .tree import DirectoryNode, FileNode, Node


class SummaryLookup(Protocol):
    def get(self, path: str) -> Optional[str]:
        ...


class AggregationError(RuntimeError):
    """A module summary could not be produced; the whole aggregation is aborted."""

    def __init__(self, module_path: str, cause: BaseException) -> None:
        label = module_path or "<project root>"
        super().__init__(f"Aggregation failed for module {label}: {cause}")
        self.module_path = module_path
        self.cause = cause


def file_fragment(path: str, summary: str) -> str:
    return f"File: {path}\nSummary: {summary}"


def module_fragment(path: str, summary: str) -> str:
    return f"Module: {path}\nSummary: {summary}"


class HierarchicalAggregator:
    """Post-order traversal of the project tree.

    A module is summarized only after all of its children have produced their
    fragments. The root's text is returned bare and becomes the project summary.
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
        self.logger = logger or get_logger("aggregator")

    def aggregate(self, tree: DirectoryNode, summaries: SummaryLookup) -> str:
        """Return the project summary for ``tree``.

        Raises ``AggregationError`` if any module's backend call fails.
        """
        text = self._summarize_directory(tree, summaries)
        if text is None:
            self.logger.warning("No file summaries available; skipping project aggregation")
            return NOTHING_TO_AGGREGATE
        return text

    def _visit(self, node: Node, summaries: SummaryLookup) -> Optional[str]:
        if isinstance(node, FileNode):
            summary = summaries.get(node.path)
            if summary is None:
                self.logger.debug("No summary recorded for %s; leaving it out", node.path)
                return None
            return file_fragment(node.path, summary)

        text = self._summarize_directory(node, summaries)
        if text is None:
            return None
        return module_fragment(node.path, text)

    def _summarize_directory(
        self, node: DirectoryNode, summaries: SummaryLookup
    ) -> Optional[str]:
        fragments: List[str] = []
        for child in node.children.values():
            fragment = self._visit(child, summaries)
            if fragment is not None:
                fragments.append(fragment)

        if not fragments:
            return None
        if self.backend is None:
            return FRAGMENT_SEPARATOR.join(fragments)

        prompt = self.prompt_builder.build_module_prompt(fragments)
        self.logger.debug(
            "Aggregating %d fragment(s) for module %s", len(fragments), node.path or "<root>"
        )
        try:
            text = self.backend.complete(prompt)
        except BackendError as exc:
            self.logger.error(
                "Error calling %s API for module %s: %s",
                self.backend.provider_label,
                node.path or "<root>",
                exc,
            )
            raise AggregationError(node.path, exc) from exc
        return text or MODULE_SUMMARY_UNAVAILABLE


__all__ = [
    "AggregationError",
    "HierarchicalAggregator",
    "SummaryLookup",
    "file_fragment",
    "module_fragment",
]
