"""Pipeline orchestration for a documentation run."""

from __future__ import annotations

import logging
import threading
from collections import deque
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from pathlib import Path
from typing import Callable, Deque, Dict, List, Optional, Sequence

from .aggregator import AggregationError, HierarchicalAggregator
from .config import BackendConfig, ConfigError, DocWeaverConfig, load_config
from .document import assemble_document
from .ignore import PathFilter, load_ignore_rules
from .llm import SummarizationBackend, create_backend
from .logging import get_logger
from .models import FileEntry, RunOutcome, RunStatus
from .prompting import PromptBuilder
from .repo_scanner import RepoScanner
from .stores import DocumentationWriter, SummaryStore
from .summarizer import FileSummarizer
from .tree import DirectoryNode, build_project_tree

BackendFactory = Callable[[BackendConfig], Optional[SummarizationBackend]]


class Orchestrator:
    """Coordinates discovery, summarization, aggregation and output for one project.

    The summary store and the last built tree are kept between runs so callers
    can look up a file's summary or redraw the structure on demand.
    """

    def __init__(
        self,
        scanner: RepoScanner | None = None,
        *,
        backend_factory: BackendFactory | None = None,
        config_loader: Callable[[Path], DocWeaverConfig] = load_config,
        summary_store: SummaryStore | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.scanner = scanner or RepoScanner()
        self.backend_factory: BackendFactory = backend_factory or create_backend
        self.config_loader = config_loader
        self.summary_store = summary_store if summary_store is not None else SummaryStore()
        self.logger = logger or get_logger("orchestrator")
        self.tree: Optional[DirectoryNode] = None

    def run(
        self,
        path: str | Path,
        *,
        cancel_event: threading.Event | None = None,
        save_to_file: bool | None = None,
    ) -> RunOutcome:
        """Generate documentation for the project at ``path``."""
        root = Path(path).expanduser().resolve()
        if not root.is_dir():
            self.logger.error("No workspace folder found at %s", root)
            return RunOutcome(
                status=RunStatus.NO_WORKSPACE,
                root=root,
                error=f"No workspace folder found at {root}",
            )

        self.logger.info("Starting documentation run for %s", root)
        try:
            config = self.config_loader(root)
        except ConfigError as exc:
            self.logger.error("Invalid configuration: %s", exc)
            return RunOutcome(status=RunStatus.FAILED, root=root, error=str(exc))

        entries = self._discover(config)
        tree = build_project_tree(entry.relative_path for entry in entries)
        self.tree = tree
        self.logger.debug("Discovered %d file(s) to document", len(entries))

        backend = self.backend_factory(config.backend)
        prompt_builder = PromptBuilder(config.prompts)
        summarizer = FileSummarizer(
            backend, prompt_builder, logger=get_logger("summarizer")
        )

        results = self._summarize_files(entries, summarizer, config.concurrency, cancel_event)
        if results is None:
            return RunOutcome(status=RunStatus.CANCELLED, root=root, tree=tree)

        self.summary_store.reset()
        for entry in entries:
            self.summary_store.record(entry.relative_path, results[entry.relative_path])
        file_summaries = self.summary_store.items()

        aggregator = HierarchicalAggregator(
            backend, prompt_builder, logger=get_logger("aggregator")
        )
        try:
            project_summary = aggregator.aggregate(tree, self.summary_store)
        except AggregationError as exc:
            self.logger.error("Error generating documentation: %s", exc)
            return RunOutcome(
                status=RunStatus.FAILED,
                root=root,
                file_summaries=file_summaries,
                tree=tree,
                error=str(exc),
            )

        document = assemble_document(file_summaries, tree, project_summary)
        outcome = RunOutcome(
            status=RunStatus.COMPLETED,
            root=root,
            document=document,
            project_summary=project_summary,
            file_summaries=file_summaries,
            tree=tree,
        )

        should_save = config.output.save_to_file if save_to_file is None else save_to_file
        if should_save:
            writer = DocumentationWriter(root, config.output, logger=get_logger("writer"))
            try:
                writer.write(document, file_summaries)
            except OSError:
                self.logger.warning("Documentation was generated but could not be saved")
            else:
                outcome.output_dir = writer.output_dir
        return outcome

    def refresh_tree(self, path: str | Path) -> DirectoryNode:
        """Rebuild the project tree from a fresh listing without summarizing."""
        root = Path(path).expanduser().resolve()
        config = self.config_loader(root)
        self.tree = build_project_tree(entry.relative_path for entry in self._discover(config))
        return self.tree

    def lookup(self, relative_path: str) -> Optional[str]:
        """Return the summary recorded for ``relative_path`` by the last completed run."""
        return self.summary_store.get(relative_path)

    def _discover(self, config: DocWeaverConfig) -> List[FileEntry]:
        output_pattern = f"/{config.output.directory.strip('/')}/"
        rules = load_ignore_rules(
            config.root,
            [output_pattern, *config.ignore_patterns],
            logger=get_logger("ignore"),
        )
        path_filter = PathFilter(
            rules,
            max_file_size_bytes=config.max_file_size_bytes,
            logger=get_logger("filter"),
        )
        return path_filter.filter(self.scanner.scan(config.root))

    def _summarize_files(
        self,
        entries: Sequence[FileEntry],
        summarizer: FileSummarizer,
        concurrency: int,
        cancel_event: threading.Event | None,
    ) -> Optional[Dict[str, str]]:
        """Summarize every entry, or return ``None`` if the run was cancelled.

        At most ``concurrency`` files are in flight. Once cancellation is seen no
        further files are dispatched; in-flight calls finish and are discarded.
        """

        def cancelled() -> bool:
            return cancel_event is not None and cancel_event.is_set()

        total = len(entries)
        limit = max(concurrency, 1)
        pending: Deque[FileEntry] = deque(entries)
        in_flight: Dict[Future[str], FileEntry] = {}
        results: Dict[str, str] = {}

        with ThreadPoolExecutor(
            max_workers=limit, thread_name_prefix="docweaver-summary"
        ) as executor:
            while pending or in_flight:
                while pending and len(in_flight) < limit and not cancelled():
                    entry = pending.popleft()
                    in_flight[executor.submit(summarizer.summarize_entry, entry)] = entry
                if cancelled():
                    break
                done, _ = wait(in_flight, return_when=FIRST_COMPLETED)
                for future in done:
                    entry = in_flight.pop(future)
                    results[entry.relative_path] = future.result()
                    self.logger.info(
                        "Processed file %d of %d: %s", len(results), total, entry.relative_path
                    )

        if cancelled():
            self.logger.info("Documentation generation cancelled by user.")
            return None
        return results


__all__ = ["BackendFactory", "Orchestrator"]
