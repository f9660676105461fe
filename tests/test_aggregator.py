"""Tests for hierarchical aggregation."""

from __future__ import annotations

from typing import Dict, List

import pytest

from docweaver.aggregator import AggregationError, HierarchicalAggregator
from docweaver.failsafe import MODULE_SUMMARY_UNAVAILABLE, NOTHING_TO_AGGREGATE
from docweaver.logging import null_logger
from docweaver.prompting import DEFAULT_MODULE_PROMPT
from docweaver.tree import build_project_tree
from tests._fixtures.backends import FailingBackend, role_of


class _ScriptedBackend:
    """Returns ``replies`` in order and records prompts."""

    provider_label = "Stub"

    def __init__(self, replies: List[str]) -> None:
        self.replies = list(replies)
        self.prompts: List[str] = []

    def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.replies.pop(0)


def _aggregator(backend) -> HierarchicalAggregator:  # type: ignore[no-untyped-def]
    return HierarchicalAggregator(backend, logger=null_logger())


def test_modules_are_summarized_after_their_children() -> None:
    tree = build_project_tree(["a.txt", "dir/b.txt"])
    summaries: Dict[str, str] = {"a.txt": "A", "dir/b.txt": "B"}
    backend = _ScriptedBackend(["X", "P"])

    project_summary = _aggregator(backend).aggregate(tree, summaries)

    module_header = DEFAULT_MODULE_PROMPT.strip()
    assert project_summary == "P"
    assert backend.prompts == [
        f"{module_header}\n\nFile: dir/b.txt\nSummary: B",
        f"{module_header}\n\nFile: a.txt\nSummary: A\n\nModule: dir\nSummary: X",
    ]


def test_nested_modules_propagate_upwards() -> None:
    tree = build_project_tree(["src/lib/util.ts", "src/app.ts"])
    backend = _ScriptedBackend(["LIB", "SRC", "ROOT"])

    result = _aggregator(backend).aggregate(
        tree, {"src/lib/util.ts": "U", "src/app.ts": "APP"}
    )

    assert result == "ROOT"
    assert backend.prompts[0].endswith("File: src/lib/util.ts\nSummary: U")
    assert backend.prompts[1].endswith(
        "Module: src/lib\nSummary: LIB\n\nFile: src/app.ts\nSummary: APP"
    )
    assert backend.prompts[2].endswith("Module: src\nSummary: SRC")


def test_files_without_summaries_are_left_out() -> None:
    tree = build_project_tree(["a.txt", "empty/x.txt"])
    backend = _ScriptedBackend(["P"])

    assert _aggregator(backend).aggregate(tree, {"a.txt": "A"}) == "P"
    assert len(backend.prompts) == 1
    assert "Module: empty" not in backend.prompts[0]


def test_nothing_to_aggregate_skips_backend() -> None:
    backend = _ScriptedBackend([])

    assert _aggregator(backend).aggregate(build_project_tree([]), {}) == NOTHING_TO_AGGREGATE
    assert _aggregator(backend).aggregate(build_project_tree(["a.txt"]), {}) == NOTHING_TO_AGGREGATE
    assert backend.prompts == []


def test_module_failure_aborts_aggregation() -> None:
    tree = build_project_tree(["a.txt", "dir/b.txt"])
    backend = FailingBackend(lambda prompt: role_of(prompt) == "module")

    with pytest.raises(AggregationError) as excinfo:
        _aggregator(backend).aggregate(tree, {"a.txt": "A", "dir/b.txt": "B"})

    assert excinfo.value.module_path == "dir"
    assert "dir" in str(excinfo.value)
    assert len(backend.prompts) == 1


def test_empty_module_reply_uses_placeholder() -> None:
    tree = build_project_tree(["dir/b.txt"])
    backend = _ScriptedBackend(["", "P"])

    assert _aggregator(backend).aggregate(tree, {"dir/b.txt": "B"}) == "P"
    assert backend.prompts[1].endswith(f"Module: dir\nSummary: {MODULE_SUMMARY_UNAVAILABLE}")


def test_without_backend_fragments_are_joined() -> None:
    tree = build_project_tree(["a.txt", "dir/b.txt"])

    result = _aggregator(None).aggregate(tree, {"a.txt": "A", "dir/b.txt": "B"})

    assert result == "File: a.txt\nSummary: A\n\nModule: dir\nSummary: File: dir/b.txt\nSummary: B"
