"""CLI behaviour tests."""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Iterator, List

import pytest

from docweaver import cli
from docweaver.cli import _build_parser, main, run_interruptible
from docweaver.models import RunOutcome, RunStatus
from tests._fixtures.repo_builder import RepoBuilder


@pytest.fixture(autouse=True)
def _restore_docweaver_logger() -> Iterator[None]:
    logger = logging.getLogger("docweaver")
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]


class _StubOrchestrator:
    def __init__(self, outcome: RunOutcome) -> None:
        self.outcome = outcome
        self.calls: List[dict] = []

    def run(self, path, *, cancel_event=None, save_to_file=None):  # type: ignore[no-untyped-def]
        self.calls.append(
            {"path": path, "cancel_event": cancel_event, "save_to_file": save_to_file}
        )
        return self.outcome


def test_cli_accepts_verbose_before_command() -> None:
    args = _build_parser().parse_args(["--verbose", "generate"])
    assert args.verbose is True
    assert args.command == "generate"
    assert args.path == "."


def test_cli_accepts_verbose_after_command() -> None:
    args = _build_parser().parse_args(["generate", "-v", "some/project"])
    assert args.verbose is True
    assert args.path == "some/project"


def test_cli_accepts_quiet_flag() -> None:
    args = _build_parser().parse_args(["tree", "-q"])
    assert args.quiet is True
    assert args.verbose is False


def test_quiet_flag_raises_console_level(
    monkeypatch: pytest.MonkeyPatch, repo_builder: RepoBuilder
) -> None:
    repo_builder.write({"a.txt": "x"})
    calls: List[dict] = []
    monkeypatch.setattr(cli, "configure_logging", lambda **kwargs: calls.append(kwargs))

    assert main(["--quiet", "tree", str(repo_builder.path())]) == 0
    assert calls[0]["quiet"] is True
    assert calls[0]["verbose"] is False


def test_cli_generate_flags() -> None:
    args = _build_parser().parse_args(["generate", "--no-save", "--print"])
    assert args.no_save is True
    assert args.print_document is True


def test_cli_summary_requires_file() -> None:
    with pytest.raises(SystemExit):
        _build_parser().parse_args(["summary"])


def test_run_interruptible_passes_cancel_event() -> None:
    stub = _StubOrchestrator(RunOutcome(status=RunStatus.COMPLETED, root=Path(".")))

    outcome = run_interruptible(stub, "proj", save_to_file=False)  # type: ignore[arg-type]

    assert outcome is stub.outcome
    assert stub.calls[0]["path"] == "proj"
    assert stub.calls[0]["save_to_file"] is False
    assert isinstance(stub.calls[0]["cancel_event"], threading.Event)


@pytest.mark.parametrize(
    ("status", "expected"),
    [
        (RunStatus.COMPLETED, 0),
        (RunStatus.FAILED, 1),
        (RunStatus.NO_WORKSPACE, 2),
        (RunStatus.CANCELLED, 130),
    ],
)
def test_generate_maps_status_to_exit_code(
    monkeypatch: pytest.MonkeyPatch, status: RunStatus, expected: int
) -> None:
    stub = _StubOrchestrator(RunOutcome(status=status, root=Path("."), error="boom"))
    monkeypatch.setattr(cli, "Orchestrator", lambda: stub)

    assert main(["generate", "--no-save"]) == expected
    assert stub.calls[0]["save_to_file"] is False


def test_generate_prints_document(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    stub = _StubOrchestrator(
        RunOutcome(
            status=RunStatus.COMPLETED,
            root=Path("."),
            document="# Project Documentation\n",
            file_summaries=[("a.txt", "A")],
        )
    )
    monkeypatch.setattr(cli, "Orchestrator", lambda: stub)

    assert main(["generate", "--print"]) == 0
    out = capsys.readouterr().out
    assert "# Project Documentation" in out
    assert "Documented 1 file(s)" in out
    assert stub.calls[0]["save_to_file"] is None


def test_tree_command_prints_filtered_structure(
    repo_builder: RepoBuilder, capsys: pytest.CaptureFixture[str]
) -> None:
    repo_builder.write({".gitignore": "dist/\n", "src/a.ts": "x", "dist/a.js": "y"})

    assert main(["tree", str(repo_builder.path())]) == 0

    assert json.loads(capsys.readouterr().out) == {".gitignore": {}, "src": {"a.ts": {}}}


def test_tree_command_rejects_missing_path(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["tree", str(tmp_path / "missing")])
    assert excinfo.value.code == 2


def test_summary_command_reads_saved_summary(
    repo_builder: RepoBuilder, capsys: pytest.CaptureFixture[str]
) -> None:
    repo_builder.write({"DocsWeaver/src/app.md": "Saved summary"})

    assert main(["summary", "src/app.ts", "--root", str(repo_builder.path())]) == 0
    assert "Saved summary" in capsys.readouterr().out


def test_summary_command_reports_missing_summary(
    repo_builder: RepoBuilder, capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["summary", "src/app.ts", "--root", str(repo_builder.path())])

    assert excinfo.value.code == 1
    assert "No documentation available for src/app.ts" in capsys.readouterr().err
