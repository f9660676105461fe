"""Tests for docweaver.ignore."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from docweaver.ignore import IgnoreRuleSet, PathFilter, load_ignore_rules
from docweaver.logging import null_logger
from docweaver.models import FileEntry


def _entry(root: Path, relative: str, size: int = 10) -> FileEntry:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x" * size)
    return FileEntry(absolute_path=path, relative_path=relative)


def test_later_negation_overrides_earlier_pattern() -> None:
    rules = IgnoreRuleSet.from_patterns(["*.log", "!keep.log"])

    assert rules.matches("debug.log")
    assert not rules.matches("keep.log")


def test_comments_and_blank_lines_are_dropped() -> None:
    rules = IgnoreRuleSet.from_patterns(["# comment", "", "   ", "build/"])

    assert rules.patterns == ("build/",)
    assert rules.matches("build/out.js")


def test_gitignore_and_user_patterns_are_merged(tmp_path: Path) -> None:
    (tmp_path / ".gitignore").write_text("dist/\n*.log\n", encoding="utf-8")

    rules = load_ignore_rules(tmp_path, ["secrets.txt", "!important.log"], logger=null_logger())

    assert rules.matches("dist/bundle.js")
    assert rules.matches("secrets.txt")
    assert rules.matches("debug.log")
    assert not rules.matches("important.log")
    assert not rules.matches("src/app.ts")


def test_missing_gitignore_is_informational(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("tests.ignore")
    with caplog.at_level(logging.INFO, logger="tests.ignore"):
        rules = load_ignore_rules(tmp_path, ["*.tmp"], logger=logger)

    assert rules.matches("a.tmp")
    assert any(record.levelno == logging.INFO for record in caplog.records)
    assert not any(record.levelno >= logging.ERROR for record in caplog.records)


def test_ignored_path_is_excluded_regardless_of_size(tmp_path: Path) -> None:
    rules = IgnoreRuleSet.from_patterns(["*.bin"])
    path_filter = PathFilter(rules, max_file_size_bytes=1000, logger=null_logger())

    assert not path_filter.is_included(_entry(tmp_path, "small.bin", size=1))


def test_size_limit_excludes_larger_files(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("tests.filter")
    path_filter = PathFilter(IgnoreRuleSet.from_patterns([]), max_file_size_bytes=50, logger=logger)

    small = _entry(tmp_path, "small.txt", size=50)
    large = _entry(tmp_path, "large.txt", size=51)
    with caplog.at_level(logging.INFO, logger="tests.filter"):
        included = path_filter.filter([small, large])

    assert included == [small]
    assert any("51" in record.getMessage() for record in caplog.records)


def test_zero_limit_disables_size_check(tmp_path: Path) -> None:
    path_filter = PathFilter(IgnoreRuleSet.from_patterns([]), max_file_size_bytes=0, logger=null_logger())

    assert path_filter.is_included(_entry(tmp_path, "huge.txt", size=10_000))
    # No stat happens without a limit, so even a vanished file is included.
    assert path_filter.is_included(FileEntry(tmp_path / "gone.txt", "gone.txt"))


def test_stat_failure_excludes_and_logs_error(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("tests.stat")
    path_filter = PathFilter(IgnoreRuleSet.from_patterns([]), max_file_size_bytes=10, logger=logger)

    with caplog.at_level(logging.INFO, logger="tests.stat"):
        included = path_filter.is_included(FileEntry(tmp_path / "missing.txt", "missing.txt"))

    assert included is False
    assert any(record.levelno == logging.ERROR for record in caplog.records)
