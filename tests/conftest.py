from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.repo_builder import RepoBuilder


@pytest.fixture
def repo_builder(tmp_path: Path) -> RepoBuilder:
    """Provide a reusable project builder rooted at the pytest tmp_path."""
    return RepoBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _isolate_backend_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer credentials and provider overrides out of config tests."""
    for key in (
        "DOCWEAVER_PROVIDER",
        "DOCWEAVER_OLLAMA_URL",
        "OLLAMA_HOST",
        "DOCWEAVER_OLLAMA_MODEL",
        "DOCWEAVER_OPENAI_KEY",
        "OPENAI_API_KEY",
        "DOCWEAVER_OPENAI_MODEL",
    ):
        monkeypatch.delenv(key, raising=False)
