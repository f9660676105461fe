"""Tests for the FastAPI service mode."""

from __future__ import annotations

from pathlib import Path

import pytest

try:
    from fastapi.testclient import TestClient
except ModuleNotFoundError:  # pragma: no cover - optional dependency
    pytest.skip("fastapi not installed", allow_module_level=True)

from docweaver.config import DocWeaverConfig
from docweaver.llm import BackendError
from docweaver.logging import null_logger
from docweaver.orchestrator import Orchestrator
from docweaver.service import create_app
from tests._fixtures.backends import FailingBackend, RecordingBackend, role_of
from tests._fixtures.repo_builder import RepoBuilder


def _client(backend) -> TestClient:  # type: ignore[no-untyped-def]
    orchestrator = Orchestrator(
        backend_factory=lambda _config: backend,
        config_loader=lambda root: DocWeaverConfig(root=Path(root), concurrency=1),
        logger=null_logger(),
    )
    return TestClient(create_app(orchestrator))


def test_health() -> None:
    response = _client(RecordingBackend()).get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_generate_then_lookup_summary(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"src/a.ts": "x", "README.md": "y"})
    client = _client(RecordingBackend())

    response = client.post(
        "/documents", json={"path": str(repo_builder.path()), "save_to_file": False}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "completed"
    assert body["files"] == ["README.md", "src/a.ts"]
    assert body["document"].startswith("# Project Documentation")
    assert body["output_dir"] is None

    summary = client.get("/summaries/src/a.ts")
    assert summary.status_code == 200
    assert summary.json()["path"] == "src/a.ts"
    assert summary.json()["summary"].startswith("file:")

    assert client.get("/summaries/src/missing.ts").status_code == 404


def test_failed_aggregation_maps_to_bad_gateway(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"dir/b.txt": "B"})
    backend = FailingBackend(
        lambda prompt: role_of(prompt) == "module", BackendError("model offline")
    )

    response = _client(backend).post(
        "/documents", json={"path": str(repo_builder.path()), "save_to_file": False}
    )

    assert response.status_code == 502
    assert response.json()["status"] == "failed"
    assert "model offline" in response.json()["error"]


def test_missing_workspace_is_not_found(tmp_path: Path) -> None:
    response = _client(RecordingBackend()).post(
        "/documents", json={"path": str(tmp_path / "missing")}
    )

    assert response.status_code == 404
    assert response.json()["status"] == "no_workspace"


def test_tree_requires_a_run_or_path(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"src/a.ts": "x"})
    client = _client(RecordingBackend())

    assert client.get("/tree").status_code == 404

    response = client.get("/tree", params={"path": str(repo_builder.path())})
    assert response.status_code == 200
    assert response.json() == {"tree": {"src": {"a.ts": {}}}}

    assert client.get("/tree").json() == {"tree": {"src": {"a.ts": {}}}}


def test_tree_for_missing_path_is_not_found(tmp_path: Path) -> None:
    response = _client(RecordingBackend()).get("/tree", params={"path": str(tmp_path / "nope")})

    assert response.status_code == 404
