"""FastAPI application exposing documentation runs and summary lookup."""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import ConfigError
from ..models import RunOutcome, RunStatus
from ..orchestrator import Orchestrator


class DocumentRequest(BaseModel):
    path: str
    save_to_file: Optional[bool] = None


class DocumentResponse(BaseModel):
    status: str
    document: Optional[str] = None
    project_summary: Optional[str] = None
    files: List[str] = []
    output_dir: Optional[str] = None
    error: Optional[str] = None


class SummaryResponse(BaseModel):
    path: str
    summary: str


class TreeResponse(BaseModel):
    tree: Dict[str, Any]


class HealthResponse(BaseModel):
    status: str


_STATUS_CODES = {
    RunStatus.COMPLETED: 200,
    RunStatus.CANCELLED: 409,
    RunStatus.FAILED: 502,
    RunStatus.NO_WORKSPACE: 404,
}


def _to_response(outcome: RunOutcome) -> DocumentResponse:
    return DocumentResponse(
        status=outcome.status.value,
        document=outcome.document,
        project_summary=outcome.project_summary,
        files=[path for path, _ in outcome.file_summaries],
        output_dir=str(outcome.output_dir) if outcome.output_dir else None,
        error=outcome.error,
    )


def create_app(orchestrator: Orchestrator | None = None) -> FastAPI:
    """Create the FastAPI application.

    One orchestrator backs every request so summaries from the last run stay
    available for lookup; runs are serialized.
    """
    app = FastAPI(title="DocWeaver Service", version="0.1.0")
    app.state.orchestrator = orchestrator or Orchestrator()
    run_lock = asyncio.Lock()

    def _orchestrator() -> Orchestrator:
        return app.state.orchestrator

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/documents", response_model=DocumentResponse)
    async def generate(payload: DocumentRequest) -> JSONResponse:
        def _run() -> RunOutcome:
            return _orchestrator().run(payload.path, save_to_file=payload.save_to_file)

        async with run_lock:
            loop = asyncio.get_running_loop()
            outcome = await loop.run_in_executor(None, _run)
        body = _to_response(outcome)
        return JSONResponse(status_code=_STATUS_CODES[outcome.status], content=body.model_dump())

    @app.get("/summaries/{file_path:path}", response_model=SummaryResponse)
    async def summary(file_path: str) -> SummaryResponse:
        text = _orchestrator().lookup(file_path)
        if text is None:
            raise HTTPException(status_code=404, detail=f"No documentation available for {file_path}")
        return SummaryResponse(path=file_path, summary=text)

    @app.get("/tree", response_model=TreeResponse)
    async def tree(path: Optional[str] = Query(default=None)) -> TreeResponse:
        orchestrator_ = _orchestrator()
        if path is not None:
            loop = asyncio.get_running_loop()
            current = await loop.run_in_executor(None, orchestrator_.refresh_tree, path)
        else:
            current = orchestrator_.tree
        if current is None:
            raise HTTPException(status_code=404, detail="No project structure has been built yet")
        return TreeResponse(tree=current.to_dict())

    async def not_found_handler(_: Any, exc: Exception) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    app.add_exception_handler(FileNotFoundError, not_found_handler)
    app.add_exception_handler(NotADirectoryError, not_found_handler)

    @app.exception_handler(ConfigError)
    async def config_error_handler(
        _: Any, exc: ConfigError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    import uvicorn

    uvicorn.run(create_app(), host=host, port=port)


__all__ = ["create_app", "run_service"]
