"""Summarization backends and provider selection."""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

from ..config import BackendConfig
from ..logging import get_logger
from .base import (
    BackendConfigurationError,
    BackendError,
    BackendRequestError,
    RetryPolicy,
    SummarizationBackend,
    strip_think_tags,
)
from .ollama import OllamaBackend
from .openai import OpenAIBackend
from .runner import HTTPBackend

BACKEND_TYPES: Dict[str, type[HTTPBackend]] = {
    "ollama": OllamaBackend,
    "openai": OpenAIBackend,
}


def create_backend(
    config: BackendConfig,
    *,
    sleep: Callable[[float], None] | None = None,
    logger: logging.Logger | None = None,
) -> Optional[SummarizationBackend]:
    """Return the backend for ``config.provider``, or ``None`` when it is unknown."""
    backend_type = BACKEND_TYPES.get(config.provider.strip().lower())
    if backend_type is None:
        (logger or get_logger("llm")).warning(
            "Unknown provider '%s'; falling back to placeholder summaries", config.provider
        )
        return None
    return backend_type.from_config(config, sleep=sleep, logger=logger)  # type: ignore[attr-defined]


__all__ = [
    "BACKEND_TYPES",
    "BackendConfigurationError",
    "BackendError",
    "BackendRequestError",
    "HTTPBackend",
    "OllamaBackend",
    "OpenAIBackend",
    "RetryPolicy",
    "SummarizationBackend",
    "create_backend",
    "strip_think_tags",
]
