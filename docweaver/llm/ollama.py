"""Backend for a local Ollama server."""

from __future__ import annotations

import logging
from typing import Callable

from ..config import DEFAULT_OLLAMA_MODEL, DEFAULT_OLLAMA_URL, BackendConfig
from .base import RetryPolicy
from .runner import DEFAULT_TIMEOUT, HTTPBackend, HTTPRequest, build_retry_policy


class OllamaBackend(HTTPBackend):
    """Calls ``<base_url>/api/generate`` with streaming disabled."""

    provider_label = "Ollama"

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_OLLAMA_URL,
        model: str = DEFAULT_OLLAMA_MODEL,
        request_timeout: float = DEFAULT_TIMEOUT,
        retry: RetryPolicy | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(request_timeout=request_timeout, retry=retry, logger=logger)
        self.base_url = self._normalize_base_url(base_url or DEFAULT_OLLAMA_URL)
        self.model = model or DEFAULT_OLLAMA_MODEL

    @classmethod
    def from_config(
        cls,
        config: BackendConfig,
        *,
        sleep: Callable[[float], None] | None = None,
        logger: logging.Logger | None = None,
    ) -> "OllamaBackend":
        return cls(
            base_url=config.ollama_url,
            model=config.ollama_model,
            request_timeout=config.request_timeout,
            retry=build_retry_policy(config, sleep=sleep, logger=logger),
            logger=logger,
        )

    def build_request(self, prompt: str) -> HTTPRequest:
        return HTTPRequest(
            url=f"{self.base_url}/api/generate",
            payload={"model": self.model, "prompt": prompt, "stream": False},
        )

    def extract_text(self, payload: object) -> str:
        if not isinstance(payload, dict):
            return ""
        response = payload.get("response")
        return response if isinstance(response, str) else ""


__all__ = ["OllamaBackend"]
