"""Backend for the hosted OpenAI chat-completions API."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from ..config import DEFAULT_OPENAI_MODEL, DEFAULT_OPENAI_URL, BackendConfig
from .base import RetryPolicy
from .runner import DEFAULT_TIMEOUT, HTTPBackend, HTTPRequest, build_retry_policy


class OpenAIBackend(HTTPBackend):
    """Sends the prompt as a single user message with bearer-token auth."""

    provider_label = "OpenAI"

    def __init__(
        self,
        *,
        api_key: Optional[str],
        model: str = DEFAULT_OPENAI_MODEL,
        base_url: str = DEFAULT_OPENAI_URL,
        request_timeout: float = DEFAULT_TIMEOUT,
        retry: RetryPolicy | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(request_timeout=request_timeout, retry=retry, logger=logger)
        self.api_key = api_key
        self.model = model or DEFAULT_OPENAI_MODEL
        self.base_url = self._normalize_base_url(base_url or DEFAULT_OPENAI_URL)

    @classmethod
    def from_config(
        cls,
        config: BackendConfig,
        *,
        sleep: Callable[[float], None] | None = None,
        logger: logging.Logger | None = None,
    ) -> "OpenAIBackend":
        return cls(
            api_key=config.openai_key,
            model=config.openai_model,
            base_url=config.openai_url,
            request_timeout=config.request_timeout,
            retry=build_retry_policy(config, sleep=sleep, logger=logger),
            logger=logger,
        )

    def check_configuration(self) -> None:
        self._require(self.api_key, "OpenAI API key is missing in settings.")

    def build_request(self, prompt: str) -> HTTPRequest:
        api_key = self._require(self.api_key, "OpenAI API key is missing in settings.")
        return HTTPRequest(
            url=f"{self.base_url}/chat/completions",
            payload={
                "model": self.model,
                "messages": [{"role": "user", "content": prompt}],
            },
            headers={"Authorization": f"Bearer {api_key}"},
        )

    def extract_text(self, payload: object) -> str:
        if not isinstance(payload, dict):
            return ""
        choices = payload.get("choices")
        if not isinstance(choices, list) or not choices:
            return ""
        first = choices[0]
        if not isinstance(first, dict):
            return ""
        message = first.get("message")
        if isinstance(message, dict):
            content = message.get("content")
            if isinstance(content, str):
                return content
        return ""


__all__ = ["OpenAIBackend"]
