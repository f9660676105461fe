"""Shared HTTP plumbing for summarization backends."""

from __future__ import annotations

import http.client
import json
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from ..config import BackendConfig
from ..logging import get_logger
from .base import BackendConfigurationError, BackendRequestError, RetryPolicy, strip_think_tags

DEFAULT_TIMEOUT = 120.0


@dataclass
class HTTPRequest:
    """A JSON POST prepared by a backend for one prompt."""

    url: str
    payload: Dict[str, object]
    headers: Dict[str, str] = field(default_factory=dict)


class HTTPBackend:
    """Base class for JSON-over-HTTP backends.

    Subclasses describe the request and how to read the reply; this class owns
    the transport, the retry policy and think-tag cleanup.
    """

    provider_label = "HTTP"

    def __init__(
        self,
        *,
        request_timeout: float = DEFAULT_TIMEOUT,
        retry: RetryPolicy | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.request_timeout = request_timeout
        self.logger = logger or get_logger(f"llm.{self.provider_label.lower()}")
        self.retry = retry or RetryPolicy(logger=self.logger)

    def complete(self, prompt: str) -> str:
        """Return the cleaned completion for ``prompt``.

        Raises ``BackendConfigurationError`` without touching the network when the
        backend is not usable, and ``BackendRequestError`` once retries run out.
        """
        self.check_configuration()
        request = self.build_request(prompt)
        raw = self.retry.call(
            lambda: self._post(request),
            description=f"{self.provider_label} request",
        )
        return strip_think_tags(raw).strip()

    def check_configuration(self) -> None:
        """Raise ``BackendConfigurationError`` when required settings are missing."""

    def build_request(self, prompt: str) -> HTTPRequest:
        raise NotImplementedError

    def extract_text(self, payload: object) -> str:
        raise NotImplementedError

    def _post(self, request: HTTPRequest) -> str:
        data = json.dumps(request.payload).encode("utf-8")
        headers = {"Content-Type": "application/json", **request.headers}
        http_request = Request(request.url, data=data, headers=headers, method="POST")
        self.logger.debug("POST %s (%d bytes)", request.url, len(data))

        try:
            with urlopen(http_request, timeout=self.request_timeout) as response:  # type: ignore[arg-type]
                raw = response.read()
        except HTTPError as exc:
            detail = exc.read().decode("utf-8", errors="ignore") if hasattr(exc, "read") else ""
            message = detail.strip() or str(exc.reason)
            raise BackendRequestError(
                f"{self.provider_label} request failed with status {exc.code}: {message}",
                status=exc.code,
            ) from exc
        except URLError as exc:
            raise BackendRequestError(
                f"{self.provider_label} request failed: {exc.reason}"
            ) from exc
        except (TimeoutError, OSError) as exc:
            raise BackendRequestError(f"{self.provider_label} request failed: {exc}") from exc
        except http.client.HTTPException as exc:
            raise BackendRequestError(
                f"{self.provider_label} returned a malformed response: {exc!r}"
            ) from exc

        try:
            payload = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise BackendRequestError(f"{self.provider_label} returned invalid JSON") from exc
        return self.extract_text(payload)

    @staticmethod
    def _normalize_base_url(url: str) -> str:
        return url.rstrip("/")

    @staticmethod
    def _require(value: Optional[str], message: str) -> str:
        if value is None or not value.strip():
            raise BackendConfigurationError(message)
        return value.strip()


def build_retry_policy(
    config: BackendConfig,
    *,
    sleep: Callable[[float], None] | None = None,
    logger: logging.Logger | None = None,
) -> RetryPolicy:
    """Translate backend settings into a ``RetryPolicy``."""
    return RetryPolicy(
        max_retries=config.max_retries,
        base_delay_ms=config.retry_base_delay_ms,
        sleep=sleep or time.sleep,
        logger=logger or get_logger("llm.retry"),
    )


__all__ = ["DEFAULT_TIMEOUT", "HTTPBackend", "HTTPRequest", "build_retry_policy"]
