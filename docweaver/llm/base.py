"""Backend contract, error taxonomy, retry policy and output cleanup."""

from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass, field
from typing import Callable, Protocol, TypeVar, runtime_checkable

from ..logging import get_logger

T = TypeVar("T")

_THINK_SPAN = re.compile(r"<think>(?:(?!<think>)[\s\S])*?</think>")


class BackendError(RuntimeError):
    """A summarization backend failed to produce a completion."""


class BackendConfigurationError(BackendError):
    """The backend is missing required configuration (e.g. an API key)."""


class BackendRequestError(BackendError):
    """A transient failure: network error, timeout or non-success response."""

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


@runtime_checkable
class SummarizationBackend(Protocol):
    """Turns a prompt into completion text, raising ``BackendError`` on failure."""

    provider_label: str

    def complete(self, prompt: str) -> str:
        ...


def strip_think_tags(text: str) -> str:
    """Remove every ``<think>...</think>`` span, innermost first.

    Repeating until nothing matches removes nested spans as well; the result
    contains no complete span, so applying it again is a no-op.
    """
    previous = None
    current = text
    while previous != current:
        previous = current
        current = _THINK_SPAN.sub("", current)
    return current


@dataclass
class RetryPolicy:
    """Bounded exponential backoff.

    ``max_retries`` retries follow the first attempt. The delay before retry
    ``n`` (counted from 1) is ``base_delay_ms * 2 ** n`` milliseconds.
    """

    max_retries: int = 2
    base_delay_ms: int = 1000
    sleep: Callable[[float], None] = time.sleep
    logger: logging.Logger = field(default_factory=lambda: get_logger("llm.retry"))

    def delay_for(self, attempt: int) -> float:
        """Return the backoff delay in seconds before retry ``attempt``."""
        return self.base_delay_ms * (2**attempt) / 1000.0

    def call(self, operation: Callable[[], T], *, description: str = "backend call") -> T:
        attempt = 0
        while True:
            try:
                return operation()
            except BackendConfigurationError:
                raise
            except BackendError as exc:
                attempt += 1
                self.logger.warning(
                    "Error during %s (attempt %d of %d): %s",
                    description,
                    attempt,
                    self.max_retries + 1,
                    exc,
                )
                if attempt > self.max_retries:
                    raise
                self.sleep(self.delay_for(attempt))


__all__ = [
    "BackendConfigurationError",
    "BackendError",
    "BackendRequestError",
    "RetryPolicy",
    "SummarizationBackend",
    "strip_think_tags",
]
