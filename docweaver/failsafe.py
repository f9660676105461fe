"""Placeholder text used when a summary cannot be generated."""

from __future__ import annotations

SUMMARY_UNAVAILABLE = "Summary not available."
MODULE_SUMMARY_UNAVAILABLE = "Module summary not available."
FILE_READ_ERROR = "Summary not available (error reading file)."
NOTHING_TO_AGGREGATE = "No file summaries were available to aggregate."
PREVIEW_LINE_COUNT = 5


def provider_error_summary(provider_label: str) -> str:
    return f"Summary not available ({provider_label} error)."


def missing_key_summary(provider_label: str) -> str:
    return f"Summary not available (no {provider_label} key)."


def content_preview(content: str, line_count: int = PREVIEW_LINE_COUNT) -> str:
    """First ``line_count`` lines of ``content``; used when no provider is configured."""
    return "\n".join(content.split("\n")[:line_count])


__all__ = [
    "FILE_READ_ERROR",
    "MODULE_SUMMARY_UNAVAILABLE",
    "NOTHING_TO_AGGREGATE",
    "PREVIEW_LINE_COUNT",
    "SUMMARY_UNAVAILABLE",
    "content_preview",
    "missing_key_summary",
    "provider_error_summary",
]
