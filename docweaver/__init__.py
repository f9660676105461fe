"""Layered project documentation from per-file AI summaries."""

__version__ = "0.1.0"
