"""Post-processing helpers for generated Markdown."""

from .toc import TableOfContentsBuilder

__all__ = ["TableOfContentsBuilder"]
