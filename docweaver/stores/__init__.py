"""In-memory and on-disk storage for generated summaries."""

from .summaries import SummaryStore
from .writer import DocumentationWriter

__all__ = ["DocumentationWriter", "SummaryStore"]
