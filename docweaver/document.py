"""Assembles the final documentation artifact."""

from __future__ import annotations

import json
from typing import List, Sequence, Tuple

from .postproc.toc import TableOfContentsBuilder
from .tree import DirectoryNode

DOCUMENT_TITLE = "Project Documentation"
PROJECT_SUMMARY_TITLE = "Project Summary"
FILE_SUMMARIES_TITLE = "File Summaries"
PROJECT_STRUCTURE_TITLE = "Project Structure"


def assemble_document(
    file_summaries: Sequence[Tuple[str, str]],
    tree: DirectoryNode,
    project_summary: str,
    *,
    toc_builder: TableOfContentsBuilder | None = None,
) -> str:
    """Compose the Markdown document.

    Section order is fixed: table of contents, project summary, one subsection
    per file (in the given order), then the tree as JSON.
    """
    toc_builder = toc_builder or TableOfContentsBuilder()
    headings: List[Tuple[int, str]] = [(2, PROJECT_SUMMARY_TITLE), (2, FILE_SUMMARIES_TITLE)]
    headings.extend((3, path) for path, _ in file_summaries)
    headings.append((2, PROJECT_STRUCTURE_TITLE))

    parts: List[str] = [
        f"# {DOCUMENT_TITLE}",
        toc_builder.render(headings),
        f"## {PROJECT_SUMMARY_TITLE}",
        project_summary.strip(),
        f"## {FILE_SUMMARIES_TITLE}",
    ]
    for path, summary in file_summaries:
        parts.append(f"### {path}")
        parts.append(summary.strip())

    structure = json.dumps(tree.to_dict(), indent=2)
    parts.append(f"## {PROJECT_STRUCTURE_TITLE}")
    parts.append(f"```json\n{structure}\n```")
    return "\n\n".join(parts) + "\n"


__all__ = ["assemble_document"]
