"""Table-of-contents rendering for the generated documentation."""

from __future__ import annotations

import re
from typing import Dict, List, Sequence, Tuple


class TableOfContentsBuilder:
    """Renders a nested Markdown link list with GitHub-style anchors."""

    MIN_LEVEL = 2

    def render(self, headings: Sequence[Tuple[int, str]]) -> str:
        """Return the ToC for ``(level, title)`` headings in document order."""
        if not headings:
            return ""
        seen: Dict[str, int] = {}
        lines: List[str] = []
        for level, title in headings:
            anchor = self._unique(self.slugify(title), seen)
            indent = "  " * max(level - self.MIN_LEVEL, 0)
            lines.append(f"{indent}- [{title}](#{anchor})")
        return "\n".join(lines)

    @staticmethod
    def slugify(title: str) -> str:
        slug = title.strip().lower()
        slug = re.sub(r"[^\w\s-]", "", slug)
        slug = re.sub(r"\s", "-", slug)
        return slug

    @staticmethod
    def _unique(anchor: str, seen: Dict[str, int]) -> str:
        count = seen.get(anchor, 0)
        seen[anchor] = count + 1
        return anchor if count == 0 else f"{anchor}-{count}"


__all__ = ["TableOfContentsBuilder"]
