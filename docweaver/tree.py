"""Project tree construction from included relative paths."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Union

PATH_SEPARATOR = "/"


@dataclass(frozen=True)
class FileNode:
    """Leaf node for one included file."""

    name: str
    path: str


@dataclass
class DirectoryNode:
    """Directory ("module") node.

    ``children`` is keyed by path segment. Dict equality ignores insertion order,
    so two trees built from permutations of the same paths compare equal.
    """

    name: str
    path: str
    children: Dict[str, "Node"] = field(default_factory=dict)

    @property
    def is_root(self) -> bool:
        return self.path == ""

    def child_path(self, segment: str) -> str:
        return f"{self.path}{PATH_SEPARATOR}{segment}" if self.path else segment

    def to_dict(self) -> Dict[str, object]:
        """Serialize to the nested ``{segment: {...}}`` form; files map to ``{}``."""
        payload: Dict[str, object] = {}
        for segment, child in self.children.items():
            if isinstance(child, DirectoryNode):
                payload[segment] = child.to_dict()
            else:
                payload[segment] = {}
        return payload


Node = Union[FileNode, DirectoryNode]


def build_project_tree(paths: Iterable[str]) -> DirectoryNode:
    """Build a tree from relative POSIX paths, starting from an empty root."""
    root = DirectoryNode(name="", path="")
    for raw_path in paths:
        segments = [segment for segment in raw_path.split(PATH_SEPARATOR) if segment]
        if not segments:
            continue
        current = root
        for segment in segments[:-1]:
            existing = current.children.get(segment)
            if existing is None:
                existing = DirectoryNode(name=segment, path=current.child_path(segment))
                current.children[segment] = existing
            elif isinstance(existing, FileNode):
                raise ValueError(
                    f"Path '{raw_path}' uses file '{existing.path}' as a directory"
                )
            current = existing
        leaf = segments[-1]
        existing_leaf = current.children.get(leaf)
        if isinstance(existing_leaf, DirectoryNode):
            raise ValueError(f"Path '{raw_path}' is already a directory in the tree")
        if existing_leaf is None:
            current.children[leaf] = FileNode(name=leaf, path=current.child_path(leaf))
    return root


__all__ = [
    "DirectoryNode",
    "FileNode",
    "Node",
    "PATH_SEPARATOR",
    "build_project_tree",
]
