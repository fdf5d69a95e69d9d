"""Helpers for working with rooted POSIX paths inside a node tree."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import PurePosixPath

from .nodes import MemoryDirectory, MemoryFile, MemoryNode, not_a_directory


def normalize(path: str | PurePosixPath) -> PurePosixPath:
    """Collapse ``.``/``..`` and root relative paths at ``/``."""
    parts: list[str] = []
    for part in PurePosixPath("/", path).parts:
        if part in ("", "/", "."):
            continue
        if part == "..":
            if parts:
                parts.pop()
            continue
        parts.append(part)
    return PurePosixPath("/" + "/".join(parts)) if parts else PurePosixPath("/")


def iterate_parts(path: PurePosixPath) -> Iterable[str]:
    for part in path.parts:
        if part in ("", "/"):
            continue
        yield part


class PathResolverMixin:
    """Resolve normalized paths against ``self.root``."""

    root: MemoryDirectory

    def _resolve_node(self, path: str | PurePosixPath) -> MemoryNode:
        target = normalize(path)
        current: MemoryNode = self.root
        for part in iterate_parts(target):
            if not isinstance(current, MemoryDirectory):
                raise not_a_directory(current.path())
            current = current.get_child(part)
        return current

    def _resolve_dir(self, path: str | PurePosixPath, *, create: bool = False) -> MemoryDirectory:
        target = normalize(path)
        current = self.root
        for part in iterate_parts(target):
            try:
                next_node = current.get_child(part)
            except FileNotFoundError:
                if not create:
                    raise
                next_node = MemoryDirectory(name=part, parent=current, modified_at=current.modified_at)
                current.add_child(next_node)
            if not isinstance(next_node, MemoryDirectory):
                raise not_a_directory(next_node.path())
            current = next_node
        return current

    def _ensure_file(self, path: str | PurePosixPath, *, create: bool = False) -> MemoryFile:
        target = normalize(path)
        if target == PurePosixPath("/"):
            raise IsADirectoryError("Cannot create file at root path")
        parent = self._resolve_dir(target.parent, create=create)
        try:
            node = parent.get_child(target.name)
        except FileNotFoundError:
            if not create:
                raise
            node = MemoryFile(name=target.name, parent=parent, modified_at=parent.modified_at)
            parent.add_child(node)
            return node
        if not isinstance(node, MemoryFile):
            raise IsADirectoryError(f"{node.path()} is a directory")
        return node


__all__ = ["PathResolverMixin", "normalize", "iterate_parts"]
