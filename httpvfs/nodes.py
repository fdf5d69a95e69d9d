"""Node tree backing the in-memory filesystem."""

from __future__ import annotations

import errno
import os
import time
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import PurePosixPath

from .fileinfo import FileInfo


def not_found(path: object) -> FileNotFoundError:
    return FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path))


def not_a_directory(path: object) -> NotADirectoryError:
    return NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), str(path))


@dataclass
class MemoryNode:
    """Base node stored inside the tree."""

    name: str
    parent: "MemoryDirectory" | None = None
    modified_at: float = field(default_factory=time.time)

    def path(self) -> PurePosixPath:
        if self.parent is None:
            return PurePosixPath("/")
        segments = []
        node: MemoryNode | None = self
        while node and node.parent is not None:
            segments.append(node.name)
            node = node.parent
        return PurePosixPath("/" + "/".join(reversed(segments))) if segments else PurePosixPath("/")

    def info(self) -> FileInfo:
        raise NotImplementedError


class MemoryFile(MemoryNode):
    """Immutable byte content."""

    def __init__(
        self,
        name: str,
        *,
        parent: "MemoryDirectory" | None = None,
        data: bytes = b"",
        modified_at: float | None = None,
    ) -> None:
        super().__init__(name=name, parent=parent)
        if modified_at is not None:
            self.modified_at = modified_at
        self.data = data

    def info(self) -> FileInfo:
        return FileInfo.for_file(self.name, len(self.data), self.modified_at)


class MemoryDirectory(MemoryNode):
    def __init__(
        self,
        name: str,
        *,
        parent: "MemoryDirectory" | None = None,
        modified_at: float | None = None,
    ) -> None:
        super().__init__(name=name, parent=parent)
        if modified_at is not None:
            self.modified_at = modified_at
        self.children: dict[str, MemoryNode] = {}

    def info(self) -> FileInfo:
        # root has no name of its own
        return FileInfo.for_dir(self.name or "/", self.modified_at)

    def add_child(self, node: MemoryNode) -> None:
        if node.name in self.children:
            raise FileExistsError(errno.EEXIST, os.strerror(errno.EEXIST), str(self.path() / node.name))
        node.parent = self
        self.children[node.name] = node

    def get_child(self, name: str) -> MemoryNode:
        try:
            return self.children[name]
        except KeyError:
            raise not_found(self.path() / name) from None

    def iter_children(self) -> Iterator[MemoryNode]:
        return iter(sorted(self.children.values(), key=lambda node: node.name))


__all__ = [
    "MemoryNode",
    "MemoryFile",
    "MemoryDirectory",
    "not_found",
    "not_a_directory",
]
