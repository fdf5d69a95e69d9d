"""In-memory filesystem built from a mapping of paths to contents."""

from __future__ import annotations

import io
import time
from collections.abc import Mapping
from typing import BinaryIO

from .fileinfo import FileInfo
from .nodes import MemoryDirectory, MemoryFile
from .path_utils import PathResolverMixin
from .vfs import FileSystem


class MapFileSystem(PathResolverMixin, FileSystem):
    """Read-only tree whose directories are implied by the file paths.

    >>> fs = MapFileSystem({"/index.html": "<html></html>", "assets/app.js": b""})
    >>> [info.name for info in fs.read_dir("/")]
    ['assets', 'index.html']
    """

    def __init__(
        self,
        files: Mapping[str, str | bytes],
        *,
        mod_time: float | None = None,
        encoding: str = "utf-8",
    ) -> None:
        self.root = MemoryDirectory(name="", modified_at=mod_time if mod_time is not None else time.time())
        for path, content in files.items():
            data = content.encode(encoding) if isinstance(content, str) else bytes(content)
            self._ensure_file(path, create=True).data = data

    def open(self, path: str) -> BinaryIO:
        node = self._resolve_node(path)
        if isinstance(node, MemoryFile):
            return io.BytesIO(node.data)
        # directories open as empty streams; listings go through read_dir
        return io.BytesIO(b"")

    def stat(self, path: str) -> FileInfo:
        return self._resolve_node(path).info()

    def read_dir(self, path: str) -> list[FileInfo]:
        directory = self._resolve_dir(path)
        return [child.info() for child in directory.iter_children()]

    def __repr__(self) -> str:
        return f"MapFileSystem({len(self.root.children)} top-level entries)"


__all__ = ["MapFileSystem"]
