"""Filesystem backed by a zip archive."""

from __future__ import annotations

import io
import time
import zipfile
from pathlib import Path
from typing import BinaryIO

from .fileinfo import FileInfo
from .nodes import MemoryDirectory, MemoryFile
from .path_utils import PathResolverMixin, iterate_parts, normalize
from .vfs import FileSystem


class _ZipMember(MemoryFile):
    def __init__(self, name: str, *, member: zipfile.ZipInfo, parent: MemoryDirectory | None = None) -> None:
        super().__init__(name, parent=parent, modified_at=time.mktime(member.date_time + (0, 0, -1)))
        self.member = member

    def info(self) -> FileInfo:
        return FileInfo.for_file(self.name, self.member.file_size, self.modified_at)


class ZipFileSystem(PathResolverMixin, FileSystem):
    """Exposes the members of a zip archive as a read-only tree.

    Directories are implied by member names; explicit directory entries are
    honoured too. The archive stays open until :meth:`close`.
    """

    def __init__(self, archive: str | Path | BinaryIO | zipfile.ZipFile) -> None:
        if isinstance(archive, zipfile.ZipFile):
            self.zip = archive
        else:
            self.zip = zipfile.ZipFile(archive)
        self.root = MemoryDirectory(name="")
        # repeated names follow zipfile.getinfo: the last member wins
        for member in self.zip.infolist():
            if member.is_dir():
                self._make_dirs(member.filename)
                continue
            dirname, _, name = member.filename.rpartition("/")
            parent = self._make_dirs(dirname)
            parent.children[name] = _ZipMember(name, member=member, parent=parent)

    def _make_dirs(self, path: str) -> MemoryDirectory:
        current = self.root
        for part in iterate_parts(normalize(path)):
            child = current.children.get(part)
            if not isinstance(child, MemoryDirectory):
                child = MemoryDirectory(name=part, parent=current, modified_at=current.modified_at)
                current.children[part] = child
            current = child
        return current

    def open(self, path: str) -> BinaryIO:
        node = self._resolve_node(path)
        if isinstance(node, _ZipMember):
            return self.zip.open(node.member)
        return io.BytesIO(b"")

    def stat(self, path: str) -> FileInfo:
        return self._resolve_node(path).info()

    def read_dir(self, path: str) -> list[FileInfo]:
        directory = self._resolve_dir(path)
        return [child.info() for child in directory.iter_children()]

    def close(self) -> None:
        self.zip.close()

    def __enter__(self) -> "ZipFileSystem":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = ["ZipFileSystem"]
