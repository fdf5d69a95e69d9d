"""Filesystem backed by a directory on the host."""

from __future__ import annotations

import errno
import os
import stat
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import BinaryIO

from .fileinfo import FileInfo
from .vfs import FileSystem


def _info(name: str, st: os.stat_result) -> FileInfo:
    return FileInfo(
        name=name,
        size=st.st_size,
        mode=st.st_mode,
        mod_time=st.st_mtime,
        is_dir=stat.S_ISDIR(st.st_mode),
    )


@dataclass
class OSFileSystem(FileSystem):
    """Serves the tree below ``root``; paths never escape it."""

    root: Path

    def __post_init__(self) -> None:
        self.root = Path(self.root)
        self._root_resolved = self.root.resolve()

    def _resolve(self, path: str) -> Path:
        if "\x00" in path:
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)
        rel = PurePosixPath(path)
        if rel.is_absolute():
            rel = rel.relative_to("/")
        target = (self._root_resolved / Path(rel.as_posix())).resolve()
        if not target.is_relative_to(self._root_resolved):
            raise PermissionError(errno.EACCES, "Path escapes filesystem root", path)
        return target

    def open(self, path: str) -> BinaryIO:
        target = self._resolve(path)
        if target.is_dir():
            # directory handles carry no bytes, mirror MapFileSystem
            return open(os.devnull, "rb")
        return open(target, "rb")

    def stat(self, path: str) -> FileInfo:
        target = self._resolve(path)
        return _info(target.name or "/", target.stat())

    def read_dir(self, path: str) -> list[FileInfo]:
        target = self._resolve(path)
        with os.scandir(target) as entries:
            infos = [_info(entry.name, entry.stat()) for entry in entries]
        infos.sort(key=lambda info: info.name)
        return infos


__all__ = ["OSFileSystem"]
