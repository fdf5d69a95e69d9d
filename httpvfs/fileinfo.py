"""File metadata reported by VFS backends."""

from __future__ import annotations

import stat
from dataclasses import dataclass


@dataclass(frozen=True)
class FileInfo:
    """Describes a single path: what ``os.stat`` would tell a web server."""

    name: str
    size: int
    mode: int
    mod_time: float
    is_dir: bool = False

    @classmethod
    def for_file(cls, name: str, size: int, mod_time: float, *, perm: int = 0o444) -> "FileInfo":
        return cls(name=name, size=size, mode=stat.S_IFREG | perm, mod_time=mod_time)

    @classmethod
    def for_dir(cls, name: str, mod_time: float, *, perm: int = 0o555) -> "FileInfo":
        return cls(name=name, size=0, mode=stat.S_IFDIR | perm, mod_time=mod_time, is_dir=True)


__all__ = ["FileInfo"]
