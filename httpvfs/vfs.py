"""Read-only virtual filesystem interface consumed by the HTTP adapter."""

from __future__ import annotations

from typing import BinaryIO

from .fileinfo import FileInfo


class FileSystem:
    """A read-only tree addressed by slash-separated, rooted paths.

    Backends raise the usual ``OSError`` subclasses (``FileNotFoundError``,
    ``NotADirectoryError`` ...) for missing or mistyped paths.
    """

    def open(self, path: str) -> BinaryIO:
        """Return a readable, seekable binary handle; the caller closes it."""
        raise NotImplementedError

    def stat(self, path: str) -> FileInfo:
        raise NotImplementedError

    def lstat(self, path: str) -> FileInfo:
        """Like :meth:`stat` but without following links.

        Part of the read-only VFS contract for backends that distinguish
        links; nothing here needs that, so it defaults to :meth:`stat`.
        """
        return self.stat(path)

    def read_dir(self, path: str) -> list[FileInfo]:
        raise NotImplementedError


__all__ = ["FileSystem"]
