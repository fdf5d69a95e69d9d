"""Expose a :class:`~httpvfs.vfs.FileSystem` through the web file interface.

:class:`HTTPFileSystem` satisfies :class:`~httpvfs.web.WebFileSystem`, so a
static file server can serve content that lives in any VFS backend.

Everything here forwards. Exceptions raised by the VFS or by an open handle
reach the caller unchanged, and nothing is cached, retried or logged.

No locking is added: thread safety is exactly that of the wrapped VFS and
its handles. A server should use one :class:`HTTPFile` per request and close
it on every exit path; there is no finalizer.
"""

from __future__ import annotations

import io
from typing import BinaryIO

from .fileinfo import FileInfo
from .vfs import FileSystem


class HTTPFileSystem:
    """Opens VFS paths as :class:`HTTPFile` objects."""

    def __init__(self, vfs: FileSystem) -> None:
        self.vfs = vfs

    def open(self, name: str) -> "HTTPFile":
        # name goes to the VFS untouched; it owns normalization and sandboxing
        handle = self.vfs.open(name)
        return HTTPFile(handle, name, self)

    def __repr__(self) -> str:
        return f"HTTPFileSystem({self.vfs!r})"


class HTTPFile:
    """One open VFS handle plus the path it was opened with.

    ``stat`` and ``readdir`` are rooted at the filesystem, so they go through
    the owning :class:`HTTPFileSystem` using :attr:`path` rather than the
    handle, which does not know its own path.
    """

    def __init__(self, handle: BinaryIO, path: str, fs: HTTPFileSystem) -> None:
        self._handle = handle
        self._path = path
        self._fs = fs

    @property
    def path(self) -> str:
        return self._path

    def read(self, size: int = -1) -> bytes:
        return self._handle.read(size)

    def readinto(self, buffer: bytearray | memoryview) -> int:
        return self._handle.readinto(buffer)

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        return self._handle.seek(offset, whence)

    def tell(self) -> int:
        return self._handle.tell()

    def close(self) -> None:
        self._handle.close()

    def stat(self) -> FileInfo:
        return self._fs.vfs.stat(self._path)

    def readdir(self, count: int = -1) -> list[FileInfo]:
        """Return the whole listing of :attr:`path`.

        ``count`` is accepted for interface compatibility but ignored: there
        is no pagination, every call returns every entry.
        """
        return self._fs.vfs.read_dir(self._path)

    def __enter__(self) -> "HTTPFile":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"HTTPFile({self._path!r})"


def new(vfs: FileSystem) -> HTTPFileSystem:
    """Wrap ``vfs`` for use by a static file server."""
    return HTTPFileSystem(vfs)


__all__ = ["HTTPFileSystem", "HTTPFile", "new"]
