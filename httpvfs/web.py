"""The filesystem contract a static file server consumes."""

from __future__ import annotations

import io
from typing import Any, Protocol


class WebFile(Protocol):
    """An open file as seen by the server: bytes plus stat and listing."""

    def read(self, size: int = -1) -> bytes: ...

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int: ...

    def close(self) -> None: ...

    def stat(self) -> Any: ...

    def readdir(self, count: int = -1) -> list[Any]: ...


class WebFileSystem(Protocol):
    def open(self, name: str) -> WebFile: ...


__all__ = ["WebFile", "WebFileSystem"]
