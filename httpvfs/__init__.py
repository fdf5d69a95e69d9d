"""httpvfs package: serve a read-only virtual filesystem over HTTP."""

from .fileinfo import FileInfo
from .httpfs import HTTPFile, HTTPFileSystem, new
from .memfs import MapFileSystem
from .osfs import OSFileSystem
from .server import make_handler, make_server
from .vfs import FileSystem
from .web import WebFile, WebFileSystem
from .zipfs import ZipFileSystem

__all__ = [
    "new",
    "HTTPFileSystem",
    "HTTPFile",
    "FileSystem",
    "FileInfo",
    "MapFileSystem",
    "OSFileSystem",
    "ZipFileSystem",
    "WebFile",
    "WebFileSystem",
    "make_handler",
    "make_server",
]
