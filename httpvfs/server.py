"""Static file server over any :class:`~httpvfs.web.WebFileSystem`."""

from __future__ import annotations

import email.utils
import html
import logging
import mimetypes
import re
import urllib.parse
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any

from .web import WebFile, WebFileSystem

logger = logging.getLogger(__name__)

_RANGE_RE = re.compile(r"^bytes=(\d*)-(\d*)$")


class RangeNotSatisfiable(Exception):
    pass


def parse_range(header: str | None, size: int) -> tuple[int, int] | None:
    """Parse a single-range ``Range`` header into inclusive ``(start, end)``.

    Returns ``None`` when the header is absent or not something we honour
    (multiple ranges, other units), in which case the full body is sent.
    """
    if header is None:
        return None
    match = _RANGE_RE.match(header.strip())
    if match is None:
        return None
    first, last = match.groups()
    if not first:
        if not last:
            return None
        suffix = int(last)
        if suffix == 0 or size == 0:
            raise RangeNotSatisfiable
        return max(size - suffix, 0), size - 1
    start = int(first)
    end = int(last) if last else size - 1
    if start >= size:
        raise RangeNotSatisfiable
    if end < start:
        return None
    return start, min(end, size - 1)


class FileRequestHandler(BaseHTTPRequestHandler):
    """Serves GET/HEAD requests from ``filesystem``."""

    filesystem: WebFileSystem
    server_version = "httpvfs"
    chunk_size = 64 * 1024

    def do_GET(self) -> None:
        self._serve(head=False)

    def do_HEAD(self) -> None:
        self._serve(head=True)

    def log_message(self, format: str, *args: object) -> None:
        logger.info("%s - %s", self.address_string(), format % args)

    def log_error(self, format: str, *args: object) -> None:
        logger.error("%s - %s", self.address_string(), format % args)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _serve(self, *, head: bool) -> None:
        url = urllib.parse.urlsplit(self.path)
        path = urllib.parse.unquote(url.path)
        try:
            file = self.filesystem.open(path)
        except OSError as exc:
            self._send_os_error(exc, path)
            return
        except Exception:
            logger.exception("Backend failed to open %s", path)
            self.send_error(HTTPStatus.INTERNAL_SERVER_ERROR)
            return
        try:
            info = file.stat()
            if info.is_dir:
                if not path.endswith("/"):
                    self._redirect(url._replace(path=url.path + "/").geturl())
                    return
                self._send_listing(file, path, head=head)
            else:
                self._send_file(file, info, path, head=head)
        except OSError as exc:
            self._send_os_error(exc, path)
        except Exception:
            logger.exception("Backend failed while serving %s", path)
            self.send_error(HTTPStatus.INTERNAL_SERVER_ERROR)
        finally:
            file.close()

    def _send_os_error(self, exc: OSError, path: str) -> None:
        if isinstance(exc, (FileNotFoundError, NotADirectoryError)):
            self.send_error(HTTPStatus.NOT_FOUND)
        elif isinstance(exc, PermissionError):
            self.send_error(HTTPStatus.FORBIDDEN)
        else:
            logger.error("Failed to serve %s: %s", path, exc)
            self.send_error(HTTPStatus.INTERNAL_SERVER_ERROR)

    def _redirect(self, location: str) -> None:
        self.send_response(HTTPStatus.MOVED_PERMANENTLY)
        self.send_header("Location", location)
        self.send_header("Content-Length", "0")
        self.end_headers()

    def _send_file(self, file: WebFile, info: Any, path: str, *, head: bool) -> None:
        size = info.size
        try:
            byte_range = parse_range(self.headers.get("Range"), size)
        except RangeNotSatisfiable:
            self.send_response(HTTPStatus.REQUESTED_RANGE_NOT_SATISFIABLE)
            self.send_header("Content-Range", f"bytes */{size}")
            self.send_header("Content-Length", "0")
            self.end_headers()
            return

        status = HTTPStatus.OK
        length = size
        if byte_range is not None:
            start, end = byte_range
            file.seek(start)
            status = HTTPStatus.PARTIAL_CONTENT
            length = end - start + 1

        self.send_response(status)
        self.send_header("Content-Type", mimetypes.guess_type(path)[0] or "application/octet-stream")
        self.send_header("Content-Length", str(length))
        self.send_header("Accept-Ranges", "bytes")
        self.send_header("Last-Modified", email.utils.formatdate(info.mod_time, usegmt=True))
        if byte_range is not None:
            self.send_header("Content-Range", f"bytes {start}-{end}/{size}")
        self.end_headers()
        if head:
            return
        try:
            self._copy(file, length)
        except Exception:
            # headers are already out; all we can do is drop the connection
            logger.exception("Read failed while sending %s", path)
            self.close_connection = True

    def _copy(self, file: WebFile, length: int) -> None:
        remaining = length
        while remaining > 0:
            chunk = file.read(min(self.chunk_size, remaining))
            if not chunk:
                break
            self.wfile.write(chunk)
            remaining -= len(chunk)

    def _send_listing(self, file: WebFile, path: str, *, head: bool) -> None:
        entries = file.readdir(-1)
        title = html.escape(f"Index of {path}")
        lines = [
            "<!DOCTYPE html>",
            f"<html><head><meta charset=\"utf-8\"><title>{title}</title></head>",
            f"<body><h1>{title}</h1><ul>",
        ]
        for entry in entries:
            name = entry.name + ("/" if entry.is_dir else "")
            lines.append(f"<li><a href=\"{urllib.parse.quote(name)}\">{html.escape(name)}</a></li>")
        lines.append("</ul></body></html>")
        body = "\n".join(lines).encode("utf-8")

        self.send_response(HTTPStatus.OK)
        self.send_header("Content-Type", "text/html; charset=utf-8")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        if not head:
            self.wfile.write(body)


def make_handler(fs: WebFileSystem) -> type[FileRequestHandler]:
    """Bind ``fs`` to a request handler class for ``http.server``."""
    return type("BoundFileRequestHandler", (FileRequestHandler,), {"filesystem": fs})


def make_server(fs: WebFileSystem, host: str = "127.0.0.1", port: int = 8000) -> ThreadingHTTPServer:
    return ThreadingHTTPServer((host, port), make_handler(fs))


__all__ = [
    "FileRequestHandler",
    "RangeNotSatisfiable",
    "make_handler",
    "make_server",
    "parse_range",
]
