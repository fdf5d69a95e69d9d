"""Command-line interface for httpvfs."""

from __future__ import annotations

import argparse
import contextlib
import errno
import logging
import os
import shutil
import sys
import zipfile
from collections.abc import Iterator
from pathlib import Path

from .httpfs import HTTPFileSystem
from .osfs import OSFileSystem
from .server import make_server
from .vfs import FileSystem
from .zipfs import ZipFileSystem

logger = logging.getLogger(__name__)


def _add_common_flags(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--root",
        default=".",
        help="Serve files from this host directory (default: current directory).",
    )
    source.add_argument(
        "--zip",
        metavar="FILE",
        help="Serve files from this zip archive instead of a directory.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")


@contextlib.contextmanager
def _open_source(args: argparse.Namespace) -> Iterator[FileSystem]:
    if args.zip:
        with ZipFileSystem(args.zip) as vfs:
            yield vfs
    else:
        yield OSFileSystem(Path(args.root))


def _fail(path: str, exc: OSError) -> int:
    sys.stderr.write(f"httpvfs: {path}: {exc.strerror or exc}\n")
    return 1


def _run_serve(args: argparse.Namespace, vfs: FileSystem) -> int:
    server = make_server(HTTPFileSystem(vfs), args.host, args.port)
    host, port = server.server_address[:2]
    logger.info("Serving %s on http://%s:%s/", args.zip or args.root, host, port)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        server.server_close()
    return 0


def _run_cat(args: argparse.Namespace, vfs: FileSystem) -> int:
    fs = HTTPFileSystem(vfs)
    try:
        with fs.open(args.path) as file:
            if file.stat().is_dir:
                return _fail(args.path, IsADirectoryError(errno.EISDIR, os.strerror(errno.EISDIR)))
            shutil.copyfileobj(file, sys.stdout.buffer)
    except OSError as exc:
        return _fail(args.path, exc)
    sys.stdout.buffer.flush()
    return 0


def _run_ls(args: argparse.Namespace, vfs: FileSystem) -> int:
    fs = HTTPFileSystem(vfs)
    try:
        with fs.open(args.path) as file:
            entries = file.readdir(-1)
    except OSError as exc:
        return _fail(args.path, exc)
    for entry in entries:
        name = f"{entry.name}/" if entry.is_dir else entry.name
        sys.stdout.write(f"{entry.size:>10}  {name}\n")
    return 0


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="httpvfs")
    subparsers = parser.add_subparsers(dest="command_name", required=True)

    serve_parser = subparsers.add_parser("serve", help="Serve files over HTTP")
    _add_common_flags(serve_parser)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Address to bind (default: 127.0.0.1).")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to bind (default: 8000).")
    serve_parser.set_defaults(func=_run_serve)

    cat_parser = subparsers.add_parser("cat", help="Print a file")
    _add_common_flags(cat_parser)
    cat_parser.add_argument("path", help="Slash-separated path inside the source")
    cat_parser.set_defaults(func=_run_cat)

    ls_parser = subparsers.add_parser("ls", help="List a directory")
    _add_common_flags(ls_parser)
    ls_parser.add_argument("path", nargs="?", default="/", help="Directory to list (default: /)")
    ls_parser.set_defaults(func=_run_ls)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        with _open_source(args) as vfs:
            logger.debug("Opened source %r", vfs)
            exit_code = args.func(args, vfs)
    except (OSError, zipfile.BadZipFile) as exc:
        sys.stderr.write(f"httpvfs: {exc}\n")
        exit_code = 1
    raise SystemExit(exit_code)


__all__ = ["main"]
