import io

import pytest

from httpvfs import FileSystem, HTTPFileSystem, MapFileSystem, new
from httpvfs.fileinfo import FileInfo

INDEX = b"<html></html>\n"


@pytest.fixture
def vfs() -> MapFileSystem:
    return MapFileSystem(
        {
            "/index.html": INDEX,
            "/assets/app.js": "console.log('hi');",
            "/assets/style.css": "body {}",
            "/data.bin": bytes(range(256)),
        },
        mod_time=1_700_000_000.0,
    )


@pytest.fixture
def fs(vfs: MapFileSystem) -> HTTPFileSystem:
    return new(vfs)


class RecordingFileSystem(FileSystem):
    """Hands out a fixed error or handle and records every call."""

    def __init__(self, error: Exception | None = None, handle: io.BytesIO | None = None) -> None:
        self.error = error
        self.handle = handle
        self.calls: list[tuple[str, str]] = []

    def open(self, path):
        self.calls.append(("open", path))
        if self.error is not None:
            raise self.error
        return self.handle

    def stat(self, path):
        self.calls.append(("stat", path))
        return FileInfo.for_file("stat-result", 1, 0.0)

    def read_dir(self, path):
        self.calls.append(("read_dir", path))
        return [FileInfo.for_file("a", 1, 0.0)]


class StrictHandle(io.BytesIO):
    def close(self) -> None:
        if self.closed:
            raise ValueError("already closed")
        super().close()


def test_scenario_index_html(fs: HTTPFileSystem) -> None:
    with fs.open("/index.html") as file:
        assert file.read() == INDEX
        info = file.stat()
    assert info.size == 14
    assert not info.is_dir


def test_scenario_missing_file(fs: HTTPFileSystem, vfs: MapFileSystem) -> None:
    with pytest.raises(FileNotFoundError) as direct:
        vfs.open("/missing.txt")
    with pytest.raises(FileNotFoundError) as adapted:
        fs.open("/missing.txt")
    assert str(adapted.value) == str(direct.value)
    assert adapted.value.filename == "/missing.txt"


def test_scenario_readdir_ignores_count(fs: HTTPFileSystem) -> None:
    with fs.open("/assets") as directory:
        names = [info.name for info in directory.readdir(1)]
    assert names == ["app.js", "style.css"]


@pytest.mark.parametrize("count", [-1, 0, 1, 10**9])
def test_readdir_returns_full_listing_for_any_count(fs, vfs, count) -> None:
    with fs.open("/") as root:
        assert root.readdir(count) == vfs.read_dir("/")


def test_read_matches_vfs_handle(fs: HTTPFileSystem, vfs: MapFileSystem) -> None:
    for path in ["/index.html", "/assets/app.js", "/data.bin"]:
        with fs.open(path) as adapted:
            direct = vfs.open(path)
            try:
                assert adapted.read() == direct.read()
            finally:
                direct.close()


def test_partial_reads_and_eof(fs: HTTPFileSystem) -> None:
    with fs.open("/data.bin") as file:
        assert file.read(10) == bytes(range(10))
        buffer = bytearray(6)
        assert file.readinto(buffer) == 6
        assert bytes(buffer) == bytes(range(10, 16))
        assert len(file.read()) == 240
        assert file.read(1) == b""


def test_seek_round_trip(fs: HTTPFileSystem) -> None:
    with fs.open("/data.bin") as file:
        assert file.seek(100) == 100
        first = file.read(20)
        assert file.tell() == 120
        assert file.seek(-20, io.SEEK_CUR) == 100
        assert file.read(20) == first
        assert file.seek(-6, io.SEEK_END) == 250
        assert file.read() == bytes(range(250, 256))


def test_stat_matches_vfs_stat(fs: HTTPFileSystem, vfs: MapFileSystem) -> None:
    for path in ["/index.html", "/assets", "/"]:
        with fs.open(path) as file:
            assert file.stat() == vfs.stat(path)


def test_stat_and_readdir_use_original_path() -> None:
    recorder = RecordingFileSystem(handle=io.BytesIO(b"x"))
    fs = HTTPFileSystem(recorder)
    file = fs.open("some//odd/../path")
    assert file.path == "some//odd/../path"
    assert file.stat().name == "stat-result"
    file.readdir(3)
    file.close()
    assert recorder.calls == [
        ("open", "some//odd/../path"),
        ("stat", "some//odd/../path"),
        ("read_dir", "some//odd/../path"),
    ]


@pytest.mark.parametrize(
    "error",
    [
        FileNotFoundError(2, "No such file or directory", "/x"),
        PermissionError(13, "Permission denied", "/x"),
        OSError(5, "Input/output error"),
        RuntimeError("backend exploded"),
    ],
)
def test_open_errors_propagate_unchanged(error: Exception) -> None:
    fs = HTTPFileSystem(RecordingFileSystem(error=error))
    with pytest.raises(type(error)) as excinfo:
        fs.open("/x")
    assert excinfo.value is error
    assert excinfo.value.__cause__ is None


def test_stat_errors_propagate_unchanged(vfs: MapFileSystem) -> None:
    fs = HTTPFileSystem(vfs)
    file = fs.open("/index.html")
    vfs.root.children.pop("index.html")
    with pytest.raises(FileNotFoundError):
        file.stat()
    with pytest.raises(NotADirectoryError):
        fs.open("/assets/app.js/nested")
    file.close()


def test_readdir_on_file_propagates_vfs_error(fs: HTTPFileSystem) -> None:
    with fs.open("/index.html") as file:
        with pytest.raises(NotADirectoryError):
            file.readdir(-1)


def test_double_close_follows_handle() -> None:
    lenient = HTTPFileSystem(RecordingFileSystem(handle=io.BytesIO(b"x"))).open("/a")
    lenient.close()
    lenient.close()

    strict = HTTPFileSystem(RecordingFileSystem(handle=StrictHandle(b"x"))).open("/a")
    strict.close()
    with pytest.raises(ValueError, match="already closed"):
        strict.close()


def test_read_after_close_raises_handle_error(fs: HTTPFileSystem) -> None:
    file = fs.open("/index.html")
    file.close()
    with pytest.raises(ValueError):
        file.read()


def test_each_open_returns_fresh_handle(fs: HTTPFileSystem) -> None:
    first = fs.open("/index.html")
    second = fs.open("/index.html")
    assert first is not second
    first.read()
    assert second.read() == INDEX
    first.close()
    second.close()


def test_filesystem_is_shared_not_copied(vfs: MapFileSystem) -> None:
    fs = new(vfs)
    assert fs.vfs is vfs
    assert "MapFileSystem" in repr(fs)
