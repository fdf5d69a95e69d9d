import pytest

from httpvfs import OSFileSystem


@pytest.fixture
def site(tmp_path):
    (tmp_path / "index.html").write_bytes(b"<html></html>\n")
    (tmp_path / "assets").mkdir()
    (tmp_path / "assets" / "b.css").write_text("b")
    (tmp_path / "assets" / "a.js").write_text("a")
    return tmp_path


def test_open_and_stat_file(site):
    fs = OSFileSystem(site)
    with fs.open("/index.html") as handle:
        assert handle.read() == b"<html></html>\n"
    info = fs.stat("/index.html")
    assert info.name == "index.html"
    assert info.size == 14
    assert not info.is_dir


def test_read_dir_is_sorted(site):
    fs = OSFileSystem(site)
    assert [info.name for info in fs.read_dir("/assets")] == ["a.js", "b.css"]
    root = {info.name: info for info in fs.read_dir("/")}
    assert root["assets"].is_dir


def test_open_directory_yields_empty_stream(site):
    fs = OSFileSystem(site)
    with fs.open("/assets") as handle:
        assert handle.read() == b""


def test_missing_path_raises_file_not_found(site):
    fs = OSFileSystem(site)
    with pytest.raises(FileNotFoundError):
        fs.open("/missing.txt")
    with pytest.raises(FileNotFoundError):
        fs.stat("/missing.txt")


def test_paths_cannot_escape_root(site):
    fs = OSFileSystem(site / "assets")
    with pytest.raises(PermissionError):
        fs.open("../index.html")
    with pytest.raises(PermissionError):
        fs.stat("/../index.html")


def test_nul_byte_in_path_is_not_found(site):
    fs = OSFileSystem(site)
    with pytest.raises(FileNotFoundError):
        fs.open("/index.html\x00.txt")
    with pytest.raises(FileNotFoundError):
        fs.stat("/a\x00")
