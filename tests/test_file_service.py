import os

import pytest

from mdsource.services.file_service import FileService


def test_file_service_read_text_utf8(tmp_path):
    fs = FileService()
    p = tmp_path / "a.md"
    p.write_bytes("# héllo".encode("utf-8"))
    assert fs.read_text(p) == "# héllo"


def test_file_service_read_text_missing(tmp_path):
    fs = FileService()
    with pytest.raises(FileNotFoundError):
        fs.read_text(tmp_path / "missing.md")


def test_file_service_read_text_invalid_utf8(tmp_path):
    p = tmp_path / "bad.md"
    p.write_bytes(b"\xff\xfe\x00")
    with pytest.raises(UnicodeDecodeError):
        FileService().read_text(p)


def test_file_service_modified_time(tmp_path):
    fs = FileService()
    p = tmp_path / "a.md"
    p.write_text("x", encoding="utf-8")
    os.utime(p, ns=(1_000_000_000, 2_000_000_000))
    assert fs.modified_time(p) == 2_000_000_000


def test_file_service_modified_time_missing(tmp_path):
    assert FileService().modified_time(tmp_path / "nope.md") is None
