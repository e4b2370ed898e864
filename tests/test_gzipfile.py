import gzip
import zlib

import pytest

from paperflip.gzipfile import GzipFile


def test_round_trip(tmp_path):
    path = tmp_path / "data.gz"
    payload = b"hello gzip " * 50
    with GzipFile(str(path)) as out:
        out.open("w")
        assert out.write(payload) == len(payload)
    with GzipFile(str(path)) as inp:
        inp.open("r")
        assert inp.read() == payload


def test_output_is_gzip(tmp_path):
    path = tmp_path / "data.gz"
    with GzipFile(str(path)) as out:
        out.open("wb")
        out.write(b"abc")
    assert path.read_bytes()[:2] == b"\x1f\x8b"
    assert gzip.decompress(path.read_bytes()) == b"abc"


def test_partial_reads(tmp_path):
    path = tmp_path / "d.gz"
    path.write_bytes(gzip.compress(b"0123456789"))
    f = GzipFile(str(path))
    f.open("rb")
    assert f.read(4) == b"0123"
    assert f.read(100) == b"456789"
    assert f.read(1) == b""
    f.close()


def test_plain_file_read_transparently(tmp_path):
    path = tmp_path / "plain.txt"
    path.write_bytes(b"not compressed")
    f = GzipFile(str(path))
    f.open("r")
    assert f.read() == b"not compressed"
    f.close()


def test_flush_makes_data_readable(tmp_path):
    path = tmp_path / "s.gz"
    f = GzipFile(str(path))
    f.open("w")
    f.write(b"synced")
    f.flush()
    partial = zlib.decompressobj(31).decompress(path.read_bytes())
    assert partial == b"synced"
    f.close()


@pytest.mark.parametrize("mode", ["a", "ab", "r+", "w+", "", "b"])
def test_rejected_modes(tmp_path, mode):
    f = GzipFile(str(tmp_path / "x.gz"))
    with pytest.raises(ValueError):
        f.open(mode)
    assert f.is_open is False


def test_missing_file(tmp_path):
    f = GzipFile(str(tmp_path / "missing.gz"))
    with pytest.raises(OSError):
        f.open("r")


def test_write_empty_returns_zero(tmp_path):
    f = GzipFile(str(tmp_path / "e.gz"))
    f.open("w")
    assert f.write(b"") == 0
    f.close()


def test_wrong_direction(tmp_path):
    f = GzipFile(str(tmp_path / "w.gz"))
    f.open("w")
    with pytest.raises(ValueError):
        f.read()
    f.close()
    with pytest.raises(ValueError):
        f.write(b"x")


def test_is_sequential():
    assert GzipFile().is_sequential() is True


def test_context_manager_closes(tmp_path):
    with GzipFile(str(tmp_path / "c.gz")) as f:
        f.open("w")
        assert f.is_open is True
    assert f.is_open is False


def test_reopen_while_open_fails(tmp_path):
    f = GzipFile(str(tmp_path / "r.gz"))
    f.open("w")
    with pytest.raises(ValueError):
        f.open("w")
    f.close()