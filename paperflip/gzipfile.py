"""Sequential, single-direction access to GZIP files."""

from __future__ import annotations

import gzip
import os
from typing import BinaryIO, Optional, Union

_GZIP_MAGIC = b"\x1f\x8b"
_READ = "r"
_WRITE = "w"

FileId = Union[str, int, "os.PathLike[str]"]


def _parse_mode(mode: str) -> str:
    """Reduce an open mode string to reading or writing, rejecting the rest."""
    if "a" in mode:
        raise ValueError("Append mode is not supported for GZIP")
    reading = "r" in mode
    writing = "w" in mode
    if "+" in mode and (reading or writing):
        reading = writing = True
    if reading and writing:
        raise ValueError("Opening gzip for both reading and writing is not supported")
    if reading:
        return _READ
    if writing:
        return _WRITE
    raise ValueError("You can open a gzip either for reading or for writing. Which is it?")


class GzipFile:
    """A GZIP file named by path or descriptor, opened for reading or writing.

    Reading a file that is not GZIP-compressed returns its bytes unchanged.
    """

    def __init__(self, file_name: FileId = "") -> None:
        self.file_name = file_name
        self._raw: Optional[BinaryIO] = None
        self._stream = None
        self._mode: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self._stream is not None

    def open(self, mode: str) -> None:
        """Open the file with mode 'r' or 'w' (a 'b' is allowed)."""
        if self.is_open:
            raise ValueError("GZIP file is already open")
        kind = _parse_mode(mode)
        try:
            if kind == _READ:
                raw = open(self.file_name, "rb")
                if raw.peek(2)[:2] == _GZIP_MAGIC:
                    stream = gzip.GzipFile(fileobj=raw, mode="rb")
                else:
                    stream = raw
            else:
                raw = open(self.file_name, "wb")
                stream = gzip.GzipFile(fileobj=raw, mode="wb", filename="")
        except OSError as exc:
            raise OSError("Could not gzopen() file") from exc
        self._raw = raw
        self._stream = stream
        self._mode = kind

    def _require(self, kind: str) -> None:
        if not self.is_open:
            raise ValueError("GZIP file is not open")
        if self._mode != kind:
            action = "reading" if kind == _READ else "writing"
            raise ValueError(f"GZIP file is not open for {action}")

    def read(self, size: int = -1) -> bytes:
        """Read up to size uncompressed bytes, or everything if size is negative."""
        self._require(_READ)
        return self._stream.read(size)

    def write(self, data: bytes) -> int:
        """Compress and write data, returning the number of bytes taken."""
        self._require(_WRITE)
        if not data:
            return 0
        written = self._stream.write(data)
        if written == 0:
            raise OSError("Could not write to GZIP file")
        return written

    def flush(self) -> None:
        """Write pending compressed data with a sync flush."""
        if not self.is_open:
            raise ValueError("GZIP file is not open")
        self._stream.flush()

    def close(self) -> None:
        """Close the file; closing a closed file does nothing."""
        if not self.is_open:
            return
        stream, raw = self._stream, self._raw
        self._stream = self._raw = self._mode = None
        try:
            stream.close()
        finally:
            if raw is not stream:
                raw.close()

    def is_sequential(self) -> bool:
        """GZIP files are not seekable."""
        return True

    def __enter__(self) -> "GzipFile":
        return self

    def __exit__(self, *args) -> None:
        self.close()