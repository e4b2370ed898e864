"""Zlib compression and decompression over another binary stream."""

from __future__ import annotations

import zlib
from typing import Any, Optional

IN_BUF_SIZE = 4096

_READ = "r"
_WRITE = "w"


def _parse_mode(mode: str) -> str:
    """Reduce an open mode string to reading or writing, rejecting the rest."""
    if "a" in mode:
        raise ValueError("Append mode is not supported for ZlibStream")
    reading = "r" in mode
    writing = "w" in mode
    if "+" in mode and (reading or writing):
        reading = writing = True
    if reading and writing:
        raise ValueError("Read-write mode is not supported for ZlibStream")
    if reading:
        return _READ
    if writing:
        return _WRITE
    raise ValueError("ZlibStream must be opened either for reading or for writing")


class ZlibStream:
    """Compresses data written to, or decompresses data read from, a binary stream.

    The underlying stream is never closed by this object, so more data may be
    written to it after the compressed stream is finished.
    """

    def __init__(self, io: Any) -> None:
        self.io = io
        self._mode: Optional[str] = None
        self._compressor = None
        self._decompressor = None
        self._pending = bytearray()
        self._eof = False

    @property
    def is_open(self) -> bool:
        return self._mode is not None

    def open(self, mode: str = "r") -> None:
        """Open for reading ('r') or writing ('w'); a 'b' is allowed."""
        if self.is_open:
            raise ValueError("ZlibStream is already open")
        kind = _parse_mode(mode)
        self._pending = bytearray()
        self._eof = False
        if kind == _READ:
            self._decompressor = zlib.decompressobj()
        else:
            self._compressor = zlib.compressobj(zlib.Z_DEFAULT_COMPRESSION)
        self._mode = kind

    def _require(self, kind: str) -> None:
        if not self.is_open:
            raise ValueError("ZlibStream is not open")
        if self._mode != kind:
            action = "reading" if kind == _READ else "writing"
            raise ValueError(f"ZlibStream is not open for {action}")

    def _write_out(self, data: bytes) -> None:
        if data:
            self.io.write(data)

    def read(self, size: int = -1) -> bytes:
        """Return up to size decompressed bytes, or all remaining if size is negative.

        Fewer bytes come back when the compressed stream or its source ends.
        Raises OSError when the source holds data that is not a zlib stream.
        """
        self._require(_READ)
        while not self._eof and (size < 0 or len(self._pending) < size):
            chunk = self.io.read(IN_BUF_SIZE)
            if not chunk:
                break
            try:
                self._pending += self._decompressor.decompress(chunk)
            except zlib.error as exc:
                raise OSError(str(exc)) from exc
            if self._decompressor.eof:
                self._eof = True
        count = len(self._pending) if size < 0 else min(size, len(self._pending))
        result = bytes(self._pending[:count])
        del self._pending[:count]
        return result

    def write(self, data: bytes) -> int:
        """Compress data into the stream and return the number of bytes taken."""
        self._require(_WRITE)
        try:
            compressed = self._compressor.compress(data)
        except zlib.error as exc:
            raise OSError(str(exc)) from exc
        self._write_out(compressed)
        return len(data)

    def flush(self) -> None:
        """Write all data compressed so far with a sync flush."""
        if not self.is_open:
            raise ValueError("ZlibStream is not open")
        if self._mode == _WRITE:
            self._write_out(self._compressor.flush(zlib.Z_SYNC_FLUSH))

    def close(self) -> None:
        """Finish the compressed stream; the underlying stream stays open."""
        if not self.is_open:
            return
        try:
            if self._mode == _WRITE:
                self._write_out(self._compressor.flush(zlib.Z_FINISH))
        finally:
            self._mode = None
            self._compressor = None
            self._decompressor = None
            self._pending = bytearray()

    def at_end(self) -> bool:
        """Tell whether the stream is closed or fully read to its end."""
        return not self.is_open or (not self._pending and self._eof)

    def bytes_available(self) -> int:
        """Return the buffered byte count, plus one while the stream has not ended."""
        return (0 if self._eof else 1) + len(self._pending)

    def __enter__(self) -> "ZlibStream":
        return self

    def __exit__(self, *args) -> None:
        self.close()