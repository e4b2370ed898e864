"""32-bit checksums with one-shot and streaming interfaces."""

from __future__ import annotations

import zlib
from abc import ABC, abstractmethod


class Checksum32(ABC):
    """A 32-bit checksum computed in one step or over a stream of chunks."""

    @abstractmethod
    def calculate(self, data: bytes) -> int:
        """Return the checksum of data without touching the streaming value."""

    @abstractmethod
    def reset(self) -> None:
        """Restart the streaming calculation."""

    @abstractmethod
    def update(self, buf: bytes) -> None:
        """Feed the next chunk of the stream."""

    @abstractmethod
    def value(self) -> int:
        """Return the checksum of everything fed since the last reset."""


class Adler32(Checksum32):
    """Adler-32 checksum."""

    def __init__(self) -> None:
        self.reset()

    def calculate(self, data: bytes) -> int:
        return zlib.adler32(data)

    def reset(self) -> None:
        self._checksum = zlib.adler32(b"")

    def update(self, buf: bytes) -> None:
        self._checksum = zlib.adler32(buf, self._checksum)

    def value(self) -> int:
        return self._checksum


class Crc32(Checksum32):
    """CRC-32 checksum."""

    def __init__(self) -> None:
        self.reset()

    def calculate(self, data: bytes) -> int:
        return zlib.crc32(data)

    def reset(self) -> None:
        self._checksum = zlib.crc32(b"")

    def update(self, buf: bytes) -> None:
        self._checksum = zlib.crc32(buf, self._checksum)

    def value(self) -> int:
        return self._checksum