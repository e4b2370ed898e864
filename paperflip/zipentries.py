"""Archive entry descriptions, filters and the ordering used to list them."""

from __future__ import annotations

import enum
import fnmatch
import functools
import locale
import sys
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional, Sequence


class CaseSensitivity(enum.IntEnum):
    """How entry names are compared."""

    DEFAULT = 0
    SENSITIVE = 1
    INSENSITIVE = 2


class Filter(enum.IntFlag):
    """Which kinds of entries to list; NO_FILTER means 'use the default'."""

    NO_FILTER = 0
    DIRS = 0x001
    FILES = 0x002
    ALL_ENTRIES = DIRS | FILES


class SortFlag(enum.IntFlag):
    """Sort order flags; NAME is the zero order."""

    NAME = 0x00
    TIME = 0x01
    SIZE = 0x02
    UNSORTED = 0x03
    DIRS_FIRST = 0x04
    REVERSED = 0x08
    IGNORE_CASE = 0x10
    DIRS_LAST = 0x20
    LOCALE_AWARE = 0x40
    TYPE = 0x80


_ORDER_MASK = SortFlag.TIME | SortFlag.SIZE | SortFlag.TYPE
_VALID_ORDERS = (int(SortFlag.NAME), int(SortFlag.TIME), int(SortFlag.SIZE), int(SortFlag.TYPE))


@dataclass
class ZipEntryInfo:
    """Description of one entry of a zip archive; directories end with '/'."""

    name: str = ""
    version_created: int = 0
    version_needed: int = 0
    flags: int = 0
    method: int = 0
    date_time: Optional[datetime] = None
    crc: int = 0
    compressed_size: int = 0
    uncompressed_size: int = 0
    disk_number_start: int = 0
    internal_attr: int = 0
    external_attr: int = 0
    extra: bytes = b""
    comment: str = ""


def is_case_sensitive(cs: CaseSensitivity) -> bool:
    """Resolve a case sensitivity; DEFAULT is insensitive only on Windows."""
    if cs == CaseSensitivity.DEFAULT:
        return not sys.platform.startswith("win")
    return cs == CaseSensitivity.SENSITIVE


def file_extension(name: str) -> str:
    """Return the text after the last dot, ignoring a single leading dot."""
    if name.endswith(".") or name.find(".", 1) == -1:
        return ""
    return name[name.rfind(".") + 1:]


def _compare_strings(first: str, second: str, sort: SortFlag) -> int:
    if sort & SortFlag.LOCALE_AWARE:
        if sort & SortFlag.IGNORE_CASE:
            first, second = first.lower(), second.lower()
        return locale.strcoll(first, second)
    if sort & SortFlag.IGNORE_CASE:
        first, second = first.casefold(), second.casefold()
    return (first > second) - (first < second)


def _time_less(first: Optional[datetime], second: Optional[datetime]) -> bool:
    if first is None:
        return second is not None
    if second is None:
        return False
    return first < second


def _check_order(sort: SortFlag) -> None:
    if int(sort & _ORDER_MASK) not in _VALID_ORDERS:
        raise ValueError(f"Invalid sort mode 0x{int(sort):02X}")


def entry_less_than(first: ZipEntryInfo, second: ZipEntryInfo, sort: SortFlag) -> bool:
    """Tell whether first sorts before second under the given flags."""
    _check_order(sort)
    dirs_first = bool(sort & SortFlag.DIRS_FIRST)
    dirs_last = bool(sort & SortFlag.DIRS_LAST)
    if dirs_first or dirs_last:
        first_dir = first.name.endswith("/")
        second_dir = second.name.endswith("/")
        if first_dir and not second_dir:
            return dirs_first
        if not first_dir and second_dir:
            return dirs_last

    order = int(sort & _ORDER_MASK)
    by_name = _compare_strings(first.name, second.name, sort) < 0
    if order == SortFlag.NAME:
        result = by_name
    elif order == SortFlag.TYPE:
        ext_diff = _compare_strings(file_extension(first.name), file_extension(second.name), sort)
        result = by_name if ext_diff == 0 else ext_diff < 0
    elif order == SortFlag.SIZE:
        if first.uncompressed_size == second.uncompressed_size:
            result = by_name
        else:
            result = first.uncompressed_size < second.uncompressed_size
    else:
        if first.date_time == second.date_time:
            result = by_name
        else:
            result = _time_less(first.date_time, second.date_time)
    return not result if sort & SortFlag.REVERSED else result


def sort_entries(entries: Iterable[ZipEntryInfo], sort: Optional[SortFlag]) -> List[ZipEntryInfo]:
    """Return the entries sorted; None or UNSORTED keeps the original order."""
    items = list(entries)
    if sort is None or (sort & SortFlag.UNSORTED) == SortFlag.UNSORTED:
        return items
    _check_order(sort)

    def compare(first: ZipEntryInfo, second: ZipEntryInfo) -> int:
        if entry_less_than(first, second, sort):
            return -1
        if entry_less_than(second, first, sort):
            return 1
        return 0

    return sorted(items, key=functools.cmp_to_key(compare))


def matches_name_filters(name: str, patterns: Sequence[str]) -> bool:
    """Tell whether name matches any wildcard pattern, ignoring case.

    Every name passes when there are no patterns.
    """
    if not patterns:
        return True
    lowered = name.lower()
    return any(fnmatch.fnmatchcase(lowered, pattern.lower()) for pattern in patterns)