"""Directory-style navigation over the entries of a zip archive."""

from __future__ import annotations

import copy
import posixpath
import zipfile
from datetime import datetime
from typing import Iterable, List, Optional, Sequence

from paperflip.zipentries import (
    CaseSensitivity,
    Filter,
    SortFlag,
    ZipEntryInfo,
    is_case_sensitive,
    matches_name_filters,
    sort_entries,
)


def _simple_path(path: str) -> str:
    """Normalise a path; the archive root is the empty string."""
    if not path:
        return ""
    cleaned = posixpath.normpath(path)
    return "" if cleaned == "." else cleaned


def _entry_date(info: zipfile.ZipInfo) -> Optional[datetime]:
    try:
        return datetime(*info.date_time)
    except (TypeError, ValueError):
        return None


def _real_entry(info: zipfile.ZipInfo, name: str) -> ZipEntryInfo:
    return ZipEntryInfo(
        name=name,
        version_created=info.create_version,
        version_needed=info.extract_version,
        flags=info.flag_bits,
        method=info.compress_type,
        date_time=_entry_date(info),
        crc=info.CRC,
        compressed_size=info.compress_size,
        uncompressed_size=info.file_size,
        disk_number_start=info.volume,
        internal_attr=info.internal_attr,
        external_attr=info.external_attr,
        extra=bytes(info.extra),
        comment=info.comment.decode("utf-8", errors="replace"),
    )


def _contains(entries: Iterable[str], name: str, case_sensitive: bool) -> bool:
    if case_sensitive:
        return name in entries
    lowered = name.lower()
    return any(entry.lower() == lowered for entry in entries)


class ZipDir:
    """A current directory inside a zip archive open for reading.

    The root is the empty path; paths given with a leading '/' are taken
    from the root. Only '/' is understood as a separator.
    """

    def __init__(self, archive: zipfile.ZipFile, path: str = "") -> None:
        self.archive = archive
        self._dir = path[1:] if path.startswith("/") else path
        self.case_sensitivity = CaseSensitivity.DEFAULT
        self.filter = Filter.NO_FILTER
        self.name_filters: List[str] = []
        self.sorting: Optional[SortFlag] = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ZipDir):
            return NotImplemented
        return self.archive is other.archive and self._dir == other._dir

    __hash__ = None  # type: ignore[assignment]

    def __getitem__(self, pos: int) -> str:
        return self.entry_list()[pos]

    def __len__(self) -> int:
        return len(self.entry_list())

    def __repr__(self) -> str:
        return f"ZipDir({self._dir!r})"

    def cd(self, directory_name: str) -> bool:
        """Change the current directory; return False if it does not exist."""
        if directory_name == "/":
            self._dir = ""
            return True
        dir_name = directory_name[:-1] if directory_name.endswith("/") else directory_name
        if "/" in dir_name:
            other = copy.copy(self)
            if dir_name.startswith("/") and not other.cd("/"):
                return False
            for step in (part for part in dir_name.split("/") if part):
                if not other.cd(step):
                    return False
            self._dir = other.path()
            return True
        if dir_name == ".":
            return True
        if dir_name == "..":
            if self.is_root():
                return False
            slash = self._dir.rfind("/")
            self._dir = "" if slash == -1 else self._dir[:slash]
            return True
        if self.exists(dir_name):
            self._dir = dir_name if self.is_root() else f"{self._dir}/{dir_name}"
            return True
        return False

    def cd_up(self) -> bool:
        """Go to the parent directory; return False at the root."""
        return self.cd("..")

    def dir_name(self) -> str:
        """Return the last component of the current path, '.' at the root."""
        if not self._dir:
            return "."
        return self._dir.rsplit("/", 1)[-1]

    def entry_info_list(
        self,
        name_filters: Optional[Sequence[str]] = None,
        filters: Filter = Filter.NO_FILTER,
        sort: Optional[SortFlag] = None,
    ) -> List[ZipEntryInfo]:
        """Describe the entries directly inside the current directory.

        Subdirectories are named with a trailing '/'. A subdirectory that has
        no entry of its own in the archive is described with zeroed fields.
        Empty filters, name filters or sort fall back to the defaults set on
        this object; a sort of None leaves the archive order.
        """
        base = _simple_path(self._dir)
        if base:
            base += "/"
        fltr = filters or self.filter or Filter.ALL_ENTRIES
        patterns = list(name_filters or self.name_filters)

        dirs_found = set()
        result: List[ZipEntryInfo] = []
        for info in self.archive.infolist():
            name = info.filename
            if not name.startswith(base):
                continue
            relative = name[len(base):]
            if not relative:
                continue
            is_dir = False
            is_real = True
            slash = relative.find("/")
            if slash != -1:
                is_real = slash == len(relative) - 1
                relative = relative[:slash + 1]
                if relative in dirs_found:
                    continue
                is_dir = True
            dirs_found.add(relative)
            if is_dir and not fltr & Filter.DIRS:
                continue
            if not is_dir and not fltr & Filter.FILES:
                continue
            if not matches_name_filters(relative, patterns):
                continue
            result.append(_real_entry(info, relative) if is_real else ZipEntryInfo(name=relative))

        srt = sort if sort is not None else self.sorting
        if srt is not None and (srt & SortFlag.UNSORTED) != SortFlag.UNSORTED:
            if not is_case_sensitive(self.case_sensitivity):
                srt |= SortFlag.IGNORE_CASE
            result = sort_entries(result, srt)
        return result

    def entry_list(
        self,
        name_filters: Optional[Sequence[str]] = None,
        filters: Filter = Filter.NO_FILTER,
        sort: Optional[SortFlag] = None,
    ) -> List[str]:
        """Return the names of the entries directly inside the current directory."""
        return [info.name for info in self.entry_info_list(name_filters, filters, sort)]

    def exists(self, file_path: Optional[str] = None) -> bool:
        """Tell whether an entry exists, or, with no argument, this directory.

        '.', '/' and '' always exist; '..' exists unless at the root.
        """
        if file_path is None:
            return ZipDir(self.archive).exists(self._dir)
        if file_path == "/" or not file_path:
            return True
        file_name = file_path[:-1] if file_path.endswith("/") else file_path
        if "/" in file_name:
            other = copy.copy(self)
            parent = posixpath.dirname(file_name)
            return other.cd(parent) and other.exists(posixpath.basename(file_name))
        if file_name == "..":
            return not self.is_root()
        if file_name == ".":
            return True
        entries = self.entry_list(filters=Filter.ALL_ENTRIES, sort=None)
        sensitive = is_case_sensitive(self.case_sensitivity)
        if file_path.endswith("/"):
            return _contains(entries, file_path, sensitive)
        return _contains(entries, file_name, sensitive) or _contains(
            entries, file_name + "/", sensitive
        )

    def file_path(self, file_name: str) -> str:
        """Return the path of file_name inside the current directory, unchecked."""
        if file_name.startswith("/") or not self._dir:
            return file_name
        if not file_name:
            return self._dir
        if self._dir.endswith("/"):
            return self._dir + file_name
        return f"{self._dir}/{file_name}"

    def is_root(self) -> bool:
        """Tell whether this points to the archive root."""
        return not _simple_path(self._dir)

    def path(self) -> str:
        """Return the current path; it never starts with '/'."""
        return self._dir

    def relative_file_path(self, file_name: str) -> str:
        """Return a path starting with '/' relative to the current directory.

        A relative file_name is only cleaned.
        """
        cleaned = posixpath.normpath(file_name) if file_name else ""
        if not cleaned.startswith("/"):
            return cleaned
        return posixpath.relpath(cleaned, "/" + self._dir)

    def set_path(self, path: str) -> None:
        """Go to a path from the root without checking that it exists."""
        if path == "/":
            self._dir = ""
            return
        if path.endswith("/"):
            path = path[:-1]
        if path.startswith("/"):
            path = path[1:]
        self._dir = path