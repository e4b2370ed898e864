import sys
from datetime import datetime

import pytest

from paperflip.zipentries import (
    CaseSensitivity,
    SortFlag,
    ZipEntryInfo,
    entry_less_than,
    file_extension,
    is_case_sensitive,
    matches_name_filters,
    sort_entries,
)


def _names(entries):
    return [entry.name for entry in entries]


def _entries(*names):
    return [ZipEntryInfo(name=name) for name in names]


@pytest.mark.parametrize(
    "name, expected",
    [
        ("a.txt", "txt"),
        ("archive.tar.gz", "gz"),
        (".bashrc", ""),
        ("name.", ""),
        ("README", ""),
    ],
)
def test_file_extension(name, expected):
    assert file_extension(name) == expected


def test_case_sensitivity_explicit():
    assert is_case_sensitive(CaseSensitivity.SENSITIVE) is True
    assert is_case_sensitive(CaseSensitivity.INSENSITIVE) is False


def test_case_sensitivity_default_follows_platform(monkeypatch):
    monkeypatch.setattr(sys, "platform", "win32")
    assert is_case_sensitive(CaseSensitivity.DEFAULT) is False
    monkeypatch.setattr(sys, "platform", "linux")
    assert is_case_sensitive(CaseSensitivity.DEFAULT) is True


def test_sort_by_name():
    result = sort_entries(_entries("c.txt", "a.txt", "b.txt"), SortFlag.NAME)
    assert _names(result) == ["a.txt", "b.txt", "c.txt"]


def test_sort_by_name_is_case_sensitive_by_default():
    result = sort_entries(_entries("b", "A", "a", "B"), SortFlag.NAME)
    assert _names(result) == ["A", "B", "a", "b"]


def test_sort_ignore_case():
    result = sort_entries(_entries("b", "A", "C"), SortFlag.NAME | SortFlag.IGNORE_CASE)
    assert _names(result) == ["A", "b", "C"]


def test_sort_reversed():
    result = sort_entries(_entries("a", "c", "b"), SortFlag.NAME | SortFlag.REVERSED)
    assert _names(result) == ["c", "b", "a"]


def test_dirs_first_and_last():
    items = _entries("z.txt", "sub/", "a.txt", "dir/")
    first = sort_entries(items, SortFlag.NAME | SortFlag.DIRS_FIRST)
    assert _names(first) == ["dir/", "sub/", "a.txt", "z.txt"]
    last = sort_entries(items, SortFlag.NAME | SortFlag.DIRS_LAST)
    assert _names(last) == ["a.txt", "z.txt", "dir/", "sub/"]


def test_sort_by_size_with_name_tiebreak():
    items = [
        ZipEntryInfo(name="big", uncompressed_size=300),
        ZipEntryInfo(name="b", uncompressed_size=10),
        ZipEntryInfo(name="a", uncompressed_size=10),
    ]
    assert _names(sort_entries(items, SortFlag.SIZE)) == ["a", "b", "big"]


def test_sort_by_time():
    items = [
        ZipEntryInfo(name="new", date_time=datetime(2024, 5, 1)),
        ZipEntryInfo(name="none"),
        ZipEntryInfo(name="old", date_time=datetime(2001, 1, 1)),
    ]
    assert _names(sort_entries(items, SortFlag.TIME)) == ["none", "old", "new"]


def test_sort_by_type():
    items = _entries("b.txt", "a.zip", "c.html", "a.txt", "noext")
    result = sort_entries(items, SortFlag.TYPE)
    assert _names(result) == ["noext", "c.html", "a.txt", "b.txt", "a.zip"]


def test_unsorted_and_none_keep_order():
    items = _entries("c", "a", "b")
    assert _names(sort_entries(items, SortFlag.UNSORTED)) == ["c", "a", "b"]
    assert _names(sort_entries(items, None)) == ["c", "a", "b"]


def test_invalid_order_raises():
    with pytest.raises(ValueError):
        sort_entries(_entries("a", "b"), SortFlag.TIME | SortFlag.TYPE)
    with pytest.raises(ValueError):
        entry_less_than(ZipEntryInfo(name="a"), ZipEntryInfo(name="b"), SortFlag.SIZE | SortFlag.TYPE)


def test_less_than_is_irreflexive_and_asymmetric():
    first = ZipEntryInfo(name="a")
    second = ZipEntryInfo(name="b")
    assert entry_less_than(first, first, SortFlag.NAME) is False
    assert entry_less_than(first, second, SortFlag.NAME) is True
    assert entry_less_than(second, first, SortFlag.NAME) is False


def test_sort_keeps_all_entries():
    items = _entries("d/", "b.txt", "a", "c.md")
    result = sort_entries(items, SortFlag.TYPE | SortFlag.DIRS_FIRST)
    assert sorted(_names(result)) == sorted(_names(items))


def test_name_filters_match_ignoring_case():
    assert matches_name_filters("README.TXT", ["*.txt"]) is True
    assert matches_name_filters("notes.md", ["*.txt", "*.md"]) is True
    assert matches_name_filters("image.png", ["*.txt"]) is False


def test_name_filters_question_mark():
    assert matches_name_filters("a1", ["a?"]) is True
    assert matches_name_filters("a12", ["a?"]) is False


def test_no_name_filters_pass_everything():
    assert matches_name_filters("anything", []) is True