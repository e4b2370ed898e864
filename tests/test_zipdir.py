import zipfile

import pytest

from paperflip.zipdir import ZipDir
from paperflip.zipentries import CaseSensitivity, Filter, SortFlag


@pytest.fixture
def archive(tmp_path):
    path = tmp_path / "book.zip"
    with zipfile.ZipFile(path, "w") as zf:
        zf.writestr("readme.txt", b"hello")
        zf.writestr("docs/", b"")
        zf.writestr("docs/guide.md", b"guide")
        zf.writestr("docs/api/ref.html", b"<p>ref</p>")
        zf.writestr("src/main.py", b"print()")
    with zipfile.ZipFile(path) as zf:
        yield zf


def test_root_listing_in_archive_order(archive):
    assert ZipDir(archive).entry_list() == ["readme.txt", "docs/", "src/"]


def test_filters_files_and_dirs(archive):
    root = ZipDir(archive)
    assert root.entry_list(filters=Filter.FILES) == ["readme.txt"]
    assert root.entry_list(filters=Filter.DIRS) == ["docs/", "src/"]


def test_name_filters_ignore_case(archive):
    assert ZipDir(archive).entry_list(["*.TXT"]) == ["readme.txt"]


def test_default_name_filters_are_used(archive):
    root = ZipDir(archive)
    root.name_filters = ["*.txt"]
    assert root.entry_list() == ["readme.txt"]


def test_sort_by_name_and_dirs_first(archive):
    root = ZipDir(archive)
    assert root.entry_list(sort=SortFlag.NAME) == ["docs/", "readme.txt", "src/"]
    assert root.entry_list(sort=SortFlag.NAME | SortFlag.DIRS_FIRST) == [
        "docs/",
        "src/",
        "readme.txt",
    ]
    assert root.entry_list(sort=SortFlag.NAME | SortFlag.REVERSED) == [
        "src/",
        "readme.txt",
        "docs/",
    ]


def test_entry_info_real_and_implicit(archive):
    infos = {info.name: info for info in ZipDir(archive).entry_info_list()}
    assert infos["readme.txt"].uncompressed_size == len(b"hello")
    assert infos["src/"].uncompressed_size == 0
    assert infos["src/"].crc == 0
    assert infos["src/"].date_time is None
    assert infos["docs/"].date_time is not None


def test_cd_and_listing(archive):
    d = ZipDir(archive)
    assert d.cd("docs")
    assert d.path() == "docs"
    assert d.entry_list() == ["guide.md", "api/"]
    assert d.cd("api")
    assert d.path() == "docs/api"
    assert d.entry_list() == ["ref.html"]
    assert d.cd("..")
    assert d.path() == "docs"


def test_cd_absolute_and_root(archive):
    d = ZipDir(archive, "src")
    assert d.cd("/docs/api")
    assert d.path() == "docs/api"
    assert d.cd("/")
    assert d.path() == ""
    assert d.is_root()


def test_cd_missing_keeps_path(archive):
    d = ZipDir(archive, "docs")
    assert not d.cd("missing")
    assert d.path() == "docs"


def test_cd_up_at_root_fails(archive):
    d = ZipDir(archive)
    assert not d.cd_up()
    assert d.path() == ""


def test_exists(archive):
    root = ZipDir(archive)
    assert root.exists("readme.txt")
    assert root.exists("docs")
    assert root.exists("docs/")
    assert root.exists("docs/guide.md")
    assert root.exists("src")
    assert not root.exists("nope")
    assert not root.exists("..")
    assert root.exists(".")
    assert root.exists("/")


def test_exists_of_directory_itself(archive):
    assert ZipDir(archive, "src").exists()
    assert ZipDir(archive, "docs/api").exists()
    assert not ZipDir(archive, "nothing").exists()


def test_case_sensitivity(archive):
    d = ZipDir(archive)
    d.case_sensitivity = CaseSensitivity.INSENSITIVE
    assert d.exists("README.TXT")
    d.case_sensitivity = CaseSensitivity.SENSITIVE
    assert not d.exists("README.TXT")


def test_equality(archive, tmp_path):
    assert ZipDir(archive, "docs") == ZipDir(archive, "/docs")
    assert ZipDir(archive, "docs") != ZipDir(archive, "src")


def test_indexing_and_len(archive):
    d = ZipDir(archive, "docs")
    assert len(d) == len(d.entry_list())
    assert d[0] == d.entry_list()[0]
    with pytest.raises(IndexError):
        d[len(d)]


def test_leading_slash_is_stripped(archive):
    assert ZipDir(archive, "/docs").path() == "docs"


def test_set_path(archive):
    d = ZipDir(archive)
    d.set_path("/docs/")
    assert d.path() == "docs"
    d.set_path("/")
    assert d.path() == ""
    d.set_path("not/checked")
    assert d.path() == "not/checked"


def test_dir_name_and_file_path(archive):
    d = ZipDir(archive, "docs/api")
    assert d.dir_name() == "api"
    assert d.file_path("ref.html") == "docs/api/ref.html"
    assert d.file_path("/x") == "/x"


def test_relative_file_path(archive):
    d = ZipDir(archive, "docs")
    assert d.relative_file_path("/docs/api/ref.html") == "api/ref.html"
    assert d.relative_file_path("a/../b") == "b"


def test_empty_archive_lists_nothing(tmp_path):
    path = tmp_path / "empty.zip"
    with zipfile.ZipFile(path, "w"):
        pass
    with zipfile.ZipFile(path) as zf:
        d = ZipDir(zf)
        assert d.entry_list() == []
        assert len(d) == 0
        assert not d.exists("anything")