# paperflip

A small EPUB reading core. It opens an `.epub` file, pulls the text out of the
chapters listed in its spine and cuts that text into fixed-size pages of 800
characters. It also keeps the state of a reader that flips between pages by
dragging across a preview strip, without depending on any GUI toolkit.

Alongside the reader there are a few archive and compression helpers:
directory-style browsing of a ZIP archive, a gzip file object, a zlib stream
wrapper and Adler-32 / CRC-32 checksums.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command line

```
paperflip book.epub
```

This loads the book and prints its first page, preceded by a line of the form
`[章节 1] 1 / 42` (chapter label, page number, page count).

Options:

- `--page N` prints page `N` instead, counting from 1. A page that does not
  exist is reported on standard error with exit status 1.
- `--about` prints the version text.

With no file the command prints `Ready`. A book that cannot be loaded is
reported on standard error and the exit status is 1.

## Loading a book

```python
from paperflip.epub import EPUBManager, EPUBError

manager = EPUBManager()
try:
    manager.load("book.epub")
except EPUBError as exc:
    print("could not open book:", exc)
else:
    meta = manager.metadata()
    print(meta.title, "by", meta.author)
    print(manager.total_pages(), "pages")
    print(manager.page_content(0))
```

`load` reads `META-INF/container.xml` to find the package document. It takes
the title, author, manifest and spine from that document, then joins the text
of the spine's chapters. It raises `EPUBError` when the archive cannot be
opened or either document cannot be parsed, and when no text is found.
`page_content` returns `"Page not found"` for an index out of range.
`metadata` returns a copy of the `BookMetadata`.

`html_to_text` strips markup and a few entities from a chapter, and `paginate`
cuts text into `EPUBPage` objects:

```python
from paperflip.epub import html_to_text, paginate

text = html_to_text("<p>Hello &amp; welcome</p>")
pages = paginate(text, "My Book", 800)
```

`paperflip.epub_utils` has the lower-level helpers:

- `is_valid_epub` checks for a ZIP archive whose `mimetype` entry is
  `application/epub+zip`.
- `get_file_content` returns the bytes of one entry.
- `container_xml_path` and `get_opf_path` locate the package document.
- `get_content_files` lists manifest items that look like chapters or HTML.
- `get_chapter_titles` collects `navLabel` and `title` text. It falls back to
  a default list of five chapter names when none are found.
- `extract_text_from_html` turns markup into plain text, dropping scripts and
  styles.

## Reader state

`paperflip.reader.Reader` models page flipping:

```python
from paperflip.reader import Reader

reader = Reader()
reader.load_book("book.epub")   # raises EPUBError on failure
reader.press(100)      # start dragging: preview mode on
reader.move(300)       # drag right to move forward through the book
reader.tick()          # advance the eased preview animation one frame
for slot in reader.preview_slots(1000, 700):
    print(slot)
print(reader.preview_chapter())
reader.release()       # snap to the nearest page
print(reader.current_text())
```

Each loaded page is a `PageInfo`, and its chapter label changes every eight
pages. `preview_slots` returns up to five `PreviewSlot` thumbnails around the
centre page, with their positions for a view of the given size.
`reader.preview_bar` is a `PreviewBar`. Its `label()` gives the progress text
(`"3 / 120"`), and `progress_width(width)` gives the width of the filled part
of its bar.

## Browsing a ZIP archive

```python
import zipfile
from paperflip.zipdir import ZipDir
from paperflip.zipentries import Filter, SortFlag

with zipfile.ZipFile("book.epub") as archive:
    root = ZipDir(archive)
    print(root.entry_list())                 # subdirectories end with "/"
    if root.cd("OEBPS"):
        print(root.entry_list(["*.xhtml"], Filter.FILES, SortFlag.NAME))
        for info in root.entry_info_list(sort=SortFlag.SIZE | SortFlag.REVERSED):
            print(info.name, info.uncompressed_size)
        root.cd_up()
```

`ZipDir` also has `exists`, `dir_name`, `file_path`, `relative_file_path`,
`set_path`, `is_root` and `path`. It supports `len()` and indexing over its
entry names. `paperflip.zipentries` holds the `Filter`, `SortFlag` and
`CaseSensitivity` flags and the `ZipEntryInfo` record. It also provides
`sort_entries`, `entry_less_than`, `file_extension` and `matches_name_filters`.

## Streams and checksums

```python
from paperflip.checksum import Adler32, Crc32

crc = Crc32()
crc.update(b"hello ")
crc.update(b"world")
assert crc.value() == Crc32().calculate(b"hello world")
```

`paperflip.gzipfile.GzipFile` reads or writes a gzip file named by path or
descriptor. It is opened with `open("r")` or `open("w")`, never both at once.
Reading a file that is not gzip-compressed returns its bytes unchanged.

`paperflip.zstream.ZlibStream` compresses data written to another binary
stream, or decompresses data read from one. Its `close` finishes the
compressed stream and leaves the underlying stream open. Both classes work as
context managers once opened:

```python
import io
from paperflip.zstream import ZlibStream

buffer = io.BytesIO()
stream = ZlibStream(buffer)
stream.open("w")
with stream:
    stream.write(b"some text")
```

## What it does not do

There is no graphical window; the reader is state only, and the command line
prints pages as text. The package reads ZIP archives, but it has no functions
for creating them or for extracting them to disk. Images, covers and the
book's table of contents are not loaded. Pages are cut by character count, not
by layout.