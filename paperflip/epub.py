"""Loading EPUB books into fixed-size text pages."""

from __future__ import annotations

import codecs
import dataclasses
import logging
import os
import posixpath
import re
import zipfile
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from paperflip.epub_utils import (
    CONTAINER_XML_PATH,
    _READ_ERRORS,
    _local_name,
    _simplified,
    _xml_events,
)

logger = logging.getLogger(__name__)

CHARS_PER_PAGE = 800
PAGE_NOT_FOUND = "Page not found"

_TAG_RE = re.compile(r"<[^>]*>")
_ENTITIES = (
    ("&nbsp;", " "),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
)
_METADATA_FIELDS = {"title": "title", "creator": "author"}
_BOMS = (
    (codecs.BOM_UTF32_LE, "utf-32"),
    (codecs.BOM_UTF32_BE, "utf-32"),
    (codecs.BOM_UTF16_BE, "utf-16"),
    (codecs.BOM_UTF16_LE, "utf-16"),
    (codecs.BOM_UTF8, "utf-8-sig"),
)
_CHARSET_END_RE = re.compile(rb"[\"'>/]")
_DEFAULT_HTML_ENCODING = "latin-1"


class EPUBError(Exception):
    """Raised when an EPUB book cannot be loaded."""


@dataclass
class EPUBPage:
    """One page of book text."""

    content: str = ""
    chapter_title: str = ""
    has_images: bool = False
    page_number: int = 0


@dataclass
class BookMetadata:
    """Descriptive data read from the package document."""

    title: str = ""
    author: str = ""
    cover_image_path: str = ""
    chapter_list: List[str] = field(default_factory=list)


def html_to_text(html: str) -> str:
    """Strip tags, decode a few entities and collapse whitespace."""
    text = _TAG_RE.sub("", html)
    for entity, replacement in _ENTITIES:
        text = text.replace(entity, replacement)
    return _simplified(text)


def paginate(text: str, title: str, chars_per_page: int = CHARS_PER_PAGE) -> List[EPUBPage]:
    """Cut text into pages of at most chars_per_page characters."""
    if chars_per_page <= 0:
        raise ValueError("chars_per_page must be positive")
    return [
        EPUBPage(content=text[start:start + chars_per_page], chapter_title=title, page_number=number)
        for number, start in enumerate(range(0, len(text), chars_per_page))
    ]


def _html_charset(data: bytes) -> Optional[str]:
    """Return the charset named by a meta tag near the start of HTML."""
    header = data[:1024].lower()
    pos = header.find(b"meta ")
    if pos == -1:
        return None
    pos = header.find(b"charset=", pos)
    if pos == -1:
        return None
    pos += len(b"charset=")
    if header[pos:pos + 1] in (b'"', b"'"):
        pos += 1
    end = _CHARSET_END_RE.search(header, pos + 1)
    if end is None:
        return None
    name = header[pos:end.start()]
    colon = name.find(b":")
    if colon > 0:
        name = name[:colon]
    name = b" ".join(name.split())
    if name == b"unicode":
        name = b"utf-8"
    return name.decode("ascii", errors="replace") or None


def _decode_html(data: bytes) -> str:
    """Decode HTML by its byte-order mark, its meta charset, or as Latin-1."""
    for bom, encoding in _BOMS:
        if data.startswith(bom):
            return data.decode(encoding, errors="replace")
    charset = _html_charset(data)
    if charset:
        try:
            return data.decode(charset, errors="replace")
        except LookupError:
            pass
    return data.decode(_DEFAULT_HTML_ENCODING)


def _clean_path(path: str) -> str:
    """Normalise '.', '..' and repeated separators in an archive path."""
    cleaned = posixpath.normpath(path)
    if cleaned.startswith("//"):
        cleaned = cleaned[1:]
    return cleaned


def _read_entry(archive: zipfile.ZipFile, name: str) -> Optional[bytes]:
    try:
        return archive.read(name)
    except _READ_ERRORS as exc:
        logger.warning("Could not read %s from archive: %s", name, exc)
        return None


class EPUBManager:
    """Reads an EPUB book and keeps its text as numbered pages."""

    def __init__(self) -> None:
        self._book_file_path = ""
        self._opf_path = ""
        self._content_base_path = ""
        self._spine: List[str] = []
        self._manifest: Dict[str, str] = {}
        self._pages: List[EPUBPage] = []
        self._metadata = BookMetadata()

    def load(self, file_path: Union[str, "os.PathLike[str]"]) -> None:
        """Load a book, replacing any previous one. Raises EPUBError on failure."""
        self._book_file_path = os.fspath(file_path)
        self._pages = []
        self._metadata = BookMetadata()
        self._manifest = {}
        self._spine = []
        self._opf_path = ""
        self._content_base_path = ""

        try:
            archive = zipfile.ZipFile(file_path)
        except (OSError, zipfile.BadZipFile) as exc:
            raise EPUBError(f"Failed to open EPUB file: {exc}") from exc

        with archive:
            self._parse_container(archive)
            self._parse_opf(archive)
            text = self._read_book_text(archive)

        if not text.strip():
            logger.warning("No text content could be extracted from the EPUB spine.")
        else:
            self._pages = paginate(text, self._metadata.title)
        if not self._pages:
            raise EPUBError("No content found in EPUB after parsing.")

    def _parse_container(self, archive: zipfile.ZipFile) -> None:
        data = _read_entry(archive, CONTAINER_XML_PATH)
        if data is not None:
            for event, element in _xml_events(data):
                if event != "start" or _local_name(element.tag) != "rootfile":
                    continue
                opf_path = element.get("full-path", "")
                if opf_path:
                    self._opf_path = opf_path
                    base = posixpath.dirname(opf_path)
                    self._content_base_path = base + "/" if base else ""
                    return
            logger.warning("Could not find rootfile path in container.xml.")
        raise EPUBError("Failed to parse container.xml.")

    def _parse_opf(self, archive: zipfile.ZipFile) -> None:
        data = _read_entry(archive, self._opf_path)
        if data is None:
            raise EPUBError("Failed to parse OPF file.")

        in_metadata = False
        reading = None
        for event, element in _xml_events(data):
            if reading is not None:
                field_name, target = reading
                if event == "start":
                    # An element inside title or creator ends the parse.
                    setattr(self._metadata, field_name, target.text or "")
                    break
                if element is target:
                    setattr(self._metadata, field_name, target.text or "")
                    reading = None
                continue

            name = _local_name(element.tag)
            if event == "end":
                if name == "metadata":
                    in_metadata = False
                continue

            if name == "metadata":
                in_metadata = True
            if in_metadata and name in _METADATA_FIELDS:
                reading = (_METADATA_FIELDS[name], element)
            elif name == "item":
                item_id = element.get("id", "")
                href = element.get("href", "")
                if item_id and href:
                    self._manifest[item_id] = _clean_path(self._content_base_path + href)
            elif name == "itemref":
                idref = element.get("idref", "")
                if idref:
                    self._spine.append(idref)

        if not self._spine:
            logger.warning("No spine items found in OPF file.")
            raise EPUBError("Failed to parse OPF file.")

    def _read_book_text(self, archive: zipfile.ZipFile) -> str:
        parts = []
        for idref in self._spine:
            chapter_path = self._manifest.get(idref)
            if chapter_path is None:
                continue
            data = _read_entry(archive, chapter_path)
            if data is None:
                continue
            parts.append(html_to_text(_decode_html(data)) + "\n\n")
        return "".join(parts)

    def metadata(self) -> BookMetadata:
        """Return a copy of the loaded book's metadata."""
        return dataclasses.replace(self._metadata, chapter_list=list(self._metadata.chapter_list))

    def page_content(self, page_index: int) -> str:
        """Return the text of a page, or a notice when there is no such page."""
        if 0 <= page_index < len(self._pages):
            return self._pages[page_index].content
        return PAGE_NOT_FOUND

    def total_pages(self) -> int:
        """Return the number of pages of the loaded book."""
        return len(self._pages)