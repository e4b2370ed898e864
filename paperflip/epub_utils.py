"""Helpers for inspecting EPUB archives and their XML and HTML parts."""

from __future__ import annotations

import os
import re
import zipfile
import zlib
import xml.etree.ElementTree as ET
from typing import List, Tuple, Union

EPUB_MIMETYPE = "application/epub+zip"
CONTAINER_XML_PATH = "META-INF/container.xml"
DEFAULT_OPF_PATH = "content.opf"
DEFAULT_CHAPTER_TITLES = ("第一章", "第二章", "第三章", "第四章", "第五章")

_SCRIPT_RE = re.compile(r"<script[^>]*>.*?</script>", re.IGNORECASE)
_STYLE_RE = re.compile(r"<style[^>]*>.*?</style>", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]*>")
_ENTITIES = (
    ("&nbsp;", " "),
    ("&#160;", " "),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
)
_CHAPTER_TAGS = ("navLabel", "title")
_CONTENT_TAGS = ("item", "manifest")
_CONTENT_SUFFIXES = (".html", ".xhtml")

_READ_ERRORS = (
    OSError,
    KeyError,
    EOFError,
    zipfile.BadZipFile,
    zlib.error,
    RuntimeError,
    NotImplementedError,
)

PathLike = Union[str, "os.PathLike[str]"]


def _local_name(tag: str) -> str:
    """Return an element tag without its namespace."""
    return tag.rpartition("}")[2]


def _xml_events(source: Union[str, bytes]) -> List[Tuple[str, ET.Element]]:
    """Return the start and end events of a document up to its first error."""
    parser = ET.XMLPullParser(events=("start", "end"))
    try:
        parser.feed(source)
        parser.close()
    except ET.ParseError:
        pass
    events = []
    try:
        for event in parser.read_events():
            events.append(event)
    except ET.ParseError:
        pass
    return events


def _simplified(text: str) -> str:
    """Trim the text and collapse every run of whitespace to one space."""
    return " ".join(text.split())


def is_valid_epub(file_path: PathLike) -> bool:
    """Tell whether the file is a zip archive whose mimetype entry names EPUB."""
    try:
        with zipfile.ZipFile(file_path) as archive:
            data = archive.read("mimetype")
    except _READ_ERRORS:
        return False
    return data.decode("utf-8", errors="replace").strip() == EPUB_MIMETYPE


def extract_text_from_html(html_content: str) -> str:
    """Strip scripts, styles and tags from HTML and decode common entities."""
    text = _SCRIPT_RE.sub("", html_content)
    text = _STYLE_RE.sub("", text)
    text = _TAG_RE.sub("", text)
    for entity, replacement in _ENTITIES:
        text = text.replace(entity, replacement)
    return _simplified(text)


def get_chapter_titles(xml_text: Union[str, bytes]) -> List[str]:
    """Collect the text of navLabel and title elements, in document order.

    Reading stops at the first element found inside such an element, or at
    the first XML error. If nothing is found, a default list is returned.
    """
    chapters: List[str] = []
    pending = None
    for event, element in _xml_events(xml_text):
        if event == "start":
            if pending is not None:
                partial = (pending.text or "").strip()
                if partial:
                    chapters.append(partial)
                break
            if _local_name(element.tag) in _CHAPTER_TAGS:
                pending = element
        elif element is pending:
            title = (element.text or "").strip()
            if title:
                chapters.append(title)
            pending = None
    return chapters or list(DEFAULT_CHAPTER_TITLES)


def get_file_content(file_path: PathLike, internal_path: str) -> bytes:
    """Return the bytes of one entry of a zip archive.

    Raises FileNotFoundError or zipfile.BadZipFile when the archive cannot be
    opened, and KeyError when it has no entry of that name.
    """
    with zipfile.ZipFile(file_path) as archive:
        return archive.read(internal_path)


def container_xml_path() -> str:
    """Return the path of the container document inside an EPUB."""
    return CONTAINER_XML_PATH


def get_opf_path(container_xml: Union[str, bytes]) -> str:
    """Return the full-path of the first rootfile, or the default OPF path."""
    for event, element in _xml_events(container_xml):
        if event == "start" and _local_name(element.tag) == "rootfile":
            return element.get("full-path", "")
    return DEFAULT_OPF_PATH


def get_content_files(opf_content: Union[str, bytes]) -> List[str]:
    """List the hrefs of manifest items that look like chapters or HTML files."""
    content_files: List[str] = []
    for event, element in _xml_events(opf_content):
        if event != "start" or _local_name(element.tag) not in _CONTENT_TAGS:
            continue
        item_id = element.get("id", "")
        href = element.get("href", "")
        if "chapter" in item_id.lower() or href.lower().endswith(_CONTENT_SUFFIXES):
            content_files.append(href)
    return content_files