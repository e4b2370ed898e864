"""EPUB reading core with pagination, page-flip preview state, ZIP browsing and zlib helpers."""

__version__ = "0.1.0"

__all__ = [
    "checksum",
    "cli",
    "epub",
    "epub_utils",
    "gzipfile",
    "reader",
    "zipdir",
    "zipentries",
    "zstream",
]