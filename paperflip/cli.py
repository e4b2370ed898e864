"""Command line entry point for reading EPUB books page by page."""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from paperflip.epub import EPUBError
from paperflip.reader import Reader

ABOUT_TEXT = "PaperFlip - MVP Version 0.1"
STATUS_READY = "Ready"


def about_text() -> str:
    """Return the text of the About box."""
    return ABOUT_TEXT


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="paperflip", description="Read an EPUB book.")
    parser.add_argument("file", nargs="?", help="EPUB file to open")
    parser.add_argument("--page", type=int, default=1, help="page to show, counting from 1")
    parser.add_argument("--about", action="store_true", help="show version information")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the command and return its exit status."""
    args = _parser().parse_args(argv)
    if args.about:
        print(about_text())
        return 0
    if args.file is None:
        print(STATUS_READY)
        return 0

    reader = Reader()
    try:
        reader.load_book(args.file)
    except EPUBError as exc:
        print(f"paperflip: {exc}", file=sys.stderr)
        return 1

    index = args.page - 1
    if not 0 <= index < len(reader.pages):
        print(f"paperflip: page {args.page} not found", file=sys.stderr)
        return 1
    page = reader.pages[index]
    print(f"[{page.chapter_title}] {index + 1} / {len(reader.pages)}")
    print(page.content)
    return 0


if __name__ == "__main__":
    sys.exit(main())