"""Page-flipping reader state: pages, drag-to-preview and the preview bar."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from typing import List, Optional, Union

from paperflip.epub import EPUBManager

FRAME_INTERVAL_MS = 16
DRAG_SENSITIVITY = 0.02
EASING = 0.1
PAGES_PER_CHAPTER = 8
IMAGE_PAGE_INTERVAL = 5
VISIBLE_PAGES = 5
PREVIEW_WIDTH_RATIO = 0.8
PREVIEW_HEIGHT = 80
PREVIEW_BOTTOM_MARGIN = 20
PREVIEW_SLOT_PADDING = 10
PROGRESS_MARGIN = 10
CHAPTER_PREFIX = "章节 "


def _round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    if value >= 0:
        return int(math.floor(value + 0.5))
    return -int(math.floor(-value + 0.5))


def _clamp(value, low, high):
    return max(low, min(value, high))


@dataclass
class PageInfo:
    """A page as the reader shows it."""

    page_number: int
    chapter_title: str
    content: str
    has_images: bool


@dataclass(frozen=True)
class PreviewSlot:
    """One page thumbnail drawn in the preview strip."""

    page_index: int
    x: int
    y: int
    width: int
    height: int
    highlighted: bool
    label: str


class PreviewBar:
    """Progress bar showing the current page out of the total."""

    def __init__(self) -> None:
        self.total_pages = 0
        self.current_page = 0
        self.visible = False

    def label(self) -> str:
        """Return the 'current / total' text, counting pages from one."""
        return f"{self.current_page + 1} / {self.total_pages}"

    def progress_width(self, width: int) -> int:
        """Return the filled width of the progress bar for a bar of this width."""
        if self.total_pages <= 0:
            return 0
        bar_width = width - 2 * PROGRESS_MARGIN
        return int(bar_width * (self.current_page / self.total_pages))


class Reader:
    """Holds a loaded book and reacts to drag gestures that flip pages."""

    def __init__(self) -> None:
        self.pages: List[PageInfo] = []
        self.current_page = 0
        self.is_dragging = False
        self.last_x = 0
        self.preview_offset = 0.0
        self.target_offset = 0.0
        self.in_preview_mode = False
        self.timer_active = False
        self.preview_bar = PreviewBar()
        self._displayed_text = ""

    def load_book(self, file_path: Union[str, "os.PathLike[str]"]) -> None:
        """Load a book and add its pages. Raises EPUBError if it cannot be read."""
        manager = EPUBManager()
        manager.load(file_path)
        for index in range(manager.total_pages()):
            self.pages.append(
                PageInfo(
                    page_number=index,
                    chapter_title=f"{CHAPTER_PREFIX}{index // PAGES_PER_CHAPTER + 1}",
                    content=manager.page_content(index),
                    has_images=index % IMAGE_PAGE_INTERVAL == 0,
                )
            )

    def press(self, x: int) -> None:
        """Start a drag at horizontal position x and enter preview mode."""
        if not self.pages:
            return
        self.is_dragging = True
        self.last_x = x
        self.target_offset = self.preview_offset
        if not self.in_preview_mode:
            self.in_preview_mode = True
            self.preview_bar.visible = True
            self.preview_bar.current_page = self.current_page
            self.timer_active = True

    def move(self, x: int) -> None:
        """Drag to horizontal position x, moving the target page."""
        if not (self.is_dragging and self.pages):
            return
        delta = x - self.last_x
        self.target_offset = _clamp(
            self.target_offset + delta * DRAG_SENSITIVITY, 0.0, float(len(self.pages) - 1)
        )
        self.last_x = x

    def release(self) -> None:
        """End the drag, land on the nearest page and show it."""
        if not (self.is_dragging and self.pages):
            return
        self.is_dragging = False
        self.current_page = _clamp(_round_half_away(self.target_offset), 0, len(self.pages) - 1)
        self.in_preview_mode = False
        self.preview_bar.visible = False
        self.timer_active = False
        self._render_current_page()

    def tick(self) -> None:
        """Advance the eased preview offset by one frame."""
        self.preview_offset += (self.target_offset - self.preview_offset) * EASING
        if self.in_preview_mode:
            self.preview_bar.current_page = _round_half_away(self.preview_offset)

    def _render_current_page(self) -> None:
        if self.current_page < len(self.pages):
            self._displayed_text = self.pages[self.current_page].content

    def current_text(self) -> str:
        """Return the text currently shown in the reading area."""
        return self._displayed_text

    def preview_slots(self, width: int, height: int) -> List[PreviewSlot]:
        """Return the page thumbnails of the preview strip for a view of this size."""
        if not (self.in_preview_mode and self.pages):
            return []
        preview_width = int(width * PREVIEW_WIDTH_RATIO)
        preview_x = (width - preview_width) // 2
        preview_y = height - PREVIEW_HEIGHT - PREVIEW_BOTTOM_MARGIN
        page_width = preview_width // VISIBLE_PAGES
        center = _round_half_away(self.preview_offset)
        half = VISIBLE_PAGES // 2

        slots = []
        for step in range(-half, half + 1):
            page_index = center + step
            if not 0 <= page_index < len(self.pages):
                continue
            slots.append(
                PreviewSlot(
                    page_index=page_index,
                    x=preview_x + (step + half) * page_width + page_width // 4,
                    y=preview_y + PREVIEW_SLOT_PADDING,
                    width=page_width // 2,
                    height=PREVIEW_HEIGHT - 2 * PREVIEW_SLOT_PADDING,
                    highlighted=step == 0,
                    label=str(page_index + 1),
                )
            )
        return slots

    def preview_chapter(self) -> Optional[str]:
        """Return the chapter title shown above the preview strip, if any."""
        if not (self.in_preview_mode and self.pages):
            return None
        center = _round_half_away(self.preview_offset)
        if 0 <= center < len(self.pages):
            return self.pages[center].chapter_title
        return None