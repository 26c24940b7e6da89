"""Buffered page model: draw operations, page buffers and the write cursor.

Layout never talks to the PDF library.  It appends draw operations to
``PageBuffer`` objects held by a ``RenderedDocument``.  Because every page
stays in memory until serialization, the footer pass can revisit earlier
pages once the final page count is known.

Coordinates are in points with the origin at the *top-left* corner of the
page; the renderer flips them into PDF space.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Literal, Optional, Union

Align = Literal["left", "right", "center", "justify"]

# Tolerance for float accumulation when testing page overflow
_EPSILON = 1e-6


@dataclass(frozen=True)
class TextOp:
    """A single line of text.  ``y`` is the baseline."""

    x: float
    y: float
    text: str
    font: str
    size: float
    color: str
    align: Align = "left"
    width: float = 0.0
    underline: bool = False
    role: str = ""
    item: Optional[int] = None


@dataclass(frozen=True)
class RectOp:
    """A filled rectangle.  ``y`` is the top edge."""

    x: float
    y: float
    width: float
    height: float
    color: str
    opacity: float = 1.0
    role: str = ""


@dataclass(frozen=True)
class LineOp:
    x1: float
    y1: float
    x2: float
    y2: float
    color: str
    line_width: float = 1.0
    role: str = ""


@dataclass(frozen=True)
class ImageOp:
    """A raster image.  ``y`` is the top edge."""

    x: float
    y: float
    width: float
    height: float
    data: bytes = field(repr=False)
    role: str = ""


DrawOp = Union[TextOp, RectOp, LineOp, ImageOp]


@dataclass
class PageBuffer:
    """Ordered draw operations for one page."""

    index: int
    ops: list[DrawOp] = field(default_factory=list)

    def add(self, op: DrawOp) -> None:
        self.ops.append(op)

    def texts(self, role: str | None = None) -> list[TextOp]:
        return [op for op in self.ops if isinstance(op, TextOp) and (role is None or op.role == role)]

    def rects(self, role: str | None = None) -> list[RectOp]:
        return [op for op in self.ops if isinstance(op, RectOp) and (role is None or op.role == role)]

    def images(self) -> list[ImageOp]:
        return [op for op in self.ops if isinstance(op, ImageOp)]


@dataclass
class RenderedDocument:
    """A fully laid-out document waiting to be serialized."""

    page_width: float
    page_height: float
    margin: float
    title: str = ""
    author: str = ""
    pages: list[PageBuffer] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def content_width(self) -> float:
        return self.page_width - 2 * self.margin

    @property
    def content_bottom(self) -> float:
        return self.page_height - self.margin

    def new_page(self) -> PageBuffer:
        page = PageBuffer(index=len(self.pages))
        self.pages.append(page)
        return page

    def iter_texts(self, role: str | None = None) -> Iterator[tuple[int, TextOp]]:
        """Yield ``(page_index, op)`` for every text op in document order."""
        for page in self.pages:
            for op in page.texts(role):
                yield page.index, op

    def iter_rects(self, role: str | None = None) -> Iterator[tuple[int, RectOp]]:
        for page in self.pages:
            for op in page.rects(role):
                yield page.index, op


class LayoutCursor:
    """Append-only vertical write position over a ``RenderedDocument``.

    ``ensure(height)`` starts a fresh page (same margins) whenever the next
    block would cross the bottom margin.  A block taller than a whole page
    is placed at the top of a page and allowed to overflow rather than
    looping forever.
    """

    def __init__(self, document: RenderedDocument) -> None:
        self._document = document
        self.page = document.new_page()
        self.y = document.margin

    @property
    def document(self) -> RenderedDocument:
        return self._document

    @property
    def remaining(self) -> float:
        return self._document.content_bottom - self.y

    @property
    def at_page_top(self) -> bool:
        return self.y <= self._document.margin + _EPSILON

    def fits(self, height: float) -> bool:
        return self.y + height <= self._document.content_bottom + _EPSILON

    def ensure(self, height: float) -> bool:
        """Break the page if *height* does not fit.  Returns True on a break."""
        if self.fits(height) or self.at_page_top:
            return False
        self.break_page()
        return True

    def break_page(self) -> None:
        self.page = self._document.new_page()
        self.y = self._document.margin

    def advance(self, dy: float) -> None:
        self.y += dy

    def move_to(self, y: float) -> None:
        self.y = y

    def add(self, op: DrawOp) -> None:
        self.page.add(op)
