"""
Page layout for composed reports.

Units are millimetres measured from the top-left corner of the page. Blocks
are placed one after another at the cursor; a block that would run past the
usable height moves to a new page (tables and text split row by row / line
by line and carry on). Layout is a fold over the block sequence: each step
takes a ``Cursor`` and returns the placed pieces plus the next ``Cursor``.
"""

import textwrap
from dataclasses import dataclass, field, replace
from typing import List, Optional, Sequence, Tuple, Union

PT_TO_MM = 0.3528
LINE_SPACING = 1.25
CHAR_WIDTH = 0.5  # average glyph width as a fraction of the font size
CELL_PADDING = 1.5


@dataclass(frozen=True)
class PageGeometry:
    width: float = 210.0
    height: float = 297.0
    margin: float = 15.0
    header_height: float = 35.0
    content_gap: float = 10.0
    footer_height: float = 18.0

    @property
    def content_top(self) -> float:
        return self.header_height + self.content_gap

    @property
    def content_bottom(self) -> float:
        return self.height - self.footer_height

    @property
    def content_width(self) -> float:
        return self.width - 2 * self.margin


A4 = PageGeometry()


def line_height(font_size: float) -> float:
    return font_size * PT_TO_MM * LINE_SPACING


def wrap_text(text: str, width_mm: float, font_size: float) -> List[str]:
    """Wrap text to a width using an average-glyph-width approximation."""
    avg_char_mm = max(font_size * PT_TO_MM * CHAR_WIDTH, 0.1)
    max_chars = max(int(width_mm / avg_char_mm), 4)
    out: List[str] = []
    for para in str(text).split("\n"):
        chunk = textwrap.wrap(para, width=max_chars, break_long_words=True, break_on_hyphens=False)
        out.extend(chunk or [""])
    return out


# -----------------------------
# Blocks
# -----------------------------

@dataclass(frozen=True)
class InfoBox:
    left: str
    right: str = ""
    font_size: float = 11
    height: float = 15.0
    gap: float = 5.0


@dataclass(frozen=True)
class SectionTitle:
    text: str
    color: str = "primary"
    font_size: float = 12
    height: float = 10.0
    gap: float = 0.0


@dataclass(frozen=True)
class Row:
    cells: Tuple[str, ...]
    kind: str = "body"  # body | group | subtotal | total
    color: Optional[str] = None


@dataclass(frozen=True)
class Table:
    head: Tuple[str, ...]
    rows: Tuple[Row, ...]
    widths: Tuple[float, ...]
    align: Tuple[str, ...] = ()
    color: str = "primary"
    font_size: float = 10
    continued: bool = False
    gap: float = 6.0

    def column_align(self, i: int) -> str:
        if i < len(self.align):
            return self.align[i]
        return "left" if i == 0 else "center"

    def _cell_lines(self, text: str, width: float) -> int:
        return len(wrap_text(text, width - 2 * CELL_PADDING, self.font_size))

    def row_height(self, row: Row) -> float:
        if row.kind == "group":
            n = self._cell_lines(row.cells[0], sum(self.widths))
        else:
            n = max((self._cell_lines(c, w) for c, w in zip(row.cells, self.widths)), default=1)
        return n * line_height(self.font_size) + 2 * CELL_PADDING

    def head_height(self) -> float:
        return self.row_height(Row(self.head))

    @property
    def height(self) -> float:
        return self.head_height() + sum(self.row_height(r) for r in self.rows)


@dataclass(frozen=True)
class TextBlock:
    lines: Tuple[str, ...]
    font_size: float = 11
    indent: float = 5.0
    gap: float = 4.0

    @property
    def height(self) -> float:
        return len(self.lines) * line_height(self.font_size)


@dataclass(frozen=True)
class Legend:
    title: str
    entries: Tuple[str, ...]
    font_size: float = 11
    gap: float = 4.0

    @property
    def rows(self) -> int:
        return (len(self.entries) + 1) // 2

    @property
    def height(self) -> float:
        return 11.0 + self.rows * 6.0 + 2.0


@dataclass(frozen=True)
class PageBreak:
    """Start a new page; optionally switch the header used from here on."""

    title: Optional[str] = None
    subtitle: Optional[str] = None
    height: float = 0.0
    gap: float = 0.0


@dataclass(frozen=True)
class Footer:
    page: int
    total: int
    caption: str
    text: str
    height: float = 10.0
    gap: float = 0.0


Block = Union[InfoBox, SectionTitle, Table, TextBlock, Legend, PageBreak, Footer]


# -----------------------------
# Pages
# -----------------------------

@dataclass(frozen=True)
class Cursor:
    page: int
    y: float


@dataclass(frozen=True)
class Placed:
    block: Block
    y: float
    height: float


@dataclass(frozen=True)
class PageHeader:
    title: str
    subtitle: str = ""


@dataclass
class Page:
    number: int
    header: PageHeader
    blocks: List[Placed] = field(default_factory=list)


def _new_page(cursor: Cursor, geometry: PageGeometry) -> Cursor:
    return Cursor(cursor.page + 1, geometry.content_top)


def _split_table(table: Table, cursor: Cursor, geometry: PageGeometry) -> Tuple[List[Tuple[int, Placed]], Cursor]:
    pieces: List[Tuple[int, Placed]] = []
    rows = list(table.rows)
    continued = table.continued
    while True:
        head_h = table.head_height()
        available = geometry.content_bottom - cursor.y
        taken: List[Row] = []
        used = head_h
        for r in rows:
            h = table.row_height(r)
            if used + h > available and (taken or cursor.y > geometry.content_top):
                break
            taken.append(r)
            used += h
        if not taken and rows:
            cursor = _new_page(cursor, geometry)
            continue
        piece = replace(table, rows=tuple(taken), continued=continued)
        pieces.append((cursor.page, Placed(piece, cursor.y, used)))
        rows = rows[len(taken):]
        if not rows:
            return pieces, Cursor(cursor.page, cursor.y + used + table.gap)
        continued = True
        cursor = _new_page(cursor, geometry)


def _split_text(block: TextBlock, cursor: Cursor, geometry: PageGeometry) -> Tuple[List[Tuple[int, Placed]], Cursor]:
    pieces: List[Tuple[int, Placed]] = []
    lines = list(block.lines)
    lh = line_height(block.font_size)
    while True:
        fit = int((geometry.content_bottom - cursor.y) // lh)
        if fit <= 0:
            if cursor.y <= geometry.content_top:
                fit = 1
            else:
                cursor = _new_page(cursor, geometry)
                continue
        chunk, lines = lines[:fit], lines[fit:]
        piece = replace(block, lines=tuple(chunk))
        pieces.append((cursor.page, Placed(piece, cursor.y, piece.height)))
        if not lines:
            return pieces, Cursor(cursor.page, cursor.y + piece.height + block.gap)
        cursor = _new_page(cursor, geometry)


def place(block: Block, cursor: Cursor, geometry: PageGeometry) -> Tuple[List[Tuple[int, Placed]], Cursor]:
    """Place one block at the cursor and return (page index, piece) pairs and the next cursor."""
    if isinstance(block, PageBreak):
        return [], _new_page(cursor, geometry)
    if isinstance(block, Table):
        return _split_table(block, cursor, geometry)
    if isinstance(block, TextBlock):
        return _split_text(block, cursor, geometry)

    height = block.height
    if cursor.y + height > geometry.content_bottom and cursor.y > geometry.content_top:
        cursor = _new_page(cursor, geometry)
    return [(cursor.page, Placed(block, cursor.y, height))], Cursor(cursor.page, cursor.y + height + block.gap)


def layout(
    blocks: Sequence[Block],
    header: PageHeader,
    geometry: PageGeometry = A4,
    continued_suffix: str = "",
) -> List[Page]:
    """Lay blocks out into pages.

    Pages opened by overflow repeat the current header with ``continued_suffix``
    appended to the title (once); a ``PageBreak`` may install a new header.
    """
    cursor = Cursor(0, geometry.content_top)
    pages: List[Page] = [Page(1, header)]
    current = header
    for block in blocks:
        pieces, cursor = place(block, cursor, geometry)
        if isinstance(block, PageBreak):
            if block.title or block.subtitle:
                current = PageHeader(block.title or current.title, block.subtitle or current.subtitle)
            pages.append(Page(len(pages) + 1, current))
            continue
        for page_index, piece in pieces:
            while page_index >= len(pages):
                title = current.title
                if continued_suffix and not title.endswith(continued_suffix):
                    title = f"{title} {continued_suffix}"
                pages.append(Page(len(pages) + 1, PageHeader(title, current.subtitle)))
            pages[page_index].blocks.append(piece)
    # a trailing break leaves an empty page behind
    if len(pages) > 1 and not pages[-1].blocks:
        pages.pop()
    return pages


def add_footers(pages: List[Page], caption: str, text: str, geometry: PageGeometry = A4) -> List[Page]:
    total = len(pages)
    y = geometry.height - geometry.footer_height + 4.0
    for page in pages:
        footer = Footer(page=page.number, total=total, caption=caption, text=text)
        page.blocks.append(Placed(footer, y, footer.height))
    return pages
