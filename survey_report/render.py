"""
Draw composed documents into PDF bytes with matplotlib.

Each page is one figure sized to the page geometry, with a full-bleed axes
whose data coordinates are millimetres from the top-left corner.
"""

import logging
from io import BytesIO
from typing import Optional, Tuple

from matplotlib.backends.backend_pdf import PdfPages
from matplotlib.figure import Figure
from matplotlib.font_manager import FontProperties
from matplotlib.patches import FancyBboxPatch, Rectangle

from .composer import Document, StyleVariant
from .fonts import FontAsset
from .layout import (
    CELL_PADDING,
    LINE_SPACING,
    Footer,
    InfoBox,
    Legend,
    Page,
    Placed,
    Row,
    SectionTitle,
    Table,
    TextBlock,
    line_height,
    wrap_text,
)

logger = logging.getLogger(__name__)

MM_PER_INCH = 25.4
WHITE = (1.0, 1.0, 1.0)
DEFAULT_FAMILY = "DejaVu Sans"


def _rgb(c: Tuple[int, int, int]) -> Tuple[float, float, float]:
    return (c[0] / 255.0, c[1] / 255.0, c[2] / 255.0)


def _tint(c: Tuple[int, int, int], amount: float = 0.85) -> Tuple[float, float, float]:
    r, g, b = _rgb(c)
    return (r + (1 - r) * amount, g + (1 - g) * amount, b + (1 - b) * amount)


class PdfRenderer:
    def __init__(self, font: Optional[FontAsset] = None):
        self.font = font

    def _fp(self, size: float) -> FontProperties:
        if self.font is not None:
            return FontProperties(fname=self.font.path, size=size)
        return FontProperties(family=DEFAULT_FAMILY, size=size)

    def _text(self, ax, x: float, y: float, s: str, size: float, color=(0, 0, 0), **kw) -> None:
        kw.setdefault("va", "center")
        kw.setdefault("ha", "left")
        ax.text(x, y, s, fontproperties=self._fp(size), color=color, parse_math=False, **kw)

    def render(self, doc: Document) -> bytes:
        buf = BytesIO()
        with PdfPages(buf) as pdf:
            for page in doc.pages:
                fig = self._draw_page(page, doc)
                pdf.savefig(fig)
        logger.debug("Rendered %s with %d page(s)", doc.filename, doc.page_count)
        return buf.getvalue()

    def _draw_page(self, page: Page, doc: Document):
        g = doc.geometry
        # Figure, not pyplot: rendering runs in worker threads
        fig = Figure(figsize=(g.width / MM_PER_INCH, g.height / MM_PER_INCH))
        ax = fig.add_axes([0, 0, 1, 1])
        ax.set_xlim(0, g.width)
        ax.set_ylim(g.height, 0)
        ax.axis("off")

        style = doc.style
        ax.add_patch(Rectangle((0, 0), g.width, g.header_height, color=_rgb(style.color("primary")), lw=0))
        self._text(ax, g.width / 2, 15, page.header.title, 18, WHITE, ha="center")
        if page.header.subtitle:
            self._text(ax, g.width / 2, 24, page.header.subtitle, 12, WHITE, ha="center")

        for placed in page.blocks:
            self._draw_block(ax, placed, doc)
        return fig

    def _draw_block(self, ax, placed: Placed, doc: Document) -> None:
        block = placed.block
        g = doc.geometry
        style = doc.style
        x0, y0, width = g.margin, placed.y, g.content_width

        if isinstance(block, InfoBox):
            ax.add_patch(FancyBboxPatch(
                (x0, y0), width, block.height,
                boxstyle="round,pad=0,rounding_size=3",
                fc=_rgb(style.color("light_gray")), ec="none",
            ))
            dark = _rgb(style.color("dark"))
            self._text(ax, x0 + 5, y0 + block.height / 2, block.left, block.font_size, dark)
            if block.right:
                self._text(ax, x0 + width / 2 + 15, y0 + block.height / 2, block.right, block.font_size, dark)
        elif isinstance(block, SectionTitle):
            ax.add_patch(FancyBboxPatch(
                (x0, y0), width, 8,
                boxstyle="round,pad=0,rounding_size=2",
                fc=_rgb(style.color(block.color)), ec="none",
            ))
            self._text(ax, x0 + 5, y0 + 4, block.text, block.font_size, WHITE)
        elif isinstance(block, Table):
            self._draw_table(ax, block, x0, y0, style)
        elif isinstance(block, TextBlock):
            lh = line_height(block.font_size)
            for i, ln in enumerate(block.lines):
                self._text(ax, x0 + block.indent, y0 + i * lh, ln, block.font_size, va="top")
        elif isinstance(block, Legend):
            ax.add_patch(FancyBboxPatch(
                (x0, y0), width, block.height,
                boxstyle="round,pad=0,rounding_size=3",
                fc=_rgb(style.color("light_gray")), ec="none",
            ))
            dark = _rgb(style.color("dark"))
            self._text(ax, x0 + 5, y0 + 6, block.title, block.font_size + 1, dark)
            for i, entry in enumerate(block.entries):
                col, row = divmod(i, block.rows)
                self._text(ax, x0 + 10 + col * width / 2, y0 + 13 + row * 6, entry, block.font_size, dark)
        elif isinstance(block, Footer):
            gray = _rgb(style.color("gray"))
            self._text(ax, g.width / 2, y0 + 2, f"{block.caption} {block.page} / {block.total}", 10, gray, ha="center")
            self._text(ax, g.width / 2, y0 + 7, block.text, 9, gray, ha="center")

    def _draw_table(self, ax, table: Table, x0: float, y0: float, style: StyleVariant) -> None:
        head_color = _rgb(style.color(table.color))
        edge = _rgb(style.color("gray"))
        y = y0
        y = self._draw_row(ax, table, Row(table.head), x0, y, head_color, WHITE, edge, head=True)
        for row in table.rows:
            if row.kind == "group":
                fill, fg = _rgb(style.color(row.color)), WHITE
            elif row.kind == "subtotal":
                fill, fg = _rgb(style.color("light_gray")), _rgb(style.color("dark"))
            elif row.kind == "total":
                fill, fg = _tint(style.color(table.color)), _rgb(style.color("dark"))
            else:
                fill, fg = WHITE, (0, 0, 0)
            y = self._draw_row(ax, table, row, x0, y, fill, fg, edge)

    def _draw_row(self, ax, table: Table, row: Row, x0: float, y: float, fill, fg, edge, head: bool = False) -> float:
        h = table.row_height(row)
        if row.kind == "group":
            spans = [(row.cells[0], sum(table.widths), "left")]
        else:
            spans = [(c, w, "center" if head else table.column_align(i))
                     for i, (c, w) in enumerate(zip(row.cells, table.widths))]
        x = x0
        for text, w, align in spans:
            ax.add_patch(Rectangle((x, y), w, h, fc=fill, ec=edge, lw=0.3))
            lines = wrap_text(text, w - 2 * CELL_PADDING, table.font_size)
            tx = x + CELL_PADDING if align == "left" else x + w / 2
            self._text(
                ax, tx, y + CELL_PADDING, "\n".join(lines), table.font_size, fg,
                va="top", ha=align, linespacing=LINE_SPACING,
            )
            x += w
        return y + h


def render_pdf(doc: Document, font: Optional[FontAsset] = None) -> bytes:
    return PdfRenderer(font).render(doc)
