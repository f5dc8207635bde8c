from survey_report.layout import (
    A4,
    Cursor,
    Footer,
    InfoBox,
    PageBreak,
    PageHeader,
    Row,
    SectionTitle,
    Table,
    TextBlock,
    add_footers,
    layout,
    place,
    wrap_text,
)

HEADER = PageHeader("Report", "Subtitle")


def _table(n_rows):
    return Table(
        head=("Item", "Value"),
        rows=tuple(Row((f"row {i}", str(i))) for i in range(n_rows)),
        widths=(90, 90),
    )


def test_geometry_constants():
    assert A4.content_top == 45
    assert A4.content_bottom == 297 - 18
    assert A4.content_width == 180


def test_place_advances_cursor():
    pieces, cursor = place(InfoBox("left", "right"), Cursor(0, A4.content_top), A4)
    assert len(pieces) == 1
    page, placed = pieces[0]
    assert page == 0
    assert placed.y == A4.content_top
    assert cursor == Cursor(0, A4.content_top + 15 + 5)


def test_block_that_does_not_fit_moves_to_next_page():
    near_bottom = Cursor(0, A4.content_bottom - 2)
    pieces, cursor = place(SectionTitle("Part"), near_bottom, A4)
    assert pieces[0][0] == 1
    assert pieces[0][1].y == A4.content_top
    assert cursor.page == 1


def test_long_table_splits_with_header_repeated():
    table = _table(120)
    pages = layout([table], HEADER)
    assert len(pages) > 1
    pieces = [p.block for page in pages for p in page.blocks]
    assert all(isinstance(b, Table) for b in pieces)
    assert sum(len(b.rows) for b in pieces) == 120
    assert not pieces[0].continued
    assert all(b.continued for b in pieces[1:])
    assert all(b.head == table.head for b in pieces)
    for page in pages:
        for placed in page.blocks:
            assert placed.y + placed.height <= A4.content_bottom + 1e-6


def test_overflow_pages_get_continued_title():
    pages = layout([_table(120)], HEADER, continued_suffix="(cont.)")
    assert pages[0].header.title == "Report"
    assert pages[1].header.title == "Report (cont.)"


def test_page_break_switches_header_and_trailing_break_is_dropped():
    blocks = [SectionTitle("A"), PageBreak(title="Second", subtitle="Part 3"), SectionTitle("B"), PageBreak()]
    pages = layout(blocks, HEADER)
    assert len(pages) == 2
    assert pages[1].header == PageHeader("Second", "Part 3")
    assert pages[1].blocks[0].y == A4.content_top


def test_long_text_splits_by_line():
    lines = tuple(f"line {i}" for i in range(200))
    pages = layout([TextBlock(lines)], HEADER)
    assert len(pages) > 1
    shown = [ln for page in pages for p in page.blocks for ln in p.block.lines]
    assert shown == list(lines)


def test_footers_number_pages():
    pages = add_footers(layout([_table(120)], HEADER), "Page", "School")
    total = len(pages)
    for i, page in enumerate(pages, start=1):
        footer = page.blocks[-1].block
        assert isinstance(footer, Footer)
        assert (footer.page, footer.total) == (i, total)


def test_wrap_text_breaks_long_words():
    lines = wrap_text("x" * 200, 30, 10)
    assert len(lines) > 1
    assert "".join(lines) == "x" * 200
    assert wrap_text("", 30, 10) == [""]


def test_continued_suffix_is_not_repeated():
    blocks = [SectionTitle("A"), PageBreak(title="Report (cont.)"), _table(120)]
    pages = layout(blocks, HEADER, continued_suffix="(cont.)")
    assert len(pages) > 2
    assert [p.header.title for p in pages[1:]] == ["Report (cont.)"] * (len(pages) - 1)
