from datetime import date

import pytest

from survey_report.composer import STYLES, ReportComposer, ReportConfig, fmt_float, legend_entries
from survey_report.labels import LabelResolver
from survey_report.layout import Footer, Legend, SectionTitle, Table, TextBlock


def _blocks(doc, kind):
    return [p.block for page in doc.pages for p in page.blocks if isinstance(p.block, kind)]


def _cells(doc):
    return [c for t in _blocks(doc, Table) for row in t.rows for c in row.cells]


@pytest.fixture
def composer():
    return ReportComposer(ReportConfig.create("en", "standard"))


def test_individual_report(composer, response_factory):
    r = response_factory(knowledge=(5, 4, 5), suggestions="Please sell more water.")
    doc = composer.individual(r)
    assert doc.kind == "individual"
    assert doc.filename == f"survey-report-{r.id[:8]}.pdf"
    titles = [b.text for b in _blocks(doc, SectionTitle)]
    assert titles[-1] == "Part 4: Suggestions"
    assert any("Please sell more water." in ln for b in _blocks(doc, TextBlock) for ln in b.lines)
    info = doc.pages[0].blocks[0].block
    assert r.id[:8].upper() in info.left


def test_individual_report_omits_blank_suggestions(composer, response_factory):
    doc = composer.individual(response_factory(suggestions="   \n "))
    titles = [b.text for b in _blocks(doc, SectionTitle)]
    assert "Part 4: Suggestions" not in titles
    assert titles[-1] == "Part 3: Health risk from high sugar intake"


def test_individual_risk_table_rows(composer, response_factory):
    doc = composer.individual(response_factory(knowledge=(5, 5, 5), awareness=(1, 1, 1, 1), intention=(3, 3, 3, 3)))
    risk = [t for t in _blocks(doc, Table) if t.head[0] == "Question"]
    rows = [row for t in risk for row in t.rows]
    kinds = [row.kind for row in rows]
    assert kinds.count("group") == 3
    assert kinds.count("subtotal") == 3
    assert kinds[-1] == "total"
    subtotal_means = [row.cells[1] for row in rows if row.kind == "subtotal"]
    assert subtotal_means == ["5.00", "1.00", "3.00"]
    assert rows[-1].cells[0] == "Overall mean"


def test_summary_report(composer, response_factory):
    responses = [response_factory(knowledge=(5, 5, 5)), response_factory(knowledge=(1, 1, 1)), response_factory()]
    doc = composer.summary(responses, date(2024, 3, 15))
    assert doc.kind == "summary"
    assert doc.filename == "survey-summary-2024-03-15.pdf"
    assert doc.page_count >= 2
    assert any(page.header.subtitle == "Part 3: Health risk from high sugar intake" for page in doc.pages[1:])
    assert len(_blocks(doc, Legend)) == 1
    assert "3.00" in _cells(doc)


def test_summary_total_rows(composer, response_factory):
    doc = composer.summary([response_factory(), response_factory(gender="female")], date(2024, 1, 1))
    demographics = _blocks(doc, Table)[0]
    total = demographics.rows[-1]
    assert total.kind == "total"
    assert total.cells[2:] == ("2", "100.00")


def test_empty_summary_renders_zeros(composer):
    doc = composer.summary([], date(2024, 1, 1))
    assert doc.page_count >= 2
    cells = _cells(doc)
    assert "0.00" in cells
    assert "0.00%" in " ".join(cells)
    assert "nan" not in cells


def test_every_page_has_a_numbered_footer(composer, response_factory):
    doc = composer.summary([response_factory() for _ in range(3)], date(2024, 1, 1))
    footers = _blocks(doc, Footer)
    assert [f.page for f in footers] == list(range(1, doc.page_count + 1))
    assert {f.total for f in footers} == {doc.page_count}


def test_thai_is_the_default_locale(response_factory):
    doc = ReportComposer().summary([response_factory()], date(2024, 1, 1))
    assert doc.filename == "รายงานสรุปแบบสอบถาม-2024-01-01.pdf"


def test_unknown_style_is_rejected():
    with pytest.raises(ValueError):
        ReportConfig.create("en", "neon")
    assert ReportConfig.create("th", "print").style is STYLES["print"]


def test_legend_entries_follow_breakpoints():
    entries = legend_entries(LabelResolver.for_locale("en"))
    assert entries[0] == "Mean 4.51 - 5.00 = Highest"
    assert entries[-1] == "Mean 1.00 - 1.50 = Lowest"


def test_fmt_float():
    assert fmt_float(3) == "3.00"
    assert fmt_float(None) == "-"


def _mixed_responses(response_factory):
    return [
        response_factory(gender="male", age_group="12-15", bmi="normal", daily_allowance="below50",
                         purchase_frequency="daily", sugar_level="100%", purchase_reason="taste", daily_expense="below20"),
        response_factory(gender="female", age_group="16-18", education_level="senior", bmi="obese",
                         purchase_frequency="rarely", sugar_level="none", purchase_reason="habit", daily_expense="above60"),
        response_factory(gender="female", age_group="12-15", bmi="overweight", daily_allowance="above150",
                         purchase_frequency="3-4times", sugar_level="50%", purchase_reason="friends"),
        response_factory(gender="male", age_group="16-18", education_level="senior", bmi="underweight",
                         purchase_frequency="daily", sugar_level="extra", purchase_reason="price", daily_expense="41-60"),
        response_factory(gender="female", bmi="normal", daily_allowance="101-150",
                         purchase_frequency="1-2times", purchase_reason="thirst"),
        response_factory(gender="male", bmi="normal", purchase_frequency="daily", sugar_level="50%"),
    ]


def test_cross_tab_counts_sum_to_total(composer, response_factory):
    responses = _mixed_responses(response_factory)
    total = len(responses)
    doc = composer.summary(responses, date(2024, 1, 1))
    tables = _blocks(doc, Table)

    groups = {}
    field = None
    for row in tables[0].rows:
        if row.kind == "total":
            continue
        field = row.cells[0] or field
        groups.setdefault(field, []).append((int(row.cells[2]), float(row.cells[3])))
    assert len(groups) == 5

    lb = composer.labels
    for name in ("purchase_frequency", "sugar_level", "purchase_reason", "daily_expense"):
        rows = [r for t in tables if len(t.head) == 3 and t.head[0] == lb.field_title(name)
                for r in t.rows if r.kind != "total"]
        groups[name] = [(int(r.cells[1]), float(r.cells[2])) for r in rows]

    for name, rows in groups.items():
        assert sum(n for n, _ in rows) == total, name
        assert sum(p for _, p in rows) == pytest.approx(100.0, abs=0.1), name


def test_overflow_pages_carry_a_single_continued_suffix(composer, response_factory):
    doc = composer.summary([response_factory()], date(2024, 1, 1))
    titles = [page.header.title for page in doc.pages]
    assert "Survey Summary Report (continued)" in titles
    assert not any(t.count("(continued)") > 1 for t in titles)
