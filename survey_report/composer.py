"""
Report composition: responses and their statistics in, laid-out pages out.

One composer family covers both document kinds. Locale and colour scheme come
from ``ReportConfig``, so layout code is shared between every variant.
"""

import math
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Sequence, Tuple

from .aggregate import (
    BEHAVIOR_FIELDS,
    DEMOGRAPHIC_FIELDS,
    category_stats,
    frequency_table,
    individual_stats,
    item_count,
    items_for,
    tally,
)
from .labels import LabelResolver
from .layout import (
    A4,
    Block,
    InfoBox,
    Legend,
    Page,
    PageBreak,
    PageGeometry,
    PageHeader,
    Row,
    SectionTitle,
    Table,
    TextBlock,
    add_footers,
    layout,
    wrap_text,
)
from .models import (
    CATEGORY_KEYS,
    QUESTION_KEYS,
    SCORES,
    Category,
    CategoryStats,
    Level,
    Response,
    Tally,
)
from .scoring import LEVEL_BREAKPOINTS, classify_level

RGB = Tuple[int, int, int]


# -----------------------------
# Configuration
# -----------------------------

@dataclass(frozen=True)
class StyleVariant:
    name: str
    colors: Dict[str, RGB]

    def color(self, key: Optional[str]) -> RGB:
        return self.colors.get(key or "primary", self.colors["primary"])


STYLES: Dict[str, StyleVariant] = {
    "standard": StyleVariant(
        name="standard",
        colors={
            "primary": (13, 148, 136),
            "knowledge": (59, 130, 246),
            "awareness": (239, 68, 68),
            "intention": (34, 197, 94),
            "gray": (107, 114, 128),
            "light_gray": (243, 244, 246),
            "dark": (31, 41, 55),
        },
    ),
    "print": StyleVariant(
        name="print",
        colors={
            "primary": (64, 64, 64),
            "knowledge": (96, 96, 96),
            "awareness": (112, 112, 112),
            "intention": (128, 128, 128),
            "gray": (120, 120, 120),
            "light_gray": (238, 238, 238),
            "dark": (20, 20, 20),
        },
    ),
}


@dataclass(frozen=True)
class ReportConfig:
    labels: LabelResolver = field(default_factory=LabelResolver)
    style: StyleVariant = STYLES["standard"]
    geometry: PageGeometry = A4

    @classmethod
    def create(cls, locale: str = "th", style: str = "standard") -> "ReportConfig":
        if style not in STYLES:
            raise ValueError(f"Unknown style variant: {style!r} (expected one of {sorted(STYLES)})")
        return cls(labels=LabelResolver.for_locale(locale), style=STYLES[style])


@dataclass
class Document:
    kind: str  # individual | summary
    filename: str
    pages: List[Page]
    style: StyleVariant
    geometry: PageGeometry

    @property
    def page_count(self) -> int:
        return len(self.pages)


# -----------------------------
# Formatting
# -----------------------------

def fmt_float(x: Optional[float], digits: int = 2) -> str:
    if x is None:
        return "-"
    if math.isfinite(x):
        return f"{x:.{digits}f}"
    return str(x)


def fmt_pct(x: float) -> str:
    return fmt_float(x, 2)


def legend_entries(labels: LabelResolver) -> Tuple[str, ...]:
    word = labels.text("legend_mean")
    uppers = [5.0] + [bound - 0.01 for bound, _ in LEVEL_BREAKPOINTS]
    lowers = [bound for bound, _ in LEVEL_BREAKPOINTS] + [1.0]
    levels = [lvl for _, lvl in LEVEL_BREAKPOINTS] + [Level.LOWEST]
    return tuple(
        f"{word} {lo:.2f} - {hi:.2f} = {labels.level(lvl)}"
        for lo, hi, lvl in zip(lowers, uppers, levels)
    )


# -----------------------------
# Composer
# -----------------------------

class ReportComposer:
    """Builds block sequences for each document kind and lays them out."""

    def __init__(self, config: Optional[ReportConfig] = None):
        self.config = config or ReportConfig()

    @property
    def labels(self) -> LabelResolver:
        return self.config.labels

    @property
    def geometry(self) -> PageGeometry:
        return self.config.geometry

    def _finish(self, kind: str, filename: str, blocks: Sequence[Block], header: PageHeader) -> Document:
        t = self.labels.text
        pages = layout(blocks, header, self.geometry, continued_suffix=t("continued"))
        add_footers(pages, t("page"), t("footer"), self.geometry)
        return Document(kind=kind, filename=filename, pages=pages, style=self.config.style, geometry=self.geometry)

    def _wrap(self, text: str, font_size: float, indent: float) -> Tuple[str, ...]:
        return tuple(wrap_text(text.strip(), self.geometry.content_width - 2 * indent, font_size))

    # ---- individual ----

    def individual_filename(self, response: Response) -> str:
        return f"{self.labels.text('individual_file')}-{response.id[:8]}.pdf"

    def individual(self, response: Response, stats: Optional[CategoryStats] = None) -> Document:
        stats = stats or individual_stats(response)
        t = self.labels.text
        header = PageHeader(t("individual_title"), t("subtitle"))
        return self._finish("individual", self.individual_filename(response), self.individual_blocks(response, stats), header)

    def individual_blocks(self, response: Response, stats: CategoryStats) -> List[Block]:
        lb = self.labels
        t = lb.text
        blocks: List[Block] = [
            InfoBox(
                f"{t('response_id')}: {response.id[:8].upper()}",
                f"{t('response_date')}: {lb.date(response.created_at.date())}",
            ),
            SectionTitle(t("part1")),
            Table(
                head=(t("col_item"), t("col_value")),
                rows=tuple(Row((lb.field_title(f), lb.label(f, getattr(response, f)))) for f in DEMOGRAPHIC_FIELDS),
                widths=(60, 120),
                align=("left", "left"),
                font_size=11,
            ),
            SectionTitle(t("part2")),
        ]

        behavior_rows = []
        for f in ("purchase_frequency", "purchase_time", "drink_types", "sugar_level",
                  "purchase_reason", "purchase_factors", "daily_expense"):
            value = getattr(response, f)
            shown = lb.label_list(f, value) if isinstance(value, tuple) else lb.label(f, value)
            behavior_rows.append(Row((lb.field_title(f), shown)))
        blocks.append(Table(
            head=(t("col_item"), t("col_value")),
            rows=tuple(behavior_rows),
            widths=(60, 120),
            align=("left", "left"),
            font_size=11,
        ))

        blocks.append(SectionTitle(t("part3")))
        blocks.append(self._risk_table(response, stats))

        if response.suggestions and response.suggestions.strip():
            blocks.append(SectionTitle(t("part4")))
            blocks.append(TextBlock(self._wrap(response.suggestions, 11, 5.0), font_size=11, indent=5.0))
        return blocks

    def _risk_table(self, response: Response, stats: CategoryStats) -> Table:
        lb = self.labels
        t = lb.text
        rows: List[Row] = []
        for category in Category:
            rows.append(Row((lb.category(category.value),), kind="group", color=category.value))
            for key, score in zip(CATEGORY_KEYS[category], items_for(category, response)):
                rows.append(Row((lb.question(key), str(score), lb.level(classify_level(score)))))
            s = stats.for_category(category)
            rows.append(Row((t("category_mean"), fmt_float(s.mean), lb.level(s.level)), kind="subtotal"))
        o = stats.overall
        rows.append(Row(
            (t("overall_mean"), f"{fmt_float(o.mean)} ({t('col_sd')} {fmt_float(o.sd)})", lb.level(o.level)),
            kind="total",
        ))
        return Table(
            head=(t("col_question"), t("col_score"), t("col_level")),
            rows=tuple(rows),
            widths=(120, 30, 30),
            font_size=10,
        )

    # ---- summary ----

    def summary_filename(self, generated_on: date) -> str:
        return f"{self.labels.text('summary_file')}-{generated_on.isoformat()}.pdf"

    def summary(
        self,
        responses: Sequence[Response],
        generated_on: date,
        stats: Optional[CategoryStats] = None,
    ) -> Document:
        stats = stats or category_stats(responses)
        t = self.labels.text
        header = PageHeader(t("summary_title"), t("subtitle"))
        blocks = self.summary_blocks(responses, stats, generated_on)
        return self._finish("summary", self.summary_filename(generated_on), blocks, header)

    def summary_blocks(self, responses: Sequence[Response], stats: CategoryStats, generated_on: date) -> List[Block]:
        lb = self.labels
        t = lb.text
        total = len(responses)
        blocks: List[Block] = [
            InfoBox(
                f"{t('respondents')}: {total} {t('persons')}".strip(),
                f"{t('generated_on')}: {lb.date(generated_on)}",
            ),
            SectionTitle(t("part1")),
            self._demographics_table(responses),
            SectionTitle(t("part2")),
        ]
        for f in BEHAVIOR_FIELDS:
            tl = tally(responses, f)
            blocks.append(self._behavior_table(tl))
            if not tl.exclusive:
                blocks.append(TextBlock((t("multi_note"),), font_size=9, indent=2.0))

        blocks.append(PageBreak(title=f"{t('summary_title')} {t('continued')}", subtitle=t("part3")))
        for category in Category:
            blocks.append(SectionTitle(lb.category(category.value), color=category.value))
            blocks.append(self._frequency_table(responses, category, stats))

        blocks.append(SectionTitle(t("overall_section")))
        blocks.append(self._overall_table(total, stats))
        blocks.append(Legend(t("legend_title"), legend_entries(lb)))
        return blocks

    def _demographics_table(self, responses: Sequence[Response]) -> Table:
        lb = self.labels
        t = lb.text
        total = len(responses)
        rows: List[Row] = []
        for f in DEMOGRAPHIC_FIELDS:
            tl = tally(responses, f)
            for i, (code, n, pct) in enumerate(tl.rows):
                rows.append(Row((lb.field_title(f) if i == 0 else "", lb.label(f, code), str(n), fmt_pct(pct))))
        rows.append(Row((t("total"), "", str(total), fmt_pct(100.0 if total else 0.0)), kind="total"))
        return Table(
            head=(t("col_group"), t("col_item"), t("col_n"), t("col_pct")),
            rows=tuple(rows),
            widths=(40, 70, 35, 35),
            font_size=11,
        )

    def _behavior_table(self, tl: Tally) -> Table:
        lb = self.labels
        t = lb.text
        rows = [Row((lb.label(tl.name, code), str(n), fmt_pct(pct))) for code, n, pct in tl.rows]
        if tl.exclusive:
            rows.append(Row((t("total"), str(tl.total), fmt_pct(100.0 if tl.total else 0.0)), kind="total"))
        return Table(
            head=(lb.field_title(tl.name), t("col_n"), t("col_pct")),
            rows=tuple(rows),
            widths=(110, 35, 35),
            font_size=11,
        )

    def _frequency_table(self, responses: Sequence[Response], category: Category, stats: CategoryStats) -> Table:
        lb = self.labels
        t = lb.text
        total = len(responses)
        rows: List[Row] = []
        for fr in frequency_table(responses, category):
            cells = [lb.question(fr.key), str(fr.total)]
            cells += [f"{fr.counts[s]}\n{fmt_pct(fr.pct[s])}%" for s in SCORES]
            cells += [fmt_float(fr.mean), fmt_float(fr.sd), lb.level(fr.level)]
            rows.append(Row(tuple(cells)))
        count = item_count(category)
        s = stats.for_category(category)
        rows.append(Row(
            (f"{t('category_total')} ({count} {t('items_suffix')})", str(total * count))
            + ("-",) * len(SCORES)
            + (fmt_float(s.mean), fmt_float(s.sd), lb.level(s.level)),
            kind="subtotal",
        ))
        return Table(
            head=(t("col_question"), t("col_n")) + tuple(str(s) for s in SCORES) + (t("col_mean"), t("col_sd"), t("col_level")),
            rows=tuple(rows),
            widths=(58, 12, 14, 14, 14, 14, 14, 13, 13, 14),
            color=category.value,
            font_size=8,
        )

    def _overall_table(self, total: int, stats: CategoryStats) -> Table:
        lb = self.labels
        t = lb.text
        rows: List[Row] = []
        for category in Category:
            count = item_count(category)
            s = stats.for_category(category)
            rows.append(Row((
                lb.category(category.value),
                str(count),
                str(total * count),
                fmt_float(s.mean),
                fmt_float(s.sd),
                lb.level(s.level),
            )))
        o = stats.overall
        rows.append(Row(
            (lb.category("overall"), str(len(QUESTION_KEYS)), str(total * len(QUESTION_KEYS)),
             fmt_float(o.mean), fmt_float(o.sd), lb.level(o.level)),
            kind="total",
        ))
        return Table(
            head=(t("col_category"), t("col_items"), t("col_n"), t("col_mean"), t("col_sd"), t("col_level")),
            rows=tuple(rows),
            widths=(80, 20, 20, 20, 20, 20),
            font_size=10,
        )
