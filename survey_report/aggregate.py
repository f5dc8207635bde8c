from typing import Any, Callable, Dict, List, Sequence, Tuple

from .models import (
    CATEGORY_KEYS,
    MULTI_CHOICE_FIELDS,
    SCORES,
    VOCABULARIES,
    Category,
    CategoryStats,
    FrequencyRow,
    Response,
    StatisticsResult,
    Tally,
)
from .scoring import describe, percentage


# -----------------------------
# Item accessors
# -----------------------------

def knowledge_items(r: Response) -> Tuple[int, int, int]:
    return (r.knowledge1, r.knowledge2, r.knowledge3)


def awareness_items(r: Response) -> Tuple[int, int, int, int]:
    return (r.awareness1, r.awareness2, r.awareness3, r.awareness4)


def intention_items(r: Response) -> Tuple[int, int, int, int]:
    return (r.intention1, r.intention2, r.intention3, r.intention4)


def all_items(r: Response) -> Tuple[int, ...]:
    return knowledge_items(r) + awareness_items(r) + intention_items(r)


_CATEGORY_ACCESSORS: Dict[Category, Callable[[Response], Tuple[int, ...]]] = {
    Category.KNOWLEDGE: knowledge_items,
    Category.AWARENESS: awareness_items,
    Category.INTENTION: intention_items,
}

# question key -> accessor for that single item
ITEM_ACCESSORS: Dict[str, Callable[[Response], int]] = {
    "knowledge1": lambda r: r.knowledge1,
    "knowledge2": lambda r: r.knowledge2,
    "knowledge3": lambda r: r.knowledge3,
    "awareness1": lambda r: r.awareness1,
    "awareness2": lambda r: r.awareness2,
    "awareness3": lambda r: r.awareness3,
    "awareness4": lambda r: r.awareness4,
    "intention1": lambda r: r.intention1,
    "intention2": lambda r: r.intention2,
    "intention3": lambda r: r.intention3,
    "intention4": lambda r: r.intention4,
}


def items_for(category: Category, response: Response) -> Tuple[int, ...]:
    return _CATEGORY_ACCESSORS[Category(category)](response)


def item_count(category: Category) -> int:
    return len(CATEGORY_KEYS[Category(category)])


# -----------------------------
# Pooled category statistics
# -----------------------------

def _pooled(responses: Sequence[Response], accessor: Callable[[Response], Tuple[int, ...]]) -> List[int]:
    return [v for r in responses for v in accessor(r)]


def category_stats(responses: Sequence[Response]) -> CategoryStats:
    """Pool item scores across all responses, then describe each pool.

    Pooling concatenates items; it never averages per-respondent means.
    """
    return CategoryStats(
        knowledge=describe(_pooled(responses, knowledge_items)),
        awareness=describe(_pooled(responses, awareness_items)),
        intention=describe(_pooled(responses, intention_items)),
        overall=describe(_pooled(responses, all_items)),
    )


def individual_stats(response: Response) -> CategoryStats:
    return category_stats([response])


def item_stats(responses: Sequence[Response], key: str) -> StatisticsResult:
    get = ITEM_ACCESSORS[key]
    return describe([get(r) for r in responses])


def frequency_row(responses: Sequence[Response], key: str) -> FrequencyRow:
    get = ITEM_ACCESSORS[key]
    values = [get(r) for r in responses]
    counts = {s: 0 for s in SCORES}
    for v in values:
        if v in counts:
            counts[v] += 1
    total = len(values)
    stats = describe(values)
    return FrequencyRow(
        key=key,
        total=total,
        counts=counts,
        pct={s: percentage(counts[s], total) for s in SCORES},
        mean=stats.mean,
        sd=stats.sd,
        level=stats.level,
    )


def frequency_table(responses: Sequence[Response], category: Category) -> List[FrequencyRow]:
    return [frequency_row(responses, key) for key in CATEGORY_KEYS[Category(category)]]


# -----------------------------
# Categorical tallies
# -----------------------------

def count_by_field(responses: Sequence[Response], field: str, code: str) -> int:
    return sum(1 for r in responses if getattr(r, field) == code)


def count_by_array_field(responses: Sequence[Response], field: str, code: str) -> int:
    if field not in MULTI_CHOICE_FIELDS:
        raise ValueError(f"{field} is not a multi-choice field")
    return sum(1 for r in responses if code in getattr(r, field))


def tally(responses: Sequence[Response], field: str) -> Tally:
    total = len(responses)
    exclusive = field not in MULTI_CHOICE_FIELDS
    counter = count_by_field if exclusive else count_by_array_field
    rows = []
    for code in VOCABULARIES[field]:
        n = counter(responses, field, code)
        rows.append((code, n, percentage(n, total)))
    return Tally(name=field, total=total, rows=rows, exclusive=exclusive)


DEMOGRAPHIC_FIELDS = ("gender", "age_group", "education_level", "bmi", "daily_allowance")
BEHAVIOR_FIELDS = (
    "purchase_frequency",
    "sugar_level",
    "purchase_reason",
    "daily_expense",
    "purchase_time",
    "drink_types",
    "purchase_factors",
)


def dashboard_figures(responses: Sequence[Response]) -> Dict[str, Any]:
    """Figures shown on the admin dashboard for the current collection."""
    return {
        "total": len(responses),
        "stats": category_stats(responses),
        "demographics": {f: tally(responses, f) for f in DEMOGRAPHIC_FIELDS},
        "behavior": {f: tally(responses, f) for f in BEHAVIOR_FIELDS},
    }
