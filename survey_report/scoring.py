"""
Descriptive scoring primitives.

Standard deviation uses the population formula (divide by n), so figures match
reports produced by earlier versions of the survey tooling. Empty input is a
valid "no data" state and yields 0 rather than an error.
"""

import statistics
from typing import Sequence

from .models import Level, StatisticsResult

# Lower bounds of each band, highest first. A mean equal to a bound belongs
# to that (higher) band.
LEVEL_BREAKPOINTS = (
    (4.51, Level.HIGHEST),
    (3.51, Level.HIGH),
    (2.51, Level.MODERATE),
    (1.51, Level.LOW),
)


def mean(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return statistics.fmean(values)


def standard_deviation(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return statistics.pstdev([float(v) for v in values])


def percentage(count: float, total: float) -> float:
    if not total:
        return 0.0
    return count / total * 100.0


def classify_level(value: float) -> Level:
    # NaN falls through every comparison and lands in the lowest band
    for bound, level in LEVEL_BREAKPOINTS:
        if value >= bound:
            return level
    return Level.LOWEST


def describe(values: Sequence[float]) -> StatisticsResult:
    m = mean(values)
    return StatisticsResult(
        count=len(values),
        mean=m,
        sd=standard_deviation(values),
        level=classify_level(m),
    )

