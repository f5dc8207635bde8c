import math

import pytest

from survey_report.models import Level
from survey_report.scoring import classify_level, describe, mean, percentage, standard_deviation


def test_empty_input_gives_zero():
    assert mean([]) == 0
    assert standard_deviation([]) == 0
    assert describe([]).count == 0
    assert describe([]).level == Level.LOWEST


def test_population_standard_deviation():
    assert standard_deviation([5, 5, 5, 1, 1, 1, 3, 3, 3]) == pytest.approx(1.633, abs=0.001)
    assert standard_deviation([4]) == 0


def test_mean_and_sd_bounds_for_likert_values():
    for values in ([1], [5, 5], [1, 2, 3, 4, 5], [2, 4, 4, 4, 5, 5, 5, 1]):
        m = mean(values)
        assert 1 <= m <= 5
        assert standard_deviation(values) >= 0


@pytest.mark.parametrize(
    "value, expected",
    [
        (5.0, Level.HIGHEST),
        (4.51, Level.HIGHEST),
        (4.50, Level.HIGH),
        (3.51, Level.HIGH),
        (3.50, Level.MODERATE),
        (2.51, Level.MODERATE),
        (2.50, Level.LOW),
        (1.51, Level.LOW),
        (1.50, Level.LOWEST),
        (0.0, Level.LOWEST),
    ],
)
def test_classify_level_boundaries(value, expected):
    assert classify_level(value) == expected


def test_percentage_never_divides_by_zero():
    assert percentage(0, 0) == 0
    assert percentage(3, 0) == 0
    assert percentage(1, 4) == 25.0
    assert math.isfinite(percentage(0, 0))
