from datetime import datetime

import pytest

from survey_report.models import new_response

BASE_ANSWERS = dict(
    gender="male",
    age_group="12-15",
    education_level="junior",
    bmi="normal",
    daily_allowance="51-100",
    purchase_frequency="daily",
    purchase_time=["lunch", "break"],
    drink_types=["soda"],
    sugar_level="100%",
    purchase_reason="taste",
    purchase_factors=["convenience"],
    daily_expense="20-40",
    suggestions="",
)


def make_response(knowledge=(3, 3, 3), awareness=(3, 3, 3, 3), intention=(3, 3, 3, 3), **overrides):
    answers = dict(BASE_ANSWERS)
    for prefix, scores in (("knowledge", knowledge), ("awareness", awareness), ("intention", intention)):
        for i, s in enumerate(scores, start=1):
            answers[f"{prefix}{i}"] = s
    answers.update(overrides)
    created = answers.pop("created_at", datetime(2024, 3, 15, 9, 30))
    return new_response(created_at=created, **answers)


@pytest.fixture
def response_factory():
    return make_response
