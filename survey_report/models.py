import uuid
from dataclasses import dataclass, field, fields
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


# -----------------------------
# Vocabularies
# -----------------------------

GENDERS = ("male", "female")
AGE_GROUPS = ("12-15", "16-18")
EDUCATION_LEVELS = ("junior", "senior")
BMI_CATEGORIES = ("underweight", "normal", "overweight", "obese")
DAILY_ALLOWANCES = ("below50", "51-100", "101-150", "above150")
PURCHASE_FREQUENCIES = ("daily", "3-4times", "1-2times", "rarely")
PURCHASE_TIMES = ("morning", "lunch", "afternoon", "break")
DRINK_TYPES = ("soda", "tea", "yogurt", "juice", "energy")
SUGAR_LEVELS = ("100%", "50%", "extra", "none")
PURCHASE_REASONS = ("taste", "thirst", "price", "friends", "habit")
PURCHASE_FACTORS = ("rule", "only", "time", "convenience", "none")
DAILY_EXPENSES = ("below20", "20-40", "41-60", "above60")

# field name -> ordered vocabulary, used for tallies and report rows
VOCABULARIES: Dict[str, Tuple[str, ...]] = {
    "gender": GENDERS,
    "age_group": AGE_GROUPS,
    "education_level": EDUCATION_LEVELS,
    "bmi": BMI_CATEGORIES,
    "daily_allowance": DAILY_ALLOWANCES,
    "purchase_frequency": PURCHASE_FREQUENCIES,
    "purchase_time": PURCHASE_TIMES,
    "drink_types": DRINK_TYPES,
    "sugar_level": SUGAR_LEVELS,
    "purchase_reason": PURCHASE_REASONS,
    "purchase_factors": PURCHASE_FACTORS,
    "daily_expense": DAILY_EXPENSES,
}

MULTI_CHOICE_FIELDS = ("purchase_time", "drink_types", "purchase_factors")

SCORES = (1, 2, 3, 4, 5)


class Level(str, Enum):
    LOWEST = "lowest"
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    HIGHEST = "highest"


class Category(str, Enum):
    KNOWLEDGE = "knowledge"
    AWARENESS = "awareness"
    INTENTION = "intention"


CATEGORY_KEYS: Dict[Category, Tuple[str, ...]] = {
    Category.KNOWLEDGE: ("knowledge1", "knowledge2", "knowledge3"),
    Category.AWARENESS: ("awareness1", "awareness2", "awareness3", "awareness4"),
    Category.INTENTION: ("intention1", "intention2", "intention3", "intention4"),
}

QUESTION_KEYS: Tuple[str, ...] = tuple(k for keys in CATEGORY_KEYS.values() for k in keys)


# -----------------------------
# Records
# -----------------------------

@dataclass(frozen=True)
class Response:
    """One respondent's complete answer set. Immutable once created."""

    id: str
    created_at: datetime

    gender: str
    age_group: str
    education_level: str
    bmi: str
    daily_allowance: str

    purchase_frequency: str
    purchase_time: Tuple[str, ...]
    drink_types: Tuple[str, ...]
    sugar_level: str
    purchase_reason: str
    purchase_factors: Tuple[str, ...]
    daily_expense: str

    knowledge1: int
    knowledge2: int
    knowledge3: int
    awareness1: int
    awareness2: int
    awareness3: int
    awareness4: int
    intention1: int
    intention2: int
    intention3: int
    intention4: int

    suggestions: str = ""

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, datetime):
                value = value.isoformat()
            elif isinstance(value, tuple):
                value = list(value)
            out[f.name] = value
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Response":
        kwargs: Dict[str, Any] = {}
        for f in fields(cls):
            if f.name not in data:
                if f.name == "suggestions":
                    continue
                raise KeyError(f"Missing field: {f.name}")
            kwargs[f.name] = data[f.name]
        created = kwargs["created_at"]
        if not isinstance(created, datetime):
            kwargs["created_at"] = datetime.fromisoformat(str(created))
        for name in MULTI_CHOICE_FIELDS:
            kwargs[name] = tuple(kwargs[name] or ())
        for key in QUESTION_KEYS:
            kwargs[key] = int(kwargs[key])
        kwargs["suggestions"] = kwargs.get("suggestions") or ""
        return cls(**kwargs)


def new_response(created_at: Optional[datetime] = None, **answers: Any) -> Response:
    """Build a Response with a fresh opaque id and a creation timestamp."""
    data = dict(answers)
    data["id"] = str(uuid.uuid4())
    data["created_at"] = created_at or datetime.now()
    return Response.from_dict(data)


@dataclass(frozen=True)
class StatisticsResult:
    count: int
    mean: float
    sd: float
    level: Level


@dataclass(frozen=True)
class CategoryStats:
    knowledge: StatisticsResult
    awareness: StatisticsResult
    intention: StatisticsResult
    overall: StatisticsResult

    def for_category(self, category: Category) -> StatisticsResult:
        return getattr(self, category.value)


@dataclass(frozen=True)
class FrequencyRow:
    key: str
    total: int
    counts: Dict[int, int] = field(default_factory=dict)
    pct: Dict[int, float] = field(default_factory=dict)
    mean: float = 0.0
    sd: float = 0.0
    level: Level = Level.LOWEST


@dataclass(frozen=True)
class Tally:
    """Counts of one categorical field across a collection, in vocabulary order."""

    name: str
    total: int
    rows: List[Tuple[str, int, float]]
    exclusive: bool = True
