"""Domain models for daily meal and activity logs."""

from dataclasses import dataclass, field

DEFAULT_CALORIE_TARGET = 2000
MEAL_TYPES = ("Breakfast", "Lunch", "Dinner", "Snack")


@dataclass(frozen=True)
class Meal:
    """A logged meal."""

    id: str
    type: str
    name: str
    calories: float


@dataclass(frozen=True)
class Activity:
    """A logged exercise session."""

    id: str
    name: str
    calories_burned: float


@dataclass
class DailyLog:
    """Everything recorded for one calendar date."""

    meals: list[Meal] = field(default_factory=list)
    activities: list[Activity] = field(default_factory=list)
    calorie_target: float = DEFAULT_CALORIE_TARGET
    weight: float | None = None


History = dict[str, DailyLog]


@dataclass(frozen=True)
class DailyMetrics:
    """Per-date target and weight as stored alongside meals and activities."""

    date: str
    calorie_target: float | None
    weight: float | None
