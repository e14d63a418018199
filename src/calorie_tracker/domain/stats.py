"""Domain models for derived daily statistics."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DailySummary:
    """Calorie totals derived from a daily log."""

    total_consumed: float
    total_burned: float
    net_calories: float
    remaining_calories: float
    progress_percent: float


@dataclass(frozen=True)
class TrendPoint:
    """Net calories against the target for one date."""

    date: str
    net_calories: float
    calorie_target: float


@dataclass(frozen=True)
class WeightPoint:
    """A weight sample for one date."""

    date: str
    weight: float
