"""Request models for the HTTP API."""

from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from calorie_tracker.domain.settings import UserSettings

MealType = Literal["Breakfast", "Lunch", "Dinner", "Snack"]


class _Request(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")


class MealCreate(_Request):
    """A meal submitted from the meal logger."""

    type: MealType
    name: str = Field(min_length=1)
    calories: float = Field(ge=0)


class ActivityCreate(_Request):
    """An exercise submitted from the activity logger."""

    name: str = Field(min_length=1)
    calories_burned: float = Field(ge=0)


class TargetUpdate(_Request):
    """New calorie target for a date."""

    calorie_target: int = Field(ge=0)


class WeightUpdate(_Request):
    """Weight sample for a date."""

    weight: float = Field(gt=0)


class SettingsPayload(_Request):
    """Complete biometric profile."""

    height: float = Field(gt=0)
    weight: float = Field(gt=0)
    age: int = Field(gt=0)
    gender: Literal["male", "female"]
    activity_level: Literal["sedentary", "light", "moderate", "active", "very-active"]
    goal: Literal["lose", "maintain", "gain"]

    def to_domain(self) -> UserSettings:
        """Return the domain settings record."""
        return UserSettings(**self.model_dump())


class CalorieEstimateRequest(_Request):
    """Food to estimate calories for."""

    food_name: str = Field(min_length=1)


class ExerciseEstimateRequest(_Request):
    """Exercise to estimate calories burned for."""

    description: str = Field(min_length=1)


class MealSuggestionRequest(_Request):
    """Which meal to plan and for which date (today when omitted)."""

    next_meal_type: MealType = "Dinner"
    day: date | None = None


class HistoryImport(_Request):
    """Snapshot of the browser's local storage."""

    entries: dict[str, str]
