"""Models for language-model estimation results."""

from pydantic import BaseModel, Field


class CalorieEstimate(BaseModel):
    """Estimated calories for a standard serving of a food."""

    calories: float = Field(ge=0)


class ExerciseEstimate(BaseModel):
    """Estimated calories burned by a 30-minute exercise session."""

    calories_burned: float = Field(ge=0)


class MealSuggestion(BaseModel):
    """Advice for the next meal of the day."""

    suggestions: str


class CalorieTargetSuggestion(BaseModel):
    """Suggested daily calorie target with a short explanation."""

    calorie_target: float = Field(ge=0)
    explanation: str
