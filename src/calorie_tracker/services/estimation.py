"""Calorie estimates and meal advice from a language model."""

import logging
from dataclasses import dataclass
from typing import Protocol, TypeVar

from pydantic import BaseModel

from calorie_tracker.domain.estimates import (
    CalorieEstimate,
    CalorieTargetSuggestion,
    ExerciseEstimate,
    MealSuggestion,
)
from calorie_tracker.domain.logs import Meal
from calorie_tracker.domain.settings import UserSettings

logger = logging.getLogger(__name__)

_ModelT = TypeVar("_ModelT", bound=BaseModel)


def _number_schema(field_name: str) -> dict[str, object]:
    return {
        "type": "object",
        "properties": {field_name: {"type": "number", "minimum": 0}},
        "required": [field_name],
        "additionalProperties": False,
    }


CALORIE_SCHEMA = _number_schema("calories")
EXERCISE_SCHEMA = _number_schema("calories_burned")
SUGGESTION_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {"suggestions": {"type": "string"}},
    "required": ["suggestions"],
    "additionalProperties": False,
}
TARGET_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "calorie_target": {"type": "number", "minimum": 0},
        "explanation": {"type": "string"},
    },
    "required": ["calorie_target", "explanation"],
    "additionalProperties": False,
}

OVER_TARGET_SUGGESTION = (
    "You've already exceeded your daily calorie target. For your next meal, "
    "consider something very light, like a simple salad with vinaigrette or a "
    "cup of broth-based soup to minimize exceeding your goal further."
)


class EstimationError(RuntimeError):
    """Raised when an estimate could not be produced."""


class EstimationClient(Protocol):
    """Interface for structured language-model calls."""

    async def generate(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        schema_name: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Return the model output matching the schema."""


@dataclass
class EstimationService:
    """Service that builds estimation prompts and validates results."""

    client: EstimationClient
    model: str
    reasoning_effort: str | None
    store: bool
    cuisine: str | None = None

    async def estimate_calories(self, food_name: str) -> CalorieEstimate:
        """Estimate calories for a standard serving of a food."""
        prompt = (
            "You are a nutrition expert. Estimate the calories in a standard "
            "serving of the following food and return only the calorie count.\n\n"
            f"Food: {food_name}"
        )
        return await self._generate(
            "calorie_estimate",
            CALORIE_SCHEMA,
            prompt,
            CalorieEstimate,
            "Failed to get calorie estimate. Please try again later.",
        )

    async def estimate_exercise_calories(self, description: str) -> ExerciseEstimate:
        """Estimate calories burned in a 30-minute session of an exercise."""
        prompt = (
            "You are a fitness expert. Estimate the calories burned by a "
            "30-minute session of the following exercise for an average adult "
            "of about 70-80 kg. Return only the calories burned.\n\n"
            f"Exercise: {description}"
        )
        return await self._generate(
            "exercise_estimate",
            EXERCISE_SCHEMA,
            prompt,
            ExerciseEstimate,
            "Failed to estimate calories burned. Please try again later.",
        )

    async def suggest_meal_adjustments(
        self, meals: list[Meal], remaining_calories: float, next_meal_type: str
    ) -> MealSuggestion:
        """Suggest what to eat next given the day's meals and remaining budget."""
        if remaining_calories < 0:
            return MealSuggestion(suggestions=OVER_TARGET_SUGGESTION)
        if not meals:
            return MealSuggestion(
                suggestions=(
                    f"You have {remaining_calories:.0f} calories remaining. "
                    f"For {next_meal_type}, you could have a balanced meal. "
                    "For example, a piece of grilled fish with roasted vegetables "
                    "and a side of quinoa."
                )
            )
        lines = [
            "You are a nutritional advisor. Review the meals logged today and the "
            "remaining calorie budget, then suggest practical adjustments for the "
            "next meal so the user stays within their daily goal.",
        ]
        if self.cuisine:
            lines.append(f"Keep suggestions in line with {self.cuisine} cuisine.")
        lines.extend(
            [
                "",
                f"Logged meals: {format_logged_meals(meals)}",
                f"Remaining calories: {remaining_calories:.0f}",
                f"Next meal type: {next_meal_type}",
            ]
        )
        return await self._generate(
            "meal_suggestion",
            SUGGESTION_SCHEMA,
            "\n".join(lines),
            MealSuggestion,
            "Failed to get meal suggestions. Please try again later.",
        )

    async def suggest_target(self, settings: UserSettings) -> CalorieTargetSuggestion:
        """Ask the model for a daily calorie target from the user's profile."""
        prompt = (
            "You are an expert nutritionist. Calculate a daily calorie target.\n"
            "1. BMR with the Mifflin-St Jeor equation: "
            "10 * weight + 6.25 * height - 5 * age + 5 for men, "
            "- 161 instead of + 5 for women.\n"
            "2. TDEE = BMR * activity factor (sedentary 1.2, light 1.375, "
            "moderate 1.55, active 1.725, very-active 1.9).\n"
            "3. Subtract 500 kcal to lose weight, add 500 kcal to gain, "
            "keep TDEE to maintain.\n"
            "4. Round to the nearest 10 and explain the calculation in one or "
            "two sentences mentioning BMR, TDEE and the goal adjustment.\n\n"
            f"Height: {settings.height} cm\n"
            f"Weight: {settings.weight} kg\n"
            f"Age: {settings.age} years\n"
            f"Gender: {settings.gender}\n"
            f"Activity level: {settings.activity_level}\n"
            f"Goal: {settings.goal}"
        )
        return await self._generate(
            "calorie_target",
            TARGET_SCHEMA,
            prompt,
            CalorieTargetSuggestion,
            "Failed to calculate a calorie target. Please try again later.",
        )

    async def _generate(  # noqa: PLR0913
        self,
        schema_name: str,
        schema: dict[str, object],
        prompt: str,
        result_type: type[_ModelT],
        failure_message: str,
    ) -> _ModelT:
        try:
            raw = await self.client.generate(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                schema_name=schema_name,
                schema=schema,
                prompt=prompt,
            )
            return result_type.model_validate(raw)
        except Exception as exc:
            logger.exception("Estimation failed", extra={"schema_name": schema_name})
            raise EstimationError(failure_message) from exc


def format_logged_meals(meals: list[Meal]) -> str:
    """Render meals as `<type> - <name>: <calories> kcal` joined by `; `."""
    return "; ".join(
        f"{meal.type} - {meal.name}: {meal.calories:g} kcal" for meal in meals
    )
