"""Energy expenditure formulas for calorie targets."""

import math
from dataclasses import dataclass

from calorie_tracker.domain.estimates import CalorieTargetSuggestion
from calorie_tracker.domain.settings import UserSettings

ACTIVITY_FACTORS = {
    "sedentary": 1.2,
    "light": 1.375,
    "moderate": 1.55,
    "active": 1.725,
    "very-active": 1.9,
}
GOAL_ADJUSTMENTS = {"lose": -500, "maintain": 0, "gain": 500}


def basal_metabolic_rate(settings: UserSettings) -> float:
    """Return BMR using the Mifflin-St Jeor equation."""
    base = 10 * settings.weight + 6.25 * settings.height - 5 * settings.age
    return base + 5 if settings.gender == "male" else base - 161


def total_daily_energy(settings: UserSettings) -> float:
    """Return BMR scaled by the activity factor."""
    return basal_metabolic_rate(settings) * ACTIVITY_FACTORS[settings.activity_level]


def calorie_target(settings: UserSettings) -> int:
    """Return the goal-adjusted TDEE rounded half-up to the nearest 10."""
    adjusted = total_daily_energy(settings) + GOAL_ADJUSTMENTS[settings.goal]
    return int(math.floor(adjusted / 10 + 0.5)) * 10


@dataclass
class FormulaTargetEstimator:
    """Target estimator that computes the formula locally."""

    async def suggest_target(self, settings: UserSettings) -> CalorieTargetSuggestion:
        """Return the computed target with a short explanation."""
        bmr = basal_metabolic_rate(settings)
        tdee = total_daily_energy(settings)
        adjustment = GOAL_ADJUSTMENTS[settings.goal]
        if adjustment:
            goal_text = f"{adjustment:+d} kcal to {settings.goal} weight"
        else:
            goal_text = "no adjustment to maintain weight"
        return CalorieTargetSuggestion(
            calorie_target=calorie_target(settings),
            explanation=(
                f"Your BMR is about {bmr:.0f} kcal and your TDEE at a "
                f"{settings.activity_level} activity level is about {tdee:.0f} kcal; "
                f"the target applies {goal_text}, rounded to the nearest 10."
            ),
        )
