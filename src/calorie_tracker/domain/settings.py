"""Domain models for the user's biometric profile."""

from dataclasses import dataclass

GENDERS = ("male", "female")
ACTIVITY_LEVELS = ("sedentary", "light", "moderate", "active", "very-active")
GOALS = ("lose", "maintain", "gain")


@dataclass(frozen=True)
class UserSettings:
    """Biometric profile used to derive a calorie target."""

    height: float
    weight: float
    age: float
    gender: str
    activity_level: str
    goal: str


DEFAULT_USER_SETTINGS = UserSettings(
    height=0,
    weight=0,
    age=0,
    gender="male",
    activity_level="sedentary",
    goal="maintain",
)
