"""User settings service."""

from dataclasses import dataclass
from typing import Protocol

from calorie_tracker.domain.estimates import CalorieTargetSuggestion
from calorie_tracker.domain.settings import DEFAULT_USER_SETTINGS, UserSettings


class UserSettingsRepository(Protocol):
    """Persistence interface for the settings record."""

    def get_settings(self) -> UserSettings | None:
        """Return the stored settings, if any."""

    def create_settings(self, settings: UserSettings) -> None:
        """Insert the settings record."""

    def update_settings(self, settings: UserSettings) -> None:
        """Replace every field of the settings record."""


class CalorieTargetEstimator(Protocol):
    """Interface for deriving a calorie target from a profile."""

    async def suggest_target(self, settings: UserSettings) -> CalorieTargetSuggestion:
        """Return a suggested daily target with an explanation."""


@dataclass
class UserSettingsService:
    """Service for the user's biometric settings."""

    repository: UserSettingsRepository
    estimator: CalorieTargetEstimator

    def load(self) -> UserSettings:
        """Return stored settings, creating the zeroed defaults if absent."""
        existing = self.repository.get_settings()
        if existing is not None:
            return existing
        self.repository.create_settings(DEFAULT_USER_SETTINGS)
        return DEFAULT_USER_SETTINGS

    def save(self, settings: UserSettings) -> None:
        """Replace the stored settings with a complete record."""
        if self.repository.get_settings() is None:
            self.repository.create_settings(settings)
            return
        self.repository.update_settings(settings)

    async def suggest_target(self, settings: UserSettings) -> CalorieTargetSuggestion:
        """Return the estimator's target; its EstimationError propagates."""
        return await self.estimator.suggest_target(settings)
