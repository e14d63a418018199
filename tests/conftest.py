"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from calorie_tracker.config import Settings
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.estimates import CalorieTargetSuggestion
from calorie_tracker.domain.logs import Activity, DailyMetrics, Meal
from calorie_tracker.domain.settings import UserSettings
from calorie_tracker.services.estimation import EstimationClient, EstimationService
from calorie_tracker.services.history import HistoryRepository, HistoryService
from calorie_tracker.services.user_settings import (
    UserSettingsRepository,
    UserSettingsService,
)


@dataclass
class InMemoryHistoryRepository(HistoryRepository):
    """In-memory history repository for tests."""

    metrics: dict[str, DailyMetrics] = field(default_factory=dict)
    meals: list[tuple[str, Meal]] = field(default_factory=list)
    activities: list[tuple[str, Activity]] = field(default_factory=list)

    def get_daily_metrics(self, day: str) -> DailyMetrics | None:
        return self.metrics.get(day)

    def list_daily_metrics(self) -> list[DailyMetrics]:
        return list(self.metrics.values())

    def create_daily_metrics(
        self, day: str, calorie_target: float, weight: float | None = None
    ) -> None:
        self.metrics[day] = DailyMetrics(
            date=day, calorie_target=calorie_target, weight=weight
        )

    def update_calorie_target(self, day: str, calorie_target: float) -> None:
        current = self.metrics[day]
        self.metrics[day] = DailyMetrics(
            date=day, calorie_target=calorie_target, weight=current.weight
        )

    def update_weight(self, day: str, weight: float) -> None:
        current = self.metrics[day]
        self.metrics[day] = DailyMetrics(
            date=day, calorie_target=current.calorie_target, weight=weight
        )

    def create_meal(self, day: str, meal: Meal) -> None:
        self.meals.append((day, meal))

    def get_meal(self, meal_id: str) -> Meal | None:
        for _, meal in self.meals:
            if meal.id == meal_id:
                return meal
        return None

    def list_meals(self, day: str | None = None) -> list[tuple[str, Meal]]:
        return [entry for entry in self.meals if day is None or entry[0] == day]

    def delete_meal(self, meal_id: str) -> bool:
        before = len(self.meals)
        self.meals = [entry for entry in self.meals if entry[1].id != meal_id]
        return len(self.meals) != before

    def create_activity(self, day: str, activity: Activity) -> None:
        self.activities.append((day, activity))

    def get_activity(self, activity_id: str) -> Activity | None:
        for _, activity in self.activities:
            if activity.id == activity_id:
                return activity
        return None

    def list_activities(self, day: str | None = None) -> list[tuple[str, Activity]]:
        return [entry for entry in self.activities if day is None or entry[0] == day]

    def delete_activity(self, activity_id: str) -> bool:
        before = len(self.activities)
        self.activities = [
            entry for entry in self.activities if entry[1].id != activity_id
        ]
        return len(self.activities) != before


@dataclass
class InMemoryUserSettingsRepository(UserSettingsRepository):
    """In-memory settings repository for tests."""

    settings: UserSettings | None = None
    creates: int = 0

    def get_settings(self) -> UserSettings | None:
        return self.settings

    def create_settings(self, settings: UserSettings) -> None:
        self.creates += 1
        self.settings = settings

    def update_settings(self, settings: UserSettings) -> None:
        self.settings = settings


@dataclass
class FakeEstimationClient(EstimationClient):
    """Fake estimation client returning payloads keyed by schema name."""

    payloads: dict[str, dict[str, object]] = field(
        default_factory=lambda: {
            "calorie_estimate": {"calories": 250},
            "exercise_estimate": {"calories_burned": 300},
            "meal_suggestion": {"suggestions": "Try grilled chicken with salad."},
            "calorie_target": {
                "calorie_target": 2100,
                "explanation": "BMR scaled by activity.",
            },
        }
    )
    error: Exception | None = None
    prompts: list[tuple[str, str]] = field(default_factory=list)

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
        self.prompts.append((schema_name, prompt))
        if self.error is not None:
            raise self.error
        return self.payloads[schema_name]


@dataclass
class FakeTargetEstimator:
    """Target estimator returning a fixed suggestion."""

    suggestion: CalorieTargetSuggestion = field(
        default_factory=lambda: CalorieTargetSuggestion(
            calorie_target=1900, explanation="fixed"
        )
    )
    received: list[UserSettings] = field(default_factory=list)

    async def suggest_target(self, settings: UserSettings) -> CalorieTargetSuggestion:
        self.received.append(settings)
        return self.suggestion


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        openai_api_key="openai-key",
    )


@pytest.fixture
def history_repository() -> InMemoryHistoryRepository:
    return InMemoryHistoryRepository()


@pytest.fixture
def history_service(history_repository: InMemoryHistoryRepository) -> HistoryService:
    return HistoryService(history_repository)


@pytest.fixture
def estimation_client() -> FakeEstimationClient:
    return FakeEstimationClient()


@pytest.fixture
def container(
    settings: Settings,
    history_service: HistoryService,
    estimation_client: FakeEstimationClient,
) -> AppContainer:
    estimation_service = EstimationService(
        client=estimation_client,
        model=settings.openai_model,
        reasoning_effort=settings.openai_reasoning_effort,
        store=settings.openai_store,
    )
    user_settings_service = UserSettingsService(
        repository=InMemoryUserSettingsRepository(),
        estimator=estimation_service,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        history_service=history_service,
        user_settings_service=user_settings_service,
        estimation_service=estimation_service,
        local_history_migrator=None,
        close_resources=close_resources,
    )
