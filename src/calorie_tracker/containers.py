"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from calorie_tracker.adapters.local_store import JsonFileLocalStore
from calorie_tracker.adapters.openai_estimation_client import OpenAIEstimationClient
from calorie_tracker.adapters.supabase_history_repository import (
    SupabaseHistoryRepository,
)
from calorie_tracker.adapters.supabase_user_settings_repository import (
    SupabaseUserSettingsRepository,
)
from calorie_tracker.config import Settings
from calorie_tracker.services.energy import FormulaTargetEstimator
from calorie_tracker.services.estimation import EstimationService
from calorie_tracker.services.history import HistoryService
from calorie_tracker.services.migration import HistoryMigrator
from calorie_tracker.services.user_settings import (
    CalorieTargetEstimator,
    UserSettingsService,
)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    history_service: HistoryService
    user_settings_service: UserSettingsService
    estimation_service: EstimationService
    local_history_migrator: HistoryMigrator | None
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    history_service = HistoryService(
        repository=SupabaseHistoryRepository(supabase_client),
        default_target=resolved_settings.default_calorie_target,
        timezone=resolved_settings.timezone,
    )
    openai_client = OpenAIEstimationClient.create(
        resolved_settings.openai_api_key,
        timeout_seconds=resolved_settings.openai_timeout_seconds,
        max_retries=resolved_settings.openai_max_retries,
    )
    estimation_service = EstimationService(
        client=openai_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
        cuisine=resolved_settings.suggestion_cuisine,
    )
    estimator: CalorieTargetEstimator = (
        FormulaTargetEstimator()
        if resolved_settings.target_estimator == "formula"
        else estimation_service
    )
    user_settings_service = UserSettingsService(
        repository=SupabaseUserSettingsRepository(supabase_client),
        estimator=estimator,
    )
    migrator = None
    if resolved_settings.local_history_path is not None:
        migrator = HistoryMigrator(
            store=JsonFileLocalStore(resolved_settings.local_history_path),
            default_target=resolved_settings.default_calorie_target,
        )

    async def close_resources() -> None:
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        history_service=history_service,
        user_settings_service=user_settings_service,
        estimation_service=estimation_service,
        local_history_migrator=migrator,
        close_resources=close_resources,
    )
