"""Endpoints for settings and language-model suggestions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from calorie_tracker.api.schemas import (  # noqa: TC001
    CalorieEstimateRequest,
    ExerciseEstimateRequest,
    MealSuggestionRequest,
    SettingsPayload,
)
from calorie_tracker.services.stats import summarize_day

if TYPE_CHECKING:
    from calorie_tracker.containers import AppContainer

router = APIRouter(tags=["assistant"])


@router.get("/settings")
async def get_settings(request: Request) -> dict[str, object]:
    """Return the stored settings, creating defaults on first access."""
    container: AppContainer = request.app.state.container
    return {"settings": container.user_settings_service.load()}


@router.put("/settings")
async def save_settings(body: SettingsPayload, request: Request) -> dict[str, object]:
    """Replace the stored settings."""
    container: AppContainer = request.app.state.container
    settings = body.to_domain()
    container.user_settings_service.save(settings)
    return {"settings": settings}


@router.post("/settings/suggest-target")
async def suggest_target(body: SettingsPayload, request: Request) -> dict[str, object]:
    """Suggest a daily calorie target for a profile."""
    container: AppContainer = request.app.state.container
    suggestion = await container.user_settings_service.suggest_target(
        body.to_domain()
    )
    return suggestion.model_dump()


@router.post("/estimates/calories")
async def estimate_calories(
    body: CalorieEstimateRequest, request: Request
) -> dict[str, object]:
    """Estimate calories for a food."""
    container: AppContainer = request.app.state.container
    estimate = await container.estimation_service.estimate_calories(body.food_name)
    return estimate.model_dump()


@router.post("/estimates/exercise")
async def estimate_exercise(
    body: ExerciseEstimateRequest, request: Request
) -> dict[str, object]:
    """Estimate calories burned for an exercise."""
    container: AppContainer = request.app.state.container
    estimate = await container.estimation_service.estimate_exercise_calories(
        body.description
    )
    return estimate.model_dump()


@router.post("/suggestions/meal")
async def suggest_meal(
    body: MealSuggestionRequest, request: Request
) -> dict[str, object]:
    """Suggest the next meal from the day's log and remaining calories."""
    container: AppContainer = request.app.state.container
    history_service = container.history_service
    day = body.day.isoformat() if body.day else history_service.today()
    log = history_service.get_log(day)
    meals = log.meals if log else []
    remaining = (
        summarize_day(log).remaining_calories
        if log
        else history_service.default_target
    )
    suggestion = await container.estimation_service.suggest_meal_adjustments(
        meals, remaining, body.next_meal_type
    )
    return suggestion.model_dump()
