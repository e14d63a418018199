"""Endpoints for daily logs, history and reports."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Query, Request, status

from calorie_tracker.adapters.local_store import InMemoryLocalStore
from calorie_tracker.api.schemas import (  # noqa: TC001
    ActivityCreate,
    HistoryImport,
    MealCreate,
    TargetUpdate,
    WeightUpdate,
)
from calorie_tracker.services.migration import HistoryMigrator, import_local_history
from calorie_tracker.services.reports import build_report, sorted_dates
from calorie_tracker.services.stats import (
    calories_by_meal_type,
    summarize_day,
    weekly_trend,
    weight_series,
)

if TYPE_CHECKING:
    from calorie_tracker.containers import AppContainer
    from calorie_tracker.services.history import HistoryService

router = APIRouter(tags=["history"])


def _history_service(request: Request) -> HistoryService:
    container: AppContainer = request.app.state.container
    return container.history_service


def _day_payload(service: HistoryService, day: str) -> dict[str, object]:
    log = service.get_log(day)
    if log is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return {"date": day, "log": log, "summary": summarize_day(log)}


@router.get("/dashboard")
async def dashboard(request: Request) -> dict[str, object]:
    """Return today's log, its totals and the user's settings."""
    container: AppContainer = request.app.state.container
    service = container.history_service
    payload = _day_payload(service, service.today())
    payload["settings"] = container.user_settings_service.load()
    return payload


@router.get("/history")
async def history(request: Request) -> dict[str, object]:
    """Return every daily log, newest first."""
    entries = _history_service(request).get_history()
    return {
        "days": [
            {"date": day, "log": entries[day], "summary": summarize_day(entries[day])}
            for day in sorted_dates(entries)
        ]
    }


@router.get("/days/{day}")
async def day_detail(day: date, request: Request) -> dict[str, object]:
    """Return one daily log with its totals."""
    return _day_payload(_history_service(request), day.isoformat())


@router.post("/days/{day}/meals", status_code=status.HTTP_201_CREATED)
async def add_meal(day: date, body: MealCreate, request: Request) -> dict[str, object]:
    """Log a meal for a date."""
    service = _history_service(request)
    meal = service.add_meal(day.isoformat(), body.type, body.name, body.calories)
    return {"meal": meal, **_day_payload(service, day.isoformat())}


@router.delete("/meals/{meal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_meal(meal_id: str, request: Request) -> None:
    """Delete a meal; unknown ids succeed without changes."""
    _history_service(request).delete_meal(meal_id)


@router.post("/days/{day}/activities", status_code=status.HTTP_201_CREATED)
async def add_activity(
    day: date, body: ActivityCreate, request: Request
) -> dict[str, object]:
    """Log an activity for a date."""
    service = _history_service(request)
    activity = service.add_activity(day.isoformat(), body.name, body.calories_burned)
    return {"activity": activity, **_day_payload(service, day.isoformat())}


@router.delete("/activities/{activity_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_activity(activity_id: str, request: Request) -> None:
    """Delete an activity; unknown ids succeed without changes."""
    _history_service(request).delete_activity(activity_id)


@router.put("/days/{day}/target")
async def set_target(
    day: date, body: TargetUpdate, request: Request
) -> dict[str, object]:
    """Set the calorie target for a date."""
    service = _history_service(request)
    service.set_target(day.isoformat(), body.calorie_target)
    return _day_payload(service, day.isoformat())


@router.put("/days/{day}/weight")
async def log_weight(
    day: date, body: WeightUpdate, request: Request
) -> dict[str, object]:
    """Record the weight for a date."""
    service = _history_service(request)
    service.log_weight(day.isoformat(), body.weight)
    return _day_payload(service, day.isoformat())


@router.get("/reports")
async def reports(
    request: Request,
    day: date | None = Query(default=None, alias="date"),
    page: int = 1,
    page_size: int | None = Query(default=None, ge=1, le=100),
) -> dict[str, object]:
    """Return a page of day reports, optionally for a single date."""
    container: AppContainer = request.app.state.container
    report = build_report(
        container.history_service.get_history(),
        day=day.isoformat() if day else None,
        page=page,
        page_size=page_size or container.settings.report_page_size,
    )
    return {"report": report}


@router.get("/reports/charts")
async def charts(request: Request) -> dict[str, object]:
    """Return chart series over the whole history."""
    entries = _history_service(request).get_history()
    return {
        "weekly_trend": weekly_trend(entries),
        "calories_by_meal_type": calories_by_meal_type(entries),
        "weight": weight_series(entries),
    }


@router.post("/history/import")
async def import_history(body: HistoryImport, request: Request) -> dict[str, object]:
    """Import a browser local-storage snapshot into the server store.

    The rewritten snapshot is returned so the client can replace its copy.
    """
    container: AppContainer = request.app.state.container
    store = InMemoryLocalStore(dict(body.entries))
    migrator = HistoryMigrator(
        store=store, default_target=container.settings.default_calorie_target
    )
    written = import_local_history(migrator, container.history_service)
    return {"imported": written, "entries": store.entries}
