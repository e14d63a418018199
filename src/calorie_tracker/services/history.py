"""Per-date history of meals, activities, targets and weights."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import uuid4
from zoneinfo import ZoneInfo

from calorie_tracker.domain.logs import (
    DEFAULT_CALORIE_TARGET,
    Activity,
    DailyLog,
    DailyMetrics,
    History,
    Meal,
)

logger = logging.getLogger(__name__)


class HistoryRepository(Protocol):
    """Persistence interface for daily metrics, meals and activities."""

    def get_daily_metrics(self, day: str) -> DailyMetrics | None:
        """Return the metrics row for a date, if present."""

    def list_daily_metrics(self) -> list[DailyMetrics]:
        """Return all metrics rows."""

    def create_daily_metrics(
        self, day: str, calorie_target: float, weight: float | None = None
    ) -> None:
        """Insert a metrics row for a date."""

    def update_calorie_target(self, day: str, calorie_target: float) -> None:
        """Overwrite the target for a date."""

    def update_weight(self, day: str, weight: float) -> None:
        """Overwrite the weight for a date."""

    def create_meal(self, day: str, meal: Meal) -> None:
        """Insert a meal for a date."""

    def get_meal(self, meal_id: str) -> Meal | None:
        """Return a meal by id."""

    def list_meals(self, day: str | None = None) -> list[tuple[str, Meal]]:
        """Return (date, meal) pairs in insertion order."""

    def delete_meal(self, meal_id: str) -> bool:
        """Delete a meal, returning False when no row matched."""

    def create_activity(self, day: str, activity: Activity) -> None:
        """Insert an activity for a date."""

    def get_activity(self, activity_id: str) -> Activity | None:
        """Return an activity by id."""

    def list_activities(self, day: str | None = None) -> list[tuple[str, Activity]]:
        """Return (date, activity) pairs in insertion order."""

    def delete_activity(self, activity_id: str) -> bool:
        """Delete an activity, returning False when no row matched."""


@dataclass
class HistoryService:
    """Service that owns the mapping from date to daily log."""

    repository: HistoryRepository
    default_target: float = DEFAULT_CALORIE_TARGET
    timezone: str = "UTC"

    def today(self) -> str:
        """Return today's ISO date in the configured timezone."""
        return datetime.now(tz=ZoneInfo(self.timezone)).date().isoformat()

    def ensure_log(self, day: str) -> None:
        """Create an empty log with the default target if the date has none."""
        if self.repository.get_daily_metrics(day) is None:
            self.repository.create_daily_metrics(day, self.default_target)

    def get_history(self) -> History:
        """Return every daily log, creating today's on first access."""
        self.ensure_log(self.today())
        return _assemble_history(
            self.repository.list_daily_metrics(),
            self.repository.list_meals(),
            self.repository.list_activities(),
            self.default_target,
        )

    def get_log(self, day: str) -> DailyLog | None:
        """Return the log for a date; only today's is created on demand."""
        if day == self.today():
            self.ensure_log(day)
        metrics = self.repository.get_daily_metrics(day)
        if metrics is None:
            return None
        history = _assemble_history(
            [metrics],
            self.repository.list_meals(day),
            self.repository.list_activities(day),
            self.default_target,
        )
        return history[day]

    def add_meal(self, day: str, meal_type: str, name: str, calories: float) -> Meal:
        """Append a new meal to a date and return it."""
        self.ensure_log(day)
        meal = Meal(id=_new_id(), type=meal_type, name=name, calories=calories)
        self.repository.create_meal(day, meal)
        return meal

    def delete_meal(self, meal_id: str) -> None:
        """Delete a meal wherever it is logged.

        Unknown ids are a no-op so that repeated deletes succeed.
        """
        if not self.repository.delete_meal(meal_id):
            logger.debug("Meal not found, nothing deleted", extra={"meal_id": meal_id})

    def add_activity(self, day: str, name: str, calories_burned: float) -> Activity:
        """Append a new activity to a date and return it."""
        self.ensure_log(day)
        activity = Activity(id=_new_id(), name=name, calories_burned=calories_burned)
        self.repository.create_activity(day, activity)
        return activity

    def delete_activity(self, activity_id: str) -> None:
        """Delete an activity wherever it is logged; unknown ids are a no-op."""
        if not self.repository.delete_activity(activity_id):
            logger.debug(
                "Activity not found, nothing deleted",
                extra={"activity_id": activity_id},
            )

    def set_target(self, day: str, calorie_target: float) -> None:
        """Overwrite the calorie target for a date."""
        self.ensure_log(day)
        self.repository.update_calorie_target(day, calorie_target)

    def log_weight(self, day: str, weight: float) -> None:
        """Record the weight sample for a date, replacing any previous one."""
        self.ensure_log(day)
        self.repository.update_weight(day, weight)

    def import_history(self, history: History) -> int:
        """Persist a history, skipping meal and activity ids that already exist.

        An existing date takes the imported target, and the imported weight
        when one was logged. Returns the number of records written or changed.
        """
        written = 0
        for day, log in history.items():
            metrics = self.repository.get_daily_metrics(day)
            if metrics is None:
                self.repository.create_daily_metrics(
                    day, log.calorie_target, log.weight
                )
                written += 1
            else:
                written += self._merge_metrics(metrics, log)
            for meal in log.meals:
                if self.repository.get_meal(meal.id) is None:
                    self.repository.create_meal(day, meal)
                    written += 1
            for activity in log.activities:
                if self.repository.get_activity(activity.id) is None:
                    self.repository.create_activity(day, activity)
                    written += 1
        logger.info("Imported history records", extra={"written": written})
        return written

    def _merge_metrics(self, metrics: DailyMetrics, log: DailyLog) -> int:
        changed = 0
        if metrics.calorie_target != log.calorie_target:
            self.repository.update_calorie_target(metrics.date, log.calorie_target)
            changed += 1
        if log.weight is not None and metrics.weight != log.weight:
            self.repository.update_weight(metrics.date, log.weight)
            changed += 1
        return changed


def _assemble_history(
    metrics: list[DailyMetrics],
    meals: list[tuple[str, Meal]],
    activities: list[tuple[str, Activity]],
    default_target: float,
) -> History:
    history: History = {}
    for row in metrics:
        history[row.date] = DailyLog(
            calorie_target=(
                row.calorie_target
                if row.calorie_target is not None
                else default_target
            ),
            weight=row.weight,
        )
    # Records for dates without a metrics row are not shown.
    for day, meal in meals:
        if day in history:
            history[day].meals.append(meal)
    for day, activity in activities:
        if day in history:
            history[day].activities.append(activity)
    return history


def _new_id() -> str:
    timestamp = datetime.now(tz=UTC).isoformat(timespec="milliseconds")
    return f"{timestamp}-{uuid4().hex[:8]}"
