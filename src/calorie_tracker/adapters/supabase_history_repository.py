"""Supabase repository for daily metrics, meals and activities.

Meals and activities are listed by their `created_at` column (default
`now()`), then by id.
"""

from dataclasses import dataclass

from supabase import Client

from calorie_tracker.domain.logs import Activity, DailyMetrics, Meal
from calorie_tracker.services.history import HistoryRepository

_METRICS_COLUMNS = "date, calorie_target, weight"
_MEAL_COLUMNS = "id, type, name, calories, date"
_ACTIVITY_COLUMNS = "id, name, calories_burned, date"


@dataclass
class SupabaseHistoryRepository(HistoryRepository):
    """Supabase implementation for the daily history tables."""

    client: Client

    def get_daily_metrics(self, day: str) -> DailyMetrics | None:
        """Return the metrics row for a date."""
        response = (
            self.client.table("daily_metrics")
            .select(_METRICS_COLUMNS)
            .eq("date", day)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_metrics(response.data[0])

    def list_daily_metrics(self) -> list[DailyMetrics]:
        """Return every metrics row."""
        response = (
            self.client.table("daily_metrics")
            .select(_METRICS_COLUMNS)
            .order("date", desc=False)
            .execute()
        )
        return [_parse_metrics(row) for row in response.data or []]

    def create_daily_metrics(
        self, day: str, calorie_target: float, weight: float | None = None
    ) -> None:
        """Insert a metrics row."""
        response = (
            self.client.table("daily_metrics")
            .insert({"date": day, "calorie_target": calorie_target, "weight": weight})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create daily metrics")

    def update_calorie_target(self, day: str, calorie_target: float) -> None:
        """Update the target for a date."""
        self.client.table("daily_metrics").update(
            {"calorie_target": calorie_target}
        ).eq("date", day).execute()

    def update_weight(self, day: str, weight: float) -> None:
        """Update the weight for a date."""
        self.client.table("daily_metrics").update({"weight": weight}).eq(
            "date", day
        ).execute()

    def create_meal(self, day: str, meal: Meal) -> None:
        """Insert a meal row."""
        response = (
            self.client.table("meals")
            .insert(
                {
                    "id": meal.id,
                    "type": meal.type,
                    "name": meal.name,
                    "calories": meal.calories,
                    "date": day,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal")

    def get_meal(self, meal_id: str) -> Meal | None:
        """Return a meal by id."""
        response = (
            self.client.table("meals")
            .select(_MEAL_COLUMNS)
            .eq("id", meal_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_meal(response.data[0])

    def list_meals(self, day: str | None = None) -> list[tuple[str, Meal]]:
        """Return meals with their dates in insertion order."""
        query = self.client.table("meals").select(_MEAL_COLUMNS)
        if day is not None:
            query = query.eq("date", day)
        response = (
            query.order("created_at", desc=False).order("id", desc=False).execute()
        )
        return [(str(row["date"]), _parse_meal(row)) for row in response.data or []]

    def delete_meal(self, meal_id: str) -> bool:
        """Delete a meal row."""
        response = self.client.table("meals").delete().eq("id", meal_id).execute()
        return bool(response.data)

    def create_activity(self, day: str, activity: Activity) -> None:
        """Insert an activity row."""
        response = (
            self.client.table("activities")
            .insert(
                {
                    "id": activity.id,
                    "name": activity.name,
                    "calories_burned": activity.calories_burned,
                    "date": day,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create activity")

    def get_activity(self, activity_id: str) -> Activity | None:
        """Return an activity by id."""
        response = (
            self.client.table("activities")
            .select(_ACTIVITY_COLUMNS)
            .eq("id", activity_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_activity(response.data[0])

    def list_activities(self, day: str | None = None) -> list[tuple[str, Activity]]:
        """Return activities with their dates in insertion order."""
        query = self.client.table("activities").select(_ACTIVITY_COLUMNS)
        if day is not None:
            query = query.eq("date", day)
        response = (
            query.order("created_at", desc=False).order("id", desc=False).execute()
        )
        return [
            (str(row["date"]), _parse_activity(row)) for row in response.data or []
        ]

    def delete_activity(self, activity_id: str) -> bool:
        """Delete an activity row."""
        response = (
            self.client.table("activities").delete().eq("id", activity_id).execute()
        )
        return bool(response.data)


def _parse_metrics(row: dict[str, object]) -> DailyMetrics:
    target = row.get("calorie_target")
    weight = row.get("weight")
    return DailyMetrics(
        date=str(row["date"]),
        calorie_target=float(target) if target is not None else None,
        weight=float(weight) if weight is not None else None,
    )


def _parse_meal(row: dict[str, object]) -> Meal:
    return Meal(
        id=str(row["id"]),
        type=str(row["type"]),
        name=str(row["name"]),
        calories=float(row["calories"]),
    )


def _parse_activity(row: dict[str, object]) -> Activity:
    return Activity(
        id=str(row["id"]),
        name=str(row["name"]),
        calories_burned=float(row["calories_burned"]),
    )
