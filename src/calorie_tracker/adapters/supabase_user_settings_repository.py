"""Supabase repository for user settings."""

from dataclasses import asdict, dataclass

from supabase import Client

from calorie_tracker.domain.settings import UserSettings
from calorie_tracker.services.user_settings import UserSettingsRepository

SETTINGS_ROW_ID = 1


@dataclass
class SupabaseUserSettingsRepository(UserSettingsRepository):
    """Supabase implementation for the single settings row."""

    client: Client

    def get_settings(self) -> UserSettings | None:
        """Return the stored settings row."""
        response = (
            self.client.table("settings")
            .select("height, weight, age, gender, activity_level, goal")
            .eq("id", SETTINGS_ROW_ID)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return UserSettings(
            height=float(row.get("height") or 0.0),
            weight=float(row.get("weight") or 0.0),
            age=float(row.get("age") or 0.0),
            gender=str(row.get("gender") or "male"),
            activity_level=str(row.get("activity_level") or "sedentary"),
            goal=str(row.get("goal") or "maintain"),
        )

    def create_settings(self, settings: UserSettings) -> None:
        """Insert the settings row."""
        response = (
            self.client.table("settings")
            .insert({"id": SETTINGS_ROW_ID, **asdict(settings)})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create settings")

    def update_settings(self, settings: UserSettings) -> None:
        """Overwrite the settings row."""
        self.client.table("settings").update(asdict(settings)).eq(
            "id", SETTINGS_ROW_ID
        ).execute()
