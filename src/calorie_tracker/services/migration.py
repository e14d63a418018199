"""Migration of browser-stored history into the server store.

Older clients kept a flat meal list and a single target under separate keys;
later ones kept a JSON map from date to daily log. Both shapes are decoded
here into a History, and the store is rewritten in the per-date shape so the
legacy branch runs at most once.
"""

import hashlib
import logging
from dataclasses import dataclass
from datetime import date
from typing import Literal, Protocol
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from calorie_tracker.domain.logs import (
    DEFAULT_CALORIE_TARGET,
    Activity,
    DailyLog,
    History,
    Meal,
)
from calorie_tracker.services.history import HistoryService

logger = logging.getLogger(__name__)

HISTORY_KEY = "calorieHistory"
LEGACY_MEALS_KEY = "meals"
LEGACY_TARGET_KEY = "target"


class LocalStore(Protocol):
    """Key-value store holding string blobs, like browser local storage."""

    def get(self, key: str) -> str | None:
        """Return the raw value for a key, if present."""

    def set(self, key: str, value: str) -> None:
        """Store a raw value under a key."""

    def remove(self, key: str) -> None:
        """Remove a key if present."""


class _StoredMeal(BaseModel):
    id: str | None = None
    type: Literal["Breakfast", "Lunch", "Dinner", "Snack"]
    name: str = Field(min_length=1)
    calories: float = Field(ge=0)


class _StoredActivity(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str | None = None
    name: str = Field(min_length=1)
    calories_burned: float = Field(alias="caloriesBurned", ge=0)


class _StoredDailyLog(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    meals: list[_StoredMeal] = Field(default_factory=list)
    activities: list[_StoredActivity] | None = None
    calorie_target: float = Field(
        alias="calorieTarget", default=DEFAULT_CALORIE_TARGET, ge=0
    )
    weight: float | None = Field(default=None, gt=0)


_HISTORY_ADAPTER = TypeAdapter(dict[str, _StoredDailyLog])
_MEALS_ADAPTER = TypeAdapter(list[_StoredMeal])
_TARGET_ADAPTER = TypeAdapter(float)


@dataclass(frozen=True)
class StructuredHistory:
    """Stored per-date history."""

    history: History


@dataclass(frozen=True)
class LegacyHistory:
    """Stored flat meal list with a single target."""

    meals: list[Meal]
    calorie_target: float | None


@dataclass(frozen=True)
class EmptyHistory:
    """Nothing usable was stored; `error` is set when decoding failed."""

    error: str | None = None


StoredHistory = StructuredHistory | LegacyHistory | EmptyHistory


def decode_structured(raw: str) -> History:
    """Decode a per-date history blob; raises ValueError when malformed."""
    stored = _HISTORY_ADAPTER.validate_json(raw)
    for day in stored:
        date.fromisoformat(day)
    return {day: _to_daily_log(day, log) for day, log in stored.items()}


def decode_legacy(meals_raw: str | None, target_raw: str | None) -> LegacyHistory:
    """Decode legacy meal and target blobs; raises ValueError when malformed."""
    meals = _MEALS_ADAPTER.validate_json(meals_raw) if meals_raw is not None else []
    target = _TARGET_ADAPTER.validate_json(target_raw) if target_raw else None
    return LegacyHistory(
        meals=[_to_meal("legacy", index, meal) for index, meal in enumerate(meals)],
        calorie_target=target,
    )


def encode_history(history: History) -> str:
    """Encode a history in the per-date blob format."""
    stored = {
        day: _StoredDailyLog(
            meals=[
                _StoredMeal(
                    id=meal.id, type=meal.type, name=meal.name, calories=meal.calories
                )
                for meal in log.meals
            ],
            activities=[
                _StoredActivity(
                    id=activity.id,
                    name=activity.name,
                    calories_burned=activity.calories_burned,
                )
                for activity in log.activities
            ],
            calorie_target=log.calorie_target,
            weight=log.weight,
        )
        for day, log in history.items()
    }
    return _HISTORY_ADAPTER.dump_json(stored, by_alias=True).decode("utf-8")


def parse_stored_history(store: LocalStore) -> StoredHistory:
    """Decode whichever history shape the store holds."""
    error: str | None = None
    structured_raw = store.get(HISTORY_KEY)
    if structured_raw is not None:
        try:
            return StructuredHistory(history=decode_structured(structured_raw))
        except ValueError as exc:
            logger.warning("Stored history is malformed, trying legacy keys")
            error = str(exc)

    meals_raw = store.get(LEGACY_MEALS_KEY)
    target_raw = store.get(LEGACY_TARGET_KEY)
    if meals_raw is None and target_raw is None:
        return EmptyHistory(error=error)
    try:
        return decode_legacy(meals_raw, target_raw)
    except ValueError as exc:
        logger.warning("Legacy meal storage is malformed, starting empty")
        return EmptyHistory(error=str(exc))


def materialize(stored: StoredHistory, today: str, default_target: float) -> History:
    """Turn a decoded variant into a History."""
    if isinstance(stored, StructuredHistory):
        return stored.history
    if isinstance(stored, LegacyHistory):
        target = (
            stored.calorie_target
            if stored.calorie_target is not None
            else default_target
        )
        return {today: DailyLog(meals=list(stored.meals), calorie_target=target)}
    return {today: DailyLog(calorie_target=default_target)}


@dataclass
class HistoryMigrator:
    """Loads local history and rewrites it in the per-date format."""

    store: LocalStore
    default_target: float = DEFAULT_CALORIE_TARGET

    def load(self, today: str) -> History:
        """Return the stored history, migrating legacy keys on the way."""
        stored = parse_stored_history(self.store)
        history = materialize(stored, today, self.default_target)
        if not isinstance(stored, StructuredHistory):
            self.store.set(HISTORY_KEY, encode_history(history))
        self.store.remove(LEGACY_MEALS_KEY)
        self.store.remove(LEGACY_TARGET_KEY)
        return history


def import_local_history(
    migrator: HistoryMigrator, history_service: HistoryService
) -> int:
    """Load local history and copy it into the server store."""
    history = migrator.load(history_service.today())
    return history_service.import_history(history)


def _record_id(scope: str, index: int, name: str, stored_id: str | None) -> str:
    """Return the stored id, or a stable one derived from position and name."""
    if stored_id:
        return stored_id
    digest = hashlib.sha1(name.encode("utf-8"), usedforsecurity=False).hexdigest()
    return f"{scope}-{index:03d}-{digest[:8]}"


def _to_meal(scope: str, index: int, stored: _StoredMeal) -> Meal:
    return Meal(
        id=_record_id(f"{scope}-meal", index, stored.name, stored.id),
        type=stored.type,
        name=stored.name,
        calories=stored.calories,
    )


def _to_daily_log(day: str, stored: _StoredDailyLog) -> DailyLog:
    return DailyLog(
        meals=[_to_meal(day, index, meal) for index, meal in enumerate(stored.meals)],
        activities=[
            Activity(
                id=_record_id(
                    f"{day}-activity", index, activity.name, activity.id
                ),
                name=activity.name,
                calories_burned=activity.calories_burned,
            )
            for index, activity in enumerate(stored.activities or [])
        ],
        calorie_target=stored.calorie_target,
        weight=stored.weight,
    )
