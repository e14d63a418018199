"""Tests for local history migration."""

import json

from calorie_tracker.adapters.local_store import InMemoryLocalStore
from calorie_tracker.domain.logs import DailyLog, Meal
from calorie_tracker.services.history import HistoryService
from calorie_tracker.services.migration import (
    HISTORY_KEY,
    LEGACY_MEALS_KEY,
    LEGACY_TARGET_KEY,
    EmptyHistory,
    HistoryMigrator,
    LegacyHistory,
    StructuredHistory,
    decode_legacy,
    decode_structured,
    encode_history,
    import_local_history,
    parse_stored_history,
)
from tests.conftest import InMemoryHistoryRepository

TODAY = "2024-03-01"
LEGACY_MEALS = [
    {"id": "1", "type": "Breakfast", "name": "Eggs", "calories": 200},
    {"id": "2", "type": "Lunch", "name": "Wrap", "calories": 550},
]


def _legacy_store() -> InMemoryLocalStore:
    return InMemoryLocalStore(
        {
            LEGACY_MEALS_KEY: json.dumps(LEGACY_MEALS),
            LEGACY_TARGET_KEY: "1800",
        }
    )


def test_legacy_storage_migrates_to_today() -> None:
    store = _legacy_store()

    history = HistoryMigrator(store).load(TODAY)

    assert list(history) == [TODAY]
    log = history[TODAY]
    assert [meal.name for meal in log.meals] == ["Eggs", "Wrap"]
    assert log.calorie_target == 1800
    assert log.activities == []
    assert LEGACY_MEALS_KEY not in store.entries
    assert LEGACY_TARGET_KEY not in store.entries
    assert HISTORY_KEY in store.entries


def test_legacy_migration_runs_once() -> None:
    store = _legacy_store()
    migrator = HistoryMigrator(store)
    migrator.load(TODAY)

    assert isinstance(parse_stored_history(store), StructuredHistory)
    history = migrator.load("2024-03-02")

    assert list(history) == [TODAY]


def test_structured_history_without_activities() -> None:
    raw = json.dumps(
        {
            "2024-02-01": {
                "meals": [{"id": "x", "type": "Snack", "name": "Nuts", "calories": 180}],
                "calorieTarget": 1900,
            },
            "2024-02-02": {
                "meals": [],
                "activities": [{"id": "a", "name": "Swim", "caloriesBurned": 400}],
                "calorieTarget": 2100,
                "weight": 68.2,
            },
        }
    )

    history = decode_structured(raw)

    assert history["2024-02-01"].activities == []
    assert history["2024-02-02"].activities[0].calories_burned == 400
    assert history["2024-02-02"].weight == 68.2


def test_structured_history_takes_precedence_over_legacy() -> None:
    store = _legacy_store()
    store.set(HISTORY_KEY, json.dumps({"2024-02-01": {"meals": []}}))

    history = HistoryMigrator(store).load(TODAY)

    assert list(history) == ["2024-02-01"]
    assert history["2024-02-01"].calorie_target == 2000
    assert LEGACY_MEALS_KEY not in store.entries


def test_corrupt_legacy_storage_falls_back_to_seeded_today() -> None:
    store = InMemoryLocalStore({LEGACY_MEALS_KEY: "{not json", LEGACY_TARGET_KEY: "x"})

    stored = parse_stored_history(store)
    history = HistoryMigrator(store, default_target=2000).load(TODAY)

    assert isinstance(stored, EmptyHistory)
    assert stored.error
    assert history == {TODAY: DailyLog(calorie_target=2000)}
    assert LEGACY_MEALS_KEY not in store.entries


def test_corrupt_structured_falls_back_to_legacy() -> None:
    store = _legacy_store()
    store.set(HISTORY_KEY, "[]")

    assert isinstance(parse_stored_history(store), LegacyHistory)


def test_structured_history_rejects_non_date_keys() -> None:
    store = InMemoryLocalStore({HISTORY_KEY: json.dumps({"today": {"meals": []}})})

    assert isinstance(parse_stored_history(store), EmptyHistory)


def test_empty_store_yields_seeded_today() -> None:
    store = InMemoryLocalStore()

    history = HistoryMigrator(store, default_target=2500).load(TODAY)

    assert history == {TODAY: DailyLog(calorie_target=2500)}


def test_decode_legacy_without_target() -> None:
    legacy = decode_legacy(json.dumps(LEGACY_MEALS), None)

    assert legacy.calorie_target is None
    assert legacy.meals[0] == Meal(id="1", type="Breakfast", name="Eggs", calories=200)


def test_encoded_history_decodes_to_same_logs() -> None:
    history = {
        "2024-02-01": DailyLog(
            meals=[Meal(id="m", type="Dinner", name="Dal", calories=420)],
            calorie_target=1750,
            weight=64.0,
        )
    }

    encoded = encode_history(history)

    assert '"calorieTarget"' in encoded
    assert decode_structured(encoded) == history


def test_import_local_history_into_store() -> None:
    repository = InMemoryHistoryRepository()
    service = HistoryService(repository)
    migrator = HistoryMigrator(_legacy_store())

    written = import_local_history(migrator, service)
    again = import_local_history(migrator, service)

    assert written == 3
    assert again == 0
    log = service.get_log(service.today())
    assert log is not None
    assert log.calorie_target == 1800
    assert [meal.id for meal in log.meals] == ["1", "2"]


def test_legacy_target_survives_import_after_today_exists() -> None:
    repository = InMemoryHistoryRepository()
    service = HistoryService(repository)
    service.get_history()
    store = _legacy_store()

    import_local_history(HistoryMigrator(store), service)

    log = service.get_log(service.today())
    assert log is not None
    assert log.calorie_target == 1800
    assert [meal.name for meal in log.meals] == ["Eggs", "Wrap"]
    assert LEGACY_TARGET_KEY not in store.entries


def test_structured_records_without_ids_import_once() -> None:
    repository = InMemoryHistoryRepository()
    service = HistoryService(repository)
    store = InMemoryLocalStore(
        {
            HISTORY_KEY: json.dumps(
                {
                    "2024-02-01": {
                        "meals": [
                            {"type": "Lunch", "name": "Wrap", "calories": 550},
                            {"type": "Dinner", "name": "Dal", "calories": 420},
                        ],
                        "activities": [{"name": "Swim", "caloriesBurned": 400}],
                    }
                }
            )
        }
    )
    migrator = HistoryMigrator(store)

    first = import_local_history(migrator, service)
    second = import_local_history(migrator, service)

    assert second == 0
    assert first == 4
    assert len(repository.meals) == 2
    assert len(repository.activities) == 1
    ids = [meal.id for _, meal in repository.meals]
    assert ids == sorted(ids)
    assert len(set(ids)) == 2


def test_missing_ids_are_stable_across_decodes() -> None:
    raw = json.dumps(
        [
            {"type": "Breakfast", "name": "Eggs", "calories": 200},
            {"type": "Breakfast", "name": "Eggs", "calories": 200},
        ]
    )

    first = decode_legacy(raw, None)
    second = decode_legacy(raw, None)

    assert [meal.id for meal in first.meals] == [meal.id for meal in second.meals]
    assert first.meals[0].id != first.meals[1].id
