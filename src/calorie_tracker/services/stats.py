"""Daily calorie aggregation and chart series."""

from calorie_tracker.domain.logs import MEAL_TYPES, DailyLog, History
from calorie_tracker.domain.stats import DailySummary, TrendPoint, WeightPoint

TREND_DAYS = 7


def total_consumed(log: DailyLog) -> float:
    """Return the calories eaten across the day's meals."""
    return sum(meal.calories for meal in log.meals)


def total_burned(log: DailyLog) -> float:
    """Return the calories burned across the day's activities."""
    return sum(activity.calories_burned for activity in log.activities)


def summarize_day(log: DailyLog) -> DailySummary:
    """Compute consumed, burned, net and remaining calories for a day.

    Remaining calories go negative once the target is exceeded; the value is
    not clamped. Progress is 0 for a zero target.
    """
    consumed = total_consumed(log)
    burned = total_burned(log)
    net = consumed - burned
    target = log.calorie_target
    progress = (net / target) * 100 if target > 0 else 0
    return DailySummary(
        total_consumed=consumed,
        total_burned=burned,
        net_calories=net,
        remaining_calories=target - net,
        progress_percent=progress,
    )


def weekly_trend(history: History, days: int = TREND_DAYS) -> list[TrendPoint]:
    """Return net calories vs. target for the most recent days, oldest first."""
    recent = sorted(history, reverse=True)[:days]
    points = []
    for day in reversed(recent):
        log = history[day]
        points.append(
            TrendPoint(
                date=day,
                net_calories=summarize_day(log).net_calories,
                calorie_target=log.calorie_target,
            )
        )
    return points


def calories_by_meal_type(history: History) -> dict[str, float]:
    """Return total calories per meal type, omitting empty types."""
    totals: dict[str, float] = dict.fromkeys(MEAL_TYPES, 0)
    for log in history.values():
        for meal in log.meals:
            if meal.type in totals:
                totals[meal.type] += meal.calories
    return {meal_type: value for meal_type, value in totals.items() if value > 0}


def weight_series(history: History) -> list[WeightPoint]:
    """Return logged weights ordered by date."""
    return [
        WeightPoint(date=day, weight=history[day].weight)
        for day in sorted(history)
        if history[day].weight is not None
    ]
