"""Read-only report queries over the daily history."""

import math
from dataclasses import dataclass
from datetime import date

from calorie_tracker.domain.logs import DailyLog, History
from calorie_tracker.domain.stats import DailySummary
from calorie_tracker.services.stats import summarize_day


@dataclass(frozen=True)
class Page:
    """A window of items from a longer list."""

    items: list[str]
    page: int
    total_pages: int
    total: int


@dataclass(frozen=True)
class DayReport:
    """A daily log with its derived totals."""

    date: str
    log: DailyLog
    summary: DailySummary


@dataclass(frozen=True)
class Report:
    """A page of day reports."""

    days: list[DayReport]
    page: int
    total_pages: int
    total: int


def sorted_dates(history: History) -> list[str]:
    """Return history dates, newest first."""
    return sorted(history, key=date.fromisoformat, reverse=True)


def filter_by_date(history: History, day: str) -> History:
    """Return the history restricted to a single date."""
    if day not in history:
        return {}
    return {day: history[day]}


def paginate(dates: list[str], page_size: int, page_number: int) -> Page:
    """Return one 1-indexed page, clamping the page number into range."""
    if page_size < 1:
        raise ValueError("page_size must be positive")
    total = len(dates)
    total_pages = math.ceil(total / page_size)
    page = min(max(page_number, 1), max(total_pages, 1))
    start = (page - 1) * page_size
    return Page(
        items=dates[start : start + page_size],
        page=page,
        total_pages=total_pages,
        total=total,
    )


def build_report(
    history: History, day: str | None = None, page: int = 1, page_size: int = 10
) -> Report:
    """Return paginated day reports, optionally for a single date."""
    selected = filter_by_date(history, day) if day else history
    window = paginate(sorted_dates(selected), page_size, page)
    return Report(
        days=[
            DayReport(
                date=item,
                log=selected[item],
                summary=summarize_day(selected[item]),
            )
            for item in window.items
        ],
        page=window.page,
        total_pages=window.total_pages,
        total=window.total,
    )
