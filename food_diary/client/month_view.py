# -*- coding: utf-8 -*-
"""Client — month calendar view-model.

Pure date arithmetic: a fixed 6 x 7 grid, weeks starting on Sunday, with the
records of each day attached. Records are the dicts returned by the API.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Dict, Iterable, List, Optional, Tuple

WEEKS_PER_GRID = 6
DAYS_PER_WEEK = 7
MAX_INDICATORS = 3

WEEKDAY_LABELS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

MEAL_COLORS: Dict[str, str] = {
    "breakfast": "#ff9500",
    "lunch": "#007aff",
    "dinner": "#5856d6",
    "snack": "#ff3b30",
}
DEFAULT_MEAL_COLOR = "#007aff"

_sunday_first = calendar.Calendar(firstweekday=calendar.SUNDAY)


def meal_color(meal_type: str) -> str:
    return MEAL_COLORS.get(meal_type, DEFAULT_MEAL_COLOR)


@dataclass
class CalendarDay:
    date: date
    records: List[Dict[str, Any]] = field(default_factory=list)
    is_current_month: bool = False
    is_today: bool = False
    is_selected: bool = False

    @property
    def indicators(self) -> List[Dict[str, Any]]:
        return self.records[:MAX_INDICATORS]

    @property
    def overflow(self) -> int:
        """Number of records beyond the visible indicators (rendered as ``+N``)."""
        return max(0, len(self.records) - MAX_INDICATORS)


def month_key(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def month_title(year: int, month: int) -> str:
    return f"{calendar.month_name[month]} {year}"


def grid_start(year: int, month: int) -> date:
    """The Sunday on or before the first of the month."""
    return next(iter(_sunday_first.itermonthdates(year, month)))


def records_for_date(records: Iterable[Dict[str, Any]], day: date) -> List[Dict[str, Any]]:
    key = day.isoformat()
    return [r for r in records if r.get("date") == key]


def build_month_grid(
    year: int,
    month: int,
    records: Iterable[Dict[str, Any]] = (),
    *,
    selected: Optional[date] = None,
    today: Optional[date] = None,
) -> List[List[CalendarDay]]:
    today = today or date.today()
    by_date: Dict[str, List[Dict[str, Any]]] = {}
    for record in records:
        by_date.setdefault(str(record.get("date") or ""), []).append(record)

    start = grid_start(year, month)
    weeks: List[List[CalendarDay]] = []
    for week in range(WEEKS_PER_GRID):
        days: List[CalendarDay] = []
        for offset in range(DAYS_PER_WEEK):
            day = start + timedelta(days=week * DAYS_PER_WEEK + offset)
            days.append(
                CalendarDay(
                    date=day,
                    records=by_date.get(day.isoformat(), []),
                    is_current_month=day.month == month,
                    is_today=day == today,
                    is_selected=selected is not None and day == selected,
                )
            )
        weeks.append(days)
    return weeks
