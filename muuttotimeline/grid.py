from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta

from .constants import MONTH_NAMES_DE
from .scale import TimelineRange, check_px_per_day


@dataclass(frozen=True)
class GridTick:
    day: date
    x: float
    is_weekend: bool
    is_move_day: bool
    is_today: bool
    is_first_of_month: bool
    week_label: str | None = None
    month_label: str | None = None
    move_label: str | None = None
    today_label: str | None = None


def month_label(day: date) -> str:
    return f"{MONTH_NAMES_DE[day.month - 1]} {day.year}"


def short_label(day: date) -> str:
    return day.strftime("%d.%m")


def grid_ticks(
    timeline_range: TimelineRange,
    px_per_day: float,
    move_date: date | None = None,
    today: date | None = None,
) -> list[GridTick]:
    px_per_day = check_px_per_day(px_per_day)
    today = today or date.today()
    ticks = []
    for index in range(timeline_range.days):
        day = timeline_range.start + timedelta(days=index)
        is_move_day = move_date is not None and day == move_date
        is_today = day == today
        is_first = day.day == 1
        ticks.append(
            GridTick(
                day=day,
                x=index * px_per_day,
                is_weekend=day.weekday() >= 5,
                is_move_day=is_move_day,
                is_today=is_today,
                is_first_of_month=is_first,
                week_label=short_label(day) if index % 7 == 0 else None,
                month_label=month_label(day) if is_first else None,
                move_label=f"Umzugstag {day.strftime('%d.%m.%Y')}" if is_move_day else None,
                today_label=f"Heute {short_label(day)}" if is_today else None,
            )
        )
    return ticks
