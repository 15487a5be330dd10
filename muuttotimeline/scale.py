"""Projection between calendar days and horizontal canvas pixels.

The timeline only works in whole days. ``to_x`` places a day on the canvas and
``to_date`` is its inverse, rounding to the nearest day. The rounding in
``to_date`` is what makes a dragged task snap to a day.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
import math

from .constants import DEFAULT_PX_PER_DAY, RANGE_PADDING_DAYS, ZOOM_MAX, ZOOM_MIN, ZOOM_STEP
from .model import parse_day


def _as_day(value: date) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


@dataclass(frozen=True)
class TimelineRange:
    start: date
    end: date

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", _as_day(self.start))
        object.__setattr__(self, "end", _as_day(self.end))
        if self.start > self.end:
            raise ValueError(f"Range start {self.start} is after end {self.end}")

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1

    def contains(self, day: date) -> bool:
        return self.start <= _as_day(day) <= self.end

    def width(self, px_per_day: float) -> float:
        return to_x(self.end, self, px_per_day)


def check_px_per_day(px_per_day: float) -> float:
    value = float(px_per_day)
    if not math.isfinite(value) or value <= 0:
        raise ValueError(f"px_per_day must be a positive number, got {px_per_day!r}")
    return value


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def days_between(start: date, day: date) -> int:
    return (_as_day(day) - _as_day(start)).days


def to_x(day: date, timeline_range: TimelineRange, px_per_day: float) -> float:
    px_per_day = check_px_per_day(px_per_day)
    return days_between(timeline_range.start, day) * px_per_day


def to_date(pixels: float, timeline_range: TimelineRange, px_per_day: float) -> date:
    px_per_day = check_px_per_day(px_per_day)
    return timeline_range.start + timedelta(days=round_half_up(pixels / px_per_day))


def compute_range(
    items,
    anchor_date: date | None = None,
    padding_days: int = RANGE_PADDING_DAYS,
    today: date | None = None,
) -> TimelineRange:
    days = [day for day in (parse_day(item.due_date) for item in items) if day is not None]
    anchor = parse_day(anchor_date)
    if anchor is not None:
        days.append(anchor)
    if not days:
        days.append(today or date.today())
    padding = timedelta(days=max(0, int(padding_days)))
    return TimelineRange(min(days) - padding, max(days) + padding)


def clamp_zoom(value: float) -> int:
    try:
        zoom = int(round(float(value)))
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_PX_PER_DAY
    return max(ZOOM_MIN, min(ZOOM_MAX, zoom))


def zoom_in(value: float) -> int:
    return clamp_zoom(clamp_zoom(value) + ZOOM_STEP)


def zoom_out(value: float) -> int:
    return clamp_zoom(clamp_zoom(value) - ZOOM_STEP)
