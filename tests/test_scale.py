from datetime import date, datetime, timedelta

import pytest

from muuttotimeline.model import TimelineItem
from muuttotimeline.scale import (
    TimelineRange,
    clamp_zoom,
    compute_range,
    days_between,
    round_half_up,
    to_date,
    to_x,
    zoom_in,
    zoom_out,
)


def test_to_x_counts_whole_days(winter_range):
    assert to_x(date(2025, 1, 15), winter_range, 20) == 280
    assert to_x(date(2025, 1, 1), winter_range, 20) == 0


def test_to_x_is_negative_before_range_start(winter_range):
    assert to_x(date(2024, 12, 30), winter_range, 10) == -20


def test_days_between_ignores_time_of_day():
    late = datetime(2025, 1, 1, 23, 30)
    early_next = datetime(2025, 1, 2, 0, 15)
    assert days_between(late, early_next) == 1
    assert days_between(date(2025, 1, 1), datetime(2025, 1, 1, 23, 59)) == 0


@pytest.mark.parametrize("px_per_day", [1, 7.5, 20, 33.3, 100])
def test_round_trip_for_every_day_in_range(winter_range, px_per_day):
    for offset in range(winter_range.days):
        day = winter_range.start + timedelta(days=offset)
        assert to_date(to_x(day, winter_range, px_per_day), winter_range, px_per_day) == day


def test_monotonic_projection(winter_range):
    days = [winter_range.start + timedelta(days=offset) for offset in range(winter_range.days)]
    xs = [to_x(day, winter_range, 12.5) for day in days]
    assert all(left < right for left, right in zip(xs, xs[1:]))


def test_to_date_snaps_to_nearest_day(winter_range):
    assert to_date(280 + 9.9, winter_range, 20) == date(2025, 1, 15)
    assert to_date(280 + 10, winter_range, 20) == date(2025, 1, 16)
    assert to_date(280 - 10.1, winter_range, 20) == date(2025, 1, 14)


def test_round_half_up_matches_math_round():
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(-0.5) == 0
    assert round_half_up(-1.6) == -2


@pytest.mark.parametrize("px_per_day", [0, -5, float("nan"), float("inf")])
def test_degenerate_zoom_is_rejected(winter_range, px_per_day):
    with pytest.raises(ValueError):
        to_x(date(2025, 1, 2), winter_range, px_per_day)
    with pytest.raises(ValueError):
        to_date(40, winter_range, px_per_day)


def test_range_rejects_inverted_bounds():
    with pytest.raises(ValueError):
        TimelineRange(date(2025, 2, 1), date(2025, 1, 1))


def test_range_helpers(winter_range):
    assert winter_range.days == 60
    assert winter_range.contains(date(2025, 2, 14))
    assert not winter_range.contains(date(2025, 3, 2))
    assert winter_range.width(10) == 590


def test_compute_range_pads_earliest_and_latest():
    items = [
        TimelineItem(id="a", title="Umzugsfirma buchen", due_date=date(2025, 2, 1)),
        TimelineItem(id="b", title="Schlüsselübergabe", due_date=date(2025, 3, 10)),
        TimelineItem(id="c", title="Ohne Datum"),
    ]
    result = compute_range(items, anchor_date=date(2025, 3, 1))
    assert result == TimelineRange(date(2025, 1, 22), date(2025, 3, 20))


def test_compute_range_includes_anchor_outside_items():
    items = [TimelineItem(id="a", title="x", due_date=date(2025, 2, 1))]
    result = compute_range(items, anchor_date=date(2025, 1, 5), padding_days=3)
    assert result.start == date(2025, 1, 2)
    assert result.end == date(2025, 2, 4)


def test_compute_range_parses_anchor_like_layout():
    items = [TimelineItem(id="a", title="x", due_date=date(2025, 2, 1))]
    from_string = compute_range(items, anchor_date="2025-01-05T12:00:00Z", padding_days=3)
    assert from_string == TimelineRange(date(2025, 1, 2), date(2025, 2, 4))
    from_datetime = compute_range(items, anchor_date=datetime(2025, 1, 5, 23, 0), padding_days=3)
    assert from_datetime == from_string
    assert compute_range(items, anchor_date="bald", padding_days=3) == TimelineRange(
        date(2025, 1, 29), date(2025, 2, 4)
    )


def test_compute_range_without_dates_centres_on_today():
    result = compute_range([], today=date(2025, 6, 1))
    assert result == TimelineRange(date(2025, 5, 22), date(2025, 6, 11))


def test_zoom_steps_are_clamped():
    assert zoom_in(30) == 40
    assert zoom_out(30) == 20
    assert zoom_in(100) == 100
    assert zoom_out(10) == 10
    assert clamp_zoom("55") == 55
    assert clamp_zoom(500) == 100
    assert clamp_zoom("nonsense") == 30
