from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import date
from enum import Enum
import logging

from .constants import (
    DEFAULT_PX_PER_DAY,
    ITEM_CHAR_WIDTH,
    ITEM_HEIGHT,
    ITEM_MIN_WIDTH,
    RANGE_PADDING_DAYS,
    ROW_COUNT,
    ROW_HEIGHT,
    ROW_MARGIN,
)
from .model import TimelineItem, parse_day
from .scale import TimelineRange, check_px_per_day, compute_range, to_date, to_x

logger = logging.getLogger(__name__)


class RowPolicy(str, Enum):
    """How positioned items are spread over lanes.

    ROUND_ROBIN cycles through a fixed number of rows in input order and can
    overlap when many items share a narrow window. SWEEP_LINE packs by x and
    opens as many rows as needed so items in one row never overlap.
    """

    ROUND_ROBIN = "round_robin"
    SWEEP_LINE = "sweep_line"


@dataclass(frozen=True)
class LayoutConfig:
    row_count: int = ROW_COUNT
    row_height: float = ROW_HEIGHT
    row_margin: float = ROW_MARGIN
    item_height: float = ITEM_HEIGHT
    min_width: float = ITEM_MIN_WIDTH
    per_char_width: float = ITEM_CHAR_WIDTH


@dataclass(frozen=True)
class PositionedItem:
    id: str
    title: str
    due_date: date | None
    completed: bool
    priority: str
    is_overdue: bool
    phase: str
    description: str
    assignee_name: str | None
    effective_date: date
    anchored: bool
    x: float
    width: float
    row: int
    y: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width


_ITEM_FIELDS = tuple(f.name for f in fields(TimelineItem))


def item_width(title: str, config: LayoutConfig) -> float:
    return max(config.min_width, len(title or "") * config.per_char_width)


def _round_robin_rows(spans: list[tuple[float, float]], row_count: int) -> list[int]:
    row_count = max(1, int(row_count))
    return [index % row_count for index in range(len(spans))]


def _sweep_line_rows(spans: list[tuple[float, float]]) -> list[int]:
    order = sorted(range(len(spans)), key=lambda index: spans[index][0])
    row_ends: list[float] = []
    rows = [0] * len(spans)
    for index in order:
        left, right = spans[index]
        for row, end in enumerate(row_ends):
            if end <= left:
                row_ends[row] = right
                rows[index] = row
                break
        else:
            rows[index] = len(row_ends)
            row_ends.append(right)
    return rows


def layout_items(
    items,
    timeline_range: TimelineRange,
    px_per_day: float,
    show_completed: bool,
    anchor_date: date | None = None,
    row_policy: RowPolicy = RowPolicy.ROUND_ROBIN,
    config: LayoutConfig | None = None,
) -> list[PositionedItem]:
    config = config or LayoutConfig()
    px_per_day = check_px_per_day(px_per_day)
    fallback = parse_day(anchor_date) or timeline_range.start

    visible = [item for item in items if show_completed or not item.completed]
    placed: list[tuple[TimelineItem, date, bool, float, float]] = []
    for item in visible:
        due = parse_day(item.due_date)
        effective = due or fallback
        x = max(0.0, to_x(effective, timeline_range, px_per_day))
        width = item_width(item.title, config)
        placed.append((item, effective, due is None, x, width))

    spans = [(x, x + width) for _, _, _, x, width in placed]
    if row_policy == RowPolicy.SWEEP_LINE:
        rows = _sweep_line_rows(spans)
    else:
        rows = _round_robin_rows(spans, config.row_count)

    result = []
    for (item, effective, anchored, x, width), row in zip(placed, rows):
        values = {name: getattr(item, name) for name in _ITEM_FIELDS}
        result.append(
            PositionedItem(
                **values,
                effective_date=effective,
                anchored=anchored,
                x=x,
                width=width,
                row=row,
                y=row * config.row_height + config.row_margin,
                height=config.item_height,
            )
        )
    return result


class TimelineLayout:
    def __init__(
        self,
        px_per_day: float = DEFAULT_PX_PER_DAY,
        show_completed: bool = False,
        row_policy: RowPolicy = RowPolicy.ROUND_ROBIN,
        config: LayoutConfig | None = None,
        padding_days: int = RANGE_PADDING_DAYS,
    ) -> None:
        self.px_per_day = check_px_per_day(px_per_day)
        self.show_completed = show_completed
        self.row_policy = RowPolicy(row_policy)
        self.config = config or LayoutConfig()
        self.padding_days = padding_days
        self.anchor_date: date | None = None
        self.range = compute_range([], today=date.today(), padding_days=padding_days)
        self._pinned_range: TimelineRange | None = None
        self.items: list[PositionedItem] = []
        self.item_map: dict[str, PositionedItem] = {}

    def pin_range(self, timeline_range: TimelineRange | None) -> None:
        self._pinned_range = timeline_range

    def set_px_per_day(self, px_per_day: float) -> None:
        self.px_per_day = check_px_per_day(px_per_day)

    def rebuild(self, items, anchor_date: date | None = None) -> None:
        items = list(items)
        self.anchor_date = anchor_date
        if self._pinned_range is not None:
            self.range = self._pinned_range
        else:
            self.range = compute_range(items, anchor_date, self.padding_days)
        self.items = layout_items(
            items,
            self.range,
            self.px_per_day,
            self.show_completed,
            anchor_date,
            self.row_policy,
            self.config,
        )
        self.item_map = {item.id: item for item in self.items}
        logger.debug(
            "Laid out %d of %d items over %s..%s at %s px/day",
            len(self.items),
            len(items),
            self.range.start,
            self.range.end,
            self.px_per_day,
        )

    def x_for_date(self, day: date) -> float:
        return to_x(day, self.range, self.px_per_day)

    def date_for_x(self, x: float) -> date:
        return to_date(x, self.range, self.px_per_day)

    def row_count_used(self) -> int:
        if not self.items:
            return 0
        return max(item.row for item in self.items) + 1

    def total_width(self) -> float:
        right = max((item.right for item in self.items), default=0.0)
        return max(self.range.width(self.px_per_day), right)

    def total_height(self) -> float:
        rows = max(self.row_count_used(), self.config.row_count)
        return rows * self.config.row_height + self.config.row_margin

    def item_at(self, x: float, y: float) -> PositionedItem | None:
        for item in reversed(self.items):
            if item.x <= x < item.right and item.y <= y < item.y + item.height:
                return item
        return None
