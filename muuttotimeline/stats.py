from __future__ import annotations

from dataclasses import dataclass

from .constants import (
    COMPLETED_COLOR,
    OVERDUE_COLOR,
    PHASE_COLORS,
    PRIORITY_COLORS,
)

LEGEND = (
    ("Kritisch", PRIORITY_COLORS["kritisch"]),
    ("Hoch", PRIORITY_COLORS["hoch"]),
    ("Mittel", PRIORITY_COLORS["mittel"]),
    ("Niedrig", PRIORITY_COLORS["niedrig"]),
    ("Erledigt", COMPLETED_COLOR),
)


def item_color(item) -> str:
    if item.completed:
        return COMPLETED_COLOR
    if item.is_overdue:
        return OVERDUE_COLOR
    color = PRIORITY_COLORS.get(item.priority)
    if color is None:
        color = PHASE_COLORS.get(getattr(item, "phase", ""), PRIORITY_COLORS["mittel"])
    return color


@dataclass(frozen=True)
class TimelineStats:
    total: int
    completed: int
    overdue: int

    @property
    def percent_completed(self) -> int:
        if not self.total:
            return 0
        return int(round(self.completed * 100 / self.total))

    @staticmethod
    def from_items(items) -> "TimelineStats":
        items = list(items)
        return TimelineStats(
            total=len(items),
            completed=sum(1 for item in items if item.completed),
            overdue=sum(1 for item in items if item.is_overdue and not item.completed),
        )

    def summary(self) -> str:
        return (
            f"Gesamt Aufgaben: {self.total}  |  "
            f"Erledigt: {self.completed} ({self.percent_completed}%)  |  "
            f"Überfällig: {self.overdue}"
        )
