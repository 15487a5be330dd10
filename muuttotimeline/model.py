from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
import logging

from PyQt6.QtCore import QObject, pyqtSignal

from .constants import (
    DEFAULT_PHASE,
    DEFAULT_PRIORITY,
    PHASES,
    PRIORITIES,
    PRIORITY_ALIASES,
)

logger = logging.getLogger(__name__)


def parse_day(value: object) -> date | None:
    """Coerce a due date from the task store into a calendar day.

    Accepts dates, datetimes (the time part is dropped) and ISO strings with an
    optional time suffix. Anything else yields None.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    if len(text) < 10:
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def to_bool(value, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes")


def normalize_priority(value: object) -> str:
    priority = str(value or DEFAULT_PRIORITY).strip().lower()
    priority = PRIORITY_ALIASES.get(priority, priority)
    if priority not in PRIORITIES:
        return DEFAULT_PRIORITY
    return priority


def normalize_phase(value: object) -> str:
    phase = str(value or DEFAULT_PHASE).strip().lower()
    if phase not in PHASES:
        return DEFAULT_PHASE
    return phase


@dataclass(frozen=True)
class TimelineItem:
    id: str
    title: str
    due_date: date | None = None
    completed: bool = False
    priority: str = DEFAULT_PRIORITY
    is_overdue: bool = False
    phase: str = DEFAULT_PHASE
    description: str = ""
    assignee_name: str | None = None

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "title": self.title,
            "due_date": self.due_date.isoformat() if self.due_date else None,
            "completed": self.completed,
            "priority": self.priority,
            "is_overdue": self.is_overdue,
            "phase": self.phase,
            "description": self.description,
            "assignee_name": self.assignee_name,
        }
        if data["due_date"] is None:
            data.pop("due_date")
        if not self.description:
            data.pop("description")
        if self.assignee_name is None:
            data.pop("assignee_name")
        return data

    @staticmethod
    def from_dict(data: dict) -> "TimelineItem":
        raw_date = data["due_date"] if "due_date" in data else data.get("start")
        due_date = parse_day(raw_date)
        if raw_date not in (None, "") and due_date is None:
            logger.debug("Ignoring unparseable due date %r on item %s", raw_date, data.get("id"))
        return TimelineItem(
            id=str(data["id"]),
            title=str(data.get("title") or ""),
            due_date=due_date,
            completed=to_bool(data.get("completed")),
            priority=normalize_priority(data.get("priority")),
            is_overdue=to_bool(data.get("is_overdue")),
            phase=normalize_phase(data.get("phase")),
            description=str(data.get("description") or ""),
            assignee_name=data.get("assignee_name"),
        )


def compute_overdue(item: TimelineItem, today: date | None = None) -> bool:
    if item.due_date is None or item.completed:
        return False
    today = today or date.today()
    return today > item.due_date


class TimelineModel(QObject):
    items_changed = pyqtSignal()
    anchor_changed = pyqtSignal()

    def __init__(self, anchor_date: date | None = None) -> None:
        super().__init__()
        self.anchor_date = anchor_date
        self.items: list[TimelineItem] = []

    def set_items(self, items) -> None:
        self.items = list(items)
        self.items_changed.emit()

    def set_anchor_date(self, anchor_date: date | None) -> None:
        if self.anchor_date != anchor_date:
            self.anchor_date = anchor_date
            self.anchor_changed.emit()

    def get_item(self, item_id: str) -> TimelineItem | None:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def _replace_item(self, item_id: str, **changes) -> TimelineItem | None:
        for index, item in enumerate(self.items):
            if item.id == item_id:
                updated = replace(item, **changes)
                self.items[index] = updated
                self.items_changed.emit()
                return updated
        return None

    def update_due_date(self, item_id: str, due_date: date | None) -> TimelineItem | None:
        item = self.get_item(item_id)
        if item is None:
            return None
        overdue = compute_overdue(replace(item, due_date=due_date))
        return self._replace_item(item_id, due_date=due_date, is_overdue=overdue)

    def rename_item(self, item_id: str, title: str) -> TimelineItem | None:
        return self._replace_item(item_id, title=title)

    def set_completed(self, item_id: str, completed: bool) -> TimelineItem | None:
        item = self.get_item(item_id)
        if item is None:
            return None
        overdue = compute_overdue(replace(item, completed=completed))
        return self._replace_item(item_id, completed=completed, is_overdue=overdue)
