"""Drag-to-reschedule gesture for timeline items.

The controller is a small state machine fed by pointer events in canvas
coordinates. While dragging it only tracks the horizontal offset; the due date
is resolved and handed to the persistence callback once, on release. A session
never outlives its gesture: release, cancel and focus loss all return the
controller to idle before anything else runs.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
import logging
from typing import Callable

from PyQt6.QtCore import QObject, pyqtSignal

from .constants import CLICK_DRAG_THRESHOLD
from .pointer import PointerEvent, PointerKind
from .scale import to_date, to_x

logger = logging.getLogger(__name__)


class DragState(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


@dataclass
class DragSession:
    item_id: str
    origin_x: float
    origin_due_date: date
    current_delta_x: float = 0.0
    max_abs_delta: float = 0.0


class DragController(QObject):
    drag_started = pyqtSignal(str)
    drag_moved = pyqtSignal(str, float)
    drag_committed = pyqtSignal(str, object)
    drag_cancelled = pyqtSignal(str)
    drag_ended = pyqtSignal(str)
    edit_requested = pyqtSignal(str)

    def __init__(
        self,
        layout,
        update_due_date: Callable[[str, date], object],
        on_item_double_click: Callable[[str], object] | None = None,
        click_threshold: float = CLICK_DRAG_THRESHOLD,
    ) -> None:
        super().__init__()
        self.layout = layout
        self.update_due_date = update_due_date
        self.on_item_double_click = on_item_double_click
        self.click_threshold = float(click_threshold)
        self.session: DragSession | None = None
        self._sources = []

    @property
    def state(self) -> DragState:
        return DragState.IDLE if self.session is None else DragState.DRAGGING

    def is_dragging(self, item_id: str | None = None) -> bool:
        if self.session is None:
            return False
        return item_id is None or self.session.item_id == item_id

    def attach(self, source) -> None:
        source.pointer_event.connect(self.handle_event)
        self._sources.append(source)

    def detach(self, source) -> None:
        if source not in self._sources:
            return
        source.pointer_event.disconnect(self.handle_event)
        self._sources.remove(source)

    def handle_event(self, event: PointerEvent) -> None:
        if event.kind == PointerKind.PRESS:
            self.pointer_down(event.item_id, event.x)
        elif event.kind == PointerKind.MOVE:
            self.pointer_move(event.x)
        elif event.kind == PointerKind.RELEASE:
            self.pointer_up(event.x)
        elif event.kind == PointerKind.CANCEL:
            self.cancel()
        elif event.kind == PointerKind.DOUBLE_CLICK:
            self.double_click(event.item_id)

    def pointer_down(self, item_id: str | None, x: float) -> bool:
        if self.session is not None:
            logger.debug("Ignoring press on %s while %s is dragged", item_id, self.session.item_id)
            return False
        if item_id is None:
            return False
        item = self.layout.item_map.get(item_id)
        if item is None or item.completed:
            return False
        self.session = DragSession(
            item_id=item_id,
            origin_x=float(x),
            origin_due_date=item.effective_date,
        )
        logger.debug("Drag started on %s at x=%.1f", item_id, x)
        self.drag_started.emit(item_id)
        return True

    def pointer_move(self, x: float) -> None:
        session = self.session
        if session is None:
            return
        session.current_delta_x = float(x) - session.origin_x
        session.max_abs_delta = max(session.max_abs_delta, abs(session.current_delta_x))
        self.drag_moved.emit(session.item_id, session.current_delta_x)

    def pointer_up(self, x: float | None = None) -> date | None:
        if self.session is None:
            return None
        if x is not None:
            self.pointer_move(x)
        session = self.session
        self.session = None
        self.drag_ended.emit(session.item_id)
        if session.max_abs_delta < self.click_threshold:
            logger.debug("Release on %s treated as click", session.item_id)
            return None
        new_date = self.resolve_date(session)
        if new_date == session.origin_due_date:
            logger.debug("Drag on %s ended on its original day", session.item_id)
            return None
        logger.info("Rescheduling %s from %s to %s", session.item_id, session.origin_due_date, new_date)
        self.drag_committed.emit(session.item_id, new_date)
        # Not awaited; the data layer reconciles failures on its next refresh.
        self.update_due_date(session.item_id, new_date)
        return new_date

    def cancel(self) -> None:
        session = self.session
        if session is None:
            return
        self.session = None
        logger.debug("Drag on %s cancelled", session.item_id)
        self.drag_cancelled.emit(session.item_id)
        self.drag_ended.emit(session.item_id)

    def double_click(self, item_id: str | None) -> bool:
        if self.session is not None or item_id is None:
            return False
        if item_id not in self.layout.item_map:
            return False
        self.edit_requested.emit(item_id)
        if self.on_item_double_click is not None:
            self.on_item_double_click(item_id)
        return True

    def resolve_date(self, session: DragSession) -> date:
        layout = self.layout
        origin_x = to_x(session.origin_due_date, layout.range, layout.px_per_day)
        return to_date(origin_x + session.current_delta_x, layout.range, layout.px_per_day)

    def preview_x(self, item_id: str, base_x: float) -> float:
        session = self.session
        if session is None or session.item_id != item_id:
            return base_x
        return base_x + session.current_delta_x
