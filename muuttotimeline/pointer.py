from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from PyQt6.QtCore import QObject, pyqtSignal


class PointerKind(str, Enum):
    PRESS = "press"
    MOVE = "move"
    RELEASE = "release"
    CANCEL = "cancel"
    DOUBLE_CLICK = "double_click"


@dataclass(frozen=True)
class PointerEvent:
    kind: PointerKind
    x: float = 0.0
    item_id: str | None = None


class PointerSource(QObject):
    """Feeds pointer positions in canvas coordinates to a drag controller.

    The Qt view owns one and forwards mouse input through it; tests drive one
    directly.
    """

    pointer_event = pyqtSignal(object)

    def emit_event(self, event: PointerEvent) -> None:
        self.pointer_event.emit(event)

    def press(self, item_id: str | None, x: float) -> None:
        self.emit_event(PointerEvent(PointerKind.PRESS, x, item_id))

    def move(self, x: float) -> None:
        self.emit_event(PointerEvent(PointerKind.MOVE, x))

    def release(self, x: float) -> None:
        self.emit_event(PointerEvent(PointerKind.RELEASE, x))

    def cancel(self) -> None:
        self.emit_event(PointerEvent(PointerKind.CANCEL))

    def double_click(self, item_id: str | None, x: float = 0.0) -> None:
        self.emit_event(PointerEvent(PointerKind.DOUBLE_CLICK, x, item_id))
