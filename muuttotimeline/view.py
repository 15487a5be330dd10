from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QPainter
from PyQt6.QtWidgets import QGraphicsView

from .pointer import PointerSource
from .scale import zoom_in, zoom_out


class TimelineView(QGraphicsView):
    zoom_requested = pyqtSignal(int)

    def __init__(self, scene) -> None:
        super().__init__(scene)
        self.pointer_source = PointerSource()
        scene.drag.attach(self.pointer_source)
        self.setRenderHints(self.renderHints() | QPainter.RenderHint.Antialiasing)
        self.setDragMode(QGraphicsView.DragMode.NoDrag)
        self.setAlignment(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignTop)
        self.setViewportUpdateMode(QGraphicsView.ViewportUpdateMode.FullViewportUpdate)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setMouseTracking(True)
        self.viewport().setMouseTracking(True)

    @property
    def drag(self):
        return self.scene().drag

    def mousePressEvent(self, event) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            scene_pos = self.mapToScene(event.position().toPoint())
            item_id = self.scene().item_id_at(scene_pos)
            if item_id is not None:
                self.scene().select_item(item_id)
                self.pointer_source.press(item_id, scene_pos.x())
                if self.drag.is_dragging(item_id):
                    self.viewport().setCursor(Qt.CursorShape.ClosedHandCursor)
                    event.accept()
                    return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event) -> None:
        if self.drag.is_dragging():
            scene_pos = self.mapToScene(event.position().toPoint())
            self.pointer_source.move(scene_pos.x())
            event.accept()
            return
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event) -> None:
        if event.button() == Qt.MouseButton.LeftButton and self.drag.is_dragging():
            scene_pos = self.mapToScene(event.position().toPoint())
            self.viewport().unsetCursor()
            self.pointer_source.release(scene_pos.x())
            event.accept()
            return
        super().mouseReleaseEvent(event)

    def mouseDoubleClickEvent(self, event) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            scene_pos = self.mapToScene(event.position().toPoint())
            item_id = self.scene().item_id_at(scene_pos)
            if item_id is not None:
                self.pointer_source.double_click(item_id, scene_pos.x())
                event.accept()
                return
        super().mouseDoubleClickEvent(event)

    def keyPressEvent(self, event) -> None:
        if event.key() == Qt.Key.Key_Escape and self.drag.is_dragging():
            self.cancel_drag()
            event.accept()
            return
        super().keyPressEvent(event)

    def focusOutEvent(self, event) -> None:
        self.cancel_drag()
        super().focusOutEvent(event)

    def wheelEvent(self, event) -> None:
        if event.modifiers() & Qt.KeyboardModifier.ControlModifier:
            current = self.scene().layout.px_per_day
            delta = event.angleDelta().y()
            zoom = zoom_in(current) if delta > 0 else zoom_out(current)
            self.zoom_requested.emit(zoom)
            event.accept()
            return
        super().wheelEvent(event)

    def cancel_drag(self) -> None:
        if not self.drag.is_dragging():
            return
        self.viewport().unsetCursor()
        self.pointer_source.cancel()
