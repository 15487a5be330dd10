from __future__ import annotations

from PyQt6.QtCore import QPointF, QRectF, pyqtSignal
from PyQt6.QtWidgets import QGraphicsScene

from .constants import CANVAS_RIGHT_PADDING, DEFAULT_PX_PER_DAY, HEADER_HEIGHT
from .drag import DragController
from .items import GridItem, TaskItem
from .layout import RowPolicy, TimelineLayout
from .stats import TimelineStats


class TimelineScene(QGraphicsScene):
    stats_changed = pyqtSignal(object)

    def __init__(
        self,
        model,
        controller,
        px_per_day: float = DEFAULT_PX_PER_DAY,
        show_completed: bool = False,
        row_policy: RowPolicy = RowPolicy.ROUND_ROBIN,
    ) -> None:
        super().__init__()
        self.model = model
        self.controller = controller
        self.header_height = HEADER_HEIGHT
        self.layout = TimelineLayout(px_per_day, show_completed, row_policy)
        self.items_by_id: dict[str, TaskItem] = {}
        self.drag = DragController(self.layout, self.commit_due_date)

        self.grid_item = GridItem(self)
        self.addItem(self.grid_item)

        self.drag.drag_moved.connect(self._on_drag_moved)
        self.drag.drag_ended.connect(self._on_drag_ended)
        self.model.items_changed.connect(self.rebuild_layout)
        self.model.anchor_changed.connect(self.rebuild_layout)

        self.rebuild_layout()

    def commit_due_date(self, item_id: str, new_date) -> None:
        if not self.controller:
            return
        self.controller.update_due_date(item_id, new_date)

    def rebuild_layout(self) -> None:
        self.layout.rebuild(self.model.items, self.model.anchor_date)
        session = self.drag.session
        if session is not None:
            positioned = self.layout.item_map.get(session.item_id)
            if positioned is None or positioned.effective_date != session.origin_due_date:
                self.drag.cancel()
        self._update_scene_rect()
        self.refresh_items()
        self.grid_item.update()
        self.stats_changed.emit(TimelineStats.from_items(self.model.items))

    def _update_scene_rect(self) -> None:
        width = self.layout.total_width() + CANVAS_RIGHT_PADDING
        height = self.header_height + self.layout.total_height()
        rect = QRectF(0, 0, width, height)
        self.setSceneRect(rect)
        self.grid_item.set_rect(rect)

    def refresh_items(self) -> None:
        existing = self.items_by_id
        new_items: dict[str, TaskItem] = {}
        for positioned in self.layout.items:
            item = existing.get(positioned.id)
            if item is None:
                item = TaskItem(positioned.id)
                self.addItem(item)
            item.setData(0, positioned.id)
            item.sync_from_layout(positioned, self.header_height)
            if self.drag.is_dragging(positioned.id):
                item.show_drag_offset(self.drag.session.current_delta_x)
            new_items[positioned.id] = item
        for item_id, item in existing.items():
            if item_id not in new_items:
                self.removeItem(item)
        self.items_by_id = new_items

    def _on_drag_moved(self, item_id: str, delta_x: float) -> None:
        item = self.items_by_id.get(item_id)
        if item is not None:
            item.show_drag_offset(delta_x)

    def _on_drag_ended(self, item_id: str) -> None:
        item = self.items_by_id.get(item_id)
        positioned = self.layout.item_map.get(item_id)
        if item is not None and positioned is not None:
            item.sync_from_layout(positioned, self.header_height)

    def item_id_at(self, scene_pos: QPointF) -> str | None:
        positioned = self.layout.item_at(scene_pos.x(), scene_pos.y() - self.header_height)
        if positioned is None:
            return None
        return positioned.id

    def select_item(self, item_id: str | None) -> None:
        self.clearSelection()
        item = self.items_by_id.get(item_id) if item_id else None
        if item is not None:
            item.setSelected(True)

    def selected_item_id(self) -> str | None:
        for item in self.selectedItems():
            if isinstance(item, TaskItem):
                return item.item_id
        return None

    def set_px_per_day(self, px_per_day: float) -> None:
        if px_per_day == self.layout.px_per_day:
            return
        self.drag.cancel()
        self.layout.set_px_per_day(px_per_day)
        self.rebuild_layout()

    def set_show_completed(self, enabled: bool) -> None:
        if enabled == self.layout.show_completed:
            return
        self.drag.cancel()
        self.layout.show_completed = enabled
        self.rebuild_layout()

    def set_row_policy(self, row_policy: RowPolicy) -> None:
        row_policy = RowPolicy(row_policy)
        if row_policy == self.layout.row_policy:
            return
        self.drag.cancel()
        self.layout.row_policy = row_policy
        self.rebuild_layout()
