from __future__ import annotations

from PyQt6.QtCore import QRectF, Qt
from PyQt6.QtGui import QColor, QPainter, QPen
from PyQt6.QtWidgets import (
    QGraphicsObject,
    QGraphicsRectItem,
    QGraphicsTextItem,
    QToolTip,
)

from .constants import MOVE_DAY_COLOR, TODAY_COLOR
from .grid import grid_ticks
from .stats import item_color


class TaskItem(QGraphicsRectItem):
    def __init__(self, item_id: str) -> None:
        super().__init__()
        self.item_id = item_id
        self.base_x = 0.0
        self.text_item = QGraphicsTextItem(self)
        self.text_item.setAcceptedMouseButtons(Qt.MouseButton.NoButton)
        self.date_item = QGraphicsTextItem(self)
        self.date_item.setAcceptedMouseButtons(Qt.MouseButton.NoButton)
        self.setFlags(QGraphicsRectItem.GraphicsItemFlag.ItemIsSelectable)
        self.setAcceptHoverEvents(True)

    def sync_from_layout(self, positioned, top: float) -> None:
        self.base_x = positioned.x
        self.setRect(0, 0, positioned.width, positioned.height)
        self.setPos(positioned.x, top + positioned.y)
        color = QColor(item_color(positioned))
        if positioned.completed:
            color.setAlpha(150)
        self.setBrush(color)
        self.setPen(QPen(QColor(30, 30, 30, 80)))
        self.setZValue(positioned.row)
        self.text_item.setDefaultTextColor(QColor(255, 255, 255))
        self.text_item.setPlainText(positioned.title)
        self.text_item.setTextWidth(positioned.width - 8)
        self.text_item.setPos(4, 2)
        self.date_item.setDefaultTextColor(QColor(255, 255, 255, 210))
        if positioned.due_date is not None:
            self.date_item.setPlainText(positioned.due_date.strftime("%d.%m"))
        else:
            self.date_item.setPlainText("")
        self.date_item.setPos(4, positioned.height - 22)
        tooltip = positioned.title
        if positioned.assignee_name:
            tooltip = f"{tooltip}\n{positioned.assignee_name}"
        self.setToolTip(tooltip)

    def show_drag_offset(self, delta_x: float) -> None:
        self.setPos(self.base_x + delta_x, self.pos().y())
        self.setZValue(1000)


class GridItem(QGraphicsObject):
    def __init__(self, scene_ref) -> None:
        super().__init__()
        self.scene_ref = scene_ref
        self.setZValue(-1000)
        self._rect = QRectF()
        self._hover_day = None
        self.setAcceptHoverEvents(True)
        self.setAcceptedMouseButtons(Qt.MouseButton.NoButton)

    def boundingRect(self) -> QRectF:
        return QRectF(self._rect)

    def set_rect(self, rect: QRectF) -> None:
        if rect == self._rect:
            return
        self.prepareGeometryChange()
        self._rect = QRectF(rect)

    def hoverMoveEvent(self, event) -> None:
        layout = self.scene_ref.layout
        if event.pos().y() < self.scene_ref.header_height:
            day = layout.date_for_x(event.pos().x())
            if day != self._hover_day:
                self._hover_day = day
                QToolTip.showText(event.screenPos(), day.strftime("%d.%m.%Y"))
        elif self._hover_day is not None:
            self._hover_day = None
            QToolTip.hideText()
        super().hoverMoveEvent(event)

    def hoverLeaveEvent(self, event) -> None:
        if self._hover_day is not None:
            self._hover_day = None
            QToolTip.hideText()
        super().hoverLeaveEvent(event)

    def paint(self, painter: QPainter, option, widget=None) -> None:
        scene = self.scene_ref
        layout = scene.layout
        rect = option.exposedRect if option else self.boundingRect()
        header = scene.header_height

        painter.fillRect(rect, QColor(252, 252, 252))
        painter.fillRect(QRectF(rect.left(), 0, rect.width(), header), QColor(248, 248, 248))

        weekday_pen = QPen(QColor(243, 244, 246))
        weekend_pen = QPen(QColor(229, 231, 235))
        move_pen = QPen(QColor(MOVE_DAY_COLOR))
        move_pen.setWidth(2)
        today_pen = QPen(QColor(TODAY_COLOR))
        today_pen.setWidth(2)
        label_pen = QPen(QColor(107, 114, 128))
        month_pen = QPen(QColor(55, 65, 81))

        ticks = grid_ticks(layout.range, layout.px_per_day, scene.model.anchor_date)
        for tick in ticks:
            if tick.x < rect.left() - 200 or tick.x > rect.right() + 200:
                continue
            if tick.is_move_day:
                painter.setPen(move_pen)
            elif tick.is_today:
                painter.setPen(today_pen)
            elif tick.is_weekend:
                painter.setPen(weekend_pen)
            else:
                painter.setPen(weekday_pen)
            painter.drawLine(int(tick.x), int(header), int(tick.x), int(rect.bottom()))

            if tick.month_label:
                painter.setPen(month_pen)
                painter.drawText(int(tick.x) + 2, 14, tick.month_label)
            if tick.move_label:
                painter.setPen(move_pen)
                painter.drawText(int(tick.x) + 2, 14, tick.move_label)
            elif tick.today_label:
                painter.setPen(today_pen)
                painter.drawText(int(tick.x) + 2, 14, tick.today_label)
            if tick.week_label:
                painter.setPen(label_pen)
                painter.drawText(int(tick.x) + 2, int(header) - 8, tick.week_label)

        painter.setPen(QPen(QColor(220, 220, 220)))
        painter.drawLine(int(rect.left()), int(header), int(rect.right()), int(header))
