from __future__ import annotations

from datetime import date
import logging

from PyQt6.QtGui import QUndoStack

from .commands import RenameItemCommand, SetCompletedCommand, UpdateDueDateCommand
from .model import TimelineModel

logger = logging.getLogger(__name__)


class TimelineController:
    def __init__(self, model: TimelineModel, undo_stack: QUndoStack) -> None:
        self.model = model
        self.undo_stack = undo_stack

    def update_due_date(self, item_id: str, new_date: date | None) -> bool:
        item = self.model.get_item(item_id)
        if item is None:
            logger.warning("Cannot reschedule unknown task %s", item_id)
            return False
        if item.due_date == new_date:
            return False
        self.undo_stack.push(UpdateDueDateCommand(self.model, item_id, item.due_date, new_date))
        return True

    def rename_item(self, item_id: str, title: str) -> bool:
        item = self.model.get_item(item_id)
        if item is None:
            logger.warning("Cannot rename unknown task %s", item_id)
            return False
        cleaned = (title or "").strip()
        if not cleaned or cleaned == item.title:
            return False
        self.undo_stack.push(RenameItemCommand(self.model, item_id, item.title, cleaned))
        return True

    def toggle_completed(self, item_id: str) -> bool:
        item = self.model.get_item(item_id)
        if item is None:
            logger.warning("Cannot toggle unknown task %s", item_id)
            return False
        self.undo_stack.push(SetCompletedCommand(self.model, item_id, item.completed))
        return True
