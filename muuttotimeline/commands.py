from PyQt6.QtGui import QUndoCommand


class UpdateDueDateCommand(QUndoCommand):
    def __init__(self, model, item_id: str, old_date, new_date, description: str = "Reschedule Task") -> None:
        super().__init__(description)
        self.model = model
        self.item_id = item_id
        self.old_date = old_date
        self.new_date = new_date

    def redo(self) -> None:
        self.model.update_due_date(self.item_id, self.new_date)

    def undo(self) -> None:
        self.model.update_due_date(self.item_id, self.old_date)


class RenameItemCommand(QUndoCommand):
    def __init__(self, model, item_id: str, old_title: str, new_title: str) -> None:
        super().__init__("Rename Task")
        self.model = model
        self.item_id = item_id
        self.old_title = old_title
        self.new_title = new_title

    def redo(self) -> None:
        self.model.rename_item(self.item_id, self.new_title)

    def undo(self) -> None:
        self.model.rename_item(self.item_id, self.old_title)


class SetCompletedCommand(QUndoCommand):
    def __init__(self, model, item_id: str, was_completed: bool) -> None:
        super().__init__("Complete Task" if not was_completed else "Reopen Task")
        self.model = model
        self.item_id = item_id
        self.was_completed = was_completed

    def redo(self) -> None:
        self.model.set_completed(self.item_id, not self.was_completed)

    def undo(self) -> None:
        self.model.set_completed(self.item_id, self.was_completed)
