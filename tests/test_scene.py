from datetime import date

import pytest
from PyQt6.QtCore import QPointF, QSettings
from PyQt6.QtGui import QUndoStack

from muuttotimeline.controller import TimelineController
from muuttotimeline.drag import DragState
from muuttotimeline.layout import RowPolicy
from muuttotimeline.main import MainWindow
from muuttotimeline.model import TimelineItem, TimelineModel
from muuttotimeline.scene import TimelineScene
from muuttotimeline.view import TimelineView


@pytest.fixture
def scene():
    model = TimelineModel(anchor_date=date(2025, 3, 1))
    model.set_items(
        [
            TimelineItem(id="a", title="Kartons packen", due_date=date(2025, 2, 20)),
            TimelineItem(id="b", title="Nachsendeauftrag"),
            TimelineItem(id="c", title="Alte Wohnung putzen", due_date=date(2025, 3, 3), completed=True),
        ]
    )
    controller = TimelineController(model, QUndoStack())
    return TimelineScene(model, controller, px_per_day=30)


def test_scene_lays_out_visible_items(scene):
    assert set(scene.items_by_id) == {"a", "b"}
    item = scene.items_by_id["a"]
    assert item.pos().x() == 300
    assert item.pos().y() == scene.header_height + 20
    assert scene.items_by_id["b"].pos().x() == 570
    assert scene.item_id_at(QPointF(310, scene.header_height + 30)) == "a"
    assert scene.item_id_at(QPointF(310, 10)) is None


def test_drag_preview_then_commit_updates_model(scene):
    stats = []
    scene.stats_changed.connect(stats.append)
    scene.drag.pointer_down("a", 310)
    scene.drag.pointer_move(370)
    assert scene.items_by_id["a"].pos().x() == 360
    assert scene.model.get_item("a").due_date == date(2025, 2, 20)

    assert scene.drag.pointer_up(370) == date(2025, 2, 22)
    assert scene.model.get_item("a").due_date == date(2025, 2, 22)
    assert scene.drag.state == DragState.IDLE
    positioned = scene.layout.item_map["a"]
    assert scene.items_by_id["a"].pos().x() == positioned.x
    assert stats and stats[-1].total == 3

    scene.controller.undo_stack.undo()
    assert scene.model.get_item("a").due_date == date(2025, 2, 20)


def test_cancel_restores_item_position(scene):
    scene.drag.pointer_down("a", 310)
    scene.drag.pointer_move(500)
    scene.drag.cancel()
    assert scene.items_by_id["a"].pos().x() == 300
    assert scene.controller.undo_stack.count() == 0


def test_removed_item_cancels_drag(scene):
    cancelled = []
    scene.drag.drag_cancelled.connect(cancelled.append)
    scene.drag.pointer_down("a", 310)
    scene.model.set_items([item for item in scene.model.items if item.id != "a"])
    assert cancelled == ["a"]
    assert "a" not in scene.items_by_id
    assert scene.drag.pointer_up(400) is None


def test_rebuild_keeps_drag_of_surviving_item(scene):
    scene.drag.pointer_down("a", 310)
    scene.drag.pointer_move(340)
    scene.controller.rename_item("b", "Post umleiten")
    assert scene.drag.is_dragging("a")
    assert scene.items_by_id["a"].pos().x() == 330


def test_date_change_of_dragged_item_cancels_drag(scene):
    cancelled = []
    scene.drag.drag_cancelled.connect(cancelled.append)
    scene.drag.pointer_down("a", 310)
    scene.model.update_due_date("a", date(2025, 2, 25))
    assert cancelled == ["a"]
    assert scene.drag.state == DragState.IDLE
    scene.drag.pointer_move(370)
    assert scene.drag.pointer_up(370) is None
    assert scene.model.get_item("a").due_date == date(2025, 2, 25)
    assert scene.items_by_id["a"].pos().x() == scene.layout.item_map["a"].x


def test_undo_while_dragging_cancels_drag(scene):
    scene.controller.update_due_date("a", date(2025, 2, 23))
    scene.drag.pointer_down("a", 400)
    scene.drag.pointer_move(460)
    scene.controller.undo_stack.undo()
    assert scene.drag.state == DragState.IDLE
    assert scene.drag.pointer_up(460) is None
    assert scene.model.get_item("a").due_date == date(2025, 2, 20)


def test_moving_the_anchor_cancels_drag_of_unscheduled_item(scene):
    scene.drag.pointer_down("b", 580)
    scene.model.set_anchor_date(date(2025, 3, 5))
    assert scene.drag.state == DragState.IDLE


def test_view_changes_cancel_drag(scene):
    scene.drag.pointer_down("a", 310)
    scene.set_px_per_day(40)
    assert scene.drag.state == DragState.IDLE
    assert scene.items_by_id["a"].pos().x() == 400

    scene.drag.pointer_down("a", 410)
    scene.set_show_completed(True)
    assert scene.drag.state == DragState.IDLE
    assert "c" in scene.items_by_id

    scene.drag.pointer_down("a", 410)
    scene.set_row_policy(RowPolicy.SWEEP_LINE)
    assert scene.drag.state == DragState.IDLE


def test_selection_helpers(scene):
    scene.select_item("b")
    assert scene.selected_item_id() == "b"
    scene.select_item(None)
    assert scene.selected_item_id() is None


def test_view_pointer_source_drives_scene_drag(scene):
    view = TimelineView(scene)
    view.pointer_source.press("a", 310)
    assert view.drag.is_dragging("a")
    view.cancel_drag()
    assert view.drag.state == DragState.IDLE
    view.pointer_source.press("a", 310)
    view.pointer_source.release(340)
    assert scene.model.get_item("a").due_date == date(2025, 2, 21)


def test_main_window_loads_and_saves(tmp_path):
    settings = QSettings(str(tmp_path / "app.ini"), QSettings.Format.IniFormat)
    window = MainWindow(settings)
    source = tmp_path / "umzug.json"
    source.write_text(
        '{"schema_version": 1, "move_date": "2025-03-01", '
        '"items": [{"id": "a", "title": "Kartons packen", "due_date": "2025-02-20"}]}',
        encoding="utf-8",
    )
    window.load_from_path(source)
    assert window.model.anchor_date == date(2025, 3, 1)
    assert "a" in window.scene.items_by_id
    assert "Gesamt Aufgaben: 1" in window.stats_label.text()

    window.set_zoom(50)
    assert window.scene.layout.px_per_day == 50
    assert window.view_settings.px_per_day == 50

    window.controller.update_due_date("a", date(2025, 2, 24))
    assert window.windowTitle().startswith("umzug.json*")
    assert window.save_file()
    assert '"2025-02-24"' in source.read_text(encoding="utf-8")
    assert not window.windowTitle().startswith("umzug.json*")
    window.close()
