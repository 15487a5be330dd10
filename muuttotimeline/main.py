from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from PyQt6.QtCore import QEvent, QSettings, QSignalBlocker
from PyQt6.QtGui import QAction, QUndoStack
from PyQt6.QtWidgets import (
    QApplication,
    QCheckBox,
    QComboBox,
    QFileDialog,
    QInputDialog,
    QLabel,
    QMainWindow,
    QMessageBox,
    QToolBar,
)

from . import __version__
from .controller import TimelineController
from .layout import RowPolicy
from .model import TimelineModel, parse_day
from .persistence import load_items, save_items
from .scale import zoom_in, zoom_out
from .scene import TimelineScene
from .settings import APPLICATION, ORGANIZATION, TimelineSettings
from .stats import LEGEND, TimelineStats
from .view import TimelineView

logger = logging.getLogger(__name__)

ROW_POLICY_LABELS = (
    (RowPolicy.ROUND_ROBIN, "4 Reihen"),
    (RowPolicy.SWEEP_LINE, "Überlappungsfrei"),
)


class MainWindow(QMainWindow):
    def __init__(self, settings: QSettings | None = None) -> None:
        super().__init__()
        if settings is None:
            settings = QSettings(ORGANIZATION, APPLICATION)
        self.settings = settings
        self.view_settings = TimelineSettings.load(self.settings)
        self.undo_stack = QUndoStack(self)
        self.current_path: Path | None = None

        self.model = TimelineModel()
        self.controller = TimelineController(self.model, self.undo_stack)
        self.scene = TimelineScene(
            self.model,
            self.controller,
            px_per_day=self.view_settings.px_per_day,
            show_completed=self.view_settings.show_completed,
            row_policy=self.view_settings.row_policy,
        )
        self.view = TimelineView(self.scene)
        self.setCentralWidget(self.view)
        self.stats_label = QLabel()
        self.statusBar().addPermanentWidget(self.stats_label)

        self._setup_actions()
        self._setup_toolbar()
        self.scene.stats_changed.connect(self._update_stats)
        self.scene.drag.edit_requested.connect(self.rename_item)
        self.view.zoom_requested.connect(self.set_zoom)
        self.undo_stack.cleanChanged.connect(self._update_title)
        self._update_stats()
        self._update_title()

    def _setup_actions(self) -> None:
        file_menu = self.menuBar().addMenu("Datei")
        edit_menu = self.menuBar().addMenu("Bearbeiten")
        view_menu = self.menuBar().addMenu("Ansicht")

        open_action = QAction("Öffnen…", self)
        open_action.setShortcut("Ctrl+O")
        open_action.triggered.connect(self.open_file)
        file_menu.addAction(open_action)

        save_action = QAction("Speichern", self)
        save_action.setShortcut("Ctrl+S")
        save_action.triggered.connect(self.save_file)
        file_menu.addAction(save_action)

        save_as_action = QAction("Speichern unter…", self)
        save_as_action.triggered.connect(self.save_file_as)
        file_menu.addAction(save_as_action)

        undo_action = self.undo_stack.createUndoAction(self, "Rückgängig")
        undo_action.setShortcut("Ctrl+Z")
        edit_menu.addAction(undo_action)
        redo_action = self.undo_stack.createRedoAction(self, "Wiederholen")
        redo_action.setShortcut("Ctrl+Shift+Z")
        edit_menu.addAction(redo_action)
        edit_menu.addSeparator()

        toggle_action = QAction("Erledigt umschalten", self)
        toggle_action.setShortcut("Ctrl+E")
        toggle_action.triggered.connect(self.toggle_selected_completed)
        edit_menu.addAction(toggle_action)

        move_date_action = QAction("Umzugstag festlegen…", self)
        move_date_action.triggered.connect(self.edit_move_date)
        edit_menu.addAction(move_date_action)

        zoom_in_action = QAction("Vergrößern", self)
        zoom_in_action.setShortcut("Ctrl++")
        zoom_in_action.triggered.connect(lambda: self.set_zoom(zoom_in(self.scene.layout.px_per_day)))
        view_menu.addAction(zoom_in_action)
        zoom_out_action = QAction("Verkleinern", self)
        zoom_out_action.setShortcut("Ctrl+-")
        zoom_out_action.triggered.connect(lambda: self.set_zoom(zoom_out(self.scene.layout.px_per_day)))
        view_menu.addAction(zoom_out_action)
        self.zoom_in_action = zoom_in_action
        self.zoom_out_action = zoom_out_action

    def _setup_toolbar(self) -> None:
        toolbar = QToolBar("Timeline", self)
        toolbar.setObjectName("timeline_toolbar")
        self.addToolBar(toolbar)

        toolbar.addAction(self.zoom_out_action)
        self.zoom_label = QLabel()
        toolbar.addWidget(self.zoom_label)
        toolbar.addAction(self.zoom_in_action)
        toolbar.addSeparator()

        self.show_completed_box = QCheckBox("Erledigte anzeigen")
        self.show_completed_box.setChecked(self.view_settings.show_completed)
        self.show_completed_box.toggled.connect(self.set_show_completed)
        toolbar.addWidget(self.show_completed_box)
        toolbar.addSeparator()

        self.row_policy_combo = QComboBox()
        for policy, label in ROW_POLICY_LABELS:
            self.row_policy_combo.addItem(label, policy.value)
        index = self.row_policy_combo.findData(self.view_settings.row_policy.value)
        with QSignalBlocker(self.row_policy_combo):
            self.row_policy_combo.setCurrentIndex(max(0, index))
        self.row_policy_combo.currentIndexChanged.connect(self._on_row_policy_changed)
        toolbar.addWidget(self.row_policy_combo)
        toolbar.addSeparator()
        for label, color in LEGEND:
            legend_label = QLabel(f"<span style=\"color:{color}\">&#9632;</span> {label} ")
            toolbar.addWidget(legend_label)
        self._update_zoom_label()

    def _update_zoom_label(self) -> None:
        self.zoom_label.setText(f" {int(self.scene.layout.px_per_day)}px/Tag ")

    def _update_stats(self, stats=None) -> None:
        if stats is None:
            stats = TimelineStats.from_items(self.model.items)
        self.stats_label.setText(stats.summary())

    def _update_title(self) -> None:
        name = self.current_path.name if self.current_path else "Unbenannt"
        dirty = "" if self.undo_stack.isClean() else "*"
        self.setWindowTitle(f"{name}{dirty} - Umzugs-Timeline {__version__}")

    def set_zoom(self, px_per_day: int) -> None:
        self.scene.set_px_per_day(px_per_day)
        self.view_settings.px_per_day = int(self.scene.layout.px_per_day)
        self._update_zoom_label()

    def set_show_completed(self, enabled: bool) -> None:
        self.scene.set_show_completed(enabled)
        self.view_settings.show_completed = enabled

    def _on_row_policy_changed(self, index: int) -> None:
        policy = RowPolicy(self.row_policy_combo.itemData(index))
        self.scene.set_row_policy(policy)
        self.view_settings.row_policy = policy

    def rename_item(self, item_id: str) -> None:
        item = self.model.get_item(item_id)
        if item is None:
            return
        title, ok = QInputDialog.getText(self, "Aufgabe umbenennen", "Titel", text=item.title)
        if ok:
            self.controller.rename_item(item_id, title)

    def toggle_selected_completed(self) -> None:
        item_id = self.scene.selected_item_id()
        if item_id is not None:
            self.controller.toggle_completed(item_id)

    def edit_move_date(self) -> None:
        current = self.model.anchor_date.isoformat() if self.model.anchor_date else ""
        text, ok = QInputDialog.getText(self, "Umzugstag", "Datum (JJJJ-MM-TT)", text=current)
        if not ok:
            return
        move_date = parse_day(text)
        if move_date is None:
            QMessageBox.warning(self, "Umzugstag", f"Ungültiges Datum: {text}")
            return
        self.model.set_anchor_date(move_date)

    def open_file(self) -> None:
        filename, _ = QFileDialog.getOpenFileName(self, "Aufgaben öffnen", "", "Aufgaben (*.json)")
        if not filename:
            return
        try:
            self.load_from_path(Path(filename))
        except (OSError, ValueError, KeyError) as exc:
            logger.warning("Could not open %s: %s", filename, exc)
            QMessageBox.warning(self, "Öffnen fehlgeschlagen", f"Datei konnte nicht geöffnet werden.\n{exc}")

    def load_from_path(self, path: Path) -> None:
        items, move_date = load_items(path)
        self.undo_stack.clear()
        self.current_path = path
        self.model.set_anchor_date(move_date)
        self.model.set_items(items)
        self.undo_stack.setClean()
        self.settings.setValue("last_file", str(path))
        self._update_title()
        logger.info("Loaded %d tasks from %s", len(items), path)

    def save_file(self) -> bool:
        if not self.current_path:
            return self.save_file_as()
        try:
            save_items(self.current_path, self.model.items, self.model.anchor_date)
        except OSError as exc:
            QMessageBox.warning(self, "Speichern fehlgeschlagen", f"Datei konnte nicht gespeichert werden.\n{exc}")
            return False
        self.undo_stack.setClean()
        self._update_title()
        return True

    def save_file_as(self) -> bool:
        filename, _ = QFileDialog.getSaveFileName(self, "Speichern unter", "", "Aufgaben (*.json)")
        if not filename:
            return False
        path = Path(filename)
        if path.suffix.lower() != ".json":
            path = path.with_suffix(".json")
        self.current_path = path
        return self.save_file()

    def load_last_file(self) -> None:
        path = self.settings.value("last_file", "")
        if not path or not os.path.exists(str(path)):
            return
        try:
            self.load_from_path(Path(str(path)))
        except (OSError, ValueError, KeyError) as exc:
            logger.warning("Could not reopen %s: %s", path, exc)

    def changeEvent(self, event) -> None:
        if event.type() == QEvent.Type.ActivationChange and not self.isActiveWindow():
            self.view.cancel_drag()
        super().changeEvent(event)

    def closeEvent(self, event) -> None:
        self.view.cancel_drag()
        self.view_settings.save(self.settings)
        super().closeEvent(event)


def run() -> int:
    logging.basicConfig(
        level=os.environ.get("MUUTTO_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = QApplication(sys.argv)
    window = MainWindow()
    if len(sys.argv) > 1:
        try:
            window.load_from_path(Path(sys.argv[1]))
        except (OSError, ValueError, KeyError) as exc:
            QMessageBox.warning(window, "Öffnen fehlgeschlagen", f"Datei konnte nicht geöffnet werden.\n{exc}")
    else:
        window.load_last_file()
    window.resize(1200, 600)
    window.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(run())
