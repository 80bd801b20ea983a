"""
Map Window
==========
The auto-map: canvas, map file handling and view navigation.

Why is this file needed?
------------------------
1. Layout: It arranges the canvas, the file controls and the pan/layer
   buttons.
2. Routing: It connects buttons and the saved-maps picker to the engine and
   the I/O manager, and asks before unsaved changes are thrown away.
"""
from __future__ import annotations

import logging
import os
from typing import Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QCheckBox, QComboBox, QFileDialog, QHBoxLayout, QMessageBox, QPushButton,
    QVBoxLayout, QWidget
)

from slclient.config import MAP_FILE_EXTENSION, MAP_FILE_FILTER, TOTAL_CELL_SIZE
from slclient.model.engine import SpatialGraph
from slclient.model.io import MapIOManager
from slclient.view.widgets.map_canvas import CanvasRenderer, MapCanvas

logger = logging.getLogger(__name__)

UNSAVED_MAP_LABEL = "<ungespeicherte Karte>"


class MapWindow(QWidget):
    closed = Signal()

    def __init__(self, maps_dir: str, parent: QWidget | None = None) -> None:
        super().__init__(parent, Qt.Window)
        # A fresh window is created each time the map is opened
        self.setAttribute(Qt.WA_DeleteOnClose)
        self.maps_dir = maps_dir
        self.resize(420, 460)

        self.canvas = MapCanvas()
        width, height = self.canvas.grid_size()
        renderer = CanvasRenderer(self.canvas, title_changed=self.setWindowTitle)
        self.graph = SpatialGraph(renderer=renderer, width=width, height=height)

        layout = QVBoxLayout(self)

        # --- 1. FILE ROW ---
        file_row = QHBoxLayout()
        self.btn_new = QPushButton("Neu")
        self.btn_new.clicked.connect(self.on_new_clicked)
        self.btn_save = QPushButton("Speichern")
        self.btn_save.clicked.connect(self.on_save_clicked)
        self.btn_load = QPushButton("Laden")
        self.btn_load.clicked.connect(self.on_load_clicked)
        self.cmb_saved_maps = QComboBox()
        self.cmb_saved_maps.setMinimumContentsLength(16)
        self.chk_read_only = QCheckBox("Nur lesen")
        self.chk_read_only.toggled.connect(self.graph.set_read_only)

        for w in (self.btn_new, self.btn_save, self.btn_load):
            file_row.addWidget(w)
        file_row.addWidget(self.cmb_saved_maps, 1)
        file_row.addWidget(self.chk_read_only)
        layout.addLayout(file_row)

        # --- 2. CANVAS ---
        layout.addWidget(self.canvas, 1)
        self.canvas.grid_resized.connect(self.graph.resize)
        self.canvas.cell_double_clicked.connect(self.on_canvas_double_clicked)

        # --- 3. NAVIGATION ROW ---
        nav_row = QHBoxLayout()
        nav_buttons = [
            ("◀", lambda: self.graph.pan_by(-1, 0)),
            ("▲", lambda: self.graph.pan_by(0, -1)),
            ("▼", lambda: self.graph.pan_by(0, 1)),
            ("▶", lambda: self.graph.pan_by(1, 0)),
            ("Z+", lambda: self.graph.step_layer(1)),
            ("Z-", lambda: self.graph.step_layer(-1)),
        ]
        for label, slot in nav_buttons:
            btn = QPushButton(label)
            btn.setFixedWidth(40)
            btn.clicked.connect(slot)
            nav_row.addWidget(btn)
        nav_row.addStretch()
        layout.addLayout(nav_row)

        self.refresh_saved_maps()
        self.cmb_saved_maps.currentTextChanged.connect(self.on_saved_map_selected)

        self.graph.redraw()

    # --- HELPERS ---

    def refresh_saved_maps(self) -> None:
        """Re-read the maps folder into the picker and select the current map."""
        try:
            names = MapIOManager.list_saved_maps(self.maps_dir)
        except OSError as e:
            QMessageBox.critical(self, "Fehler", f"Kartenordner nicht verfügbar:\n{e}")
            names = []

        current = self._current_file_name() or UNSAVED_MAP_LABEL
        self.cmb_saved_maps.blockSignals(True)
        try:
            self.cmb_saved_maps.clear()
            self.cmb_saved_maps.addItems([UNSAVED_MAP_LABEL, *names])
            self.cmb_saved_maps.setCurrentText(current)
        finally:
            self.cmb_saved_maps.blockSignals(False)

    def _current_file_name(self) -> Optional[str]:
        if not self.graph.state.filepath:
            return None
        return os.path.basename(self.graph.state.filepath)

    def _select_in_picker(self, name: str) -> None:
        self.cmb_saved_maps.blockSignals(True)
        try:
            self.cmb_saved_maps.setCurrentText(name)
        finally:
            self.cmb_saved_maps.blockSignals(False)

    def confirm_discard(self, title: str, question: str) -> bool:
        """
        Ask what to do with unsaved changes.
        Returns False if the user cancelled (or saving failed).
        """
        if not self.graph.dirty:
            return True

        reply = QMessageBox.question(
            self, title, question,
            QMessageBox.Yes | QMessageBox.No | QMessageBox.Cancel
        )
        if reply == QMessageBox.Cancel:
            return False
        if reply == QMessageBox.Yes:
            return self.save(self.graph.state.filepath)
        return True

    def save(self, filepath: Optional[str] = None) -> bool:
        """Save to `filepath`, or ask for a file name. Returns True on success."""
        try:
            MapIOManager.ensure_maps_dir(self.maps_dir)
        except OSError as e:
            QMessageBox.critical(self, "Fehler", f"Fehler beim Speichern der Karte:\n{e}")
            return False

        if not filepath:
            filepath, _ = QFileDialog.getSaveFileName(
                self, "Karte speichern unter", self.maps_dir, MAP_FILE_FILTER
            )
            if not filepath:
                return False
            # Ensure extension
            if not filepath.endswith(MAP_FILE_EXTENSION):
                filepath += MAP_FILE_EXTENSION

        try:
            MapIOManager.save_map(self.graph, filepath)
        except OSError as e:
            QMessageBox.critical(self, "Fehler", f"Fehler beim Speichern der Karte:\n{e}")
            return False

        self.refresh_saved_maps()
        return True

    def load(self, filepath: str) -> bool:
        try:
            MapIOManager.load_map(self.graph, filepath)
        except (OSError, ValueError) as e:
            QMessageBox.critical(self, "Fehler", f"Fehler beim Laden der Karte:\n{e}")
            self._select_in_picker(self._current_file_name() or UNSAVED_MAP_LABEL)
            return False

        self.refresh_saved_maps()
        return True

    # --- SLOTS ---

    def on_new_clicked(self) -> None:
        if not self.confirm_discard(
            "Neue Karte erstellen",
            "Es sind ungespeicherte Änderungen vorhanden. "
            "Möchten Sie die aktuelle Karte speichern?"
        ):
            self._select_in_picker(self._current_file_name() or UNSAVED_MAP_LABEL)
            return
        self.graph.new_map()
        self._select_in_picker(UNSAVED_MAP_LABEL)

    def on_save_clicked(self) -> None:
        if self.save():
            name = self.graph.state.map_name
            QMessageBox.information(self, "Erfolg", f"Karte erfolgreich gespeichert: {name}")

    def on_load_clicked(self) -> None:
        if not self.confirm_discard(
            "Änderungen speichern?",
            "Es sind Änderungen vorhanden. Sollen diese gespeichert werden?"
        ):
            return
        try:
            MapIOManager.ensure_maps_dir(self.maps_dir)
        except OSError as e:
            QMessageBox.critical(self, "Fehler", f"Fehler beim Laden der Karte:\n{e}")
            return

        filepath, _ = QFileDialog.getOpenFileName(
            self, "Karte laden", self.maps_dir, MAP_FILE_FILTER
        )
        if filepath and self.load(filepath):
            name = self.graph.state.map_name
            QMessageBox.information(self, "Erfolg", f"Karte erfolgreich geladen: {name}")

    def on_saved_map_selected(self, name: str) -> None:
        if not name or name == self._current_file_name():
            return

        if name == UNSAVED_MAP_LABEL:
            # Same as clicking "Neu"
            self.on_new_clicked()
            return

        if not self.confirm_discard(
            "Änderungen speichern?",
            "Es sind Änderungen vorhanden. Sollen diese gespeichert werden?"
        ):
            self._select_in_picker(self._current_file_name() or UNSAVED_MAP_LABEL)
            return

        filepath = os.path.join(self.maps_dir, name)
        if not os.path.isfile(filepath):
            QMessageBox.critical(self, "Fehler", f"Datei nicht gefunden: {name}")
            self.refresh_saved_maps()
            return
        self.load(filepath)

    def on_canvas_double_clicked(self, x: float, y: float) -> None:
        self.graph.teleport(x, y, TOTAL_CELL_SIZE)

    def closeEvent(self, event, /) -> None:
        """Handle window close event to prompt for saving if modified."""
        if not self.confirm_discard(
            "Karte schließen",
            "Die Karte wurde geändert. Möchten Sie die Änderungen speichern?"
        ):
            event.ignore()
            return
        self.closed.emit()
        event.accept()
