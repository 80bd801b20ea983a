"""
Main Application Window
=======================
The primary GUI container: server output, command input and menus.

Why is this file needed?
------------------------
1. Layout: It organizes the output pane and the input line.
2. Routing: It connects global actions (connect, map toggle, exit) to the
   network session and the map window, and feeds typed commands through the
   dispatcher.
"""
import logging
from typing import Optional

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QPlainTextEdit, QLineEdit,
    QPushButton, QMessageBox
)
from PySide6.QtCore import QSettings
from PySide6.QtGui import QAction, QKeySequence, QTextCursor

from slclient.config import APP_NAME, DEFAULT_HOST, DEFAULT_PORT, get_maps_dir
from slclient.controller.dispatcher import CommandDispatcher
from slclient.controller.transport import TelnetTransport
from slclient.controller.workers import SessionWorker
from slclient.model.engine import SpatialGraph
from slclient.view.dialogs.connect_dialog import ConnectDialog
from slclient.view.map_window import MapWindow

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, maps_dir: Optional[str] = None) -> None:
        super().__init__()
        self.maps_dir: str = maps_dir or get_maps_dir()
        self.settings = QSettings()

        self.transport = TelnetTransport()
        self.worker: Optional[SessionWorker] = None
        self.map_window: Optional[MapWindow] = None
        self.dispatcher = CommandDispatcher(self.transport, map_provider=self.visible_map)

        self.setWindowTitle(APP_NAME)
        self.resize(900, 600)

        # --- MAIN CONTAINER ---
        main_widget = QWidget()
        self.setCentralWidget(main_widget)
        main_layout = QVBoxLayout(main_widget)

        # --- 1. OUTPUT ---
        self.output = QPlainTextEdit()
        self.output.setReadOnly(True)
        self.output.setStyleSheet("font-family: monospace;")
        main_layout.addWidget(self.output, 1)

        # --- 2. INPUT ---
        input_row = QHBoxLayout()
        self.input = QLineEdit()
        self.input.returnPressed.connect(self.on_send)
        self.btn_send = QPushButton("Senden")
        self.btn_send.clicked.connect(self.on_send)
        input_row.addWidget(self.input, 1)
        input_row.addWidget(self.btn_send)
        main_layout.addLayout(input_row)

        # --- ACTIONS & MENUS ---
        self._create_actions()
        self._create_menus()

        self.input.setFocus()

    def _create_actions(self) -> None:
        self.act_connect = QAction("Verbinden...", self)
        self.act_connect.triggered.connect(self.on_connect)

        self.act_disconnect = QAction("Trennen", self)
        self.act_disconnect.triggered.connect(self.on_disconnect)

        self.act_exit = QAction("Beenden", self)
        self.act_exit.triggered.connect(self.close)

        self.act_map = QAction("Karte", self)
        self.act_map.setShortcut(QKeySequence("Ctrl+M"))
        self.act_map.triggered.connect(self.toggle_map)

        self.act_about = QAction("Über", self)
        self.act_about.triggered.connect(self.on_about)

    def _create_menus(self) -> None:
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("&Datei")
        file_menu.addAction(self.act_connect)
        file_menu.addAction(self.act_disconnect)
        file_menu.addSeparator()
        file_menu.addAction(self.act_exit)

        map_menu = menu_bar.addMenu("&Karte")
        map_menu.addAction(self.act_map)

        help_menu = menu_bar.addMenu("&Hilfe")
        help_menu.addAction(self.act_about)

    # --- HELPER METHODS ---

    def append_output(self, text: str) -> None:
        self.output.moveCursor(QTextCursor.End)
        self.output.insertPlainText(text)
        self.output.moveCursor(QTextCursor.End)
        self.output.ensureCursorVisible()

    def visible_map(self) -> Optional[SpatialGraph]:
        if self.map_window is not None and self.map_window.isVisible():
            return self.map_window.graph
        return None

    # --- SESSION SLOTS ---

    def on_connect(self) -> None:
        host = str(self.settings.value("connection/host", DEFAULT_HOST))
        port = int(self.settings.value("connection/port", DEFAULT_PORT))

        dlg = ConnectDialog(host, port, self)
        if not dlg.exec():
            return

        self.settings.setValue("connection/host", dlg.host)
        self.settings.setValue("connection/port", dlg.port)

        self.stop_session()
        self.append_output(f"Verbinde zu {dlg.host}:{dlg.port}...\n")

        # A fresh transport per session; the old worker may still be winding down
        self.transport = TelnetTransport()
        self.dispatcher.transport = self.transport

        self.worker = SessionWorker(self.transport, dlg.host, dlg.port, parent=self)
        self.worker.connection_result.connect(self.on_connection_result)
        self.worker.line_received.connect(self.on_line_received)
        self.worker.connection_closed.connect(self.on_connection_closed)
        self.worker.start()

    def on_connection_result(self, ok: bool, host: str, port: int) -> None:
        if ok:
            self.append_output(f"Verbunden mit {host}:{port}\n\n")
            self.input.setFocus()
        else:
            self.append_output("Verbindung fehlgeschlagen.\n")

    def on_line_received(self, line: str) -> None:
        text, first_reply = self.dispatcher.process_incoming(line)
        if first_reply:
            current = self.output.toPlainText()
            if not current.endswith("\n\n"):
                self.append_output("\n")
        self.append_output(text + "\n")

    def on_connection_closed(self) -> None:
        self.append_output("Verbindung wurde getrennt.\n")

    def on_disconnect(self) -> None:
        if self.transport.is_connected:
            self.stop_session()
        else:
            self.append_output("Keine aktive Verbindung.\n")

    def stop_session(self) -> None:
        if self.worker is not None:
            self.worker.stop()
            # A pending connect cannot be interrupted; the worker is parented
            # to the window, so dropping our reference does not destroy it
            self.worker.wait(2000)
            self.worker = None

    def on_send(self) -> None:
        for message in self.dispatcher.handle_input(self.input.text()):
            self.append_output(message + "\n")

        # Keep the command for repetition: select it instead of clearing
        self.input.selectAll()
        self.input.setFocus()

    # --- MAP ---

    def toggle_map(self) -> None:
        if self.map_window is None or not self.map_window.isVisible():
            self.open_map()
        else:
            self.map_window.close()

    def open_map(self) -> None:
        self.map_window = MapWindow(self.maps_dir, self)
        self.map_window.closed.connect(self.on_map_closed)
        self.map_window.show()

        # Keep typing in the main window
        self.activateWindow()
        self.input.setFocus()

    def on_map_closed(self) -> None:
        self.map_window = None

    # --- OTHER ---

    def on_about(self) -> None:
        QMessageBox.information(self, "Über", "SLClient – MUD-Client mit Automapper.")

    def closeEvent(self, event, /) -> None:
        reply = QMessageBox.question(
            self, "Beenden", "Möchten Sie das Programm wirklich beenden?",
            QMessageBox.Yes | QMessageBox.No
        )
        if reply != QMessageBox.Yes:
            event.ignore()
            return

        # The map window may still hold unsaved changes
        if self.map_window is not None and not self.map_window.close():
            event.ignore()
            return

        self.stop_session()
        event.accept()
