"""
Background Workers (Threading)
==============================
This module contains QThread subclasses for the network session.

Why is this file needed?
------------------------
1. Responsiveness: Connecting and waiting for server output block. Doing that
   on the main thread would freeze the GUI.
2. Signals: Received lines leave the worker only as Qt signals. Connected to
   slots of GUI objects they are queued and delivered on the GUI thread, so
   the map is never touched from the worker.

Classes:
    SessionWorker: Connects and runs the receive loop.
"""
import logging
from typing import Optional

from PySide6.QtCore import QObject, QThread, Signal

from slclient.controller.transport import TelnetTransport

logger = logging.getLogger(__name__)


class SessionWorker(QThread):
    # Signals to update the UI from the background
    connection_result = Signal(bool, str, int)  # (success, host, port)
    line_received = Signal(str)
    connection_closed = Signal()

    def __init__(self, transport: TelnetTransport, host: str, port: int, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.transport = transport
        self.host = host
        self.port = port

    def run(self):
        logger.info("Starting receive loop in background thread...")

        ok = self.transport.connect(self.host, self.port)
        self.connection_result.emit(ok, self.host, self.port)
        if not ok:
            return

        for line in self.transport.iter_lines():
            if line:
                self.line_received.emit(line)

        self.transport.disconnect()
        self.connection_closed.emit()

    def stop(self) -> None:
        """Ends the receive loop by closing the connection."""
        self.transport.disconnect()
