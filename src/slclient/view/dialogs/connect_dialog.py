"""
Connect Dialog
Asks for the server host and port.
"""
from PySide6.QtWidgets import (
    QDialog, QDialogButtonBox, QFormLayout, QLineEdit, QMessageBox, QSpinBox, QVBoxLayout, QWidget
)

from slclient.config import DEFAULT_HOST, DEFAULT_PORT


class ConnectDialog(QDialog):
    def __init__(self, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Verbinden")

        layout = QVBoxLayout(self)
        form = QFormLayout()

        self.host_edit = QLineEdit(host)
        form.addRow("Host:", self.host_edit)

        self.port_spin = QSpinBox()
        self.port_spin.setRange(0, 65535)
        self.port_spin.setValue(port)
        form.addRow("Port:", self.port_spin)

        layout.addLayout(form)

        buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        buttons.button(QDialogButtonBox.Ok).setText("Verbinden")
        buttons.accepted.connect(self.on_accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

    @property
    def host(self) -> str:
        return self.host_edit.text().strip()

    @property
    def port(self) -> int:
        return self.port_spin.value()

    def on_accept(self) -> None:
        if not self.host:
            QMessageBox.warning(self, "Fehler", "Bitte einen Host eingeben.")
            return
        if self.port <= 0:
            QMessageBox.warning(self, "Fehler", "Bitte eine gültige Portnummer eingeben.")
            return
        self.accept()
