"""
Qt application setup: identity, settings storage and the QApplication itself.
"""
import os
import sys
from typing import Optional, Sequence

from PySide6.QtCore import QCoreApplication, QSettings
from PySide6.QtWidgets import QApplication

from slclient import __version__
from slclient.config import APP_NAME

# Used by QSettings for the folder/file of the INI file
ORG_ID = "slclient"
APP_ID = "slclient"


def create_app(argv: Optional[Sequence[str]] = None) -> QApplication:
    """
    Create the QApplication. Settings (last host and port) are written as an
    INI file in the per-user config folder.
    """
    os.environ.setdefault("QT_ENABLE_HIGHDPI_SCALING", "1")

    QCoreApplication.setOrganizationName(ORG_ID)
    QCoreApplication.setApplicationName(APP_ID)
    QCoreApplication.setApplicationVersion(__version__)
    QSettings.setDefaultFormat(QSettings.Format.IniFormat)

    app = QApplication(list(argv) if argv is not None else sys.argv)
    app.setApplicationDisplayName(APP_NAME)
    return app
