"""
Configuration & Path Management
===============================
This module serves as the central registry for file paths and global constants.

Why is this file needed?
------------------------
1. Abstraction: It prevents hardcoded paths (e.g., "C:/Users/...") scattered
   throughout the code.
2. Portability: It resolves the per-user data folder on Windows, macOS and
   Linux, where saved maps live.

Exports:
    MAP_FILE_EXTENSION (str): Extension of saved map files.
    DEFAULT_PORT (int): Port proposed by the connect dialog.
    get_maps_dir(): Absolute path of the maps folder.
"""
import os
import sys
from pathlib import Path

APP_NAME: str = "SLClient"

MAP_FILE_EXTENSION: str = ".slmap"
MAP_FILE_FILTER: str = f"SLClient Map-Dateien (*{MAP_FILE_EXTENSION})"

DEFAULT_HOST: str = "localhost"
DEFAULT_PORT: int = 4711

# Map canvas geometry in pixels
CELL_SIZE: int = 10
CELL_SPACING: int = 10
TOTAL_CELL_SIZE: int = CELL_SIZE + CELL_SPACING

MAPS_DIR_ENV: str = "SLCLIENT_MAPS_DIR"


def get_local_data_dir() -> str:
    """
    Per-user application data folder (not roaming).
    """
    if sys.platform.startswith("win"):
        base = os.environ.get("LOCALAPPDATA") or str(Path.home() / "AppData" / "Local")
    elif sys.platform == "darwin":
        base = str(Path.home() / "Library" / "Application Support")
    else:
        base = os.environ.get("XDG_DATA_HOME") or str(Path.home() / ".local" / "share")
    return os.path.join(base, APP_NAME)


def get_maps_dir() -> str:
    """
    Folder for saved maps. The environment variable SLCLIENT_MAPS_DIR
    takes precedence. The folder is not created here.
    """
    override = os.environ.get(MAPS_DIR_ENV)
    if override:
        return os.path.abspath(override)
    return os.path.join(get_local_data_dir(), "Maps")
