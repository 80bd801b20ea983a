"""
Development Runner
==================
Starts SLClient from a source checkout without installing it.

Usage:
    $ python run.py [--debug] [--log-file slclient.log] [--maps-dir ./Maps]

The 'src' folder is put in front of 'sys.path' so that 'import slclient'
resolves to this checkout.
"""
import os
import sys

SRC_DIR: str = os.path.join(os.path.dirname(os.path.abspath(__file__)), "src")
sys.path.insert(0, SRC_DIR)

if sys.platform.startswith("win"):
    import ctypes
    # Own taskbar entry instead of grouping under python.exe
    ctypes.windll.shell32.SetCurrentProcessExplicitAppUserModelID("SLClient.MudClient")

from slclient.main import main  # noqa: E402

if __name__ == "__main__":
    sys.exit(main())
