"""
Application Initialization
==========================
This module wires up the application and starts the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Sets up logging from the command line options.
2. Resolves the maps folder.
3. Creates the Main Window, which owns the network session and opens the
   map window on demand.
"""
import argparse
import logging
import sys
from typing import Optional, Sequence

from slclient.application import create_app
from slclient.config import get_maps_dir
from slclient.logging_config import setup_logging
from slclient.view.main_window import MainWindow

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="slclient", description="MUD client with auto-mapper.")
    parser.add_argument("--debug", action="store_true", help="log everything, including each move")
    parser.add_argument("--log-file", default=None, help="also write the log to this file")
    parser.add_argument("--maps-dir", default=None, help="folder for saved maps")
    # Qt gets the full argv; ignore what it understands and we do not
    args, _ = parser.parse_known_args(argv)
    return args


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)

    # 1. Setup Logging (Console + Optional File)
    setup_logging(level=logging.DEBUG if args.debug else logging.INFO, log_file=args.log_file)

    # 2. Create the Qt Application
    app = create_app()

    # 3. Initialize the Main Window
    maps_dir = args.maps_dir or get_maps_dir()
    logger.info(f"Maps folder: {maps_dir}")
    window = MainWindow(maps_dir)
    window.show()

    # 4. Start Event Loop
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
