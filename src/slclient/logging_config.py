"""
Logging Configuration
Sets up the 'slclient' logger for the GUI client.
"""
import logging
import sys
from typing import Optional

CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
# Movement tracing is only useful with the source line attached
DEBUG_FORMAT = "%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s"


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Attach handlers to the package logger. Safe to call more than once.

    Args:
        level: logging.DEBUG also logs every parsed move and read-only rejection.
        log_file: Optional path; the file is overwritten on each start.

    Returns:
        The configured 'slclient' logger.
    """
    logger = logging.getLogger("slclient")
    logger.setLevel(level)
    # Server text and map events should not end up twice in a root handler
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(
        DEBUG_FORMAT if level <= logging.DEBUG else CONSOLE_FORMAT,
        datefmt="%H:%M:%S",
    )

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.info(f"Logging initialized (level {logging.getLevelName(level)}).")
    return logger
