"""
Logging setup for selection sync.

Every module logs through ``get_logger(<module>)``, a child of the
``selection_sync`` logger. Nothing is emitted until ``setup_logging`` attaches
handlers, so library users can route the records wherever they like.
"""
import logging
import sys
from pathlib import Path
from typing import Optional, Union

ROOT_LOGGER = "selection_sync"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _level(value: Union[int, str]) -> int:
    if isinstance(value, int):
        return value
    level = logging.getLevelName(value.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {value}")
    return level


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[Path] = Path("selection_sync.log"),
) -> logging.Logger:
    """Attach a stderr handler at ``level`` and, if ``log_file`` is set, a DEBUG file handler.

    Calling it again leaves existing handlers in place.
    """
    root = logging.getLogger(ROOT_LOGGER)
    if root.handlers:
        return root

    root.setLevel(logging.DEBUG)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers = [(logging.StreamHandler(sys.stderr), _level(level))]
    if log_file is not None:
        handlers.append((logging.FileHandler(log_file, encoding="utf-8"), logging.DEBUG))

    for handler, handler_level in handlers:
        handler.setLevel(handler_level)
        handler.setFormatter(formatter)
        root.addHandler(handler)

    return root


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
