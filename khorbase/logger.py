"""Logger set-up driven by a nested configuration mapping."""

from __future__ import annotations

import atexit
import logging
import queue
import sys
from collections.abc import Mapping
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from typing import Any

TRACE = 5
OFF = logging.CRITICAL + 10

logging.addLevelName(TRACE, "TRACE")
logging.addLevelName(OFF, "OFF")

DEFAULT_PATTERN = "[%(asctime)s] [%(name)s] [thread %(thread)d] [%(levelname)s] %(message)s"
DEFAULT_FILE_NAME = "./log"
DEFAULT_MAX_FILE_SIZE = 1048576 * 20
DEFAULT_MAX_FILES = 10
DEFAULT_LEVEL = "WARNING"

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "TRACE": TRACE,
    "INFO": logging.INFO,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
    "OFF": OFF,
}

_listeners: dict[str, QueueListener] = {}


def level_from_name(name: str) -> int:
    """Map a configured level name to a logging level; unknown names give WARNING."""
    return _LEVELS.get(name, logging.WARNING)


def _lookup(configure: Any, super_key: str, default: Any, div: str = ":") -> Any:
    node = configure
    for part in super_key.split(div):
        if not isinstance(node, Mapping) or part not in node:
            return default
        node = node[part]
    if node is None:
        return default
    if isinstance(default, bool):
        return bool(node)
    if isinstance(default, int):
        return int(node)
    if isinstance(default, str):
        return str(node)
    return node


def _release(logger_name: str, logger: logging.Logger) -> None:
    listener = _listeners.pop(logger_name, None)
    if listener is not None:
        listener.stop()
        for handler in listener.handlers:
            handler.close()
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def _stop_all() -> None:
    for name in list(_listeners):
        _release(name, logging.getLogger(name))


atexit.register(_stop_all)


def prepare_logger(configure: Mapping | None, logger_name: str) -> logging.Logger:
    """Configure the logger ``logger_name`` from the ``log:<name>`` section.

    Records go to the console and to a rotating file. With ``async`` set
    (the default) they are handed over through a queue to a background
    listener. Preparing the same name again replaces its previous set-up.
    """
    prefix = f"log:{logger_name}"

    pattern = _lookup(configure, prefix + ":pattern", DEFAULT_PATTERN)
    level_name = _lookup(configure, prefix + ":level", DEFAULT_LEVEL)
    file_name = _lookup(configure, prefix + ":file_name", DEFAULT_FILE_NAME)
    max_file_size = _lookup(configure, prefix + ":max_file_size", DEFAULT_MAX_FILE_SIZE)
    max_files = _lookup(configure, prefix + ":max_files", DEFAULT_MAX_FILES)
    use_async = _lookup(configure, prefix + ":async", True)

    logger = logging.getLogger(logger_name)
    _release(logger_name, logger)

    formatter = logging.Formatter(pattern)
    file_handler = RotatingFileHandler(
        file_name, maxBytes=max_file_size, backupCount=max_files, encoding="utf-8"
    )
    file_handler.setFormatter(formatter)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)

    if use_async:
        records: queue.Queue = queue.Queue()
        listener = QueueListener(records, console_handler, file_handler)
        listener.start()
        _listeners[logger_name] = listener
        logger.addHandler(QueueHandler(records))
    else:
        logger.addHandler(console_handler)
        logger.addHandler(file_handler)

    logger.setLevel(level_from_name(level_name))
    logger.propagate = False
    logger.info("Logger prepare successful. level = %s", level_name)
    return logger