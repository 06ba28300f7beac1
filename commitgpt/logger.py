"""Logging helpers shared by every commitgpt module.

All commitgpt loggers live under the ``commitgpt`` namespace. A single
stderr handler sits on that namespace logger, so child loggers only need a
name and inherit its level and output.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO, Final, Optional

LOG_LEVEL_ENV_VAR: Final[str] = "COMMITGPT_LOG_LEVEL"
NO_COLOR_ENV_VAR: Final[str] = "NO_COLOR"
ROOT_LOGGER_NAME: Final[str] = "commitgpt"

_FORMAT: Final[str] = "%(levelname)-7s %(name)s: %(message)s"
_RESET: Final[str] = "\033[0m"

_LEVEL_COLORS: Final[dict[int, str]] = {
    logging.DEBUG: "\033[2;37m",
    logging.INFO: "\033[36m",
    logging.WARNING: "\033[1;33m",
    logging.ERROR: "\033[1;31m",
    logging.CRITICAL: "\033[1;35m",
}


class LevelColorFormatter(logging.Formatter):
    """Colour whole records by level, but only when writing to a terminal.

    Colour is also dropped when ``NO_COLOR`` is set to a non-empty value.
    """

    def __init__(self, stream: Optional[IO[str]] = None) -> None:
        super().__init__(_FORMAT)
        self.stream = stream

    def use_color(self) -> bool:
        if os.getenv(NO_COLOR_ENV_VAR):
            return False
        isatty = getattr(self.stream, "isatty", None)
        return bool(isatty and isatty())

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = _LEVEL_COLORS.get(record.levelno)
        if color is None or not self.use_color():
            return message
        return f"{color}{message}{_RESET}"


def parse_level(level_name: Optional[str]) -> Optional[int]:
    """Map a level name such as ``"debug"`` to its number, or ``None``."""

    if not level_name:
        return None
    return logging.getLevelNamesMapping().get(level_name.strip().upper())


def _root_logger() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not any(isinstance(handler.formatter, LevelColorFormatter) for handler in root.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(LevelColorFormatter(handler.stream))
        root.addHandler(handler)
    return root


def commitgpt_logger(name: str) -> logging.Logger:
    """Return the logger *name*, placed under the ``commitgpt`` namespace.

    The namespace logger picks up ``COMMITGPT_LOG_LEVEL`` whenever it is set
    to a known level name.
    """

    root = _root_logger()
    level = parse_level(os.getenv(LOG_LEVEL_ENV_VAR))
    if level is not None:
        root.setLevel(level)

    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def set_commitgpt_log_level(level_name: str) -> None:
    """Set the level of every commitgpt logger; unknown names reset it."""

    os.environ[LOG_LEVEL_ENV_VAR] = level_name
    level = parse_level(level_name)
    _root_logger().setLevel(level if level is not None else logging.NOTSET)
