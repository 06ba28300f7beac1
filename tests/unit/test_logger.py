import io
import logging

import pytest

from commitgpt.logger import (
    LOG_LEVEL_ENV_VAR,
    NO_COLOR_ENV_VAR,
    ROOT_LOGGER_NAME,
    LevelColorFormatter,
    commitgpt_logger,
    parse_level,
    set_commitgpt_log_level,
)


class FakeTerminal(io.StringIO):
    def isatty(self) -> bool:
        return True


def _record(level: int = logging.ERROR, message: str = "boom") -> logging.LogRecord:
    return logging.LogRecord("commitgpt.tests.format", level, __file__, 1, message, None, None)


# === Logger wiring ==========================================================


def test_single_handler_sits_on_namespace_logger():
    logger = commitgpt_logger("commitgpt.tests.handler")
    commitgpt_logger("commitgpt.tests.other")

    root = logging.getLogger(ROOT_LOGGER_NAME)
    assert logger.handlers == []
    assert len([h for h in root.handlers if isinstance(h.formatter, LevelColorFormatter)]) == 1


def test_foreign_names_are_moved_under_the_namespace():
    assert commitgpt_logger("__main__").name == "commitgpt.__main__"
    assert commitgpt_logger("commitgpt").name == "commitgpt"


def test_logger_reads_level_from_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv(LOG_LEVEL_ENV_VAR, "warning")

    logger = commitgpt_logger("commitgpt.tests.env_level")

    assert logger.getEffectiveLevel() == logging.WARNING


def test_unknown_level_name_leaves_level_alone(monkeypatch: pytest.MonkeyPatch):
    set_commitgpt_log_level("INFO")
    monkeypatch.setenv(LOG_LEVEL_ENV_VAR, "chatty")

    logger = commitgpt_logger("commitgpt.tests.bad_level")

    assert logger.getEffectiveLevel() == logging.INFO


def test_set_log_level_reaches_existing_loggers():
    logger = commitgpt_logger("commitgpt.tests.update")

    set_commitgpt_log_level("DEBUG")

    assert logger.isEnabledFor(logging.DEBUG)


def test_set_log_level_with_unknown_name_resets_namespace_level():
    set_commitgpt_log_level("DEBUG")

    set_commitgpt_log_level("chatty")

    assert logging.getLogger(ROOT_LOGGER_NAME).level == logging.NOTSET


@pytest.mark.parametrize(
    ("name", "expected"),
    [("debug", logging.DEBUG), (" Error ", logging.ERROR), ("WARN", logging.WARNING), ("chatty", None), ("", None), (None, None)],
)
def test_parse_level(name, expected):
    assert parse_level(name) == expected


# === Formatting =============================================================


def test_formatter_prefixes_level_and_logger_name():
    rendered = LevelColorFormatter(io.StringIO()).format(_record())

    assert rendered == "ERROR   commitgpt.tests.format: boom"


def test_formatter_colours_records_on_a_terminal():
    rendered = LevelColorFormatter(FakeTerminal()).format(_record())

    assert rendered.startswith("\033[1;31m")
    assert rendered.endswith("\033[0m")
    assert "commitgpt.tests.format: boom" in rendered


def test_no_color_disables_colour_on_a_terminal(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv(NO_COLOR_ENV_VAR, "1")

    rendered = LevelColorFormatter(FakeTerminal()).format(_record(logging.WARNING))

    assert "\033[" not in rendered
    assert rendered == "WARNING commitgpt.tests.format: boom"
