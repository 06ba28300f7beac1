import logging
import os

import pytest

from commitgpt.logger import LOG_LEVEL_ENV_VAR, NO_COLOR_ENV_VAR, ROOT_LOGGER_NAME


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's OPENAI_* variables out of the settings under test."""

    for name in list(os.environ):
        if name.startswith("OPENAI_"):
            monkeypatch.delenv(name, raising=False)
    # set first so teardown also removes values written by set_commitgpt_log_level
    monkeypatch.setenv(LOG_LEVEL_ENV_VAR, "")
    monkeypatch.delenv(LOG_LEVEL_ENV_VAR)
    monkeypatch.delenv(NO_COLOR_ENV_VAR, raising=False)


@pytest.fixture(autouse=True)
def _reset_log_level():
    root = logging.getLogger(ROOT_LOGGER_NAME)
    level = root.level
    yield
    root.setLevel(level)
