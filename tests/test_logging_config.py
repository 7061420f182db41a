import logging

import pytest

from delve.logging_config import LOG_LEVEL_ENV_VAR, configure_logging, resolve_level


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_resolve_level_precedence(monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV_VAR, "warning")
    assert resolve_level(logging.DEBUG) == logging.DEBUG
    assert resolve_level() == logging.WARNING
    monkeypatch.setenv(LOG_LEVEL_ENV_VAR, "nonsense")
    assert resolve_level() == logging.INFO
    monkeypatch.delenv(LOG_LEVEL_ENV_VAR)
    assert resolve_level(default_level=logging.ERROR) == logging.ERROR


def test_configure_logging_installs_single_handler(restore_root_logger, monkeypatch):
    monkeypatch.delenv(LOG_LEVEL_ENV_VAR, raising=False)
    configure_logging()
    configure_logging(logging.DEBUG)
    root = restore_root_logger
    assert len(root.handlers) == 1
    assert root.level == logging.DEBUG
