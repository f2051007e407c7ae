import logging

import pytest

from gridarray.logging_config import configure_logging


@pytest.fixture
def root_logger():
    logger = logging.getLogger()
    handlers, level = list(logger.handlers), logger.level
    yield logger
    for h in list(logger.handlers):
        logger.removeHandler(h)
    for h in handlers:
        logger.addHandler(h)
    logger.setLevel(level)


def test_single_handler_installed(root_logger):
    configure_logging(logging.INFO)
    configure_logging(logging.INFO)
    assert len(root_logger.handlers) == 1
    assert root_logger.level == logging.INFO


def test_env_var_overrides_level(root_logger, monkeypatch):
    monkeypatch.setenv("GRIDARRAY_LOG_LEVEL", "debug")
    configure_logging(logging.WARNING)
    assert root_logger.level == logging.DEBUG


def test_unknown_env_level_keeps_default(root_logger, monkeypatch):
    monkeypatch.setenv("GRIDARRAY_LOG_LEVEL", "chatty")
    configure_logging(logging.ERROR)
    assert root_logger.level == logging.ERROR
