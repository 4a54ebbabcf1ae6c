"""Unit tests for mimsreport logging configuration."""

from __future__ import annotations

import logging
import sys

import pytest

import mimsreport
from mimsreport.utils.logging import configure_logging, get_logger


@pytest.fixture
def clean_logger():
    logger = logging.getLogger("mimsreport")
    saved_handlers = logger.handlers[:]
    saved_level = logger.level
    yield logger
    for h in logger.handlers[:]:
        if h not in saved_handlers:
            logger.removeHandler(h)
    for h in saved_handlers:
        if h not in logger.handlers:
            logger.addHandler(h)
    logger.setLevel(saved_level)


def _stderr_handlers(logger):
    return [
        h for h in logger.handlers
        if isinstance(h, logging.StreamHandler) and getattr(h, "stream", None) is sys.stderr
    ]


def test_package_logger_has_null_handler():
    assert any(isinstance(h, logging.NullHandler) for h in logging.getLogger("mimsreport").handlers)
    assert mimsreport.__version__


def test_get_logger_default_and_named():
    assert get_logger().name == "mimsreport"
    assert get_logger("mimsreport.pipeline.loader").name == "mimsreport.pipeline.loader"


def test_configure_logging_adds_one_handler(clean_logger):
    configure_logging(level="DEBUG")
    configure_logging(level="DEBUG")
    assert len(_stderr_handlers(clean_logger)) == 1
    assert clean_logger.level == logging.DEBUG


def test_configure_logging_env_level(clean_logger, monkeypatch):
    monkeypatch.setenv("MIMSREPORT_LOG_LEVEL", "warning")
    configure_logging(force=True)
    assert clean_logger.level == logging.WARNING
