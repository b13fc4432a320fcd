"""Tests for the logging helpers."""

import logging

from easify.observability import configure_logging, get_logger
from easify.observability.logging import resolve_level


class TestLogging:
    def test_get_logger_is_cached(self):
        assert get_logger("easify.test") is get_logger("easify.test")

    def test_resolve_level(self):
        assert resolve_level("warn") == logging.WARNING
        assert resolve_level("DEBUG") == logging.DEBUG
        assert resolve_level(None) == logging.WARNING
        assert resolve_level("bogus") == logging.WARNING
        assert resolve_level(logging.ERROR) == logging.ERROR

    def test_configure_logging_installs_one_handler(self):
        first = configure_logging("debug")
        second = configure_logging("info")

        assert first is second
        assert len(second.handlers) == 1
        assert second.level == logging.INFO
        assert second.propagate is False
