"""Shared pytest fixtures and configuration for all tests."""

import logging

import pytest

from easify.compiler import default_cache
from easify.config import ENV_CACHE_SIZE, ENV_LOG_LEVEL, ENV_REJECT_DUPLICATES, configure


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Reset process-wide settings and the pattern cache around every test."""
    for name in (ENV_CACHE_SIZE, ENV_REJECT_DUPLICATES, ENV_LOG_LEVEL):
        monkeypatch.delenv(name, raising=False)
    configure(None)
    default_cache().clear()
    yield
    configure(None)
    default_cache().clear()
    easify_logger = logging.getLogger("easify")
    for handler in list(easify_logger.handlers):
        easify_logger.removeHandler(handler)
    easify_logger.propagate = True
    easify_logger.setLevel(logging.NOTSET)


@pytest.fixture
def head_rest_tail():
    """Pattern ``a, *b, c``."""
    from easify import compile_pattern

    return compile_pattern("a, *b, c")


@pytest.fixture
def slots_file(tmp_path):
    """Write a JSON slots document and return its path."""
    def _write(content: str):
        path = tmp_path / "slots.json"
        path.write_text(content, encoding="utf-8")
        return path

    return _write
