"""Pytest configuration and shared fixtures for klaw-decode tests."""

from __future__ import annotations

import logging
from collections.abc import Generator

import pytest

import klaw_decode._config as config_module
from klaw_decode._logging import LOGGER_NAME, clear_log_hooks


@pytest.fixture(autouse=True)
def reset_state(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Start every test with default config, no log hooks and pristine logging."""
    monkeypatch.delenv(config_module.LOG_LEVEL_ENV, raising=False)
    monkeypatch.setattr(config_module, '_config', None)
    clear_log_hooks()
    yield
    clear_log_hooks()
    package_logger = logging.getLogger(LOGGER_NAME)
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True


@pytest.fixture
def captured_events() -> list[dict]:
    """Log events received through a hook, after enabling debug logging."""
    from klaw_decode import add_log_hook, init

    events: list[dict] = []
    init(log_level='DEBUG')
    add_log_hook(events.append)
    return events
