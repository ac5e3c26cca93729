import builtins
import logging

import pytest


@pytest.fixture
def browser_env(monkeypatch):
    """Simulate client-side execution by exposing a ``window`` global."""
    monkeypatch.setattr(builtins, "window", object(), raising=False)


@pytest.fixture
def server_env(monkeypatch):
    """Simulate server-side execution: no ``window`` global."""
    monkeypatch.delattr(builtins, "window", raising=False)


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
