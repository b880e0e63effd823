"""
Pytest configuration and shared fixtures.

Provides an isolated task store, an in-memory telemetry sink with an
inline emitter, and a TestClient for a fully wired app.
"""

import pytest
from fastapi.testclient import TestClient

from taskboard.core.config.loader import clear_cache
from taskboard.core.config.models import TaskboardConfig, TelemetryConfig
from taskboard.core.tasks.store import TaskStore
from taskboard.core.telemetry.emitter import TelemetryEmitter
from taskboard.core.telemetry.sinks import MemorySink
from taskboard.web.app import create_app

# ==============================================================================
# Configuration Fixtures
# ==============================================================================


@pytest.fixture(autouse=True)
def clean_config_env(monkeypatch):
    """Keep TASKBOARD_* variables and the config cache from leaking between tests."""
    for key in (
        "TASKBOARD_HOST",
        "TASKBOARD_PORT",
        "TASKBOARD_METRICS_PATH",
        "TASKBOARD_TELEMETRY_ENABLED",
        "TASKBOARD_VALIDATE_EDITS",
    ):
        monkeypatch.delenv(key, raising=False)
    clear_cache()
    yield
    clear_cache()


@pytest.fixture
def config():
    """Configuration with file and log sinks disabled."""
    return TaskboardConfig(
        telemetry=TelemetryConfig(csv_path=None, log_events=False, background=False)
    )


# ==============================================================================
# Component Fixtures
# ==============================================================================


@pytest.fixture
def store():
    """Provide an empty task store."""
    return TaskStore()


@pytest.fixture
def sink():
    """Provide an in-memory telemetry sink."""
    return MemorySink()


@pytest.fixture
def emitter(sink):
    """Provide an emitter writing inline to the memory sink."""
    return TelemetryEmitter([sink], background=False)


# ==============================================================================
# Web Fixtures
# ==============================================================================


@pytest.fixture
def app(config, store, emitter):
    """Provide a wired application sharing the store and emitter fixtures."""
    return create_app(config, store=store, emitter=emitter)


@pytest.fixture
def client(app):
    """Provide a test client that does not follow redirects."""
    return TestClient(app, follow_redirects=False)
