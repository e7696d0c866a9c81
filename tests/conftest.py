"""Shared test fixtures for apiguard.

Provides isolated config directories, in-memory credential storage,
private event buses, and resets of the global output and event-bus
state between tests.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from apiguard.auth import CredentialSession, MemoryCredentialStore
from apiguard.events import EventBus, reset_event_bus
from apiguard.models import ClientConfig
from apiguard.output import OutputFormat, OutputManager, reset_output, set_output


# ---------------------------------------------------------------------------
# Auto-reset global state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_globals() -> None:
    """Reset the global OutputManager and EventBus after every test."""
    yield
    reset_output()
    reset_event_bus()


# ---------------------------------------------------------------------------
# Config isolation
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point every XDG directory into tmp_path and clear APIGUARD_* variables."""
    monkeypatch.setattr("apiguard.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for var in ["APIGUARD_API_BASE_URL", "APIGUARD_TIMEOUT", "APIGUARD_DEBUG"]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Client collaborators
# ---------------------------------------------------------------------------


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(base_url="https://api.example.com/api", timeout=5)


@pytest.fixture
def store() -> MemoryCredentialStore:
    return MemoryCredentialStore()


@pytest.fixture
def session(store: MemoryCredentialStore) -> CredentialSession:
    return CredentialSession(store)


@pytest.fixture
def bus() -> EventBus:
    return EventBus()


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a PLAIN-format, quiet OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True, no_color=True)
    set_output(output)
    yield output
    reset_output()
