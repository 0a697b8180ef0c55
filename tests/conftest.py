"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from spinup.adapters.mock import MockProcessAdapter
from spinup.core.engine.host import TargetOperatingSystem
from spinup.core.engine.runner import CommandRunner
from spinup.core.models.system import SystemDetails


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def mock_adapter() -> MockProcessAdapter:
    """A process adapter that records calls and succeeds by default."""
    return MockProcessAdapter()


@pytest.fixture
def runner(mock_adapter: MockProcessAdapter) -> CommandRunner:
    """A command runner wired to the mock adapter."""
    return CommandRunner(adapter=mock_adapter)


@pytest.fixture
def arch() -> SystemDetails:
    return SystemDetails(target_os=TargetOperatingSystem.ARCH)


@pytest.fixture
def debian() -> SystemDetails:
    return SystemDetails(target_os=TargetOperatingSystem.DEBIAN)


@pytest.fixture
def unknown_host() -> SystemDetails:
    return SystemDetails()


@pytest.fixture
def not_root(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pretend the test process is an unprivileged user."""
    monkeypatch.setattr("spinup.core.use_cases.run.process_is_root", lambda: False)
