"""
Run use case — provision the machine from a configuration file.

This is the top-level orchestrator: it loads the configuration,
validates it, and runs each enabled phase in order.  The full vertical
slice from user intent to executed operations.

Phase order:
    refresh → packages → downloads → commands → snaps

Phases are fail-fast: the first failing phase stops the run and the
remaining phases are reported as not run.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from spinup.core.config.loader import ConfigError, load_configuration
from spinup.core.engine import installers
from spinup.core.engine.downloads import execute_download_operations
from spinup.core.engine.runner import CommandRunner
from spinup.core.errors import RootProcessError, SpinupError
from spinup.core.models.configuration import Configuration
from spinup.core.models.system import SystemDetails
from spinup.core.services.host_detect import process_is_root

logger = logging.getLogger(__name__)

PhaseStatus = Literal["ok", "skipped", "failed", "not_run"]


@dataclass
class RunOptions:
    """Which phases to run, and how."""

    config_path: Path
    run_package_installs: bool = True
    run_file_downloads: bool = True
    run_snap_installs: bool = True
    run_custom_commands: bool = True
    # None = use the configuration's own ``refresh_system`` flag
    refresh_system: bool | None = None
    mock_mode: bool = False
    max_download_workers: int | None = None


@dataclass
class PhaseResult:
    """Outcome of one phase."""

    name: str
    status: PhaseStatus = "not_run"
    operations: int = 0
    error: str | None = None

    def to_dict(self) -> dict:
        result: dict = {"name": self.name, "status": self.status, "operations": self.operations}
        if self.error:
            result["error"] = self.error
        return result


@dataclass
class RunResult:
    """Result of a full run."""

    config: Configuration | None = None
    phases: list[PhaseResult] = field(default_factory=list)
    error: str | None = None
    mock_mode: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None and all(p.status != "failed" for p in self.phases)

    @property
    def failed_phase(self) -> PhaseResult | None:
        for phase in self.phases:
            if phase.status == "failed":
                return phase
        return None

    def to_dict(self) -> dict:
        result: dict = {"ok": self.ok, "mock": self.mock_mode}
        if self.error:
            result["error"] = self.error
        if self.config is not None:
            result["target_os"] = self.config.system_details.target_os.value
        result["phases"] = [p.to_dict() for p in self.phases]
        return result


def run_spinup(
    options: RunOptions,
    runner: CommandRunner | None = None,
    system_details: SystemDetails | None = None,
) -> RunResult:
    """Load the configuration and run every enabled phase.

    Args:
        options: Phase switches and the configuration path.
        runner: Optional pre-configured runner (tests, mock mode).
        system_details: Optional host identity; probed when omitted.

    Returns:
        RunResult; ``ok`` is False when loading failed or a phase failed.
    """
    result = RunResult(mock_mode=options.mock_mode)

    if process_is_root():
        result.error = str(RootProcessError())
        return result

    # ── Load and validate ────────────────────────────────────────
    try:
        config = load_configuration(options.config_path, system_details)
        config.validate_operations()
    except ConfigError as e:
        result.error = str(e)
        return result
    except SpinupError as e:
        result.error = f"Invalid configuration: {e}"
        return result
    result.config = config

    # ── Set up runner ────────────────────────────────────────────
    if runner is None:
        if options.mock_mode:
            from spinup.adapters.mock import MockProcessAdapter

            runner = CommandRunner(adapter=MockProcessAdapter())
        else:
            runner = CommandRunner()

    refresh = config.refresh_system if options.refresh_system is None else options.refresh_system

    phases: list[tuple[str, bool, Callable[[], int]]] = [
        ("refresh", refresh, lambda: installers.refresh_system(config, runner)),
        ("packages", options.run_package_installs, lambda: installers.install_packages(config, runner)),
        ("downloads", options.run_file_downloads, lambda: _run_downloads(config, runner, options)),
        ("commands", options.run_custom_commands, lambda: installers.run_custom_commands(config, runner)),
        ("snaps", options.run_snap_installs, lambda: installers.install_snap_packages(config, runner)),
    ]

    # ── Execute ──────────────────────────────────────────────────
    failed = False
    for name, enabled, action in phases:
        phase = PhaseResult(name=name)
        result.phases.append(phase)

        if failed:
            continue
        if not enabled:
            phase.status = "skipped"
            continue

        logger.debug("Running phase: %s", name)
        try:
            phase.operations = action()
        except SpinupError as e:
            phase.status = "failed"
            phase.error = str(e)
            logger.error("Phase '%s' failed: %s", name, e)
            failed = True
            continue

        phase.status = "ok" if phase.operations else "skipped"

    return result


def _run_downloads(config: Configuration, runner: CommandRunner, options: RunOptions) -> int:
    execute_download_operations(
        config.file_downloads,
        config.system_details,
        runner,
        max_workers=options.max_download_workers,
    )
    return len(config.file_downloads or [])
