"""
Installer drivers — feed configured operations to the runner in order.

Each driver is fail-fast: the first error aborts the rest of its
sequence and propagates to the caller.  Every driver returns the number
of operations it ran, so callers can tell "nothing configured" apart
from "done".
"""

from __future__ import annotations

import logging

from spinup.core.engine.runner import CommandRunner
from spinup.core.models.configuration import Configuration

logger = logging.getLogger(__name__)


def refresh_system(config: Configuration, runner: CommandRunner) -> int:
    """Run the package manager's update (if distinct) and upgrade."""
    operations = config.system_details.refresh_operations()
    for op in operations:
        runner.run(op, config.system_details)
    return len(operations)


def install_packages(config: Configuration, runner: CommandRunner) -> int:
    """Install the configured package list in one package-manager call."""
    if config.package_list is None:
        logger.info("No packages were detected in the configuration file")
        return 0

    runner.run(config.package_list, config.system_details)
    return 1


def run_custom_commands(config: Configuration, runner: CommandRunner) -> int:
    """Run single custom commands, then each command set in id order.

    Every command set is validated before the first command runs, so a
    duplicate ordering id never leaves a half-executed sequence behind.
    """
    command_sets = config.command_sets or []
    for command_set in command_sets:
        command_set.validate_ordering()

    count = 0
    for command in config.custom_commands or []:
        runner.run(command, config.system_details)
        count += 1

    for command_set in command_sets:
        for command in command_set.runnable_commands():
            runner.run(command, config.system_details)
            count += 1

    if count == 0:
        logger.info("No custom commands were detected in the configuration file")
    return count


def install_snap_packages(config: Configuration, runner: CommandRunner) -> int:
    """Install the standard snap batch, then each alternate snap."""
    if config.snaps is None:
        logger.info("No snaps were detected in the configuration file")
        return 0

    runner.run(config.snaps.standard_snaps, config.system_details)
    count = 1

    for snap in config.snaps.alternate_snaps or []:
        runner.run(snap, config.system_details)
        count += 1

    return count
