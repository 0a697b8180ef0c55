"""
Config check use case — validate a configuration without running it.

Collects every problem a run would hit before spawning anything:
parse and schema errors, duplicate command-set ids, an unsupported
host for a configured package list, empty commands and snaps.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from spinup.core.config.loader import ConfigError, load_configuration
from spinup.core.errors import SpinupError
from spinup.core.models.configuration import Configuration
from spinup.core.models.operation import RunnableOperation
from spinup.core.models.system import SystemDetails


@dataclass
class ConfigCheckResult:
    """Result of a configuration check."""

    config: Configuration | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict:
        result: dict = {
            "valid": self.valid,
            "errors": self.errors,
            "warnings": self.warnings,
        }
        if self.config is not None:
            c = self.config
            result["target_os"] = c.system_details.target_os.value
            result["summary"] = {
                "package_list": c.package_list is not None,
                "file_downloads": len(c.file_downloads or []),
                "files": c.download_count,
                "custom_commands": len(c.custom_commands or []),
                "command_sets": len(c.command_sets or []),
                "snaps": c.snaps is not None,
                "refresh_system": c.refresh_system,
            }
        return result


def check_config(
    config_path: Path,
    system_details: SystemDetails | None = None,
) -> ConfigCheckResult:
    """Load and validate the configuration at ``config_path``."""
    result = ConfigCheckResult()

    try:
        config = load_configuration(config_path, system_details)
    except ConfigError as e:
        result.errors.append(str(e))
        return result

    result.config = config
    system = config.system_details

    if not system.is_supported:
        result.warnings.append(
            "Host operating system not recognized; package installs and "
            "system refresh will fail"
        )

    for index, command_set in enumerate(config.command_sets or []):
        try:
            command_set.validate_ordering()
        except SpinupError as e:
            result.errors.append(f"command_sets[{index}]: {e}")

    checks: list[tuple[str, RunnableOperation]] = []
    if config.package_list is not None:
        checks.append(("package_list", config.package_list))
    for index, command in enumerate(config.custom_commands or []):
        checks.append((f"custom_commands[{index}]", command))
    for s_index, command_set in enumerate(config.command_sets or []):
        for c_index, command in enumerate(command_set.commands):
            checks.append((f"command_sets[{s_index}].commands[{c_index}]", command))
    for index, op in enumerate(config.file_downloads or []):
        if op.after_complete is not None:
            checks.append((f"file_downloads[{index}].after_complete", op.after_complete))
    if config.snaps is not None:
        checks.append(("snaps.standard_snaps", config.snaps.standard_snaps))
        for index, snap in enumerate(config.snaps.alternate_snaps or []):
            checks.append((f"snaps.alternate_snaps[{index}]", snap))

    for label, operation in checks:
        try:
            operation.command_name(system)
        except SpinupError as e:
            result.errors.append(f"{label}: {e}")

    return result
