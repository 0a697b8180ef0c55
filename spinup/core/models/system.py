"""
System details — the environment context threaded into every operation.

``SystemDetails`` is created once per run (from os-release, or
explicitly in tests) and never mutated.  It also synthesizes the
system refresh operations (update / upgrade) from the package manager
of the resolved host.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from spinup.core.engine.host import (
    PackageManager,
    TargetOperatingSystem,
    package_manager_for,
    resolve_target_os,
)
from spinup.core.errors import EmptyCommandError


class SystemDetails(BaseModel):
    """Resolved host identity."""

    model_config = ConfigDict(frozen=True)

    target_os: TargetOperatingSystem = TargetOperatingSystem.UNKNOWN

    @classmethod
    def from_release(cls, os_id: str | None, os_id_like: str | None = None) -> SystemDetails:
        """Build from raw os-release ``ID`` / ``ID_LIKE`` strings."""
        return cls(target_os=resolve_target_os(os_id, os_id_like))

    @property
    def current_os(self) -> TargetOperatingSystem:
        return self.target_os

    @property
    def is_supported(self) -> bool:
        return self.target_os.is_supported

    @property
    def package_manager(self) -> PackageManager:
        return package_manager_for(self.target_os)

    def refresh_operations(self) -> list[SystemRefreshOperation]:
        """Update + upgrade operations for this host, in run order."""
        manager = self.package_manager
        ops = []
        update = update_operation(manager)
        if update is not None:
            ops.append(update)
        ops.append(upgrade_operation(manager))
        return ops


class SystemRefreshOperation(BaseModel):
    """A package-manager update or upgrade, synthesized rather than configured."""

    model_config = ConfigDict(frozen=True)

    manager: str
    subcommand: str = ""
    autoconfirm: str = ""

    def command_name(self, system_details: SystemDetails) -> str:
        if not self.manager.strip():
            raise EmptyCommandError("Cannot run update/upgrade operations on this platform")
        return self.manager

    def args(self, system_details: SystemDetails) -> list[str] | None:
        args = [a for a in (self.subcommand, self.autoconfirm) if a]
        return args or None

    def needs_root(self) -> bool:
        return True


def update_operation(manager: PackageManager) -> SystemRefreshOperation | None:
    """The update op, or None when it would just repeat the upgrade.

    dnf and yum use ``upgrade`` for both; running it twice is redundant.
    """
    if manager.update_subcommand == manager.upgrade_subcommand:
        return None
    return SystemRefreshOperation(
        manager=manager.name,
        subcommand=manager.update_subcommand,
        autoconfirm=manager.autoconfirm,
    )


def upgrade_operation(manager: PackageManager) -> SystemRefreshOperation:
    return SystemRefreshOperation(
        manager=manager.name,
        subcommand=manager.upgrade_subcommand,
        autoconfirm=manager.autoconfirm,
    )
