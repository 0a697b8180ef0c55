"""
Package lists — the native package manager batch install.

One ``PackageList`` becomes a single package-manager invocation:

    [install-subcommand, autoconfirm, *base_packages, *distro override]

The distro override is the first ``DistroPackages`` entry whose
``target_os`` resolves to the same family as the current host.
"""

from __future__ import annotations

from pydantic import BaseModel

from spinup.core.engine.host import lookup_os_name
from spinup.core.errors import NoPackageManagerError, NoPackagesConfiguredError
from spinup.core.models.system import SystemDetails


class DistroPackages(BaseModel):
    """Extra packages installed only on one distribution family."""

    target_os: str
    packages: list[str] | None = None

    def has_packages(self) -> bool:
        return bool(self.packages)

    def applies_to(self, system_details: SystemDetails) -> bool:
        target = lookup_os_name(self.target_os)
        return target.is_supported and target.family == system_details.current_os.family


class PackageList(BaseModel):
    """Base packages plus per-distro overrides."""

    base_packages: list[str] | None = None
    distro_packages: list[DistroPackages] | None = None

    def has_base_packages(self) -> bool:
        return bool(self.base_packages)

    def distro_override(self, system_details: SystemDetails) -> DistroPackages | None:
        for entry in self.distro_packages or []:
            if entry.applies_to(system_details) and entry.has_packages():
                return entry
        return None

    def has_packages(self, system_details: SystemDetails) -> bool:
        return self.has_base_packages() or self.distro_override(system_details) is not None

    def command_name(self, system_details: SystemDetails) -> str:
        if not self.has_packages(system_details):
            raise NoPackagesConfiguredError()
        manager = system_details.package_manager
        if not manager.can_run:
            raise NoPackageManagerError()
        return manager.name

    def args(self, system_details: SystemDetails) -> list[str] | None:
        if not self.has_packages(system_details):
            return None
        manager = system_details.package_manager
        if not manager.can_run:
            return None

        install_args = manager.install_prefix()
        install_args.extend(self.base_packages or [])
        override = self.distro_override(system_details)
        if override is not None:
            install_args.extend(override.packages or [])
        return install_args

    def needs_root(self) -> bool:
        return True
