"""
Host capability resolver — OS identity → package-manager command shape.

Pure, deterministic, no I/O.  The os-release probe that feeds it lives
in ``spinup.core.services.host_detect``; ambiguity (an unresolved host)
is returned as ``TargetOperatingSystem.UNKNOWN`` and an all-empty
``PackageManager`` and left to the call sites.

    resolve_target_os("manjaro")                  → ARCH
    resolve_target_os("bsd", "distro2 centos")    → FEDORA
    package_manager_for(TargetOperatingSystem.ARCH).name → "pacman"
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict


class TargetOperatingSystem(str, Enum):
    """Closed classification of the host operating system."""

    ARCH = "arch"
    DEBIAN = "debian"
    UBUNTU = "ubuntu"
    MINT = "mint"
    FEDORA = "fedora"
    REDHAT = "redhat"  # distinct until dnf ships by default
    UNKNOWN = "unknown"

    @property
    def family(self) -> TargetOperatingSystem:
        """The distribution family whose packages this host accepts."""
        if self in (TargetOperatingSystem.UBUNTU, TargetOperatingSystem.MINT):
            return TargetOperatingSystem.DEBIAN
        return self

    @property
    def is_supported(self) -> bool:
        return self is not TargetOperatingSystem.UNKNOWN


class PackageManager(BaseModel):
    """Command shape of a native package manager.

    Every field may be empty.  An empty ``name`` means "no package
    manager on this host" and nothing can be installed.
    """

    model_config = ConfigDict(frozen=True)

    name: str = ""
    install_subcommand: str = ""
    update_subcommand: str = ""
    upgrade_subcommand: str = ""
    autoconfirm: str = ""

    @property
    def can_run(self) -> bool:
        return bool(self.name.strip())

    def install_prefix(self) -> list[str]:
        """Install subcommand and autoconfirm flag, skipping empty parts."""
        return [p for p in (self.install_subcommand, self.autoconfirm) if p]


# ── Static tables ───────────────────────────────────────────────

OS_ALIASES: MappingProxyType[str, TargetOperatingSystem] = MappingProxyType({
    "arch": TargetOperatingSystem.ARCH,
    "archlinux": TargetOperatingSystem.ARCH,
    "manjaro": TargetOperatingSystem.ARCH,
    "debian": TargetOperatingSystem.DEBIAN,
    "linuxmint": TargetOperatingSystem.DEBIAN,
    "mint": TargetOperatingSystem.DEBIAN,
    "ubuntu": TargetOperatingSystem.DEBIAN,
    "fedora": TargetOperatingSystem.FEDORA,
    "centos": TargetOperatingSystem.FEDORA,
    "rhel": TargetOperatingSystem.REDHAT,
})

_APT = PackageManager(
    name="apt-get",
    install_subcommand="install",
    update_subcommand="update",
    upgrade_subcommand="upgrade",
    autoconfirm="-y",
)

PACKAGE_MANAGERS: MappingProxyType[TargetOperatingSystem, PackageManager] = MappingProxyType({
    TargetOperatingSystem.ARCH: PackageManager(
        name="pacman",
        install_subcommand="-S",
        update_subcommand="-Sy",
        upgrade_subcommand="-Syu",
        autoconfirm="--noconfirm",
    ),
    TargetOperatingSystem.DEBIAN: _APT,
    TargetOperatingSystem.UBUNTU: _APT,
    TargetOperatingSystem.MINT: _APT,
    TargetOperatingSystem.FEDORA: PackageManager(
        name="dnf",
        install_subcommand="install",
        update_subcommand="upgrade",
        upgrade_subcommand="upgrade",
        autoconfirm="--assumeyes",
    ),
    TargetOperatingSystem.REDHAT: PackageManager(
        name="yum",
        install_subcommand="install",
        update_subcommand="upgrade",
        upgrade_subcommand="upgrade",
        autoconfirm="--assumeyes",
    ),
    TargetOperatingSystem.UNKNOWN: PackageManager(),
})


# ── Resolution ──────────────────────────────────────────────────


def lookup_os_name(name: str | None) -> TargetOperatingSystem:
    """Look a single identifier up in the alias table."""
    if not name:
        return TargetOperatingSystem.UNKNOWN
    return OS_ALIASES.get(name.strip().lower(), TargetOperatingSystem.UNKNOWN)


def resolve_target_os(
    os_id: str | None,
    os_id_like: str | None = None,
) -> TargetOperatingSystem:
    """Classify the host from its os-release ``ID`` and ``ID_LIKE``.

    ``os_id`` wins when it resolves.  Otherwise the whitespace-separated
    ``os_id_like`` tokens are tried in order and the first one that
    resolves is returned.

    Args:
        os_id: The ``ID`` value (e.g. ``"linuxmint"``).
        os_id_like: The ``ID_LIKE`` value (e.g. ``"ubuntu debian"``).

    Returns:
        The matching classification, or ``UNKNOWN``.
    """
    target = lookup_os_name(os_id)
    if target.is_supported or not os_id_like:
        return target

    for token in os_id_like.split():
        candidate = lookup_os_name(token)
        if candidate.is_supported:
            return candidate

    return TargetOperatingSystem.UNKNOWN


def package_manager_for(target_os: TargetOperatingSystem) -> PackageManager:
    """Total mapping; ``UNKNOWN`` yields the all-empty descriptor."""
    return PACKAGE_MANAGERS.get(target_os, PACKAGE_MANAGERS[TargetOperatingSystem.UNKNOWN])
