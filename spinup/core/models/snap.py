"""
Snap packages.

``StandardSnaps`` installs bare names in one ``snap install`` call
(stable channel, strict confinement).  Each ``SnapPackage`` gets its
own call so it can carry a channel and ``--classic``.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from spinup.core.errors import EmptyCommandError
from spinup.core.models.system import SystemDetails

SNAP_BINARY = "snap"


class SnapChannel(str, Enum):
    STABLE = "stable"
    BETA = "beta"
    CANDIDATE = "candidate"
    EDGE = "edge"

    @property
    def flag(self) -> str:
        return f"--{self.value}"


class SnapPackage(BaseModel):
    """A single snap with its own channel and confinement."""

    name: str
    classic: bool = False
    channel: SnapChannel = SnapChannel.STABLE

    def command_name(self, system_details: SystemDetails) -> str:
        if not self.name.strip():
            raise EmptyCommandError("Cannot install a snap with no name")
        return SNAP_BINARY

    def args(self, system_details: SystemDetails) -> list[str] | None:
        args = ["install", self.name, self.channel.flag]
        if self.classic:
            args.append("--classic")
        return args

    def needs_root(self) -> bool:
        return True


class StandardSnaps(BaseModel):
    """Bare snap names installed together."""

    names: list[str] = Field(default_factory=list)

    def command_name(self, system_details: SystemDetails) -> str:
        if not self.names:
            raise EmptyCommandError("Snap list was present but no names were given")
        return SNAP_BINARY

    def args(self, system_details: SystemDetails) -> list[str] | None:
        if not self.names:
            return None
        return ["install", *self.names]

    def needs_root(self) -> bool:
        return True


class Snaps(BaseModel):
    """The ``snaps`` section of the configuration."""

    standard_snaps: StandardSnaps
    alternate_snaps: list[SnapPackage] | None = None
