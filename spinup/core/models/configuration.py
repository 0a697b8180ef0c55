"""
Configuration — the parsed top-level document plus the resolved host.

Loaded by ``spinup.core.config.loader``.  Read-only for the duration of
a run.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from spinup.core.models.command import CommandSet, CustomCommand
from spinup.core.models.files import FileDownloadOperation
from spinup.core.models.packages import PackageList
from spinup.core.models.snap import Snaps
from spinup.core.models.system import SystemDetails


class Configuration(BaseModel):
    """Everything a run may do, in one document."""

    package_list: PackageList | None = None
    file_downloads: list[FileDownloadOperation] | None = None
    snaps: Snaps | None = None
    custom_commands: list[CustomCommand] | None = None
    command_sets: list[CommandSet] | None = None
    refresh_system: bool = False

    # Never read from the file; injected by the loader from the host probe
    system_details: SystemDetails = Field(default_factory=SystemDetails, exclude=True)

    def validate_operations(self) -> None:
        """Run pre-execution checks that need no process (command set ids)."""
        for command_set in self.command_sets or []:
            command_set.validate_ordering()

    def with_system(self, system_details: SystemDetails) -> Configuration:
        return self.model_copy(update={"system_details": system_details})

    @property
    def download_count(self) -> int:
        return sum(len(op.files) for op in self.file_downloads or [])
