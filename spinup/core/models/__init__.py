"""
Domain models — pydantic types for spinup.

All models are re-exported here for convenient access:

    from spinup.core.models import Configuration, PackageList, SystemDetails
"""

from spinup.core.engine.host import PackageManager, TargetOperatingSystem
from spinup.core.models.system import SystemDetails, SystemRefreshOperation
from spinup.core.models.operation import RunnableOperation
from spinup.core.models.command import CommandSet, CustomCommand, OrderedCommand
from spinup.core.models.packages import DistroPackages, PackageList
from spinup.core.models.snap import SnapChannel, SnapPackage, Snaps, StandardSnaps
from spinup.core.models.files import FileDownloadDefinition, FileDownloadOperation
from spinup.core.models.process import ProcessResult
from spinup.core.models.configuration import Configuration

__all__ = [
    "CommandSet",
    "Configuration",
    "CustomCommand",
    "DistroPackages",
    "FileDownloadDefinition",
    "FileDownloadOperation",
    "OrderedCommand",
    "PackageList",
    "PackageManager",
    "ProcessResult",
    "RunnableOperation",
    "SnapChannel",
    "SnapPackage",
    "Snaps",
    "StandardSnaps",
    "SystemDetails",
    "SystemRefreshOperation",
    "TargetOperatingSystem",
]
