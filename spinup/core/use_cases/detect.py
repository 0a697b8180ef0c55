"""
Detect use case — show what spinup would drive on this host.
"""

from __future__ import annotations

from dataclasses import dataclass

from spinup.core.models.system import SystemDetails
from spinup.core.services.host_detect import read_os_release


@dataclass
class DetectResult:
    """Resolved host identity and its package-manager shape."""

    os_id: str | None
    os_id_like: str | None
    system: SystemDetails

    @property
    def supported(self) -> bool:
        return self.system.is_supported

    def to_dict(self) -> dict:
        manager = self.system.package_manager
        return {
            "os_id": self.os_id,
            "os_id_like": self.os_id_like,
            "target_os": self.system.target_os.value,
            "supported": self.supported,
            "package_manager": manager.model_dump(),
            "refresh": [
                [op.manager, *(op.args(self.system) or [])]
                for op in self.system.refresh_operations()
            ] if self.supported else [],
        }


def run_detect() -> DetectResult:
    """Probe os-release and resolve it."""
    os_id, os_id_like = read_os_release()
    system = SystemDetails.from_release(os_id, os_id_like)
    return DetectResult(os_id=os_id, os_id_like=os_id_like, system=system)
