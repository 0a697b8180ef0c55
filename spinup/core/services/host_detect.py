"""
Host probe — read os-release and resolve the current system.

Read-only.  The resolver itself is pure (``spinup.core.engine.host``);
this module is the only place that touches the host to feed it.
"""

from __future__ import annotations

import logging
import os
import platform

from spinup.core.models.system import SystemDetails

logger = logging.getLogger(__name__)


def read_os_release() -> tuple[str | None, str | None]:
    """Return ``(ID, ID_LIKE)`` from os-release, or ``(None, None)``."""
    try:
        info = platform.freedesktop_os_release()
    except OSError:
        logger.debug("No os-release file found")
        return None, None
    return info.get("ID"), info.get("ID_LIKE")


def detect_system_details() -> SystemDetails:
    """Resolve the running host into ``SystemDetails``."""
    os_id, os_id_like = read_os_release()
    details = SystemDetails.from_release(os_id, os_id_like)
    logger.debug(
        "Host ID=%r ID_LIKE=%r resolved to %s", os_id, os_id_like, details.target_os.value,
    )
    return details


def process_is_root() -> bool:
    """Whether this process is running with superuser privileges."""
    geteuid = getattr(os, "geteuid", None)
    return geteuid is not None and geteuid() == 0
