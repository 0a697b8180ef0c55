"""
Subprocess adapter — spawn real processes.

The SINGLE PLACE where ``subprocess.run`` is called for operations.
Output is captured, never inherited; the only inherited-stdio call is
the credential prompt in ``elevate``.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import time

from spinup.adapters.base import ProcessAdapter
from spinup.core.models.process import ProcessResult

logger = logging.getLogger(__name__)


class SubprocessAdapter(ProcessAdapter):
    """Run commands with ``subprocess.run``; waits without a timeout."""

    @property
    def name(self) -> str:
        return "subprocess"

    def is_available(self, binary: str) -> bool:
        return shutil.which(binary) is not None

    def run(self, command: str, args: list[str]) -> ProcessResult:
        logger.debug("Executing: %s %s", command, " ".join(args))
        start = time.monotonic()

        try:
            result = subprocess.run(
                [command, *args],
                capture_output=True,
                text=True,
                errors="replace",
            )
        except OSError as e:
            return ProcessResult.not_spawned(command, args, str(e))

        elapsed_ms = int((time.monotonic() - start) * 1000)
        code = result.returncode
        return ProcessResult(
            command=command,
            args=args,
            # A negative return code means "killed by signal -code"
            exit_code=code if code >= 0 else None,
            signal=-code if code < 0 else None,
            duration_ms=elapsed_ms,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
        )

    def elevate(self, tool: str) -> ProcessResult:
        logger.debug("Requesting credentials via %s -v", tool)
        try:
            result = subprocess.run([tool, "-v"])
        except OSError as e:
            return ProcessResult.not_spawned(tool, ["-v"], str(e))
        return ProcessResult(command=tool, args=["-v"], exit_code=result.returncode)
