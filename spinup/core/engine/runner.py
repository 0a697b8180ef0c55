"""
Privileged command runner — one RunnableOperation → one OS process.

Flow:
    command_name → (privilege session) → argv → adapter.run → classify

Resolution failures propagate unchanged before anything is spawned.
When an operation needs root, the elevation tool becomes the binary and
the original command name its first argument.  Processes run strictly
one at a time: root operations share one privilege session and usually
one package-manager lock.

The runner never retries and never decides whether a sequence should
continue; drivers choose fail-fast or fail-together.
"""

from __future__ import annotations

import logging
import threading

from spinup.adapters.base import ProcessAdapter
from spinup.core.errors import (
    AuthenticationFailedError,
    CommandFailedError,
    SpawnFailedError,
)
from spinup.core.models.operation import RunnableOperation
from spinup.core.models.process import ProcessResult
from spinup.core.models.system import SystemDetails
from spinup.core.observability.logging_config import TRACE

logger = logging.getLogger(__name__)

DEFAULT_ELEVATION_TOOL = "sudo"


class PrivilegeSession:
    """Elevated-credential state for one run.

    ``sudo -v`` prompts once; sudo then caches the credentials for
    roughly 15 minutes, which covers a normal run.  ``acquire`` is
    idempotent and thread-safe: the prompt happens at most once per
    session object.
    """

    def __init__(self, adapter: ProcessAdapter, tool: str = DEFAULT_ELEVATION_TOOL):
        self._adapter = adapter
        self._tool = tool
        self._acquired = False
        self._lock = threading.Lock()

    @property
    def tool(self) -> str:
        return self._tool

    @property
    def acquired(self) -> bool:
        return self._acquired

    def acquire(self) -> None:
        """Obtain credentials, or raise ``AuthenticationFailedError``."""
        with self._lock:
            if self._acquired:
                return

            logger.debug("Acquiring privilege session via %s", self._tool)
            result = self._adapter.elevate(self._tool)
            if not result.spawned:
                raise SpawnFailedError(self._tool, result.spawn_error or "")
            if not result.ok:
                raise AuthenticationFailedError()

            self._acquired = True
            logger.info("Privilege session acquired")


class CommandRunner:
    """Executes RunnableOperations through a process adapter.

    Args:
        adapter: Where processes are spawned (default: real subprocesses).
        session: Privilege session to share; one is created per runner
            when omitted.
    """

    def __init__(
        self,
        adapter: ProcessAdapter | None = None,
        session: PrivilegeSession | None = None,
    ):
        if adapter is None:
            from spinup.adapters.shell.command import SubprocessAdapter

            adapter = SubprocessAdapter()
        self.adapter = adapter
        self.session = session or PrivilegeSession(adapter)
        self.results: list[ProcessResult] = []
        self._process_lock = threading.Lock()

    def build_argv(
        self,
        operation: RunnableOperation,
        system_details: SystemDetails,
    ) -> tuple[str, str, list[str]]:
        """Resolve ``(command_name, binary, args)`` without running anything.

        Raises whatever ``command_name`` raises; ``args`` is never
        consulted when the name fails to resolve.
        """
        command_name = operation.command_name(system_details)

        if operation.needs_root():
            binary, args = self.session.tool, [command_name]
        else:
            binary, args = command_name, []

        args.extend(operation.args(system_details) or [])
        return command_name, binary, args

    def run(self, operation: RunnableOperation, system_details: SystemDetails) -> ProcessResult:
        """Run one operation to completion.

        Returns:
            The ``ProcessResult`` of a successful (or signal-terminated) run.

        Raises:
            EmptyCommandError: The command name could not be resolved.
            AuthenticationFailedError: Elevation was refused.
            SpawnFailedError: The process could not be created.
            CommandFailedError: The process exited non-zero.
        """
        command_name, binary, args = self.build_argv(operation, system_details)

        if operation.needs_root():
            self.session.acquire()

        with self._process_lock:
            result = self.adapter.run(binary, args)
            self.results.append(result)

        handle_process_output(command_name, result)
        return result


def handle_process_output(command_name: str, result: ProcessResult) -> None:
    """Classify a finished process; raise on failure.

    A process without an exit code (terminated by a signal) counts as
    success so that the remaining operations still run.
    """
    if not result.spawned:
        logger.error("Unable to start %s: %s", command_name, result.spawn_error)
        raise SpawnFailedError(command_name, result.spawn_error or "")

    if result.exit_code is None:
        logger.warning(
            "Command execution of %s ended without an exit code (signal %s)",
            command_name,
            result.signal if result.signal is not None else "unknown",
        )
        return

    if result.exit_code == 0:
        logger.info("Command execution of %s completed successfully", command_name)
        return

    logger.warning(
        "Command execution of %s returned status of %d", command_name, result.exit_code,
    )

    # Captured output is only worth formatting at the top verbosity tier
    if logger.isEnabledFor(TRACE):
        if result.stdout:
            logger.log(TRACE, "Stdout:\n%s", result.stdout)
        if result.stderr:
            logger.log(TRACE, "Stderr:\n%s", result.stderr)

    raise CommandFailedError(command_name, result.exit_code)
