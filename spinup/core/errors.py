"""
Error taxonomy — every failure the engine can report.

Resolution-time errors (empty command, no package manager, duplicate
ordering ids) are raised before any process is spawned.  Execution-time
errors (non-zero exit, spawn failure, download failures) are raised by
the runner and the download orchestrator after side effects started.

All errors carry a human-readable message; the CLI prints ``str(err)``.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence


class SpinupError(Exception):
    """Base class for all spinup errors."""


# ── Resolution-time ─────────────────────────────────────────────


class EmptyCommandError(SpinupError):
    """The resolved command name is empty or blank."""


class NoPackageManagerError(EmptyCommandError):
    """The host OS is unresolved or has no package manager mapping."""

    def __init__(self, message: str = "") -> None:
        super().__init__(
            message
            or "spinup does not have a package manager configuration for this platform"
        )


class NoPackagesConfiguredError(EmptyCommandError):
    """A package install was requested but no packages were listed."""

    def __init__(self, message: str = "") -> None:
        super().__init__(
            message or "Packages present in config, but no packages were listed"
        )


class DuplicateOrderingIdError(SpinupError):
    """A command set declares the same ordering id more than once."""

    def __init__(self, ids: Iterable[int]) -> None:
        self.ids = sorted(ids)
        joined = " ".join(str(i) for i in self.ids)
        super().__init__(f"The following id values are not unique: {joined}")


# ── Execution-time ──────────────────────────────────────────────


class AuthenticationFailedError(SpinupError):
    """Privilege elevation was refused."""

    def __init__(self, message: str = "Unable to authenticate for sudo") -> None:
        super().__init__(message)


class CommandFailedError(SpinupError):
    """A spawned process exited with a non-zero status."""

    def __init__(self, command: str, exit_code: int) -> None:
        self.command = command
        self.exit_code = exit_code
        super().__init__(
            f"Command '{command}' returned status of '{exit_code}'.\n"
            "Run with higher verbosity to see more output"
        )


class SpawnFailedError(SpinupError):
    """The OS could not create the process."""

    def __init__(self, command: str, reason: str = "") -> None:
        self.command = command
        self.reason = reason
        detail = f": {reason}" if reason else ""
        super().__init__(f"Unable to start '{command}'{detail}")


class RootProcessError(SpinupError):
    """spinup itself was started with superuser privileges."""

    def __init__(self) -> None:
        super().__init__("spinup should not be run as root")


# ── Downloads ───────────────────────────────────────────────────


class DirectoryCreationError(SpinupError):
    """The download target directory could not be resolved or created."""

    def __init__(self, path: str, reason: str = "") -> None:
        self.path = path
        detail = f": {reason}" if reason else ""
        super().__init__(f"Unable to create target directory {path}{detail}")


class DownloadFailedError(SpinupError):
    """An HTTP GET (or body read) for a download source failed."""

    def __init__(self, source: str, reason: str = "") -> None:
        self.source = source
        detail = f": {reason}" if reason else ""
        super().__init__(f"Download of {source} failed{detail}")


class WriteFailedError(SpinupError):
    """A downloaded body could not be written to its target file."""

    def __init__(self, target: str, reason: str = "") -> None:
        self.target = target
        detail = f": {reason}" if reason else ""
        super().__init__(f"Unable to write {target}{detail}")


class DownloadOperationsError(SpinupError):
    """One or more download operations failed (fail-together aggregate)."""

    def __init__(self, errors: Sequence[SpinupError]) -> None:
        self.errors = list(errors)
        lines = "\n".join(f"  - {e}" for e in self.errors)
        super().__init__(f"{len(self.errors)} download operation(s) failed:\n{lines}")
