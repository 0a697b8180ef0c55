"""
Mock adapter — universal test double for process execution.

Used by ``spinup run --mock`` and by the test-suite to exercise the
runner without spawning anything.  Succeeds by default; individual
commands can be configured to fail, terminate, or fail to spawn.
"""

from __future__ import annotations

import threading

from spinup.adapters.base import ProcessAdapter
from spinup.core.models.process import ProcessResult


class MockProcessAdapter(ProcessAdapter):
    """Records every call and returns canned results.

    A canned result matches when its key equals the command or the
    first argument, so root operations (run as ``sudo <cmd> ...``) can
    be keyed by their own command name.
    """

    def __init__(
        self,
        adapter_name: str = "mock",
        available: bool = True,
        elevation_ok: bool = True,
    ):
        self._name = adapter_name
        self._available = available
        self._elevation_ok = elevation_ok
        self._results: dict[str, ProcessResult] = {}
        self._lock = threading.Lock()
        self.calls: list[list[str]] = []
        self.elevations: int = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def is_available(self, binary: str) -> bool:
        return self._available

    def set_result(self, key: str, result: ProcessResult) -> None:
        """Return ``result`` whenever ``key`` is the command or its first arg."""
        self._results[key] = result

    def set_failure(self, key: str, exit_code: int = 1, stderr: str = "mock failure") -> None:
        self._results[key] = ProcessResult.failure(key, [], exit_code, stderr=stderr)

    def set_terminated(self, key: str, signal: int = 9) -> None:
        self._results[key] = ProcessResult(command=key, exit_code=None, signal=signal)

    def set_spawn_error(self, key: str, error: str = "No such file or directory") -> None:
        self._results[key] = ProcessResult.not_spawned(key, [], error)

    def run(self, command: str, args: list[str]) -> ProcessResult:
        with self._lock:
            self.calls.append([command, *args])

        for key in (command, args[0] if args else None):
            if key is not None and key in self._results:
                canned = self._results[key]
                return canned.model_copy(update={"command": command, "args": list(args)})

        return ProcessResult.success(command, list(args), stdout="[mock] executed")

    def elevate(self, tool: str) -> ProcessResult:
        with self._lock:
            self.elevations += 1
        if self._elevation_ok:
            return ProcessResult.success(tool, ["-v"])
        return ProcessResult.failure(tool, ["-v"], 1, stderr="Sorry, try again.")

    def reset(self) -> None:
        """Clear call log and canned results."""
        self.calls.clear()
        self._results.clear()
        self.elevations = 0
