"""
ProcessResult — the record a process adapter returns.

Adapters never raise: a spawn failure, a non-zero exit and a signal
termination are all captured here.  ``CommandRunner`` turns the record
into success or one of the execution-time errors.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class ProcessResult(BaseModel):
    """Outcome of one external process."""

    command: str
    args: list[str] = Field(default_factory=list)

    # None when the process was terminated by a signal (or never started)
    exit_code: int | None = None
    signal: int | None = None

    started_at: str = Field(default_factory=_now_iso)
    ended_at: str = Field(default_factory=_now_iso)
    duration_ms: int = 0

    stdout: str = ""
    stderr: str = ""
    spawn_error: str | None = None

    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def spawned(self) -> bool:
        return self.spawn_error is None

    @property
    def ok(self) -> bool:
        return self.spawned and self.exit_code == 0

    @property
    def terminated(self) -> bool:
        """Started, but no exit code is available."""
        return self.spawned and self.exit_code is None

    @property
    def argv(self) -> list[str]:
        return [self.command, *self.args]

    @classmethod
    def success(cls, command: str, args: list[str], **kwargs: Any) -> ProcessResult:
        return cls(command=command, args=args, exit_code=0, **kwargs)

    @classmethod
    def failure(cls, command: str, args: list[str], exit_code: int, **kwargs: Any) -> ProcessResult:
        return cls(command=command, args=args, exit_code=exit_code, **kwargs)

    @classmethod
    def not_spawned(cls, command: str, args: list[str], error: str, **kwargs: Any) -> ProcessResult:
        return cls(command=command, args=args, spawn_error=error, **kwargs)
