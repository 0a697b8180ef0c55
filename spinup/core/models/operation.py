"""
RunnableOperation — the capability every schedulable unit of work offers.

Anything reducible to "binary name + argument list + root requirement"
for a given host.  Implementations are small independent value types
(custom commands, package batches, snaps, system refreshes); there is
no shared base class.

Contract:
    - ``command_name`` raises ``EmptyCommandError`` (or a subclass) when
      nothing can be run.  The runner calls it first, so a failure here
      short-circuits before arguments are resolved.
    - ``args`` returns ``None`` for "no arguments", which is distinct
      from an explicit empty list.
    - ``needs_root`` depends only on the operation's own data.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from spinup.core.errors import SpinupError

if TYPE_CHECKING:
    from spinup.core.models.system import SystemDetails


@runtime_checkable
class RunnableOperation(Protocol):
    """Structural interface consumed by ``CommandRunner.run``."""

    def command_name(self, system_details: SystemDetails) -> str:
        """The bare binary to run, with no arguments."""
        ...

    def args(self, system_details: SystemDetails) -> list[str] | None:
        """Subcommands and arguments, or None when there are none."""
        ...

    def needs_root(self) -> bool:
        """Whether the command must run through the elevation tool."""
        ...


def describe(operation: RunnableOperation, system_details: SystemDetails) -> str:
    """Best-effort one-line rendering for logs and dry runs."""
    try:
        name = operation.command_name(system_details)
    except SpinupError as e:
        return f"<unresolvable: {e}>"
    parts = [name, *(operation.args(system_details) or [])]
    if operation.needs_root():
        parts.insert(0, "sudo")
    return " ".join(parts)
