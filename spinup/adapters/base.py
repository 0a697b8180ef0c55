"""
Adapter base — the contract between the command runner and the OS.

The runner only talks to processes through this protocol, never
directly to ``subprocess``.  That keeps the privilege session and
outcome classification testable with ``MockProcessAdapter``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from spinup.core.models.process import ProcessResult


class ProcessAdapter(ABC):
    """Abstract base class for process adapters.

    Adapters spawn processes and return ``ProcessResult`` records.
    They NEVER raise: spawn failures are captured in the record.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The adapter identifier (e.g. 'subprocess', 'mock')."""

    @abstractmethod
    def is_available(self, binary: str) -> bool:
        """Whether ``binary`` can be found on this host.

        Should be fast and never raise.
        """

    @abstractmethod
    def run(self, command: str, args: list[str]) -> ProcessResult:
        """Run ``command`` with ``args``, capturing stdout and stderr."""

    @abstractmethod
    def elevate(self, tool: str) -> ProcessResult:
        """Validate (or prompt for) elevated credentials via ``tool``.

        Runs interactively: the prompt must reach the user's terminal.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
