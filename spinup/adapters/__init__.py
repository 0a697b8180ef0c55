"""Adapters — process bindings for the command runner.

Public re-exports for convenient access.
"""

from spinup.adapters.base import ProcessAdapter
from spinup.adapters.mock import MockProcessAdapter
from spinup.adapters.shell.command import SubprocessAdapter

__all__ = [
    "MockProcessAdapter",
    "ProcessAdapter",
    "SubprocessAdapter",
]
