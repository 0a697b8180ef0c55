"""
Custom commands and ordered command sets.

A ``CustomCommand`` is a single binary invocation with optional
arguments.  A ``CommandSet`` groups ``OrderedCommand`` entries that run
in ascending ordering-id order; ids must be unique within the set.

In configuration files an ordered command is written flat::

    {"id": 1, "command": "ls", "args": ["-a", "-l"], "needs_root": false}
"""

from __future__ import annotations

from collections import Counter
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_serializer, model_validator

from spinup.core.errors import DuplicateOrderingIdError, EmptyCommandError
from spinup.core.models.system import SystemDetails


class CustomCommand(BaseModel):
    """A shell command: binary name, arguments, root flag.

    Field names differ from the config keys (``args``, ``needs_root``)
    because those names belong to the RunnableOperation methods.
    """

    model_config = ConfigDict(populate_by_name=True)

    command: str
    arguments: list[str] | None = Field(default=None, alias="args")
    run_as_root: bool = Field(default=False, alias="needs_root")

    def command_name(self, system_details: SystemDetails) -> str:
        if not self.command.strip():
            raise EmptyCommandError("Cannot process a zero-length shell command")
        return self.command

    def args(self, system_details: SystemDetails) -> list[str] | None:
        return list(self.arguments) if self.arguments is not None else None

    def needs_root(self) -> bool:
        return self.run_as_root


class OrderedCommand(BaseModel):
    """A ``CustomCommand`` tagged with its position in a ``CommandSet``."""

    id: int = Field(ge=0)
    command: CustomCommand

    @model_validator(mode="before")
    @classmethod
    def _nest_flat_command(cls, data: Any) -> Any:
        if isinstance(data, dict) and not isinstance(data.get("command"), (dict, CustomCommand)):
            fields = {k: v for k, v in data.items() if k != "id"}
            return {"id": data.get("id"), "command": fields}
        return data

    @model_serializer(mode="wrap")
    def _flatten(self, handler: Any) -> dict[str, Any]:
        data = handler(self)
        return {"id": data["id"], **data.get("command", {})}

    def command_name(self, system_details: SystemDetails) -> str:
        return self.command.command_name(system_details)

    def args(self, system_details: SystemDetails) -> list[str] | None:
        return self.command.args(system_details)

    def needs_root(self) -> bool:
        return self.command.needs_root()


class CommandSet(BaseModel):
    """Commands that must run in a fixed order."""

    commands: list[OrderedCommand] = Field(default_factory=list)

    def duplicate_ids(self) -> list[int]:
        counts = Counter(c.id for c in self.commands)
        return sorted(i for i, n in counts.items() if n > 1)

    def validate_ordering(self) -> None:
        """Raise ``DuplicateOrderingIdError`` listing every repeated id."""
        duplicates = self.duplicate_ids()
        if duplicates:
            raise DuplicateOrderingIdError(duplicates)

    def runnable_commands(self) -> list[OrderedCommand]:
        """Commands in execution order (ascending id)."""
        return sorted(self.commands, key=lambda c: c.id)
