"""Redis command value sent to the REST API."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from upstash_rest.core.types import CommandArg


@dataclass(frozen=True, init=False)
class RedisCommand:
    """A command name plus its positional arguments.

    The client is command-agnostic: any name is accepted and arguments are
    sent as given, in order. The name is upper-cased only when rendered.

    Attributes:
        name: Command name, e.g. "set" or "HGETALL".
        args: Positional arguments, any JSON-serializable values.
    """

    name: str
    args: tuple[CommandArg, ...]

    def __init__(self, name: str, *args: CommandArg) -> None:
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "args", tuple(args))

    @classmethod
    def from_list(cls, name: str, args: Iterable[CommandArg]) -> RedisCommand:
        """Build a command from an explicit argument sequence."""
        return cls(name, *args)

    def prepared(self) -> list[Any]:
        """Render the wire form: ``[NAME, arg1, arg2, ...]``."""
        return [self.name.upper(), *self.args]

    def __str__(self) -> str:
        # Argument values may be secrets or large payloads; keep them out of logs.
        return f"{self.name.upper()} <{len(self.args)} args>"
