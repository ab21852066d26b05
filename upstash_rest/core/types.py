"""Value types shared across the package."""

from typing import Any, TypeAlias

# Any value the REST API can carry in a request or reply body.
JSONValue: TypeAlias = str | int | float | bool | None | list[Any] | dict[str, Any]

# Arguments passed through to a command unchanged.
CommandArg: TypeAlias = Any
