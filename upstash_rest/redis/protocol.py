"""REST wire format: request serialization and reply parsing."""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

from pydantic_core import PydanticSerializationError, to_jsonable_python

from upstash_rest.core.errors import TransportError
from upstash_rest.core.types import JSONValue
from upstash_rest.redis.command import RedisCommand


def _dumps(value: Any, sort_keys: bool = False) -> str:
    # NaN and Infinity are not JSON; the service would reject the body.
    return json.dumps(value, sort_keys=sort_keys, separators=(",", ":"), allow_nan=False)


def serialize_command(command: RedisCommand) -> str:
    """Serialize one command to the body of a single-command POST.

    Args:
        command: The command to send.

    Returns:
        Compact JSON array text, e.g. ``["SET","key","value"]``.

    Raises:
        TypeError: If an argument is not JSON-serializable.
        ValueError: If an argument is NaN or infinity.
    """
    return _dumps(command.prepared())


def serialize_commands(commands: Sequence[RedisCommand]) -> str:
    """Serialize a batch of commands for /pipeline or /multi-exec."""
    return _dumps([c.prepared() for c in commands])


def encode_value(value: Any) -> str | int | float | bool:
    """Convert a value for SET into its textual wire form.

    Strings, booleans and numbers pass through unchanged. Everything else
    (mappings, sequences, pydantic models, dataclasses, and the datetime,
    Enum, UUID and Decimal values inside them) is converted the way pydantic
    serializes it in JSON mode, then dumped as compact JSON with sorted keys,
    so equal content always yields the same text regardless of key order.

    Args:
        value: The value to store.

    Returns:
        The argument to place after the key in the SET command.

    Raises:
        TypeError: If the value has no JSON representation.
        ValueError: If the value contains NaN or infinity.
    """
    if isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, type):
        raise TypeError(f"Cannot encode class {value.__name__}; pass an instance")
    try:
        jsonable = to_jsonable_python(value)
    except PydanticSerializationError as e:
        raise TypeError(f"Cannot encode value of type {type(value).__name__}: {e}") from e
    return _dumps(jsonable, sort_keys=True)


def parse_body(text: str, status_code: int | None = None) -> JSONValue:
    """Parse a reply body as JSON.

    Raises:
        TransportError: If the body is not valid JSON.
    """
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        snippet = text[:200]
        raise TransportError(
            f"Invalid JSON in server response: {e}: {snippet!r}", status_code=status_code
        ) from e


def parse_batch(data: JSONValue, status_code: int | None = None) -> list[Any]:
    """Check that a pipeline/transaction reply is a JSON array.

    Raises:
        TransportError: If the reply is not an array.
    """
    if not isinstance(data, list):
        raise TransportError(
            f"Expected array reply, got {type(data).__name__}", status_code=status_code
        )
    return data
