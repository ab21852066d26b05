"""Typed access to a single command result.

The REST API answers every command with a JSON value whose outer type does not
always match its logical type: counters arrive as ``"42"``, stored documents as
JSON-encoded strings, and a single match as a bare string instead of a list.
RedisResult centralizes the coercions so callers get native values.

All accessors are total and return None when the value cannot be read as the
requested type. Booleans are never treated as numbers, even though Python's
``bool`` is a subclass of ``int``.
"""

from __future__ import annotations

import math
import re
from datetime import datetime, timezone
from typing import Any, TypeVar, cast

from pydantic import TypeAdapter, ValidationError

from upstash_rest.core.errors import DecodeError
from upstash_rest.core.types import JSONValue

T = TypeVar("T")

# float() and int() also accept surrounding whitespace and digit underscores;
# the service never sends those, so treat them as non-numeric.
_INT_PATTERN = re.compile(r"[+-]?\d+")
_FLOAT_PATTERN = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf|infinity|nan)",
    re.IGNORECASE,
)


def _parse_float(text: str) -> float | None:
    if not _FLOAT_PATTERN.fullmatch(text):
        return None
    return float(text)


def _parse_int(text: str) -> int | None:
    if not _INT_PATTERN.fullmatch(text):
        return None
    return int(text)


class RedisResult:
    """Wrapper around one decoded JSON result value."""

    __slots__ = ("_value",)

    def __init__(self, value: JSONValue) -> None:
        self._value = value

    @classmethod
    def from_json(cls, data: JSONValue) -> RedisResult:
        """Build from a reply body.

        Unwraps a ``{"result": <value>}`` envelope; any other body is taken
        as the value itself.
        """
        if isinstance(data, dict) and "result" in data:
            return cls(data["result"])
        return cls(data)

    @property
    def value(self) -> JSONValue:
        """The raw decoded JSON value."""
        return self._value

    @property
    def string(self) -> str | None:
        """Value as ``str``."""
        return self._value if isinstance(self._value, str) else None

    @property
    def bool(self) -> bool | None:
        """Value as ``bool``."""
        return self._value if isinstance(self._value, bool) else None

    @property
    def double(self) -> float | None:
        """Value as ``float``, parsing numeric strings."""
        value = self._value
        if isinstance(value, str):
            return _parse_float(value)
        if isinstance(value, bool):
            return None
        if isinstance(value, (int, float)):
            try:
                return float(value)
            except OverflowError:
                return None
        return None

    @property
    def int(self) -> int | None:
        """Value as ``int``.

        Numeric strings are parsed as integers; floats are truncated toward
        zero. Non-finite values yield None. JSON integers are returned as-is
        rather than through float, which would lose precision above 2**53.
        """
        value = self._value
        if isinstance(value, str):
            return _parse_int(value)
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        double = self.double
        if double is None or not math.isfinite(double):
            return None
        return int(double)

    @property
    def date(self) -> datetime | None:
        """Value as a UTC datetime, read as seconds since the Unix epoch."""
        timestamp = self.double
        if timestamp is None:
            return None
        try:
            return datetime.fromtimestamp(timestamp, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

    @property
    def array(self) -> list[str] | None:
        """Value as a list of strings.

        A bare string becomes a one-element list: several commands reply with a
        string for a single match and a list for many.
        """
        value = self._value
        if isinstance(value, list) and all(isinstance(item, str) for item in value):
            return list(value)
        if isinstance(value, str):
            return [value]
        return None

    @property
    def dictionary(self) -> dict[str, Any] | None:
        """Value as a string-keyed mapping."""
        value = self._value
        if isinstance(value, dict) and all(isinstance(key, str) for key in value):
            return value
        return None

    def decode(self, shape: type[T] | TypeAdapter[T]) -> T:
        """Decode the value into ``shape``.

        First validates the value itself against the shape (strict, no
        coercion). If that fails, the value must be a string holding JSON,
        which is then parsed into the shape.

        Args:
            shape: A type understood by pydantic (model, dataclass, builtin,
                generic alias) or a prebuilt TypeAdapter.

        Returns:
            The decoded value.

        Raises:
            DecodeError: If the value is neither directly valid for the shape
                nor a string, or if the embedded JSON does not fit the shape.
        """
        adapter = shape if isinstance(shape, TypeAdapter) else TypeAdapter(shape)
        try:
            return cast(T, adapter.validate_python(self._value, strict=True))
        except ValidationError:
            pass

        if not isinstance(self._value, str):
            raise DecodeError("Invalid json value")
        try:
            return cast(T, adapter.validate_json(self._value))
        except ValidationError as e:
            raise DecodeError(f"Invalid json value: {e}") from e

    def __repr__(self) -> str:
        return f"RedisResult({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RedisResult):
            return NotImplemented
        return self._value == other._value

    __hash__ = None  # type: ignore[assignment]
