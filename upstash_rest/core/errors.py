"""Typed exception hierarchy for upstash-rest."""

from __future__ import annotations

from typing import Any


class UpstashError(Exception):
    """Base class for all upstash-rest errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigError(UpstashError):
    """Raised for configuration issues (missing file, invalid JSON, validation failure)."""


class RedisError(UpstashError):
    """Error reported by the REST service for a command.

    The service replies with ``{"error": "<message>"}``; ``error`` mirrors that
    field so the value reads the same as the wire body.
    """

    @property
    def error(self) -> str:
        return self.message

    @classmethod
    def from_json(cls, data: Any) -> RedisError:
        """Build from a decoded ``{"error": ...}`` body.

        Raises:
            TransportError: If ``data`` is not the error shape.
        """
        if not isinstance(data, dict) or "error" not in data:
            raise TransportError(f"Expected error object, got: {_describe(data)}")
        return cls(str(data["error"]))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RedisError):
            return NotImplemented
        return type(self) is type(other) and self.message == other.message

    def __hash__(self) -> int:
        return hash((type(self), self.message))


class DecodeError(RedisError):
    """Raised when a result value cannot be decoded into the requested shape."""


class TransportError(UpstashError):
    """Network failure or reply that does not follow the REST envelope.

    Distinct from RedisError: the service never produced a logical answer.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


def _describe(data: Any) -> str:
    text = repr(data)
    if len(text) > 200:
        return text[:200] + "..."
    return text
