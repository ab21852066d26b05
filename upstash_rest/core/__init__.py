"""Core types and errors."""

from upstash_rest.core.errors import (
    ConfigError,
    DecodeError,
    RedisError,
    TransportError,
    UpstashError,
)
from upstash_rest.core.types import CommandArg, JSONValue

__all__ = [
    "UpstashError",
    "ConfigError",
    "RedisError",
    "DecodeError",
    "TransportError",
    "CommandArg",
    "JSONValue",
]
