"""Async client for Redis databases served over an HTTP REST API.

    >>> async with RedisClient("eu1-example.upstash.io", token) as redis:
    ...     await redis.set("user:1", {"name": "Ada"})
    ...     user = (await redis.get("user:1")).decode(dict[str, str])
"""

from upstash_rest.config import RedisConfig, config_from_env, load_config
from upstash_rest.core.errors import (
    ConfigError,
    DecodeError,
    RedisError,
    TransportError,
    UpstashError,
)
from upstash_rest.redis import (
    CachePolicy,
    RedisClient,
    RedisCommand,
    RedisResponse,
    RedisResult,
)

__all__ = [
    "CachePolicy",
    "ConfigError",
    "DecodeError",
    "RedisClient",
    "RedisCommand",
    "RedisConfig",
    "RedisError",
    "RedisResponse",
    "RedisResult",
    "TransportError",
    "UpstashError",
    "config_from_env",
    "load_config",
]
__version__ = "0.1.0"
