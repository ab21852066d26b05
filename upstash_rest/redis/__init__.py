"""Redis over the REST API: commands, results and the async client."""

from upstash_rest.redis.cache import CachePolicy
from upstash_rest.redis.client import RedisClient
from upstash_rest.redis.command import RedisCommand
from upstash_rest.redis.response import RedisResponse
from upstash_rest.redis.result import RedisResult

__all__ = [
    "CachePolicy",
    "RedisClient",
    "RedisCommand",
    "RedisResponse",
    "RedisResult",
]
