"""Async client for the Redis REST API.

Each operation performs exactly one HTTP exchange and never retries:

    POST /            ["SET","key","value"]          single command
    GET  /get/{key}                                   read with cache directive
    POST /pipeline    [["INCR","a"],["GET","b"]]      batch, independent outcomes
    POST /multi-exec  [["INCR","a"],["GET","b"]]      batch, applied atomically

Usage:
    async with RedisClient("eu1-example.upstash.io", token) as redis:
        await redis.set("greeting", "hello")
        result = await redis.get("greeting")
        print(result.string)
"""

from __future__ import annotations

import logging
import ssl
from collections.abc import Sequence
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from upstash_rest.config.loader import config_from_env
from upstash_rest.config.schema import RedisConfig
from upstash_rest.core.errors import ConfigError, RedisError, TransportError
from upstash_rest.core.types import CommandArg, JSONValue
from upstash_rest.redis.cache import CachePolicy
from upstash_rest.redis.command import RedisCommand
from upstash_rest.redis.protocol import (
    encode_value,
    parse_batch,
    parse_body,
    serialize_command,
    serialize_commands,
)
from upstash_rest.redis.response import RedisResponse
from upstash_rest.redis.result import RedisResult

logger = logging.getLogger(__name__)


class RedisClient:
    """Async client for one REST Redis database.

    The client holds only immutable configuration plus a lazily created
    ``httpx.AsyncClient``, so one instance can serve concurrent tasks.
    """

    def __init__(
        self,
        hostname: str,
        token: str,
        *,
        request_timeout: float | None = None,
        verify_ssl: bool = True,
        ssl_ca_cert: str | None = None,
        extra_headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            hostname: Database host; a leading https:// or http:// is stripped.
            token: Bearer token for the database.
            request_timeout: Per-request timeout in seconds. None keeps the
                httpx default.
            verify_ssl: Verify TLS certificates.
            ssl_ca_cert: Path to a CA bundle used instead of the default store.
            extra_headers: Additional headers for every request.
            transport: Optional httpx transport (custom stacks, tests).

        Raises:
            ConfigError: If hostname or token is empty or invalid.
        """
        try:
            config = RedisConfig(
                hostname=hostname,
                token=token,
                request_timeout=request_timeout,
                verify_ssl=verify_ssl,
                ssl_ca_cert=ssl_ca_cert,
                extra_headers=extra_headers or {},
            )
        except ValidationError as e:
            raise ConfigError(f"Invalid client configuration: {e}") from e
        self._init(config, transport)

    def _init(self, config: RedisConfig, transport: httpx.AsyncBaseTransport | None) -> None:
        self._config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        logger.debug("RedisClient initialized: host=%s", config.hostname)

    @classmethod
    def from_config(
        cls,
        config: RedisConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> RedisClient:
        """Create a client from an already validated config."""
        client = cls.__new__(cls)
        client._init(config, transport)
        return client

    @classmethod
    def from_env(cls, transport: httpx.AsyncBaseTransport | None = None) -> RedisClient:
        """Create a client from UPSTASH_REDIS_REST_URL / UPSTASH_REDIS_REST_TOKEN.

        Raises:
            ConfigError: If either variable is missing.
        """
        return cls.from_config(config_from_env(), transport=transport)

    @property
    def hostname(self) -> str:
        return self._config.hostname

    @property
    def config(self) -> RedisConfig:
        return self._config

    # === Lifecycle ===

    def _ensure_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            kwargs: dict[str, Any] = {"base_url": self._config.base_url}
            if self._config.request_timeout is not None:
                kwargs["timeout"] = self._config.request_timeout
            if self._transport is not None:
                kwargs["transport"] = self._transport
            else:
                # Priority: ssl_ca_cert (custom CA) > verify_ssl (bool)
                verify: bool | ssl.SSLContext = self._config.verify_ssl
                if self._config.ssl_ca_cert:
                    verify = ssl.create_default_context(cafile=self._config.ssl_ca_cert)
                kwargs["verify"] = verify
            self._client = httpx.AsyncClient(**kwargs)
        return self._client

    async def aclose(self) -> None:
        """Close the HTTP client. Safe to call multiple times."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> RedisClient:
        self._ensure_client()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()

    # === Transport ===

    def _build_headers(self, extra: dict[str, str] | None = None) -> dict[str, str]:
        headers: dict[str, str] = {"Content-Type": "application/json"}
        headers.update(self._config.extra_headers)
        if extra:
            headers.update(extra)
        headers["Authorization"] = f"Bearer {self._config.token}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        content: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> JSONValue:
        """Perform one exchange and return the decoded JSON body.

        Raises:
            RedisError: On a non-2xx reply carrying ``{"error": ...}``.
            TransportError: On network failure or a malformed reply.
        """
        client = self._ensure_client()
        logger.debug("REST request: %s %s", method, path)
        try:
            response = await client.request(
                method,
                path,
                content=content,
                headers=self._build_headers(headers),
            )
        except httpx.ConnectError as e:
            logger.warning("Connection failed to %s: %s", self._config.hostname, e)
            raise TransportError(f"Connection failed: {e}") from e
        except httpx.TimeoutException as e:
            logger.warning("Request timed out: %s %s", method, path)
            raise TransportError(f"Request timed out: {e}") from e
        except httpx.HTTPError as e:
            logger.warning("HTTP error for %s %s: %s", method, path, e)
            raise TransportError(f"HTTP error occurred: {e}") from e

        status = response.status_code
        if not response.is_success:
            try:
                error = RedisError.from_json(parse_body(response.text, status))
            except TransportError as e:
                logger.warning("Request failed with status %d: %s", status, e.message)
                raise TransportError(
                    f"Request failed with status {status}: {response.text[:200]}",
                    status_code=status,
                ) from e
            logger.warning("Server error for %s %s: %s", method, path, error.message)
            raise error

        return parse_body(response.text, status)

    def _single_result(self, data: JSONValue) -> RedisResult:
        """Turn a 2xx single-command body into a result.

        Raises:
            RedisError: If the body is an error envelope despite the 2xx status.
        """
        if isinstance(data, dict) and "error" in data and "result" not in data:
            error = RedisError.from_json(data)
            logger.warning("Server error in 2xx reply: %s", error.message)
            raise error
        return RedisResult.from_json(data)

    # === Commands ===

    async def exec(self, command: RedisCommand | str, *args: CommandArg) -> RedisResult:
        """Execute a single command.

        Accepts either a RedisCommand or a command name with its arguments:
            await redis.exec("incrby", "counter", 5)
            await redis.exec(RedisCommand("incrby", "counter", 5))

        Raises:
            RedisError: If the service rejects the command.
            TransportError: On network failure or a malformed reply.
            TypeError: If a RedisCommand is combined with extra args, or an
                argument is not JSON-serializable.
        """
        if isinstance(command, RedisCommand):
            if args:
                raise TypeError("exec() takes no extra arguments with a RedisCommand")
        else:
            command = RedisCommand(command, *args)

        logger.debug("exec: %s", command)
        data = await self._request("POST", "/", content=serialize_command(command))
        return self._single_result(data)

    async def exec_command(self, name: str, args: Sequence[CommandArg]) -> RedisResult:
        """Execute a command given its arguments as one sequence."""
        return await self.exec(RedisCommand.from_list(name, args))

    async def get(self, key: str, cache_policy: CachePolicy = CachePolicy.ORIGIN) -> RedisResult:
        """Read a key through GET /get/{key}.

        Args:
            key: The key to read; sent as a single percent-encoded path segment.
            cache_policy: Cache-Control directive handed to the HTTP layer.

        Raises:
            RedisError: If the service rejects the read.
            TransportError: On network failure or a malformed reply.
        """
        path = f"/get/{quote(key, safe='')}"
        data = await self._request("GET", path, headers=cache_policy.headers())
        return self._single_result(data)

    async def set(self, key: str, value: Any, *options: CommandArg) -> RedisResult:
        """Store a value with SET.

        Strings, booleans and numbers are sent as-is. Dicts, lists, tuples,
        pydantic models and dataclasses are stored as JSON text with sorted
        keys. Trailing options are appended to the command:
            await redis.set("session", {"user": 1}, "EX", 3600)

        Raises:
            TypeError: If the value cannot be encoded.
            ValueError: If the value contains NaN or infinity.
            RedisError: If the service rejects the command.
            TransportError: On network failure or a malformed reply.
        """
        return await self.exec("set", key, encode_value(value), *options)

    async def pipeline(self, commands: Sequence[RedisCommand]) -> list[RedisResponse]:
        """Send commands as one batch to /pipeline.

        Each command succeeds or fails on its own; failures are reported in
        the matching RedisResponse rather than raised.

        Returns:
            One RedisResponse per command, in submission order.

        Raises:
            RedisError: If the service rejects the batch as a whole.
            TransportError: On network failure or a malformed reply.
        """
        return await self._batch("/pipeline", commands)

    async def transaction(self, commands: Sequence[RedisCommand]) -> list[RedisResponse]:
        """Send commands to /multi-exec, applied atomically by the service.

        Reply handling is the same as pipeline().
        """
        return await self._batch("/multi-exec", commands)

    async def _batch(self, path: str, commands: Sequence[RedisCommand]) -> list[RedisResponse]:
        logger.debug("%s: %d commands", path, len(commands))
        data = await self._request("POST", path, content=serialize_commands(commands))
        items = parse_batch(data)
        if len(items) != len(commands):
            raise TransportError(
                f"Expected {len(commands)} replies from {path}, got {len(items)}"
            )
        return [RedisResponse.from_json(item) for item in items]
