"""Shared pytest fixtures and configuration for pytest."""

import json
from collections.abc import Callable
from typing import Any
from urllib.parse import unquote

import httpx
import pytest

from upstash_rest.redis.client import RedisClient

HOST = "eu1-test-12345.upstash.io"
TOKEN = "test-token"


class FakeRestServer:
    """In-memory stand-in for the REST endpoint, enough for SET/GET/INCR/DEL.

    Records every request it receives in ``requests``.
    """

    def __init__(self) -> None:
        self.store: dict[str, Any] = {}
        self.requests: list[httpx.Request] = []

    def _run(self, command: list[Any]) -> dict[str, Any]:
        name, *args = command
        if name == "PING":
            return {"result": "PONG"}
        if name == "SET":
            self.store[args[0]] = args[1]
            return {"result": "OK"}
        if name == "GET":
            value = self.store.get(args[0])
            return {"result": None if value is None else str(value)}
        if name == "INCR":
            current = self.store.get(args[0], "0")
            try:
                value = int(current) + 1
            except ValueError:
                return {"error": "ERR value is not an integer or out of range"}
            self.store[args[0]] = str(value)
            return {"result": value}
        if name == "DEL":
            removed = sum(1 for key in args if self.store.pop(key, None) is not None)
            return {"result": removed}
        return {"error": f"ERR unknown command '{name}'"}

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if request.method == "GET" and path.startswith("/get/"):
            return httpx.Response(200, json=self._run(["GET", unquote(path[len("/get/"):])]))

        body = json.loads(request.content)
        if path in ("/pipeline", "/multi-exec"):
            return httpx.Response(200, json=[self._run(cmd) for cmd in body])

        reply = self._run(body)
        return httpx.Response(400 if "error" in reply else 200, json=reply)


@pytest.fixture
def fake_server() -> FakeRestServer:
    return FakeRestServer()


@pytest.fixture
def make_client() -> Callable[[Callable[[httpx.Request], httpx.Response]], RedisClient]:
    """Build a RedisClient whose requests go to ``handler``."""

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> RedisClient:
        return RedisClient(HOST, TOKEN, transport=httpx.MockTransport(handler))

    return _make
