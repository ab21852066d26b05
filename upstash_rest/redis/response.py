"""Per-command outcome inside a pipeline or transaction reply."""

from __future__ import annotations

from dataclasses import dataclass

from upstash_rest.core.errors import RedisError, TransportError
from upstash_rest.core.types import JSONValue
from upstash_rest.redis.result import RedisResult


@dataclass(frozen=True)
class RedisResponse:
    """Success or failure of one command in a batch.

    Exactly one of ``result`` and ``error`` is set. Use ``success()`` and
    ``failure()`` rather than the constructor.

    Attributes:
        result: The command's result on success, else None.
        error: The service-reported error on failure, else None.
    """

    result: RedisResult | None = None
    error: RedisError | None = None

    # RedisResult is mutable-valued and unhashable, so responses are too.
    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if (self.result is None) == (self.error is None):
            raise ValueError("RedisResponse needs exactly one of result or error")

    @classmethod
    def success(cls, result: RedisResult) -> RedisResponse:
        return cls(result=result)

    @classmethod
    def failure(cls, error: RedisError) -> RedisResponse:
        return cls(error=error)

    @classmethod
    def from_json(cls, data: JSONValue) -> RedisResponse:
        """Decode one element of a pipeline/transaction reply array.

        ``{"result": ...}`` is a success (a null result included) and
        ``{"error": ...}`` a failure.

        Raises:
            TransportError: If the element is neither shape.
        """
        if isinstance(data, dict):
            if "result" in data:
                return cls.success(RedisResult(data["result"]))
            if "error" in data:
                return cls.failure(RedisError.from_json(data))
        raise TransportError(f"Invalid pipeline reply element: {data!r}")

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> RedisResult:
        """Return the result, or raise the carried RedisError."""
        if self.error is not None:
            raise self.error
        assert self.result is not None
        return self.result
