"""HTTP cache directives for read requests."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class CachePolicy:
    """A ``Cache-Control`` directive sent with GET requests.

    The client keeps no cache of its own; the directive is handed to whatever
    HTTP cache sits between the caller and the service (edge runtime, proxy).

    Attributes:
        directive: Header value, or None to send no Cache-Control header.
    """

    directive: str | None

    ORIGIN: ClassVar[CachePolicy]
    DEFAULT: ClassVar[CachePolicy]

    @classmethod
    def ttl(cls, seconds: int, stale_while_revalidate: int | None = None) -> CachePolicy:
        """Allow a cached reply up to ``seconds`` old."""
        if seconds < 0:
            raise ValueError(f"ttl must be non-negative, got {seconds}")
        directive = f"max-age={seconds}"
        if stale_while_revalidate is not None:
            directive += f", stale-while-revalidate={stale_while_revalidate}"
        return cls(directive)

    def headers(self) -> dict[str, str]:
        if self.directive is None:
            return {}
        return {"Cache-Control": self.directive}


# Always go to the origin; never answer from a cache.
CachePolicy.ORIGIN = CachePolicy("no-cache")
# Leave caching to the transport's defaults.
CachePolicy.DEFAULT = CachePolicy(None)
