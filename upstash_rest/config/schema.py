"""Pydantic models for client configuration validation."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

_SCHEMES = ("https://", "http://")


def strip_scheme(hostname: str) -> str:
    """Remove a leading http(s):// and any trailing slash from a host."""
    for scheme in _SCHEMES:
        if hostname.lower().startswith(scheme):
            hostname = hostname[len(scheme):]
            break
    return hostname.rstrip("/")


class RedisConfig(BaseModel):
    """Connection settings for a REST Redis database.

    Example config.json:
        {
            "hostname": "eu1-example-12345.upstash.io",
            "token": "AX...",
            "request_timeout": 10
        }
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    hostname: str = Field(min_length=1)
    """Database host. A leading https:// or http:// is stripped; requests always use HTTPS."""

    token: str = Field(min_length=1, repr=False)
    """Bearer token sent as ``Authorization: Bearer <token>``."""

    request_timeout: float | None = Field(default=None, gt=0)
    """Timeout in seconds for each request. None keeps the HTTP client's own default."""

    verify_ssl: bool = True
    """Verify TLS certificates."""

    ssl_ca_cert: str | None = None
    """Path to a CA bundle for TLS verification (corporate proxies)."""

    extra_headers: dict[str, str] = {}
    """Additional headers sent with every request."""

    @field_validator("hostname")
    @classmethod
    def _strip_hostname(cls, v: str) -> str:
        stripped = strip_scheme(v.strip())
        if not stripped:
            raise ValueError("hostname is empty after removing the scheme")
        return stripped

    @property
    def base_url(self) -> str:
        return f"https://{self.hostname}"
