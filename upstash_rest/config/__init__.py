"""Configuration loading and validation."""

from upstash_rest.config.loader import TOKEN_ENV, URL_ENV, config_from_env, load_config
from upstash_rest.config.schema import RedisConfig, strip_scheme

__all__ = [
    "RedisConfig",
    "TOKEN_ENV",
    "URL_ENV",
    "config_from_env",
    "load_config",
    "strip_scheme",
]
