"""Load RedisConfig from a JSON file or the environment.

The client itself only needs a hostname and a token passed in code; these
helpers cover the two common ways applications keep them outside the code.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from upstash_rest.config.schema import RedisConfig
from upstash_rest.core.errors import ConfigError

logger = logging.getLogger(__name__)

URL_ENV = "UPSTASH_REDIS_REST_URL"
TOKEN_ENV = "UPSTASH_REDIS_REST_TOKEN"


def load_config(path: Path) -> RedisConfig:
    """Load and validate config from a JSON file.

    The file holds one object with the RedisConfig fields, e.g.
    ``{"hostname": "eu1-example.upstash.io", "token": "AX..."}``. Parsing and
    validation happen in one pass through pydantic, so malformed JSON, a
    non-object document and bad field values are all reported the same way.

    Args:
        path: Path to config file.

    Returns:
        Validated RedisConfig.

    Raises:
        ConfigError: If the file is missing, unreadable or empty, or does
            not validate as a RedisConfig.
    """
    try:
        # utf-8-sig: editors on Windows save JSON with a BOM
        text = path.read_text(encoding="utf-8-sig")
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {path}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config file {path}: {e}") from e

    if not text.strip():
        raise ConfigError(f"Config file is empty: {path}; hostname and token are required")

    try:
        config = RedisConfig.model_validate_json(text)
    except ValidationError as e:
        raise ConfigError(f"Config validation failed for {path}: {e}") from e

    logger.debug("Config loaded from: %s (host=%s)", path, config.hostname)
    return config


def config_from_env(
    url_env: str = URL_ENV,
    token_env: str = TOKEN_ENV,
    dotenv_path: Path | None = None,
) -> RedisConfig:
    """Build config from environment variables.

    A ``.env`` file is loaded first when present; variables already set in
    the environment take precedence over it.

    Args:
        url_env: Variable holding the REST URL or bare hostname.
        token_env: Variable holding the bearer token.
        dotenv_path: Explicit .env file. Defaults to searching from the cwd.

    Returns:
        Validated RedisConfig.

    Raises:
        ConfigError: If a variable is missing or the values fail validation.
    """
    load_dotenv(dotenv_path=dotenv_path)

    url = os.environ.get(url_env)
    token = os.environ.get(token_env)
    missing = [name for name, value in ((url_env, url), (token_env, token)) if not value]
    if missing:
        raise ConfigError(f"Missing environment variable(s): {', '.join(missing)}")

    try:
        return RedisConfig(hostname=url, token=token)
    except ValidationError as e:
        raise ConfigError(f"Invalid config from environment: {e}") from e
