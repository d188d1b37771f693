# =============================================================================
# core/config.py  —  Runtime Settings
# =============================================================================
#
# All configuration comes from the process environment.  main.py calls
# load_dotenv() first, so a local .env file works the same as exported vars.
#
# The bot token is the ONLY required setting.  Without it there is nothing
# this server can do, so load_settings() raises ConfigError and main() exits
# before a single tool is registered.
# =============================================================================

import os
from dataclasses import dataclass
from typing import Optional

from core.errors import ConfigError


DEFAULT_API_BASE_URL = "https://api.telegram.org"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_SERVER_NAME = "telegram_bot"


def env(key: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(key)
    if value is None or value.strip() == "":
        return default
    return value.strip()


@dataclass(frozen=True)
class Settings:
    """Immutable runtime settings, shared read-only by every tool."""

    bot_token: str
    api_base_url: str = DEFAULT_API_BASE_URL
    request_timeout: float = DEFAULT_TIMEOUT_SECONDS
    server_name: str = DEFAULT_SERVER_NAME
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Build Settings from the environment.

    Raises:
        ConfigError: TELEGRAM_BOT_API_TOKEN is unset or blank, or
            TELEGRAM_REQUEST_TIMEOUT is not a positive number.
    """
    token = env("TELEGRAM_BOT_API_TOKEN")
    if not token:
        raise ConfigError("No bot token: set TELEGRAM_BOT_API_TOKEN")

    raw_timeout = env("TELEGRAM_REQUEST_TIMEOUT", str(DEFAULT_TIMEOUT_SECONDS))
    try:
        timeout = float(raw_timeout)
    except ValueError:
        raise ConfigError(f"TELEGRAM_REQUEST_TIMEOUT must be a number, got {raw_timeout!r}") from None
    if timeout <= 0:
        raise ConfigError("TELEGRAM_REQUEST_TIMEOUT must be positive")

    return Settings(
        bot_token=token,
        api_base_url=env("TELEGRAM_API_BASE_URL", DEFAULT_API_BASE_URL).rstrip("/"),
        request_timeout=timeout,
        server_name=env("MCP_SERVER_NAME", DEFAULT_SERVER_NAME),
        log_level=env("LOG_LEVEL", "INFO").upper(),
    )
