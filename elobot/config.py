"""
Bot configuration, read from environment variables (a .env file is loaded
by main.py before this module is used).

Config (.env):
  DISCORD_BOT_TOKEN             Bot access token (required)
  DISCORD_GUILD_ID              Test guild ID. Empty → commands are registered globally
  REMOVE_COMMANDS=true          Remove the registered commands when shutting down
  FQE_BASE_URL                  Federation host (default https://www.fqechecs.qc.ca)
  FQE_TIMEOUT_SECONDS=10        Timeout for every request to the FQE site
  LOG_LEVEL=INFO                Root log level (applied in main.py)
"""

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_FQE_BASE_URL = "https://www.fqechecs.qc.ca"
DEFAULT_TIMEOUT_SECONDS = 10.0


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class BotConfig:
    token: str
    guild_id: Optional[int] = None
    remove_commands: bool = True
    fqe_base_url: str = DEFAULT_FQE_BASE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS


def _parse_bool(value: str) -> bool:
    return value.strip().lower() not in ("false", "0", "no", "off")


def _parse_guild_id(value: str) -> Optional[int]:
    value = value.strip()
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"Invalid guild ID: {value!r}")


def load_config(
    token: Optional[str] = None,
    guild: Optional[str] = None,
    remove_commands: Optional[bool] = None,
) -> BotConfig:
    """
    Build the bot config from the environment.
    Explicit arguments (command-line flags) take precedence over env vars.
    """
    token = token if token is not None else os.getenv("DISCORD_BOT_TOKEN", "")
    if not token.strip():
        raise ConfigError("Bot token not configured (DISCORD_BOT_TOKEN or --token)")

    guild = guild if guild is not None else os.getenv("DISCORD_GUILD_ID", "")
    if remove_commands is None:
        remove_commands = _parse_bool(os.getenv("REMOVE_COMMANDS", "true"))

    try:
        timeout = float(os.getenv("FQE_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS)))
    except ValueError:
        raise ConfigError("FQE_TIMEOUT_SECONDS must be a number")

    return BotConfig(
        token=token.strip(),
        guild_id=_parse_guild_id(guild),
        remove_commands=remove_commands,
        fqe_base_url=os.getenv("FQE_BASE_URL", DEFAULT_FQE_BASE_URL).rstrip("/"),
        timeout_seconds=timeout,
    )
