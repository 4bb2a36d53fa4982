"""
Tests for environment-based configuration
"""

import pytest

from elobot.config import DEFAULT_FQE_BASE_URL, ConfigError, load_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in (
        "DISCORD_BOT_TOKEN",
        "DISCORD_GUILD_ID",
        "REMOVE_COMMANDS",
        "FQE_BASE_URL",
        "FQE_TIMEOUT_SECONDS",
    ):
        monkeypatch.delenv(var, raising=False)


def test_defaults(monkeypatch):
    monkeypatch.setenv("DISCORD_BOT_TOKEN", "secret")

    config = load_config()

    assert config.token == "secret"
    assert config.guild_id is None
    assert config.remove_commands is True
    assert config.fqe_base_url == DEFAULT_FQE_BASE_URL
    assert config.timeout_seconds == 10.0


def test_env_values(monkeypatch):
    monkeypatch.setenv("DISCORD_BOT_TOKEN", "secret")
    monkeypatch.setenv("DISCORD_GUILD_ID", "123456")
    monkeypatch.setenv("REMOVE_COMMANDS", "false")
    monkeypatch.setenv("FQE_BASE_URL", "https://example.org/")
    monkeypatch.setenv("FQE_TIMEOUT_SECONDS", "2.5")

    config = load_config()

    assert config.guild_id == 123456
    assert config.remove_commands is False
    assert config.fqe_base_url == "https://example.org"
    assert config.timeout_seconds == 2.5


def test_arguments_override_env(monkeypatch):
    monkeypatch.setenv("DISCORD_BOT_TOKEN", "from-env")
    monkeypatch.setenv("DISCORD_GUILD_ID", "1")

    config = load_config(token="from-flag", guild="", remove_commands=False)

    assert config.token == "from-flag"
    assert config.guild_id is None
    assert config.remove_commands is False


def test_missing_token():
    with pytest.raises(ConfigError):
        load_config()


def test_invalid_guild(monkeypatch):
    monkeypatch.setenv("DISCORD_BOT_TOKEN", "secret")
    monkeypatch.setenv("DISCORD_GUILD_ID", "not-a-number")
    with pytest.raises(ConfigError):
        load_config()


def test_invalid_timeout(monkeypatch):
    monkeypatch.setenv("DISCORD_BOT_TOKEN", "secret")
    monkeypatch.setenv("FQE_TIMEOUT_SECONDS", "soon")
    with pytest.raises(ConfigError):
        load_config()
