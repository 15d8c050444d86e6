"""Tests for loading the webhook client configuration."""

import pathlib
import textwrap

import pytest
import yarl

from discord_webhooks import WebhookConfiguration
from discord_webhooks.configuration import credentials_from_environment, parse_webhook_url
from discord_webhooks.exceptions import BadParseError


def test_defaults_point_to_discord() -> None:
    config = WebhookConfiguration()

    assert config.api_root == yarl.URL("https://discord.com/api/v10/webhooks")
    assert config.timeout is None
    assert config.user_agent is None


def test_configuration_from_environment() -> None:
    # GIVEN an environment with webhook variables and unrelated variables
    environ = {
        "DISCORD_WEBHOOK_API_ROOT": "http://localhost:8080/api/webhooks",
        "DISCORD_WEBHOOK_TIMEOUT": "10",
        "DISCORD_WEBHOOK_URL": "https://discord.com/api/webhooks/1111/abcd",
        "HOME": "/home/user",
    }

    # WHEN a configuration is created from that environment
    config = WebhookConfiguration.from_environment(environ)

    # THEN the webhook variables are used
    assert config == WebhookConfiguration(api_root=yarl.URL("http://localhost:8080/api/webhooks"), timeout=10.0)


def test_configuration_from_toml(tmp_path: pathlib.Path) -> None:
    # GIVEN a TOML file with a webhook table
    config_file = tmp_path / "config.toml"
    config_file.write_text(
        textwrap.dedent(
            """
            [webhook]
            api_root = "https://discord.com/api/v9/webhooks"
            timeout = 30
            user_agent = "MyBot/1.0"
            """
        ),
        encoding="utf-8",
    )

    # WHEN the configuration is loaded
    config = WebhookConfiguration.from_toml(config_file)

    # THEN the values from the file are used
    assert config.api_root == yarl.URL("https://discord.com/api/v9/webhooks")
    assert config.timeout == 30.0
    assert config.user_agent == "MyBot/1.0"


def test_toml_without_webhook_table_uses_defaults(tmp_path: pathlib.Path) -> None:
    config_file = tmp_path / "config.toml"
    config_file.write_text("[other]\nkey = 1\n", encoding="utf-8")

    assert WebhookConfiguration.from_toml(config_file) == WebhookConfiguration()


@pytest.mark.parametrize("timeout", [0, -1])
def test_timeout_must_be_positive(timeout: float) -> None:
    with pytest.raises(ValueError):
        WebhookConfiguration(timeout=timeout)


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("https://discord.com/api/webhooks/1111/abcd", ("1111", "abcd")),
        ("https://discord.com/api/v10/webhooks/111122223333/AAAABBBBCCCC", ("111122223333", "AAAABBBBCCCC")),
    ],
)
def test_parse_webhook_url(url: str, expected: tuple[str, str]) -> None:
    assert parse_webhook_url(url) == expected


def test_parse_short_webhook_url_does_not_reveal_url() -> None:
    with pytest.raises(BadParseError) as exc_info:
        parse_webhook_url("https://host/secret")

    assert "secret" not in str(exc_info.value)


def test_credentials_from_url_variable() -> None:
    environ = {
        "DISCORD_WEBHOOK_URL": "https://discord.com/api/webhooks/1111/abcd",
        "DISCORD_WEBHOOK_ID": "9999",
        "DISCORD_WEBHOOK_TOKEN": "zzzz",
    }

    assert credentials_from_environment(environ) == ("1111", "abcd")


def test_credentials_from_separate_variables() -> None:
    environ = {"DISCORD_WEBHOOK_ID": "9999", "DISCORD_WEBHOOK_TOKEN": "zzzz"}

    assert credentials_from_environment(environ) == ("9999", "zzzz")


def test_missing_credentials_raise_key_error() -> None:
    with pytest.raises(KeyError):
        credentials_from_environment({"DISCORD_WEBHOOK_ID": "9999"})
