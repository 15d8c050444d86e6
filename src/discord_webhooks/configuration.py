"""Webhook client configuration."""

from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Final

import attrs
import cattrs
import yarl
from attrs import validators

from discord_webhooks.exceptions import BadParseError

_logger = logging.getLogger(__name__)

_ENVVAR_PREFIX: Final = "DISCORD_WEBHOOK_"
_DEFAULT_API_ROOT: Final = yarl.URL("https://discord.com/api/v10/webhooks")
_MIN_URL_SEGMENTS: Final = 7

# Simplified validators
_INSTANCE_OF_URL = validators.instance_of(yarl.URL)
_OPTIONAL_STR = validators.optional(validators.instance_of(str))
_OPTIONAL_POSITIVE = validators.optional(validators.and_(validators.instance_of(float), validators.gt(0)))


@attrs.define(frozen=True)
class WebhookConfiguration:
    """Configuration for a webhook client.

    The timeout is the total number of seconds a single request may
    take. By default, no timeout is applied.
    """

    api_root: yarl.URL = attrs.field(default=_DEFAULT_API_ROOT, validator=_INSTANCE_OF_URL)
    timeout: float | None = attrs.field(
        default=None, converter=attrs.converters.optional(float), validator=_OPTIONAL_POSITIVE
    )
    user_agent: str | None = attrs.field(default=None, validator=_OPTIONAL_STR)

    @classmethod
    def from_environment(cls, environ: Mapping[str, str] | None = None) -> WebhookConfiguration:
        """Create a WebhookConfiguration from the environment.

        Every `DISCORD_WEBHOOK_<NAME>` variable sets the attribute with
        the lowercase `<NAME>`, e.g. `DISCORD_WEBHOOK_TIMEOUT=10`.
        Unrelated variables with the same prefix are ignored.

        :param environ: The environment to read, defaults to `os.environ`
        :return: A configuration instance
        """
        environ = os.environ if environ is None else environ
        names = {attribute.name for attribute in attrs.fields(cls)}
        raw_config = {
            key.removeprefix(_ENVVAR_PREFIX).lower(): value
            for key, value in environ.items()
            if key.startswith(_ENVVAR_PREFIX) and key.removeprefix(_ENVVAR_PREFIX).lower() in names
        }
        return _structure(raw_config, cls)

    @classmethod
    def from_toml(cls, path: Path) -> WebhookConfiguration:
        """Create a WebhookConfiguration from the `[webhook]` table of a TOML file.

        :param path: The path to the TOML file
        :return: A configuration instance
        """
        with path.open("rb") as config_file:
            parsed_toml = tomllib.load(config_file)
        _logger.debug("Loaded webhook configuration from '%s'", path)
        return _structure(parsed_toml.get("webhook", {}), cls)


def parse_webhook_url(url: str) -> tuple[str, str]:
    """Get the webhook id and token from a webhook URL.

    A webhook URL looks like
    `https://discord.com/api/webhooks/<webhook id>/<token>`, the last two
    path segments are the id and the token.

    :param url: The webhook URL
    :return: A tuple with the webhook id and token
    :raises BadParseError: If the URL has too few segments, or the id
      or the token is empty
    """
    segments = url.split("/")
    # The URL contains a secret token, keep it out of the exception.
    if len(segments) < _MIN_URL_SEGMENTS:
        raise BadParseError(context="webhook url")
    webhook_id, token = segments[-2], segments[-1]
    if not webhook_id or not token:
        raise BadParseError(context="webhook url")
    return webhook_id, token


def credentials_from_environment(environ: Mapping[str, str] | None = None) -> tuple[str, str]:
    """Get the webhook id and token from the environment.

    `DISCORD_WEBHOOK_URL` takes precedence over the separate
    `DISCORD_WEBHOOK_ID` and `DISCORD_WEBHOOK_TOKEN` variables.

    :param environ: The environment to read, defaults to `os.environ`
    :return: A tuple with the webhook id and token
    :raises KeyError: If no credentials are present
    """
    environ = os.environ if environ is None else environ
    if url := environ.get(f"{_ENVVAR_PREFIX}URL"):
        return parse_webhook_url(url)
    return environ[f"{_ENVVAR_PREFIX}ID"], environ[f"{_ENVVAR_PREFIX}TOKEN"]


def _structure(raw_config: Mapping[str, object], cls: type[WebhookConfiguration]) -> WebhookConfiguration:
    converter = cattrs.Converter()
    converter.register_structure_hook(yarl.URL, lambda v, t: t(v))
    return converter.structure(dict(raw_config), cls)
