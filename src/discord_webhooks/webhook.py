"""Manage a Discord webhook and the messages it sends.

A webhook is identified by its id and secret token, both of which are
part of the webhook URL:

    https://discord.com/api/webhooks/<webhook id>/<token>
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Final

import aiohttp
import attrs

from discord_webhooks import serialization
from discord_webhooks.client import Client
from discord_webhooks.configuration import WebhookConfiguration, parse_webhook_url
from discord_webhooks.exceptions import NoContentError
from discord_webhooks.message import MessageApi

_logger = logging.getLogger(__name__)

_MODIFIABLE_ATTRIBUTES: Final = frozenset({"name", "avatar"})


@attrs.define
class Webhook:
    """A webhook as returned by Discord.

    See:
        https://discord.com/developers/docs/resources/webhook#webhook-object
    """

    id: str
    type: int
    channel_id: str | None = None
    name: str | None = None
    guild_id: str | None = None
    avatar: str | None = None
    application_id: str | None = None
    token: str | None = attrs.field(default=None, repr=False)
    url: str | None = attrs.field(default=None, repr=False)


class WebhookApi:
    """Access the Discord API through a single webhook.

    Message operations are available through `message`, which shares
    the HTTP client of this instance. Use the instance as an async
    context manager to close the HTTP session on exit:

        async with WebhookApi(webhook_id, token) as webhook:
            await webhook.message.create(message)
    """

    def __init__(
        self,
        webhook_id: str,
        token: str,
        *,
        session: aiohttp.ClientSession | None = None,
        config: WebhookConfiguration | None = None,
    ) -> None:
        self.client = Client(webhook_id, token, config=config or WebhookConfiguration(), session=session)
        self.message = MessageApi(self.client)

    @classmethod
    def from_url(
        cls,
        url: str,
        *,
        session: aiohttp.ClientSession | None = None,
        config: WebhookConfiguration | None = None,
    ) -> WebhookApi:
        """Create a WebhookApi from a webhook URL.

        :param url: The full webhook URL
        :return: A WebhookApi for the webhook
        :raises BadParseError: If the URL is too short to contain an id
          and a token
        """
        webhook_id, token = parse_webhook_url(url)
        return cls(webhook_id, token, session=session, config=config)

    @property
    def webhook_id(self) -> str:
        return self.client.webhook_id

    @property
    def token(self) -> str:
        return self.client.token

    async def get(self) -> Webhook:
        """Get the webhook.

        See:
            https://discord.com/developers/docs/resources/webhook#get-webhook-with-token
        """
        text = await self.client.send("GET")
        return _structure_webhook(text, context="get webhook response")

    async def modify(self, webhook: Webhook) -> Webhook:
        """Modify the webhook, e.g. to change its name.

        See:
            https://discord.com/developers/docs/resources/webhook#modify-webhook-with-token

        Only the name and the avatar can be changed through the token
        endpoint, all other attributes of `webhook` are not sent.

        :param webhook: The webhook with the new values
        :return: The modified webhook
        """
        payload = {
            key: value
            for key, value in serialization.unstructure(webhook).items()
            if key in _MODIFIABLE_ATTRIBUTES
        }
        text = await self.client.send("PATCH", payload=payload)
        modified = _structure_webhook(text, context="modify webhook response")
        _logger.info("Modified webhook %s", self.webhook_id)
        return modified

    async def delete(self) -> None:
        """Delete the webhook.

        See:
            https://discord.com/developers/docs/resources/webhook#delete-webhook-with-token
        """
        await self.client.send("DELETE")
        _logger.info("Deleted webhook %s", self.webhook_id)

    async def close(self) -> None:
        """Close the HTTP session, if it was created by this instance."""
        await self.client.close()

    async def __aenter__(self) -> WebhookApi:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        await self.close()


def _structure_webhook(text: str | None, *, context: str) -> Webhook:
    if text is None:
        raise NoContentError()
    return serialization.structure(text, Webhook, context=context)
