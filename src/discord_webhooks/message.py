"""Create, get, edit, and delete messages sent by a webhook.

`MessageBuilder` is the outbound message, `Message` is a message as
returned by Discord. `MessageApi` performs the requests; it is usually
accessed through `WebhookApi.message`.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable

import attrs

from discord_webhooks import serialization
from discord_webhooks.client import Client
from discord_webhooks.embed import Embed
from discord_webhooks.exceptions import NoContentError, TooBigError
from discord_webhooks.limits import Limit
from discord_webhooks.serialization import ALWAYS_SEND

_logger = logging.getLogger(__name__)


@attrs.define(frozen=True)
class Message:
    """A message as returned by Discord.

    See:
        https://discord.com/developers/docs/resources/message#message-object
    """

    id: str
    channel_id: str
    content: str
    timestamp: str
    tts: bool
    mention_everyone: bool
    pinned: bool
    webhook_id: str
    type: int
    embeds: list[Embed] = attrs.field(factory=list)
    edited_timestamp: str | None = None


@attrs.define
class MessageBuilder:
    """A message to send to a Discord webhook.

    For Discord to accept the message, at least one of `content` or
    `embeds` has to be set. This is left to Discord to check.

    See:
        https://discord.com/developers/docs/resources/webhook#execute-webhook-jsonform-params
    """

    username: str | None = None
    content: str | None = None
    tts: bool | None = None
    embeds: list[Embed] = attrs.field(factory=list, metadata=ALWAYS_SEND)

    @classmethod
    def from_message(cls, message: Message) -> MessageBuilder:
        """Create a builder from an existing message to edit it.

        The content and a copy of the embeds are taken over, so changing
        the builder does not change the message.

        :param message: The message to start from
        :return: A new message builder
        """
        return cls(content=message.content, embeds=copy.deepcopy(message.embeds))

    def validate(self) -> int:
        """Validate that the message does not exceed Discord's limits.

        The username and content are checked first, then every embed in
        order, and finally the combined size of all embeds.

        :return: The total number of characters in all embeds
        :raises TooBigError: On the first limit that is exceeded
        """
        if self.username is not None and len(self.username) > Limit.USERNAME:
            raise TooBigError(field="username", size=len(self.username), limit=Limit.USERNAME)
        if self.content is not None and len(self.content) > Limit.CONTENT:
            raise TooBigError(field="content", size=len(self.content), limit=Limit.CONTENT)
        if len(self.embeds) > Limit.EMBEDS:
            raise TooBigError(field="embeds", size=len(self.embeds), limit=Limit.EMBEDS)

        total = sum(embed.validate() for embed in self.embeds)
        if total > Limit.EMBED_TOTAL:
            raise TooBigError(field="embed", size=total, limit=Limit.EMBED_TOTAL)
        return total

    def set_username(self, username: str) -> MessageBuilder:
        """Override the username of the webhook for this message.

        The username is stored even when it is too long.

        :raises TooBigError: If the username exceeds `Limit.USERNAME`
        """
        self.username = username
        if len(username) > Limit.USERNAME:
            raise TooBigError(field="username", size=len(username), limit=Limit.USERNAME)
        return self

    def set_content(self, content: str) -> MessageBuilder:
        """Set the text content of the message.

        The content is stored even when it is too long.

        :raises TooBigError: If the content exceeds `Limit.CONTENT`
        """
        self.content = content
        if len(content) > Limit.CONTENT:
            raise TooBigError(field="content", size=len(content), limit=Limit.CONTENT)
        return self

    def set_tts(self, tts: bool) -> MessageBuilder:
        """Set whether this is a text-to-speech message."""
        self.tts = tts
        return self

    def embed(self, func: Callable[[Embed], object]) -> MessageBuilder:
        """Create a new embed and add it to the message.

        The function receives a fresh `Embed` to fill in, for example
        `builder.embed(lambda e: e.set_title("Title").add_field("a", "b"))`.
        Once the message holds `Limit.EMBEDS` embeds, the function is not
        called and the embed is silently dropped.

        :param func: A function that fills in the new embed
        :return: The message builder
        """
        if len(self.embeds) < Limit.EMBEDS:
            embed = Embed()
            func(embed)
            self.embeds.append(embed)
        return self

    def add_embed(self, embed: Embed) -> MessageBuilder:
        """Add an embed that was built separately.

        As with `embed`, the embed is silently dropped if the message
        already holds `Limit.EMBEDS` embeds.
        """
        if len(self.embeds) < Limit.EMBEDS:
            self.embeds.append(embed)
        return self


@attrs.define
class MessageApi:
    """Create, get, edit, and delete the messages of a webhook."""

    client: Client

    async def create(self, message: MessageBuilder, thread_id: str | None = None) -> Message:
        """Send a new message through the webhook.

        See:
            https://discord.com/developers/docs/resources/webhook#execute-webhook

        :param message: The message to send
        :param thread_id: The thread to post in, required when the
          webhook posts in a forum channel thread
        :return: The created message
        """
        message.validate()
        # 'wait=true' makes Discord respond with the created message.
        params = {"wait": "true"}
        if thread_id is not None:
            params["thread_id"] = thread_id

        text = await self.client.send("POST", params=params, payload=serialization.unstructure(message))
        created = _structure_message(text, context="create response")
        _logger.info("Created message %s with webhook %s", created.id, self.client.webhook_id)
        return created

    async def get(self, message_id: str) -> Message:
        """Get a message previously sent by the webhook.

        See:
            https://discord.com/developers/docs/resources/webhook#get-webhook-message
        """
        text = await self.client.send("GET", f"messages/{message_id}")
        return _structure_message(text, context="get response")

    async def edit(self, message_id: str, message: MessageBuilder) -> Message:
        """Replace a message previously sent by the webhook.

        See:
            https://discord.com/developers/docs/resources/webhook#edit-webhook-message

        :param message_id: The id of the message to edit
        :param message: The new message
        :return: The edited message
        """
        message.validate()
        text = await self.client.send(
            "PATCH", f"messages/{message_id}", payload=serialization.unstructure(message)
        )
        edited = _structure_message(text, context="edit response")
        _logger.info("Edited message %s with webhook %s", message_id, self.client.webhook_id)
        return edited

    async def delete(self, message_id: str) -> None:
        """Delete a message previously sent by the webhook.

        Discord responds with "204 No Content" on success.

        See:
            https://discord.com/developers/docs/resources/webhook#delete-webhook-message
        """
        await self.client.send("DELETE", f"messages/{message_id}")
        _logger.info("Deleted message %s with webhook %s", message_id, self.client.webhook_id)


def _structure_message(text: str | None, *, context: str) -> Message:
    if text is None:
        raise NoContentError()
    return serialization.structure(text, Message, context=context)
