"""An asyncio client for Discord webhooks.

Create, get, edit, and delete messages sent through a webhook, and get,
modify, and delete the webhook itself.
"""

from discord_webhooks.configuration import WebhookConfiguration
from discord_webhooks.embed import Embed, EmbedAuthor, EmbedField, EmbedFooter, EmbedMedia, EmbedProvider
from discord_webhooks.exceptions import (
    BadParseError,
    BadStatusError,
    NoContentError,
    TooBigError,
    UnknownError,
    WebhookError,
)
from discord_webhooks.limits import Limit
from discord_webhooks.message import Message, MessageApi, MessageBuilder
from discord_webhooks.webhook import Webhook, WebhookApi

__all__ = [
    "BadParseError",
    "BadStatusError",
    "Embed",
    "EmbedAuthor",
    "EmbedField",
    "EmbedFooter",
    "EmbedMedia",
    "EmbedProvider",
    "Limit",
    "Message",
    "MessageApi",
    "MessageBuilder",
    "NoContentError",
    "TooBigError",
    "UnknownError",
    "Webhook",
    "WebhookApi",
    "WebhookConfiguration",
    "WebhookError",
]
