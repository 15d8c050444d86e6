"""Models to represent Discord embeds.

An embed is a rich content block that is attached to a message. Up to
`Limit.EMBEDS` embeds can be sent with a single message.

See:
    https://discord.com/developers/docs/resources/message#embed-object
"""

from __future__ import annotations

import re
from typing import Final

import attrs

from discord_webhooks.exceptions import TooBigError
from discord_webhooks.limits import Limit
from discord_webhooks.serialization import ALWAYS_SEND

_HEX_COLOR: Final = re.compile(r"[0-9a-fA-F]+")
_MAX_COLOR: Final = 0xFFFFFFFF


@attrs.define
class EmbedAuthor:
    """The author of a Discord embed."""

    name: str
    url: str | None = None
    icon_url: str | None = None
    proxy_icon_url: str | None = None


@attrs.define
class EmbedField:
    """An embed field.

    Fields are rendered in the order they were added; inline fields are
    laid out next to each other in rows.
    """

    name: str
    value: str
    inline: bool | None = None


@attrs.define
class EmbedFooter:
    """The footer of a Discord embed."""

    text: str
    icon_url: str | None = None
    proxy_icon_url: str | None = None


@attrs.define
class EmbedMedia:
    """An image, thumbnail, or video of a Discord embed."""

    url: str | None = None
    proxy_url: str | None = None
    height: int | None = None
    width: int | None = None


@attrs.define
class EmbedProvider:
    """The provider of a Discord embed."""

    name: str | None = None
    url: str | None = None


@attrs.define
class Embed:
    """A Discord embed.

    An embed starts out empty and is filled in with the chained `set_*`
    and `add_field` methods. None of these methods check Discord's
    limits; call `validate` once the embed is complete.
    """

    author: EmbedAuthor | None = None
    title: str | None = None
    description: str | None = None
    url: str | None = None
    timestamp: str | None = None
    color: int | None = None
    fields: list[EmbedField] = attrs.field(factory=list, metadata=ALWAYS_SEND)
    footer: EmbedFooter | None = None
    image: EmbedMedia | None = None
    thumbnail: EmbedMedia | None = None
    video: EmbedMedia | None = None
    provider: EmbedProvider | None = None

    def validate(self) -> int:
        """Validate that the embed does not exceed Discord's limits.

        Components are checked in a fixed order (author, title,
        description, footer, fields, total), so the first oversized
        component is reported, not the largest one.

        :return: The total number of characters in the embed
        :raises TooBigError: If a component or the total is too large
        """
        total = 0
        total += _checked_length("author", self.author.name if self.author else None, Limit.AUTHOR_NAME)
        total += _checked_length("title", self.title, Limit.TITLE)
        total += _checked_length("description", self.description, Limit.DESCRIPTION)
        total += _checked_length("footer", self.footer.text if self.footer else None, Limit.FOOTER_TEXT)

        if len(self.fields) > Limit.FIELDS:
            raise TooBigError(field="fields", size=len(self.fields), limit=Limit.FIELDS)
        for field in self.fields:
            total += _checked_length("field name", field.name, Limit.FIELD_NAME)
            total += _checked_length("field value", field.value, Limit.FIELD_VALUE)

        if total > Limit.EMBED_TOTAL:
            raise TooBigError(field="embed", size=total, limit=Limit.EMBED_TOTAL)
        return total

    def set_title(self, title: str) -> Embed:
        """Set the title of the embed."""
        self.title = title
        return self

    def set_description(self, description: str) -> Embed:
        """Set the description of the embed."""
        self.description = description
        return self

    def set_url(self, url: str) -> Embed:
        """Set the URL the title of the embed links to."""
        self.url = url
        return self

    def set_timestamp(self, timestamp: str) -> Embed:
        """Set the timestamp of the embed content.

        :param timestamp: An ISO8601 timestamp, passed on as-is
        :return: The embed
        """
        self.timestamp = timestamp
        return self

    def set_color(self, color: str) -> Embed:
        """Set the color of the embed from a hex string.

        Both `AA11BB` and `#AA11BB` are accepted. An empty or malformed
        color is ignored and leaves the current color in place.

        :param color: The hex color
        :return: The embed
        """
        color_hex = color.removeprefix("#")
        if not _HEX_COLOR.fullmatch(color_hex):
            return self

        value = int(color_hex, 16)
        if value <= _MAX_COLOR:
            self.color = value
        return self

    def set_footer(
        self,
        text: str,
        icon_url: str | None = None,
        proxy_icon_url: str | None = None,
    ) -> Embed:
        """Set the footer of the embed."""
        self.footer = EmbedFooter(text=text, icon_url=icon_url, proxy_icon_url=proxy_icon_url)
        return self

    def set_image(
        self,
        url: str | None = None,
        proxy_url: str | None = None,
        height: int | None = None,
        width: int | None = None,
    ) -> Embed:
        """Set the image of the embed."""
        self.image = EmbedMedia(url=url, proxy_url=proxy_url, height=height, width=width)
        return self

    def set_thumbnail(
        self,
        url: str | None = None,
        proxy_url: str | None = None,
        height: int | None = None,
        width: int | None = None,
    ) -> Embed:
        """Set the thumbnail of the embed."""
        self.thumbnail = EmbedMedia(url=url, proxy_url=proxy_url, height=height, width=width)
        return self

    def set_video(
        self,
        url: str | None = None,
        proxy_url: str | None = None,
        height: int | None = None,
        width: int | None = None,
    ) -> Embed:
        """Set the video of the embed."""
        self.video = EmbedMedia(url=url, proxy_url=proxy_url, height=height, width=width)
        return self

    def set_provider(self, name: str | None = None, url: str | None = None) -> Embed:
        """Set the provider of the embed."""
        self.provider = EmbedProvider(name=name, url=url)
        return self

    def set_author(
        self,
        name: str,
        url: str | None = None,
        icon_url: str | None = None,
        proxy_icon_url: str | None = None,
    ) -> Embed:
        """Set the author of the embed.

        :param name: The name of the author
        :param url: A link for the author name
        :param icon_url: The URL of the author icon
        :param proxy_icon_url: A proxied URL of the author icon
        :return: The embed
        """
        self.author = EmbedAuthor(name=name, url=url, icon_url=icon_url, proxy_icon_url=proxy_icon_url)
        return self

    def add_field(self, name: str, value: str, inline: bool | None = None) -> Embed:
        """Append a field to the embed.

        The number of fields is not limited here, `validate` reports an
        embed with more than `Limit.FIELDS` fields.

        :param name: The name of the field
        :param value: The value of the field
        :param inline: If the field should be displayed inline
        :return: The embed
        """
        self.fields.append(EmbedField(name=name, value=value, inline=inline))
        return self


def _checked_length(name: str, value: str | None, limit: int) -> int:
    """Return the length of a value, or raise if it exceeds the limit."""
    size = len(value) if value else 0
    if size > limit:
        raise TooBigError(field=name, size=size, limit=limit)
    return size
