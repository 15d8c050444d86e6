"""Size limits enforced by the Discord API.

See:
    https://discord.com/developers/docs/resources/message#embed-object-embed-limits
    https://discord.com/developers/docs/resources/webhook#execute-webhook
"""

from __future__ import annotations

from typing import Final


class Limit:
    """Discord limits that cannot be exceeded."""

    # Counts
    EMBEDS: Final = 10
    FIELDS: Final = 25

    # Message
    USERNAME: Final = 80
    CONTENT: Final = 2000

    # Embed
    AUTHOR_NAME: Final = 256
    TITLE: Final = 256
    DESCRIPTION: Final = 4096
    FIELD_NAME: Final = 256
    FIELD_VALUE: Final = 1024
    FOOTER_TEXT: Final = 2048
    EMBED_TOTAL: Final = 6000
