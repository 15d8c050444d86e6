"""Exceptions raised while talking to a Discord webhook.

None of these exceptions contain the webhook URL, as the URL contains the
secret webhook token that should never end up in a log.
"""

from __future__ import annotations

import attrs


class WebhookError(Exception):
    """Base class for all webhook client exceptions."""


@attrs.define
class BadStatusError(WebhookError):
    """Raised when Discord responds with a status other than 200 or 204."""

    status: int
    reason: str = ""

    def __str__(self) -> str:
        """Provide the most important exception information."""
        status = self.status
        reason = self.reason
        return f"Unexpected response from Discord ({status=}): {reason!r}"


@attrs.define
class NoContentError(WebhookError):
    """Raised when Discord answers 204 to a request that needs a body."""

    def __str__(self) -> str:
        return "Discord returned no content"


@attrs.define
class UnknownError(WebhookError):
    """Raised for local failures unrelated to a status code.

    This covers connection failures, timeouts, and response bodies that
    cannot be decoded.
    """

    context: str

    def __str__(self) -> str:
        return f"Unknown error: {self.context}"


@attrs.define
class BadParseError(WebhookError):
    """Raised when a value received does not match the expected schema."""

    context: str

    def __str__(self) -> str:
        return f"Unable to parse {self.context}"


@attrs.define
class TooBigError(WebhookError):
    """Raised when an outbound payload exceeds a Discord limit.

    This is detected locally, before a request is sent.
    """

    field: str
    size: int
    limit: int

    def __str__(self) -> str:
        """Provide the most important exception information."""
        return f"{self.field} exceeded max character count, {self.size} of {self.limit}"
