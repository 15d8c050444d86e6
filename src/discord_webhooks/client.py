"""The HTTP client shared by all webhook operations.

Every request to the webhook endpoint goes through `Client.send`, which
takes care of addressing, headers, and classifying the response. The
webhook URL contains the secret webhook token, so it is never logged
and never included in an exception.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from http import HTTPStatus
from typing import Any, Final

import aiohttp
import attrs
import yarl
from attrs import validators

from discord_webhooks.configuration import WebhookConfiguration
from discord_webhooks.exceptions import BadStatusError, UnknownError

_logger = logging.getLogger(__name__)

_JSON_HEADERS: Final = {"Content-Type": "application/json"}
_NON_EMPTY_STR = validators.and_(validators.instance_of(str), validators.min_len(1))


@attrs.define(slots=False)
class Client:
    """A client that sends requests to a single Discord webhook.

    The client can either use a session passed in by the caller, which
    it will never close, or create its own session on first use. The
    same client instance is shared by the message and the webhook
    operations, so there is only ever one session per webhook.
    """

    webhook_id: str = attrs.field(validator=_NON_EMPTY_STR)
    token: str = attrs.field(repr=False, validator=_NON_EMPTY_STR)
    config: WebhookConfiguration = attrs.field(kw_only=True, factory=WebhookConfiguration)
    _session: aiohttp.ClientSession | None = attrs.field(kw_only=True, default=None)
    _owns_session: bool = attrs.field(init=False, default=False)

    @property
    def url(self) -> yarl.URL:
        """The base endpoint of the webhook, including the token."""
        return self.config.api_root / self.webhook_id / self.token

    async def send(
        self,
        method: str,
        path: str = "",
        *,
        params: Mapping[str, str] | None = None,
        payload: Any = None,
    ) -> str | None:
        """Send a request to the webhook and return the response body.

        :param method: The HTTP method, e.g. "GET" or "PATCH"
        :param path: A path relative to the webhook URL, like
          "messages/1234"
        :param params: Query parameters to add to the URL
        :param payload: A JSON-compatible payload to send as body
        :return: The response text for a 200, or None for a 204
        :raises BadStatusError: For any other response status
        :raises UnknownError: If the request failed or the response body
          could not be decoded
        """
        url = self.url / path if path else self.url
        session = self._get_session()
        _logger.debug("Sending %s to webhook %s (path=%r)", method, self.webhook_id, path)
        try:
            async with session.request(
                method, url, params=params, json=payload, headers=_JSON_HEADERS
            ) as response:
                _logger.debug("Webhook %s responded with %d", self.webhook_id, response.status)
                if response.status == HTTPStatus.NO_CONTENT:
                    return None
                if response.status != HTTPStatus.OK:
                    _logger.warning(
                        "Unexpected status %d for %s to webhook %s", response.status, method, self.webhook_id
                    )
                    raise BadStatusError(status=response.status, reason=response.reason or "")
                body = await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            # Raise a new exception that does not contain the request
            # URL, as it contains a secret token.
            raise UnknownError(context=f"request to webhook failed ({type(exc).__name__})") from None

        try:
            return body.decode("utf-8")
        except UnicodeDecodeError:
            raise UnknownError(context="unable to decode response body") from None

    async def close(self) -> None:
        """Close the session, if it was created by this client."""
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None
            self._owns_session = False

    def _get_session(self) -> aiohttp.ClientSession:
        """Get the session, creating it on first use if none was given."""
        if self._session is None:
            timeout = aiohttp.ClientTimeout(total=self.config.timeout)
            headers = {"User-Agent": self.config.user_agent} if self.config.user_agent else None
            self._session = aiohttp.ClientSession(timeout=timeout, headers=headers)
            self._owns_session = True
        return self._session
