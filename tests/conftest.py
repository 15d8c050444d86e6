import json
from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass
from typing import Any

import aiohttp
import pytest
import yarl
from aiohttp import web
from aiohttp.test_utils import TestServer

from discord_webhooks import WebhookApi, WebhookConfiguration

WEBHOOK_ID = "1111"
WEBHOOK_TOKEN = "abcd"
WEBHOOK_PATH = f"/api/webhooks/{WEBHOOK_ID}/{WEBHOOK_TOKEN}"


@dataclass
class RecordedRequest:
    method: str
    path: str
    query: dict[str, str]
    content_type: str
    body: Any


@dataclass
class DiscordMock:
    api_root: yarl.URL
    requests: list[RecordedRequest]


DiscordMockFactory = Callable[[dict[tuple[str, str], Callable[[], web.Response]]], Awaitable[DiscordMock]]


@pytest.fixture
def discord_mock_factory(
    aiohttp_server: Callable[[web.Application], Awaitable[TestServer]],
) -> DiscordMockFactory:
    """Return a factory to create a Discord webhook API mock.

    The factory takes a map of (method, route path) to response factory
    functions. All requests are recorded to allow introspection.
    """

    async def create_discord_app_mock(
        response_factories: dict[tuple[str, str], Callable[[], web.Response]],
    ) -> DiscordMock:
        requests: list[RecordedRequest] = []

        def make_handler(response_factory: Callable[[], web.Response]):
            async def handler_(request_: web.Request) -> web.Response:
                raw_body = await request_.read()
                requests.append(
                    RecordedRequest(
                        method=request_.method,
                        path=request_.path,
                        query=dict(request_.query),
                        content_type=request_.headers.get("Content-Type", ""),
                        body=json.loads(raw_body) if raw_body else None,
                    )
                )
                return response_factory()

            return handler_

        app = web.Application()
        for (method, path), response_factory in response_factories.items():
            app.router.add_route(method, path, make_handler(response_factory))

        server = await aiohttp_server(app)
        return DiscordMock(api_root=server.make_url("/api/webhooks"), requests=requests)

    return create_discord_app_mock


@pytest.fixture
async def client_session() -> AsyncIterator[aiohttp.ClientSession]:
    async with aiohttp.ClientSession() as session:
        yield session


@pytest.fixture
def webhook_api_factory(client_session: aiohttp.ClientSession) -> Callable[[DiscordMock], WebhookApi]:
    """Return a factory for a WebhookApi that talks to a Discord mock."""

    def _webhook_api_factory(discord_mock: DiscordMock) -> WebhookApi:
        config = WebhookConfiguration(api_root=discord_mock.api_root)
        return WebhookApi(WEBHOOK_ID, WEBHOOK_TOKEN, session=client_session, config=config)

    return _webhook_api_factory


@pytest.fixture
def message_response() -> dict[str, Any]:
    """Get a message object as returned by Discord."""
    return {
        "id": "1234567890",
        "type": 0,
        "content": "Content portion of the message.",
        "channel_id": "2222",
        "author": {"bot": True, "id": WEBHOOK_ID, "username": "Webhook Example"},
        "attachments": [],
        "embeds": [
            {
                "type": "rich",
                "title": "Title Here",
                "description": "Description Here",
                "color": 13346551,
                "fields": [
                    {"name": "Field1", "value": "Value1", "inline": False},
                    {"name": "Inline Field1", "value": "Value1", "inline": True},
                ],
                "author": {"name": "Author Here"},
                "footer": {"text": "Footer Here"},
            }
        ],
        "mentions": [],
        "mention_roles": [],
        "pinned": False,
        "mention_everyone": False,
        "tts": False,
        "timestamp": "2023-07-19T09:55:00.000000+00:00",
        "edited_timestamp": None,
        "flags": 0,
        "components": [],
        "webhook_id": WEBHOOK_ID,
    }


@pytest.fixture
def webhook_response() -> dict[str, Any]:
    """Get a webhook object as returned by Discord."""
    return {
        "application_id": None,
        "avatar": None,
        "channel_id": "2222",
        "guild_id": "3333",
        "id": WEBHOOK_ID,
        "name": "Webhook Example",
        "type": 1,
        "token": WEBHOOK_TOKEN,
        "url": f"https://discord.com/api/webhooks/{WEBHOOK_ID}/{WEBHOOK_TOKEN}",
    }
