import asyncio

import httpx
import pytest

from sdk.booststore import AsyncStoreClient
from sdk.notifications import Notifier


class RecordingSink:
    def __init__(self):
        self.calls = []

    def __call__(self, message, level):
        self.calls.append((message, level))

    @property
    def levels(self):
        return [level for _, level in self.calls]


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def notifier(sink):
    return Notifier(sink)


@pytest.fixture
def make_client():
    clients = []

    def _make(handler, session_token="token-1"):
        client = AsyncStoreClient(
            base_url="http://store.test",
            session_token=session_token,
            transport=httpx.MockTransport(handler),
        )
        clients.append(client)
        return client

    yield _make
    for client in clients:
        asyncio.run(client.aclose())
