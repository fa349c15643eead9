"""Shared fixtures for fetch layer tests."""

from collections.abc import AsyncIterator

import httpx
import pytest
import pytest_asyncio

from src.fetch.client import StorageFetcher
from src.fetch.config import FetchConfig
from src.fetch.metrics import FetchMetrics
from src.fetch.mime import MimeLookup, guess_content_type
from tests.helpers.transport import FetcherFactory, RecordingHandler


@pytest.fixture
def metrics() -> FetchMetrics:
    """Fresh metrics instance per test."""
    return FetchMetrics()


@pytest_asyncio.fixture
async def make_fetcher(metrics: FetchMetrics) -> AsyncIterator[FetcherFactory]:
    """Build fetchers wired to a RecordingHandler through MockTransport.

    Clients created for the test are closed when it finishes.
    """
    clients: list[httpx.AsyncClient] = []

    def _make(
        handler: RecordingHandler,
        config: FetchConfig | None = None,
        mime_lookup: MimeLookup = guess_content_type,
    ) -> StorageFetcher:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        clients.append(client)
        return StorageFetcher(
            config=config,
            client=client,
            mime_lookup=mime_lookup,
            metrics=metrics,
        )

    yield _make

    for client in clients:
        await client.aclose()
