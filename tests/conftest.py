"""Shared test fixtures.

The network boundary is replaced with ``httpx.MockTransport`` so the
real ``LocalizeClient`` code path runs without touching the internet.
Every request seen by the transport is recorded on ``api.requests``.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable

import httpx
import pytest

from localizeto.api.client import LocalizeClient
from localizeto.i18n.store import TranslationStore
from localizeto.services.loader import TranslationLoader

Handler = Callable[[httpx.Request], Awaitable[httpx.Response]]


class FakeAPI:
    """Programmable stand-in for the localize.to server."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.handler: Handler = self._default

    def respond_json(self, payload: Any, status_code: int = 200) -> None:
        async def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status_code, json=payload)

        self.handler = handler

    def respond_with(self, handler: Handler) -> None:
        self.handler = handler

    async def _default(self, request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={})

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return await self.handler(request)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def api() -> FakeAPI:
    return FakeAPI()


@pytest.fixture
async def client(api: FakeAPI):
    """A ``LocalizeClient`` wired to the fake server."""
    c = LocalizeClient(transport=api.transport())
    yield c
    await c.aclose()


@pytest.fixture
def store() -> TranslationStore:
    return TranslationStore(language="en", fallback_language="fr")


@pytest.fixture
def loader(store: TranslationStore, client: LocalizeClient) -> TranslationLoader:
    return TranslationLoader(store, client)
