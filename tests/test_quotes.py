"""Tests for quote and translation loading from the asset server."""
import random

import httpx
import pytest

from server.mindbridge_api.database import MemoryStorage
from server.mindbridge_api.services.quotes import DEFAULT_QUOTE, LANGUAGE_KEY, QuoteProvider, TranslationTable

from conftest import ASSETS, make_asset_client


def failing_client() -> httpx.AsyncClient:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("asset server down", request=request)

    return httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://assets.test")


class TestQuoteProvider:
    @pytest.mark.asyncio
    async def test_language_file(self):
        provider = QuoteProvider(make_asset_client(), rng=random.Random(1))
        quotes = await provider.load("en")
        assert quotes == ASSETS["/text/quotes_en.json"]
        assert await provider.random_quote("en") in quotes

    @pytest.mark.asyncio
    async def test_falls_back_to_shared_file(self):
        provider = QuoteProvider(make_asset_client(), supported=["en", "te"])
        assert await provider.load("te") == ["Shared quote."]

    @pytest.mark.asyncio
    async def test_falls_back_to_default_quote(self):
        provider = QuoteProvider(failing_client())
        assert await provider.random_quote("en") == DEFAULT_QUOTE

    @pytest.mark.asyncio
    async def test_malformed_file_is_skipped(self):
        assets = {"/text/quotes_en.json": {"not": "a list"}, "/text/quotes_db.json": ["", "Kept."]}
        provider = QuoteProvider(make_asset_client(assets))
        assert await provider.load("en") == ["Kept."]

    @pytest.mark.asyncio
    async def test_results_are_cached(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request.url.path)
            return httpx.Response(200, json=["Only one."])

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://assets.test")
        provider = QuoteProvider(client)
        await provider.load("en")
        await provider.load("en")
        assert calls == ["/text/quotes_en.json"]

    @pytest.mark.asyncio
    async def test_unsupported_language_is_not_fetched_or_cached(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request.url.path)
            return httpx.Response(200, json=["Only one."])

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://assets.test")
        provider = QuoteProvider(client, supported=["en", "hi"])

        await provider.load("../../secrets")
        await provider.load("xx")
        await provider.load("en")

        assert calls == ["/text/quotes_en.json"]
        assert list(provider._cache) == ["en"]
        assert provider.resolve_language("hi") == "hi"
        assert provider.resolve_language("zz") == "en"


class TestTranslationTable:
    @pytest.mark.asyncio
    async def test_load_and_lookup(self):
        storage = MemoryStorage()
        table = TranslationTable(make_asset_client(), storage, supported=["en", "hi"])

        await table.load("hi")

        assert table.is_ready
        assert table.current_language == "hi"
        assert storage.get(LANGUAGE_KEY) == "hi"
        assert table.get_text("home.motto") == ASSETS["/languages/hi.json"]["home"]["motto"]

    @pytest.mark.asyncio
    async def test_missing_keys(self):
        table = TranslationTable(make_asset_client(), MemoryStorage(), supported=["en"])
        await table.load("en")
        assert table.get_text("nav.home") == "Home"
        assert table.get_text("nav.missing") is None
        assert table.get_text("home") is None
        assert table.get_text("home.motto.deeper") is None

    @pytest.mark.asyncio
    async def test_unsupported_language_uses_english(self):
        table = TranslationTable(make_asset_client(), MemoryStorage(), supported=["en", "hi"])
        await table.load("fr")
        assert table.current_language == "en"
        assert table.get_text("home.motto") == "Welcome to MindBridge!"

    @pytest.mark.asyncio
    async def test_failed_language_falls_back_to_english(self):
        table = TranslationTable(make_asset_client(), MemoryStorage(), supported=["en", "mr"])
        await table.load("mr")
        assert table.current_language == "en"

    @pytest.mark.asyncio
    async def test_all_fetches_fail(self):
        table = TranslationTable(failing_client(), MemoryStorage(), supported=["en"])
        assert await table.load("en") == {}
        assert table.is_ready
        assert table.get_text("home.motto") is None

    @pytest.mark.asyncio
    async def test_saved_language_is_restored(self):
        storage = MemoryStorage()
        storage.set(LANGUAGE_KEY, "hi")
        table = TranslationTable(make_asset_client(), storage, supported=["en", "hi"])
        assert table.current_language == "hi"

    @pytest.mark.asyncio
    async def test_wait_until_ready_times_out(self):
        table = TranslationTable(make_asset_client(), MemoryStorage())
        assert await table.wait_until_ready(timeout=0.01) is False
        assert not table.is_ready

    @pytest.mark.asyncio
    async def test_wait_until_ready_after_load(self):
        table = TranslationTable(make_asset_client(), MemoryStorage())
        await table.load("en")
        assert await table.wait_until_ready(timeout=0.01) is True
