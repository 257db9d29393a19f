"""Read-only quote and translation tables fetched from the static assets.

Both loaders follow the asset path convention (`text/quotes_<lang>.json`,
`languages/<lang>.json`) and never fail the caller: a failed fetch falls
back to a default and is logged.
"""
import asyncio
import logging
import random
from typing import Any, Optional

import httpx

from ..database import StorageArea

logger = logging.getLogger(__name__)

DEFAULT_QUOTE = "Your mental health matters just as much as your physical health."
LANGUAGE_KEY = "selectedLanguage"
FALLBACK_LANGUAGE = "en"


async def _fetch_json(client: httpx.AsyncClient, path: str) -> Any:
    response = await client.get(path)
    response.raise_for_status()
    return response.json()


class QuoteProvider:
    """Random motivational quotes, cached per supported language."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        supported: Optional[list[str]] = None,
        rng: Optional[random.Random] = None,
    ):
        self.client = client
        self.supported = supported or [FALLBACK_LANGUAGE]
        self.rng = rng or random.Random()
        self._cache: dict[str, list[str]] = {}

    def resolve_language(self, lang: Optional[str]) -> str:
        if lang in self.supported:
            return lang
        logger.warning("Unsupported quote language %r, using %s", lang, FALLBACK_LANGUAGE)
        return FALLBACK_LANGUAGE

    async def load(self, lang: str) -> list[str]:
        """
        Quotes for lang, falling back to the shared quote file and then to
        the single default quote. Unsupported languages load English.
        """
        lang = self.resolve_language(lang)
        if lang in self._cache:
            return self._cache[lang]

        quotes: list[str] = []
        for path in (f"/text/quotes_{lang}.json", "/text/quotes_db.json"):
            try:
                data = await _fetch_json(self.client, path)
            except (httpx.HTTPError, ValueError) as e:
                logger.warning("Could not load quotes from %s: %s", path, e)
                continue
            quotes = [q for q in data if isinstance(q, str) and q.strip()] if isinstance(data, list) else []
            if quotes:
                break

        if not quotes:
            quotes = [DEFAULT_QUOTE]
        self._cache[lang] = quotes
        return quotes

    async def random_quote(self, lang: str = FALLBACK_LANGUAGE) -> str:
        quotes = await self.load(lang)
        return self.rng.choice(quotes)


class TranslationTable:
    """Nested translation strings for the selected language."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        storage: StorageArea,
        supported: Optional[list[str]] = None,
        default_language: str = FALLBACK_LANGUAGE,
    ):
        self.client = client
        self.storage = storage
        self.supported = supported or [FALLBACK_LANGUAGE]
        self.current_language = storage.get(LANGUAGE_KEY) or default_language
        self.translations: dict[str, Any] = {}
        self._ready = asyncio.Event()

    @property
    def is_ready(self) -> bool:
        return self._ready.is_set()

    async def load(self, lang: str) -> dict[str, Any]:
        """Load lang's table, falling back to English; remembers the choice."""
        if lang not in self.supported:
            logger.warning("Unsupported language %r, using %s", lang, FALLBACK_LANGUAGE)
            lang = FALLBACK_LANGUAGE
        try:
            data = await _fetch_json(self.client, f"/languages/{lang}.json")
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Error loading language %s: %s", lang, e)
            if lang != FALLBACK_LANGUAGE:
                return await self.load(FALLBACK_LANGUAGE)
            data = {}

        self.translations = data if isinstance(data, dict) else {}
        self.current_language = lang
        self.storage.set(LANGUAGE_KEY, lang)
        self._ready.set()
        return self.translations

    def get_text(self, key: str) -> Optional[str]:
        """Look up a dotted key such as `home.motto`."""
        node: Any = self.translations
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return None
            node = node[part]
        return node if isinstance(node, str) else None

    async def wait_until_ready(self, timeout: float = 3.0) -> bool:
        """Wait for the first load; returns False (and carries on) after timeout."""
        try:
            await asyncio.wait_for(self._ready.wait(), timeout)
            return True
        except asyncio.TimeoutError:
            logger.warning("Translations not ready after %.1fs, continuing with defaults", timeout)
            return False
