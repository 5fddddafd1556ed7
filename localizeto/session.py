"""Consumer-facing localizer session.

``LocalizeTo`` bundles one ``TranslationStore``, one ``TranslationLoader``
and the API key for the lifetime of a single session.  It is passed
explicitly to whoever needs translations; there is no module-level
instance.

Usage::

    async with create_localizer(get_settings()) as lc:
        await lc.download_languages(["en", "fr"])
        lc.localize("greeting")
        lc.localize_to("greeting", "fr")
"""

from __future__ import annotations

from typing import Mapping, Sequence

import httpx

from localizeto.api.client import LocalizeClient
from localizeto.core.config import Settings
from localizeto.core.errors import LocalizeError
from localizeto.core.logging import setup_logging
from localizeto.i18n.store import TranslationStore
from localizeto.services.loader import Callback, TranslationLoader


class LocalizeTo:
    """Language state, lookups and downloads for one session.

    Args:
        store: Translation store owned by this session.
        loader: Loader writing into *store*.
        api_key: Credential sent with every download.
        client: Transport closed by ``aclose()``; optional.
    """

    def __init__(
        self,
        store: TranslationStore,
        loader: TranslationLoader,
        api_key: str | None = None,
        client: LocalizeClient | None = None,
    ) -> None:
        self._store = store
        self._loader = loader
        self._api_key = api_key
        self._client = client

    # --- Language state ----------------------------------------------------

    @property
    def language(self) -> str:
        return self._store.language

    def set_language(self, language: str | None) -> None:
        self._store.set_active_language(language)

    @property
    def fallback_language(self) -> str | None:
        return self._store.fallback_language

    def set_fallback_language(self, language: str | None) -> None:
        self._store.set_fallback_language(language)

    # --- Lookups -----------------------------------------------------------

    @property
    def ls(self) -> Mapping[str, str]:
        """Resolved strings for the current language pair."""
        return self._store.view

    @property
    def translations(self) -> dict[str, dict[str, str]]:
        return self._store.translations

    def localize(self, key: str) -> str:
        return self._store.resolve(key)

    def localize_to(self, key: str, language: str | None = None) -> str:
        """Resolve *key* in *language* only, or via the fallback chain if omitted."""
        if language:
            return self._store.resolve_for(key, language)
        return self._store.resolve(key)

    def unlocalized(self, key: str) -> str:
        return self._store.unlocalized(key)

    # --- Downloads ---------------------------------------------------------

    @property
    def is_loading(self) -> bool:
        return self._loader.is_loading

    async def download_language(
        self, language: str | None, callback: Callback | None = None
    ) -> LocalizeError | None:
        return await self._loader.download_language(language, self._api_key, callback)

    async def download_languages(
        self,
        languages: Sequence[str] | None = None,
        callback: Callback | None = None,
    ) -> LocalizeError | None:
        return await self._loader.download_languages(languages, self._api_key, callback)

    async def download_version(
        self,
        version: str,
        languages: Sequence[str] | None = None,
        callback: Callback | None = None,
    ) -> LocalizeError | None:
        return await self._loader.download_snapshot(version, languages, self._api_key, callback)

    # --- Teardown ----------------------------------------------------------

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()

    async def __aenter__(self) -> LocalizeTo:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()


def create_localizer(
    settings: Settings,
    translations: Mapping[str, Mapping[str, str]] | None = None,
    client: httpx.AsyncClient | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    configure_logging: bool = False,
) -> LocalizeTo:
    """Create a fully wired ``LocalizeTo`` session.

    Args:
        settings: Localizer settings (API key, base URL, languages).
        translations: Initial ``{language: {key: text}}`` data.
        client: Pre-built ``httpx.AsyncClient`` (caller closes it).
        transport: Custom httpx transport, mainly for tests.
        configure_logging: Install the JSON log handler at
            ``settings.LOG_LEVEL``. Leave off when the host application
            owns logging.

    Returns:
        A ``LocalizeTo`` whose ``aclose()`` releases the HTTP client.
    """
    if configure_logging:
        setup_logging(settings.LOG_LEVEL)

    store = TranslationStore(
        translations,
        language=settings.LOCALIZE_LANGUAGE,
        fallback_language=settings.fallback_language,
    )
    api = LocalizeClient(
        base_url=settings.LOCALIZE_BASE_URL,
        timeout=settings.HTTP_TIMEOUT_SECONDS,
        client=client,
        transport=transport,
    )
    loader = TranslationLoader(store, api)
    return LocalizeTo(store, loader, api_key=settings.LOCALIZE_API_KEY or None, client=api)
