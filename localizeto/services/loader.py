"""Remote download orchestration for the translation store.

One ``download_*`` call issues at most one GET against the localize.to
API, merges the result into the ``TranslationStore`` and reports the
outcome through a callback receiving ``LocalizeError | None``.  Errors
are never raised to the caller.

Overlapping downloads are allowed.  Each one merges when *its* response
arrives, so the latest completion wins for a language requested twice,
and ``is_loading`` stays true until the last outstanding request ends.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Sequence

from pydantic import TypeAdapter, ValidationError

from localizeto.api.client import LocalizeClient
from localizeto.core.errors import (
    CredentialRequiredError,
    LanguageRequiredError,
    LocalizeError,
    PayloadError,
    RemoteError,
)
from localizeto.i18n.store import TranslationStore

logger = logging.getLogger(__name__)

Callback = Callable[[LocalizeError | None], Any]

_TABLES = TypeAdapter(dict[str, dict[str, str]])


def _noop(_error: LocalizeError | None) -> None:
    return None


def languages_url(codes: Sequence[str] | None = None) -> str:
    """Path for the latest tables of *codes*, or of every language."""
    if codes:
        return "/v1/languages/" + ",".join(codes)
    return "/v1/languages"


def snapshot_url(version: str, codes: Sequence[str] | None = None) -> str:
    """Path for a versioned snapshot, optionally scoped to *codes*."""
    if codes:
        return f"/v1/snapshot/{version}/languages/" + ",".join(codes)
    return f"/v1/snapshot/{version}"


class TranslationLoader:
    """Feeds downloaded language tables into a ``TranslationStore``.

    Args:
        store: Store receiving the merged tables.
        client: Transport used for the GET requests.
    """

    def __init__(self, store: TranslationStore, client: LocalizeClient) -> None:
        self._store = store
        self._client = client
        self._in_flight = 0

    @property
    def store(self) -> TranslationStore:
        return self._store

    @property
    def is_loading(self) -> bool:
        """True while at least one download is outstanding."""
        return self._in_flight > 0

    async def download_languages(
        self,
        codes: Sequence[str] | None,
        credential: str | None,
        callback: Callback | None = None,
    ) -> LocalizeError | None:
        """Download the latest tables for *codes* (all languages if empty).

        Every language present in the response replaces its table in the
        store.

        Returns:
            The error passed to *callback*, or ``None`` on success.
        """
        callback = callback or _noop
        if not credential:
            return self._finish(callback, CredentialRequiredError())

        codes = list(codes or [])
        tables, error = await self._fetch(languages_url(codes), credential, codes, None)
        if tables is not None:
            self._store.merge_snapshot(tables)
            logger.info(
                "Merged %d language table(s)",
                len(tables),
                extra={"event": "download_done", "languages": sorted(tables)},
            )
        return self._finish(callback, error)

    async def download_language(
        self,
        code: str | None,
        credential: str | None,
        callback: Callback | None = None,
    ) -> LocalizeError | None:
        """Download a single language; *code* must be non-empty."""
        if not code:
            return self._finish(callback or _noop, LanguageRequiredError())
        return await self.download_languages([code], credential, callback)

    async def download_snapshot(
        self,
        version: str,
        codes: Sequence[str] | None,
        credential: str | None,
        callback: Callback | None = None,
    ) -> LocalizeError | None:
        """Download the tables of snapshot *version*.

        When *codes* is given only those languages are merged, even if
        the response carries more; otherwise every language in the
        response is merged.
        """
        callback = callback or _noop
        if not credential:
            return self._finish(callback, CredentialRequiredError())

        codes = list(codes or [])
        tables, error = await self._fetch(snapshot_url(version, codes), credential, codes, version)
        if tables is not None:
            selected = _select(tables, codes, version) if codes else tables
            self._store.merge_snapshot(selected)
            logger.info(
                "Merged %d language table(s) from snapshot %s",
                len(selected),
                version,
                extra={
                    "event": "download_done",
                    "languages": sorted(selected),
                    "version": version,
                },
            )
        return self._finish(callback, error)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _fetch(
        self,
        url: str,
        credential: str,
        codes: list[str],
        version: str | None,
    ) -> tuple[dict[str, dict[str, str]] | None, LocalizeError | None]:
        """GET *url* and validate the body.

        Exactly one of the returned pair is ``None``.  The in-flight
        counter is released before returning, whatever the outcome.
        """
        self._in_flight += 1
        logger.info(
            "Downloading translations from %s",
            url,
            extra={"event": "download_start", "languages": codes or None, "version": version},
        )
        try:
            payload = await self._client.get(url, params={"apikey": credential})
            return _parse(payload), None
        except LocalizeError as exc:
            logger.warning(
                "Translation download failed: %s",
                exc,
                extra={"event": "download_failed", "url": url, "version": version},
            )
            return None, exc
        finally:
            self._in_flight -= 1

    @staticmethod
    def _finish(callback: Callback, error: LocalizeError | None) -> LocalizeError | None:
        callback(error)
        return error


def _parse(payload: Any) -> dict[str, dict[str, str]]:
    """Turn a response body into language tables.

    Raises:
        RemoteError: The body carries a truthy ``error`` field.
        PayloadError: The body is not a ``{language: {key: text}}`` mapping.
    """
    if isinstance(payload, Mapping) and "error" in payload:
        if payload["error"]:
            raise RemoteError(payload["error"])
        # A null or empty ``error`` is not a language table.
        payload = {code: table for code, table in payload.items() if code != "error"}
    try:
        return _TABLES.validate_python(payload)
    except ValidationError as exc:
        raise PayloadError(f"Unexpected translations payload: {exc.error_count()} error(s)") from exc


def _select(
    tables: dict[str, dict[str, str]],
    codes: list[str],
    version: str,
) -> dict[str, dict[str, str]]:
    """Keep only the requested languages that the snapshot actually has."""
    selected: dict[str, dict[str, str]] = {}
    for code in codes:
        if code in tables:
            selected[code] = tables[code]
        else:
            logger.warning(
                "Snapshot %s has no table for %s",
                version,
                code,
                extra={"event": "snapshot_language_missing", "language": code, "version": version},
            )
    return selected
