"""In-memory translation store with a fallback-merged resolved view.

The store owns every downloaded language table and keeps one derived
mapping, the *resolved view*, which is the fallback language's table
overlaid with the active language's table.

Fallback behaviour:
- Key present in the active language → active value.
- Key only in the fallback language → fallback value.
- Key in neither → the key itself (visible in the UI, easy to debug).

Usage::

    store = TranslationStore(language="en", fallback_language="fr")
    store.merge_language("fr", {"greeting": "Bonjour"})
    store.resolve("greeting")            # → "Bonjour"
    store.merge_language("en", {"greeting": "Hello"})
    store.resolve("greeting")            # → "Hello"
    store.resolve_for("greeting", "fr")  # → "Bonjour"
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

LanguageTable = dict[str, str]
TranslationSet = dict[str, LanguageTable]

# Used whenever the active language is unset or empty.
DEFAULT_LANGUAGE = "en"


def build_view(
    translations: Mapping[str, Mapping[str, str]],
    language: str,
    fallback_language: str | None,
) -> LanguageTable:
    """Return the fallback table overlaid with the active language table."""
    view: LanguageTable = {}
    if fallback_language:
        view.update(translations.get(fallback_language) or {})
    view.update(translations.get(language) or {})
    return view


class TranslationStore:
    """Cumulative per-language string tables plus the resolved view.

    Tables are only ever written by ``merge_language`` and
    ``merge_snapshot``.  Every mutator recomputes the resolved view
    before returning, so ``view`` is never stale.

    Args:
        translations: Initial ``{language: {key: text}}`` data (copied).
        language: Active language; empty or ``None`` means ``"en"``.
        fallback_language: Language consulted for keys missing from the
            active table; empty or ``None`` disables the fallback.
    """

    def __init__(
        self,
        translations: Mapping[str, Mapping[str, str]] | None = None,
        language: str | None = DEFAULT_LANGUAGE,
        fallback_language: str | None = None,
    ) -> None:
        self._translations: TranslationSet = {
            code: dict(table) for code, table in (translations or {}).items()
        }
        self._language = language or DEFAULT_LANGUAGE
        self._fallback_language = fallback_language or None
        self._view: LanguageTable = {}
        self._refresh()

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def language(self) -> str:
        return self._language

    @property
    def fallback_language(self) -> str | None:
        return self._fallback_language

    @property
    def view(self) -> Mapping[str, str]:
        """Read-only resolved view for the current language pair."""
        return MappingProxyType(self._view)

    @property
    def translations(self) -> dict[str, dict[str, str]]:
        """Snapshot copy of every loaded language table."""
        return {code: dict(table) for code, table in self._translations.items()}

    def table(self, code: str) -> dict[str, str] | None:
        """Copy of the table for *code*, or ``None`` if it was never loaded."""
        table = self._translations.get(code)
        return dict(table) if table is not None else None

    def languages(self) -> list[str]:
        """Sorted codes of every loaded language."""
        return sorted(self._translations)

    def resolve(self, key: str) -> str:
        """Look *key* up through the active → fallback chain.

        Returns the key itself when no table in the chain has it.
        """
        value = self._view.get(key)
        return value if value is not None else key

    def resolve_for(self, key: str, code: str) -> str:
        """Look *key* up in exactly one language, without any fallback."""
        value = (self._translations.get(code) or {}).get(key)
        return value if value is not None else key

    @staticmethod
    def unlocalized(key: str) -> str:
        """Mark a string that is intentionally not translated."""
        return key

    def __contains__(self, key: object) -> bool:
        return key in self._view

    # ------------------------------------------------------------------
    # Write side
    # ------------------------------------------------------------------

    def set_active_language(self, code: str | None) -> None:
        """Switch the active language; tables need not be loaded yet."""
        self._language = code or DEFAULT_LANGUAGE
        self._refresh()

    def set_fallback_language(self, code: str | None) -> None:
        """Switch (or with ``None`` clear) the fallback language."""
        self._fallback_language = code or None
        self._refresh()

    def merge_language(self, code: str, table: Mapping[str, str]) -> None:
        """Replace the whole table for *code*; other languages are untouched."""
        self._translations[code] = dict(table)
        if code in (self._language, self._fallback_language):
            self._refresh()

    def merge_snapshot(self, tables: Mapping[str, Mapping[str, str]]) -> None:
        """Replace every language present in *tables* as one batch.

        The resolved view is rebuilt once, after all tables are stored.
        """
        for code, table in tables.items():
            self._translations[code] = dict(table)
        if self._language in tables or (
            self._fallback_language is not None and self._fallback_language in tables
        ):
            self._refresh()

    def _refresh(self) -> None:
        self._view = build_view(self._translations, self._language, self._fallback_language)

    def __repr__(self) -> str:
        return (
            f"TranslationStore(language={self._language!r}, "
            f"fallback_language={self._fallback_language!r}, "
            f"languages={self.languages()!r})"
        )
