"""Translation store and fallback-chain resolution."""

from localizeto.i18n.store import DEFAULT_LANGUAGE, TranslationStore, build_view

__all__ = ["DEFAULT_LANGUAGE", "TranslationStore", "build_view"]
