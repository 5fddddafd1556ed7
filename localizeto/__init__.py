"""Incrementally-updated translation cache for localize.to language sets."""

from localizeto.core.errors import (
    CredentialRequiredError,
    LanguageRequiredError,
    LocalizeError,
    PayloadError,
    PreconditionError,
    RemoteError,
    TransportError,
)
from localizeto.core.version import get_version
from localizeto.i18n.store import DEFAULT_LANGUAGE, TranslationStore
from localizeto.services.loader import TranslationLoader
from localizeto.session import LocalizeTo, create_localizer

__all__ = [
    "DEFAULT_LANGUAGE",
    "CredentialRequiredError",
    "LanguageRequiredError",
    "LocalizeError",
    "LocalizeTo",
    "PayloadError",
    "PreconditionError",
    "RemoteError",
    "TranslationLoader",
    "TranslationStore",
    "TransportError",
    "create_localizer",
    "get_version",
]


def __getattr__(name: str) -> str:
    # ``__version__`` is resolved on first access from installed metadata.
    if name == "__version__":
        return get_version()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
