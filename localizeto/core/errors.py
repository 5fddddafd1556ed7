"""Error taxonomy delivered to download callbacks.

Nothing here is raised out of a download coroutine: the loader catches
failures and hands the matching ``LocalizeError`` to the caller's
callback.  Missing translation keys are *not* errors at all.
"""

from __future__ import annotations

from typing import Any


class LocalizeError(Exception):
    """Base class for every failure reported through a download callback."""


class PreconditionError(LocalizeError):
    """Request rejected locally; no network call was attempted."""


class CredentialRequiredError(PreconditionError):
    def __init__(self) -> None:
        super().__init__("API key is required")


class LanguageRequiredError(PreconditionError):
    def __init__(self) -> None:
        super().__init__("Language is required")


class RemoteError(LocalizeError):
    """The server answered with an ``error`` field instead of translations.

    Attributes:
        detail: The ``error`` value exactly as the server sent it.
    """

    def __init__(self, detail: Any) -> None:
        super().__init__(str(detail))
        self.detail = detail


class TransportError(LocalizeError):
    """Network failure or a response body that is not JSON."""


class PayloadError(TransportError):
    """JSON body that is not a ``{language: {key: text}}`` mapping."""
