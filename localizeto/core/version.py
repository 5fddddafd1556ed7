"""Single-source version helper.

The version lives only in ``pyproject.toml``; at runtime it is read from
the installed distribution's metadata, which works for wheels and
editable installs alike.
"""

from __future__ import annotations

import functools
from importlib.metadata import PackageNotFoundError, version

_DISTRIBUTION = "localizeto"


@functools.cache
def get_version() -> str:
    """Return the installed ``localizeto`` version string.

    The result is cached for the lifetime of the process.

    Returns:
        Version string, e.g. ``"1.0.0"``.

    Raises:
        RuntimeError: If the distribution is not installed.
    """
    try:
        return version(_DISTRIBUTION)
    except PackageNotFoundError as exc:
        raise RuntimeError(f"distribution {_DISTRIBUTION!r} is not installed") from exc
