from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from bpp.stores.bundle import bundle_file, full_path
from bpp.stores.errors import StoreError
from bpp.stores.model import BrowserName

__all__ = ["validate_options", "store_message"]


def store_message(market: BrowserName, message: str) -> str:
    return f"{market}: {message}"


def validate_options(
    market: BrowserName,
    options: Mapping[str, object],
    required: Mapping[str, str],
    *,
    cwd: Path | None = None,
) -> None:
    """Check store options before any network call.

    ``required`` maps an option name to the reason reported when it is
    missing. Raises ``StoreError`` on the first problem found.
    """
    for key, reason in required.items():
        if not options.get(key):
            raise StoreError(store_message(market, reason))

    path = bundle_file(options)
    if path is None:
        raise StoreError(store_message(market, "No extension bundle provided"))

    resolved = full_path(path, cwd)
    if not resolved.exists():
        raise StoreError(
            store_message(market, f"Extension bundle file doesn't exist: {resolved}")
        )
