"""Store identity -> submitter lookup.

Supporting a new store means adding a ``StoreSubmitter`` subclass and an
entry here; the dispatcher and aggregator stay unchanged.
"""

from __future__ import annotations

from pathlib import Path

import httpx

from bpp.output.console import ConsoleProtocol
from bpp.stores.base import StoreSubmitter
from bpp.stores.chrome import ChromeSubmitter
from bpp.stores.edge import EdgeSubmitter
from bpp.stores.firefox import FirefoxSubmitter
from bpp.stores.itero import IteroSubmitter
from bpp.stores.model import BrowserName

__all__ = ["DEFAULT_SUBMITTERS", "build_registry"]

DEFAULT_SUBMITTERS: dict[BrowserName, type[StoreSubmitter]] = {
    BrowserName.CHROME: ChromeSubmitter,
    BrowserName.FIREFOX: FirefoxSubmitter,
    BrowserName.EDGE: EdgeSubmitter,
    BrowserName.ITERO: IteroSubmitter,
}


def build_registry(
    console: ConsoleProtocol,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    cwd: Path | None = None,
) -> dict[BrowserName, StoreSubmitter]:
    return {
        browser: cls(console=console, transport=transport, cwd=cwd)
        for browser, cls in DEFAULT_SUBMITTERS.items()
    }
