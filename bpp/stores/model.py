from __future__ import annotations

from enum import StrEnum

__all__ = [
    "BrowserName",
    "StoreOptions",
    "Keys",
    "SUPPORTED_BROWSERS",
    "MARKET_NAMES",
    "market_name",
]


class BrowserName(StrEnum):
    CHROME = "chrome"
    FIREFOX = "firefox"
    OPERA = "opera"
    EDGE = "edge"
    ITERO = "itero"


# Per-store options as given in the ``keys`` input. Common fields:
# zip/file, versionFile, verbose, dryRun, notes. The rest are credentials.
StoreOptions = dict[str, object]

# Top-level ``keys`` input: browser name -> options.
Keys = dict[str, StoreOptions]

# Opera has no publishing API; it is recognised but never submitted.
SUPPORTED_BROWSERS: tuple[BrowserName, ...] = (
    BrowserName.CHROME,
    BrowserName.FIREFOX,
    BrowserName.EDGE,
    BrowserName.ITERO,
)

MARKET_NAMES: dict[BrowserName, str] = {
    BrowserName.CHROME: "Chrome Web Store",
    BrowserName.EDGE: "Edge Add-ons",
    BrowserName.FIREFOX: "Firefox Add-ons",
    BrowserName.ITERO: "Itero TestBed",
}


def market_name(browser: BrowserName) -> str:
    return MARKET_NAMES.get(browser, str(browser))
