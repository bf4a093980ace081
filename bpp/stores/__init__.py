"""Browser extension stores: identities, bundle handling and submitters."""

from bpp.stores.errors import BundleManifestError, StoreError
from bpp.stores.model import (
    MARKET_NAMES,
    SUPPORTED_BROWSERS,
    BrowserName,
    Keys,
    StoreOptions,
)

__all__ = [
    "BrowserName",
    "Keys",
    "StoreOptions",
    "SUPPORTED_BROWSERS",
    "MARKET_NAMES",
    "StoreError",
    "BundleManifestError",
]
