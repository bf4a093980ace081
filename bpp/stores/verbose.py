"""Per-store step logging.

Each submission gets its own ``StepLogger``. Nothing is logged until the
store's options enable ``verbose``; from then on every message is numbered
with a step counter private to that store.
"""

from __future__ import annotations

import os

import httpx

from bpp.output.console import ConsoleProtocol
from bpp.stores.errors import StoreError
from bpp.stores.model import BrowserName

__all__ = ["StepLogger", "VERBOSE_ENV"]

# Read by store clients to decide whether to log request diagnostics.
VERBOSE_ENV = "VERBOSE"


class StepLogger:
    def __init__(self, market: BrowserName, console: ConsoleProtocol) -> None:
        self.market = market
        self.console = console
        self.enabled = False
        self.step = 0

    def enable(self) -> None:
        self.enabled = True
        os.environ[VERBOSE_ENV] = "true"

    def format(self, message: str, prefix: str = "") -> str:
        """Number ``message`` with the next step.

        Always advances the counter, even when logging is disabled.
        """
        self.step += 1
        msg = f"{self.market}: Step {self.step}) {message}"
        if prefix == "Error":
            return msg.lstrip()
        return f"{prefix or 'Info'} {msg}".strip()

    def log(self, message: str) -> None:
        if not self.enabled:
            return
        self.console.info(self.format(message))

    def error(self, error: BaseException, item_id: str | None = None) -> StoreError:
        """Wrap a client failure into a numbered, store-qualified error."""
        message = getattr(error, "message", None) or str(error)
        wrapped = StoreError(
            self.format(f'Item "{item_id}": {message}', prefix="Error"),
            request=_request_of(error),
            response=_response_of(error),
        )
        wrapped.__cause__ = error
        return wrapped


def _request_of(error: BaseException) -> httpx.Request | None:
    if isinstance(error, StoreError):
        return error.request
    if isinstance(error, httpx.HTTPStatusError):
        return error.request
    if isinstance(error, httpx.RequestError):
        try:
            return error.request
        except RuntimeError:
            # Raised by httpx when the error was built without a request.
            return None
    return None


def _response_of(error: BaseException) -> httpx.Response | None:
    if isinstance(error, StoreError):
        return error.response
    if isinstance(error, httpx.HTTPStatusError):
        return error.response
    return None
