"""Shared ``httpx.AsyncClient`` construction for store clients.

Every submission opens its own client, so stores never share connections.
Tests pass an ``httpx.MockTransport`` through ``transport``.
"""

from __future__ import annotations

import os
from collections.abc import Mapping

import httpx

from bpp import __version__
from bpp.stores.timeouts import HTTP_CONNECT_TIMEOUT_SECONDS, HTTP_TIMEOUT_SECONDS
from bpp.stores.verbose import VERBOSE_ENV, StepLogger

__all__ = ["open_client", "USER_AGENT"]

USER_AGENT = f"bpp/{__version__}"


def open_client(
    log: StepLogger,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    base_url: str = "",
    headers: Mapping[str, str] | None = None,
    auth: httpx.Auth | None = None,
) -> httpx.AsyncClient:
    """Create a client; with ``VERBOSE=true`` every request is logged as a step."""

    async def log_request(request: httpx.Request) -> None:
        log.log(f"{request.method} {request.url}")

    async def log_response(response: httpx.Response) -> None:
        log.log(f"{response.status_code} {response.reason_phrase} <- {response.request.url}")

    hooks: dict[str, list] = {"request": [], "response": []}
    if os.environ.get(VERBOSE_ENV) == "true":
        hooks = {"request": [log_request], "response": [log_response]}

    return httpx.AsyncClient(
        base_url=base_url,
        headers={"User-Agent": USER_AGENT, **(headers or {})},
        auth=auth,
        transport=transport,
        timeout=httpx.Timeout(HTTP_TIMEOUT_SECONDS, connect=HTTP_CONNECT_TIMEOUT_SECONDS),
        event_hooks=hooks,
    )
