"""Edge Add-ons client (API v1.1).

Both steps are asynchronous on the store side: the upload and the submission
each return an operation ID in the ``Location`` header, which is polled until
it leaves ``InProgress``.
"""

from __future__ import annotations

import asyncio
from typing import ClassVar

import httpx

from bpp.core.structured import as_str_dict, get_str
from bpp.stores.base import StoreSubmitter, Submission
from bpp.stores.client import open_client
from bpp.stores.errors import StoreError
from bpp.stores.model import BrowserName
from bpp.stores.timeouts import POLL_ATTEMPTS, POLL_INTERVAL_SECONDS, UPLOAD_TIMEOUT_SECONDS

__all__ = ["EdgeSubmitter"]

EDGE_API_URL = "https://api.addons.microsoftedge.microsoft.com"


class EdgeSubmitter(StoreSubmitter):
    market: ClassVar[BrowserName] = BrowserName.EDGE
    required: ClassVar[dict[str, str]] = {
        "productId": "No product ID provided",
        "clientId": "No client ID provided",
        "apiKey": "No API key provided",
    }
    id_field: ClassVar[str] = "productId"

    poll_interval: float = POLL_INTERVAL_SECONDS
    poll_attempts: int = POLL_ATTEMPTS

    async def publish(self, submission: Submission) -> None:
        headers = {
            "Authorization": f"ApiKey {submission.option('apiKey')}",
            "X-ClientID": submission.option("clientId"),
        }
        product = f"/v1/products/{submission.item_id}/submissions"
        bundle = await asyncio.to_thread(submission.bundle.read_bytes)

        async with open_client(
            submission.log, transport=self.transport, base_url=EDGE_API_URL, headers=headers
        ) as client:
            submission.log.log("Uploading bundle to draft")
            response = await client.post(
                f"{product}/draft/package",
                content=bundle,
                headers={"Content-Type": "application/zip"},
                timeout=UPLOAD_TIMEOUT_SECONDS,
            )
            response.raise_for_status()
            operation = _operation_id(response)
            await self._wait(client, submission, f"{product}/draft/package/operations/{operation}")

            submission.log.log("Publishing draft submission")
            response = await client.post(product, json={"notes": submission.option("notes")})
            response.raise_for_status()
            operation = _operation_id(response)
            await self._wait(client, submission, f"{product}/operations/{operation}")

    async def _wait(self, client: httpx.AsyncClient, submission: Submission, url: str) -> None:
        for attempt in range(self.poll_attempts):
            response = await client.get(url)
            response.raise_for_status()
            status_obj = as_str_dict(response.json()) or {}
            status = get_str(status_obj, "status")
            if status == "Succeeded":
                return
            if status == "Failed":
                raise StoreError.from_response(_failure_message(status_obj), response)
            submission.log.log(f"Operation {status or 'pending'} ({attempt + 1}/{self.poll_attempts})")
            await asyncio.sleep(self.poll_interval)

        raise StoreError(f"Operation did not complete in time: {url}")


def _operation_id(response: httpx.Response) -> str:
    location = response.headers.get("Location", "").strip()
    if not location:
        raise StoreError.from_response("No operation ID in Location header", response)
    return location.rsplit("/", 1)[-1]


def _failure_message(status: dict[str, object]) -> str:
    message = get_str(status, "message") or "Operation failed"
    errors = status.get("errors")
    if isinstance(errors, list) and errors:
        parts = []
        for item in errors:
            entry = as_str_dict(item) or {}
            parts.append(get_str(entry, "message") or str(item))
        message += ": " + "; ".join(parts)
    return message
