"""Itero TestBed client: a single authenticated multipart upload."""

from __future__ import annotations

import asyncio
from typing import ClassVar

from bpp.core.structured import as_str_dict
from bpp.stores.base import StoreSubmitter, Submission
from bpp.stores.client import open_client
from bpp.stores.errors import StoreError
from bpp.stores.model import BrowserName, StoreOptions
from bpp.stores.timeouts import UPLOAD_TIMEOUT_SECONDS

__all__ = ["IteroSubmitter"]

ITERO_SUBMIT_URL = "https://itero.plasmo.com/api/submit"


class IteroSubmitter(StoreSubmitter):
    market: ClassVar[BrowserName] = BrowserName.ITERO
    required: ClassVar[dict[str, str]] = {
        "token": "No token provided",
    }
    id_field: ClassVar[str] = "extId"

    def item_id(self, options: StoreOptions) -> str:
        return super().item_id(options) or "testbed"

    async def publish(self, submission: Submission) -> None:
        bundle = await asyncio.to_thread(submission.bundle.read_bytes)
        headers = {"Authorization": f"Bearer {submission.option('token')}"}
        async with open_client(submission.log, transport=self.transport, headers=headers) as client:
            submission.log.log("Uploading bundle to TestBed")
            response = await client.post(
                ITERO_SUBMIT_URL,
                files={"file": (submission.bundle.name, bundle)},
                timeout=UPLOAD_TIMEOUT_SECONDS,
            )
            response.raise_for_status()
            body = as_str_dict(response.json()) or {}
            if body.get("success") is False:
                raise StoreError.from_response(str(body.get("error") or "Submission rejected"), response)
