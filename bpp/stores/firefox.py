"""Firefox Add-ons (AMO) client, API v5.

Requests are signed with a short-lived JWT built from the API key/secret.
Flow: upload the bundle, wait until AMO has validated it, then create a new
version of the add-on from that upload.
"""

from __future__ import annotations

import asyncio
import time
import uuid
from collections.abc import Generator
from typing import ClassVar
from urllib.parse import quote

import httpx
import jwt

from bpp.core.structured import as_str_dict, get_str
from bpp.stores.base import StoreSubmitter, Submission
from bpp.stores.client import open_client
from bpp.stores.errors import StoreError
from bpp.stores.model import BrowserName
from bpp.stores.timeouts import POLL_ATTEMPTS, POLL_INTERVAL_SECONDS, UPLOAD_TIMEOUT_SECONDS

__all__ = ["FirefoxSubmitter", "AmoJwtAuth"]

AMO_BASE_URL = "https://addons.mozilla.org"
JWT_LIFETIME_SECONDS = 5 * 60
CHANNELS = ("listed", "unlisted")


class AmoJwtAuth(httpx.Auth):
    """``Authorization: JWT <token>``, with a fresh token (unique ``jti``) per request."""

    def __init__(self, api_key: str, api_secret: str) -> None:
        self.api_key = api_key
        self.api_secret = api_secret

    def token(self) -> str:
        issued_at = int(time.time())
        payload = {
            "iss": self.api_key,
            "jti": uuid.uuid4().hex,
            "iat": issued_at,
            "exp": issued_at + JWT_LIFETIME_SECONDS,
        }
        return jwt.encode(payload, self.api_secret, algorithm="HS256")

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers["Authorization"] = f"JWT {self.token()}"
        yield request


class FirefoxSubmitter(StoreSubmitter):
    market: ClassVar[BrowserName] = BrowserName.FIREFOX
    required: ClassVar[dict[str, str]] = {
        "extId": "No extension ID provided",
        "apiKey": "No API key provided",
        "apiSecret": "No API secret provided",
    }
    id_field: ClassVar[str] = "extId"

    poll_interval: float = POLL_INTERVAL_SECONDS
    poll_attempts: int = POLL_ATTEMPTS

    async def publish(self, submission: Submission) -> None:
        channel = submission.option("channel", "listed")
        if channel not in CHANNELS:
            raise StoreError(f"Invalid channel: {channel}")

        bundle = await asyncio.to_thread(submission.bundle.read_bytes)
        auth = AmoJwtAuth(submission.option("apiKey"), submission.option("apiSecret"))
        async with open_client(
            submission.log, transport=self.transport, base_url=AMO_BASE_URL, auth=auth
        ) as client:
            submission.log.log(f"Uploading bundle to the {channel} channel")
            response = await client.post(
                "/api/v5/addons/upload/",
                data={"channel": channel},
                files={"upload": (submission.bundle.name, bundle)},
                timeout=UPLOAD_TIMEOUT_SECONDS,
            )
            response.raise_for_status()
            upload = as_str_dict(response.json()) or {}
            upload_id = get_str(upload, "uuid")
            if upload_id is None:
                raise StoreError.from_response("No upload uuid in response", response)

            await self._wait_for_validation(client, submission, upload_id)

            body: dict[str, object] = {"upload": upload_id}
            notes = submission.option("notes")
            if notes:
                body["release_notes"] = {"en-US": notes}

            submission.log.log("Creating new version")
            addon = quote(submission.item_id, safe="")
            response = await client.post(f"/api/v5/addons/addon/{addon}/versions/", json=body)
            response.raise_for_status()

    async def _wait_for_validation(
        self, client: httpx.AsyncClient, submission: Submission, upload_id: str
    ) -> None:
        for attempt in range(self.poll_attempts):
            response = await client.get(f"/api/v5/addons/upload/{upload_id}/")
            response.raise_for_status()
            upload = as_str_dict(response.json()) or {}
            if upload.get("processed"):
                if not upload.get("valid"):
                    raise StoreError.from_response(_validation_summary(upload), response)
                submission.log.log("Upload validated")
                return
            submission.log.log(f"Waiting for validation ({attempt + 1}/{self.poll_attempts})")
            await asyncio.sleep(self.poll_interval)

        raise StoreError(f"Upload {upload_id} was not processed in time")


def _validation_summary(upload: dict[str, object]) -> str:
    validation = as_str_dict(upload.get("validation")) or {}
    errors = validation.get("errors")
    messages: list[str] = []
    raw = validation.get("messages")
    if isinstance(raw, list):
        for item in raw:
            entry = as_str_dict(item) or {}
            if get_str(entry, "type") == "error":
                message = get_str(entry, "message")
                if message:
                    messages.append(message)
    summary = f"Validation failed with {errors if errors is not None else 'unknown'} error(s)"
    if messages:
        summary += ": " + "; ".join(messages)
    return summary
