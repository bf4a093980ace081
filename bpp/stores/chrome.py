"""Chrome Web Store client (API v1.1).

Flow: exchange the refresh token for an access token, upload the bundle to
the existing item, then publish it to ``target`` (``default`` or
``trustedTesters``).
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
from bpp.stores.timeouts import UPLOAD_TIMEOUT_SECONDS

__all__ = ["ChromeSubmitter"]

OAUTH_TOKEN_URL = "https://oauth2.googleapis.com/token"
CWS_UPLOAD_URL = "https://www.googleapis.com/upload/chromewebstore/v1.1/items"
CWS_ITEMS_URL = "https://www.googleapis.com/chromewebstore/v1.1/items"

PUBLISH_TARGETS = ("default", "trustedTesters")


class ChromeSubmitter(StoreSubmitter):
    market: ClassVar[BrowserName] = BrowserName.CHROME
    required: ClassVar[dict[str, str]] = {
        "extId": "No extension ID provided",
        "clientId": "No client ID provided",
        "refreshToken": "No refresh token provided",
    }
    id_field: ClassVar[str] = "extId"

    async def publish(self, submission: Submission) -> None:
        target = submission.option("target", "default")
        if target not in PUBLISH_TARGETS:
            raise StoreError(f"Invalid publish target: {target}")

        bundle = await asyncio.to_thread(submission.bundle.read_bytes)

        async with open_client(submission.log, transport=self.transport) as client:
            token = await self._access_token(client, submission)
            headers = {"Authorization": f"Bearer {token}", "x-goog-api-version": "2"}

            submission.log.log("Uploading bundle")
            response = await client.put(
                f"{CWS_UPLOAD_URL}/{submission.item_id}",
                headers=headers,
                content=bundle,
                timeout=UPLOAD_TIMEOUT_SECONDS,
            )
            response.raise_for_status()
            upload = as_str_dict(response.json()) or {}
            if get_str(upload, "uploadState") == "FAILURE":
                raise StoreError.from_response(_item_errors(upload), response)

            submission.log.log(f"Publishing to {target}")
            response = await client.post(
                f"{CWS_ITEMS_URL}/{submission.item_id}/publish",
                headers=headers,
                params={"publishTarget": target},
            )
            response.raise_for_status()
            published = as_str_dict(response.json()) or {}
            status = published.get("status")
            if not isinstance(status, list) or "OK" not in status:
                raise StoreError.from_response(_status_detail(published), response)

    async def _access_token(self, client: httpx.AsyncClient, submission: Submission) -> str:
        submission.log.log("Fetching access token")
        data = {
            "client_id": submission.option("clientId"),
            "refresh_token": submission.option("refreshToken"),
            "grant_type": "refresh_token",
        }
        secret = submission.option("clientSecret")
        if secret:
            data["client_secret"] = secret

        response = await client.post(OAUTH_TOKEN_URL, data=data)
        response.raise_for_status()
        token = get_str(as_str_dict(response.json()) or {}, "access_token")
        if token is None:
            raise StoreError.from_response("No access_token in token response", response)
        return token


def _item_errors(upload: dict[str, object]) -> str:
    errors = upload.get("itemError")
    details: list[str] = []
    if isinstance(errors, list):
        for item in errors:
            entry = as_str_dict(item) or {}
            detail = get_str(entry, "error_detail") or get_str(entry, "error_code")
            if detail:
                details.append(detail)
    return "Upload failed: " + ("; ".join(details) or "unknown error")


def _status_detail(published: dict[str, object]) -> str:
    details = published.get("statusDetail")
    if isinstance(details, list) and details:
        return "Publish failed: " + "; ".join(str(d) for d in details)
    return f"Publish failed: {published.get('status')}"
