"""Errors raised by store submitters.

Store failures are exceptions rather than ``Result`` values: they travel
through ``asyncio.gather(..., return_exceptions=True)`` and are rendered by
the aggregator.
"""

from __future__ import annotations

import httpx

__all__ = ["StoreError", "BundleManifestError"]


class StoreError(Exception):
    """A store-qualified submission failure.

    ``request`` and ``response`` carry the HTTP exchange that failed, when
    there was one, so the aggregator can report the richest detail available.
    """

    def __init__(
        self,
        message: str,
        *,
        request: httpx.Request | None = None,
        response: httpx.Response | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.request = request
        self.response = response

    def __str__(self) -> str:
        return self.message

    @classmethod
    def from_response(cls, message: str, response: httpx.Response) -> StoreError:
        return cls(message, request=response.request, response=response)


class BundleManifestError(Exception):
    """The bundle has no readable ``manifest.json``."""
