"""Concurrent submission and result aggregation.

Every candidate store is submitted at once and the run waits for all of them
to settle; one store failing never cancels or blocks another.
"""

from __future__ import annotations

import asyncio
import json
import traceback
from collections.abc import Awaitable, Mapping
from dataclasses import dataclass
from enum import StrEnum

from bpp.output.console import ConsoleProtocol, Style, tag
from bpp.services.dispatch import DispatchPlan
from bpp.stores.base import StoreSubmitter
from bpp.stores.errors import StoreError
from bpp.stores.model import BrowserName
from bpp.stores.verbose import StepLogger

__all__ = [
    "OutcomeStatus",
    "StoreOutcome",
    "PublishReport",
    "error_detail",
    "run_submissions",
]


class OutcomeStatus(StrEnum):
    SKIPPED = "skipped"  # no bundle, never submitted
    SUCCEEDED = "succeeded"
    UNCHANGED = "unchanged"  # submitter returned False
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class StoreOutcome:
    browser: BrowserName
    status: OutcomeStatus
    detail: str | None = None


@dataclass(frozen=True, slots=True)
class PublishReport:
    outcomes: tuple[StoreOutcome, ...]

    @property
    def failed(self) -> bool:
        return any(o.status == OutcomeStatus.FAILED for o in self.outcomes)

    def status_of(self, browser: BrowserName) -> OutcomeStatus | None:
        for outcome in self.outcomes:
            if outcome.browser == browser:
                return outcome.status
        return None


def _http_request(error: BaseException) -> object | None:
    try:
        return getattr(error, "request", None)
    except RuntimeError:
        # httpx.RequestError raises when no request was attached
        return None


def error_detail(error: BaseException) -> str:
    """Render the richest description available for a failed submission.

    HTTP failures become a JSON object with the message, the response body and
    the request method/URL. Store errors are already qualified and render as
    their message; anything else renders as its traceback. Errors with neither
    a traceback nor a message are serialized as-is.
    """
    request = _http_request(error)
    if request is not None:
        response = getattr(error, "response", None)
        details = {
            "message": str(error) or None,
            "body": getattr(response, "text", None),
            "requestOptions": {
                "method": getattr(request, "method", None),
                "url": str(getattr(request, "url", "")),
            },
        }
        return json.dumps(details)

    if isinstance(error, StoreError):
        return error.message
    if error.__traceback__ is not None:
        return "".join(traceback.format_exception(error)).rstrip()
    if str(error):
        return str(error)
    return json.dumps({"type": type(error).__name__, "args": [repr(a) for a in error.args]})


async def _not_submitted() -> bool:
    return False


async def run_submissions(
    plan: DispatchPlan,
    registry: Mapping[BrowserName, StoreSubmitter],
    console: ConsoleProtocol,
) -> PublishReport:
    """Submit to every candidate store concurrently and report each outcome."""
    skipped = {b for b in plan.browsers if not plan.has_bundle(b)}
    pending: list[Awaitable[bool]] = []
    for browser in plan.browsers:
        if browser in skipped:
            pending.append(_not_submitted())
            continue
        console.info(f"{tag('🟡 QUEUE')} Prepare for {browser} submission")
        log = StepLogger(browser, console)
        pending.append(registry[browser].submit(plan.keys[browser], log))

    results = await asyncio.gather(*pending, return_exceptions=True)

    outcomes: list[StoreOutcome] = []
    for browser, result in zip(plan.browsers, results, strict=True):
        if isinstance(result, BaseException):
            detail = error_detail(result)
            if isinstance(result, StoreError):
                console.error(f"{tag('🔴 ERROR')} {detail}")
            else:
                console.error(f"{tag('🔴 ERROR')} {browser}: {detail}")
            outcomes.append(StoreOutcome(browser, OutcomeStatus.FAILED, detail))
        elif result:
            console.success(f"{tag('🟢 DONE')} {browser} submission successful")
            outcomes.append(StoreOutcome(browser, OutcomeStatus.SUCCEEDED))
        elif browser in skipped:
            outcomes.append(StoreOutcome(browser, OutcomeStatus.SKIPPED))
        else:
            console.print(f"{tag('⚪ NOOP')} {browser} submission made no changes", Style.DIM)
            outcomes.append(StoreOutcome(browser, OutcomeStatus.UNCHANGED))

    return PublishReport(outcomes=tuple(outcomes))
