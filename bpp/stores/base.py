"""Uniform submitter interface.

A submitter owns the store-independent steps of a submission:

1. resolve ``{version}`` in the bundle path (written back into options)
2. enable verbose logging if the options ask for it
3. validate required fields and the bundle file, before any network call
4. stop early for ``dryRun``
5. call the store-specific ``publish`` and log the published version

Subclasses declare ``market``, ``required`` and ``id_field`` and implement
``publish``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar

import httpx

from bpp.core.structured import get_str
from bpp.output.console import ConsoleProtocol
from bpp.stores.bundle import correct_zip, full_path, read_manifest
from bpp.stores.errors import BundleManifestError
from bpp.stores.model import BrowserName, StoreOptions, market_name
from bpp.stores.validate import validate_options
from bpp.stores.verbose import StepLogger

__all__ = ["StoreSubmitter", "Submission"]


@dataclass(frozen=True, slots=True)
class Submission:
    """Validated inputs handed to ``StoreSubmitter.publish``."""

    options: StoreOptions
    item_id: str
    bundle: Path
    log: StepLogger

    def option(self, key: str, default: str = "") -> str:
        return get_str(self.options, key) or default


class StoreSubmitter(ABC):
    market: ClassVar[BrowserName]
    # option name -> reason reported when it is missing
    required: ClassVar[Mapping[str, str]]
    id_field: ClassVar[str]

    def __init__(
        self,
        *,
        console: ConsoleProtocol,
        transport: httpx.AsyncBaseTransport | None = None,
        cwd: Path | None = None,
    ) -> None:
        self.console = console
        self.transport = transport
        self.cwd = cwd

    def item_id(self, options: StoreOptions) -> str:
        return get_str(options, self.id_field) or ""

    async def submit(self, options: StoreOptions, log: StepLogger) -> bool:
        """Submit the bundle described by ``options``.

        Returns True once the store accepted the bundle (or on a dry run).
        Raises ``StoreError`` or the client's own error on failure.
        """
        options["zip"] = correct_zip(options, cwd=self.cwd)

        if options.get("verbose"):
            log.enable()

        validate_options(self.market, options, self.required, cwd=self.cwd)

        zip_path = str(options["zip"])
        item_id = self.item_id(options)
        log.log(f"Updating extension with ID {item_id}")

        if options.get("dryRun"):
            return True

        submission = Submission(options, item_id, full_path(zip_path, self.cwd), log)
        try:
            await self.publish(submission)
        except Exception as e:
            name, _ = self._manifest_summary(zip_path)
            raise log.error(e, f'"{item_id}" ({name})') from e

        name, version = self._manifest_summary(zip_path)
        self.console.info(
            f'Successfully updated "{item_id}" ({name}) to version {version} '
            f"on {market_name(self.market)}!"
        )
        return True

    @abstractmethod
    async def publish(self, submission: Submission) -> None:
        """Upload and publish the bundle; raise on any store-side failure."""

    def _manifest_summary(self, zip_path: str) -> tuple[str, str]:
        try:
            manifest = read_manifest(zip_path, cwd=self.cwd)
        except BundleManifestError:
            return "unknown", "unknown"
        return get_str(manifest, "name") or "unknown", get_str(manifest, "version") or "unknown"
