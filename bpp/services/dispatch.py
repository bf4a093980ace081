"""Dispatch planning: which stores to submit to, and with which bundle.

Runs sequentially before any submission starts; this is the only place
where store options are mutated.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass

from bpp.core.inputs import ActionInputs
from bpp.core.result import Err, Ok, Result
from bpp.core.structured import as_str_dict
from bpp.output.console import ConsoleProtocol, tag
from bpp.services.errors import PublishError
from bpp.stores.bundle import bundle_file, has_bundle_file
from bpp.stores.model import SUPPORTED_BROWSERS, BrowserName, Keys

__all__ = [
    "GlobalInputs",
    "DispatchPlan",
    "NOTES_BROWSER",
    "parse_keys",
    "candidate_browsers",
    "resolve_bundle",
    "plan_dispatch",
]

# Release notes from the ``notes`` input only go to this store.
NOTES_BROWSER = BrowserName.EDGE


@dataclass(frozen=True, slots=True)
class GlobalInputs:
    """Inputs that apply across stores."""

    artifact: str = ""
    version_file: str = ""
    verbose: bool = False
    notes: str = ""

    @classmethod
    def from_inputs(cls, inputs: ActionInputs) -> GlobalInputs:
        return cls(
            artifact=inputs.first("file", "zip", "artifact"),
            version_file=inputs.get("version-file"),
            verbose=inputs.flag("verbose"),
            notes=inputs.first("notes", "edge-notes"),
        )


@dataclass(frozen=True, slots=True)
class DispatchPlan:
    browsers: tuple[BrowserName, ...]
    keys: Keys
    inputs: GlobalInputs

    def has_bundle(self, browser: BrowserName) -> bool:
        return has_bundle_file(self.keys[browser])


def parse_keys(raw: str) -> Result[Keys, PublishError]:
    """Parse the ``keys`` input (a JSON object keyed by browser name)."""
    if not raw.strip():
        return Err(
            PublishError(kind="missing_input", message="Input required and not supplied: keys")
        )
    try:
        obj: object = json.loads(raw)
    except json.JSONDecodeError as e:
        return Err(PublishError(kind="invalid_keys", message=f"Invalid JSON in keys: {e}"))

    data = as_str_dict(obj)
    if data is None:
        return Err(PublishError(kind="invalid_keys", message="keys must be a JSON object"))

    return Ok({name: as_str_dict(value) or {} for name, value in data.items()})


def candidate_browsers(keys: Mapping[str, object]) -> tuple[BrowserName, ...]:
    """Supported browsers present in ``keys``, in the order they were given."""
    supported = {str(b) for b in SUPPORTED_BROWSERS}
    return tuple(BrowserName(name) for name in keys if name in supported)


def resolve_bundle(
    options: Mapping[str, object],
    *,
    override: str = "",
    artifact: str = "",
) -> str | None:
    """Pick a store's bundle: ``<store>-file`` input, then its own zip/file, then the global artifact."""
    return override or bundle_file(options) or artifact or None


def plan_dispatch(
    keys: Keys,
    inputs: ActionInputs,
    *,
    console: ConsoleProtocol,
) -> Result[DispatchPlan, PublishError]:
    """Resolve bundles and apply global overrides to every candidate store."""
    browsers = candidate_browsers(keys)
    if not browsers:
        return Err(
            PublishError(
                kind="no_browser",
                message="No supported browser found",
                hint="keys must name one of " + ", ".join(SUPPORTED_BROWSERS),
            )
        )

    globals_ = GlobalInputs.from_inputs(inputs)

    for browser in browsers:
        options = keys[browser]
        zip_path = resolve_bundle(
            options,
            override=inputs.get(f"{browser}-file"),
            artifact=globals_.artifact,
        )
        if zip_path is not None:
            options["zip"] = zip_path
        else:
            console.warning(f"{tag('🟡 SKIP')} No artifact available to submit for {browser}")

        if globals_.verbose:
            options["verbose"] = True

        if globals_.version_file:
            options["versionFile"] = globals_.version_file

    if not any(has_bundle_file(keys[b]) for b in browsers):
        return Err(
            PublishError(
                kind="no_artifact",
                message="No artifact found for deployment",
                hint="set the artifact input or a <browser>-file input",
            )
        )

    if NOTES_BROWSER in keys and globals_.notes:
        keys[NOTES_BROWSER]["notes"] = globals_.notes

    return Ok(DispatchPlan(browsers=browsers, keys=keys, inputs=globals_))
