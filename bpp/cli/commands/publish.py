from __future__ import annotations

import asyncio
import json
from typing import NoReturn

import typer

from bpp import __version__
from bpp.cli.context import CLIContext, build_context
from bpp.core.errors import ErrorCode
from bpp.core.result import Err
from bpp.output.console import ConsoleProtocol, tag
from bpp.services.aggregate import run_submissions
from bpp.services.dispatch import DispatchPlan, parse_keys, plan_dispatch
from bpp.services.errors import PublishError
from bpp.stores.registry import build_registry


def exit_publish(console: ConsoleProtocol, error: PublishError, *, code: ErrorCode) -> NoReturn:
    console.error(f"{tag('🔴 ERROR')} {error.pretty()}")
    raise typer.Exit(code=int(code))


def _store_file_overrides(values: list[str]) -> dict[str, str]:
    out: dict[str, str] = {}
    for value in values:
        browser, sep, path = value.partition("=")
        if not sep or not browser.strip() or not path.strip():
            raise typer.BadParameter(f"expected BROWSER=PATH, got {value!r}", param_hint="--store-file")
        out[f"{browser.strip()}-file"] = path.strip()
    return out


def print_resolution(plan: DispatchPlan, console: ConsoleProtocol) -> None:
    """Diagnostic-only output used when resolving without submitting."""
    console.debug(
        json.dumps(
            {
                "artifact": plan.inputs.artifact,
                "versionFile": plan.inputs.version_file,
                "verbose": plan.inputs.verbose,
            }
        )
    )
    console.debug(",".join(plan.browsers))


def run_publish(ctx: CLIContext, *, resolve_only: bool = False) -> None:
    console = ctx.console
    console.header(f"🟣 Browser Platform Publish v{__version__}")

    keys = parse_keys(ctx.inputs.get("keys"))
    if isinstance(keys, Err):
        exit_publish(console, keys.error, code=ErrorCode.USER_ERROR)

    plan = plan_dispatch(keys.value, ctx.inputs, console=console)
    if isinstance(plan, Err):
        exit_publish(console, plan.error, code=ErrorCode.USER_ERROR)

    if resolve_only or ctx.inputs.resolve_only:
        print_resolution(plan.value, console)
        return

    registry = build_registry(console)
    report = asyncio.run(run_submissions(plan.value, registry, console))
    if report.failed:
        raise typer.Exit(code=int(ErrorCode.NETWORK_ERROR))


def publish(
    keys: str = typer.Option(
        "", "--keys", help="JSON object of per-store options (falls back to INPUT_KEYS)"
    ),
    artifact: str = typer.Option(
        "", "--artifact", "--zip", "--file", help="Bundle to submit to every store"
    ),
    version_file: str = typer.Option(
        "", "--version-file", help="JSON file whose version replaces {version} in bundle paths"
    ),
    notes: str = typer.Option("", "--notes", help="Release notes (Edge Add-ons only)"),
    verbose: bool = typer.Option(False, "--verbose", help="Log every submission step"),
    store_file: list[str] = typer.Option(
        [], "--store-file", help="Per-store bundle override, e.g. chrome=build/chrome.zip"
    ),
    resolve_only: bool = typer.Option(
        False, "--resolve-only", help="Resolve bundles and stop before contacting any store"
    ),
    debug: bool = typer.Option(False, "--debug", help="Show debug output outside CI"),
) -> None:
    """Submit the extension bundle to every store listed in keys."""
    overrides = {
        "keys": keys,
        "artifact": artifact,
        "version-file": version_file,
        "notes": notes,
        "verbose": "true" if verbose else "",
        **_store_file_overrides(store_file),
    }
    ctx = build_context(overrides=overrides, debug=debug or resolve_only)
    run_publish(ctx, resolve_only=resolve_only)
