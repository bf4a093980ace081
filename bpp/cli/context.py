from __future__ import annotations

from dataclasses import dataclass

from bpp.core.inputs import ActionInputs
from bpp.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    inputs: ActionInputs
    console: ConsoleProtocol


def build_context(*, overrides: dict[str, str], debug: bool = False) -> CLIContext:
    inputs = ActionInputs(overrides=overrides)
    console = RichConsole(show_debug=debug or inputs.flag("verbose") or inputs.resolve_only)
    return CLIContext(inputs=inputs, console=console)
