"""Console output abstraction.

Services and store submitters log through ``ConsoleProtocol`` so they never
depend on Rich or on the CI runner directly. ``RichConsole`` is the production
backend; inside GitHub Actions it emits workflow commands (``::debug::``,
``::warning::``, ``::error::``) so messages become annotations. ``MockConsole``
captures output for tests.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "Style",
    "ConsoleProtocol",
    "RichConsole",
    "MockConsole",
    "OutputRecord",
    "tag",
]


def tag(prefix: str) -> str:
    """Fixed-width status tag, e.g. ``tag("🟢 DONE")`` -> ``"🟢 DONE    |"``."""
    return f"{prefix.ljust(9)} |"


class Style(Enum):
    """Text styles for console output."""

    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    WARNING = auto()
    INFO = auto()
    DEBUG = auto()
    DIM = auto()
    HEADER = auto()

    def __str__(self) -> str:
        return self.name.lower()


class ConsoleProtocol(Protocol):
    """Leveled output used by every layer of the publisher."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        """Print a message with optional styling."""
        ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def debug(self, message: str) -> None:
        """Print a diagnostic message (hidden unless debugging is enabled)."""
        ...

    def header(self, message: str) -> None: ...


def _running_in_actions() -> bool:
    return os.environ.get("GITHUB_ACTIONS", "") == "true"


class RichConsole:
    """Console implementation using the Rich library.

    Args:
        annotations: Emit GitHub workflow commands for debug/warning/error.
            Defaults to auto-detection from ``GITHUB_ACTIONS``.
        show_debug: Print debug lines outside of GitHub Actions. The runner
            decides on its own whether ``::debug::`` lines are shown.
    """

    def __init__(self, *, annotations: bool | None = None, show_debug: bool = False) -> None:
        # Import Rich lazily to avoid import-time dependency
        from rich.console import Console

        self._console = Console(highlight=False, soft_wrap=True, emoji=False)
        self._annotations = _running_in_actions() if annotations is None else annotations
        self._show_debug = show_debug
        self._style_map = {
            Style.DEFAULT: "",
            Style.SUCCESS: "green",
            Style.ERROR: "red bold",
            Style.WARNING: "yellow",
            Style.INFO: "cyan",
            Style.DEBUG: "dim",
            Style.DIM: "dim",
            Style.HEADER: "magenta bold",
        }

    def _plain(self, message: str) -> None:
        self._console.print(message, markup=False)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        rich_style = self._style_map.get(style, "")
        if rich_style:
            self._console.print(message, style=rich_style, markup=False)
        else:
            self._plain(message)

    def success(self, message: str) -> None:
        self.print(message, Style.SUCCESS)

    def error(self, message: str) -> None:
        if self._annotations:
            self._plain(f"::error::{_escape_command(message)}")
        else:
            self.print(message, Style.ERROR)

    def warning(self, message: str) -> None:
        if self._annotations:
            self._plain(f"::warning::{_escape_command(message)}")
        else:
            self.print(message, Style.WARNING)

    def info(self, message: str) -> None:
        self._plain(message)

    def debug(self, message: str) -> None:
        if self._annotations:
            self._plain(f"::debug::{_escape_command(message)}")
        elif self._show_debug:
            self.print(message, Style.DEBUG)

    def header(self, message: str) -> None:
        self.print(message, Style.HEADER)


def _escape_command(message: str) -> str:
    """Escape data for a workflow command, as the Actions toolkit does."""
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


@dataclass
class OutputRecord:
    """A single output record for MockConsole."""

    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """Console implementation that captures output for testing."""

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def success(self, message: str) -> None:
        self.outputs.append(OutputRecord(message, Style.SUCCESS))

    def error(self, message: str) -> None:
        self.outputs.append(OutputRecord(message, Style.ERROR))

    def warning(self, message: str) -> None:
        self.outputs.append(OutputRecord(message, Style.WARNING))

    def info(self, message: str) -> None:
        self.outputs.append(OutputRecord(message, Style.INFO))

    def debug(self, message: str) -> None:
        self.outputs.append(OutputRecord(message, Style.DEBUG))

    def header(self, message: str) -> None:
        self.outputs.append(OutputRecord(message, Style.HEADER))

    # Test helper methods

    def clear(self) -> None:
        self.outputs.clear()

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        """Find all outputs containing a substring."""
        return [o for o in self.outputs if substring in o.message]

    def of_style(self, style: Style) -> list[str]:
        return [o.message for o in self.outputs if o.style == style]

    def count(self, style: Style) -> int:
        return sum(1 for o in self.outputs if o.style == style)
