from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

PublishErrorKind = Literal[
    "missing_input",
    "invalid_keys",
    "no_browser",
    "no_artifact",
]


@dataclass(frozen=True, slots=True)
class PublishError:
    """Setup failure that aborts the run before any store is contacted."""

    kind: PublishErrorKind
    message: str
    hint: str | None = None

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message
