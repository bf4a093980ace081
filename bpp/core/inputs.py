"""Action input retrieval.

GitHub Actions exposes ``with:`` inputs to the process as ``INPUT_<NAME>``
environment variables (name upper-cased, spaces replaced by underscores,
hyphens kept). ``ActionInputs`` reads them, with explicit values from the CLI
taking precedence.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

__all__ = ["ActionInputs", "input_env_name", "RESOLVE_ONLY_ENV"]

# When set to "test", the run stops after dispatch planning.
RESOLVE_ONLY_ENV = "BPP_ENV"


def input_env_name(name: str) -> str:
    return f"INPUT_{name.replace(' ', '_').upper()}"


def _empty_overrides() -> dict[str, str]:
    return {}


@dataclass(frozen=True)
class ActionInputs:
    """Named string inputs backed by the environment.

    Attributes:
        overrides: Values supplied explicitly (CLI options). Empty strings are
            treated as unset so the environment can still provide a value.
        env: Environment mapping (defaults to ``os.environ``).
    """

    overrides: Mapping[str, str] = field(default_factory=_empty_overrides)
    env: Mapping[str, str] = field(default_factory=lambda: os.environ)

    def get(self, name: str) -> str:
        """Return the input value with surrounding whitespace removed, or ``""``."""
        value = self.overrides.get(name) or self.env.get(input_env_name(name), "")
        return value.strip()

    def first(self, *names: str) -> str:
        """Return the first non-empty input among ``names``.

        Explicit values are checked for every name before the environment.
        """
        for name in names:
            value = (self.overrides.get(name) or "").strip()
            if value:
                return value
        for name in names:
            value = self.env.get(input_env_name(name), "").strip()
            if value:
                return value
        return ""

    def flag(self, name: str) -> bool:
        """Any non-empty value enables the flag."""
        return bool(self.get(name))

    @property
    def resolve_only(self) -> bool:
        return self.env.get(RESOLVE_ONLY_ENV, "") == "test"
