"""Error codes for CLI exit status.

The action and the CLI share these codes. They map directly to process exit
codes, so the numeric values must stay stable:
- 0: Success
- 1: User error (missing or invalid inputs, nothing to publish)
- 4: Network error (one or more store submissions failed)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands."""

    OK = 0
    USER_ERROR = 1
    NETWORK_ERROR = 4

    def __str__(self) -> str:
        """Return human-readable name."""
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
