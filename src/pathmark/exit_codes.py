"""Standardized CLI exit codes for pathmark.

Exit code scheme:

    0  SUCCESS        -- every anchor was measured
    1  GENERAL_ERROR  -- unexpected failure, unreadable input
    2  USAGE_ERROR    -- invalid arguments, bad flags, unknown command (Click default)
    3  NO_FILES       -- no supported source files among the given paths
    4  PARTIAL        -- output produced, but some anchors failed to measure
"""

from __future__ import annotations

import click

# ---------------------------------------------------------------------------
# Exit code constants
# ---------------------------------------------------------------------------

EXIT_SUCCESS: int = 0
EXIT_ERROR: int = 1
EXIT_USAGE: int = 2
EXIT_NO_FILES: int = 3
EXIT_PARTIAL: int = 4

DESCRIPTIONS: dict[int, str] = {
    EXIT_SUCCESS: "success",
    EXIT_ERROR: "unexpected error",
    EXIT_USAGE: "invalid usage (bad arguments or flags)",
    EXIT_NO_FILES: "no supported source files found",
    EXIT_PARTIAL: "partial results (some anchors could not be measured)",
}

# ---------------------------------------------------------------------------
# Custom exceptions (caught by click's error handler)
# ---------------------------------------------------------------------------


class PathmarkError(click.ClickException):
    """Base class for pathmark errors with exit codes."""

    def __init__(self, message: str, exit_code: int = EXIT_ERROR):
        super().__init__(message)
        self.exit_code = exit_code

    def format_message(self) -> str:
        return self.message


class NoSupportedFilesError(PathmarkError):
    def __init__(self, message: str = "No supported source files found."):
        super().__init__(message, EXIT_NO_FILES)


class PartialResultError(PathmarkError):
    """Raised after output when some anchors failed to measure."""

    def __init__(self, failed: int):
        super().__init__(f"{failed} anchor(s) could not be measured.", EXIT_PARTIAL)
        self.failed = failed
