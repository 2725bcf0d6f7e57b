"""
Command result type for error handling.

Provides a standardized way to return success/failure status from
dispatched sequencer intents.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from beatgrid_core.exceptions import BeatgridError


@dataclass
class CommandResult:
    """
    Result of a dispatched intent.

    Attributes:
        success: True if the intent was applied
        message: Optional error or success message
        code: Error code from the raised BeatgridError (None on success)
        data: Optional result data
    """

    success: bool
    message: str | None = None
    code: str | None = None
    data: dict[str, Any] | None = None

    @classmethod
    def ok(cls, message: str | None = None, data: dict[str, Any] | None = None) -> CommandResult:
        """Create a successful result."""
        return cls(success=True, message=message, data=data)

    @classmethod
    def error(
        cls, message: str, code: str = "error", data: dict[str, Any] | None = None
    ) -> CommandResult:
        """Create an error result."""
        return cls(success=False, message=message, code=code, data=data)

    @classmethod
    def from_exception(cls, exc: BeatgridError) -> CommandResult:
        """Create an error result carrying the exception's code."""
        return cls.error(str(exc), code=exc.code)
