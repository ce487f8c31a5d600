"""Error kinds raised by the domain and document layers.

Two failure modes:
- ValidationError: invalid input rejected at the point it is supplied.
- StateError: an operation attempted in an invalid document state.

Neither is recoverable locally. A failed ``add_*`` call leaves the
document untouched.
"""

from __future__ import annotations


class RPlotError(Exception):
    """Base class for all rplotctl errors."""


class ValidationError(RPlotError, ValueError):
    """Input rejected: wrong type, out-of-domain value, missing field, length mismatch."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class StateError(RPlotError, RuntimeError):
    """Operation not allowed in the document's current state."""
