"""ServiceResult and ServiceError — what ChartService hands back to the CLI.

Every ChartService method returns a ServiceResult instead of raising.
Library callers that drive plot documents directly get the underlying
``ValidationError`` / ``StateError`` exceptions instead.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ErrorCode(StrEnum):
    """Failure categories reported in :attr:`ServiceError.code`."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    STATE_ERROR = "STATE_ERROR"
    RENDER_FAILED = "RENDER_FAILED"


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult.

    ``detail`` carries ``field`` for validation failures when the
    offending input field is known.
    """

    model_config = {"frozen": True}

    code: ErrorCode
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Return type for chart service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (``script``, ``render``, ``formats``,
            ``load_chart``).
        data: Operation-specific payload on success.
        warnings: Problems that did not fail the operation, such as a
            nonzero interpreter exit status.
        error: Structured error if ``ok`` is False.
        meta: Chart kind and series count for chart operations.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None
