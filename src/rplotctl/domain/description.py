"""Chart description models — a whole chart as one validated payload.

A description names the plot kind, the document options, every series,
and the decorations to add. The service layer replays it onto a plot
document; field-level validation (colors, ranges, ...) still happens in
the commands, so these models only fix the payload's shape.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr
from pydantic import ValidationError as PydanticValidationError

from rplotctl.domain.errors import ValidationError


class ChartKind(StrEnum):
    """Plot document variants."""

    LINE = "line"
    BAR = "bar"
    HISTOGRAM = "histogram"


class DocumentOptions(BaseModel):
    """Document-level options that are not R call arguments.

    Extra keys (path, type, size, margin, ranges, colors, ...) are kept and
    handed to the output, style, and frame commands.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    auto_legend: StrictBool = False
    script_path: StrictStr | None = None
    interpreter_path: StrictStr | None = None


class SeriesDescription(BaseModel):
    """One data series."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    y: list[Any]
    x: list[Any] | None = None
    options: dict[str, Any] = Field(default_factory=dict)


class TitleDescription(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    position: str
    title: str
    options: dict[str, Any] = Field(default_factory=dict)


class LegendDescription(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    position: list[Any]
    name: str | list[str]
    options: dict[str, Any] = Field(default_factory=dict)


class TextDescription(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    text: str | list[str]
    location: list[Any]
    options: dict[str, Any] = Field(default_factory=dict)


class ChartDescription(BaseModel):
    """Everything needed to build and render one chart."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: ChartKind = ChartKind.LINE
    options: dict[str, Any]
    series: list[SeriesDescription] = Field(default_factory=list)
    titles: list[TitleDescription] = Field(default_factory=list)
    legends: list[LegendDescription] = Field(default_factory=list)
    texts: list[TextDescription] = Field(default_factory=list)
    reference_lines: list[dict[str, Any]] = Field(default_factory=list)
    lines: list[dict[str, Any]] = Field(default_factory=list)
    axes: list[dict[str, Any]] = Field(default_factory=list)


def validate_model[T: BaseModel](model_cls: type[T], data: Any) -> T:
    """Validate *data* against *model_cls*, raising rplotctl's ValidationError.

    The first pydantic error location becomes ``exc.field``.
    """
    try:
        return model_cls.model_validate(data)
    except PydanticValidationError as exc:
        errors = exc.errors()
        field = ".".join(str(part) for part in errors[0]["loc"]) if errors else None
        msg = f"Invalid {model_cls.__name__}: {exc}"
        raise ValidationError(msg, field=field) from exc
