"""ChartService — build, script, and render charts from descriptions.

Bridges chart description files and plot documents for the CLI. All
methods return :class:`ServiceResult`; rplotctl errors and interpreter
launch failures become failed results instead of exceptions.
"""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any

from rplotctl.config.models import RenderConfig
from rplotctl.domain.description import ChartDescription, ChartKind, validate_model
from rplotctl.domain.errors import RPlotError, StateError, ValidationError
from rplotctl.domain.values import (
    POINT_CHARACTERS,
    POINT_INDEX_RANGE,
    SYMBOLIC_TYPES,
    OutputFormat,
)
from rplotctl.infrastructure.renderer import Renderer
from rplotctl.services.bar_plot import BarPlot
from rplotctl.services.document import PlotDocument
from rplotctl.services.histogram import Histogram
from rplotctl.services.line_plot import LinePlot
from rplotctl.services.result import ErrorCode, ServiceError, ServiceResult

logger = logging.getLogger(__name__)

DOCUMENT_TYPES: dict[ChartKind, type[PlotDocument]] = {
    ChartKind.LINE: LinePlot,
    ChartKind.BAR: BarPlot,
    ChartKind.HISTOGRAM: Histogram,
}


def load_description(path: Path) -> ChartDescription:
    """Read a ``.json`` or ``.toml`` chart description file.

    Raises:
        ValidationError: unreadable file, unknown extension, bad syntax,
            or a payload that does not match :class:`ChartDescription`.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"Cannot read chart description {path}: {exc}"
        raise ValidationError(msg) from exc

    suffix = path.suffix.lower()
    try:
        if suffix == ".json":
            data: Any = json.loads(raw)
        elif suffix == ".toml":
            data = tomllib.loads(raw)
        else:
            msg = f"Unsupported chart description format {suffix!r} (use .json or .toml)"
            raise ValidationError(msg)
    except (json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
        msg = f"Invalid chart description {path}: {exc}"
        raise ValidationError(msg) from exc
    return validate_model(ChartDescription, data)


def build_document(
    description: ChartDescription,
    *,
    renderer: Renderer | None = None,
    render_config: RenderConfig | None = None,
) -> PlotDocument:
    """Create the document for *description* and replay every add call."""
    doc_cls = DOCUMENT_TYPES[description.kind]
    document = doc_cls(description.options, renderer=renderer, render_config=render_config)

    for series in description.series:
        if isinstance(document, LinePlot):
            document.add_series(series.y, series.x, series.options)
        else:
            if series.x is not None:
                msg = f"{description.kind.value} series do not take x values"
                raise ValidationError(msg, field="x")
            document.add_series(series.y, series.options)
    for title in description.titles:
        document.add_title(title.position, title.title, title.options)
    for legend in description.legends:
        document.add_legend(legend.position, legend.name, legend.options)
    for text in description.texts:
        document.add_text(text.text, text.location, text.options)
    for options in description.reference_lines:
        document.add_reference_line(options)
    for options in description.lines:
        document.add_line(options)
    for options in description.axes:
        document.add_axis(options)
    return document


def _error_result(op: str, exc: Exception) -> ServiceResult:
    detail: dict[str, Any] = {}
    if isinstance(exc, ValidationError):
        code = ErrorCode.VALIDATION_ERROR
        if exc.field:
            detail["field"] = exc.field
    elif isinstance(exc, StateError):
        code = ErrorCode.STATE_ERROR
    else:
        code = ErrorCode.RENDER_FAILED
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=code, message=str(exc), detail=detail),
    )


class ChartService:
    """Chart operations for the CLI.

    Args:
        render_config: Default script path and interpreter.
        renderer: Persistence/execution collaborator (real R by default).
    """

    def __init__(
        self,
        render_config: RenderConfig | None = None,
        renderer: Renderer | None = None,
    ) -> None:
        self._render_config = render_config or RenderConfig()
        self._renderer = renderer

    def script(self, description: ChartDescription) -> ServiceResult:
        """Generate the R script for *description* without running it."""
        try:
            document = self._build(description)
            script = document.build_script()
        except RPlotError as exc:
            return _error_result("script", exc)
        return ServiceResult(
            ok=True,
            op="script",
            data={"script": script},
            meta={"kind": description.kind.value, "series": len(description.series)},
        )

    def render(self, description: ChartDescription) -> ServiceResult:
        """Generate, persist, and execute the R script for *description*."""
        try:
            document = self._build(description)
            output = document.render()
        except RPlotError as exc:
            return _error_result("render", exc)
        except OSError as exc:
            logger.debug("Interpreter launch failed", exc_info=True)
            return _error_result("render", exc)

        execution = document.last_execution
        exit_status = execution.returncode if execution else 0
        warnings: list[str] = []
        if execution is not None and not execution.ok:
            warning = f"{document.interpreter_path} exited with status {exit_status}"
            last_error = execution.errors.strip().splitlines()[-1:]
            if last_error:
                warning = f"{warning}: {last_error[0]}"
            warnings.append(warning)
        return ServiceResult(
            ok=True,
            op="render",
            data={
                "path": str(description.options.get("path", "")),
                "script_path": str(document.script_path),
                "output": output,
                "exit_status": exit_status,
            },
            warnings=warnings,
            meta={"kind": description.kind.value, "series": len(description.series)},
        )

    def formats(self) -> ServiceResult:
        """List output formats and the names each symbolic option accepts."""
        data: dict[str, list[str]] = {"type": [f.value for f in OutputFormat]}
        for option, value_cls in SYMBOLIC_TYPES.items():
            data[option] = list(value_cls.MAPPING)
        data["point_type"] = [
            f"{POINT_INDEX_RANGE.start}-{POINT_INDEX_RANGE.stop - 1}",
            *POINT_CHARACTERS,
            "none",
        ]
        return ServiceResult(ok=True, op="formats", data=data)

    def _build(self, description: ChartDescription) -> PlotDocument:
        return build_document(
            description, renderer=self._renderer, render_config=self._render_config
        )
