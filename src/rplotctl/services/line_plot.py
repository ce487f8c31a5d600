"""LinePlot — one ``points()`` layer per series over a shared frame.

Render order for the synthesized commands:
  1. resolve ``auto`` ranges from every series (global min/max)
  2. a one-point ``plot()`` frame with line and marker suppressed
  3. one ``points()`` per series
  4. one ``text()`` per annotated series, labels at the data points
  5. an automatic legend at the top-left corner of the ranges
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Literal

from rplotctl.domain.commands import Legend, PlotFrame, Points, TextAnnotation
from rplotctl.domain.errors import StateError, ValidationError
from rplotctl.domain.literals import is_number, is_sequence
from rplotctl.services.document import (
    Buckets,
    Category,
    PlotDocument,
    Series,
    check_numbers,
    check_options,
)

AUTO = "auto"

_STYLE_KEYS = ("color", "line_type", "line_weight", "point_type")


class LinePlot(PlotDocument):
    """Line plot of one or more series.

    ``x_range`` and ``y_range`` default to ``"auto"``; pass ``[min, max]``
    to fix them.
    """

    SERIES_OPTIONS = frozenset(
        {
            "color",
            "line_weight",
            "line_type",
            "point_type",
            "name",
            "annotations",
            "annotation_options",
        }
    )

    def add_series(  # type: ignore[override]
        self,
        y_values: Sequence[Any],
        x_values: Sequence[Any] | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> None:
        """Add a series; ``x_values=None`` uses the index positions ``0..n-1``."""
        series = self._new_series(y_values, options)
        if x_values is None:
            series.x = list(range(len(series.y)))
        else:
            series.x = check_numbers(x_values, "x_values")
            if len(series.x) != len(series.y):
                msg = "x_values and y_values must have the same length"
                raise ValidationError(msg, field="x_values")
        self._append_series(series)

    def find_auto_range(self, dim: Literal["x", "y"]) -> list[Any]:
        """Return ``[min, max]`` over every series' values on *dim*."""
        if dim not in ("x", "y"):
            msg = f"dim must be one of 'x' or 'y', got {dim!r}"
            raise ValueError(msg)
        if not self._series:
            msg = "Cannot compute a range without series"
            raise StateError(msg)
        values = [value for series in self._series for value in getattr(series, dim)]
        return [min(values), max(values)]

    def resolved_range(self, dim: Literal["x", "y"]) -> list[Any]:
        """The range used for *dim* at render time."""
        requested = self._options[f"{dim}_range"]
        if requested == AUTO:
            return self.find_auto_range(dim)
        return list(requested)

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    def _resolve_options(self, options: dict[str, Any]) -> dict[str, Any]:
        for key in ("x_range", "y_range"):
            value = options.setdefault(key, AUTO)
            if value == AUTO:
                continue
            if not is_sequence(value) or len(value) != 2 or not all(is_number(v) for v in value):
                msg = f"{key} must be 'auto' or a [min, max] pair of numbers, got {value!r}"
                raise ValidationError(msg, field=key)
            if not value[0] < value[1]:
                msg = f"{key} minimum must be below its maximum, got {value!r}"
                raise ValidationError(msg, field=key)
        return options

    def _check_series(self, series: Series) -> None:
        self._points_command(series)
        self._annotation_command(series)

    def _synthesize(self, buckets: Buckets) -> None:
        x_range = self.resolved_range("x")
        y_range = self.resolved_range("y")
        first = self._series[0]
        frame_fields = {
            **self._options,
            "x_range": x_range,
            "y_range": y_range,
            "x": [first.x[0]],
            "y": [first.y[0]],
            "line_type": "none",
            "point_type": "none",
        }
        buckets[Category.PLOT_FRAME].append(PlotFrame(frame_fields))

        for series in self._series:
            buckets[Category.POINTS].append(self._points_command(series))
        for series in self._series:
            annotation = self._annotation_command(series)
            if annotation is not None:
                buckets[Category.TEXT_ANNOTATIONS].append(annotation)

        if self._doc_options.auto_legend:
            buckets[Category.LEGENDS].append(self._auto_legend(x_range, y_range))

    # ------------------------------------------------------------------
    # Command builders
    # ------------------------------------------------------------------

    def _points_command(self, series: Series) -> Points:
        style = {key: series.options[key] for key in _STYLE_KEYS if key in series.options}
        return Points({"x": series.x, "y": series.y, **style})

    def _annotation_command(self, series: Series) -> TextAnnotation | None:
        annotations = series.options.get("annotations")
        if annotations is None:
            return None
        if not is_sequence(annotations):
            msg = "annotations must be a list with one label per data point"
            raise ValidationError(msg, field="annotations")
        if not annotations:
            return None
        if len(annotations) != len(series.y):
            msg = (
                f"annotations has {len(annotations)} labels for "
                f"{len(series.y)} data points"
            )
            raise ValidationError(msg, field="annotations")
        options = check_options(series.options.get("annotation_options"), "annotation_options")
        location = [[x, y] for x, y in zip(series.x, series.y, strict=True)]
        return TextAnnotation({**options, "text": list(annotations), "location": location})

    def _auto_legend(self, x_range: list[Any], y_range: list[Any]) -> Legend:
        def collect(key: str) -> list[Any]:
            return [s.options[key] for s in self._series if s.options.get(key) is not None]

        fields = {
            "position": [x_range[0], y_range[1]],
            "name": [series.name for series in self._series],
            "color": collect("color"),
            "line_type": collect("line_type"),
            "line_weight": collect("line_weight"),
            "point_type": collect("point_type"),
            "box_type": "none",
        }
        return Legend(fields)
