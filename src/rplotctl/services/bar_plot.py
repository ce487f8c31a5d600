"""BarPlot — every series becomes one row of a single bar matrix."""

from __future__ import annotations

from typing import Any

from rplotctl.domain.commands import BarChart, Matrix
from rplotctl.domain.errors import ValidationError
from rplotctl.domain.values import BarStyle, Color
from rplotctl.services.document import Buckets, Category, PlotDocument, Series


class BarPlot(PlotDocument):
    """Bar plot of equally long series.

    Document option ``style`` is ``stacked`` (default) or ``grouped``.
    Per-series ``color`` and ``border`` become the fill and border sequences.
    """

    SERIES_OPTIONS = frozenset({"color", "border", "name"})

    def _resolve_options(self, options: dict[str, Any]) -> dict[str, Any]:
        options.setdefault("style", "stacked")
        try:
            BarStyle(options["style"])
        except ValidationError as exc:
            raise ValidationError(str(exc), field="style") from exc
        return options

    def _check_series(self, series: Series) -> None:
        if self._series and len(series.y) != len(self._series[0].y):
            msg = (
                f"Bar series must all have {len(self._series[0].y)} values, "
                f"got {len(series.y)}"
            )
            raise ValidationError(msg, field="y_values")
        for key in ("color", "border"):
            value = series.options.get(key)
            if value is None:
                continue
            try:
                Color(value)
            except ValidationError as exc:
                raise ValidationError(str(exc), field=key) from exc

    def _synthesize(self, buckets: Buckets) -> None:
        values: list[Any] = []
        colors: list[Color] = []
        borders: list[Color] = []
        for series in self._series:
            values.extend(series.y)
            if series.options.get("color") is not None:
                colors.append(Color(series.options["color"]))
            if series.options.get("border") is not None:
                borders.append(Color(series.options["border"]))
        matrix = Matrix(
            {"values": values, "height": len(self._series), "width": len(self._series[0].y)}
        )
        chart = BarChart(
            {
                "matrix": matrix,
                "style": self._options["style"],
                "color": colors or None,
                "border_color": borders or None,
            }
        )
        buckets[Category.PLOT_FRAME].append(chart)
