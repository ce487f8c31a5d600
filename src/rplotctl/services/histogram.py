"""Histogram — a single series binned by R's ``hist()``."""

from __future__ import annotations

from rplotctl.domain.commands import Hist
from rplotctl.domain.errors import StateError
from rplotctl.services.document import Buckets, Category, PlotDocument, Series


class Histogram(PlotDocument):
    """Histogram of exactly one series.

    Series options: ``color``, ``bins`` (R ``breaks``), ``name``,
    ``x_range``, ``y_range``.
    """

    SERIES_OPTIONS = frozenset({"color", "bins", "name", "x_range", "y_range"})

    def _check_series(self, series: Series) -> None:
        if self._series:
            msg = "Only one series can be plotted in a histogram"
            raise StateError(msg)
        self._hist_command(series)

    def _synthesize(self, buckets: Buckets) -> None:
        buckets[Category.PLOT_FRAME].append(self._hist_command(self._series[0]))

    def _hist_command(self, series: Series) -> Hist:
        return Hist({**series.options, "series": series.y})
