"""PlotDocument — accumulate commands and flatten them into an R script.

Lifecycle::

    EMPTY ──add_*──▶ ACCUMULATING ──render()──▶ RENDERED

Construction seeds the output-device and global-style commands. Every
``add_*`` call validates fully before touching document state, so a
failed call leaves the document exactly as it was.

Commands live in fixed categories. The script lists categories in
:data:`CATEGORY_ORDER` and commands within a category in call order.
Per-render commands (frame, series, legend) are synthesized into a copy
of the buckets, so rendering twice yields the same script.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Any, ClassVar

from rplotctl.config.models import RenderConfig
from rplotctl.domain.commands import (
    Axis,
    Command,
    GlobalStyle,
    Legend,
    Lines,
    Output,
    ReferenceLine,
    TextAnnotation,
    Title,
)
from rplotctl.domain.description import DocumentOptions, validate_model
from rplotctl.domain.errors import StateError, ValidationError
from rplotctl.domain.literals import is_number, is_sequence
from rplotctl.infrastructure.renderer import Execution, Renderer, RScriptRenderer

logger = logging.getLogger(__name__)


class DocumentState(StrEnum):
    """Where a document is in its lifecycle."""

    EMPTY = "empty"
    ACCUMULATING = "accumulating"
    RENDERED = "rendered"


class Category(StrEnum):
    """Buckets commands are grouped into before flattening."""

    OUTPUT = "output"
    GLOBAL_STYLE = "global_style"
    PLOT_FRAME = "plot_frame"
    REFERENCE_LINES = "reference_lines"
    LINES = "lines"
    LEGENDS = "legends"
    TITLES = "titles"
    AXES = "axes"
    TEXT_ANNOTATIONS = "text_annotations"
    POINTS = "points"


CATEGORY_ORDER: tuple[Category, ...] = tuple(Category)

type Buckets = dict[Category, list[Command]]


@dataclass
class Series:
    """One plotted data line."""

    y: list[Any]
    options: dict[str, Any] = field(default_factory=dict)
    x: list[Any] | None = None

    @property
    def name(self) -> str:
        return self.options["name"]


def check_numbers(values: Any, name: str) -> list[Any]:
    """Return *values* as a list, requiring a non-empty sequence of numbers."""
    if not is_sequence(values) or not values:
        msg = f"{name} must be a non-empty list of numbers"
        raise ValidationError(msg, field=name)
    for index, value in enumerate(values):
        if not is_number(value):
            msg = f"{name}[{index}] must be a number, but was {type(value).__name__}"
            raise ValidationError(msg, field=name)
    return list(values)


def check_options(options: Any, name: str = "options") -> dict[str, Any]:
    """Return a copy of an optional options mapping."""
    if options is None:
        return {}
    if not isinstance(options, Mapping):
        msg = f"{name} must be a mapping, got {type(options).__name__}"
        raise ValidationError(msg, field=name)
    return dict(options)


class PlotDocument:
    """Base plot document: command buckets, series list, and rendering.

    Subclasses define which series options they accept and synthesize
    their data commands in :meth:`_synthesize`.

    Args:
        options: Document construction options (``path``, ``type``, ``size``,
            ``margin``, ``background``, ...). ``script_path`` and
            ``interpreter_path`` override *render_config*.
        renderer: Persistence/execution collaborator. Defaults to
            :class:`RScriptRenderer`.
        render_config: Default script path and interpreter.
    """

    SERIES_OPTIONS: ClassVar[frozenset[str]] = frozenset({"color", "name"})

    def __init__(
        self,
        options: Mapping[str, Any],
        *,
        renderer: Renderer | None = None,
        render_config: RenderConfig | None = None,
    ) -> None:
        raw = check_options(options, "document options")
        self._doc_options = validate_model(DocumentOptions, raw)
        self._options = self._resolve_options(raw)
        config = render_config or RenderConfig()
        self.script_path = Path(self._doc_options.script_path or config.script_path)
        self.interpreter_path = self._doc_options.interpreter_path or config.interpreter_path
        self._renderer: Renderer = renderer or RScriptRenderer()

        self._buckets: Buckets = {category: [] for category in CATEGORY_ORDER}
        self._series: list[Series] = []
        self._state = DocumentState.EMPTY
        self._last_execution: Execution | None = None
        self._buckets[Category.OUTPUT].append(Output(self._options))
        self._buckets[Category.GLOBAL_STYLE].append(GlobalStyle(self._options))

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def state(self) -> DocumentState:
        return self._state

    @property
    def options(self) -> dict[str, Any]:
        return dict(self._options)

    @property
    def series(self) -> list[Series]:
        return list(self._series)

    @property
    def last_execution(self) -> Execution | None:
        """The most recent interpreter run, or None before the first render."""
        return self._last_execution

    def commands(self, category: Category) -> list[Command]:
        """Commands accumulated so far in *category* (excludes per-render ones)."""
        return list(self._buckets[category])

    # ------------------------------------------------------------------
    # Accumulation
    # ------------------------------------------------------------------

    def add_series(self, y_values: Sequence[Any], options: Mapping[str, Any] | None = None) -> None:
        """Add one data series with its style options."""
        self._append_series(self._new_series(y_values, options))

    def add_title(
        self, position: str, title: str, options: Mapping[str, Any] | None = None
    ) -> None:
        """Add an x-axis, y-axis, or top title."""
        fields = {**check_options(options), "position": position, "title": title}
        self._add(Category.TITLES, Title(fields))

    def add_legend(
        self,
        position: Sequence[Any],
        name: str | Sequence[str],
        options: Mapping[str, Any] | None = None,
    ) -> None:
        """Add a legend anchored at ``[x, y]``."""
        fields = {**check_options(options), "position": position, "name": name}
        self._add(Category.LEGENDS, Legend(fields))

    def add_text(
        self,
        text: str | Sequence[str],
        location: Sequence[Any],
        options: Mapping[str, Any] | None = None,
    ) -> None:
        """Add text at ``[x, y]`` or at each of a list of ``[x, y]`` pairs."""
        fields = {**check_options(options), "text": text, "location": location}
        self._add(Category.TEXT_ANNOTATIONS, TextAnnotation(fields))

    def add_reference_line(self, options: Mapping[str, Any]) -> None:
        """Add a horizontal and/or vertical reference line."""
        self._add(Category.REFERENCE_LINES, ReferenceLine(check_options(options)))

    def add_line(self, options: Mapping[str, Any]) -> None:
        """Add a free-standing line through ``x``/``y`` points."""
        self._add(Category.LINES, Lines(check_options(options)))

    def add_axis(self, options: Mapping[str, Any]) -> None:
        """Add an axis with explicit ticks."""
        self._add(Category.AXES, Axis(check_options(options)))

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def build_script(self) -> str:
        """Flatten every command into script text, one call per line.

        Raises:
            StateError: no series has been added.
        """
        if not self._series:
            msg = "You must add at least one series before plotting"
            raise StateError(msg)
        buckets: Buckets = {category: list(cmds) for category, cmds in self._buckets.items()}
        self._synthesize(buckets)
        lines = [command.encode() for category in CATEGORY_ORDER for command in buckets[category]]
        logger.debug("Built script with %d commands", len(lines))
        return "\n".join(lines)

    def render(self) -> str:
        """Build the script, persist it, run the interpreter, return its output.

        The full run (exit status, stderr) is kept on :attr:`last_execution`.
        """
        script = self.build_script()
        self._renderer.persist(script, self.script_path)
        execution = self._renderer.execute(self.interpreter_path, self.script_path)
        self._last_execution = execution
        self._state = DocumentState.RENDERED
        return execution.output

    # ------------------------------------------------------------------
    # Subclass hooks and helpers
    # ------------------------------------------------------------------

    def _resolve_options(self, options: dict[str, Any]) -> dict[str, Any]:
        """Apply document-kind defaults to the raw construction options."""
        return options

    def _check_series(self, series: Series) -> None:
        """Validate a new series against the document before it is stored."""

    def _synthesize(self, buckets: Buckets) -> None:
        """Add the per-render commands for the accumulated series."""

    def _new_series(self, y_values: Sequence[Any], options: Mapping[str, Any] | None) -> Series:
        y = check_numbers(y_values, "y_values")
        opts = check_options(options)
        unknown = sorted(set(opts) - self.SERIES_OPTIONS)
        if unknown:
            allowed = ", ".join(sorted(self.SERIES_OPTIONS))
            msg = f"Unknown series option(s) {', '.join(unknown)}; expected one of {{{allowed}}}"
            raise ValidationError(msg, field=unknown[0])
        defaults = {"color": "black", "name": f"series[{len(self._series)}]"}
        series = Series(y=y, options={**defaults, **opts})
        if not isinstance(series.name, str):
            msg = f"Series name must be text, got {series.name!r}"
            raise ValidationError(msg, field="name")
        return series

    def _append_series(self, series: Series) -> None:
        self._check_writable()
        self._check_series(series)
        self._series.append(series)
        self._touch()
        logger.debug("Added series %s with %d points", series.name, len(series.y))

    def _add(self, category: Category, command: Command) -> None:
        self._check_writable()
        self._buckets[category].append(command)
        self._touch()
        logger.debug("Added %s command to %s", command.function_name, category.value)

    def _check_writable(self) -> None:
        if self._state is DocumentState.RENDERED:
            msg = "Document has already been rendered"
            raise StateError(msg)

    def _touch(self) -> None:
        if self._state is DocumentState.EMPTY:
            self._state = DocumentState.ACCUMULATING
