"""Validated domain value types.

Each type checks its raw input at construction and knows its own R
encoding. Construction failure raises :class:`ValidationError`; there is
no fallback to a default value.

Symbolic types (line type, axis position, ...) resolve a name through a
fixed lookup table. A table entry may map to None, in which case the
value stands for "leave the R default" and is dropped from named
arguments.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Any, ClassVar, NoReturn

from rplotctl.domain.errors import ValidationError
from rplotctl.domain.literals import RExpression, encode_call, encode_literal, is_number, is_sequence


class OutputFormat(StrEnum):
    """Image formats, each backed by an R graphics device of the same name."""

    BMP = "bmp"
    JPEG = "jpeg"
    PNG = "png"
    TIFF = "tiff"
    PDF = "pdf"


# Devices whose size is not given in pixels.
VECTOR_FORMATS: frozenset[OutputFormat] = frozenset({OutputFormat.PDF})

POINT_CHARACTERS: tuple[str, ...] = ("*", ".", "o", "O", "0", "+", "-", "|", "%", "#")
POINT_INDEX_RANGE = range(0, 26)
OUTPUT_SIZE_RANGE = range(10, 10001)


class DomainValue(RExpression):
    """Base for validated value objects.

    Subclasses override :meth:`validate` (which may normalize ``self.value``)
    and :meth:`encode`.
    """

    def __init__(self, raw: Any) -> None:
        self.raw = raw
        self.value: Any = raw
        self.validate()

    def validate(self) -> None:
        """Check ``self.value``; raise via :meth:`_fail` when out of domain."""

    def encode(self) -> str:
        return encode_literal(self.value)

    def _fail(self, message: str) -> NoReturn:
        msg = f"{type(self).__name__}: {message}, got {self.raw!r}"
        raise ValidationError(msg)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.value == other.value  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        value = tuple(self.value) if is_sequence(self.value) else self.value
        return hash((type(self).__name__, value))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.raw!r})"


# ---------------------------------------------------------------------------
# Free-form values
# ---------------------------------------------------------------------------


class Color(DomainValue):
    """A color name / hex string, or an ``[r, g, b]`` triple in [0, 1]."""

    def validate(self) -> None:
        if isinstance(self.value, str):
            if not self.value:
                self._fail("color name must not be empty")
            return
        if not is_sequence(self.value):
            self._fail("expected a color name or an [r, g, b] triple")
        if len(self.value) != 3:
            self._fail("an rgb triple needs exactly 3 components")
        for component in self.value:
            if not is_number(component):
                self._fail("rgb components must be numbers")
            if not 0 <= component <= 1:
                self._fail("rgb components must be within [0, 1]")
        self.value = list(self.value)

    @property
    def is_rgb(self) -> bool:
        return is_sequence(self.value)

    def encode(self) -> str:
        if self.is_rgb:
            return encode_call("rgb", self.value)
        return encode_literal(self.value)


class PointType(DomainValue):
    """R ``pch``: an index in [0, 25], one marker character, or ``none``."""

    def validate(self) -> None:
        if isinstance(self.value, bool):
            self._fail("expected an integer or a marker character")
        if isinstance(self.value, int):
            if self.value not in POINT_INDEX_RANGE:
                self._fail("point index must be within [0, 25]")
            return
        if not isinstance(self.value, str):
            self._fail("expected an integer or a marker character")
        if self.value == "none":
            self.value = "."
            return
        if self.value not in POINT_CHARACTERS:
            allowed = ", ".join(POINT_CHARACTERS)
            self._fail(f"marker character must be one of {{{allowed}}}")


class LineWeight(DomainValue):
    """R ``lwd``: a positive integer."""

    def validate(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            self._fail("line weight must be an integer")
        if self.value <= 0:
            self._fail("line weight must be positive")


class OutputType(DomainValue):
    """Output image format. Routes the choice of R device function."""

    def validate(self) -> None:
        try:
            self.value = OutputFormat(self.value)
        except ValueError:
            allowed = ", ".join(f.value for f in OutputFormat)
            self._fail(f"output type must be one of {{{allowed}}}")

    @property
    def format(self) -> OutputFormat:
        return self.value

    @property
    def is_vector(self) -> bool:
        return self.value in VECTOR_FORMATS


class OutputSize(DomainValue):
    """Raster image size ``[width, height]`` in pixels, each in [10, 10000]."""

    def validate(self) -> None:
        if not is_sequence(self.value) or len(self.value) != 2:
            self._fail("output size must be exactly [width, height]")
        for dimension in self.value:
            if isinstance(dimension, bool) or not isinstance(dimension, int):
                self._fail("output size dimensions must be integers")
            if dimension not in OUTPUT_SIZE_RANGE:
                self._fail("output size dimensions must be within [10, 10000]")
        self.value = list(self.value)

    @property
    def width(self) -> int:
        return self.value[0]

    @property
    def height(self) -> int:
        return self.value[1]


# ---------------------------------------------------------------------------
# Symbolic values (name -> R literal lookup)
# ---------------------------------------------------------------------------


class SymbolicValue(DomainValue):
    """A name resolved through :attr:`MAPPING` to its R literal."""

    MAPPING: ClassVar[Mapping[str, Any]] = {}

    def validate(self) -> None:
        if not isinstance(self.value, str):
            self._fail("expected a symbolic name")
        if self.value not in self.MAPPING:
            allowed = ", ".join(self.MAPPING)
            self._fail(f"name must be one of {{{allowed}}}")
        self.value = str(self.value)

    @property
    def name(self) -> str:
        return self.value

    @property
    def literal(self) -> Any:
        return self.MAPPING[self.value]

    @property
    def is_null(self) -> bool:
        return self.literal is None

    def encode(self) -> str:
        return encode_literal(self.literal)


class LineType(SymbolicValue):
    """R ``lty``."""

    MAPPING = {"none": 0, "solid": 1, "dashed": 2, "dotted": 3}


class BarStyle(SymbolicValue):
    """R ``beside``: grouped bars sit side by side, stacked is R's default."""

    MAPPING = {"stacked": None, "grouped": True}


class TextPosition(SymbolicValue):
    """R ``pos`` for ``text()``: side of the anchor point."""

    MAPPING = {"below": 1, "left": 2, "above": 3, "right": 4}


class AxisPosition(SymbolicValue):
    """R ``side`` for ``axis()``."""

    MAPPING = {"bottom": 1, "left": 2, "top": 3, "right": 4}


class LabelDirection(SymbolicValue):
    """R ``las``: tick label orientation relative to the axis."""

    MAPPING = {"parallel": 0, "perpendicular": 2}


class TickMark(SymbolicValue):
    """R ``tck``: tick length as a fraction of the plot region."""

    MAPPING = {"inside": 0.01, "outside": -0.01, "none": 0, "lines": 1}


class BoxType(SymbolicValue):
    """R ``bty`` for legends."""

    MAPPING = {"none": "n", "solid": None}


class TitlePosition(SymbolicValue):
    """Which title a ``title()`` call sets. Used for routing, not emitted."""

    MAPPING = {"x": "x", "y": "y", "top": "top"}


SYMBOLIC_TYPES: dict[str, type[SymbolicValue]] = {
    "line_type": LineType,
    "bar_style": BarStyle,
    "text_position": TextPosition,
    "axis_position": AxisPosition,
    "label_direction": LabelDirection,
    "tick_mark": TickMark,
    "box_type": BoxType,
    "title_position": TitlePosition,
}
