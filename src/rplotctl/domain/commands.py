"""Command schemas — one class per R graphics call.

A command is built from a raw field mapping: the generic mapping pass
(:func:`~rplotctl.domain.schema.map_parameters`) fills positional and named
arguments, then :meth:`Command.post_validate` applies call-specific rules.
Commands are themselves R expressions, so one command can be an argument
of another (a matrix inside a bar chart).

The caller's mapping is never mutated.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar, NoReturn

from rplotctl.domain.errors import ValidationError
from rplotctl.domain.literals import RExpression, encode_call, is_number, is_sequence
from rplotctl.domain.schema import (
    LINE_PARAMS,
    XY_POINTS,
    XY_RANGE,
    FieldSpec,
    Primitive,
    Schema,
    map_parameters,
    merge_schemas,
)
from rplotctl.domain.values import (
    AxisPosition,
    BarStyle,
    BoxType,
    Color,
    LabelDirection,
    LineType,
    OutputSize,
    OutputType,
    TextPosition,
    TickMark,
    TitlePosition,
)


def _length(value: Any) -> int:
    return len(value) if is_sequence(value) else 1


class Command(RExpression):
    """One R call expression built from validated fields."""

    name: ClassVar[str] = ""
    schema: ClassVar[Schema] = merge_schemas()

    def __init__(self, fields: Mapping[str, Any] | None = None) -> None:
        if fields is None:
            fields = {}
        if not isinstance(fields, Mapping):
            msg = f"{type(self).__name__}: input must be a mapping, got {type(fields).__name__}"
            raise ValidationError(msg)
        self.fields: dict[str, Any] = dict(fields)
        mapped = map_parameters(self.fields, self.schema, owner=type(self).__name__)
        self.positional = mapped.positional
        self.named = mapped.named
        self.values = mapped.values
        self.post_validate()

    def post_validate(self) -> None:
        """Apply call-specific rules after the generic mapping pass."""

    @property
    def function_name(self) -> str:
        return self.name

    def positionals(self) -> list[Any]:
        return [self.positional[index] for index in sorted(self.positional)]

    def encode(self) -> str:
        return encode_call(self.function_name, self.positionals(), self.named)

    def _fail(self, message: str, *, field: str | None = None) -> NoReturn:
        msg = f"{type(self).__name__}: {message}"
        raise ValidationError(msg, field=field)

    def _require_point(self, field: str, value: Any) -> tuple[Any, Any]:
        if not is_sequence(value) or len(value) != 2 or not all(is_number(v) for v in value):
            self._fail(f"{field} must be an [x, y] pair of numbers, got {value!r}", field=field)
        return value[0], value[1]

    def _require_equal_xy(self) -> None:
        x, y = self.fields.get("x"), self.fields.get("y")
        for field, value in (("x", x), ("y", y)):
            if is_sequence(value) and not value:
                self._fail(f"{field} must not be empty", field=field)
        if _length(x) != _length(y):
            self._fail("x and y must be of the same length", field="x")

    def _require_range(self, field: str) -> None:
        value = self.fields.get(field)
        if value is None:
            return
        low, high = self._require_point(field, value)
        if low > high:
            self._fail(f"{field} minimum must not exceed its maximum, got {value!r}", field=field)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.encode()}>"


# ---------------------------------------------------------------------------
# Device and global style
# ---------------------------------------------------------------------------


class Output(Command):
    """Opens the graphics device, e.g. ``png('out.png', width=800, height=600)``."""

    schema = merge_schemas(
        {
            "path": FieldSpec(Primitive.TEXT, pos=0),
            "type": FieldSpec(OutputType, required=True, auto_cast=True),
            "size": FieldSpec(OutputSize, auto_cast=True, array_type=True),
        }
    )

    @property
    def output_type(self) -> OutputType:
        return self.values["type"]

    @property
    def function_name(self) -> str:
        return self.output_type.format.value

    def post_validate(self) -> None:
        size = self.values.get("size")
        if size is not None and not self.output_type.is_vector:
            self.named["width"] = size.width
            self.named["height"] = size.height


class GlobalStyle(Command):
    """``par()``: scale, colors, and margins for the whole figure."""

    name = "par"
    schema = merge_schemas(
        {
            "global_scale": FieldSpec(Primitive.NUMBER, key="cex"),
            "axis_font_scale": FieldSpec(Primitive.NUMBER, key="cex.axis"),
            "axis_font_color": FieldSpec(Color, key="col.axis", auto_cast=True),
            "background": FieldSpec(Color, key="bg", auto_cast=True),
            "foreground": FieldSpec(Color, key="fg", auto_cast=True),
            "margin": FieldSpec(Primitive.NUMBER, key="mar"),
        }
    )

    def post_validate(self) -> None:
        margin = self.fields.get("margin")
        if margin is not None and _length(margin) != 4:
            self._fail("margin must be [bottom, left, top, right]", field="margin")


# ---------------------------------------------------------------------------
# Data layers
# ---------------------------------------------------------------------------


class PlotFrame(Command):
    """``plot()`` call that establishes axes and ranges."""

    name = "plot"
    schema = merge_schemas(
        {"axes": FieldSpec(Primitive.BOOLEAN, key="axes")},
        LINE_PARAMS,
        XY_POINTS,
        XY_RANGE,
    )

    def post_validate(self) -> None:
        self._require_equal_xy()
        self._require_range("x_range")
        self._require_range("y_range")
        self.named["type"] = "o"
        self.named["ann"] = False


class Points(Command):
    """``points()``: one series drawn as connected markers."""

    name = "points"
    schema = merge_schemas(LINE_PARAMS, XY_POINTS)

    def post_validate(self) -> None:
        self._require_equal_xy()
        self.named["type"] = "o"


class Lines(Command):
    """``lines()``: a free-standing line through the given points."""

    name = "lines"
    schema = merge_schemas(LINE_PARAMS, XY_POINTS)

    def post_validate(self) -> None:
        self._require_equal_xy()


class ReferenceLine(Command):
    """``abline()``: horizontal and/or vertical reference lines."""

    name = "abline"
    schema = merge_schemas(
        {
            "horizontal": FieldSpec(Primitive.NUMBER, key="h"),
            "vertical": FieldSpec(Primitive.NUMBER, key="v"),
        },
        LINE_PARAMS,
    )

    def post_validate(self) -> None:
        if "horizontal" not in self.values and "vertical" not in self.values:
            self._fail("at least one of horizontal or vertical must be defined", field="horizontal")


class Matrix(Command):
    """Row-major ``matrix()`` literal used as bar chart data."""

    name = "matrix"
    schema = merge_schemas(
        {
            "values": FieldSpec(Primitive.NUMBER, pos=0),
            "height": FieldSpec(Primitive.INTEGER, pos=1),
            "width": FieldSpec(Primitive.INTEGER, pos=2),
        }
    )

    def post_validate(self) -> None:
        expected = self.values["height"] * self.values["width"]
        if _length(self.fields["values"]) != expected:
            self._fail(
                f"expected {expected} values for a {self.values['height']}x"
                f"{self.values['width']} matrix",
                field="values",
            )
        self.named["byrow"] = True


class BarChart(Command):
    """``barplot()`` over a matrix, one row per series."""

    name = "barplot"
    schema = merge_schemas(
        {
            "matrix": FieldSpec(Matrix, pos=0),
            "style": FieldSpec(BarStyle, key="beside", auto_cast=True),
            "color": FieldSpec(Color, key="col", auto_cast=True),
            "border_color": FieldSpec(Color, key="border", auto_cast=True),
        }
    )


class Hist(Command):
    """``hist()`` of a single series with R's own titles blanked out."""

    name = "hist"
    schema = merge_schemas(
        {
            "series": FieldSpec(Primitive.NUMBER, pos=0),
            "color": FieldSpec(Color, key="col", auto_cast=True),
            "bins": FieldSpec(Primitive.NUMBER, key="breaks"),
        },
        XY_RANGE,
    )

    def post_validate(self) -> None:
        self._require_range("x_range")
        self._require_range("y_range")
        self.named["main"] = ""
        self.named["xlab"] = ""
        self.named["ylab"] = ""


# ---------------------------------------------------------------------------
# Decorations
# ---------------------------------------------------------------------------


class TextAnnotation(Command):
    """``text()`` at one location or at one location per label."""

    name = "text"
    schema = merge_schemas(
        {
            "text": FieldSpec(Primitive.TEXT, pos=2),
            "position": FieldSpec(TextPosition, key="pos", auto_cast=True),
            "offset": FieldSpec(Primitive.INTEGER, key="offset"),
            "font_scale": FieldSpec(Primitive.NUMBER, key="cex"),
            "rotation": FieldSpec(Primitive.NUMBER, key="srt"),
            "color": FieldSpec(Color, key="col", auto_cast=True),
        }
    )

    def post_validate(self) -> None:
        location = self.fields.get("location")
        if not is_sequence(location) or not location:
            self._fail("location must be an [x, y] pair or a list of pairs", field="location")
        if is_sequence(location[0]):
            xs: list[Any] = []
            ys: list[Any] = []
            for index, point in enumerate(location):
                x, y = self._require_point(f"location[{index}]", point)
                xs.append(x)
                ys.append(y)
            self.positional[0] = xs
            self.positional[1] = ys
        else:
            self.positional[0], self.positional[1] = self._require_point("location", location)


class Legend(Command):
    """``legend()`` anchored at an ``[x, y]`` position."""

    name = "legend"
    schema = merge_schemas(
        {
            "name": FieldSpec(Primitive.TEXT, pos=2),
            "box_type": FieldSpec(BoxType, key="bty", auto_cast=True),
        },
        LINE_PARAMS,
    )

    def post_validate(self) -> None:
        self.positional[0], self.positional[1] = self._require_point(
            "position", self.fields.get("position")
        )


# Target keys per title position: (label, color, scale).
TITLE_KEYS: dict[str, tuple[str, str, str]] = {
    "x": ("xlab", "col.lab", "cex.lab"),
    "y": ("ylab", "col.lab", "cex.lab"),
    "top": ("main", "col.main", "cex.main"),
}


class Title(Command):
    """``title()`` for the x axis, y axis, or top of the plot.

    R takes a different keyword triple for each title position, so the
    logical ``title``/``color``/``font_scale`` fields are routed after the
    generic pass.
    """

    name = "title"
    schema = merge_schemas(
        {
            "title": FieldSpec(Primitive.TEXT, required=True),
            "position": FieldSpec(TitlePosition, required=True, auto_cast=True),
            "font_scale": FieldSpec(Primitive.NUMBER),
            "color": FieldSpec(Color, auto_cast=True),
        }
    )

    def post_validate(self) -> None:
        position: TitlePosition = self.values["position"]
        label_key, color_key, scale_key = TITLE_KEYS[position.literal]
        self.named[label_key] = self.values["title"]
        if "color" in self.values:
            self.named[color_key] = self.values["color"]
        if "font_scale" in self.values:
            self.named[scale_key] = self.values["font_scale"]


class Axis(Command):
    """``axis()`` with explicit tick positions and optional labels."""

    name = "axis"
    schema = merge_schemas(
        {
            "location": FieldSpec(AxisPosition, pos=0, auto_cast=True),
            "ticks": FieldSpec(Primitive.NUMBER, key="at", required=True),
            "labels": FieldSpec(Primitive.TEXT, key="labels"),
            "origin": FieldSpec(Primitive.NUMBER, key="pos"),
            "line_type": FieldSpec(LineType, key="lty", auto_cast=True),
            "color": FieldSpec(Color, key="col", auto_cast=True),
            "label_direction": FieldSpec(
                LabelDirection, key="las", auto_cast=True, default="parallel"
            ),
            "tick_marks": FieldSpec(TickMark, key="tck", auto_cast=True, default="outside"),
        }
    )

    def post_validate(self) -> None:
        labels = self.fields.get("labels")
        if labels is not None and _length(labels) != _length(self.fields["ticks"]):
            self._fail("labels and ticks must be of the same length", field="labels")
