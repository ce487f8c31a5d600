"""Tests for validated domain value types."""

from __future__ import annotations

import pytest

from rplotctl.domain.errors import ValidationError
from rplotctl.domain.values import (
    SYMBOLIC_TYPES,
    AxisPosition,
    BarStyle,
    BoxType,
    Color,
    LabelDirection,
    LineType,
    LineWeight,
    OutputFormat,
    OutputSize,
    OutputType,
    PointType,
    TextPosition,
    TickMark,
    TitlePosition,
)


class TestColor:
    def test_name(self) -> None:
        assert Color("red").encode() == "'red'"

    def test_hex(self) -> None:
        assert Color("#30F030").encode() == "'#30F030'"

    def test_rgb_triple(self) -> None:
        assert Color([0.2, 0.2, 1]).encode() == "rgb(0.2, 0.2, 1)"

    def test_rgb_tuple(self) -> None:
        color = Color((0, 0.5, 1))
        assert color.is_rgb
        assert color.encode() == "rgb(0, 0.5, 1)"

    def test_bounds_are_inclusive(self) -> None:
        Color([0, 0, 0])
        Color([1, 1, 1])

    @pytest.mark.parametrize(
        "raw",
        [
            [0.1, 0.2],
            [0.1, 0.2, 0.3, 0.4],
            [0.1, "a", 0.3],
            [1.5, 0, 0],
            [-0.1, 0, 0],
            [True, 0, 0],
            "",
            5,
            None,
        ],
    )
    def test_invalid(self, raw: object) -> None:
        with pytest.raises(ValidationError):
            Color(raw)

    def test_equality(self) -> None:
        assert Color([0.1, 0.2, 0.3]) == Color((0.1, 0.2, 0.3))
        assert Color("red") != Color("blue")
        assert hash(Color("red")) == hash(Color("red"))


class TestPointType:
    @pytest.mark.parametrize("raw", [0, 5, 25])
    def test_index(self, raw: int) -> None:
        assert PointType(raw).encode() == str(raw)

    @pytest.mark.parametrize("raw", ["*", ".", "o", "O", "0", "+", "-", "|", "%", "#"])
    def test_characters(self, raw: str) -> None:
        assert PointType(raw).encode() == f"'{raw}'"

    def test_none_is_dot(self) -> None:
        assert PointType("none").encode() == "'.'"

    @pytest.mark.parametrize("raw", [-1, 26, "x", "oo", 1.5, True, None, [1]])
    def test_invalid(self, raw: object) -> None:
        with pytest.raises(ValidationError):
            PointType(raw)


class TestLineWeight:
    def test_positive(self) -> None:
        assert LineWeight(4).encode() == "4"

    @pytest.mark.parametrize("raw", [0, -1, 1.5, "2", True, None])
    def test_invalid(self, raw: object) -> None:
        with pytest.raises(ValidationError):
            LineWeight(raw)


class TestOutputType:
    @pytest.mark.parametrize("raw", ["bmp", "jpeg", "png", "tiff", "pdf"])
    def test_formats(self, raw: str) -> None:
        assert OutputType(raw).format is OutputFormat(raw)

    def test_only_pdf_is_vector(self) -> None:
        assert OutputType("pdf").is_vector
        assert not OutputType("png").is_vector

    @pytest.mark.parametrize("raw", ["gif", "PNG", "", 3, None])
    def test_invalid(self, raw: object) -> None:
        with pytest.raises(ValidationError):
            OutputType(raw)


class TestOutputSize:
    def test_width_height(self) -> None:
        size = OutputSize([800, 600])
        assert size.width == 800
        assert size.height == 600

    def test_bounds_are_inclusive(self) -> None:
        OutputSize([10, 10000])

    @pytest.mark.parametrize(
        "raw",
        [[800], [800, 600, 1], [9, 600], [800, 10001], [800.0, 600], [True, 600], "800x600", None],
    )
    def test_invalid(self, raw: object) -> None:
        with pytest.raises(ValidationError):
            OutputSize(raw)


class TestSymbolicValues:
    @pytest.mark.parametrize(
        ("cls", "name", "encoded"),
        [
            (LineType, "none", "0"),
            (LineType, "solid", "1"),
            (LineType, "dashed", "2"),
            (LineType, "dotted", "3"),
            (BarStyle, "grouped", "TRUE"),
            (TextPosition, "below", "1"),
            (TextPosition, "right", "4"),
            (AxisPosition, "bottom", "1"),
            (AxisPosition, "left", "2"),
            (LabelDirection, "parallel", "0"),
            (LabelDirection, "perpendicular", "2"),
            (TickMark, "inside", "0.01"),
            (TickMark, "outside", "-0.01"),
            (TickMark, "lines", "1"),
            (BoxType, "none", "'n'"),
            (TitlePosition, "top", "'top'"),
        ],
    )
    def test_encoding(self, cls: type, name: str, encoded: str) -> None:
        assert cls(name).encode() == encoded

    @pytest.mark.parametrize(("cls", "name"), [(BarStyle, "stacked"), (BoxType, "solid")])
    def test_null_mapped_names(self, cls: type, name: str) -> None:
        value = cls(name)
        assert value.is_null
        with pytest.raises(TypeError):
            value.encode()

    @pytest.mark.parametrize("cls", list(SYMBOLIC_TYPES.values()))
    def test_every_table_entry_constructs(self, cls: type) -> None:
        for name in cls.MAPPING:
            assert cls(name).name == name

    @pytest.mark.parametrize("cls", list(SYMBOLIC_TYPES.values()))
    def test_unknown_name_fails(self, cls: type) -> None:
        with pytest.raises(ValidationError):
            cls("no-such-name")

    def test_non_text_fails(self) -> None:
        with pytest.raises(ValidationError):
            LineType(1)
