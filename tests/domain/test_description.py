"""Tests for chart description models."""

from __future__ import annotations

import pytest

from rplotctl.domain.description import (
    ChartDescription,
    ChartKind,
    DocumentOptions,
    validate_model,
)
from rplotctl.domain.errors import ValidationError


class TestChartDescription:
    def test_minimal_description(self) -> None:
        desc = validate_model(ChartDescription, {"options": {"path": "a.png", "type": "png"}})
        assert desc.kind is ChartKind.LINE
        assert desc.series == []
        assert desc.axes == []

    def test_full_description(self) -> None:
        desc = validate_model(
            ChartDescription,
            {
                "kind": "bar",
                "options": {"path": "a.png", "type": "png"},
                "series": [{"y": [1, 2], "options": {"color": "red"}}],
                "titles": [{"position": "top", "title": "T"}],
                "legends": [{"position": [0, 1], "name": ["a"]}],
                "texts": [{"text": "hi", "location": [1, 1]}],
                "reference_lines": [{"horizontal": 1}],
            },
        )
        assert desc.kind is ChartKind.BAR
        assert desc.series[0].options == {"color": "red"}
        assert desc.titles[0].options == {}

    def test_unknown_top_level_key(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_model(ChartDescription, {"options": {}, "colour": "red"})
        assert exc_info.value.field == "colour"

    def test_unknown_kind(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_model(ChartDescription, {"kind": "pie", "options": {}})
        assert exc_info.value.field == "kind"

    def test_missing_series_values(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_model(ChartDescription, {"options": {}, "series": [{"x": [1]}]})
        assert exc_info.value.field == "series.0.y"

    def test_not_a_mapping(self) -> None:
        with pytest.raises(ValidationError):
            validate_model(ChartDescription, ["options"])


class TestDocumentOptions:
    def test_extra_keys_are_kept(self) -> None:
        opts = validate_model(DocumentOptions, {"path": "a.png", "auto_legend": True})
        assert opts.auto_legend is True
        assert opts.model_extra == {"path": "a.png"}

    def test_auto_legend_is_strict(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_model(DocumentOptions, {"auto_legend": "yes"})
        assert exc_info.value.field == "auto_legend"

    def test_script_path_must_be_text(self) -> None:
        with pytest.raises(ValidationError):
            validate_model(DocumentOptions, {"script_path": 3})
