"""Tests for the PlotDocument base: lifecycle, buckets, and rendering."""

from __future__ import annotations

from pathlib import Path

import pytest

from rplotctl.config.models import RenderConfig
from rplotctl.domain.commands import GlobalStyle, Output
from rplotctl.domain.errors import StateError, ValidationError
from rplotctl.services.document import (
    CATEGORY_ORDER,
    Category,
    DocumentState,
    PlotDocument,
    check_numbers,
    check_options,
)

OPTIONS = {"path": "out.png", "type": "png"}


class TestCategoryOrder:
    def test_fixed_order(self) -> None:
        assert [c.value for c in CATEGORY_ORDER] == [
            "output",
            "global_style",
            "plot_frame",
            "reference_lines",
            "lines",
            "legends",
            "titles",
            "axes",
            "text_annotations",
            "points",
        ]


class TestHelpers:
    def test_check_numbers_copies(self) -> None:
        values = (1, 2.5)
        assert check_numbers(values, "y") == [1, 2.5]

    @pytest.mark.parametrize("values", [[], None, "123", [1, True], [1, "2"]])
    def test_check_numbers_rejects(self, values: object) -> None:
        with pytest.raises(ValidationError) as exc_info:
            check_numbers(values, "y")
        assert exc_info.value.field == "y"

    def test_check_options(self) -> None:
        original = {"a": 1}
        copied = check_options(original)
        assert copied == original
        assert copied is not original
        assert check_options(None) == {}

    def test_check_options_rejects_non_mapping(self) -> None:
        with pytest.raises(ValidationError):
            check_options(["a"])


class TestConstruction:
    def test_seeds_output_and_style(self) -> None:
        doc = PlotDocument(OPTIONS)
        assert doc.state is DocumentState.EMPTY
        [output] = doc.commands(Category.OUTPUT)
        [style] = doc.commands(Category.GLOBAL_STYLE)
        assert isinstance(output, Output)
        assert isinstance(style, GlobalStyle)
        assert doc.commands(Category.POINTS) == []

    def test_invalid_output_options(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            PlotDocument({"path": "out.gif", "type": "gif"})
        assert exc_info.value.field == "type"

    def test_invalid_style_options(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            PlotDocument({**OPTIONS, "margin": [1, 2, 3]})
        assert exc_info.value.field == "margin"

    def test_options_must_be_mapping(self) -> None:
        with pytest.raises(ValidationError):
            PlotDocument("out.png")  # type: ignore[arg-type]

    def test_default_render_paths(self) -> None:
        doc = PlotDocument(OPTIONS)
        assert doc.script_path == Path("/tmp/r-tmp-plot")
        assert doc.interpreter_path == "R"

    def test_render_config_paths(self) -> None:
        config = RenderConfig(script_path="/work/plot.R", interpreter_path="/usr/bin/R")
        doc = PlotDocument(OPTIONS, render_config=config)
        assert doc.script_path == Path("/work/plot.R")
        assert doc.interpreter_path == "/usr/bin/R"

    def test_options_override_render_config(self) -> None:
        config = RenderConfig(script_path="/work/plot.R")
        doc = PlotDocument(
            {**OPTIONS, "script_path": "/other.R", "interpreter_path": "Rscript"},
            render_config=config,
        )
        assert doc.script_path == Path("/other.R")
        assert doc.interpreter_path == "Rscript"

    def test_options_property_is_a_copy(self) -> None:
        doc = PlotDocument(OPTIONS)
        doc.options["path"] = "changed.png"
        assert doc.options["path"] == "out.png"


class TestAccumulation:
    def test_add_moves_to_accumulating(self) -> None:
        doc = PlotDocument(OPTIONS)
        doc.add_title("top", "Hello")
        assert doc.state is DocumentState.ACCUMULATING
        assert len(doc.commands(Category.TITLES)) == 1

    def test_failed_add_leaves_document_untouched(self) -> None:
        doc = PlotDocument(OPTIONS)
        with pytest.raises(ValidationError):
            doc.add_title("middle", "Hello")
        with pytest.raises(ValidationError):
            doc.add_series([1, "two"])
        assert doc.state is DocumentState.EMPTY
        assert doc.commands(Category.TITLES) == []
        assert doc.series == []

    def test_series_defaults(self) -> None:
        doc = PlotDocument(OPTIONS)
        doc.add_series([1, 2])
        doc.add_series([3, 4], {"name": "second", "color": "red"})
        first, second = doc.series
        assert first.name == "series[0]"
        assert first.options["color"] == "black"
        assert second.name == "second"
        assert second.options["color"] == "red"

    def test_unknown_series_option(self) -> None:
        doc = PlotDocument(OPTIONS)
        with pytest.raises(ValidationError, match="Unknown series option") as exc_info:
            doc.add_series([1], {"colour": "red"})
        assert exc_info.value.field == "colour"

    def test_series_name_must_be_text(self) -> None:
        doc = PlotDocument(OPTIONS)
        with pytest.raises(ValidationError) as exc_info:
            doc.add_series([1], {"name": 3})
        assert exc_info.value.field == "name"

    def test_series_options_are_copied(self) -> None:
        doc = PlotDocument(OPTIONS)
        options = {"color": "red"}
        doc.add_series([1], options)
        options["color"] = "blue"
        assert doc.series[0].options["color"] == "red"

    def test_every_decoration_lands_in_its_bucket(self) -> None:
        doc = PlotDocument(OPTIONS)
        doc.add_legend([0, 1], "a")
        doc.add_text("hi", [1, 1])
        doc.add_reference_line({"horizontal": 2})
        doc.add_line({"x": [0, 1], "y": [0, 1]})
        doc.add_axis({"location": "bottom", "ticks": [0, 1]})
        for category in (
            Category.LEGENDS,
            Category.TEXT_ANNOTATIONS,
            Category.REFERENCE_LINES,
            Category.LINES,
            Category.AXES,
        ):
            assert len(doc.commands(category)) == 1

    def test_decorations_keep_call_order(self) -> None:
        doc = PlotDocument(OPTIONS)
        doc.add_title("x", "first")
        doc.add_title("y", "second")
        first, second = doc.commands(Category.TITLES)
        assert first.encode() == "title(xlab='first')"
        assert second.encode() == "title(ylab='second')"


class TestRendering:
    def test_script_requires_series(self) -> None:
        doc = PlotDocument(OPTIONS)
        with pytest.raises(StateError, match="at least one series"):
            doc.build_script()

    def test_base_script(self) -> None:
        doc = PlotDocument(OPTIONS)
        doc.add_series([1, 2])
        doc.add_reference_line({"vertical": 1})
        assert doc.build_script() == "png('out.png')\npar()\nabline(v=1, pch='.')"

    def test_render_persists_then_executes(self, fake_renderer) -> None:
        doc = PlotDocument(OPTIONS, renderer=fake_renderer)
        doc.add_series([1, 2])
        assert doc.last_execution is None
        output = doc.render()
        assert output == "R output"
        assert doc.last_execution is not None
        assert doc.last_execution.returncode == 0
        assert fake_renderer.persisted == [("png('out.png')\npar()", Path("/tmp/r-tmp-plot"))]
        assert fake_renderer.executed == [("R", Path("/tmp/r-tmp-plot"))]
        assert doc.state is DocumentState.RENDERED

    def test_render_without_series_does_not_persist(self, fake_renderer) -> None:
        doc = PlotDocument(OPTIONS, renderer=fake_renderer)
        with pytest.raises(StateError):
            doc.render()
        assert fake_renderer.persisted == []
        assert doc.state is DocumentState.EMPTY

    def test_add_after_render(self, fake_renderer) -> None:
        doc = PlotDocument(OPTIONS, renderer=fake_renderer)
        doc.add_series([1, 2])
        doc.render()
        with pytest.raises(StateError, match="already been rendered"):
            doc.add_series([3, 4])
        with pytest.raises(StateError):
            doc.add_title("top", "late")

    def test_rerender_is_allowed(self, fake_renderer) -> None:
        doc = PlotDocument(OPTIONS, renderer=fake_renderer)
        doc.add_series([1, 2])
        doc.render()
        doc.render()
        assert len(fake_renderer.executed) == 2
        assert fake_renderer.persisted[0] == fake_renderer.persisted[1]
