"""Tests for sketch_icon.geometry module."""

import pytest
from pathlib import Path
from xml.etree import ElementTree as ET

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sketch_icon.errors import (
    InvalidViewboxError,
    MissingViewboxError,
    UnsupportedTransformError,
)
from sketch_icon.geometry import (
    TransformContext,
    Viewport,
    apply_transform,
    parse_transform,
    parse_viewbox,
    resolve_viewport,
)


def svg_root(**attrs) -> ET.Element:
    return ET.Element("svg", attrs)


class TestTransformContext:
    """Tests for TransformContext dataclass."""

    def test_defaults_are_identity(self):
        context = TransformContext()
        assert context.translate == (0.0, 0.0)
        assert context.scale == (1.0, 1.0)
        assert context.apply(3, 4) == (3, 4)

    def test_translate_uses_current_scale(self):
        context = TransformContext(translate=(1, 2), scale=(2, 3))
        assert context.translated(5, 5).translate == (11, 17)

    def test_scale_keeps_translation(self):
        context = TransformContext(translate=(1, 2), scale=(2, 3)).scaled(2, -1)
        assert context.translate == (1, 2)
        assert context.scale == (4, -3)

    def test_updates_return_new_values(self):
        parent = TransformContext()
        child = parent.translated(1, 1).scaled(2, 2)
        assert parent == TransformContext()
        assert child != parent

    def test_nested_translate_is_scaled(self):
        # translate(10,0) scale(2,1) followed by a nested translate(5,0)
        context = TransformContext().translated(10, 0).scaled(2, 1)
        nested = context.translated(5, 0)
        assert nested.translate == (20, 0)
        assert nested.scale == (2, 1)

    @pytest.mark.parametrize(
        "scale,expected",
        [
            ((1, 1), False),
            ((-1, 1), True),
            ((1, -1), True),
            ((-1, -1), False),
        ],
    )
    def test_is_reflecting(self, scale, expected):
        assert TransformContext(scale=scale).is_reflecting is expected

    def test_apply(self):
        context = TransformContext(translate=(10, 20), scale=(2, -1))
        assert context.apply(3, 4) == (16, 16)


class TestParseViewbox:
    """Tests for parse_viewbox function."""

    def test_space_separated(self):
        assert parse_viewbox("0 -1 10.5 20") == (0, -1, 10.5, 20)

    def test_comma_separated(self):
        assert parse_viewbox("0,0, 10,20") == (0, 0, 10, 20)

    @pytest.mark.parametrize("value", ["0 0 10", "0 0 10 10 10", "a b c d"])
    def test_invalid(self, value):
        with pytest.raises(InvalidViewboxError):
            parse_viewbox(value)


class TestResolveViewport:
    """Tests for resolve_viewport function."""

    def test_default_padding(self):
        viewport = resolve_viewport(svg_root(viewBox="0 0 102 102"))
        assert viewport.width == pytest.approx(100)
        assert viewport.height == pytest.approx(100)
        assert viewport.x == pytest.approx(-1)
        assert viewport.y == pytest.approx(-1)

    def test_zero_padding(self):
        viewport = resolve_viewport(svg_root(viewBox="5 6 10 20"), 0)
        assert viewport == Viewport(x=5, y=6, width=10, height=20)

    def test_custom_padding(self):
        viewport = resolve_viewport(svg_root(viewBox="10 20 120 60"), 0.1)
        assert viewport.width == pytest.approx(100)
        assert viewport.height == pytest.approx(50)
        assert viewport.x == pytest.approx(0)
        assert viewport.y == pytest.approx(15)

    def test_origin_context(self):
        viewport = resolve_viewport(svg_root(viewBox="5 6 10 20"), 0)
        context = viewport.origin_context()
        assert context.translate == (5, 6)
        assert context.scale == (1, 1)

    def test_missing_viewbox(self):
        with pytest.raises(MissingViewboxError):
            resolve_viewport(svg_root())

    def test_blank_viewbox(self):
        with pytest.raises(MissingViewboxError):
            resolve_viewport(svg_root(viewBox="  "))

    @pytest.mark.parametrize(
        "value",
        ["0 0 10", "0 0 ten 10", "0 0 inf 10", "nan 0 10 10", "0 0 0 10", "0 0 10 -5"],
    )
    def test_invalid_viewbox(self, value):
        with pytest.raises(InvalidViewboxError):
            resolve_viewport(svg_root(viewBox=value))


class TestParseTransform:
    """Tests for parse_transform function."""

    def test_single_translate(self):
        assert parse_transform("translate(1,2)") == [("translate", (1, 2))]

    def test_sequence_keeps_order(self):
        assert parse_transform("scale(2, 3) translate(-1.5,4)") == [
            ("scale", (2, 3)),
            ("translate", (-1.5, 4)),
        ]

    def test_comma_between_commands(self):
        assert parse_transform("translate(1,2), scale(2,2)") == [
            ("translate", (1, 2)),
            ("scale", (2, 2)),
        ]

    def test_empty(self):
        assert parse_transform("   ") == []

    @pytest.mark.parametrize(
        "value",
        ["rotate(45)", "matrix(1,0,0,1,0,0)", "skewX(10)"],
    )
    def test_unsupported_command(self, value):
        with pytest.raises(UnsupportedTransformError, match="not supported"):
            parse_transform(value)

    @pytest.mark.parametrize(
        "value",
        ["translate(1)", "scale(1,2,3)", "translate(1 2)", "scale(a,b)"],
    )
    def test_malformed_arguments(self, value):
        with pytest.raises(UnsupportedTransformError, match="invalid"):
            parse_transform(value)

    def test_trailing_garbage(self):
        with pytest.raises(UnsupportedTransformError):
            parse_transform("translate(1,2) oops")


class TestApplyTransform:
    """Tests for apply_transform function."""

    def test_translate_then_scale(self):
        context = apply_transform(TransformContext(), "translate(1,1) scale(2,2)")
        assert context.translate == (1, 1)
        assert context.scale == (2, 2)

    def test_scale_then_translate(self):
        context = apply_transform(TransformContext(), "scale(2,2) translate(1,1)")
        assert context.translate == (2, 2)
        assert context.scale == (2, 2)

    def test_composes_with_parent(self):
        parent = apply_transform(TransformContext(), "translate(10,0) scale(2,1)")
        child = apply_transform(parent, "translate(5,0)")
        assert child.translate == (20, 0)
        assert child.scale == (2, 1)
        assert parent.translate == (10, 0)

    def test_rotate_rejected(self):
        with pytest.raises(UnsupportedTransformError):
            apply_transform(TransformContext(), "translate(1,1) rotate(90)")
