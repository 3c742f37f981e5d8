"""Tests for the default leaf shapes."""

from __future__ import annotations

import pytest

from shimmertrace.engine.config import TraceConfig
from shimmertrace.engine.default_shapes import DefaultShapeStrategy
from shimmertrace.engine.delegate import as_predicate
from shimmertrace.geometry.path import ContourKind, Path
from shimmertrace.geometry.rect import PointF, Rect
from shimmertrace.model.node import (
    Capability,
    GlyphSize,
    HorizontalGravity,
    LayoutDirection,
    Node,
    TextLayout,
    VerticalGravity,
    Visibility,
)


def _shapes(result):
    """Contours appended by shapes, i.e. everything except bounds reservations."""
    return [c for c in result.path.contours if c.kind is not ContourKind.RECT]


def _text_node(lines, height, width=200.0, **layout):
    return Node(
        width=width,
        height=height,
        text=TextLayout.from_lines(lines, 20.0, **layout),
    )


class TestTextLines:
    def test_max_lines_caps_output(self, tracer):
        node = _text_node(["hello", "world", "again"], 60, max_lines=2)
        shapes = _shapes(tracer.trace(node))
        assert len(shapes) == 2
        assert shapes[0].bounds == Rect(2.5, 2.5, 37.5, 17.5)
        assert shapes[1].bounds == Rect(2.5, 22.5, 37.5, 37.5)

    def test_all_lines_when_they_fit(self, tracer):
        node = _text_node(["hello", "world", "again"], 60)
        assert len(_shapes(tracer.trace(node))) == 3

    def test_short_node_fits_one_line(self, tracer):
        node = _text_node(["hello", "world"], 29)
        assert len(_shapes(tracer.trace(node))) == 1

    def test_node_shorter_than_a_line(self, tracer):
        node = _text_node(["hello", "world"], 19)
        assert _shapes(tracer.trace(node)) == []

    def test_line_width_follows_text(self, tracer):
        node = _text_node(["a", "abcdefgh"], 40)
        first, second = _shapes(tracer.trace(node))
        assert first.bounds.width < second.bounds.width
        assert second.bounds.width == pytest.approx(8 * 8 - 5)

    def test_center_gravity(self, tracer):
        node = _text_node(
            ["abcd"], 60,
            horizontal_gravity=HorizontalGravity.CENTER,
            vertical_gravity=VerticalGravity.CENTER,
        )
        (line,) = _shapes(tracer.trace(node))
        assert line.bounds == Rect(86.5, 22.5, 113.5, 37.5)

    def test_end_gravity_ltr(self, tracer):
        node = _text_node(["abcd"], 20, horizontal_gravity=HorizontalGravity.END)
        (line,) = _shapes(tracer.trace(node))
        assert line.bounds == Rect(170.5, 2.5, 197.5, 17.5)

    def test_start_gravity_rtl(self, tracer):
        node = _text_node(["abcd"], 20)
        node.layout_direction = LayoutDirection.RTL
        (line,) = _shapes(tracer.trace(node))
        assert line.bounds == Rect(170.5, 2.5, 197.5, 17.5)

    def test_bottom_gravity(self, tracer):
        node = _text_node(["abcd"], 60, vertical_gravity=VerticalGravity.BOTTOM)
        (line,) = _shapes(tracer.trace(node))
        assert line.bounds.top == pytest.approx(42.5)

    def test_zero_line_height(self, tracer):
        node = Node(width=200, height=40, text=TextLayout("abc", [(0, 3)], line_height=0))
        assert _shapes(tracer.trace(node)) == []

    def test_line_corner_radius(self, tracer):
        (line,) = _shapes(tracer.trace(_text_node(["abcd"], 20)))
        assert line.radius == TraceConfig().corner_radius


class TestCheckbox:
    def _node(self, **kw):
        return Node(
            width=200,
            height=40,
            capability=Capability.CHECKBOX,
            glyph=GlyphSize(32, 32),
            text=TextLayout.from_lines(["Accept"], 20.0),
            **kw,
        )

    def test_ltr(self, tracer):
        box, label = _shapes(tracer.trace(self._node()))
        assert box.kind is ContourKind.ROUND_RECT
        assert box.bounds == Rect(8, 12, 24, 28)
        assert label.bounds == Rect(34.5, 2.5, 77.5, 17.5)

    def test_rtl_mirrors_glyph_and_label(self, tracer):
        box, label = _shapes(tracer.trace(self._node(layout_direction=LayoutDirection.RTL)))
        assert box.bounds == Rect(176, 12, 192, 28)
        assert label.bounds == Rect(122.5, 2.5, 165.5, 17.5)

    def test_without_glyph_only_label(self, tracer):
        node = self._node()
        node.glyph = None
        (label,) = _shapes(tracer.trace(node))
        assert label.bounds == Rect(2.5, 2.5, 45.5, 17.5)


class TestRadioButton:
    def test_circle_over_glyph(self, tracer):
        node = Node(width=200, height=40, capability=Capability.RADIO_BUTTON, glyph=GlyphSize(30, 30))
        (circle,) = _shapes(tracer.trace(node))
        assert circle.kind is ContourKind.CIRCLE
        assert circle.radius == pytest.approx(9.9)
        assert circle.bounds.center.x == pytest.approx(15.0)
        assert circle.bounds.center.y == pytest.approx(20.0)

    def test_rtl_circle_on_the_right(self, tracer):
        node = Node(
            width=200,
            height=40,
            capability=Capability.RADIO_BUTTON,
            glyph=GlyphSize(30, 30),
            layout_direction=LayoutDirection.RTL,
        )
        (circle,) = _shapes(tracer.trace(node))
        assert circle.bounds.center.x == pytest.approx(185.0)

    def test_without_glyph_or_text(self, tracer):
        node = Node(width=200, height=40, capability=Capability.RADIO_BUTTON)
        assert _shapes(tracer.trace(node)) == []


class TestStrategy:
    def test_always_handles(self, measurer):
        strategy = DefaultShapeStrategy(measurer=measurer)
        path = Path()
        assert strategy.handle(Node(width=10, height=10), path, as_predicate(None), PointF())
        assert len(path.contours) == 1

    def test_hidden_node_handled_without_shape(self, measurer):
        strategy = DefaultShapeStrategy(measurer=measurer)
        path = Path()
        node = Node(width=10, height=10, visibility=Visibility.HIDDEN)
        assert strategy.handle(node, path, as_predicate(None), PointF())
        assert path.is_empty

    def test_offset_applied(self, measurer):
        strategy = DefaultShapeStrategy(measurer=measurer)
        path = Path()
        strategy.handle(Node(width=20, height=20), path, as_predicate(None), PointF(100, 50))
        assert path.compute_bounds() == Rect(102.5, 52.5, 117.5, 67.5)

    def test_direct_container_call_gets_plain_shape(self, measurer):
        strategy = DefaultShapeStrategy(measurer=measurer)
        path = Path()
        node = Node(width=20, height=20, capability=Capability.CONTAINER)
        assert strategy.handle(node, path, as_predicate(None), PointF())
        (contour,) = path.contours
        assert contour.kind is ContourKind.ROUND_RECT

    def test_traced_empty_container_draws_nothing(self, tracer):
        node = Node(width=20, height=20, capability=Capability.CONTAINER)
        result = tracer.trace(node)
        assert result.path.area == 0.0
        assert result.bounds == Rect(0, 0, 20, 20)

    def test_custom_space(self, measurer):
        strategy = DefaultShapeStrategy(TraceConfig(space=0.0), measurer=measurer)
        path = Path()
        strategy.handle(Node(width=20, height=20), path, as_predicate(None), PointF())
        assert path.compute_bounds() == Rect(0, 0, 20, 20)
