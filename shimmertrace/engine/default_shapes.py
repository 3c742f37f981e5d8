"""Default silhouette shapes for leaf nodes that do not trace themselves.

Checkbox      → rounded square over the glyph + text lines for the label
Radio button  → circle over the glyph + text lines for the label
Button        → inset rounded rect over the whole node
Text          → one inset rounded rect per visible wrapped line
Anything else → inset rounded rect over the whole node
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from shimmertrace.engine.config import TraceConfig
from shimmertrace.engine.delegate import ExcludePredicate
from shimmertrace.engine.registry import ShapeRegistry, get_registry, shape
from shimmertrace.geometry.path import Path
from shimmertrace.geometry.rect import PointF, Rect
from shimmertrace.model.node import (
    Capability,
    HorizontalGravity,
    Node,
    VerticalGravity,
    classify,
)
from shimmertrace.model.text import PillowTextMeasurer, TextMeasurer

logger = logging.getLogger(__name__)


@dataclass
class ShapeContext:
    """Everything a shape function needs for one node."""

    node: Node
    path: Path
    offset: PointF
    config: TraceConfig
    measurer: TextMeasurer

    @property
    def box(self) -> Rect:
        """The node's full box at its absolute position."""
        return Rect.from_size(self.offset.x, self.offset.y, self.node.width, self.node.height)


def _text_region(ctx: ShapeContext) -> Rect:
    """Node box minus the leading control glyph, if any."""
    box = ctx.box
    glyph = ctx.node.glyph
    if glyph is None:
        return box
    if ctx.node.is_rtl:
        return Rect(box.left, box.top, box.right - glyph.width, box.bottom)
    return Rect(box.left + glyph.width, box.top, box.right, box.bottom)


def _add_text_lines(ctx: ShapeContext) -> int:
    """Append one rounded rect per visible text line. Returns the number of lines emitted."""
    node = ctx.node
    layout = node.text
    if layout is None:
        return 0

    line_height = layout.line_height
    if line_height <= 0:
        logger.debug("Node %r has no line height, skipping text", node.id)
        return 0

    region = _text_region(ctx)
    space = ctx.config.space
    visible_lines = min(
        layout.effective_max_lines,
        layout.line_count,
        math.floor(region.height / line_height),
    )
    if visible_lines <= 0:
        return 0

    leftover_height = node.height - line_height * visible_lines
    if layout.vertical_gravity is VerticalGravity.CENTER:
        y_offset = leftover_height / 2
    elif layout.vertical_gravity is VerticalGravity.BOTTOM:
        y_offset = leftover_height
    else:
        y_offset = 0.0

    gravity = layout.horizontal_gravity.absolute(node.resolved_layout_direction)
    emitted = 0
    for line in range(visible_lines):
        line_width = ctx.measurer.measure(layout.line_text(line))
        leftover_width = region.width - line_width
        if gravity is HorizontalGravity.CENTER:
            x_offset = leftover_width / 2
        elif gravity is HorizontalGravity.RIGHT:
            x_offset = leftover_width
        else:
            x_offset = 0.0

        line_offset = line * line_height
        line_bottom = region.top + y_offset + line_height - space + line_offset

        # Only triggers for host layouts whose text region is taller than the node box
        overflow = line_bottom - (region.top + node.height)
        if overflow > line_height * ctx.config.overflow_line_ratio:
            break

        rect = Rect(
            region.left + x_offset + space,
            region.top + y_offset + line_offset + space,
            region.left + x_offset + line_width - space,
            line_bottom,
        )
        ctx.path.add_round_rect(rect, ctx.config.corner_radius)
        emitted += 1
    return emitted


def _add_simple_rect(ctx: ShapeContext) -> None:
    node = ctx.node
    space = ctx.config.space
    rect = ctx.box.inset(space, space)
    radius = min(node.width, node.height) * ctx.config.simple_radius_ratio
    ctx.path.add_round_rect(rect, radius)


@shape(Capability.CHECKBOX, description="Rounded square over the glyph plus label lines")
def checkbox_shape(ctx: ShapeContext) -> None:
    node = ctx.node
    glyph = node.glyph
    if glyph is not None:
        cfg = ctx.config
        offset_x = glyph.width * cfg.checkbox_offset_ratio
        size_x = glyph.width * cfg.checkbox_size_ratio
        size_y = glyph.height * cfg.checkbox_size_ratio
        box = ctx.box
        center_y = box.top + node.height / 2

        if node.is_rtl:
            left = box.right - offset_x - size_x
        else:
            left = box.left + offset_x
        rect = Rect(left, center_y - size_y / 2, left + size_x, center_y + size_y / 2)
        ctx.path.add_round_rect(rect, cfg.corner_radius)

    _add_text_lines(ctx)


@shape(Capability.RADIO_BUTTON, description="Circle over the glyph plus label lines")
def radio_button_shape(ctx: ShapeContext) -> None:
    node = ctx.node
    glyph = node.glyph
    if glyph is not None:
        box = ctx.box
        if node.is_rtl:
            center_x = box.right - glyph.width / 2
        else:
            center_x = box.left + glyph.width / 2
        center_y = box.top + node.height / 2
        ctx.path.add_circle(center_x, center_y, ctx.config.radio_radius_ratio * glyph.width)

    _add_text_lines(ctx)


@shape(Capability.BUTTON, description="Inset rounded rect")
def button_shape(ctx: ShapeContext) -> None:
    _add_simple_rect(ctx)


@shape(Capability.MULTILINE_TEXT, description="One rounded rect per visible text line")
def text_shape(ctx: ShapeContext) -> None:
    _add_text_lines(ctx)


@shape(Capability.GENERIC, description="Inset rounded rect")
def generic_shape(ctx: ShapeContext) -> None:
    _add_simple_rect(ctx)


class DefaultShapeStrategy:
    """Fallback strategy for leaf nodes. Always reports the node as handled."""

    def __init__(
        self,
        config: TraceConfig | None = None,
        measurer: TextMeasurer | None = None,
        registry: ShapeRegistry | None = None,
    ) -> None:
        self.config = config or TraceConfig()
        self.measurer = measurer or PillowTextMeasurer()
        self.registry = registry or get_registry()

    def handle(self, node: Node, path: Path, exclude: ExcludePredicate, offset: PointF) -> bool:
        if not node.is_visible:
            return True

        capability = classify(node)
        if not self.registry.has(capability):
            # Direct calls with a container or custom node; the tracer never routes those here
            capability = Capability.GENERIC

        spec = self.registry.get(capability)
        spec.fn(ShapeContext(node, path, offset, self.config, self.measurer))
        return True
