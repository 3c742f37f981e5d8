"""Host node tree model consumed by the tracer."""

from shimmertrace.model.node import (
    Capability,
    CustomTraceable,
    GlyphSize,
    HorizontalGravity,
    LayoutDirection,
    Node,
    TextLayout,
    TraceableNode,
    VerticalGravity,
    Visibility,
    classify,
)
from shimmertrace.model.text import FixedAdvanceMeasurer, PillowTextMeasurer, TextMeasurer

__all__ = [
    "Capability",
    "CustomTraceable",
    "GlyphSize",
    "HorizontalGravity",
    "LayoutDirection",
    "Node",
    "TextLayout",
    "TraceableNode",
    "VerticalGravity",
    "Visibility",
    "classify",
    "FixedAdvanceMeasurer",
    "PillowTextMeasurer",
    "TextMeasurer",
]
