"""Shared test fixtures."""

from __future__ import annotations

import pytest

from shimmertrace.engine.tracer import SilhouetteTracer
from shimmertrace.geometry.path import Path
from shimmertrace.geometry.rect import Rect
from shimmertrace.model.node import (
    Capability,
    GlyphSize,
    LayoutDirection,
    Node,
    TextLayout,
    TraceableNode,
)
from shimmertrace.model.text import FixedAdvanceMeasurer

# Every character is 8px wide, so line widths are easy to reason about
CHAR_ADVANCE = 8.0
LINE_HEIGHT = 20.0


class FakeClock:
    """Manually advanced time source (seconds)."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now


class Recorder:
    """Minimal shimmer subscriber that counts repaints."""

    def __init__(self) -> None:
        self.invalidations = 0

    def invalidate(self) -> None:
        self.invalidations += 1


def make_card() -> Node:
    """A 300×120 card: title text, a button and a checkbox row."""
    return Node(
        id="card",
        width=300,
        height=120,
        children=[
            Node(
                id="title",
                left=10,
                top=10,
                width=200,
                height=20,
                text=TextLayout.from_lines(["Loading title"], LINE_HEIGHT),
            ),
            Node(id="action", left=10, top=40, width=120, height=40, capability=Capability.BUTTON),
            Node(
                id="agree",
                left=10,
                top=85,
                width=200,
                height=30,
                capability=Capability.CHECKBOX,
                glyph=GlyphSize(32, 32),
                text=TextLayout.from_lines(["I agree"], LINE_HEIGHT),
            ),
        ],
    )


def make_rtl_custom() -> Node:
    """RTL parent (100 wide) with a custom-traced child at left=10 drawing a 40×20 rect."""
    return Node(
        id="row",
        width=100,
        height=50,
        layout_direction=LayoutDirection.RTL,
        children=[
            TraceableNode(
                id="badge",
                left=10,
                top=0,
                width=40,
                height=20,
                silhouette=lambda: Path().add_rect(Rect(0, 0, 40, 20)),
            )
        ],
    )


@pytest.fixture
def measurer() -> FixedAdvanceMeasurer:
    return FixedAdvanceMeasurer(CHAR_ADVANCE)


@pytest.fixture
def tracer(measurer) -> SilhouetteTracer:
    return SilhouetteTracer(measurer=measurer)


@pytest.fixture
def card() -> Node:
    return make_card()


@pytest.fixture
def rtl_custom() -> Node:
    return make_rtl_custom()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
