"""Node: the host UI tree snapshot consumed by a trace pass.

The host fills these in after its layout pass. The tracer only reads them;
``enabled`` and ``alpha`` are written by TraceContainer while it covers the
content.
"""

from __future__ import annotations

import enum
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from shimmertrace.geometry.path import Path
from shimmertrace.geometry.rect import Insets, Rect


class Visibility(enum.Enum):
    VISIBLE = "visible"
    HIDDEN = "hidden"
    COLLAPSED = "collapsed"


class LayoutDirection(enum.Enum):
    LTR = "ltr"
    RTL = "rtl"


class Capability(enum.Enum):
    CUSTOM_TRACEABLE = "custom_traceable"
    CONTAINER = "container"
    CHECKBOX = "checkbox"
    RADIO_BUTTON = "radio_button"
    BUTTON = "button"
    MULTILINE_TEXT = "multiline_text"
    GENERIC = "generic"


class HorizontalGravity(enum.Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    START = "start"
    END = "end"

    def absolute(self, direction: LayoutDirection) -> HorizontalGravity:
        """Resolve START/END against the layout direction."""
        rtl = direction is LayoutDirection.RTL
        if self is HorizontalGravity.START:
            return HorizontalGravity.RIGHT if rtl else HorizontalGravity.LEFT
        if self is HorizontalGravity.END:
            return HorizontalGravity.LEFT if rtl else HorizontalGravity.RIGHT
        return self


class VerticalGravity(enum.Enum):
    TOP = "top"
    CENTER = "center"
    BOTTOM = "bottom"


@dataclass(frozen=True)
class GlyphSize:
    """Intrinsic size of a checkbox / radio button glyph."""

    width: float
    height: float


@dataclass
class TextLayout:
    """Pre-computed line layout of a text-bearing node."""

    text: str
    # (start, end) character offsets of every wrapped line
    lines: list[tuple[int, int]] = field(default_factory=list)
    line_height: float = 0.0
    max_lines: int | None = None
    horizontal_gravity: HorizontalGravity = HorizontalGravity.START
    vertical_gravity: VerticalGravity = VerticalGravity.TOP

    @classmethod
    def from_lines(cls, lines: list[str], line_height: float, **kwargs) -> TextLayout:
        """Build a layout whose wrapped lines are already known."""
        spans: list[tuple[int, int]] = []
        pos = 0
        for i, line in enumerate(lines):
            end = pos + len(line) + (1 if i < len(lines) - 1 else 0)
            spans.append((pos, end))
            pos = end
        return cls(text="\n".join(lines), lines=spans, line_height=line_height, **kwargs)

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def effective_max_lines(self) -> int:
        return self.line_count if self.max_lines is None else self.max_lines

    def line_text(self, index: int) -> str:
        start, end = self.lines[index]
        return self.text[start:end]


@dataclass(eq=False)
class Node:
    """One laid-out UI node. Bounds are in the parent's local coordinate space."""

    id: str | int | None = None
    left: float = 0.0
    top: float = 0.0
    width: float = 0.0
    height: float = 0.0
    margin: Insets = field(default_factory=Insets)
    padding: Insets = field(default_factory=Insets)
    visibility: Visibility = Visibility.VISIBLE
    # None inherits the parent's direction; the tree root defaults to LTR
    layout_direction: LayoutDirection | None = None
    capability: Capability | None = None
    children: list[Node] = field(default_factory=list)
    text: TextLayout | None = None
    glyph: GlyphSize | None = None
    enabled: bool = True
    alpha: float = 1.0
    parent: Node | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        for child in self.children:
            child.parent = self

    def add_child(self, child: Node) -> Node:
        child.parent = self
        self.children.append(child)
        return child

    @property
    def bounds(self) -> Rect:
        return Rect.from_size(self.left, self.top, self.width, self.height)

    @property
    def is_visible(self) -> bool:
        return self.visibility is Visibility.VISIBLE

    @property
    def resolved_layout_direction(self) -> LayoutDirection:
        node: Node | None = self
        while node is not None:
            if node.layout_direction is not None:
                return node.layout_direction
            node = node.parent
        return LayoutDirection.LTR

    @property
    def is_rtl(self) -> bool:
        return self.resolved_layout_direction is LayoutDirection.RTL

    def walk(self) -> Iterator[Node]:
        """Depth-first, document order, self first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def find(self, node_id: str | int) -> Node | None:
        for node in self.walk():
            if node.id == node_id:
                return node
        return None


@runtime_checkable
class CustomTraceable(Protocol):
    """A node that supplies its own silhouette in local coordinates (origin at its top-left)."""

    def trace(self) -> Path: ...


@dataclass(eq=False)
class TraceableNode(Node):
    """Node whose silhouette comes from ``silhouette`` instead of the default heuristics."""

    silhouette: Callable[[], Path] | None = field(default=None, repr=False)

    def trace(self) -> Path:
        if self.silhouette is None:
            return Path()
        return self.silhouette()


def classify(node: Node) -> Capability:
    """Resolve which geometry variant applies to ``node``. CustomTraceable always wins."""
    if isinstance(node, CustomTraceable):
        return Capability.CUSTOM_TRACEABLE
    if node.capability is not None and node.capability is not Capability.CUSTOM_TRACEABLE:
        return node.capability
    if node.children:
        return Capability.CONTAINER
    if node.text is not None:
        return Capability.MULTILINE_TEXT
    return Capability.GENERIC
