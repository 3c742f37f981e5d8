"""SilhouetteTracer: walks a node tree and builds one composite silhouette path.

Per node, in document order:
  1. absolute origin = max(0, parent origin + local origin)
  2. reserve the node's full box in the bounds (CW + CCW rect pair, no fill)
  3. excluded → stop here, subtree included
  4. CustomTraceable → append its own path (mirrored for RTL); a leaf
  5. Container → recurse into children
  6. Leaf → override delegate first, then the default shapes
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from shimmertrace.engine.config import TraceConfig
from shimmertrace.engine.default_shapes import DefaultShapeStrategy
from shimmertrace.engine.delegate import ExcludePredicate, Exclusion, ShapeDelegate, as_predicate
from shimmertrace.geometry.path import Direction, Path
from shimmertrace.geometry.rect import Insets, PointF, Rect
from shimmertrace.model.node import Capability, Node, classify
from shimmertrace.model.text import TextMeasurer

logger = logging.getLogger(__name__)


@dataclass
class TraceResult:
    """Output of one trace pass."""

    path: Path
    bounds: Rect

    @property
    def size(self) -> tuple[float, float]:
        return (self.bounds.width, self.bounds.height)

    @property
    def normalized_bounds(self) -> Rect:
        """Bounds moved to the origin, i.e. the overlay's own drawing area."""
        return Rect(0.0, 0.0, self.bounds.width, self.bounds.height)


@dataclass
class _TracePass:
    """Transient per-pass state. Never outlives a single ``trace`` call."""

    path: Path
    exclude: ExcludePredicate
    delegate: ShapeDelegate | None
    visited: int = 0
    excluded: int = 0
    delegated: int = 0


class SilhouetteTracer:
    """Builds silhouettes from node trees."""

    def __init__(
        self,
        config: TraceConfig | None = None,
        measurer: TextMeasurer | None = None,
        default_strategy: DefaultShapeStrategy | None = None,
    ) -> None:
        self.config = config or TraceConfig()
        self.default_strategy = default_strategy or DefaultShapeStrategy(self.config, measurer)
        self.last_result: TraceResult | None = None

    def trace(
        self,
        root: Node,
        exclude: Exclusion = None,
        delegate: ShapeDelegate | None = None,
    ) -> TraceResult:
        """Trace ``root`` and everything below it into one composite path.

        Args:
            root: The trace target. Must be laid out already.
            exclude: Node ids to skip, or a predicate. Excluded nodes keep their
                box in the bounds but contribute no fill, nor does their subtree.
            delegate: Optional override consulted before the default shapes.

        Returns:
            The composite path and its bounding box. Replaces ``last_result``.
        """
        start = time.perf_counter()
        state = _TracePass(
            path=Path(arc_resolution=self.config.arc_resolution),
            exclude=as_predicate(exclude),
            delegate=delegate,
        )

        self._visit(root, state, self._initial_offset(root), parent_box=None)

        bounds = state.path.compute_bounds()
        result = TraceResult(path=state.path, bounds=bounds)
        self.last_result = result

        logger.debug(
            "Trace %r: %d nodes (%d excluded, %d delegated), bounds=%s in %.1fms",
            root.id,
            state.visited,
            state.excluded,
            state.delegated,
            bounds.as_tuple(),
            (time.perf_counter() - start) * 1000,
        )
        return result

    @staticmethod
    def _initial_offset(root: Node) -> PointF:
        """Cancel the root's placement inside its parent so the silhouette starts at (0, 0)."""
        parent_padding = root.parent.padding if root.parent is not None else Insets()
        x = -(root.margin.left + parent_padding.left)
        y = -(root.margin.top + parent_padding.top)
        if root.is_rtl:
            x -= root.left
        return PointF(x, y)

    def _visit(
        self,
        node: Node,
        state: _TracePass,
        offset: PointF,
        parent_box: Rect | None,
    ) -> None:
        if not node.is_visible:
            return

        left = max(0.0, offset.x + node.left)
        top = max(0.0, offset.y + node.top)
        box = Rect.from_size(left, top, node.width, node.height)
        state.visited += 1

        if self.config.reserve_bounds:
            state.path.add_rect(box, Direction.CW)
            state.path.add_rect(box, Direction.CCW)

        if state.exclude(node):
            state.excluded += 1
            return

        capability = classify(node)
        if capability is Capability.CUSTOM_TRACEABLE:
            self._append_custom(node, state.path, box, parent_box)
            return

        if capability is Capability.CONTAINER:
            origin = PointF(left, top)
            for child in node.children:
                self._visit(child, state, origin, parent_box=box)
            return

        origin = PointF(left, top)
        if state.delegate is not None and state.delegate.handle(
            node, state.path, state.exclude, origin
        ):
            state.delegated += 1
            return
        self.default_strategy.handle(node, state.path, state.exclude, origin)

    @staticmethod
    def _append_custom(node: Node, path: Path, box: Rect, parent_box: Rect | None) -> None:
        own = node.trace()
        own_width = own.compute_bounds().width
        left = box.left
        if node.is_rtl:
            # Mirror the node's leading edge within its parent, then hang the path off it
            if parent_box is not None:
                leading_edge = parent_box.right - node.left
            else:
                leading_edge = box.right
            left = leading_edge - own_width
        path.add_path(own, left, box.top)


def trace(
    root: Node,
    exclude: Exclusion = None,
    delegate: ShapeDelegate | None = None,
    config: TraceConfig | None = None,
    measurer: TextMeasurer | None = None,
) -> TraceResult:
    """One-shot convenience around ``SilhouetteTracer.trace``."""
    return SilhouetteTracer(config=config, measurer=measurer).trace(root, exclude, delegate)
