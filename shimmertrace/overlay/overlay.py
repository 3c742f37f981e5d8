"""Overlay: the renderable sink for a traced silhouette.

Holds the traced path, its paints and (while shimmering) a subscription to a
ShimmerSynchronizer. Each frame the host draws the silhouette fill, then the
shimmer band moved by the shared progress and clipped to the silhouette.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable

from PIL import Image

from shimmertrace.animation.synchronizer import ShimmerSynchronizer
from shimmertrace.config import Settings, settings
from shimmertrace.engine.delegate import Exclusion, ShapeDelegate
from shimmertrace.engine.tracer import SilhouetteTracer, TraceResult
from shimmertrace.geometry.path import Op, Path
from shimmertrace.geometry.rect import EMPTY_RECT, Rect
from shimmertrace.model.node import Node
from shimmertrace.overlay.raster import Color, compose, parse_color, rasterize, shimmer_gradient

logger = logging.getLogger(__name__)


class Overlay:
    """A silhouette placeholder for one node subtree."""

    def __init__(
        self,
        config: Settings | None = None,
        tracer: SilhouetteTracer | None = None,
        on_invalidate: Callable[[Overlay], None] | None = None,
        time_source: Callable[[], float] | None = None,
    ) -> None:
        config = config or settings
        self.config = config
        self.tracer = tracer or SilhouetteTracer()
        self.on_invalidate = on_invalidate
        self._time_source = time_source

        self.fill_color: Color = parse_color(config.silhouette_color)
        self.shimmer_color: Color = parse_color(config.shimmer_color)
        self.shimmer_alpha = config.shimmer_alpha
        self.shimmer_width = config.shimmer_width

        self.result: TraceResult | None = None
        self.bounds: Rect = EMPTY_RECT
        self._band = Path()

        self.synchronizer: ShimmerSynchronizer | None = None
        self._owns_synchronizer = False
        self._shimmering = False

        self.alpha = 1.0
        self.frame_version = 0

    # ── Tracing ──

    @property
    def path(self) -> Path | None:
        return self.result.path if self.result is not None else None

    def of(
        self,
        root: Node,
        exclude: Exclusion = None,
        delegate: ShapeDelegate | None = None,
    ) -> Overlay:
        """Trace ``root``; any previous silhouette is discarded."""
        self.result = self.tracer.trace(root, exclude, delegate)
        self.bounds = self.result.normalized_bounds

        self._band = Path().add_rect(
            Rect(0.0, 0.0, self.bounds.width * self.shimmer_width, self.bounds.height)
        )
        logger.debug("Overlay bounds: %s", self.bounds.as_tuple())
        self.invalidate()
        return self

    # ── Paint ──

    def colored(self, color: str | tuple[int, ...]) -> Overlay:
        self.fill_color = parse_color(color)
        self.invalidate()
        return self

    def shimmer_colored(self, color: str | tuple[int, ...]) -> Overlay:
        self.shimmer_color = parse_color(color)
        self.invalidate()
        return self

    # ── Shimmer ──

    def sync_with(self, synchronizer: ShimmerSynchronizer | None) -> Overlay:
        """Share ``synchronizer`` with other overlays so they shimmer in unison."""
        if synchronizer is self.synchronizer:
            return self
        if self._shimmering and self.synchronizer is not None:
            self.synchronizer.unregister(self)
        self.synchronizer = synchronizer
        self._owns_synchronizer = False
        if self._shimmering and synchronizer is not None:
            synchronizer.register(self)
        return self

    @property
    def is_shimmering(self) -> bool:
        return self._shimmering

    @property
    def shimmer_progress(self) -> int:
        if not self._shimmering or self.synchronizer is None:
            return 0
        return self.synchronizer.progress

    def start_shimmer(self, period_ms: int | None = None) -> Overlay:
        """Start shimmering from progress 0.

        Without a shared synchronizer a private one is created, sized to
        ``period_ms`` (default from settings) and rebuilt when the period changes.
        A shared synchronizer keeps its phase.
        """
        period_ms = period_ms or self.config.shimmer_period_ms
        sync = self.synchronizer
        if sync is None or (self._owns_synchronizer and sync.period_ms != period_ms):
            if sync is not None:
                sync.unregister(self)
            sync = ShimmerSynchronizer(period_ms, time_source=self._time_source)
            self.synchronizer = sync
            self._owns_synchronizer = True

        self._shimmering = True
        sync.register(self)
        if self._owns_synchronizer:
            sync.restart()
        self.invalidate()
        return self

    def stop_shimmer(self) -> None:
        if self.synchronizer is not None:
            self.synchronizer.unregister(self)
        self._shimmering = False
        self.invalidate()

    def invalidate(self) -> None:
        """Request a repaint from the host."""
        self.frame_version += 1
        if self.on_invalidate is not None:
            self.on_invalidate(self)

    def shimmer_path(self) -> Path | None:
        """The shimmer band at the current progress, clipped to the silhouette."""
        if not self._shimmering or self.result is None:
            return None
        shift = self.bounds.right * (self.shimmer_progress / 100)
        return self._band.translated(shift, 0.0).op(self.result.path, Op.INTERSECT)

    # ── Reference rendering ──

    def render(self, scale: float = 1.0) -> Image.Image:
        """Rasterize the current frame with the reference backend."""
        if self.result is None:
            return Image.new("RGBA", (0, 0))

        trace_bounds = self.result.bounds
        width = max(0, math.ceil(trace_bounds.right * scale))
        height = max(0, math.ceil(trace_bounds.bottom * scale))

        fill = rasterize(self.result.path, width, height, scale)
        shimmer = self.shimmer_path()
        shimmer_mask = rasterize(shimmer, width, height, scale) if shimmer is not None else None
        return compose(
            fill,
            self.fill_color,
            shimmer_mask,
            self.shimmer_color,
            self.shimmer_alpha,
            shimmer_gradient(width, self.bounds.width * scale),
            opacity=self.alpha,
        )
