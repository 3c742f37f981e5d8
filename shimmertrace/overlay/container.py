"""TraceContainer: swaps one content subtree for its shimmering silhouette and back.

The container owns exactly one content node. Starting the shimmer traces the
content into an Overlay, disables interaction on every content leaf and
cross-fades content out / overlay in. Stopping restores interaction and fades
back, dropping the overlay when the fade ends.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from time import monotonic

from shimmertrace.animation.synchronizer import ShimmerSynchronizer
from shimmertrace.config import Settings, settings
from shimmertrace.engine.delegate import Exclusion, ShapeDelegate
from shimmertrace.model.node import Node
from shimmertrace.overlay.overlay import Overlay

logger = logging.getLogger(__name__)


class InteractionLock:
    """Scoped snapshot/restore of the ``enabled`` flag of every leaf under ``target``."""

    def __init__(self, target: Node) -> None:
        self.target = target
        self._saved: dict[Node, bool] = {}

    @property
    def held(self) -> bool:
        return bool(self._saved)

    def acquire(self) -> None:
        if self._saved:
            self.release()
        for node in self.target.walk():
            if node.children:
                continue
            self._saved[node] = node.enabled
            node.enabled = False

    def release(self) -> None:
        for node, enabled in self._saved.items():
            node.enabled = enabled
        self._saved.clear()

    def __enter__(self) -> InteractionLock:
        self.acquire()
        return self

    def __exit__(self, *exc) -> None:
        self.release()


class CrossFade:
    """Linear 0 → 1 progress over a fixed duration, advanced by host ticks."""

    def __init__(
        self,
        duration_seconds: float,
        on_update: Callable[[float], None],
        on_end: Callable[[], None],
        time_source: Callable[[], float] | None = None,
    ) -> None:
        if duration_seconds <= 0.0:
            raise ValueError("duration_seconds must be > 0")
        self.duration_seconds = duration_seconds
        self._on_update = on_update
        self._on_end = on_end
        self._time_source = time_source or monotonic
        self._started_at = self._time_source()
        self.running = True

    def tick(self, now: float | None = None) -> float:
        now = self._time_source() if now is None else now
        progress = min(1.0, max(0.0, (now - self._started_at) / self.duration_seconds))
        if not self.running:
            return progress
        self._on_update(progress)
        if progress >= 1.0:
            self.running = False
            self._on_end()
        return progress

    def cancel(self) -> None:
        self.running = False


class TraceContainer:
    """Single-child host for a content subtree and its loading silhouette."""

    def __init__(
        self,
        config: Settings | None = None,
        time_source: Callable[[], float] | None = None,
    ) -> None:
        config = config or settings
        self.config = config
        self.silhouette_color = config.silhouette_color
        self.shimmer_color = config.shimmer_color
        self.cross_fade_enabled = config.cross_fade_enabled
        self.cross_fade_duration_ms = config.cross_fade_duration_ms
        self._time_source = time_source or monotonic

        self.content: Node | None = None
        self.overlay: Overlay | None = None
        self._lock: InteractionLock | None = None
        self._fade: CrossFade | None = None

    def add_content(self, node: Node) -> Node:
        if self.content is not None:
            raise RuntimeError("TraceContainer may only have one child.")
        self.content = node
        return node

    @property
    def is_fading(self) -> bool:
        return self._fade is not None and self._fade.running

    def _fade_enabled(self, cross_fade: bool) -> bool:
        return cross_fade and self.cross_fade_enabled and self.cross_fade_duration_ms > 0

    def _start_fade(self, on_update: Callable[[float], None], on_end: Callable[[], None]) -> None:
        self._fade = CrossFade(
            self.cross_fade_duration_ms / 1000,
            on_update,
            on_end,
            time_source=self._time_source,
        )

    def _cancel_fade(self) -> None:
        if self._fade is not None:
            self._fade.cancel()
            self._fade = None

    def start_shimmer(
        self,
        period_ms: int | None = None,
        delegate: ShapeDelegate | None = None,
        exclude: Exclusion = None,
        cross_fade: bool = True,
        synchronizer: ShimmerSynchronizer | None = None,
    ) -> Overlay | None:
        """Cover the content with a shimmering silhouette. No-op without content."""
        target = self.content
        if target is None:
            return None

        overlay = (
            Overlay(self.config, time_source=self._time_source)
            .of(target, exclude, delegate)
            .colored(self.silhouette_color)
            .shimmer_colored(self.shimmer_color)
            .sync_with(synchronizer)
        )
        if cross_fade:
            overlay.alpha = 0.0
        overlay.start_shimmer(period_ms or self.config.shimmer_period_ms)

        if self.overlay is not None:
            self.overlay.stop_shimmer()
        self.overlay = overlay

        if self._lock is None:
            self._lock = InteractionLock(target)
        self._lock.acquire()

        self._cancel_fade()
        if self._fade_enabled(cross_fade):

            def _update(progress: float) -> None:
                target.alpha = 1.0 - progress
                overlay.alpha = progress
                overlay.invalidate()

            def _end() -> None:
                target.alpha = 0.0
                overlay.alpha = 1.0
                overlay.invalidate()

            self._start_fade(_update, _end)
        else:
            target.alpha = 0.0
            overlay.alpha = 1.0

        logger.debug("Shimmer started over %r", target.id)
        return overlay

    def stop_shimmer(self, cross_fade: bool = True) -> None:
        """Restore the content. No-op when nothing is shimmering."""
        target = self.content
        overlay = self.overlay
        if target is None or overlay is None:
            return

        if self._lock is not None:
            self._lock.release()

        self._cancel_fade()
        if self._fade_enabled(cross_fade):

            def _update(progress: float) -> None:
                target.alpha = progress
                overlay.alpha = 1.0 - progress
                overlay.invalidate()

            def _end() -> None:
                target.alpha = 1.0
                overlay.alpha = 0.0
                self._remove_overlay(overlay)

            self._start_fade(_update, _end)
        else:
            target.alpha = 1.0
            overlay.alpha = 0.0
            self._remove_overlay(overlay)

        logger.debug("Shimmer stopped over %r", target.id)

    def _remove_overlay(self, overlay: Overlay) -> None:
        overlay.stop_shimmer()
        if self.overlay is overlay:
            self.overlay = None

    def tick(self, now: float | None = None) -> None:
        """Advance the cross-fade and the overlay's shimmer clock by one frame."""
        now = self._time_source() if now is None else now
        if self._fade is not None:
            self._fade.tick(now)
            if not self._fade.running:
                self._fade = None
        if self.overlay is not None and self.overlay.synchronizer is not None:
            self.overlay.synchronizer.tick(now)
