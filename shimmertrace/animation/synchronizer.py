"""ShimmerSynchronizer: one shared shimmer clock fanned out to many overlays.

Subscribers are held through weak references so a discarded overlay is never
kept alive by the clock. Dead references are pruned lazily: on the next tick,
or on the next register/unregister. The clock runs exactly while at least
one live subscriber is registered.
"""

from __future__ import annotations

import logging
import weakref
from collections.abc import Callable
from typing import Protocol

from shimmertrace.animation.clock import RepeatingAnimator

logger = logging.getLogger(__name__)

DEFAULT_PERIOD_MS = 1200


class ShimmerSubscriber(Protocol):
    def invalidate(self) -> None:
        """Repaint with the synchronizer's current progress."""
        ...


class ShimmerSynchronizer:
    """Drives a cyclic 0-100 progress value shared by every registered subscriber."""

    def __init__(
        self,
        period_ms: int = DEFAULT_PERIOD_MS,
        time_source: Callable[[], float] | None = None,
    ) -> None:
        if period_ms <= 0:
            raise ValueError("period_ms must be > 0")
        self.period_ms = period_ms
        self._subscribers: list[weakref.ref] = []
        self._animator = RepeatingAnimator(
            0,
            100,
            period_seconds=period_ms / 1000,
            time_source=time_source,
        )
        self._animator.add_update_listener(self._on_update)

    @property
    def progress(self) -> int:
        return self._animator.value

    @property
    def is_running(self) -> bool:
        return self._animator.is_running

    @property
    def subscriber_count(self) -> int:
        """Number of subscribers still alive."""
        return sum(1 for ref in self._subscribers if ref() is not None)

    def register(self, subscriber: ShimmerSubscriber) -> None:
        self._discard(subscriber)
        self._subscribers.append(weakref.ref(subscriber))
        if not self.is_running:
            self._animator.start()
            logger.debug("Shimmer clock started (%dms period)", self.period_ms)

    def restart(self) -> None:
        """Rewind a running clock to progress 0."""
        if self.is_running:
            self._animator.start()

    def unregister(self, subscriber: ShimmerSubscriber) -> None:
        self._discard(subscriber)
        if not self._subscribers:
            self._stop()

    def tick(self, now: float | None = None) -> int:
        """Advance the shared clock one frame; every live subscriber is invalidated."""
        return self._animator.tick(now)

    def _discard(self, subscriber: ShimmerSubscriber | None) -> None:
        """Drop dead references and any entry for ``subscriber``."""
        kept = []
        for ref in self._subscribers:
            target = ref()
            if target is None or target is subscriber:
                continue
            kept.append(ref)
        self._subscribers = kept

    def _on_update(self, progress: int) -> None:
        # Snapshot: subscribers may unregister themselves while being notified
        for ref in list(self._subscribers):
            target = ref()
            if target is None:
                if ref in self._subscribers:
                    self._subscribers.remove(ref)
                continue
            target.invalidate()

        if not self._subscribers:
            self._stop()

    def _stop(self) -> None:
        if self.is_running:
            self._animator.cancel()
            logger.debug("Shimmer clock stopped, no subscribers left")
