"""Repeating value animator driven by host frame ticks."""

from __future__ import annotations

import logging
from collections.abc import Callable
from time import monotonic

from shimmertrace.animation.easing import fast_out_slow_in

logger = logging.getLogger(__name__)

UpdateListener = Callable[[int], None]


class RepeatingAnimator:
    """Integer animator that ramps start → end once per period and restarts forever.

    Nothing runs in the background: the host calls ``tick`` once per frame and
    the animator derives its value from elapsed time.
    """

    def __init__(
        self,
        start_value: int = 0,
        end_value: int = 100,
        *,
        period_seconds: float,
        easing: Callable[[float], float] = fast_out_slow_in,
        time_source: Callable[[], float] | None = None,
    ) -> None:
        if period_seconds <= 0.0:
            raise ValueError("period_seconds must be > 0")
        self.start_value = start_value
        self.end_value = end_value
        self.period_seconds = period_seconds
        self.easing = easing
        self._time_source = time_source or monotonic
        self._started_at: float | None = None
        self._listeners: list[UpdateListener] = []
        self.value = start_value

    @property
    def is_running(self) -> bool:
        return self._started_at is not None

    def add_update_listener(self, listener: UpdateListener) -> None:
        self._listeners.append(listener)

    def remove_update_listener(self, listener: UpdateListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def start(self) -> None:
        """(Re)start from the first value of a fresh cycle."""
        self._started_at = self._time_source()
        self.value = self.start_value
        logger.debug("Animator started (period %.3fs)", self.period_seconds)

    def cancel(self) -> None:
        if self._started_at is not None:
            logger.debug("Animator cancelled at value %d", self.value)
        self._started_at = None

    def value_at(self, elapsed_seconds: float) -> int:
        fraction = (max(0.0, elapsed_seconds) % self.period_seconds) / self.period_seconds
        eased = self.easing(fraction)
        return int(self.start_value + (self.end_value - self.start_value) * eased)

    def tick(self, now: float | None = None) -> int:
        """Advance to ``now`` (defaults to the time source) and notify listeners."""
        if self._started_at is None:
            return self.value
        now = self._time_source() if now is None else now
        self.value = self.value_at(now - self._started_at)
        for listener in list(self._listeners):
            listener(self.value)
        return self.value
