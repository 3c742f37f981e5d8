"""Shimmer animation: easing, repeating clock and the cross-overlay synchronizer."""

from shimmertrace.animation.clock import RepeatingAnimator
from shimmertrace.animation.easing import fast_out_slow_in, linear
from shimmertrace.animation.synchronizer import ShimmerSubscriber, ShimmerSynchronizer

__all__ = [
    "RepeatingAnimator",
    "fast_out_slow_in",
    "linear",
    "ShimmerSubscriber",
    "ShimmerSynchronizer",
]
