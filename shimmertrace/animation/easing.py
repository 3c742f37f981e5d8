"""Easing curves for the shimmer clock."""

from __future__ import annotations

import numpy as np

# Material "fast out, slow in": cubic-bezier(0.4, 0, 0.2, 1)
_FOSI_CONTROL = (0.4, 0.0, 0.2, 1.0)

# Parametric samples; x(t) is monotonic so the table can be inverted with interp.
_LUT_SAMPLES = 1001


def _cubic_bezier_table(x1: float, y1: float, x2: float, y2: float, n: int):
    t = np.linspace(0.0, 1.0, n)
    mt = 1.0 - t
    xs = 3 * mt**2 * t * x1 + 3 * mt * t**2 * x2 + t**3
    ys = 3 * mt**2 * t * y1 + 3 * mt * t**2 * y2 + t**3
    return xs, ys


_FOSI_X, _FOSI_Y = _cubic_bezier_table(*_FOSI_CONTROL, _LUT_SAMPLES)


def fast_out_slow_in(fraction: float) -> float:
    """Ease-in-ease-out pacing; maps [0, 1] onto [0, 1] with both ends fixed."""
    f = min(max(float(fraction), 0.0), 1.0)
    return float(np.interp(f, _FOSI_X, _FOSI_Y))


def linear(fraction: float) -> float:
    return min(max(float(fraction), 0.0), 1.0)
