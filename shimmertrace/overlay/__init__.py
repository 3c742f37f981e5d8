"""Overlay surfaces: the silhouette sink, its container and the reference raster backend."""

from shimmertrace.overlay.container import CrossFade, InteractionLock, TraceContainer
from shimmertrace.overlay.overlay import Overlay
from shimmertrace.overlay.raster import compose, parse_color, rasterize, shimmer_gradient

__all__ = [
    "CrossFade",
    "InteractionLock",
    "TraceContainer",
    "Overlay",
    "compose",
    "parse_color",
    "rasterize",
    "shimmer_gradient",
]
