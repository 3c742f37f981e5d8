"""shimmertrace: skeleton-loading silhouettes traced from a node tree, with synchronized shimmer."""

from shimmertrace.animation.synchronizer import ShimmerSynchronizer
from shimmertrace.config import Settings
from shimmertrace.engine.tracer import SilhouetteTracer, TraceResult, trace
from shimmertrace.geometry.path import Path
from shimmertrace.geometry.rect import Rect
from shimmertrace.model.node import Node, TraceableNode
from shimmertrace.overlay.container import TraceContainer
from shimmertrace.overlay.overlay import Overlay

__version__ = "0.1.0"

__all__ = [
    "ShimmerSynchronizer",
    "Settings",
    "SilhouetteTracer",
    "TraceResult",
    "trace",
    "Path",
    "Rect",
    "Node",
    "TraceableNode",
    "TraceContainer",
    "Overlay",
]
