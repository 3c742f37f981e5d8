"""Silhouette tracing engine."""

from shimmertrace.engine.config import TraceConfig
from shimmertrace.engine.default_shapes import DefaultShapeStrategy, ShapeContext
from shimmertrace.engine.delegate import ChainedDelegate, ShapeDelegate, as_predicate
from shimmertrace.engine.registry import ShapeRegistry, get_registry, shape
from shimmertrace.engine.tracer import SilhouetteTracer, TraceResult, trace

__all__ = [
    "TraceConfig",
    "DefaultShapeStrategy",
    "ShapeContext",
    "ChainedDelegate",
    "ShapeDelegate",
    "as_predicate",
    "ShapeRegistry",
    "get_registry",
    "shape",
    "SilhouetteTracer",
    "TraceResult",
    "trace",
]
