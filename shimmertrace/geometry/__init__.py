"""Geometry primitives: rects, shapely shape builders and the composite Path."""

from shimmertrace.geometry.path import Contour, ContourKind, Direction, FillType, Op, Path
from shimmertrace.geometry.rect import EMPTY_RECT, Insets, PointF, Rect

__all__ = [
    "Contour",
    "ContourKind",
    "Direction",
    "FillType",
    "Op",
    "Path",
    "EMPTY_RECT",
    "Insets",
    "PointF",
    "Rect",
]
