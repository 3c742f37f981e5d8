"""Shapely polygon builders and winding helpers for path contours.

Coordinates are screen-space (y grows downward), so a positive shoelace
area means the ring runs clockwise on screen.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray
from shapely.geometry import Polygon
from shapely.geometry.base import BaseGeometry
from shapely.geometry.polygon import orient

from shimmertrace.geometry.rect import Rect

# Segments per quarter circle for rounded corners and circles.
DEFAULT_ARC_RESOLUTION = 8


def signed_area(coords: NDArray[np.float64]) -> float:
    """Shoelace formula. Positive = clockwise on screen, negative = counter-clockwise."""
    pts = np.asarray(coords, dtype=np.float64)
    if len(pts) < 3:
        return 0.0
    x = pts[:, 0]
    y = pts[:, 1]
    return float(0.5 * np.sum(x * np.roll(y, -1) - np.roll(x, -1) * y))


def winding_direction(coords: NDArray[np.float64]) -> int:
    """Return 1 for clockwise, -1 for counter-clockwise, 0 if degenerate."""
    sa = signed_area(coords)
    if sa > 0:
        return 1
    elif sa < 0:
        return -1
    return 0


def rect_polygon(rect: Rect) -> Polygon:
    if rect.is_empty:
        return Polygon()
    return Polygon(
        [
            (rect.left, rect.top),
            (rect.right, rect.top),
            (rect.right, rect.bottom),
            (rect.left, rect.bottom),
        ]
    )


def _arc(
    cx: float,
    cy: float,
    rx: float,
    ry: float,
    start_deg: float,
    end_deg: float,
    resolution: int,
) -> NDArray[np.float64]:
    theta = np.radians(np.linspace(start_deg, end_deg, resolution + 1))
    return np.column_stack([cx + rx * np.cos(theta), cy + ry * np.sin(theta)])


def round_rect_polygon(
    rect: Rect,
    rx: float,
    ry: float,
    resolution: int = DEFAULT_ARC_RESOLUTION,
) -> Polygon:
    """Rounded rectangle, radii clamped to half the rect's extent."""
    if rect.is_empty:
        return Polygon()
    rx = min(max(rx, 0.0), rect.width / 2)
    ry = min(max(ry, 0.0), rect.height / 2)
    if rx <= 0 or ry <= 0:
        return rect_polygon(rect)

    # Corners visited top-right, bottom-right, bottom-left, top-left (clockwise on screen)
    corners = [
        _arc(rect.right - rx, rect.top + ry, rx, ry, -90, 0, resolution),
        _arc(rect.right - rx, rect.bottom - ry, rx, ry, 0, 90, resolution),
        _arc(rect.left + rx, rect.bottom - ry, rx, ry, 90, 180, resolution),
        _arc(rect.left + rx, rect.top + ry, rx, ry, 180, 270, resolution),
    ]
    poly = Polygon(np.vstack(corners))
    if not poly.is_valid:
        poly = poly.buffer(0)
    return poly


def circle_polygon(
    cx: float,
    cy: float,
    radius: float,
    resolution: int = DEFAULT_ARC_RESOLUTION,
) -> Polygon:
    if radius <= 0:
        return Polygon()
    pts = _arc(cx, cy, radius, radius, 0, 360, resolution * 4)[:-1]
    return Polygon(pts)


def oriented_coords(polygon: Polygon, clockwise: bool) -> list[tuple[float, float]]:
    """Exterior ring coordinates ordered clockwise (on screen) or counter-clockwise."""
    if polygon.is_empty:
        return []
    # orient(sign=1.0) yields a positive shoelace area, i.e. clockwise in y-down space
    oriented = orient(polygon, sign=1.0 if clockwise else -1.0)
    return [(float(x), float(y)) for x, y in oriented.exterior.coords]


def extract_polygons(geom: BaseGeometry | None) -> list[Polygon]:
    """Extract all Polygon objects from any Shapely geometry."""
    if geom is None or geom.is_empty:
        return []
    polys: list[Polygon] = []
    if geom.geom_type == "Polygon":
        polys = [geom]
    elif geom.geom_type == "MultiPolygon":
        polys = list(geom.geoms)
    elif geom.geom_type == "GeometryCollection":
        for g in geom.geoms:
            polys.extend(extract_polygons(g))
    return [p for p in polys if not p.is_empty]
