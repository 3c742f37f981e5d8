"""Path: an ordered list of appended contours read as a single filled region.

Each append records its nominal bounds and winding direction. The filled
region follows the path's fill type: non-zero winding by default, so a rect
appended clockwise and again counter-clockwise adds bounds but no fill.

Region computation:
  1. Cancel identical contours appended with opposite directions
  2. Same-direction contours under non-zero winding: plain union
  3. Otherwise polygonize all boundaries into faces and sum the winding of
     every contour at a representative point of each face
"""

from __future__ import annotations

import enum
import logging
from collections import defaultdict
from dataclasses import dataclass, replace

import numpy as np
from shapely import affinity
from shapely.geometry import Point, Polygon
from shapely.geometry.base import BaseGeometry
from shapely.ops import polygonize, unary_union

from shimmertrace.geometry.rect import EMPTY_RECT, Rect
from shimmertrace.geometry.shapes import (
    DEFAULT_ARC_RESOLUTION,
    circle_polygon,
    extract_polygons,
    oriented_coords,
    rect_polygon,
    round_rect_polygon,
    winding_direction,
)

logger = logging.getLogger(__name__)


class Direction(enum.Enum):
    CW = 1
    CCW = -1


class FillType(enum.Enum):
    WINDING = "nonzero"
    EVEN_ODD = "evenodd"


class Op(enum.Enum):
    UNION = "union"
    INTERSECT = "intersect"
    DIFFERENCE = "difference"
    XOR = "xor"


class ContourKind(enum.Enum):
    RECT = "rect"
    ROUND_RECT = "round_rect"
    CIRCLE = "circle"
    POLYGON = "polygon"


@dataclass(frozen=True)
class Contour:
    """One appended primitive shape."""

    kind: ContourKind
    direction: Direction
    bounds: Rect
    polygon: Polygon
    # Corner radius for ROUND_RECT, radius for CIRCLE
    radius: float = 0.0

    def translated(self, dx: float, dy: float) -> Contour:
        if dx == 0 and dy == 0:
            return self
        return replace(
            self,
            bounds=self.bounds.offset(dx, dy),
            polygon=affinity.translate(self.polygon, xoff=dx, yoff=dy),
        )

    @property
    def _identity(self) -> tuple:
        return (self.kind, self.bounds.as_tuple(), round(self.radius, 6), self.polygon.wkb)


class Path:
    """Composite vector shape built from rects, rounded rects, circles and polygons."""

    def __init__(
        self,
        fill_type: FillType = FillType.WINDING,
        arc_resolution: int = DEFAULT_ARC_RESOLUTION,
    ) -> None:
        self.fill_type = fill_type
        self.arc_resolution = arc_resolution
        self._contours: list[Contour] = []
        self._region: BaseGeometry | None = None

    # ── Appending ──

    def _append(self, contour: Contour) -> None:
        if contour.polygon.is_empty:
            return
        self._contours.append(contour)
        self._region = None

    def add_rect(self, rect: Rect, direction: Direction = Direction.CW) -> Path:
        self._append(Contour(ContourKind.RECT, direction, rect, rect_polygon(rect)))
        return self

    def add_round_rect(
        self,
        rect: Rect,
        rx: float,
        ry: float | None = None,
        direction: Direction = Direction.CW,
    ) -> Path:
        ry = rx if ry is None else ry
        poly = round_rect_polygon(rect, rx, ry, self.arc_resolution)
        self._append(Contour(ContourKind.ROUND_RECT, direction, rect, poly, radius=rx))
        return self

    def add_circle(
        self,
        cx: float,
        cy: float,
        radius: float,
        direction: Direction = Direction.CW,
    ) -> Path:
        bounds = Rect(cx - radius, cy - radius, cx + radius, cy + radius)
        poly = circle_polygon(cx, cy, radius, self.arc_resolution)
        self._append(Contour(ContourKind.CIRCLE, direction, bounds, poly, radius=radius))
        return self

    def add_polygon(self, polygon: Polygon, direction: Direction | None = None) -> Path:
        """Append ``polygon``. Without ``direction`` the exterior ring's orientation decides."""
        if polygon.is_empty:
            return self
        if direction is None:
            winding = winding_direction(np.asarray(polygon.exterior.coords))
            direction = Direction.CCW if winding < 0 else Direction.CW
        bounds = Rect(*polygon.bounds)
        self._append(Contour(ContourKind.POLYGON, direction, bounds, polygon))
        return self

    def add_path(self, other: Path, dx: float = 0.0, dy: float = 0.0) -> Path:
        """Append a translated copy of every contour of ``other``."""
        for contour in list(other._contours):
            self._append(contour.translated(dx, dy))
        return self

    # ── Transforms ──

    def offset(self, dx: float, dy: float) -> Path:
        """Translate in place."""
        self._contours = [c.translated(dx, dy) for c in self._contours]
        if self._region is not None:
            self._region = affinity.translate(self._region, xoff=dx, yoff=dy)
        return self

    def translated(self, dx: float, dy: float) -> Path:
        return self.copy().offset(dx, dy)

    def copy(self) -> Path:
        clone = Path(self.fill_type, self.arc_resolution)
        clone._contours = list(self._contours)
        clone._region = self._region
        return clone

    def reset(self) -> None:
        self._contours.clear()
        self._region = None

    # ── Queries ──

    @property
    def contours(self) -> tuple[Contour, ...]:
        return tuple(self._contours)

    @property
    def is_empty(self) -> bool:
        return not self._contours

    def compute_bounds(self) -> Rect:
        """Union of the nominal bounds of every contour; (0, 0, 0, 0) when empty."""
        bounds = EMPTY_RECT
        for contour in self._contours:
            bounds = bounds.union(contour.bounds)
        return bounds

    @property
    def region(self) -> BaseGeometry:
        """Filled area under the path's fill type."""
        if self._region is None:
            self._region = self._compute_region()
        return self._region

    @property
    def area(self) -> float:
        return float(self.region.area)

    def contains(self, x: float, y: float) -> bool:
        return bool(self.region.contains(Point(x, y)))

    def _net_contours(self) -> list[Contour]:
        """Drop identical contours whose directions cancel out."""
        groups: dict[tuple, list[Contour]] = defaultdict(list)
        order: list[tuple] = []
        for contour in self._contours:
            key = contour._identity
            if key not in groups:
                order.append(key)
            groups[key].append(contour)

        net: list[Contour] = []
        for key in order:
            members = groups[key]
            if self.fill_type is FillType.EVEN_ODD:
                if len(members) % 2:
                    net.append(members[0])
                continue
            total = sum(c.direction.value for c in members)
            if total == 0:
                continue
            direction = Direction.CW if total > 0 else Direction.CCW
            net.extend([replace(members[0], direction=direction)] * abs(total))
        return net

    def _compute_region(self) -> BaseGeometry:
        contours = self._net_contours()
        if not contours:
            return Polygon()

        directions = {c.direction for c in contours}
        if self.fill_type is FillType.WINDING and len(directions) == 1:
            return unary_union([c.polygon for c in contours])

        boundaries = unary_union([c.polygon.boundary for c in contours])
        lines = list(getattr(boundaries, "geoms", [boundaries]))
        faces = list(polygonize(lines))
        logger.debug("Region via polygonize: %d contours, %d faces", len(contours), len(faces))

        filled: list[Polygon] = []
        for face in faces:
            pt = face.representative_point()
            inside = [c for c in contours if c.polygon.contains(pt)]
            if self.fill_type is FillType.EVEN_ODD:
                keep = len(inside) % 2 == 1
            else:
                keep = sum(c.direction.value for c in inside) != 0
            if keep:
                filled.append(face)

        if not filled:
            return Polygon()
        return unary_union(filled)

    # ── Boolean ops ──

    def op(self, other: Path, operation: Op) -> Path:
        """Combine filled regions; the result holds one clockwise contour per polygon."""
        a = self.region
        b = other.region
        if operation is Op.UNION:
            geom = a.union(b)
        elif operation is Op.INTERSECT:
            geom = a.intersection(b)
        elif operation is Op.DIFFERENCE:
            geom = a.difference(b)
        else:
            geom = a.symmetric_difference(b)

        result = Path(FillType.WINDING, self.arc_resolution)
        for poly in extract_polygons(geom):
            result.add_polygon(poly, Direction.CW)
        return result

    # ── Serialisation ──

    def to_svg_d(self, precision: int = 1) -> str:
        """SVG path data, one closed subpath per contour ring."""
        cmds: list[str] = []
        for contour in self._contours:
            clockwise = contour.direction is Direction.CW
            rings = [oriented_coords(contour.polygon, clockwise)]
            for interior in contour.polygon.interiors:
                hole = Polygon(interior.coords)
                rings.append(oriented_coords(hole, not clockwise))
            for ring in rings:
                if not ring:
                    continue
                x0, y0 = ring[0]
                parts = [f"M {x0:.{precision}f},{y0:.{precision}f}"]
                parts.extend(f"L {x:.{precision}f},{y:.{precision}f}" for x, y in ring[1:-1])
                parts.append("Z")
                cmds.append(" ".join(parts))
        return " ".join(cmds)

    def __repr__(self) -> str:
        return f"Path(contours={len(self._contours)}, bounds={self.compute_bounds().as_tuple()})"
