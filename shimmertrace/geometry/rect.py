"""Plain geometry value types. No shapely imports."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PointF:
    x: float = 0.0
    y: float = 0.0

    def offset(self, dx: float, dy: float) -> PointF:
        return PointF(self.x + dx, self.y + dy)


@dataclass(frozen=True)
class Insets:
    """Per-edge spacing (margin or padding)."""

    left: float = 0.0
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in screen coordinates (y grows downward)."""

    left: float = 0.0
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0

    @classmethod
    def from_size(cls, left: float, top: float, width: float, height: float) -> Rect:
        return cls(left, top, left + width, top + height)

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def center(self) -> PointF:
        return PointF((self.left + self.right) / 2, (self.top + self.bottom) / 2)

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def sorted(self) -> Rect:
        return Rect(
            min(self.left, self.right),
            min(self.top, self.bottom),
            max(self.left, self.right),
            max(self.top, self.bottom),
        )

    def offset(self, dx: float, dy: float) -> Rect:
        return Rect(self.left + dx, self.top + dy, self.right + dx, self.bottom + dy)

    def inset(self, dx: float, dy: float) -> Rect:
        return Rect(self.left + dx, self.top + dy, self.right - dx, self.bottom - dy)

    def union(self, other: Rect) -> Rect:
        """Smallest rect containing both. Empty rects do not contribute."""
        if other.is_empty:
            return self
        if self.is_empty:
            return other
        return Rect(
            min(self.left, other.left),
            min(self.top, other.top),
            max(self.right, other.right),
            max(self.bottom, other.bottom),
        )

    def contains(self, x: float, y: float) -> bool:
        return self.left <= x < self.right and self.top <= y < self.bottom

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.left, self.top, self.right, self.bottom)


EMPTY_RECT = Rect()
