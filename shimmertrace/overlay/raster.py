"""Reference raster backend: silhouette path to pixels.

Hosts with a real canvas draw ``Overlay.path`` themselves; this backend exists
for previews and tests.

Method: polygon fill per region part (scikit-image) → holes cleared →
shimmer alpha ramp → src-over composite → Pillow image.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray
from PIL import Image
from skimage.draw import polygon as draw_polygon

from shimmertrace.geometry.path import Path
from shimmertrace.geometry.shapes import extract_polygons

Color = tuple[int, int, int, int]

# Gradient stops across the silhouette width: transparent, color, transparent, color, transparent.
# The pattern repeats, so it is a triangle wave with half-width period.
_GRADIENT_PERIOD = 0.5


def parse_color(color: str | tuple[int, ...]) -> Color:
    """Accept (r, g, b), (r, g, b, a), ``#rrggbb`` or ``#aarrggbb``."""
    if isinstance(color, tuple):
        if len(color) == 3:
            return (int(color[0]), int(color[1]), int(color[2]), 255)
        if len(color) == 4:
            return (int(color[0]), int(color[1]), int(color[2]), int(color[3]))
        raise ValueError(f"Color tuple must have 3 or 4 components: {color!r}")

    text = color.strip().lstrip("#")
    if len(text) not in (6, 8):
        raise ValueError(f"Unsupported color: {color!r}")
    try:
        value = int(text, 16)
    except ValueError as e:
        raise ValueError(f"Unsupported color: {color!r}") from e
    if len(text) == 6:
        return ((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF, 255)
    return ((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF, (value >> 24) & 0xFF)


def rasterize(path: Path, width: int, height: int, scale: float = 1.0) -> NDArray[np.bool_]:
    """Filled region of ``path`` as a (height, width) boolean mask."""
    mask = np.zeros((height, width), dtype=bool)
    if path.is_empty or width <= 0 or height <= 0:
        return mask

    for poly in extract_polygons(path.region):
        ext = np.asarray(poly.exterior.coords) * scale
        rr, cc = draw_polygon(ext[:, 1], ext[:, 0], shape=mask.shape)
        mask[rr, cc] = True
        for interior in poly.interiors:
            hole = np.asarray(interior.coords) * scale
            rr, cc = draw_polygon(hole[:, 1], hole[:, 0], shape=mask.shape)
            mask[rr, cc] = False
    return mask


def shimmer_gradient(width: int, span: float) -> NDArray[np.float64]:
    """Per-column alpha factor in [0, 1] of the repeating shimmer gradient.

    Args:
        width: Number of pixel columns.
        span: Gradient span in pixels (the silhouette width).
    """
    if width <= 0:
        return np.zeros(0)
    if span <= 0:
        return np.zeros(width)
    x = (np.arange(width) + 0.5) / span
    phase = (x % _GRADIENT_PERIOD) / _GRADIENT_PERIOD * 2.0
    return 1.0 - np.abs(phase - 1.0)


def compose(
    fill_mask: NDArray[np.bool_],
    fill_color: Color,
    shimmer_mask: NDArray[np.bool_] | None = None,
    shimmer_color: Color = (255, 255, 255, 255),
    shimmer_alpha: int = 0x40,
    gradient: NDArray[np.float64] | None = None,
    opacity: float = 1.0,
) -> Image.Image:
    """Paint the silhouette, then the shimmer highlight over it (src-over)."""
    h, w = fill_mask.shape
    rgba = np.zeros((h, w, 4), dtype=np.float64)
    rgba[fill_mask] = np.asarray(fill_color, dtype=np.float64) / 255.0

    if shimmer_mask is not None and shimmer_mask.any():
        ramp = gradient if gradient is not None else np.ones(w)
        alpha = np.zeros((h, w))
        alpha[shimmer_mask] = 1.0
        alpha *= ramp[np.newaxis, :]
        alpha *= (shimmer_alpha / 255.0) * (shimmer_color[3] / 255.0)

        src = np.asarray(shimmer_color[:3], dtype=np.float64) / 255.0
        a = alpha[..., np.newaxis]
        dst_a = rgba[..., 3:4]
        out_a = a + dst_a * (1.0 - a)
        safe = np.where(out_a > 0, out_a, 1.0)
        rgba[..., :3] = (src * a + rgba[..., :3] * dst_a * (1.0 - a)) / safe
        rgba[..., 3:4] = out_a

    if opacity < 1.0:
        rgba[..., 3] *= max(0.0, opacity)

    return Image.fromarray(np.round(rgba * 255).astype(np.uint8))
