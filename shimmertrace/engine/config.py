"""Trace configuration: geometry constants shared by every shape strategy."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class TraceConfig:
    """Controls how silhouette shapes are sized and placed."""

    # Inset subtracted from every edge so shapes never touch node edges
    space: float = 2.5
    # Corner radius for text line rects and checkbox squares
    corner_radius: float = 10.0

    # Button / generic rounded rect: radius = ratio × min(width, height)
    simple_radius_ratio: float = 0.075

    # Radio button circle radius as a fraction of glyph width
    radio_radius_ratio: float = 0.33
    # Checkbox square: offset and size as fractions of glyph size
    checkbox_offset_ratio: float = 0.25
    checkbox_size_ratio: float = 0.5

    # Stop emitting text lines once one overflows the node by more than this many line heights
    overflow_line_ratio: float = 0.5

    # Segments per quarter circle when polygonizing arcs
    arc_resolution: int = 8

    # Reserve each node's full box in the composite bounds (CW + CCW rect pair)
    reserve_bounds: bool = True
