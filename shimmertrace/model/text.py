"""Text measurement facilities. Line breaking is the host's job; we only measure widths."""

from __future__ import annotations

from typing import Protocol

from PIL import ImageFont


class TextMeasurer(Protocol):
    def measure(self, text: str) -> float:
        """Pixel width of the ink bounds of ``text``."""
        ...


class FixedAdvanceMeasurer:
    """Every character advances by the same width. Deterministic, for tests and previews."""

    def __init__(self, advance: float = 8.0) -> None:
        self.advance = advance

    def measure(self, text: str) -> float:
        return self.advance * len(text.rstrip("\n"))


class PillowTextMeasurer:
    """Measures with a Pillow font; falls back to Pillow's bundled default font."""

    def __init__(self, font: str | None = None, size: float | None = None) -> None:
        if font is not None:
            self.font = ImageFont.truetype(font, size or 12)
        elif size is not None:
            self.font = ImageFont.load_default(size)
        else:
            self.font = ImageFont.load_default()

    def measure(self, text: str) -> float:
        text = text.rstrip("\n")
        if not text:
            return 0.0
        left, _, right, _ = self.font.getbbox(text)
        return float(right - left)
