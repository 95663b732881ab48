"""Canvas sizing arithmetic.

Maps a viewport size (display pixels) to the square canvas the dish is drawn
on. The canvas takes the viewport's smaller dimension minus a margin; the
backing raster is ``scale`` times larger so ellipse edges stay crisp on
high-density displays.

Pure functions, no state. A degenerate viewport (zero or negative width or
height) yields ``None`` and callers skip drawing until a usable size arrives.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class CanvasGeometry:
    """Square canvas size in display and backing pixels."""

    display_size: int
    scale: int

    @property
    def pixel_size(self) -> int:
        """Backing raster edge length (display_size × scale)."""
        return self.display_size * self.scale


def canvas_display_size(width: float, height: float, margin: float = 0.05) -> int:
    """Edge length in display pixels for a viewport, 0 if degenerate.

    Parameters
    ----------
    width, height : float
        Viewport size in display pixels
    margin : float
        Fraction of the smaller dimension left empty around the canvas

    Examples
    --------
    >>> canvas_display_size(800, 600)
    570
    >>> canvas_display_size(0, 600)
    0
    """
    if width <= 0 or height <= 0:
        return 0
    return max(0, int(math.floor(min(width, height) * (1.0 - margin))))


def compute_canvas_geometry(
    width: float,
    height: float,
    *,
    margin: float = 0.05,
    scale: int = 2,
) -> CanvasGeometry | None:
    """Derive the canvas geometry for a viewport, or None if unusable."""
    if scale < 1:
        raise ValueError(f"scale must be >= 1, got {scale}")
    size = canvas_display_size(width, height, margin)
    if size < 1:
        return None
    return CanvasGeometry(display_size=size, scale=scale)
