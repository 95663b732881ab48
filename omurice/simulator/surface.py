"""Raster render surface backed by a numpy array and OpenCV.

A RenderSurface is a square RGB uint8 raster whose backing size is ``scale``
times its display size (2× by default, for crisp edges on dense displays).
It exposes only the primitives the renderers and the compositor need:

    - fill_ellipse(cx, cy, rx, ry, color): anti-aliased filled ellipse
    - blit(other): copy a same-sized surface onto this one
    - clear(region=None): fill with the background color
    - resize(display_size): reallocate the backing raster (content is lost)

``bounds`` is where the surface sits on screen (display pixels); the input
path uses it to normalize pointer coordinates.

A surface with zero size is "not ready": drawing calls are silent no-ops so
callers can retry on the next tick or resize.

Ellipse coordinates are floats in backing pixels. OpenCV takes integers, so
they are passed in fixed point (``_SHIFT`` fractional bits) to keep
sub-pixel placement.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import cv2
import numpy as np

logger = logging.getLogger(__name__)

_SHIFT = 4
_ONE = 1 << _SHIFT

Color = Tuple[int, int, int]


@dataclass(frozen=True)
class Bounds:
    """On-screen rectangle in display pixels."""

    left: float
    top: float
    width: float
    height: float

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.left, self.top, self.width, self.height)

    def contains(self, x: float, y: float) -> bool:
        return self.left <= x < self.left + self.width and self.top <= y < self.top + self.height


class RenderSurface:
    """Owned RGB raster with ellipse/blit/clear/resize primitives.

    Parameters
    ----------
    display_size : int
        Edge length in display pixels (0 = not ready)
    scale : int
        Backing pixels per display pixel
    background : Color
        Clear color (RGB 0-255)
    """

    def __init__(
        self,
        display_size: int = 0,
        scale: int = 2,
        background: Color = (255, 255, 255),
    ):
        if scale < 1:
            raise ValueError(f"scale must be >= 1, got {scale}")
        self.scale = scale
        self.background = tuple(int(c) for c in background)
        self.display_size = 0
        self.pixels = np.zeros((0, 0, 3), dtype=np.uint8)
        self._origin = (0.0, 0.0)
        self.resize(display_size)

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    @property
    def pixel_size(self) -> int:
        return self.pixels.shape[0]

    @property
    def is_ready(self) -> bool:
        return self.pixel_size > 0

    @property
    def bounds(self) -> Bounds:
        left, top = self._origin
        return Bounds(left, top, float(self.display_size), float(self.display_size))

    def move_to(self, left: float, top: float) -> None:
        """Record where the surface is presented on screen."""
        self._origin = (float(left), float(top))

    def resize(self, display_size: int) -> bool:
        """Set display size; backing raster becomes ``scale`` × larger.

        Returns True if the backing raster was reallocated. Content is lost
        and replaced with the background color.
        """
        display_size = max(0, int(display_size))
        if display_size == self.display_size and self.pixel_size == display_size * self.scale:
            return False
        self.display_size = display_size
        n = display_size * self.scale
        self.pixels = np.empty((n, n, 3), dtype=np.uint8)
        self.pixels[...] = self.background
        return True

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------

    def clear(self, region: Optional[Tuple[int, int, int, int]] = None) -> None:
        """Fill with background; ``region`` is (x, y, w, h) in backing pixels."""
        if not self.is_ready:
            return
        if region is None:
            self.pixels[...] = self.background
            return
        x, y, w, h = region
        x0, y0 = max(0, int(x)), max(0, int(y))
        x1 = min(self.pixel_size, int(x + w))
        y1 = min(self.pixel_size, int(y + h))
        if x1 > x0 and y1 > y0:
            self.pixels[y0:y1, x0:x1] = self.background

    def fill_ellipse(
        self,
        cx: float,
        cy: float,
        rx: float,
        ry: float,
        color: Color,
    ) -> None:
        """Fill an axis-aligned ellipse (backing pixel coordinates)."""
        if not self.is_ready or rx <= 0 or ry <= 0:
            return
        cv2.ellipse(
            self.pixels,
            (int(round(cx * _ONE)), int(round(cy * _ONE))),
            (int(round(rx * _ONE)), int(round(ry * _ONE))),
            0, 0, 360,
            tuple(int(c) for c in color),
            thickness=cv2.FILLED,
            lineType=cv2.LINE_AA,
            shift=_SHIFT,
        )

    def blit(self, other: 'RenderSurface') -> None:
        """Copy ``other`` onto this surface (sizes must match)."""
        if not self.is_ready:
            return
        if other.pixels.shape != self.pixels.shape:
            raise ValueError(
                f"Cannot blit {other.pixels.shape} surface onto {self.pixels.shape}"
            )
        np.copyto(self.pixels, other.pixels)

    def to_image(self) -> np.ndarray:
        """Copy of the raster, (H, W, 3) uint8 RGB."""
        return self.pixels.copy()
