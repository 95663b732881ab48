"""Foreground renderer: ketchup strokes as flattened splats.

Each splat becomes an ellipse of horizontal radius ``size`` and vertical
radius ``flatten × size`` (the dish is seen in perspective), where

    size_px = (base + extra) × pixel_size / radius_divisor

Fast vertical motion leaves gaps between flattened splats. When two
consecutive splats are more than ``bridge_threshold × pixel_size`` apart
vertically, one bridge splat is drawn at their midpoint with the averaged
size.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Tuple

from omurice.simulator.strokes import Splat, Stroke
from omurice.simulator.surface import RenderSurface
from omurice.utils.validators import RenderConfig

Ellipse = Tuple[float, float, float, float]


def _project(splat: Splat, size: float, cfg: RenderConfig) -> Tuple[float, float, float]:
    return (splat.x * size, splat.y * size, splat.size * (size / cfg.radius_divisor))


def stroke_ellipses(stroke: Stroke, size: float, cfg: RenderConfig) -> Iterator[Ellipse]:
    """Yield ``(cx, cy, rx, ry)`` for every splat and bridge of a stroke.

    Parameters
    ----------
    stroke : Stroke
        Splats in normalized coordinates
    size : float
        Backing pixel size of the target surface
    cfg : RenderConfig
        Projection settings
    """
    gap = cfg.bridge_threshold * size
    previous = None
    for splat in stroke:
        x, y, r = _project(splat, size, cfg)
        if previous is not None:
            px, py, pr = previous
            if abs(y - py) > gap:
                mr = (r + pr) / 2
                yield ((x + px) / 2, (y + py) / 2, mr, mr * cfg.flatten)
        yield (x, y, r, r * cfg.flatten)
        previous = (x, y, r)


def draw_stroke(surface: RenderSurface, stroke: Stroke, cfg: RenderConfig) -> int:
    """Draw one stroke; returns the number of ellipses filled."""
    if not surface.is_ready:
        return 0
    count = 0
    for cx, cy, rx, ry in stroke_ellipses(stroke, surface.pixel_size, cfg):
        surface.fill_ellipse(cx, cy, rx, ry, cfg.ketchup_color)
        count += 1
    return count


def draw_strokes(surface: RenderSurface, strokes: Iterable[Stroke], cfg: RenderConfig) -> int:
    """Draw strokes in order; returns the total number of ellipses filled."""
    return sum(draw_stroke(surface, stroke, cfg) for stroke in strokes)
