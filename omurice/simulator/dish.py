"""Base-layer renderer: the omurice plate.

Five flat-filled ellipses drawn bottom to top, each a fixed fraction of the
backing pixel size ``s`` so the dish looks identical at every resolution:

    layer         center               radii
    bottom        (s/2, s/2 + 0.05s)   (s/2.5, s/4.5)   rim shadow
    top           (s/2, s/2)           (s/2,   s/4)     plate
    hole          (s/2, s/2)           (s/2.2, s/4.2)   plate well
    rice          (s/2, s/2 - 0.02s)   (s/2.2, s/5)
    egg           (s/2, s/2 - 0.05s)   (s/2.2, s/5.5)

Later layers occlude earlier ones. Pure and stateless.
"""

from __future__ import annotations

from typing import List, Tuple

from omurice.simulator.surface import Color, RenderSurface
from omurice.utils.validators import DishConfig

# (name, center-y offset, rx divisor, ry divisor), fractions of the pixel size
DISH_LAYERS: Tuple[Tuple[str, float, float, float], ...] = (
    ("bottom", 0.05, 2.5, 4.5),
    ("top", 0.0, 2.0, 4.0),
    ("hole", 0.0, 2.2, 4.2),
    ("rice", -0.02, 2.2, 5.0),
    ("egg", -0.05, 2.2, 5.5),
)


def dish_ellipses(size: float, cfg: DishConfig) -> List[Tuple[float, float, float, float, Color]]:
    """Ellipses ``(cx, cy, rx, ry, color)`` of the dish, in draw order."""
    ellipses = []
    for name, dy, rx_div, ry_div in DISH_LAYERS:
        color = getattr(cfg, f"{name}_color")
        ellipses.append((size / 2, size / 2 + size * dy, size / rx_div, size / ry_div, color))
    return ellipses


def draw_dish(surface: RenderSurface, cfg: DishConfig) -> None:
    """Paint the dish onto ``surface`` (no-op if the surface is not ready)."""
    if not surface.is_ready:
        return
    for cx, cy, rx, ry, color in dish_ellipses(surface.pixel_size, cfg):
        surface.fill_ellipse(cx, cy, rx, ry, color)
