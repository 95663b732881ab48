"""Ketchup simulation and rendering.

Public API:
    from omurice.simulator import Compositor, Drawing, RenderSurface, grow_step

Modules:
    - strokes: Splat / Stroke / Drawing containers
    - growth: stochastic splat growth model
    - surface: numpy/OpenCV raster surface
    - dish: base-layer (plate, rice, egg) renderer
    - ketchup: foreground stroke renderer
    - compositor: committed/active double buffering
"""

from .compositor import Compositor
from .growth import GrowthOutcome, grow_step, normalize_cursor
from .strokes import Drawing, Splat, Stroke
from .surface import Bounds, RenderSurface

__all__ = [
    'Bounds',
    'Compositor',
    'Drawing',
    'GrowthOutcome',
    'RenderSurface',
    'Splat',
    'Stroke',
    'grow_step',
    'normalize_cursor',
]
