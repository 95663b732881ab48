"""Committed/active double-buffered compositor.

The compositor owns an off-visible RenderSurface holding the dish and every
committed stroke, and draws into a visible RenderSurface attached by the
frontend. Both always share the same size.

Redraw policy:
    - full_redraw(drawing): clear + dish + all committed strokes into the
      off-visible buffer, then present. Used on scene entry, resize, reset.
    - commit(stroke): draw one finished stroke into the buffer, once.
    - present(drawing): blit buffer → visible, then draw only the active
      stroke on top. Cost is bounded by the active stroke's length, not by
      the drawing's history.

Every method is a no-op returning False while no visible surface is attached
or the size is still zero; the caller retries on the next tick or resize.

Usage:
    compositor = Compositor(cfg.render, cfg.dish, cfg.canvas)
    compositor.attach(RenderSurface(scale=cfg.canvas.scale))
    compositor.resize(geometry.display_size)
    compositor.full_redraw(drawing)
"""

from __future__ import annotations

import logging
from typing import Optional

from omurice.simulator.dish import draw_dish
from omurice.simulator.ketchup import draw_stroke, draw_strokes
from omurice.simulator.strokes import Drawing, Stroke
from omurice.simulator.surface import RenderSurface
from omurice.utils.profiler import timer
from omurice.utils.validators import CanvasConfig, DishConfig, RenderConfig

logger = logging.getLogger(__name__)


class Compositor:
    """Off-visible committed buffer + visible presentation surface.

    Attributes
    ----------
    buffer : RenderSurface
        Off-visible surface: dish + committed strokes
    visible : RenderSurface or None
        Surface shown to the user; None until the frontend attaches one
    full_redraws : int
        Number of completed full redraws (diagnostics)
    commits : int
        Number of strokes folded incrementally
    """

    def __init__(
        self,
        render_cfg: RenderConfig,
        dish_cfg: DishConfig,
        canvas_cfg: CanvasConfig,
    ):
        self.render_cfg = render_cfg
        self.dish_cfg = dish_cfg
        self.canvas_cfg = canvas_cfg
        self.buffer = RenderSurface(0, canvas_cfg.scale, canvas_cfg.background)
        self.visible: Optional[RenderSurface] = None
        self.full_redraws = 0
        self.commits = 0

    @property
    def is_ready(self) -> bool:
        return self.visible is not None and self.visible.is_ready and self.buffer.is_ready

    def attach(self, visible: RenderSurface) -> None:
        """Attach the visible surface, matching it to the buffer's size."""
        if visible.scale != self.buffer.scale:
            raise ValueError(
                f"Visible surface scale {visible.scale} != buffer scale {self.buffer.scale}"
            )
        self.visible = visible
        if self.buffer.display_size:
            visible.resize(self.buffer.display_size)
        logger.debug(f"Visible surface attached ({visible.display_size}px display)")

    def detach(self) -> None:
        self.visible = None

    def resize(self, display_size: int) -> bool:
        """Resize buffer and visible surface together; True if anything changed."""
        changed = self.buffer.resize(display_size)
        if self.visible is not None:
            changed = self.visible.resize(display_size) or changed
        return changed

    def full_redraw(self, drawing: Drawing) -> bool:
        """Rebuild the buffer from scratch and present it."""
        if not self.is_ready:
            return False
        committed = drawing.committed
        with timer("full_redraw", sink=self._log_timing):
            self.buffer.clear()
            draw_dish(self.buffer, self.dish_cfg)
            draw_strokes(self.buffer, committed, self.render_cfg)
        self.full_redraws += 1
        self.present(drawing)
        return True

    def commit(self, stroke: Stroke) -> bool:
        """Fold a finished stroke into the buffer (draw it exactly once)."""
        if not self.is_ready:
            return False
        draw_stroke(self.buffer, stroke, self.render_cfg)
        self.commits += 1
        return True

    def present(self, drawing: Drawing) -> bool:
        """Blit the buffer to the visible surface and overlay the active stroke."""
        if not self.is_ready:
            return False
        self.visible.blit(self.buffer)
        if drawing.current is not None:
            draw_stroke(self.visible, drawing.current, self.render_cfg)
        return True

    def _log_timing(self, name: str, elapsed: float) -> None:
        logger.debug(f"{name}: {elapsed * 1e3:.1f} ms at {self.buffer.pixel_size}px")
