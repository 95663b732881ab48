"""The single update loop: scene, drawing, surfaces and subscriptions.

OmuriceProgram owns every piece of mutable state (scene machine, drawing,
compositor, cursor) and handles one message at a time:

    Message            Source             Effect
    start_game         home button        home → game, settle redraw
    open_about         home button        home → about
    return_home        about/game button  → home, drawing discarded, dish repainted
    reset              game button        drawing cleared, settle redraw
    pointer_down/move/up  InputAdapter    stroke start / cursor / stroke commit
    draw_tick(delta)   FrameClock         growth step + per-frame composite
    window_size(w, h)  ResizeNotifier     canvas geometry + full redraw
    download           game button        PNG export of the visible surface
    toggle_locale      home button        next language, persisted

Nothing in the draw path raises: missing surfaces and degenerate sizes make
operations no-ops that heal on the next tick or resize.

Usage:
    program = OmuriceProgram(load_app_config())
    program.attach_canvas(RenderSurface(scale=2))
    program.start(size_getter)        # inside a running asyncio loop
    ...
    program.stop()
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional, Tuple

import numpy as np

from omurice.app.content import Content, get_content, next_locale, resolve_locale
from omurice.app.export import ExportSink
from omurice.app.input import PointerEvent, PointerKind
from omurice.app.preferences import LocalePreferenceStore
from omurice.app.scenes import Scene, SceneMachine, Transition
from omurice.app.subscriptions import FrameClock, ResizeNotifier, Subscription, schedule_once
from omurice.simulator.compositor import Compositor
from omurice.simulator.growth import GrowthOutcome, grow_step, normalize_cursor
from omurice.simulator.strokes import Drawing
from omurice.simulator.surface import RenderSurface
from omurice.utils.logging_config import push_context
from omurice.utils.sizing import CanvasGeometry, compute_canvas_geometry
from omurice.utils.validators import AppConfigV1

logger = logging.getLogger(__name__)

Scheduler = Callable[[float, Callable[[], None]], Any]


def _on_canvas(point: Tuple[float, float]) -> bool:
    x, y = point
    return 0.0 <= x <= 1.0 and 0.0 <= y <= 1.0


class OmuriceProgram:
    """Application state and message handlers.

    Parameters
    ----------
    config : AppConfigV1
        Validated application config
    rng : np.random.RandomState, optional
        Randomness for the growth model (seed it for reproducible runs)
    schedule : Scheduler, optional
        ``schedule(delay_ms, callback)`` for the settle delay;
        defaults to schedule_once on the running asyncio loop
    export_sink : ExportSink, optional
        Defaults to the configured export directory
    preferences : LocalePreferenceStore, optional
        Defaults to the configured preferences file
    """

    def __init__(
        self,
        config: AppConfigV1,
        *,
        rng: Optional[np.random.RandomState] = None,
        schedule: Optional[Scheduler] = None,
        export_sink: Optional[ExportSink] = None,
        preferences: Optional[LocalePreferenceStore] = None,
    ) -> None:
        self.cfg = config
        self.rng = rng if rng is not None else np.random.RandomState()
        self.scenes = SceneMachine()
        self.drawing = Drawing()
        self.compositor = Compositor(config.render, config.dish, config.canvas)
        self.export_sink = export_sink or ExportSink(config.export.directory, config.export.prefix)
        self.preferences = preferences or LocalePreferenceStore(config.locale.preferences_path)
        self._schedule = schedule or schedule_once

        self.cursor: Tuple[float, float] = (0.0, 0.0)
        self.is_drawing = False
        self.geometry: Optional[CanvasGeometry] = None
        self.last_outcome: Optional[GrowthOutcome] = None
        self._pending_ms = 0.0

        self.locale = resolve_locale(self.preferences.get() or config.locale.default)
        push_context(locale=self.locale)

        self._subscriptions: List[Subscription] = []

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def scene(self) -> Scene:
        return self.scenes.scene

    @property
    def content(self) -> Content:
        return get_content(self.locale)

    @property
    def canvas(self) -> Optional[RenderSurface]:
        return self.compositor.visible

    def attach_canvas(self, surface: RenderSurface) -> None:
        """Mount the visible surface; redraw at once if a size is known."""
        self.compositor.attach(surface)
        if self.geometry is not None:
            self.compositor.resize(self.geometry.display_size)
            self.full_redraw()

    def detach_canvas(self) -> None:
        self.compositor.detach()

    def start(self, size_getter: Callable[[], Tuple[int, int]]) -> None:
        """Subscribe the frame clock and resize notifier (once per process)."""
        if self._subscriptions:
            raise RuntimeError("Program subscriptions already started")
        clock = FrameClock(self.cfg.clock.fps)
        resize = ResizeNotifier(size_getter, self.cfg.clock.resize_poll_ms)
        self._subscriptions = [clock, resize]
        clock.start(self.draw_tick)
        resize.start(lambda size: self.window_size(*size))

    def stop(self) -> None:
        for sub in self._subscriptions:
            sub.cancel()
        self._subscriptions = []

    # ------------------------------------------------------------------
    # Scene messages
    # ------------------------------------------------------------------

    def start_game(self) -> bool:
        if self.scenes.try_transition(Transition.START_GAME) is None:
            return False
        self._discard_drawing()
        self._schedule_settle_redraw()
        return True

    def open_about(self) -> bool:
        return self.scenes.try_transition(Transition.OPEN_ABOUT) is not None

    def return_home(self) -> bool:
        if self.scenes.try_transition(Transition.RETURN_HOME) is None:
            return False
        self._discard_drawing()
        self.full_redraw()
        return True

    def reset(self) -> bool:
        if self.scenes.try_transition(Transition.RESET) is None:
            return False
        self._discard_drawing()
        self._schedule_settle_redraw()
        return True

    def _discard_drawing(self) -> None:
        self.drawing.clear()
        self.is_drawing = False

    def _schedule_settle_redraw(self) -> None:
        self._schedule(self.cfg.clock.settle_delay_ms, self._on_settled)

    def _on_settled(self) -> None:
        if not self.scenes.runs_drawing:
            logger.debug("Settle redraw skipped: left the game scene")
            return
        if not self.full_redraw():
            logger.debug("Settle redraw skipped: canvas not ready")

    # ------------------------------------------------------------------
    # Pointer messages
    # ------------------------------------------------------------------

    def handle_pointer(self, event: PointerEvent) -> None:
        if event.kind is PointerKind.DOWN:
            self.pointer_down(event.x, event.y)
        elif event.kind is PointerKind.MOVE:
            self.pointer_move(event.x, event.y)
        else:
            self.pointer_up(event.x, event.y)

    def pointer_down(self, x: float, y: float) -> None:
        self.cursor = (x, y)
        if not self.scenes.runs_drawing:
            return
        if self.drawing.current is not None:
            self._commit_current()
        self.drawing.begin_stroke()
        self.is_drawing = True

    def pointer_move(self, x: float, y: float) -> None:
        self.cursor = (x, y)

    def pointer_up(self, x: float, y: float) -> None:
        self.cursor = (x, y)
        self.is_drawing = False
        if self.drawing.current is None:
            return
        self.drawing.current.squeeze_finished = True
        self._commit_current()

    def _commit_current(self) -> None:
        stroke = self.drawing.commit_current()
        if stroke is None:
            return
        # Not ready: the stroke is still in the committed arena and the
        # next full redraw picks it up.
        if self.compositor.commit(stroke):
            self.compositor.present(self.drawing)
        logger.debug(f"Stroke committed ({len(stroke)} splats, {len(self.drawing)} strokes)")

    # ------------------------------------------------------------------
    # Clock and resize messages
    # ------------------------------------------------------------------

    def draw_tick(self, delta_ms: float) -> bool:
        """Advance growth and composite one frame; False if the tick was a no-op.

        Deltas accumulate until ``min_tick_ms`` has passed since the last
        processed tick, so frame rates above 100 fps still grow strokes.
        """
        self._pending_ms += delta_ms
        if self._pending_ms < self.cfg.clock.min_tick_ms:
            return False
        self._pending_ms = 0.0
        if not self.scenes.runs_drawing or not self.compositor.is_ready:
            return False
        if not self.is_drawing:
            return False

        stroke = self.drawing.current
        if stroke is not None and not stroke.squeeze_finished:
            point = normalize_cursor(self.cursor, self.canvas.bounds.as_tuple())
            if point is not None and _on_canvas(point):
                self.last_outcome = grow_step(stroke, point, self.cfg.growth, self.rng)
        return self.compositor.present(self.drawing)

    def window_size(self, width: int, height: int) -> bool:
        """Recompute canvas geometry; True if a full redraw happened."""
        geometry = compute_canvas_geometry(
            width, height, margin=self.cfg.canvas.margin, scale=self.cfg.canvas.scale,
        )
        if geometry is None:
            logger.debug(f"Degenerate viewport {width}x{height}, drawing skipped")
            return False
        if geometry == self.geometry:
            return False
        self.geometry = geometry
        self.compositor.resize(geometry.display_size)
        logger.info(f"Canvas resized to {geometry.display_size}px ({geometry.pixel_size}px backing)")
        return self.full_redraw()

    def full_redraw(self) -> bool:
        return self.compositor.full_redraw(self.drawing)

    # ------------------------------------------------------------------
    # Export and locale
    # ------------------------------------------------------------------

    def download(self):
        """Export the visible canvas; returns the written path or None."""
        try:
            return self.export_sink.export(self.canvas)
        except (OSError, RuntimeError) as e:
            logger.warning(f"Export failed: {e}")
            return None

    def select_locale(self, locale: str) -> str:
        self.locale = resolve_locale(locale)
        push_context(locale=self.locale)
        self.preferences.set(self.locale)
        return self.locale

    def toggle_locale(self) -> str:
        return self.select_locale(next_locale(self.locale))
