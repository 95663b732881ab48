"""Stochastic splat growth model.

Turns a tracked cursor position into ketchup splats, one step per processed
frame tick:

    1. Normalize the cursor with the canvas's on-screen bounding box
    2. Scan the active stroke backward; splat ``c`` steps back merges when
       |dx| and |dy| are both below ``c × merge_threshold`` and receives a
       pooling increment ``random() / pool_divisor / c``
    3. A merge with the newest splat (c == 1) makes the step a no-op: the
       lingering pointer pools instead of extending the stroke
    4. Otherwise the base size takes a biased random-walk step
       ``previous + (random() − walk_bias) / walk_divisor``
    5. Below ``taper_threshold`` the stream sputters: it may finish the
       squeeze for good, and may skip this splat
    6. Below ``min_base`` nothing is ever appended

This is a tunable heuristic, not fluid physics. Results are reproducible
only in distribution unless the caller seeds the RandomState.

Usage:
    rng = np.random.RandomState(7)
    point = normalize_cursor(cursor, canvas.bounds)
    outcome = grow_step(drawing.current, point, cfg.growth, rng)
"""

from __future__ import annotations

import enum
import logging
from typing import Optional, Tuple

import numpy as np

from omurice.simulator.strokes import Splat, Stroke
from omurice.utils.validators import GrowthConfig

logger = logging.getLogger(__name__)


class GrowthOutcome(str, enum.Enum):
    """What a single growth step did to the stroke."""

    APPENDED = "appended"
    POOLED = "pooled"
    SPUTTERED = "sputtered"  # tapering stream skipped this splat
    EXHAUSTED = "exhausted"  # base under the hard floor
    FINISHED = "finished"    # squeeze already over, stroke untouched


def normalize_cursor(
    cursor: Tuple[float, float],
    bounds: Tuple[float, float, float, float],
) -> Optional[Tuple[float, float]]:
    """Map display coordinates into the canvas's [0,1]² space.

    Parameters
    ----------
    cursor : (x, y)
        Pointer position in display pixels
    bounds : (left, top, width, height)
        Canvas rectangle on screen, display pixels

    Returns
    -------
    (x, y) or None
        Normalized position; None when the canvas has no area yet
    """
    left, top, width, height = bounds
    if width <= 0 or height <= 0:
        return None
    x, y = cursor
    return ((x - left) / width, (y - top) / height)


def merge_threshold(c: int, cfg: GrowthConfig) -> float:
    """Merge distance for the splat ``c`` positions back (1-based)."""
    return c * cfg.merge_threshold


def first_base(cfg: GrowthConfig, rng: np.random.RandomState) -> float:
    """Starting base for a stroke without splats."""
    return rng.random_sample() * cfg.first_base_span + cfg.first_base_min


def pool(stroke: Stroke, point: Tuple[float, float], cfg: GrowthConfig, rng: np.random.RandomState) -> bool:
    """Add pooling growth to recent splats close to ``point``.

    Returns True when the newest splat matched, i.e. the pointer has not
    moved far enough to extend the stroke.
    """
    x, y = point
    lingering = False
    for c, splat in enumerate(stroke.recent(cfg.pool_scan_limit), start=1):
        threshold = merge_threshold(c, cfg)
        if abs(x - splat.x) < threshold and abs(y - splat.y) < threshold:
            splat.extra += rng.random_sample() / cfg.pool_divisor / c
            if c == 1:
                lingering = True
    return lingering


def grow_step(
    stroke: Stroke,
    point: Tuple[float, float],
    cfg: GrowthConfig,
    rng: np.random.RandomState,
) -> GrowthOutcome:
    """Advance the growth simulation of ``stroke`` by one tick.

    Parameters
    ----------
    stroke : Stroke
        Active stroke; mutated in place (pooling, append, finish flag)
    point : (x, y)
        Normalized cursor position
    cfg : GrowthConfig
        Growth constants
    rng : np.random.RandomState
        Randomness source

    Returns
    -------
    GrowthOutcome
        What happened to the stroke
    """
    if stroke.squeeze_finished:
        return GrowthOutcome.FINISHED

    if pool(stroke, point, cfg, rng):
        return GrowthOutcome.POOLED

    previous = stroke.last.base if stroke.last is not None else first_base(cfg, rng)
    new_base = previous + (rng.random_sample() - cfg.walk_bias) / cfg.walk_divisor

    if new_base < cfg.taper_threshold:
        if rng.random_sample() < cfg.finish_probability:
            stroke.squeeze_finished = True
            logger.debug(f"Squeeze finished after {len(stroke)} splats (base={new_base:.3f})")
        if rng.random_sample() < cfg.skip_probability:
            return GrowthOutcome.SPUTTERED

    if new_base < cfg.min_base:
        return GrowthOutcome.EXHAUSTED

    x, y = point
    stroke.append(Splat(x=x, y=y, base=min(new_base, cfg.max_base), extra=0.0))
    return GrowthOutcome.APPENDED
