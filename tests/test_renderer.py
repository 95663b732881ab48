"""Test the dish (base layer) and ketchup (foreground) renderers.

Test suites:
1. Dish geometry: five layers in fixed order, proportional to pixel size
2. Dish raster: layer colors visible where they should be, deterministic
3. Ketchup projection: splat size scaling and vertical flattening
4. Gap bridging: one midpoint splat per large vertical jump

Run:
    pytest tests/test_renderer.py -v
"""

import numpy as np
import pytest

from omurice.simulator.dish import DISH_LAYERS, dish_ellipses, draw_dish
from omurice.simulator.ketchup import draw_stroke, draw_strokes, stroke_ellipses
from omurice.simulator.strokes import Splat, Stroke
from omurice.simulator.surface import RenderSurface
from omurice.utils.validators import DishConfig, RenderConfig


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def dish_cfg():
    return DishConfig()


@pytest.fixture
def render_cfg():
    return RenderConfig()


@pytest.fixture
def surface():
    return RenderSurface(100, scale=2)


# ============================================================================
# TEST SUITE 1: Dish geometry
# ============================================================================

def test_dish_layer_order(dish_cfg):
    assert [name for name, *_ in DISH_LAYERS] == ["bottom", "top", "hole", "rice", "egg"]
    colors = [e[4] for e in dish_ellipses(200, dish_cfg)]
    assert colors == [
        (222, 228, 227),
        (234, 240, 239),
        (232, 236, 235),
        (246, 140, 57),
        (239, 202, 87),
    ]


def test_dish_geometry_proportional(dish_cfg):
    s = 400.0
    bottom, top, hole, rice, egg = dish_ellipses(s, dish_cfg)
    assert bottom[:4] == pytest.approx((s / 2, s / 2 + 0.05 * s, s / 2.5, s / 4.5))
    assert top[:4] == pytest.approx((s / 2, s / 2, s / 2, s / 4))
    assert hole[:4] == pytest.approx((s / 2, s / 2, s / 2.2, s / 4.2))
    assert rice[:4] == pytest.approx((s / 2, s / 2 - 0.02 * s, s / 2.2, s / 5))
    assert egg[:4] == pytest.approx((s / 2, s / 2 - 0.05 * s, s / 2.2, s / 5.5))


# ============================================================================
# TEST SUITE 2: Dish raster
# ============================================================================

def test_draw_dish_colors(surface, dish_cfg):
    draw_dish(surface, dish_cfg)
    s = surface.pixel_size
    # center of the egg layer
    assert tuple(surface.pixels[int(s / 2 - 0.05 * s), s // 2]) == dish_cfg.egg_color
    # plate rim, left of the hole
    assert tuple(surface.pixels[s // 2, int(s * 0.03)]) == dish_cfg.top_color
    # corners untouched
    assert tuple(surface.pixels[0, 0]) == (255, 255, 255)
    assert tuple(surface.pixels[s - 1, s - 1]) == (255, 255, 255)


def test_draw_dish_deterministic(dish_cfg):
    a = RenderSurface(80, scale=2)
    b = RenderSurface(80, scale=2)
    draw_dish(a, dish_cfg)
    draw_dish(b, dish_cfg)
    np.testing.assert_array_equal(a.pixels, b.pixels)


def test_draw_dish_not_ready(dish_cfg):
    surface = RenderSurface()
    draw_dish(surface, dish_cfg)
    assert not surface.is_ready


# ============================================================================
# TEST SUITE 3: Ketchup projection
# ============================================================================

def test_splat_projection(render_cfg):
    stroke = Stroke([Splat(0.25, 0.5, base=0.6, extra=0.2)])
    (cx, cy, rx, ry), = stroke_ellipses(stroke, 400, render_cfg)

    assert (cx, cy) == pytest.approx((100.0, 200.0))
    assert rx == pytest.approx(0.8 * 400 / 40)
    assert ry == pytest.approx(rx * 0.4)


def test_draw_stroke_paints_ketchup(surface, render_cfg):
    stroke = Stroke([Splat(0.5, 0.5, base=1.0, extra=3.0)])
    assert draw_stroke(surface, stroke, render_cfg) == 1
    assert tuple(surface.pixels[100, 100]) == render_cfg.ketchup_color


def test_draw_stroke_not_ready(render_cfg):
    assert draw_stroke(RenderSurface(), Stroke([Splat(0.5, 0.5, 1.0)]), render_cfg) == 0


# ============================================================================
# TEST SUITE 4: Gap bridging
# ============================================================================

def test_no_bridge_for_horizontal_motion(render_cfg):
    stroke = Stroke([Splat(0.1, 0.5, 0.5), Splat(0.4, 0.5, 0.5), Splat(0.7, 0.5, 0.5)])
    assert len(list(stroke_ellipses(stroke, 400, render_cfg))) == 3


def test_bridge_for_vertical_jump(render_cfg):
    stroke = Stroke([Splat(0.5, 0.2, 0.4), Splat(0.5, 0.6, 0.8)])
    ellipses = list(stroke_ellipses(stroke, 400, render_cfg))

    assert len(ellipses) == 3
    first, bridge, second = ellipses
    assert bridge[:2] == pytest.approx((200.0, 160.0))
    assert bridge[2] == pytest.approx((first[2] + second[2]) / 2)
    assert bridge[3] == pytest.approx(bridge[2] * render_cfg.flatten)


def test_bridge_threshold_boundary(render_cfg):
    size = 1000
    gap = render_cfg.bridge_threshold  # 4 px at 1000 px
    below = Stroke([Splat(0.5, 0.5, 0.5), Splat(0.5, 0.5 + gap / 2, 0.5)])
    above = Stroke([Splat(0.5, 0.5, 0.5), Splat(0.5, 0.5 + 2 * gap, 0.5)])
    assert len(list(stroke_ellipses(below, size, render_cfg))) == 2
    assert len(list(stroke_ellipses(above, size, render_cfg))) == 3


def test_draw_strokes_counts(surface, render_cfg):
    strokes = [
        Stroke([Splat(0.2, 0.2, 0.5)]),
        Stroke([Splat(0.5, 0.2, 0.5), Splat(0.5, 0.8, 0.5)]),
    ]
    assert draw_strokes(surface, strokes, render_cfg) == 4
