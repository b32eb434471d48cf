# Off-screen render smoke checks.
import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame

from .config import ENDPOINT_COLOR, ACTIVE_COLOR, INACTIVE_COLOR, BG_COLOR, CONTROL_RADIUS, SELECTED_RADIUS
from .context import SimulationContext, CurveDefinition, FrameScheduler
from .draw import draw_scene, draw_tangents, draw_curve, draw_point, marker_style, MODE_LABELS
from .geom import Point
from .sim import InputMode


def _rgb(surface, pos):
    return tuple(surface.get_at((int(pos[0]), int(pos[1]))))[:3]


def test_scene_draws_markers():
    ctx = SimulationContext(640, 480)
    surface = pygame.Surface((640, 480))
    curve = ctx.curve()
    draw_scene(surface, curve, InputMode.ALL, ctx.config)
    assert _rgb(surface, curve.p0) == ENDPOINT_COLOR
    assert _rgb(surface, curve.p3) == ENDPOINT_COLOR
    assert _rgb(surface, curve.p1) == ACTIVE_COLOR
    assert _rgb(surface, curve.p2) == ACTIVE_COLOR
    assert _rgb(surface, (5, 470)) == BG_COLOR


def test_locked_markers_are_dimmed():
    ctx = SimulationContext(640, 480)
    surface = pygame.Surface((640, 480))
    curve = ctx.curve()
    draw_scene(surface, curve, InputMode.LOCKED, ctx.config)
    assert _rgb(surface, curve.p1) == INACTIVE_COLOR


def test_marker_style():
    assert marker_style(InputMode.ALL, InputMode.P1) == (ACTIVE_COLOR, CONTROL_RADIUS)
    assert marker_style(InputMode.P1, InputMode.P1) == (ACTIVE_COLOR, SELECTED_RADIUS)
    assert marker_style(InputMode.P1, InputMode.P2) == (INACTIVE_COLOR, CONTROL_RADIUS)
    assert marker_style(InputMode.LOCKED, InputMode.P2) == (INACTIVE_COLOR, CONTROL_RADIUS)
    assert set(MODE_LABELS) == set(InputMode)


def test_degenerate_tangents_skipped():
    surface = pygame.Surface((200, 200))
    p = Point(100.0, 100.0)
    assert draw_tangents(surface, CurveDefinition(p, p, p, p), 50.0) == 0
    line = CurveDefinition(Point(10, 100), Point(60, 100), Point(120, 100), Point(190, 100))
    assert draw_tangents(surface, line, 20.0) == 5


def test_runaway_handles_do_not_crash():
    surface = pygame.Surface((640, 480))
    p0, p3 = Point(100.0, 240.0), Point(540.0, 240.0)
    far = CurveDefinition(p0, Point(1e6, 1e6), Point(-1e6, 3e5), p3)
    draw_scene(surface, far, InputMode.ALL, SimulationContext(640, 480).config)
    assert _rgb(surface, p0) == ENDPOINT_COLOR

    nan = float("nan")
    broken = CurveDefinition(p0, Point(1e6, 1e6), Point(nan, nan), p3)
    draw_scene(surface, broken, InputMode.P2, SimulationContext(640, 480).config)
    assert _rgb(surface, p3) == ENDPOINT_COLOR
    assert draw_curve(surface, broken) == 0, "only P0 is finite, nothing to join"
    assert draw_point(surface, Point(nan, 5.0), ACTIVE_COLOR, 12) is False
    assert draw_point(surface, Point(1e6, 1e6), ACTIVE_COLOR, 12) is False


def test_negative_stiffness_keeps_rendering():
    ctx = SimulationContext(640, 480)
    ctx.set_config("stiffness", -50)
    surface = pygame.Surface((640, 480))
    sched = FrameScheduler(ctx, render=lambda curve, mode: draw_scene(surface, curve, mode, ctx.config))
    sched.start(0.0)
    ctx.move_pointer(500.0, 400.0)
    for i in range(1, 401):
        sched.tick(i * 16.0)
    assert sched.frames == 400
    assert abs(ctx.p1.position.x) > 1e4 or ctx.p1.position.x != ctx.p1.position.x, "handles should have run away"


def run():
    test_scene_draws_markers()
    test_locked_markers_are_dimmed()
    test_marker_style()
    test_degenerate_tangents_skipped()
    test_runaway_handles_do_not_crash()
    test_negative_stiffness_keeps_rendering()


if __name__ == "__main__":
    run()
