# rope/draw.py

from __future__ import annotations

import math

import pygame
from pygame import gfxdraw

from .config import (
    BG_COLOR, HELPER_COLOR, TANGENT_COLOR, CURVE_COLOR, ENDPOINT_COLOR,
    ACTIVE_COLOR, INACTIVE_COLOR, STATUS_ALL_COLOR, STATUS_LOCK_COLOR, TEXT_COLOR,
    TANGENT_TS, TANGENT_OFFSET, CURVE_SAMPLES,
    ENDPOINT_RADIUS, CONTROL_RADIUS, SELECTED_RADIUS
)
from .geom import sample_curve, tangent_segment
from .sim import InputMode, follows_pointer

MODE_LABELS = {
    InputMode.ALL:    ("ALL (Both Pts)", STATUS_ALL_COLOR),
    InputMode.P1:     ("P1 Selected (Blue)", ACTIVE_COLOR),
    InputMode.P2:     ("P2 Selected (Blue)", ACTIVE_COLOR),
    InputMode.LOCKED: ("LOCKED (Input Paused)", STATUS_LOCK_COLOR),
}


# Largest coordinate handed to pygame; gfxdraw takes signed 16-bit ints.
COORD_LIMIT = 30000


def _ipt(p):
    """Integer pixel for p, clamped to COORD_LIMIT; None if p is not finite."""
    x, y = p[0], p[1]
    if not (math.isfinite(x) and math.isfinite(y)):
        return None
    x = max(-COORD_LIMIT, min(COORD_LIMIT, x))
    y = max(-COORD_LIMIT, min(COORD_LIMIT, y))
    return (int(round(x)), int(round(y)))


def draw_point(surface, pos, color, radius):
    """Filled anti-aliased marker. Returns False when skipped (non-finite or off-surface)."""
    pt = _ipt(pos)
    if pt is None:
        return False
    x, y = pt
    r = int(radius)
    if x + r < 0 or y + r < 0 or x - r > surface.get_width() or y - r > surface.get_height():
        return False
    gfxdraw.aacircle(surface, x, y, r, color)
    gfxdraw.filled_circle(surface, x, y, r, color)
    return True


def _line(surface, color, a, b, width=1):
    ia, ib = _ipt(a), _ipt(b)
    if ia is None or ib is None:
        return False
    pygame.draw.line(surface, color, ia, ib, width)
    return True


def draw_helper_lines(surface, curve):
    """Thin guides from each endpoint to its handle."""
    _line(surface, HELPER_COLOR, curve.p0, curve.p1)
    _line(surface, HELPER_COLOR, curve.p3, curve.p2)


def draw_tangents(surface, curve, length, ts=TANGENT_TS, offset=TANGENT_OFFSET):
    """Tangent markers along the curve. Degenerate samples are skipped."""
    drawn = 0
    for t in ts:
        seg = tangent_segment(t, *curve, length=length, offset=offset)
        if seg is None:
            continue
        if _line(surface, TANGENT_COLOR, seg[0], seg[1]):
            drawn += 1
    return drawn


def draw_curve(surface, curve, samples=CURVE_SAMPLES, width=4):
    """Curve polyline; non-finite samples are dropped. Returns points drawn."""
    pts = [p for p in map(_ipt, sample_curve(*curve, samples=samples)) if p is not None]
    if len(pts) < 2:
        return 0
    pygame.draw.lines(surface, CURVE_COLOR, False, pts, width)
    return len(pts)


def marker_style(mode, which):
    """Color/radius for control point `which` (InputMode.P1 or P2)."""
    color = ACTIVE_COLOR if follows_pointer(mode, which) else INACTIVE_COLOR
    radius = SELECTED_RADIUS if mode is which else CONTROL_RADIUS
    return color, radius


def draw_markers(surface, curve, mode):
    draw_point(surface, curve.p0, ENDPOINT_COLOR, ENDPOINT_RADIUS)
    draw_point(surface, curve.p3, ENDPOINT_COLOR, ENDPOINT_RADIUS)
    for which, pos in ((InputMode.P1, curve.p1), (InputMode.P2, curve.p2)):
        color, radius = marker_style(mode, which)
        draw_point(surface, pos, color, radius)


def draw_status(surface, mode, font, pos=(12, 10)):
    """Mode label in the corner."""
    text, color = MODE_LABELS[mode]
    label = font.render("Control: ", True, TEXT_COLOR)
    surface.blit(label, pos)
    surface.blit(font.render(text, True, color), (pos[0] + label.get_width(), pos[1]))


def draw_scene(surface, curve, mode, config, font=None, ui=None):
    """Full frame: helpers, tangents, curve, markers, status."""
    ui = ui or {}
    surface.fill(BG_COLOR)
    if ui.get("show_helpers", 1):
        draw_helper_lines(surface, curve)
    if ui.get("show_tangents", 1):
        draw_tangents(surface, curve, config.tangent_length)
    draw_curve(surface, curve)
    draw_markers(surface, curve, mode)
    if font is not None and ui.get("show_status", 1):
        draw_status(surface, mode, font)
