# rope/geom.py
"""
Cubic Bezier geometry for the rope curve.
Point math, curve evaluation, first derivative and the helpers the
renderer uses to sample the path and the tangent markers.
"""

from __future__ import annotations

import math
from typing import List, NamedTuple, Optional, Tuple


class Point(NamedTuple):
    """Immutable 2D coordinate, also used as a vector.

    Arithmetic is vector arithmetic (not tuple concatenation), so
    ``a - b`` is the displacement from b to a.
    """
    x: float
    y: float

    def __add__(self, other):
        return Point(self.x + other[0], self.y + other[1])

    def __sub__(self, other):
        return Point(self.x - other[0], self.y - other[1])

    def __mul__(self, k):
        return Point(self.x * k, self.y * k)

    __rmul__ = __mul__

    def __neg__(self):
        return Point(-self.x, -self.y)

    def dot(self, other) -> float:
        return self.x * other[0] + self.y * other[1]

    def length_sq(self) -> float:
        return self.x * self.x + self.y * self.y

    def length(self) -> float:
        return math.hypot(self.x, self.y)


ORIGIN = Point(0.0, 0.0)


def as_point(p) -> Point:
    """Coerce any (x, y) pair into a float Point."""
    if isinstance(p, Point):
        return p
    return Point(float(p[0]), float(p[1]))


def distance_sq(a, b) -> float:
    """Squared euclidean distance."""
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    return dx * dx + dy * dy


def bezier_point(t: float, p0, p1, p2, p3) -> Point:
    """
    Cubic Bezier position at t using the Bernstein weights.
    p0 and p3 are endpoints, p1 and p2 are control handles.
    t outside [0, 1] extrapolates.
    """
    mt = 1.0 - t
    mt2 = mt * mt
    t2 = t * t

    c0 = mt2 * mt
    c1 = 3.0 * mt2 * t
    c2 = 3.0 * mt * t2
    c3 = t2 * t

    x = c0 * p0[0] + c1 * p1[0] + c2 * p2[0] + c3 * p3[0]
    y = c0 * p0[1] + c1 * p1[1] + c2 * p2[1] + c3 * p3[1]
    return Point(x, y)


def bezier_tangent(t: float, p0, p1, p2, p3) -> Point:
    """
    First derivative dB/dt of the cubic at t. Not normalized; can be
    zero-length when handles coincide with the endpoints.
    """
    mt = 1.0 - t
    c0 = 3.0 * mt * mt
    c1 = 6.0 * mt * t
    c2 = 3.0 * t * t

    dx = c0 * (p1[0] - p0[0]) + c1 * (p2[0] - p1[0]) + c2 * (p3[0] - p2[0])
    dy = c0 * (p1[1] - p0[1]) + c1 * (p2[1] - p1[1]) + c2 * (p3[1] - p2[1])
    return Point(dx, dy)


def unit(v) -> Optional[Point]:
    """Normalize v; None for a zero-length vector."""
    L = math.hypot(v[0], v[1])
    if L == 0.0 or not math.isfinite(L):
        return None
    return Point(v[0] / L, v[1] / L)


def sample_curve(p0, p1, p2, p3, samples: int = 100) -> List[Point]:
    """
    Polyline through the curve: P0 followed by B(i/samples) for i = 1..samples.
    """
    samples = max(1, int(samples))
    pts = [as_point(p0)]
    for i in range(1, samples + 1):
        pts.append(bezier_point(i / samples, p0, p1, p2, p3))
    return pts


def tangent_segment(t: float, p0, p1, p2, p3, length: float,
                    offset: float = 6.0) -> Optional[Tuple[Point, Point]]:
    """
    Short tangent marker at B(t): runs `length` either side of the curve
    point along the unit tangent, shifted `offset` along the left normal.
    Returns None where the tangent is degenerate.
    """
    u = unit(bezier_tangent(t, p0, p1, p2, p3))
    if u is None:
        return None
    P = bezier_point(t, p0, p1, p2, p3)
    normal = Point(-u.y, u.x)
    shift = normal * offset
    start = P - u * length + shift
    end = P + u * length + shift
    return start, end


def convex_hull(points) -> List[Point]:
    """Counter-clockwise hull (monotone chain); collinear points dropped."""
    pts = sorted(set(as_point(p) for p in points))
    if len(pts) <= 2:
        return pts

    def cross(o, a, b):
        return (a[0] - o[0]) * (b[1] - o[1]) - (a[1] - o[1]) * (b[0] - o[0])

    lower, upper = [], []
    for p in pts:
        while len(lower) >= 2 and cross(lower[-2], lower[-1], p) <= 0:
            lower.pop()
        lower.append(p)
    for p in reversed(pts):
        while len(upper) >= 2 and cross(upper[-2], upper[-1], p) <= 0:
            upper.pop()
        upper.append(p)
    return lower[:-1] + upper[:-1]


def point_in_hull(p, hull, eps: float = 1e-9) -> bool:
    """True if p lies inside or on a counter-clockwise convex hull."""
    n = len(hull)
    if n == 0:
        return False
    if n == 1:
        return distance_sq(p, hull[0]) <= eps
    if n == 2:
        a, b = hull
        ab = Point(b[0] - a[0], b[1] - a[1])
        ap = Point(p[0] - a[0], p[1] - a[1])
        cross = ab.x * ap.y - ab.y * ap.x
        if abs(cross) > eps * max(1.0, ab.length()):
            return False
        d = ap.dot(ab)
        return -eps <= d <= ab.length_sq() + eps
    for i in range(n):
        a, b = hull[i], hull[(i + 1) % n]
        cross = (b[0] - a[0]) * (p[1] - a[1]) - (b[1] - a[1]) * (p[0] - a[0])
        if cross < -eps:
            return False
    return True
