# rope/context.py
"""
Simulation context and frame scheduler.

SimulationContext owns everything the frame loop mutates: the tunables,
both control points, the fixed endpoints, the pointer and the input mode.
Input callbacks either call its methods directly or post events that the
scheduler drains at the start of the next tick. Everything runs on one
thread, so events are applied whole and in arrival order.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Callable, NamedTuple, Optional, Tuple, Union

from .config import MAX_DT
from .geom import Point, as_point, bezier_point, bezier_tangent
from .sim import (
    ControlPoint, InputMode, SimulationConfig,
    assign_targets, next_mode, spring_step
)


class CurveDefinition(NamedTuple):
    """The four points of the cubic, as handed to the renderer."""
    p0: Point
    p1: Point
    p2: Point
    p3: Point

    def point(self, t: float) -> Point:
        return bezier_point(t, *self)

    def tangent(self, t: float) -> Point:
        return bezier_tangent(t, *self)


# ---------------- events ----------------

@dataclass(frozen=True)
class PointerMoved:
    x: float
    y: float


@dataclass(frozen=True)
class Clicked:
    x: float
    y: float


@dataclass(frozen=True)
class Resized:
    width: float
    height: float


@dataclass(frozen=True)
class ConfigChanged:
    name: str
    value: float


Event = Union[PointerMoved, Clicked, Resized, ConfigChanged]


def endpoints_for_size(width, height, margin) -> Tuple[Point, Point]:
    """Fixed endpoints: `margin` in from each side, vertically centred."""
    mid_y = height / 2.0
    return Point(float(margin), mid_y), Point(width - float(margin), mid_y)


class SimulationContext:
    """Mutable state of one rope simulation."""

    def __init__(self, width, height, config: Optional[SimulationConfig] = None,
                 endpoint_margin: float = 300.0):
        self.config = config if config is not None else SimulationConfig()
        self.endpoint_margin = float(endpoint_margin)
        self.width = float(width)
        self.height = float(height)
        self.p0, self.p3 = endpoints_for_size(self.width, self.height, self.endpoint_margin)

        rest_y = self.height / 4.0
        self.p1 = ControlPoint.at_rest((self.width / 4.0, rest_y))
        self.p2 = ControlPoint.at_rest((self.width * 3.0 / 4.0, rest_y))

        self.mode = InputMode.ALL
        self.pointer = Point(self.width / 2.0, self.height / 2.0)
        self._queue = deque()

    # -- direct input --

    def move_pointer(self, x, y) -> bool:
        """Track the pointer unless locked. Returns True if it was updated."""
        if self.mode is InputMode.LOCKED:
            return False
        self.pointer = Point(float(x), float(y))
        return True

    def click(self, x, y) -> InputMode:
        """Run the mode transition for a click at (x, y)."""
        prev = self.mode
        self.mode = next_mode(prev, (float(x), float(y)),
                              self.p1.position, self.p2.position)
        if self.mode is not prev:
            print(f"Mode: {prev.value} -> {self.mode.value}")
        return self.mode

    def resize(self, width, height) -> None:
        """Move the endpoints for a new surface size; physics is untouched."""
        self.width = float(width)
        self.height = float(height)
        self.p0, self.p3 = endpoints_for_size(self.width, self.height, self.endpoint_margin)

    def set_config(self, name: str, value) -> None:
        self.config.set(name, value)

    # -- queued input --

    def post(self, event: Event) -> None:
        self._queue.append(event)

    @property
    def pending(self) -> int:
        return len(self._queue)

    def apply(self, event: Event) -> None:
        if isinstance(event, PointerMoved):
            self.move_pointer(event.x, event.y)
        elif isinstance(event, Clicked):
            self.click(event.x, event.y)
        elif isinstance(event, Resized):
            self.resize(event.width, event.height)
        elif isinstance(event, ConfigChanged):
            self.set_config(event.name, event.value)
        else:
            raise TypeError(f"Unknown event: {event!r}")

    def drain(self) -> int:
        """Apply queued events in arrival order; returns how many ran."""
        n = 0
        while self._queue:
            self.apply(self._queue.popleft())
            n += 1
        return n

    # -- frame work --

    def update(self, dt: float) -> None:
        """Target assignment for the current mode, then one physics step."""
        assign_targets(self.mode, self.pointer, self.p1, self.p2)
        spring_step(self.p1, dt, self.config)
        spring_step(self.p2, dt, self.config)

    def curve(self) -> CurveDefinition:
        return CurveDefinition(as_point(self.p0), self.p1.position,
                               self.p2.position, as_point(self.p3))

    def control_points(self) -> Tuple[ControlPoint, ControlPoint]:
        return self.p1, self.p2


def clamp_dt(now_ms: float, last_ms: float, max_dt: float = MAX_DT) -> float:
    """Seconds between two millisecond timestamps, clamped to [0, max_dt]."""
    return min(max(now_ms - last_ms, 0.0) / 1000.0, max_dt)


RenderFn = Callable[[CurveDefinition, InputMode], None]


class FrameScheduler:
    """Runs one simulation tick per display refresh."""

    def __init__(self, context: SimulationContext, render: Optional[RenderFn] = None,
                 max_dt: float = MAX_DT):
        self.context = context
        self.render = render
        self.max_dt = max_dt
        self.last_ms = 0.0
        self.last_dt = 0.0
        self.frames = 0
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def start(self, now_ms: float = 0.0) -> None:
        self.last_ms = float(now_ms)
        self._running = True

    def stop(self) -> None:
        """No further ticks run after this."""
        self._running = False

    def tick(self, now_ms: float) -> Optional[CurveDefinition]:
        if not self._running:
            return None
        ctx = self.context
        ctx.drain()

        dt = clamp_dt(now_ms, self.last_ms, self.max_dt)
        ctx.update(dt)

        curve = ctx.curve()
        if self.render is not None:
            self.render(curve, ctx.mode)
        self.last_ms = float(now_ms)
        self.last_dt = dt
        self.frames += 1
        return curve
