# rope/sim.py
"""
Rope physics and input mode rules.

spring_step advances one control point toward its target with a
spring-damper law (unit mass, semi-implicit Euler). next_mode and
assign_targets make up the click-driven mode selector.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from enum import Enum

from .config import HIT_RADIUS, TARGET_OFFSET
from .geom import Point, ORIGIN, as_point, distance_sq


@dataclass
class ControlPoint:
    """Interior Bezier handle under physics control."""
    position: Point
    velocity: Point = ORIGIN
    target: Optional[Point] = None

    def __post_init__(self):
        self.position = as_point(self.position)
        self.velocity = as_point(self.velocity)
        self.target = self.position if self.target is None else as_point(self.target)

    @classmethod
    def at_rest(cls, pos) -> "ControlPoint":
        """Still point whose target is its own position."""
        p = as_point(pos)
        return cls(position=p, velocity=ORIGIN, target=p)


@dataclass
class SimulationConfig:
    """Live tunables. Values are coerced to float, never range-checked."""
    stiffness: float = 50.0
    damping: float = 8.0
    tangent_length: float = 50.0

    FIELDS = ("stiffness", "damping", "tangent_length")

    @classmethod
    def from_flat(cls, physics: dict) -> "SimulationConfig":
        """Build from the flattened physics section of config.json."""
        base = cls()
        for name in cls.FIELDS:
            if name not in physics:
                continue
            try:
                base.set(name, physics[name])
            except (TypeError, ValueError) as e:
                print(f"Bad config value for {name} ({physics[name]!r}), keeping {getattr(base, name)}: {e}")
        return base

    def set(self, name: str, value) -> None:
        if name not in self.FIELDS:
            raise KeyError(f"Unknown config value: {name}")
        setattr(self, name, float(value))

    def as_dict(self) -> dict:
        return {name: getattr(self, name) for name in self.FIELDS}


def spring_step(point: ControlPoint, dt: float, config: SimulationConfig) -> None:
    """
    Advance position/velocity by dt seconds. Velocity is updated first and
    the new velocity moves the position (semi-implicit Euler). dt is used
    as given; callers clamp it.
    """
    pos, vel, tgt = point.position, point.velocity, point.target

    ax = (tgt.x - pos.x) * config.stiffness - vel.x * config.damping
    ay = (tgt.y - pos.y) * config.stiffness - vel.y * config.damping

    vx = vel.x + ax * dt
    vy = vel.y + ay * dt

    point.velocity = Point(vx, vy)
    point.position = Point(pos.x + vx * dt, pos.y + vy * dt)


class InputMode(Enum):
    """Which control point(s) follow the pointer."""
    ALL = "ALL"
    P1 = "P1"
    P2 = "P2"
    LOCKED = "LOCKED"


def hit(click, pos, radius: float = HIT_RADIUS) -> bool:
    """Strictly inside the hit circle."""
    return distance_sq(click, pos) < radius * radius


def next_mode(mode: InputMode, click, p1_pos, p2_pos,
              radius: float = HIT_RADIUS) -> InputMode:
    """Mode after a click. P1 is tested first so it wins overlaps."""
    if hit(click, p1_pos, radius):
        return InputMode.P1
    if hit(click, p2_pos, radius):
        return InputMode.P2
    if mode is InputMode.LOCKED:
        return InputMode.ALL
    return InputMode.LOCKED


def follows_pointer(mode: InputMode, which: InputMode) -> bool:
    """True if control point `which` (P1 or P2) is driven in `mode`."""
    return mode is InputMode.ALL or mode is which


def assign_targets(mode: InputMode, pointer, p1: ControlPoint, p2: ControlPoint,
                   offset=TARGET_OFFSET) -> None:
    """Refresh targets of the points the current mode drives."""
    lead = as_point(pointer) - offset
    trail = as_point(pointer) + offset
    if mode is InputMode.ALL:
        p1.target = lead
        p2.target = trail
    elif mode is InputMode.P1:
        p1.target = lead
    elif mode is InputMode.P2:
        p2.target = trail
    elif mode is InputMode.LOCKED:
        pass
    else:
        raise ValueError(f"Unhandled input mode: {mode!r}")
