# Spring integrator and input mode checks.
import math

from .config import HIT_RADIUS
from .geom import Point
from .sim import (
    ControlPoint, SimulationConfig, InputMode,
    spring_step, next_mode, assign_targets, follows_pointer
)

_EPS = 1e-6


def _settle(cp, cfg, steps, dt=1.0 / 60.0):
    for _ in range(steps):
        spring_step(cp, dt, cfg)


def test_spring_converges_to_target():
    cfg = SimulationConfig(stiffness=50.0, damping=8.0)
    cp = ControlPoint(position=(0, 0), velocity=(0, 0), target=(100, 0))
    _settle(cp, cfg, 300)
    err = math.hypot(cp.position.x - 100.0, cp.position.y)
    assert err < 1.0, f"position still {err:.4f} from target"
    assert cp.velocity.length() < 1e-2, f"velocity not settled: {cp.velocity}"


def test_displacement_envelope_shrinks():
    cfg = SimulationConfig(stiffness=50.0, damping=8.0)
    cp = ControlPoint(position=(0, 0), target=(100, -40))
    peaks = []
    for _ in range(3):
        peak = 0.0
        for _ in range(100):
            spring_step(cp, 1.0 / 60.0, cfg)
            peak = max(peak, (cp.target - cp.position).length())
        peaks.append(peak)
    assert peaks[0] > peaks[1] > peaks[2], f"displacement not decaying: {peaks}"


def test_stiff_spring_stays_bounded():
    cfg = SimulationConfig(stiffness=200.0, damping=0.0)
    cp = ControlPoint(position=(0, 0), target=(100, 0))
    _settle(cp, cfg, 2000, dt=1.0 / 30.0)
    assert abs(cp.position.x - 100.0) < 200.0, f"undamped spring diverged: {cp.position}"


def test_velocity_updates_before_position():
    cfg = SimulationConfig(stiffness=50.0, damping=8.0)
    cp = ControlPoint(position=(0, 0), velocity=(0, 0), target=(100, 0))
    spring_step(cp, 0.1, cfg)
    # a = 5000, v = 500, x = v * dt with the new velocity
    assert math.isclose(cp.velocity.x, 500.0)
    assert math.isclose(cp.position.x, 50.0)
    assert cp.target == Point(100.0, 0.0), "integrator must not touch target"


def test_zero_dt_is_identity():
    cfg = SimulationConfig()
    cp = ControlPoint(position=(3, 4), velocity=(5, -6), target=(100, 100))
    spring_step(cp, 0.0, cfg)
    assert cp.position == (3.0, 4.0) and cp.velocity == (5.0, -6.0)


def test_at_rest_targets_itself():
    cp = ControlPoint.at_rest((10, 20))
    assert cp.position == cp.target == (10.0, 20.0)
    assert cp.velocity == (0.0, 0.0)


def test_hit_radius_boundary():
    p1, p2 = (100.0, 100.0), (800.0, 100.0)
    inside = (100.0 + HIT_RADIUS - _EPS, 100.0)
    outside = (100.0 + HIT_RADIUS + _EPS, 100.0)
    assert next_mode(InputMode.ALL, inside, p1, p2) is InputMode.P1
    assert next_mode(InputMode.ALL, outside, p1, p2) is InputMode.LOCKED
    inside2 = (800.0, 100.0 - HIT_RADIUS + _EPS)
    assert next_mode(InputMode.LOCKED, inside2, p1, p2) is InputMode.P2


def test_transition_table():
    p1, p2 = (100.0, 100.0), (300.0, 100.0)
    empty = (200.0, 400.0)
    assert next_mode(InputMode.ALL, empty, p1, p2) is InputMode.LOCKED
    assert next_mode(InputMode.LOCKED, empty, p1, p2) is InputMode.ALL
    assert next_mode(InputMode.P1, empty, p1, p2) is InputMode.LOCKED
    assert next_mode(InputMode.P2, empty, p1, p2) is InputMode.LOCKED
    for mode in InputMode:
        assert next_mode(mode, p1, p1, p2) is InputMode.P1
        assert next_mode(mode, p2, p1, p2) is InputMode.P2


def test_overlap_prefers_p1():
    p1, p2 = (100.0, 100.0), (110.0, 100.0)
    assert next_mode(InputMode.ALL, (105.0, 100.0), p1, p2) is InputMode.P1


def _fresh_pair():
    return ControlPoint.at_rest((0, 0)), ControlPoint.at_rest((50, 50))


def test_assign_targets_per_mode():
    pointer = (500.0, 300.0)

    p1, p2 = _fresh_pair()
    assign_targets(InputMode.ALL, pointer, p1, p2)
    assert p1.target == (400.0, 250.0) and p2.target == (600.0, 350.0)

    p1, p2 = _fresh_pair()
    assign_targets(InputMode.P1, pointer, p1, p2)
    assert p1.target == (400.0, 250.0) and p2.target == (50.0, 50.0)

    p1, p2 = _fresh_pair()
    assign_targets(InputMode.P2, pointer, p1, p2)
    assert p1.target == (0.0, 0.0) and p2.target == (600.0, 350.0)

    p1, p2 = _fresh_pair()
    assign_targets(InputMode.LOCKED, pointer, p1, p2)
    assert p1.target == (0.0, 0.0) and p2.target == (50.0, 50.0)


def test_follows_pointer():
    assert follows_pointer(InputMode.ALL, InputMode.P1)
    assert follows_pointer(InputMode.ALL, InputMode.P2)
    assert follows_pointer(InputMode.P1, InputMode.P1)
    assert not follows_pointer(InputMode.P1, InputMode.P2)
    assert not follows_pointer(InputMode.LOCKED, InputMode.P1)


def test_config_coerces_without_validation():
    cfg = SimulationConfig()
    cfg.set("stiffness", "12.5")
    cfg.set("damping", -3)
    assert cfg.stiffness == 12.5 and cfg.damping == -3.0
    try:
        cfg.set("mass", 2.0)
    except KeyError:
        pass
    else:
        raise AssertionError("unknown config name should raise KeyError")
    built = SimulationConfig.from_flat({"tangent_length": 80, "unrelated": 1})
    assert built.as_dict() == {"stiffness": 50.0, "damping": 8.0, "tangent_length": 80.0}


def run():
    test_spring_converges_to_target()
    test_displacement_envelope_shrinks()
    test_stiff_spring_stays_bounded()
    test_velocity_updates_before_position()
    test_zero_dt_is_identity()
    test_at_rest_targets_itself()
    test_hit_radius_boundary()
    test_transition_table()
    test_overlap_prefers_p1()
    test_assign_targets_per_mode()
    test_follows_pointer()
    test_config_coerces_without_validation()


if __name__ == "__main__":
    run()
