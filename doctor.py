"""Check that Elastic Bezier can run here: libraries, config, and a headless frame run."""

import math
import os
import platform
import sys
from pathlib import Path

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")


def _report(label, status, detail=""):
    print(f"[{status}] {label}" + (f" ({detail})" if detail else ""))
    return status != "FAIL"


def check_libraries():
    ok = _report("Python >= 3.8", "PASS" if sys.version_info >= (3, 8) else "FAIL",
                 platform.python_version())
    try:
        import pygame
        from pygame import gfxdraw  # noqa: F401
        ok &= _report("pygame + gfxdraw", "PASS", pygame.version.ver)
    except ImportError as e:
        ok &= _report("pygame + gfxdraw", "FAIL", str(e))
    try:
        import tkinter
        ok &= _report("tkinter (settings window)", "PASS", f"Tk {tkinter.TkVersion}")
    except ImportError as e:
        ok &= _report("tkinter (settings window)", "FAIL", str(e))
    return ok


def check_config():
    """config.json parses and every physics value survives coercion."""
    from rope.config import _config_candidates, _load_json, load_config, flat_config
    from rope.sim import SimulationConfig

    found = [p for p in _config_candidates() if Path(p).exists()]
    if found and _load_json(found[0]) is None:
        _report("config.json readable", "WARN", f"{found[0]} is not valid JSON, defaults will be used")
    flat = flat_config(load_config())
    cfg = SimulationConfig.from_flat(flat["physics"])
    stable = cfg.stiffness > 0 and cfg.damping >= 0
    _report("physics settings", "PASS" if stable else "WARN",
            ", ".join(f"{k}={v:g}" for k, v in cfg.as_dict().items())
            + ("" if stable else "; handles will not settle"))

    writable = False
    for cand in _config_candidates():
        parent = Path(cand).parent
        marker = parent / ".rope_write_test"
        try:
            marker.write_text("ok", encoding="utf-8")
            marker.unlink()
            writable = True
            break
        except OSError:
            continue
    return _report("writable config path", "PASS" if writable else "FAIL")


def check_frames(frames=300):
    """Run the scheduler headless with the real renderer on an off-screen surface."""
    import pygame
    from rope.context import SimulationContext, FrameScheduler, PointerMoved
    from rope.draw import draw_scene

    ctx = SimulationContext(800, 600)
    surface = pygame.Surface((800, 600))
    sched = FrameScheduler(ctx, render=lambda curve, mode: draw_scene(surface, curve, mode, ctx.config))
    sched.start(0.0)
    ctx.post(PointerMoved(400.0, 300.0))
    for i in range(1, frames + 1):
        sched.tick(i * 1000.0 / 60.0)

    err = math.hypot(*(ctx.p1.target - ctx.p1.position))
    settled = sched.frames == frames and err < 1.0
    return _report(f"headless run, {frames} frames", "PASS" if settled else "FAIL",
                   f"P1 {err:.3f} px from target")


def main() -> int:
    print("Elastic Bezier Doctor")
    print(f"- OS: {platform.system()} {platform.release()}")
    print(f"- Python: {sys.executable}")

    if not check_libraries():
        print("Missing libraries; skipping runtime checks.")
        return 1
    ok = check_config()
    ok &= check_frames()
    print("All checks passed." if ok else "One or more checks failed.")
    return 0 if ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
