# main.py
import os

# Ensure SDL picks a usable video driver (helps when run from terminals that default to headless)
if os.name == "nt" and not os.environ.get("SDL_VIDEODRIVER"):
    os.environ["SDL_VIDEODRIVER"] = "windows"

import pygame

from rope.config import WINDOW_WIDTH, WINDOW_HEIGHT, FPS, load_config, flat_config, _num
from rope.context import (
    SimulationContext, FrameScheduler, PointerMoved, Clicked, Resized
)
from rope.draw import draw_scene
from rope.sim import SimulationConfig
from rope.ui import open_settings_window, pump_tk, close_tk

APP_TITLE = "Elastic Bezier"


def build_context(cfg, width, height):
    """Simulation context seeded from the flat config."""
    return SimulationContext(
        width, height,
        config=SimulationConfig.from_flat(cfg["physics"]),
        endpoint_margin=_num(cfg["layout"].get("endpoint_margin_px"), 300.0),
    )


def translate_event(event, context, scheduler):
    """Map one pygame event onto the simulation. Returns the new surface on resize."""
    if event.type == pygame.QUIT:
        scheduler.stop()
    elif event.type == pygame.KEYDOWN:
        if event.key == pygame.K_ESCAPE:
            scheduler.stop()
    elif event.type == pygame.MOUSEMOTION:
        context.post(PointerMoved(*event.pos))
    elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
        context.post(Clicked(*event.pos))
    elif event.type == pygame.VIDEORESIZE:
        context.post(Resized(event.w, event.h))
        return pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
    return None


def main():
    """Main application loop."""
    cfg = flat_config(load_config())

    pygame.init()
    screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT), pygame.RESIZABLE)
    pygame.display.set_caption(APP_TITLE)
    clock = pygame.time.Clock()
    font = pygame.font.SysFont(None, 22)

    context = build_context(cfg, WINDOW_WIDTH, WINDOW_HEIGHT)
    view = {"screen": screen}

    def render(curve, mode):
        draw_scene(view["screen"], curve, mode, context.config, font, cfg["ui"])
        pygame.display.flip()

    scheduler = FrameScheduler(context, render=render)
    open_settings_window(context, cfg)

    scheduler.start(pygame.time.get_ticks())
    while scheduler.running:
        clock.tick(FPS)
        pump_tk()
        for event in pygame.event.get():
            resized = translate_event(event, context, scheduler)
            if resized is not None:
                view["screen"] = resized
        scheduler.tick(pygame.time.get_ticks())

    close_tk()
    pygame.quit()


if __name__ == "__main__":
    main()
