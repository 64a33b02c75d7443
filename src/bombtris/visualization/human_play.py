from __future__ import annotations

import argparse
import logging
from typing import Dict, List, Optional

import pygame

from bombtris.game import Action, BombtrisGame, GameConfig, SpecialConfig
from .renderer import Renderer


KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.MOVE_LEFT,
    pygame.K_RIGHT: Action.MOVE_RIGHT,
    pygame.K_DOWN: Action.SOFT_DROP,
    pygame.K_SPACE: Action.HARD_DROP,
    pygame.K_q: Action.ROTATE_CCW,
    pygame.K_w: Action.ROTATE_CW,
    pygame.K_UP: Action.ROTATE_CW,
}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Bombtris with the keyboard")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--cell_size", type=int, default=28)
    p.add_argument("--drop_interval", type=float, default=1000.0, help="auto-drop interval in ms")
    p.add_argument("--bomb_probability", type=float, default=0.25)
    p.add_argument("--laser_probability", type=float, default=0.25)
    p.add_argument("--extruder_probability", type=float, default=0.25)
    p.add_argument("--log_level", type=str, default="WARNING")
    return p


def run(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper())

    game = BombtrisGame(
        GameConfig(random_seed=args.seed, drop_interval=args.drop_interval),
        specials=SpecialConfig(args.bomb_probability, args.laser_probability, args.extruder_probability),
    )
    renderer = Renderer(cell_size=args.cell_size)

    pygame.init()
    try:
        clock = pygame.time.Clock()
        screen = pygame.display.set_mode(renderer.window_size(game.grid.width, game.grid.height))
        pygame.display.set_caption("Bombtris")

        running = True
        while running:
            # Input handling
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_r:
                        game.reset(pygame.time.get_ticks())
                    else:
                        action = KEY_TO_ACTION.get(event.key)
                        if action is not None:
                            game.step(action)

            # Gravity
            game.update(pygame.time.get_ticks())

            renderer.draw(screen, game.snapshot())
            clock.tick(60)
    finally:
        pygame.quit()
    print(f"Final score: {game.score} (top-outs: {game.top_outs}, lines: {game.lines_cleared_total})")


if __name__ == "__main__":  # pragma: no cover
    run()
