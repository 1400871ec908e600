from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Dict

import pygame

from falling_blocks.game import Action, FallingBlockGame, GameConfig, GameEvent
from .highscore import HighScoreStore
from .renderer import Renderer


KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_UP: Action.ROTATE_CW,
    pygame.K_DOWN: Action.SOFT_DROP,
    pygame.K_RETURN: Action.HARD_DROP,
    pygame.K_SPACE: Action.PAUSE,
    pygame.K_ESCAPE: Action.PAUSE,
    pygame.K_p: Action.PAUSE,
    pygame.K_r: Action.RESET,
}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Falling Blocks with the keyboard")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--cell-size", type=int, default=25)
    p.add_argument("--highscore-file", type=str,
                   default=str(Path.home() / ".falling_blocks" / "highscore.json"))
    p.add_argument("--log-level", type=str, default="INFO")
    return p


def run(seed: int | None = None, cell_size: int = 25, highscore_file: str | None = None) -> None:
    game = FallingBlockGame(GameConfig(random_seed=seed))
    store = HighScoreStore(highscore_file) if highscore_file else None
    high_score = store.load() if store else 0

    def on_game_over() -> None:
        nonlocal high_score
        if store is not None:
            high_score = store.submit(game.state.score)

    game.events.subscribe(GameEvent.GAME_OVER, on_game_over)

    pygame.init()
    try:
        clock = pygame.time.Clock()
        renderer = Renderer(cell_size=cell_size)
        screen = pygame.display.set_mode(renderer.window_size(game.get_state().shape))
        pygame.display.set_caption("Falling Blocks")

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    action = KEY_TO_ACTION.get(event.key)
                    if action is not None:
                        game.step(action)

            # Gravity and line-clear timers run on the engine clock
            game.clock.advance(clock.tick(60))
            renderer.draw(screen, game.get_state(), game.get_game_stats(), high_score)
    finally:
        pygame.quit()


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO),
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")
    run(seed=args.seed, cell_size=args.cell_size, highscore_file=args.highscore_file)


if __name__ == "__main__":  # pragma: no cover
    main()
