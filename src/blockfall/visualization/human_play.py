from __future__ import annotations

import argparse
from typing import Callable, Dict, Optional, Sequence

import pygame

from blockfall.game import BlockFallGame, GameConfig
from blockfall.leaderboard import GameOverRecorder, Leaderboard
from .renderer import Renderer


def key_bindings(game: BlockFallGame) -> Dict[int, Callable[[], object]]:
    return {
        pygame.K_LEFT: game.move_left,
        pygame.K_RIGHT: game.move_right,
        pygame.K_DOWN: game.soft_drop,
        pygame.K_SPACE: game.hard_drop,
        pygame.K_UP: game.rotate,
        pygame.K_z: game.rotate,
        pygame.K_x: game.rotate,
        pygame.K_RETURN: game.start,
        pygame.K_p: game.pause,
        pygame.K_r: game.reset,
    }


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play BlockFall with the keyboard")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--cell-size", type=int, default=28)
    p.add_argument("--name", type=str, default=None, help="player name for the leaderboard")
    p.add_argument("--scores", type=str, default="scores.json", help="leaderboard JSON file")
    return p


def run(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    game = BlockFallGame(GameConfig(random_seed=args.seed))
    leaderboard: Optional[Leaderboard] = None
    if args.name:
        leaderboard = Leaderboard(args.scores)
        GameOverRecorder(game.bus, leaderboard, args.name)

    pygame.init()
    try:
        renderer = Renderer(cell_size=args.cell_size)
        screen = pygame.display.set_mode(renderer.window_size(game.grid.height, game.grid.width))
        pygame.display.set_caption("BlockFall")
        bindings = key_bindings(game)
        clock = pygame.time.Clock()

        running = True
        while running:
            # Input first, then the clock, then draw
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    else:
                        handler = bindings.get(event.key)
                        if handler is not None:
                            handler()

            game.update(clock.get_time())
            renderer.draw(screen, game.snapshot())
            clock.tick(60)
    finally:
        pygame.quit()

    print(f"Final score: {game.score}  lines: {game.lines}  level: {game.level}")
    if leaderboard is not None:
        for rank, entry in enumerate(leaderboard.top(), start=1):
            print(f"{rank:2d}. {entry.name:<15} {entry.score}")


if __name__ == "__main__":  # pragma: no cover
    run()
