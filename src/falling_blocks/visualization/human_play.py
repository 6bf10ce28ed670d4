from __future__ import annotations

import argparse
import logging
from typing import Dict

import pygame

from falling_blocks.game import FallingBlockGame, GameConfig, Intents
from .renderer import Renderer


logger = logging.getLogger(__name__)

LEFT, RIGHT, DOWN, UP = "move_left", "move_right", "soft_drop", "rotate"

KEY_TO_INTENT: Dict[int, str] = {
    pygame.K_LEFT: LEFT,
    pygame.K_RIGHT: RIGHT,
    pygame.K_DOWN: DOWN,
    pygame.K_UP: UP,
}


class KeyboardIntents:
    """Collects key presses between ticks as one-shot intents.

    Each press counts once per tick no matter how long the key is held.
    """

    def __init__(self) -> None:
        self._pressed: Dict[str, bool] = {}

    def handle(self, event: pygame.event.Event) -> None:
        if event.type == pygame.KEYDOWN and event.key in KEY_TO_INTENT:
            self._pressed[KEY_TO_INTENT[event.key]] = True

    def take(self) -> Intents:
        intents = Intents(**self._pressed)
        self._pressed.clear()
        return intents


def _wait_for_key() -> bool:
    """Block until a key is pressed. Returns False when the player quits."""
    while True:
        event = pygame.event.wait()
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.KEYDOWN:
            return event.key != pygame.K_ESCAPE


def play_episode(game: FallingBlockGame, renderer: Renderer, screen: pygame.Surface, tick_hz: int) -> bool:
    """Run one episode to game over. Returns False if the window was closed."""
    clock = pygame.time.Clock()
    keys = KeyboardIntents()
    game.begin_episode()
    result = game.snapshot()
    while not result.game_over:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                return False
            keys.handle(event)

        result = game.tick(keys.take())
        if result.lines_cleared:
            renderer.animate_clear(screen, result, game.high_score)
        renderer.draw(screen, result, game.high_score)
        clock.tick(tick_hz)
    return True


def run(tick_hz: int = 20, scale: int = 6, seed: int | None = None) -> None:
    pygame.init()
    try:
        game = FallingBlockGame(GameConfig(random_seed=seed))
        renderer = Renderer(game.board.width, game.board.height, scale=scale)
        screen = pygame.display.set_mode(renderer.window_size)
        pygame.display.set_caption("Falling Blocks")

        renderer.draw_text_screen(["FALLING BLOCKS", "press any button"])
        renderer.present(screen)
        if not _wait_for_key():
            return

        while True:
            if not play_episode(game, renderer, screen, tick_hz):
                return
            episode = game.end_episode()
            logger.info("episode finished: score %d (high %d)", episode.final_score, game.high_score)
            lines = ["GAME OVER", f"score {episode.final_score}", f"high {game.high_score}"]
            if episode.new_high_score:
                lines.append("new high score!")
            lines.append("any button: again, ESC: quit")
            renderer.draw_text_screen(lines)
            renderer.present(screen)
            if not _wait_for_key():
                return
    finally:
        pygame.quit()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--tick-hz", type=int, default=20)
    p.add_argument("--scale", type=int, default=6)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--log-level", type=str, default="INFO")
    return p


def main() -> None:
    args = build_parser().parse_args()
    log_format = '%(asctime)s %(levelname)s <%(name)s.%(funcName)s> %(message)s'
    logging.basicConfig(level=args.log_level.upper(), format=log_format)
    run(tick_hz=args.tick_hz, scale=args.scale, seed=args.seed)


if __name__ == "__main__":  # pragma: no cover
    main()
