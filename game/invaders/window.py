"""
Arcade host for the invaders simulation.

Owns the window, forwards key events and frame ticks to a Game and draws the
resulting state. Escape closes the window.

Run:
    python -m game.invaders.window
"""

import argparse
import logging
import random
from typing import Optional

import arcade

from .config import BACKGROUND_COLOR, WINDOW_CONFIG
from .engine import Game
from .entities import Key
from .render import draw

KEY_MAP = {
    arcade.key.LEFT: Key.LEFT,
    arcade.key.RIGHT: Key.RIGHT,
    arcade.key.SPACE: Key.SPACE,
}


def to_game_key(symbol: int) -> Key:
    return KEY_MAP.get(symbol, Key.OTHER)


class InvadersWindow(arcade.Window):
    """Arcade window driving one Game"""

    def __init__(self, game: Game, title: str = WINDOW_CONFIG["title"]):
        width = int(game.state.window_width)
        height = int(game.state.window_height)
        super().__init__(width, height, title)
        self.game = game
        self.background_color = BACKGROUND_COLOR

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol == arcade.key.ESCAPE:
            self.close()
            return
        self.game.key_pressed(to_game_key(symbol))

    def on_key_release(self, symbol: int, modifiers: int):
        self.game.key_released(to_game_key(symbol))

    def on_update(self, delta_time: float):
        self.game.update(delta_time)

    def on_draw(self):
        self.clear()
        self.draw_state()

    def draw_state(self):
        # Commands use a top-left origin, arcade draws from the bottom-left
        for rect in draw(self.game.state):
            top = self.height - rect.y
            arcade.draw_lrbt_rectangle_filled(
                rect.x, rect.x + rect.width, top - rect.height, top, rect.color
            )


def main(argv: Optional[list] = None):
    parser = argparse.ArgumentParser(description="Play the invaders simulation")
    parser.add_argument("--width", type=int, default=WINDOW_CONFIG["width"])
    parser.add_argument("--height", type=int, default=WINDOW_CONFIG["height"])
    parser.add_argument("--seed", type=int, default=None, help="Seed for spawn positions")
    parser.add_argument("--verbose", action="store_true", help="Log spawns and pickups")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    game = Game(args.width, args.height, rng=random.Random(args.seed))
    InvadersWindow(game)
    arcade.run()


if __name__ == "__main__":
    main()
