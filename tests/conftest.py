import itertools

import pytest

from game.invaders import Game


class FixedRng:
    """Stand-in random source cycling through preset values"""

    def __init__(self, values):
        self._values = itertools.cycle(values)

    def random(self):
        return next(self._values)


@pytest.fixture
def game():
    # Spawns land in the middle of the screen
    return Game(800, 800, rng=FixedRng([0.5]))


@pytest.fixture
def fixed_rng():
    return FixedRng
