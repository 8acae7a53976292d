"""Invaders - single-screen arcade shooter simulation core"""

from .entities import Entity, Key, PowerUp, PowerUpType
from .world import WorldState, new_world
from .engine import Game
from .render import DrawRect, draw, rasterize
from .invaders_env import InvadersEnv, run_random_episode

__all__ = [
    'Entity', 'Key', 'PowerUp', 'PowerUpType',
    'WorldState', 'new_world',
    'Game',
    'DrawRect', 'draw', 'rasterize',
    'InvadersEnv', 'run_random_episode',
]
