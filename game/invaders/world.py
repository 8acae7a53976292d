"""
WorldState - the aggregate the update engine owns and mutates
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .entities import Entity, Key, PowerUp, PowerUpType


@dataclass
class WorldState:
    """
    Everything the simulation knows about one game.

    ``key_state`` holds only the last pressed key. A new press overwrites it
    and any release clears it, so two keys held together are not tracked.
    """
    window_width: float
    window_height: float
    player: Entity
    bullets: List[Entity] = field(default_factory=list)
    enemies: List[Entity] = field(default_factory=list)
    enemy_spawn_timer: float = 0.0
    power_ups: List[PowerUp] = field(default_factory=list)
    power_up_spawn_timer: float = 0.0
    power_up_active: Optional[PowerUpType] = None
    power_up_active_timer: float = 0.0
    key_state: Optional[Key] = None

    def __setattr__(self, name, value):
        # World dimensions are fixed once set
        if name in ("window_width", "window_height") and name in self.__dict__:
            raise AttributeError(f"{name} is read-only")
        super().__setattr__(name, value)


def spawn_point(window_width: float, window_height: float, ground_margin: float = 20.0) -> Entity:
    """Player start position: centered, just above the ground"""
    return Entity(x=window_width / 2.0, y=window_height - ground_margin)


def new_world(window_width: float, window_height: float, ground_margin: float = 20.0) -> WorldState:
    """Build a fresh world with the player at its spawn point"""
    if window_width <= 0 or window_height <= 0:
        raise ValueError(
            f"World size must be positive, got {window_width}x{window_height}"
        )
    return WorldState(
        window_width=float(window_width),
        window_height=float(window_height),
        player=spawn_point(window_width, window_height, ground_margin),
    )
