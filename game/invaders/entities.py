"""
Game entity dataclasses
"""

from dataclasses import dataclass
from enum import Enum


class Key(Enum):
    """Keys the simulation understands; hosts map everything else to OTHER"""
    LEFT = "left"
    RIGHT = "right"
    SPACE = "space"
    OTHER = "other"


class PowerUpType(Enum):
    """Temporary modifiers granted by a pickup"""
    SPEED_BOOST = "speed_boost"
    TRIPLE_SHOT = "triple_shot"


@dataclass
class Entity:
    """Positioned object: the player, a bullet or an enemy"""
    x: float
    y: float


@dataclass
class PowerUp:
    """Falling pickup"""
    x: float
    y: float
    power_up_type: PowerUpType
