"""
Turn a WorldState into draw commands.

Commands are plain filled rectangles in screen coordinates (origin top-left,
y down), so any backend can consume them: the arcade window flips them to its
own origin, ``rasterize`` paints them into a numpy frame.
"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from .config import BACKGROUND_COLOR, BULLET_COLOR, ENEMY_COLOR, PLAYER_COLOR, POWERUP_COLOR
from .world import WorldState

Color = Tuple[int, int, int, int]


@dataclass(frozen=True)
class DrawRect:
    """Filled axis-aligned rectangle; (x, y) is the top-left corner"""
    color: Color
    x: float
    y: float
    width: float
    height: float


def draw(state: WorldState) -> List[DrawRect]:
    """Draw commands for one frame, back to front"""
    commands: List[DrawRect] = []

    # player: two squares side by side
    px, py = state.player.x, state.player.y
    commands.append(DrawRect(PLAYER_COLOR, px, py - 10.0, 20.0, 20.0))
    commands.append(DrawRect(PLAYER_COLOR, px - 20.0, py - 10.0, 20.0, 20.0))

    for bullet in state.bullets:
        commands.append(DrawRect(BULLET_COLOR, bullet.x - 2.0, bullet.y - 10.0, 4.0, 20.0))

    for enemy in state.enemies:
        commands.append(DrawRect(ENEMY_COLOR, enemy.x - 10.0, enemy.y - 10.0, 20.0, 20.0))

    for power_up in state.power_ups:
        commands.append(DrawRect(POWERUP_COLOR, power_up.x - 10.0, power_up.y - 10.0, 20.0, 20.0))
        commands.append(DrawRect(POWERUP_COLOR, power_up.x + 10.0, power_up.y - 10.0, 20.0, 20.0))

    return commands


def rasterize(
    commands: Sequence[DrawRect],
    width: int,
    height: int,
    background: Color = BACKGROUND_COLOR,
) -> np.ndarray:
    """Paint commands into an (height, width, 3) uint8 RGB frame, clipped to the frame"""
    frame = np.empty((height, width, 3), dtype=np.uint8)
    frame[:, :] = background[:3]

    for rect in commands:
        x0 = int(np.clip(np.floor(rect.x), 0, width))
        x1 = int(np.clip(np.ceil(rect.x + rect.width), 0, width))
        y0 = int(np.clip(np.floor(rect.y), 0, height))
        y1 = int(np.clip(np.ceil(rect.y + rect.height), 0, height))
        if x0 >= x1 or y0 >= y1:
            continue
        frame[y0:y1, x0:x1] = rect.color[:3]

    return frame
