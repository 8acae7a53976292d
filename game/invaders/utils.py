"""
Utility functions for game mechanics
"""

from __future__ import annotations
import math
import random
from typing import Optional
import numpy as np


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Euclidean distance between two points"""
    return math.hypot(x1 - x2, y1 - y2)


def legacy_pickup_distance(dx: float, dy: float) -> float:
    """
    Pickup distance as earlier releases computed it: sqrt(dx*dy + dy*dy).

    Not a metric. A negative radicand yields NaN, which compares false
    against any radius, so such power-ups are never picked up.
    """
    radicand = dx * dy + dy * dy
    if radicand < 0:
        return math.nan
    return math.sqrt(radicand)


def seed_everything(py_seed: Optional[int]):
    """Seed all random number generators"""
    if py_seed is None:
        return
    random.seed(py_seed)
    np.random.seed(py_seed)
