"""
Invaders update engine
----------------------
Advances a WorldState by one tick. Each tick runs the same fixed sequence:

 1. move the player from the raw key state
 2. accumulate / fire the enemy spawn timer
 3. move bullets up
 4. move enemies down
 5. accumulate / fire the power-up spawn timer
 6. move power-ups down
 7. resolve a power-up pickup
 8. apply the active power-up and decay its timer
 9. drop power-ups below the screen
10. count grounded enemies, reset the world on a loss
11. move bullets up again
12. drop enemies and bullets that left the play area
13. resolve bullet-enemy collisions

The stage functions take the world explicitly and only touch what they are
given. ``Game`` owns one world and wires input events and ticks into them.
"""

from __future__ import annotations

import logging
import random
from typing import Dict, List, Optional

from .config import GAME_CONFIG
from .entities import Entity, Key, PowerUp, PowerUpType
from .utils import distance, legacy_pickup_distance
from .world import WorldState, new_world, spawn_point

logger = logging.getLogger(__name__)


# ----------------------------
# Mover
# ----------------------------

def move_player(state: WorldState, dt: float, cfg: dict):
    if state.power_up_active == PowerUpType.SPEED_BOOST:
        speed = cfg["player_speed_boosted"]
    else:
        speed = cfg["player_speed"]

    # No clamping: the player can walk off either edge
    if state.key_state == Key.LEFT:
        state.player.x -= speed * dt
    elif state.key_state == Key.RIGHT:
        state.player.x += speed * dt


def move_bullets(state: WorldState, dt: float, cfg: dict):
    for bullet in state.bullets:
        bullet.y -= cfg["bullet_speed"] * dt


def move_enemies(state: WorldState, dt: float, cfg: dict):
    for enemy in state.enemies:
        enemy.y += cfg["enemy_speed"] * dt


def move_power_ups(state: WorldState, dt: float, cfg: dict):
    for power_up in state.power_ups:
        power_up.y += cfg["powerup_speed"] * dt


# ----------------------------
# Spawner
# ----------------------------

def spawn_enemy(state: WorldState, dt: float, rng, cfg: dict) -> bool:
    """At most one enemy per tick, no catch-up for long ticks."""
    state.enemy_spawn_timer += dt
    if state.enemy_spawn_timer <= cfg["enemy_spawn_interval"]:
        return False

    enemy = Entity(x=rng.random() * state.window_width, y=0.0)
    state.enemies.append(enemy)
    state.enemy_spawn_timer = 0.0
    logger.debug("Enemy spawned at x=%.1f", enemy.x)
    return True


def spawn_power_up(state: WorldState, dt: float, rng, cfg: dict) -> bool:
    state.power_up_spawn_timer += dt
    if state.power_up_spawn_timer <= cfg["powerup_spawn_interval"]:
        return False

    if rng.random() < cfg["powerup_chance"]:
        power_up_type = PowerUpType.TRIPLE_SHOT
    else:
        power_up_type = PowerUpType.SPEED_BOOST

    power_up = PowerUp(
        x=rng.random() * state.window_width,
        y=0.0,
        power_up_type=power_up_type,
    )
    state.power_ups.append(power_up)
    state.power_up_spawn_timer = 0.0
    logger.debug("Power-up %s spawned at x=%.1f", power_up_type.name, power_up.x)
    return True


# ----------------------------
# Power-up state machine
# ----------------------------

def resolve_pickup(state: WorldState, cfg: dict) -> Optional[PowerUpType]:
    """
    Pick up the first power-up (in list order) touching the player.

    Only one pickup per tick. The new effect replaces whatever was active
    and restarts the timer.
    """
    player = state.player
    hit_index = None
    for index, power_up in enumerate(state.power_ups):
        if cfg["legacy_pickup_metric"]:
            d = legacy_pickup_distance(power_up.x - player.x, power_up.y - player.y)
        else:
            d = distance(power_up.x, power_up.y, player.x, player.y)
        if d < cfg["pickup_radius"]:
            hit_index = index
            break

    if hit_index is None:
        return None

    power_up = state.power_ups[hit_index]
    state.power_ups = [p for i, p in enumerate(state.power_ups) if i != hit_index]
    state.power_up_active = power_up.power_up_type
    state.power_up_active_timer = cfg["boost_time"]
    logger.debug("Picked up %s", power_up.power_up_type.name)
    return power_up.power_up_type


def fire_triple_shot(state: WorldState, cfg: dict) -> List[Entity]:
    px, py = state.player.x, state.player.y
    spread = cfg["triple_shot_spread"]
    y = py - cfg["muzzle_offset"]
    volley = [Entity(x=px - spread, y=y), Entity(x=px, y=y), Entity(x=px + spread, y=y)]
    state.bullets.extend(volley)
    return volley


def apply_power_up(state: WorldState, dt: float, cfg: dict) -> int:
    """
    Run the active effect for this tick, then decay it.

    Speed boost has nothing to do here, the mover reads it directly.
    Triple shot fires a volley if space is still held and consumes the key
    so the same press cannot fire again next tick.
    Returns the number of bullets fired.
    """
    if state.power_up_active is None:
        return 0

    fired = 0
    if state.power_up_active == PowerUpType.TRIPLE_SHOT and state.key_state == Key.SPACE:
        fired = len(fire_triple_shot(state, cfg))
        state.key_state = None

    state.power_up_active_timer -= dt
    if state.power_up_active_timer <= 0.0:
        logger.debug("%s expired", state.power_up_active.name)
        state.power_up_active = None
        state.power_up_active_timer = 0.0
    return fired


def remove_offscreen_power_ups(state: WorldState):
    state.power_ups = [p for p in state.power_ups if p.y < state.window_height]


# ----------------------------
# Reset policy
# ----------------------------

def count_grounded_enemies(state: WorldState, cfg: dict) -> int:
    ground = state.window_height - cfg["ground_margin"]
    return sum(1 for e in state.enemies if e.y >= ground)


def reset_world(state: WorldState, cfg: dict):
    """
    Put the player back and clear the field.

    Power-ups, the active effect and the power-up spawn timer survive.
    """
    state.player = spawn_point(state.window_width, state.window_height, cfg["ground_margin"])
    state.bullets.clear()
    state.enemies.clear()
    state.enemy_spawn_timer = 0.0


def apply_reset_policy(state: WorldState, cfg: dict) -> bool:
    grounded = count_grounded_enemies(state, cfg)
    if grounded < cfg["max_enemies_on_ground"]:
        return False
    logger.info("%d enemies reached the ground, resetting world", grounded)
    reset_world(state, cfg)
    return True


def remove_offscreen(state: WorldState, cfg: dict):
    """
    Drop enemies past the bottom edge and bullets that can no longer hit.

    Enemies never go above y=0, so a bullet more than a hit radius above
    the top edge is out of play.
    """
    top = -cfg["hit_radius"]
    state.enemies = [e for e in state.enemies if e.y < state.window_height]
    state.bullets = [b for b in state.bullets if top <= b.y < state.window_height]


# ----------------------------
# Collision resolver
# ----------------------------

def resolve_collisions(state: WorldState, cfg: dict) -> int:
    """
    Remove every bullet and enemy closer than the hit radius to one another.

    Marks indices over the full pairwise scan first, then rebuilds both
    lists, so a bullet may take out several enemies in the same tick and
    survivors keep their order. Returns the number of enemies destroyed.
    """
    radius = cfg["hit_radius"]
    bullets_hit = set()
    enemies_hit = set()

    for b_index, bullet in enumerate(state.bullets):
        for e_index, enemy in enumerate(state.enemies):
            if distance(bullet.x, bullet.y, enemy.x, enemy.y) < radius:
                bullets_hit.add(b_index)
                enemies_hit.add(e_index)

    if bullets_hit:
        state.bullets = [b for i, b in enumerate(state.bullets) if i not in bullets_hit]
    if enemies_hit:
        state.enemies = [e for i, e in enumerate(state.enemies) if i not in enemies_hit]
    return len(enemies_hit)


# ----------------------------
# Game
# ----------------------------

class Game:
    """One world plus the input and tick entry points a host drives"""

    def __init__(
        self,
        window_width: float,
        window_height: float,
        rng=None,
        **overrides,
    ):
        unknown = set(overrides) - set(GAME_CONFIG)
        if unknown:
            raise ValueError(f"Unknown game settings: {sorted(unknown)}")

        self.config = dict(GAME_CONFIG)
        self.config.update(overrides)

        # Anything with .random() -> [0, 1) works: random.Random, numpy Generator
        self.rng = rng if rng is not None else random.Random()
        self.state: WorldState = new_world(
            window_width, window_height, self.config["ground_margin"]
        )

        # Shots fired by key presses since the last tick
        self._pending_shots = 0

    # ----------------------------
    # Input events
    # ----------------------------

    def key_pressed(self, key: Key):
        """Remember the key; space also fires one bullet right away."""
        self.state.key_state = key
        if key == Key.SPACE:
            player = self.state.player
            self.state.bullets.append(
                Entity(x=player.x, y=player.y - self.config["muzzle_offset"])
            )
            self._pending_shots += 1

    def key_released(self, key: Key):
        # Any release clears the slot, even for a key that was overwritten
        self.state.key_state = None

    # ----------------------------
    # Tick
    # ----------------------------

    def update(self, dt: float) -> Dict[str, float]:
        """
        Advance the world by ``dt`` seconds.

        Returns what happened during the tick (shots, kills, pickups,
        resets); the simulation itself never reads it back.
        """
        if dt < 0:
            raise ValueError(f"dt must be non-negative, got {dt}")

        state, cfg, rng = self.state, self.config, self.rng
        events = {"shots": float(self._pending_shots), "kills": 0.0, "pickups": 0.0, "resets": 0.0}
        self._pending_shots = 0

        move_player(state, dt, cfg)

        spawn_enemy(state, dt, rng, cfg)
        move_bullets(state, dt, cfg)
        move_enemies(state, dt, cfg)

        spawn_power_up(state, dt, rng, cfg)
        move_power_ups(state, dt, cfg)

        if resolve_pickup(state, cfg) is not None:
            events["pickups"] += 1.0
        events["shots"] += apply_power_up(state, dt, cfg)
        remove_offscreen_power_ups(state)

        if apply_reset_policy(state, cfg):
            events["resets"] += 1.0

        if cfg["duplicate_bullet_step"]:
            move_bullets(state, dt, cfg)

        remove_offscreen(state, cfg)
        events["kills"] += resolve_collisions(state, cfg)
        return events

    def reset(self):
        """Apply the loss reset by hand (same partial reset as the policy)."""
        reset_world(self.state, self.config)
