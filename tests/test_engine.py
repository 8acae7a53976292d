import random

import pytest

from game.invaders import Entity, Game, Key, PowerUp, PowerUpType
from game.invaders.config import GAME_CONFIG


# ----------------------------
# Input events
# ----------------------------

def test_key_state_keeps_only_last_press(game):
    game.key_pressed(Key.LEFT)
    game.key_pressed(Key.RIGHT)
    assert game.state.key_state == Key.RIGHT


def test_any_release_clears_key_state(game):
    game.key_pressed(Key.LEFT)
    game.key_pressed(Key.RIGHT)
    game.key_released(Key.LEFT)
    assert game.state.key_state is None


def test_space_press_fires_immediately(game):
    game.key_pressed(Key.SPACE)
    assert game.state.bullets == [Entity(x=400.0, y=760.0)]
    assert game.state.key_state == Key.SPACE


def test_other_key_does_nothing(game):
    game.key_pressed(Key.OTHER)
    game.update(0.1)
    assert game.state.player.x == 400.0
    assert game.state.bullets == []


# ----------------------------
# Mover
# ----------------------------

@pytest.mark.parametrize("dt", [0.0, 0.016, 0.1, 0.5])
def test_holding_left_moves_by_speed_times_dt(game, dt):
    game.key_pressed(Key.LEFT)
    game.update(dt)
    assert game.state.player.x == pytest.approx(400.0 - 200.0 * dt)


def test_speed_boost_substitutes_boosted_speed(game):
    game.state.power_up_active = PowerUpType.SPEED_BOOST
    game.state.power_up_active_timer = 30.0
    game.key_pressed(Key.RIGHT)
    game.update(0.1)
    assert game.state.player.x == pytest.approx(400.0 + 24.5)


def test_player_is_not_clamped(game):
    game.key_pressed(Key.LEFT)
    game.update(10.0)
    assert game.state.player.x == pytest.approx(-1600.0)


def test_entities_move_at_fixed_speeds(game):
    game.state.bullets.append(Entity(x=50.0, y=500.0))
    game.state.enemies.append(Entity(x=700.0, y=100.0))
    game.state.power_ups.append(PowerUp(x=700.0, y=300.0, power_up_type=PowerUpType.TRIPLE_SHOT))
    game.update(0.1)
    # bullets advance twice per tick
    assert game.state.bullets[0].y == pytest.approx(500.0 - 2 * 30.0)
    assert game.state.enemies[0].y == pytest.approx(105.0)
    assert game.state.power_ups[0].y == pytest.approx(314.0)


def test_single_bullet_step_when_disabled():
    game = Game(800, 800, rng=random.Random(0), duplicate_bullet_step=False)
    game.state.bullets.append(Entity(x=50.0, y=500.0))
    game.update(0.1)
    assert game.state.bullets[0].y == pytest.approx(470.0)


# ----------------------------
# Spawner
# ----------------------------

def test_enemy_spawns_once_timer_passes_interval(game):
    game.state.enemy_spawn_timer = 0.9
    game.update(0.2)
    assert len(game.state.enemies) == 1
    enemy = game.state.enemies[0]
    assert 0.0 <= enemy.x < 800.0
    # spawned at the top, then moved with the rest of the tick
    assert enemy.y == pytest.approx(50.0 * 0.2)
    assert game.state.enemy_spawn_timer == 0.0


def test_enemy_spawn_does_not_catch_up(game):
    game.update(10.0)
    assert len(game.state.enemies) == 1


def test_enemy_spawn_needs_to_exceed_interval(game):
    game.state.enemy_spawn_timer = 0.5
    game.update(0.5)
    assert game.state.enemies == []
    assert game.state.enemy_spawn_timer == pytest.approx(1.0)


def test_enemy_spawn_cadence_over_many_ticks():
    game = Game(800, 800, rng=random.Random(3))
    for _ in range(10):
        game.update(0.3)
    # timer passes 1.0 on every fourth tick
    assert len(game.state.enemies) == 2


def test_enemy_x_comes_from_rng(fixed_rng):
    game = Game(800, 800, rng=fixed_rng([0.25]))
    game.state.enemy_spawn_timer = 1.0
    game.update(0.01)
    assert game.state.enemies[0].x == pytest.approx(200.0)


@pytest.mark.parametrize("roll,expected", [
    (0.25, PowerUpType.TRIPLE_SHOT),
    (0.75, PowerUpType.SPEED_BOOST),
])
def test_power_up_spawn_draws_type_then_position(fixed_rng, roll, expected):
    game = Game(800, 800, rng=fixed_rng([roll, 0.125]))
    game.state.power_up_spawn_timer = 19.95
    game.update(0.1)
    assert len(game.state.power_ups) == 1
    power_up = game.state.power_ups[0]
    assert power_up.power_up_type == expected
    assert power_up.x == pytest.approx(100.0)
    assert power_up.y == pytest.approx(14.0)
    assert game.state.power_up_spawn_timer == 0.0


# ----------------------------
# Power-up state machine
# ----------------------------

def _power_up_on_player(game, power_up_type):
    player = game.state.player
    return PowerUp(x=player.x, y=player.y, power_up_type=power_up_type)


def test_pickup_activates_effect(game):
    game.state.power_ups.append(_power_up_on_player(game, PowerUpType.SPEED_BOOST))
    events = game.update(0.0)
    assert game.state.power_up_active == PowerUpType.SPEED_BOOST
    assert game.state.power_up_active_timer == 30.0
    assert game.state.power_ups == []
    assert events["pickups"] == 1.0


def test_last_pickup_wins(game):
    game.state.power_ups.append(_power_up_on_player(game, PowerUpType.TRIPLE_SHOT))
    game.state.power_ups.append(_power_up_on_player(game, PowerUpType.SPEED_BOOST))

    game.update(0.0)
    assert game.state.power_up_active == PowerUpType.TRIPLE_SHOT
    # one pickup per tick, in list order
    assert len(game.state.power_ups) == 1

    game.update(0.0)
    assert game.state.power_up_active == PowerUpType.SPEED_BOOST
    assert game.state.power_up_active_timer == 30.0
    assert game.state.power_ups == []


def test_pickup_restarts_timer(game):
    game.state.power_up_active = PowerUpType.SPEED_BOOST
    game.state.power_up_active_timer = 3.0
    game.state.power_ups.append(_power_up_on_player(game, PowerUpType.SPEED_BOOST))
    game.update(0.0)
    assert game.state.power_up_active_timer == 30.0


def test_effect_decays_and_expires(game):
    game.state.power_up_active = PowerUpType.SPEED_BOOST
    game.state.power_up_active_timer = 0.15

    game.update(0.1)
    assert game.state.power_up_active == PowerUpType.SPEED_BOOST
    assert game.state.power_up_active_timer == pytest.approx(0.05)

    game.update(0.1)
    assert game.state.power_up_active is None
    assert game.state.power_up_active_timer == 0.0


def test_triple_shot_fires_volley_and_consumes_key(game):
    game.state.power_up_active = PowerUpType.TRIPLE_SHOT
    game.state.power_up_active_timer = 30.0
    game.state.key_state = Key.SPACE

    events = game.update(0.01)

    assert sorted(b.x for b in game.state.bullets) == [390.0, 400.0, 410.0]
    assert all(b.y == pytest.approx(760.0 - 3.0) for b in game.state.bullets)
    assert game.state.key_state is None
    assert events["shots"] == 3.0


def test_press_shot_then_triple_volley(game):
    game.state.power_up_active = PowerUpType.TRIPLE_SHOT
    game.state.power_up_active_timer = 30.0

    game.key_pressed(Key.SPACE)
    assert len(game.state.bullets) == 1

    events = game.update(0.01)
    assert len(game.state.bullets) == 4
    assert events["shots"] == 4.0

    # key was consumed, holding it does nothing more
    game.update(0.01)
    assert len(game.state.bullets) == 4


def test_space_without_triple_shot_fires_once(game):
    game.key_pressed(Key.SPACE)
    game.update(0.01)
    game.update(0.01)
    assert len(game.state.bullets) == 1
    assert game.state.key_state == Key.SPACE


# ----------------------------
# Pickup distance
# ----------------------------

def _place_power_up(game, dx, dy):
    player = game.state.player
    game.state.power_ups.append(
        PowerUp(x=player.x + dx, y=player.y + dy, power_up_type=PowerUpType.SPEED_BOOST)
    )


def test_euclidean_pickup_by_default(game):
    _place_power_up(game, -25.0, 10.0)
    game.update(0.0)
    assert game.state.power_up_active == PowerUpType.SPEED_BOOST


def test_euclidean_pickup_out_of_range(game):
    _place_power_up(game, 40.0, 10.0)
    game.update(0.0)
    assert game.state.power_up_active is None
    assert len(game.state.power_ups) == 1


def test_legacy_metric_misses_negative_radicand():
    game = Game(800, 800, rng=random.Random(0), legacy_pickup_metric=True)
    _place_power_up(game, -25.0, 10.0)
    game.update(0.0)
    assert game.state.power_up_active is None


def test_legacy_metric_reaches_further_along_x():
    game = Game(800, 800, rng=random.Random(0), legacy_pickup_metric=True)
    _place_power_up(game, 40.0, 10.0)
    game.update(0.0)
    assert game.state.power_up_active == PowerUpType.SPEED_BOOST


# ----------------------------
# Collision resolver
# ----------------------------

def test_bullet_and_enemy_destroy_each_other(game):
    game.state.bullets.append(Entity(x=100.0, y=300.0))
    game.state.bullets.append(Entity(x=500.0, y=300.0))
    game.state.enemies.append(Entity(x=100.0, y=305.0))

    events = game.update(0.0)

    assert game.state.enemies == []
    assert game.state.bullets == [Entity(x=500.0, y=300.0)]
    assert events["kills"] == 1.0


def test_one_bullet_can_destroy_several_enemies(game):
    game.state.bullets.append(Entity(x=100.0, y=300.0))
    game.state.enemies.append(Entity(x=100.0, y=300.0))
    game.state.enemies.append(Entity(x=105.0, y=300.0))
    game.state.enemies.append(Entity(x=300.0, y=300.0))

    events = game.update(0.0)

    assert game.state.bullets == []
    assert game.state.enemies == [Entity(x=300.0, y=300.0)]
    assert events["kills"] == 2.0


def test_hit_radius_is_strict(game):
    game.state.bullets.append(Entity(x=100.0, y=300.0))
    game.state.enemies.append(Entity(x=110.0, y=300.0))
    game.update(0.0)
    assert len(game.state.bullets) == 1
    assert len(game.state.enemies) == 1


def test_survivors_keep_their_order(game):
    game.state.bullets.extend([Entity(10.0, 200.0), Entity(100.0, 200.0), Entity(20.0, 200.0)])
    game.state.enemies.extend([Entity(50.0, 400.0), Entity(100.0, 200.0), Entity(60.0, 400.0)])
    game.update(0.0)
    assert [b.x for b in game.state.bullets] == [10.0, 20.0]
    assert [e.x for e in game.state.enemies] == [50.0, 60.0]


# ----------------------------
# Reset policy and cleanup
# ----------------------------

def _fill_ground(game, grounded, elsewhere):
    ground = game.state.window_height - 20.0
    for i in range(grounded):
        game.state.enemies.append(Entity(x=30.0 + i * 40.0, y=ground))
    for i in range(elsewhere):
        game.state.enemies.append(Entity(x=30.0 + i * 40.0, y=100.0))


def test_reset_when_ten_enemies_reach_ground(game):
    _fill_ground(game, grounded=10, elsewhere=9)
    game.state.bullets.append(Entity(x=700.0, y=500.0))
    game.state.power_ups.append(PowerUp(x=50.0, y=100.0, power_up_type=PowerUpType.SPEED_BOOST))
    game.state.power_up_active = PowerUpType.TRIPLE_SHOT
    game.state.power_up_active_timer = 12.0
    game.state.power_up_spawn_timer = 5.0
    game.state.enemy_spawn_timer = 0.5
    game.state.player.x = 100.0

    events = game.update(0.01)

    assert events["resets"] == 1.0
    assert game.state.bullets == []
    assert game.state.enemies == []
    assert game.state.player == Entity(x=400.0, y=780.0)
    assert game.state.enemy_spawn_timer == 0.0
    # power-ups are left alone
    assert len(game.state.power_ups) == 1
    assert game.state.power_up_active == PowerUpType.TRIPLE_SHOT
    assert game.state.power_up_active_timer == pytest.approx(11.99)
    assert game.state.power_up_spawn_timer == pytest.approx(5.01)


def test_nine_grounded_enemies_do_not_reset(game):
    _fill_ground(game, grounded=9, elsewhere=3)
    events = game.update(0.01)
    assert events["resets"] == 0.0
    assert len(game.state.enemies) == 12


def test_enemies_past_bottom_are_removed(game):
    game.state.enemies.append(Entity(x=100.0, y=799.0))
    game.state.enemies.append(Entity(x=200.0, y=500.0))
    game.update(0.1)
    assert [e.x for e in game.state.enemies] == [200.0]


def test_power_ups_past_bottom_are_removed(game):
    game.state.power_ups.append(PowerUp(x=10.0, y=795.0, power_up_type=PowerUpType.TRIPLE_SHOT))
    game.update(0.1)
    assert game.state.power_ups == []


def test_bullets_out_of_play_are_removed(game):
    game.state.bullets.append(Entity(x=100.0, y=-50.0))
    game.state.bullets.append(Entity(x=200.0, y=400.0))
    game.update(0.0)
    assert [b.x for b in game.state.bullets] == [200.0]


def test_manual_reset_matches_policy(game):
    game.state.enemies.append(Entity(x=1.0, y=1.0))
    game.state.power_ups.append(PowerUp(x=1.0, y=1.0, power_up_type=PowerUpType.TRIPLE_SHOT))
    game.state.player.x = 10.0
    game.reset()
    assert game.state.enemies == []
    assert game.state.player == Entity(x=400.0, y=780.0)
    assert len(game.state.power_ups) == 1


# ----------------------------
# Misc
# ----------------------------

def test_negative_dt_is_rejected(game):
    with pytest.raises(ValueError):
        game.update(-0.1)


def test_unknown_setting_is_rejected():
    with pytest.raises(ValueError):
        Game(800, 800, player_sped=1.0)


def test_overrides_do_not_leak_into_defaults():
    game = Game(800, 800, player_speed=10.0)
    assert game.config["player_speed"] == 10.0
    assert GAME_CONFIG["player_speed"] == 200.0


def test_same_seed_same_world():
    a = Game(800, 800, rng=random.Random(11))
    b = Game(800, 800, rng=random.Random(11))
    for _ in range(100):
        a.update(0.25)
        b.update(0.25)
    assert a.state == b.state
