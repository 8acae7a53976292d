"""
Gameplay constants for the invaders simulation
"""

# Colors are RGBA, 0-255
PLAYER_COLOR = (0, 255, 0, 255)
ENEMY_COLOR = (255, 0, 0, 255)
BULLET_COLOR = (255, 255, 255, 255)
POWERUP_COLOR = (128, 0, 128, 255)  # purple
BACKGROUND_COLOR = (0, 0, 0, 255)

GAME_CONFIG = {
    "player_speed": 200.0,          # px/s
    "player_speed_boosted": 245.0,  # px/s
    "bullet_speed": 300.0,          # px/s, upward
    "enemy_speed": 50.0,            # px/s, downward
    "powerup_speed": 140.0,         # px/s, downward
    "enemy_spawn_interval": 1.0,    # seconds
    "powerup_spawn_interval": 20.0, # seconds
    "powerup_chance": 0.5,          # probability of triple shot
    "boost_time": 30.0,             # seconds an effect stays active
    "pickup_radius": 30.0,
    "hit_radius": 10.0,
    "ground_margin": 20.0,
    "max_enemies_on_ground": 10,
    "muzzle_offset": 20.0,          # bullets spawn this far above the player
    "triple_shot_spread": 10.0,
    # Behavior switches (see DESIGN.md)
    "legacy_pickup_metric": False,
    "duplicate_bullet_step": True,
}

# Host window defaults
WINDOW_CONFIG = {
    "width": 800,
    "height": 800,
    "title": "Space Invaders",
}
