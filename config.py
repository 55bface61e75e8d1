"""
Configuration settings for the Castaway survival game.
"""
import os
from dotenv import load_dotenv

load_dotenv()

# Window settings
WINDOW_WIDTH = 1280
WINDOW_HEIGHT = 720
FPS = 60
PROTOTYPE_VERSION = "0.3.0"
GAME_TITLE = f"Castaway (Prototype v{PROTOTYPE_VERSION})"

# Tile settings
TILE_SIZE = 32
WORLD_SIZE = int(os.getenv("CASTAWAY_WORLD_SIZE", "150"))  # tiles per side

# Seed override (blank/invalid -> fresh random seed at startup)
SIM_SEED = os.getenv("CASTAWAY_SEED", "")

# Determinism knobs
DETERMINISTIC_SIM = os.getenv("DETERMINISTIC_SIM", "0").strip().lower() in ("1", "true", "yes")
SIM_TICK_HZ = int(os.getenv("SIM_TICK_HZ", "60"))
MAX_FRAME_DT = 0.05  # seconds; longer frames are clamped before simulation

# Logging
LOG_LEVEL = os.getenv("CASTAWAY_LOG_LEVEL", "INFO").upper()

# Colors
COLOR_GROUND = (51, 81, 59)
COLOR_WATER = (42, 93, 140)
COLOR_ROCK = (108, 118, 137)
COLOR_SAND = (217, 202, 160)
COLOR_UI_BG = (24, 28, 40)
COLOR_UI_BORDER = (80, 86, 110)
COLOR_WHITE = (255, 255, 255)
COLOR_BLACK = (0, 0, 0)
COLOR_RED = (220, 20, 60)
COLOR_GREEN = (50, 205, 50)
COLOR_ORANGE = (255, 160, 64)
COLOR_YELLOW = (255, 230, 90)
COLOR_SHIP_HULL = (196, 209, 255)
COLOR_SHIP_DECK = (126, 141, 224)
COLOR_PLAYER = (130, 224, 170)

RESOURCE_COLORS = {
    "food": (76, 217, 100),
    "wood": (155, 118, 83),
    "oil": (143, 211, 255),
    "scrap": (190, 190, 200),
}

TERRAIN_BRIGHTNESS = 1.2  # global brighten/dim for terrain rendering

# Terrain generation
TERRAIN_PEAK_COUNT = 8
TERRAIN_BASE_HEIGHT = 0.4
TERRAIN_CONTINENT_STRENGTH = 0.45
TERRAIN_CONTINENT_EDGE = 0.87  # normalized distance where the continent term reaches zero
TERRAIN_TILT = 0.15
TERRAIN_NOISE_AMPLITUDE = 0.16
TERRAIN_WATER_LEVEL = 0.35
TERRAIN_SAND_LEVEL = 0.45
TERRAIN_ROCK_LEVEL = 1.05
SPAWN_CLEAR_INNER_RADIUS = 4  # tiles forced to ground
SPAWN_CLEAR_OUTER_RADIUS = 7  # tiles forced to sand

# Resource placement
PLACEMENT_BORDER_MARGIN = 2
PLACEMENT_ATTEMPT_MULTIPLIER = 60

# Player settings
PLAYER_SPEED = 520  # world units per second at full energy
PLAYER_START_INVENTORY = {"food": 1, "wood": 2, "oil": 0, "scrap": 0}
MOVE_ENERGY_DRAIN = 6.0
BLOCKED_ENERGY_DRAIN = 2.0
REST_ENERGY_REGEN = 15.0
EAT_HEALTH_RESTORE = 20.0
EAT_WARMTH_RESTORE = 10.0
PICKUP_RADIUS = 22.0

# Campfires
CAMPFIRE_COST = 3  # wood
CAMPFIRE_BURN_SECONDS = 60.0

# Environment
DAY_LENGTH = 120.0  # seconds per in-game day
NIGHT_START = 70.0
NIGHT_END = 110.0
MORNING_TIME = 10.0
SHIP_RADIUS = 80.0
FIRE_RADIUS = 90.0
SHIP_WARMTH_GAIN = 25.0
SHIP_ENERGY_GAIN = 25.0
FIRE_WARMTH_GAIN = 20.0
DAY_CHILL = 4.0
NIGHT_CHILL = 8.0
SHELTER_CHILL_FACTOR = 0.2
COLD_WARMTH_THRESHOLD = 25.0
COLD_DAMAGE = 4.0
COLD_DAMAGE_AT_SHIP = 1.0

# Rescue
RESCUE_COST = {"food": 3, "wood": 6, "oil": 3, "scrap": 2}
RESCUE_DURATION = 20.0  # seconds the beacon must burn
