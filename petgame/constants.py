import os


def _env_float(name, default):
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default


# --- GLOBAL CONFIGURATION ---
SCREEN_WIDTH = 480
SCREEN_HEIGHT = 320
FPS = int(_env_float("PETGAME_FPS", 30))
SAVE_FILE = os.getenv("PETGAME_SAVE_FILE", "pet_game.db")
PET_SAVE_KEY = "pet-game"
DEBUG = os.getenv("PETGAME_DEBUG", "") == "1"
# Only the tick driver is scaled; engine math is per tick. 10 = ticks fire 10x faster.
TIME_SCALE = _env_float("PETGAME_TIME_SCALE", 1.0)
if TIME_SCALE <= 0:
    TIME_SCALE = 1.0

# --- CADENCE ---
UPDATES_PER_MINUTE = 2
UPDATES_PER_HOUR = UPDATES_PER_MINUTE * 60
UPDATES_PER_DAY = UPDATES_PER_HOUR * 24
TICK_INTERVAL = 60.0 / UPDATES_PER_MINUTE / TIME_SCALE  # seconds between ticks

# --- PET ---
CURRENT_PET_VERSION = 1
MAX_FOOD = 100
POTTY_TIME = 100
FOOD_DECAY = MAX_FOOD / (UPDATES_PER_HOUR * 8)  # empty after roughly 8 hours
AGING_RATE = 1
POTTY_DECAY = FOOD_DECAY / 2
MAX_MESS = 5
HAPPINESS_DECAY = FOOD_DECAY
MAX_HAPPINESS = 100
HAPPINESS_EMPTY_STOMACH_MODIFIER = -10 / UPDATES_PER_HOUR
HAPPINESS_MESS_MODIFIER = -5 / UPDATES_PER_HOUR  # per piece of mess
TRAINED_BEHAVIOR = 15  # behavior above this means the pet is potty trained

# --- ACTIONS ---
FEED_AMOUNT = 38
FEED_HAPPINESS = 5
PET_HAPPINESS = 20
PET_BEHAVIOR = 0.5
CLEAN_HAPPINESS = 1
CLEAN_BEHAVIOR = 1

# Cooldowns (seconds)
FEED_COOLDOWN = 5.0
PET_COOLDOWN = 2.0
CLEAN_COOLDOWN = 5.0

# --- LIFE STAGES (ticks spent in the stage) ---
EGG_TIME = UPDATES_PER_MINUTE
PUP_TIME = UPDATES_PER_DAY * 7
ADULT_TIME = UPDATES_PER_DAY * 15
ELDER_TIME = UPDATES_PER_DAY * 7

# --- RETRO UI PALETTE ---
COLOR_BG = (40, 44, 52)
COLOR_UI_BAR_BG = (62, 68, 81)
COLOR_FULLNESS = (224, 108, 117)
COLOR_HAPPY = (229, 192, 123)
COLOR_BEHAVIOR = (97, 175, 239)
COLOR_MESS = (152, 110, 80)
COLOR_TEXT = (171, 178, 191)
COLOR_PROMPT = (255, 215, 0)
COLOR_EGG = (240, 234, 214)
COLOR_PET_BODY = (171, 220, 255)
COLOR_PET_EYES = (33, 37, 43)
