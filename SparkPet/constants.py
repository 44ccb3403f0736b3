import os

# --- GLOBAL CONFIGURATION ---
SCREEN_WIDTH = int(os.getenv("SPARKPET_SCREEN_WIDTH", "800"))
SCREEN_HEIGHT = int(os.getenv("SPARKPET_SCREEN_HEIGHT", "600"))
FPS = int(os.getenv("SPARKPET_FPS", "60"))
TIME_SCALE_FACTOR = float(os.getenv("SPARKPET_TIME_SCALE", "1.0")) # 1 = real time, 10 = 10x faster!
ASSET_DIR = os.getenv("SPARKPET_ASSET_DIR", os.path.join(os.path.dirname(__file__), "assets"))
PET_NAME = "Spark"

# --- MOVEMENT (px / s) ---
BASE_SPEED = 140.0
MAX_SPEED = 800.0
SMOOTHNESS = 8.0
MOVING_THRESHOLD = 6.0      # below this the pet is "standing" and breathes slowly
IDLE_ANIM_RATE = 0.4
WANDER_CHANGE_START = (0.6, 2.2)
WANDER_CHANGE_RANGE = (0.8, 2.5)
WANDER_BOUNCE_RANGE = (0.8, 1.6)
WANDER_BIG_TURN_CHANCE = 0.14
BOUNCE_DAMPING = 0.6
BOUNCE_SIDE_DAMPING = 0.8
BOUNCE_JITTER = 0.25

# --- SPRITE SIZING ---
DISPLAY_SCALE = 1.30
MAX_UPSCALE = 1.35
VIEWPORT_MAX_W = 0.5
VIEWPORT_MAX_H = 0.35
DEFAULT_FRAME_SIZE = (100, 100)

# --- ANIMATION (frames per second) ---
WALK_FPS = 12
PRESSED_FPS = 28
SLEEP_FPS = 8
HAPPY_FPS = 36
ANGRY_FPS = 12

# --- PRESS BOOST ---
PRESS_SPEED_MULTIPLIER = 2.2
PRESS_BOOST_SECONDS = 0.7

# --- METERS (0 - 100) ---
METER_MAX = 100.0
FRUSTRATION_PER_CLICK = 10.0
FRUSTRATION_TICK_INTERVAL = 3.0
HAPPINESS_TICK_INTERVAL = 2.0
INITIAL_HAPPINESS = 50.0
FEED_HAPPINESS_GAIN = 15.0
FEED_HAPPY_SECONDS = 5.0

# --- MOODS ---
SLEEP_AFTER_SECONDS = float(os.getenv("SPARKPET_SLEEP_AFTER", "30"))
ANGRY_SECONDS = 10.0
ANGRY_RESIDUAL_FRUSTRATION = 50.0
CELEBRATE_DURATION = 2.2
CELEBRATE_PEAK = 120.0
CELEBRATE_ROTATIONS = 2

# --- FOLLOW TARGET ---
FOLLOW_TOLERANCE = 12.0
BALL_FOLLOW_TOLERANCE = 14.0

# --- ASSETS ---
WALK_FRAME_COUNT = 161
WALK_PREFIX = "SparkWalk"
FRAME_PAD = 4
FRAME_MAX_FRACTION = 0.35   # frames larger than this share of the short screen side are downscaled
BALL_CANDIDATES = [
    "Food/electricBall.png",
    "Food/ball.png",
    "Food/electricball.png",
    "electricBall.png",
]
PLATE_CANDIDATES = [
    "electricPlate.PNG",
    "electricPlate.png",
    "ElectricPlate.png",
    "Food/electricPlate.png",
    "Food/ElectricPlate.png",
]

# --- RETRO UI PALETTE ---
COLOR_BG = (30, 30, 30)
COLOR_TEXT = (255, 255, 255)
COLOR_UI_BAR_BG = (62, 68, 81)
COLOR_FRUSTRATION = (224, 108, 117)
COLOR_HAPPY = (229, 192, 123)
COLOR_PLACEHOLDER = (100, 100, 100)
COLOR_MISSING = (200, 50, 50)
COLOR_BALL = (255, 230, 60)
COLOR_BALL_ARMED = (0, 200, 80)
COLOR_PLATE = (120, 160, 220)
