"""
Gameplay and tuning values for the snake game.

Every rule of the game (grid size, speeds, scoring) is a constant here so
the rest of the code never carries a raw number that describes a rule.
"""

# Board settings
GRID_SIZE = 20             # Columns and rows (the grid is square)
CELL_SIZE = 24             # Pixels per cell before any window resize
INITIAL_LENGTH = 3         # Segments in a freshly spawned snake

# Timing (milliseconds)
BASE_TICK_MS = 200         # Tick interval at level 1
SPEED_INCREMENT_MS = 20    # Each level is this much faster than the last
MIN_TICK_MS = 60           # Fastest the snake can ever move
MAX_FRAME_DELTA_MS = 200   # Clamp for a single frame after a stall
FRAME_RATE = 60            # Target FPS for rendering

# Levelling
POINTS_PER_FOOD = 10
POINTS_PER_LEVEL = 50      # 50 pts -> level 2, 100 pts -> level 3, ...
MAX_LEVEL = 10

# Input
MAX_DIRECTION_QUEUE = 2    # Buffered turns between two ticks
MIN_SWIPE_PX = 30          # Shorter touch/drag gestures count as taps

# Animation
SHAKE_DURATION_MS = 300    # Screen shake after death
SHAKE_AMPLITUDE_PX = 6
PULSE_PERIOD_MS = 800      # One full food pulse oscillation

# Persistence
SAVE_FILE = "snake_save.pkl"
STORAGE_KEYS = {
    "high_score": "snake_high_score",
    "mute": "snake_mute",
}

# Audio
SAMPLE_RATE = 44100
SOUND_NAMES = ("eat", "die", "levelup")

# Colors (R, G, B)
COLORS = {
    "background": (10, 10, 10),
    "grid": (17, 17, 17),
    "snake_head": (0, 255, 65),
    "snake_body": (0, 204, 51),
    "snake_tail": (0, 102, 34),
    "food": (255, 69, 0),
    "food_glow": (255, 106, 0),
    "hud_text": (0, 255, 65),
    "overlay": (0, 0, 0, 190),
    "title": (0, 255, 65),
    "subtitle": (255, 255, 255),
    "muted_text": (136, 136, 136),
    "highlight": (255, 255, 0),
    "game_over": (255, 68, 68),
}
