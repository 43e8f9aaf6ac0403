GRID_ROWS = 8
GRID_COLS = 8
COIN_SIZE = 45

# Game area inside the window, in y-down board coordinates.
GAME_AREA_X = 45
GAME_AREA_Y = 205
GAME_AREA_WIDTH = GRID_COLS * COIN_SIZE
GAME_AREA_HEIGHT = GRID_ROWS * COIN_SIZE

WINDOW_WIDTH = 450
WINDOW_HEIGHT = 620

# Cursor outline sits this many pixels outside the selected pair.
CURSOR_OFFSET = 4

# ============================================================================
# TIMING (seconds)
# ============================================================================
TICK_RATE = 30
TICK_INTERVAL = 1 / TICK_RATE
SWAP_DURATION = 0.3
SPIN_FRAME_DURATION = 1 / 20
SPIN_FRAMES = 8
FALL_DURATION_PER_CELL = 0.1
INITIAL_DROP_DURATION = 0.5

# ============================================================================
# RULES
# ============================================================================
MIN_RUN_LENGTH = 3
# Number of palette entries random spawns draw from.
ACTIVE_COIN_TYPES = 4
# Cascades deeper than this are still resolved but reported as runaway.
MAX_CASCADE_ROUNDS = 50
