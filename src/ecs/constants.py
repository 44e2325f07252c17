GRID_WIDTH = 4
GRID_HEIGHT = 4

# Value of every freshly spawned tile and how many appear on a new board.
SPAWN_VALUE = 2
INITIAL_TILES = 2

# Seconds the board stays settled after a changed move before the next spawn.
# Move requests arriving inside this window are dropped.
SETTLE_DELAY = 0.1

# Minimum pointer travel (pixels) along the dominant axis for a swipe to count.
SWIPE_THRESHOLD = 10.0

# Window / board geometry
WINDOW_WIDTH = 600
WINDOW_HEIGHT = 700
TILE_SIZE = 120
TILE_GAP = 12
BOTTOM_MARGIN = 40
# Board maximum footprint relative to window (percentage of window width/height).
BOARD_MAX_WIDTH_PCT = 0.90
BOARD_MAX_HEIGHT_PCT = 0.80
# Height reserved above the board for the score line.
SCORE_BAR_HEIGHT = 60

BACKGROUND_COLOR = (250, 248, 239)
BOARD_COLOR = (187, 173, 160)
EMPTY_CELL_COLOR = (205, 193, 180)
DARK_TEXT_COLOR = (119, 110, 101)
LIGHT_TEXT_COLOR = (249, 246, 242)
