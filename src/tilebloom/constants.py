# Board geometry: x runs across columns, y runs down rows (row 0 is the top).
GRID_COLS = 9
GRID_ROWS = 6

# Corner cells stay blocked for the whole game.
BLOCKED_POSITIONS = (
    (0, 0),
    (GRID_ROWS - 1, 0),
    (0, GRID_COLS - 1),
    (GRID_ROWS - 1, GRID_COLS - 1),
)

# Tile categories in save-file index order; "blocked" is index 5.
TILE_CATEGORIES = ('red', 'green', 'blue', 'purple', 'yellow')
BLOCKED_TYPE = 'blocked'

# Fill colours for the plotting tool (RGB floats 0-1).
TILE_COLORS = {
    'red': (1.0, 0.2, 0.2),
    'green': (0.0, 0.5, 0.17),
    'blue': (0.0, 0.47, 0.7),
    'purple': (0.9, 0.0, 0.75),
    'yellow': (1.0, 0.9, 0.0),
}

# Growth stages run 0..MAX_STAGE; reaching POP_STAGE pops the tile.
MAX_STAGE = 2
POP_STAGE = 3

# Scoring and turn budget
MIN_TRAIL_LENGTH = 3
BASE_TILE_SCORE = 10
STARTING_TURNS = 10
CHAIN_BONUS_DIVISOR = 5

# Files
DEFAULT_OUTPUT_IMAGE = 'gameOutput.jpg'
SAVE_HEADER = '-JGRAPHFALL2021CULTICE SCORE-'
GAME_OVER_NOTE = 'SAVE COMPLETE, GAME OVER'

QUIT_COMMANDS = ('quit', 'Quit')
MOVE_PROMPT = (
    "Provide next move in the format: \n"
    "{(x0,y0),(x1,y1),(x2,y2)....}\n"
    "To exit, type quit or Quit"
)
