# gomoku/app/engine/constants.py

# --- Board Dimensions ---
MIN_BOARD_SIZE = 5
MAX_BOARD_SIZE = 25
DEFAULT_BOARD_SIZE = 15

MIN_WIN_LENGTH = 3
MAX_WIN_LENGTH = 10
DEFAULT_WIN_LENGTH = 5

# --- Geometry ---
# Horizontal, Vertical, Diagonal \, Diagonal /
DIRECTIONS = [(0, 1), (1, 0), (1, 1), (1, -1)]

# Neighbour scan order for the move generator. Changing it changes tie-breaks.
NEIGHBOR_OFFSETS = [
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
]

# --- Scoring System ---
# Terminal scores sit far above any heuristic sum
WIN_SCORE = 1000000
LOSE_SCORE = -1000000
DRAW_SCORE = 0

# Window weights, indexed by how many cells the owner is short of a full window.
# 0 missing = complete line, 1 missing = four of five, ...
PATTERN_WEIGHTS = [100000, 10000, 1000, 100, 10]

# --- Search ---
# Plies searched by the computer player
SEARCH_DEPTH = 4
