import sys

# -----------------------------
# PATHS
# -----------------------------

ROOT = ""
SEPARATOR = "/"

# -----------------------------
# DROP DEFAULTS
# -----------------------------

DEFAULT_DEPTH = 0
DEFAULT_LUCK = 1.0
DEFAULT_STACK = (1, 1)

# Depth used by anydepth() and roll_any(), a walk stops at the leaves anyway
ANY_DEPTH = sys.maxsize

# Luck is multiplied by this factor every time a pick descends into a branch
DECAY_FACTOR = 0.5

# -----------------------------
# SIMULATION
# -----------------------------

MAX_SIMULATIONS = 100_000

# -----------------------------
# AUTHORING DICT FORMAT
# -----------------------------

NODE_KEYS = ["items", "branches"]
ITEM_KEYS = ["name", "props"]
